from datetime import datetime

from pydantic import ConfigDict, Field, field_validator

from .recipe_base import RecipeBase
from .ingredient import Ingredient
from .recipe_step import RecipeStep


class Recipe(RecipeBase):
    # for reading data from SQLAlchemy objects
    model_config = ConfigDict(from_attributes=True)

    id: int
    total_time_minutes: int = 0
    date_created: datetime
    ingredients: list[Ingredient] = Field(default_factory=list)
    steps: list[RecipeStep] = Field(default_factory=list)

    @field_validator("image_urls", mode="before")
    @classmethod
    def _copy_image_urls(cls, value):
        # association proxies are not plain lists
        return list(value) if value is not None else []
