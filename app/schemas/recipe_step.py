from pydantic import ConfigDict, Field

from .recipe_base import CamelModel
from .ingredient import Ingredient, IngredientCreate


class RecipeStepBase(CamelModel):
    step_order: int = Field(..., gt=0)
    title: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=1000)
    duration_minutes: int | None = Field(None, ge=0)
    image_url: str | None = Field(None, max_length=255)


class RecipeStepCreate(RecipeStepBase):
    ingredients: list[IngredientCreate] = Field(default_factory=list)


class RecipeStep(RecipeStepBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    recipe_id: int
    ingredients: list[Ingredient] = Field(default_factory=list)
