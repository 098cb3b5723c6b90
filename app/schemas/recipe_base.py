from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.enums import DifficultyLevel, RecipeCategory


class CamelModel(BaseModel):
    # camelCase on the wire, snake_case in python
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecipeBase(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    difficulty: DifficultyLevel
    category: RecipeCategory
    prep_time_minutes: int | None = Field(None, ge=0)
    image_urls: list[str] = Field(default_factory=list)
