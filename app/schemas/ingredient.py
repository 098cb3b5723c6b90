from pydantic import ConfigDict, Field

from .recipe_base import CamelModel


class IngredientBase(CamelModel):
    name: str = Field(..., max_length=255)
    quantity: float | None = None
    unit: str | None = Field(None, max_length=50)


class IngredientCreate(IngredientBase):
    pass


class Ingredient(IngredientBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    recipe_id: int
