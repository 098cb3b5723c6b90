from pydantic import Field

from .recipe_base import RecipeBase
from .ingredient import IngredientCreate
from .recipe_step import RecipeStepCreate


class RecipeCreate(RecipeBase):
    ingredients: list[IngredientCreate] = Field(default_factory=list, max_length=100)
    steps: list[RecipeStepCreate] = Field(default_factory=list, max_length=100)
