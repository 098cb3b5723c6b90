from pydantic import Field

from .recipe_base import RecipeBase
from .ingredient import IngredientCreate
from .recipe_step import RecipeStepCreate


class RecipeUpdate(RecipeBase):
    """Full replacement of a recipe.

    ``ingredients`` and ``steps`` left out (or null) keep the stored
    collections; an empty list clears them.
    """

    ingredients: list[IngredientCreate] | None = Field(None, max_length=100)
    steps: list[RecipeStepCreate] | None = Field(None, max_length=100)
