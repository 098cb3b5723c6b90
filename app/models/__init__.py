from .base import Base
from .enums import DifficultyLevel, RecipeCategory
from .recipe import Recipe
from .ingredient import Ingredient
from .recipe_step import RecipeStep
from .recipe_image import RecipeImage
from .step_ingredient_association import step_ingredient_association

__all__ = [
    "Base",
    "DifficultyLevel",
    "RecipeCategory",
    "Recipe",
    "Ingredient",
    "RecipeStep",
    "RecipeImage",
    "step_ingredient_association"
]
