from .recipe_base import RecipeBase
from .recipe_create import RecipeCreate
from .recipe_update import RecipeUpdate
from .recipe import Recipe
from .ingredient import Ingredient, IngredientCreate
from .recipe_step import RecipeStep, RecipeStepCreate
from .photo import PhotoUploadResponse

__all__ = [
    "RecipeBase",
    "RecipeCreate",
    "RecipeUpdate",
    "Recipe",
    "Ingredient",
    "IngredientCreate",
    "RecipeStep",
    "RecipeStepCreate",
    "PhotoUploadResponse"
]
