from .recipe_repository import RecipeRepository

__all__ = ["RecipeRepository"]
