import logging
from typing import Iterable, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Ingredient, Recipe, RecipeCategory, RecipeStep
from app.repositories import RecipeRepository
from app.schemas import IngredientCreate, RecipeCreate, RecipeStepCreate, RecipeUpdate

logger = logging.getLogger(__name__)


def _resolve_ingredients(recipe: Recipe, candidates: Iterable) -> list[Ingredient]:
    """Map ingredient-like values onto the recipe's own ingredient rows.

    Matching is by exact (name, quantity, unit); the first match wins and a
    candidate with no match is dropped.
    """
    resolved = []
    for candidate in candidates:
        match = next((i for i in recipe.ingredients if i.matches(candidate)), None)
        if match is not None:
            resolved.append(match)
    return resolved


def _build_ingredient(ingredient_in: IngredientCreate) -> Ingredient:
    return Ingredient(**ingredient_in.model_dump())


def _build_step(recipe: Recipe, step_in: RecipeStepCreate) -> RecipeStep:
    # the recipe's ingredients have to be in place before its steps are built
    step = RecipeStep(**step_in.model_dump(exclude={"ingredients"}))
    step.ingredients = _resolve_ingredients(recipe, step_in.ingredients)
    return step


def build_recipe(recipe_in: RecipeCreate) -> Recipe:
    recipe_data = recipe_in.model_dump(exclude={"ingredients", "steps"})
    recipe = Recipe(**recipe_data)

    for ingredient_in in recipe_in.ingredients:
        recipe.add_ingredient(_build_ingredient(ingredient_in))
    for step_in in recipe_in.steps:
        recipe.add_step(_build_step(recipe, step_in))

    return recipe


def _calculate_total_time(recipe: Recipe) -> int:
    return sum(step.duration_minutes or 0 for step in recipe.steps)


def _unify_step_ingredients(recipe: Recipe, step: RecipeStep) -> None:
    step.ingredients = _resolve_ingredients(recipe, list(step.ingredients))


def _link_children(recipe: Recipe) -> None:
    recipe.total_time_minutes = _calculate_total_time(recipe)

    for ingredient in recipe.ingredients:
        ingredient.recipe = recipe

    for step in recipe.steps:
        step.recipe = recipe
        _unify_step_ingredients(recipe, step)


async def get_all_recipes(db: AsyncSession) -> Sequence[Recipe]:
    return await RecipeRepository(db).find_all()


async def get_recipe_by_id(db: AsyncSession, *, recipe_id: int) -> Recipe | None:
    return await RecipeRepository(db).find_by_id(recipe_id)


async def search_recipes(db: AsyncSession, *, keyword: str) -> Sequence[Recipe]:
    return await RecipeRepository(db).find_by_title_containing_ignore_case(keyword)


async def get_recipes_by_category(db: AsyncSession, *, category: RecipeCategory) -> Sequence[Recipe]:
    return await RecipeRepository(db).find_by_category(category)


async def save_recipe(db: AsyncSession, *, recipe: Recipe) -> Recipe:
    _link_children(recipe)
    return await RecipeRepository(db).save(recipe)


async def create_recipe(db: AsyncSession, *, recipe_in: RecipeCreate) -> Recipe:
    db_recipe = await save_recipe(db, recipe=build_recipe(recipe_in))
    logger.info(f"Created recipe {db_recipe.id}: {db_recipe.title}")
    return db_recipe


async def update_recipe(db: AsyncSession, *, recipe_id: int, recipe_in: RecipeUpdate) -> Recipe | None:
    repository = RecipeRepository(db)
    db_recipe = await repository.find_by_id(recipe_id)
    if db_recipe is None:
        return None

    db_recipe.title = recipe_in.title
    db_recipe.difficulty = recipe_in.difficulty
    db_recipe.category = recipe_in.category
    db_recipe.image_urls = list(recipe_in.image_urls)

    if recipe_in.ingredients is not None:
        db_recipe.ingredients.clear()
        for ingredient_in in recipe_in.ingredients:
            db_recipe.add_ingredient(_build_ingredient(ingredient_in))

    if recipe_in.steps is not None:
        db_recipe.steps.clear()
        for step_in in recipe_in.steps:
            db_recipe.add_step(_build_step(db_recipe, step_in))

    _link_children(db_recipe)
    db_recipe = await repository.save(db_recipe)
    logger.info(f"Updated recipe {recipe_id}")
    return db_recipe


async def delete_recipe(db: AsyncSession, *, recipe_id: int) -> bool:
    repository = RecipeRepository(db)
    if not await repository.exists_by_id(recipe_id):
        return False

    await repository.delete_by_id(recipe_id)
    logger.info(f"Deleted recipe {recipe_id}")
    return True


def calculate_progress(recipe: Recipe, last_completed_step_order: int) -> float:
    """Percentage (0.0 - 100.0) of the recipe's total time covered by the
    steps ordered at or before ``last_completed_step_order``."""
    if not recipe.steps:
        return 0.0

    total_duration = float(recipe.total_time_minutes or 0)
    if total_duration == 0:
        return 0.0

    completed_time = sum(
        step.duration_minutes or 0
        for step in recipe.steps
        if step.step_order <= last_completed_step_order
    )

    progress = (completed_time / total_duration) * 100.0

    # durations may add up to more than the stored total
    return min(progress, 100.0)
