import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Recipe, RecipeCategory

logger = logging.getLogger(__name__)


class RecipeRepository:
    """Persistence for recipes and their owned ingredients, steps and images.

    Child collections are eager loaded, so returned recipes can be read
    after the query has finished.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find_all(self) -> Sequence[Recipe]:
        result = await self.db.execute(select(Recipe))
        return result.scalars().all()

    async def find_by_id(self, recipe_id: int) -> Recipe | None:
        query = select(Recipe).where(Recipe.id == recipe_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def find_by_category(self, category: RecipeCategory) -> Sequence[Recipe]:
        query = select(Recipe).where(Recipe.category == category)
        result = await self.db.execute(query)
        return result.scalars().all()

    async def find_by_title_containing_ignore_case(self, title: str) -> Sequence[Recipe]:
        query = select(Recipe).where(Recipe.title.icontains(title, autoescape=True))
        result = await self.db.execute(query)
        return result.scalars().all()

    async def exists_by_id(self, recipe_id: int) -> bool:
        query = select(Recipe.id).where(Recipe.id == recipe_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none() is not None

    async def save(self, recipe: Recipe) -> Recipe:
        self.db.add(recipe)
        try:
            await self.db.commit()
        except SQLAlchemyError:
            logger.exception("Failed to save recipe %s", recipe.id)
            await self.db.rollback()
            raise

        await self.db.refresh(recipe)
        return recipe

    async def delete_by_id(self, recipe_id: int) -> None:
        recipe = await self.find_by_id(recipe_id)
        if recipe is None:
            return

        await self.db.delete(recipe)
        try:
            await self.db.commit()
        except SQLAlchemyError:
            logger.exception("Failed to delete recipe %s", recipe_id)
            await self.db.rollback()
            raise
