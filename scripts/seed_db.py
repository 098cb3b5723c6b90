import asyncio
import json
import sys
import os
from pathlib import Path

sys.path.append(os.getcwd())

from app.db.session import AsyncSessionLocal
from app.repositories import RecipeRepository
from app.services import recipe_service
from app.schemas.recipe_create import RecipeCreate

BASE_DIR = Path(__file__).parents[1]
RECIPES_PATH = BASE_DIR / "datasets" / "recipe_samples.json"

async def seed():
    print("Seeding database...")

    async with AsyncSessionLocal() as db:
        existing = await RecipeRepository(db).find_all()
        if existing:
            print(f" - Database already holds {len(existing)} recipes, skipping.")
            return

        print(" - Loading recipes...")
        with open(RECIPES_PATH) as f:
            recipes_data = json.load(f)

        for r_data in recipes_data:
            recipe_in = RecipeCreate(**r_data)
            await recipe_service.create_recipe(db=db, recipe_in=recipe_in)

        print(f"Successfully inserted {len(recipes_data)} recipes.")

if __name__ == "__main__":
    asyncio.run(seed())
