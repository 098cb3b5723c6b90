from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Any

from app.db.session import get_db
from app.models import RecipeCategory
from app.schemas import Recipe, RecipeCreate, RecipeUpdate
from app.services import recipe_service

router = APIRouter()

@router.post("/", response_model=Recipe, status_code=201)
async def create_new_recipe(*, db: AsyncSession = Depends(get_db), recipe_in: RecipeCreate) -> Any:
    return await recipe_service.create_recipe(db=db, recipe_in=recipe_in)

@router.get("/", response_model=List[Recipe])
async def read_recipes(*, db: AsyncSession = Depends(get_db)) -> Any:
    return await recipe_service.get_all_recipes(db=db)

@router.get("/search", response_model=List[Recipe])
async def search_recipes(
    *,
    db: AsyncSession = Depends(get_db),
    title: str = Query(..., description="Case-insensitive part of the recipe title")
) -> Any:
    return await recipe_service.search_recipes(db=db, keyword=title)

@router.get("/category/{category}", response_model=List[Recipe])
async def read_recipes_by_category(*, db: AsyncSession = Depends(get_db), category: RecipeCategory) -> Any:
    return await recipe_service.get_recipes_by_category(db=db, category=category)

@router.get("/{recipe_id}", response_model=Recipe)
async def read_recipe_by_id(*, db: AsyncSession = Depends(get_db), recipe_id: int) -> Any:
    recipe = await recipe_service.get_recipe_by_id(db=db, recipe_id=recipe_id)
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe

@router.put("/{recipe_id}", response_model=Recipe)
async def update_existing_recipe(*, db: AsyncSession = Depends(get_db), recipe_id: int, recipe_in: RecipeUpdate) -> Any:
    updated_recipe = await recipe_service.update_recipe(db=db, recipe_id=recipe_id, recipe_in=recipe_in)
    if not updated_recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return updated_recipe

@router.delete("/{recipe_id}", status_code=204)
async def delete_existing_recipe(*, db: AsyncSession = Depends(get_db), recipe_id: int) -> Response:
    deleted = await recipe_service.delete_recipe(db=db, recipe_id=recipe_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return Response(status_code=204)

@router.get("/{recipe_id}/progress", response_model=float)
async def read_execution_progress(
    *,
    db: AsyncSession = Depends(get_db),
    recipe_id: int,
    completed_step_order: int = Query(..., alias="completedStepOrder")
) -> Any:
    recipe = await recipe_service.get_recipe_by_id(db=db, recipe_id=recipe_id)
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe_service.calculate_progress(recipe, completed_step_order)
