from fastapi import APIRouter

from app.api.v1.endpoints import photos, recipes, step_photos

api_router = APIRouter()
api_router.include_router(recipes.router, prefix="/recipes", tags=["Recipes"])
api_router.include_router(photos.router, prefix="/recipes", tags=["Recipe photos"])
api_router.include_router(step_photos.router, prefix="/recipes", tags=["Step photos"])
