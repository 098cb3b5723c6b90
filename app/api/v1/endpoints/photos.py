from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Any

from app.db.session import get_db
from app.schemas import PhotoUploadResponse
from app.services import recipe_service
from app.services.photo_service import PhotoService, get_photo_service

router = APIRouter()

@router.post("/{recipe_id}/photo", response_model=PhotoUploadResponse)
async def upload_recipe_photo(
    *,
    db: AsyncSession = Depends(get_db),
    service: PhotoService = Depends(get_photo_service),
    recipe_id: int,
    file: UploadFile = File(...)
) -> Any:
    filename = await service.upload_photo(db, {"recipe_id": recipe_id}, file)

    if filename is None:
        if await recipe_service.get_recipe_by_id(db=db, recipe_id=recipe_id) is None:
            raise HTTPException(status_code=404, detail=f"Recipe not found with id: {recipe_id}")
        raise HTTPException(status_code=400, detail="Failed to upload photo. File may be empty or invalid.")

    return PhotoUploadResponse(message=f"Photo uploaded successfully: {filename}", filename=filename)

@router.get("/{recipe_id}/photo/{filename}")
async def read_recipe_photo(
    *, service: PhotoService = Depends(get_photo_service), recipe_id: int, filename: str
) -> FileResponse:
    photo_path = await service.get_photo(recipe_id, filename)
    if photo_path is None:
        raise HTTPException(status_code=404, detail="Photo not found")

    return FileResponse(
        photo_path,
        media_type=service.get_content_type(filename),
        filename=filename,
        content_disposition_type="inline",
    )

@router.get("/{recipe_id}/photos", response_model=List[str])
async def read_recipe_photo_filenames(
    *, db: AsyncSession = Depends(get_db), service: PhotoService = Depends(get_photo_service), recipe_id: int
) -> Any:
    return await service.get_photo_filenames(db, {"recipe_id": recipe_id})

@router.delete("/{recipe_id}/photo/{filename}", status_code=204)
async def delete_recipe_photo(
    *,
    db: AsyncSession = Depends(get_db),
    service: PhotoService = Depends(get_photo_service),
    recipe_id: int,
    filename: str
) -> Response:
    if not await service.delete_photo(db, recipe_id, filename):
        raise HTTPException(status_code=404, detail="Photo not found")
    return Response(status_code=204)

@router.delete("/{recipe_id}/photos", status_code=204)
async def delete_all_recipe_photos(
    *, db: AsyncSession = Depends(get_db), service: PhotoService = Depends(get_photo_service), recipe_id: int
) -> Response:
    if not await service.delete_all_photos(db, {"recipe_id": recipe_id}):
        raise HTTPException(status_code=500, detail="Failed to delete photos")
    return Response(status_code=204)
