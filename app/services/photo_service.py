import asyncio
import logging
import os
import uuid
from pathlib import Path
from typing import Mapping

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.models import Recipe, RecipeStep
from app.services import recipe_service

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp"})

CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def file_extension(filename: str) -> str:
    if "." not in filename:
        return ""
    return filename[filename.rindex("."):].lower()


def find_step(recipe: Recipe, step_id: int) -> RecipeStep | None:
    return next((step for step in recipe.steps if step.id == step_id), None)


class PhotoService:
    """Photos of a whole recipe, kept on disk under ``<photos root>/<recipe id>/``.

    The database only stores filenames (``Recipe.image_urls``), in upload
    order. Disk and database writes are not transactional together.
    """

    def __init__(self, photos_directory: str = settings.PHOTOS_DIRECTORY) -> None:
        self.photos_directory = photos_directory

    @property
    def photos_root(self) -> Path:
        # relative paths follow the process working directory
        return Path(self.photos_directory).resolve()

    def recipe_directory(self, recipe_id: int) -> Path:
        return self.photos_root / str(recipe_id)

    def _photo_path(self, recipe_id: int, filename: str) -> Path | None:
        if not filename or filename in (".", "..") or Path(filename).name != filename:
            return None
        return self.recipe_directory(recipe_id) / filename

    def _extract_ids(self, ids: Mapping[str, int] | None) -> tuple[int, int | None] | None:
        if not ids or ids.get("recipe_id") is None:
            logger.warning("Invalid ids provided - must contain 'recipe_id'")
            return None
        return ids["recipe_id"], None

    def _describe(self, recipe_id: int, step_id: int | None) -> str:
        return f"recipe ID {recipe_id}"

    def _unique_filename(self, step_id: int | None, extension: str) -> str:
        return f"{uuid.uuid4()}{extension}"

    def _add_reference(self, recipe: Recipe, step: RecipeStep | None, filename: str) -> None:
        recipe.image_urls.append(filename)

    def _remove_reference(self, recipe: Recipe, filename: str) -> bool:
        if filename not in recipe.image_urls:
            return False
        recipe.image_urls.remove(filename)
        return True

    def _find_step(self, recipe: Recipe, step_id: int | None) -> tuple[bool, RecipeStep | None]:
        return True, None

    # blocking filesystem helpers, run through asyncio.to_thread

    @staticmethod
    def _write_photo(directory: Path, filename: str, content: bytes) -> None:
        if not directory.exists():
            directory.mkdir(parents=True, exist_ok=True)
            logger.debug(f"Created photos directory {directory}")
        (directory / filename).write_bytes(content)

    @staticmethod
    def _readable_file(photo_path: Path) -> bool:
        return photo_path.is_file() and os.access(photo_path, os.R_OK)

    @staticmethod
    def _unlink_photo(photo_path: Path) -> bool:
        if not photo_path.exists():
            return False
        photo_path.unlink()
        return True

    @staticmethod
    def _remove_directory(directory: Path) -> bool:
        if not directory.exists():
            return False

        for path in directory.iterdir():
            if not path.is_file():
                continue
            try:
                path.unlink()
            except OSError as ex:
                logger.warning(f"Could not delete {path}: {ex}")
        directory.rmdir()
        return True

    async def upload_photo(
        self, db: AsyncSession, ids: Mapping[str, int] | None, file: UploadFile
    ) -> str | None:
        """Store an uploaded image and record its filename.

        Returns the generated filename, or ``None`` when the ids, the
        recipe/step, or the file itself are not acceptable, or the file
        could not be written.
        """
        extracted = self._extract_ids(ids)
        if extracted is None:
            return None
        recipe_id, step_id = extracted

        recipe = await recipe_service.get_recipe_by_id(db, recipe_id=recipe_id)
        if recipe is None:
            logger.warning(f"Recipe not found with ID: {recipe_id}")
            return None

        found, step = self._find_step(recipe, step_id)
        if not found:
            return None

        target = self._describe(recipe_id, step_id)

        await file.seek(0)
        content: bytes = await file.read()
        if not content:
            logger.warning(f"Attempted to upload empty file for {target}")
            return None

        if not file.filename:
            logger.warning(f"File has no original filename for {target}")
            return None

        extension = file_extension(file.filename)
        if extension not in ALLOWED_IMAGE_EXTENSIONS:
            logger.warning(f"Invalid file type attempted for {target}: {extension}")
            return None

        directory = self.recipe_directory(recipe_id)
        filename = self._unique_filename(step_id, extension)

        try:
            await asyncio.to_thread(self._write_photo, directory, filename, content)
        except OSError as ex:
            logger.error(f"Failed to upload photo for {target}: {ex}", exc_info=True)
            return None

        self._add_reference(recipe, step, filename)
        await recipe_service.save_recipe(db, recipe=recipe)

        logger.info(f"Successfully uploaded photo for {target}: {filename}")
        return filename

    async def get_photo(self, recipe_id: int, filename: str) -> Path | None:
        photo_path = self._photo_path(recipe_id, filename)
        if photo_path is None:
            return None
        if not await asyncio.to_thread(self._readable_file, photo_path):
            return None
        return photo_path

    async def get_photo_filenames(self, db: AsyncSession, ids: Mapping[str, int] | None) -> list[str]:
        extracted = self._extract_ids(ids)
        if extracted is None:
            return []
        recipe_id, _ = extracted

        recipe = await recipe_service.get_recipe_by_id(db, recipe_id=recipe_id)
        if recipe is None:
            return []
        return list(recipe.image_urls)

    async def delete_photo(self, db: AsyncSession, recipe_id: int, filename: str) -> bool:
        photo_path = self._photo_path(recipe_id, filename)
        if photo_path is None:
            return False

        try:
            if not await asyncio.to_thread(self._unlink_photo, photo_path):
                return False
        except OSError as ex:
            logger.error(
                f"Failed to delete photo for recipe ID {recipe_id} and filename {filename}: {ex}",
                exc_info=True,
            )
            return False

        recipe = await recipe_service.get_recipe_by_id(db, recipe_id=recipe_id)
        if recipe is not None and self._remove_reference(recipe, filename):
            await recipe_service.save_recipe(db, recipe=recipe)

        logger.info(f"Successfully deleted photo for recipe ID {recipe_id}: {filename}")
        return True

    async def delete_all_photos(self, db: AsyncSession, ids: Mapping[str, int] | None) -> bool:
        extracted = self._extract_ids(ids)
        if extracted is None:
            return False
        recipe_id, _ = extracted

        try:
            removed = await asyncio.to_thread(self._remove_directory, self.recipe_directory(recipe_id))
        except OSError as ex:
            logger.error(f"Failed to delete all photos for recipe ID {recipe_id}: {ex}", exc_info=True)
            return False

        # nothing on disk, nothing to clear
        if not removed:
            return True

        recipe = await recipe_service.get_recipe_by_id(db, recipe_id=recipe_id)
        if recipe is not None:
            recipe.image_urls.clear()
            await recipe_service.save_recipe(db, recipe=recipe)

        logger.info(f"Successfully deleted all photos for recipe ID: {recipe_id}")
        return True

    def get_content_type(self, filename: str) -> str:
        return CONTENT_TYPES.get(file_extension(filename), DEFAULT_CONTENT_TYPE)


class StepPhotoService(PhotoService):
    """One photo per recipe step, stored next to the recipe's photos.

    Filenames are prefixed with the step id. A new upload replaces the
    step's reference but leaves the previous file on disk.
    """

    def _extract_ids(self, ids: Mapping[str, int] | None) -> tuple[int, int | None] | None:
        if not ids or ids.get("recipe_id") is None or ids.get("step_id") is None:
            logger.warning("Invalid ids provided - must contain 'recipe_id' and 'step_id'")
            return None
        return ids["recipe_id"], ids["step_id"]

    def _describe(self, recipe_id: int, step_id: int | None) -> str:
        return f"recipe ID {recipe_id}, step ID {step_id}"

    def _unique_filename(self, step_id: int | None, extension: str) -> str:
        return f"{step_id}_{uuid.uuid4()}{extension}"

    def _add_reference(self, recipe: Recipe, step: RecipeStep | None, filename: str) -> None:
        step.image_url = filename

    def _remove_reference(self, recipe: Recipe, filename: str) -> bool:
        step = next((s for s in recipe.steps if s.image_url == filename), None)
        if step is None:
            return False
        step.image_url = None
        return True

    def _find_step(self, recipe: Recipe, step_id: int | None) -> tuple[bool, RecipeStep | None]:
        step = find_step(recipe, step_id)
        if step is None:
            logger.warning(f"Step not found with ID {step_id} for recipe ID: {recipe.id}")
            return False, None
        return True, step

    async def get_photo_filenames(self, db: AsyncSession, ids: Mapping[str, int] | None) -> list[str]:
        extracted = self._extract_ids(ids)
        if extracted is None:
            return []
        recipe_id, step_id = extracted

        recipe = await recipe_service.get_recipe_by_id(db, recipe_id=recipe_id)
        if recipe is None:
            return []

        step = find_step(recipe, step_id)
        if step is None or not step.image_url:
            return []
        return [step.image_url]

    async def delete_all_photos(self, db: AsyncSession, ids: Mapping[str, int] | None) -> bool:
        extracted = self._extract_ids(ids)
        if extracted is None:
            return False
        recipe_id, step_id = extracted

        recipe = await recipe_service.get_recipe_by_id(db, recipe_id=recipe_id)
        if recipe is None:
            return False

        step = find_step(recipe, step_id)
        if step is None:
            return False

        if not step.image_url:
            return True

        photo_path = self._photo_path(recipe_id, step.image_url)
        try:
            if photo_path is not None:
                await asyncio.to_thread(self._unlink_photo, photo_path)
        except OSError as ex:
            logger.error(
                f"Failed to delete all photos for recipe ID {recipe_id}, step ID {step_id}: {ex}",
                exc_info=True,
            )
            return False

        step.image_url = None
        await recipe_service.save_recipe(db, recipe=recipe)

        logger.info(f"Successfully deleted all photos for recipe ID {recipe_id}, step ID: {step_id}")
        return True


photo_service = PhotoService()
step_photo_service = StepPhotoService()


def get_photo_service() -> PhotoService:
    return photo_service


def get_step_photo_service() -> StepPhotoService:
    return step_photo_service
