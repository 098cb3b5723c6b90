import asyncio
import pytest
from io import BytesIO

from fastapi import UploadFile

from app.models.enums import DifficultyLevel, RecipeCategory
from app.schemas import RecipeCreate, RecipeStepCreate
from app.services import recipe_service
from app.services import photo_service as photo_service_module
from app.services.photo_service import ALLOWED_IMAGE_EXTENSIONS, PhotoService, file_extension


def make_upload(filename: str | None, content: bytes = b"\x89PNG\r\n\x1a\nfake image") -> UploadFile:
    return UploadFile(file=BytesIO(content), filename=filename)


@pytest.fixture
async def recipe(db_session):
    recipe_in = RecipeCreate(
        title="Chocolate Cake",
        difficulty=DifficultyLevel.MEDIUM,
        category=RecipeCategory.DESSERT,
        steps=[
            RecipeStepCreate(step_order=1, title="Mix", duration_minutes=15),
            RecipeStepCreate(step_order=2, title="Bake", duration_minutes=40),
        ],
    )
    return await recipe_service.create_recipe(db_session, recipe_in=recipe_in)


@pytest.mark.parametrize("filename, expected", [
    ("cake.JPG", ".jpg"),
    ("archive.tar.gz", ".gz"),
    ("no_extension", ""),
    (".hidden", ".hidden"),
])
def test_file_extension(filename, expected):
    assert file_extension(filename) == expected


@pytest.mark.parametrize("filename, content_type", [
    ("a.jpg", "image/jpeg"),
    ("a.JPEG", "image/jpeg"),
    ("a.png", "image/png"),
    ("a.gif", "image/gif"),
    ("a.webp", "image/webp"),
    ("a.bmp", "image/bmp"),
    ("a.tiff", "application/octet-stream"),
    ("noext", "application/octet-stream"),
])
def test_get_content_type(photo_service: PhotoService, filename, content_type):
    assert photo_service.get_content_type(filename) == content_type


def test_allowed_extensions():
    assert isinstance(ALLOWED_IMAGE_EXTENSIONS, frozenset)
    assert ALLOWED_IMAGE_EXTENSIONS == {".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp"}


@pytest.mark.asyncio
class TestPhotoService:

    async def test_upload_stores_file_and_reference(self, db_session, photo_service, photos_root, recipe):
        filename = await photo_service.upload_photo(db_session, {"recipe_id": recipe.id}, make_upload("cake.jpg"))

        assert filename is not None
        assert filename.endswith(".jpg")
        assert (photos_root / str(recipe.id) / filename).is_file()

        fetched = await recipe_service.get_recipe_by_id(db_session, recipe_id=recipe.id)
        assert list(fetched.image_urls) == [filename]

    async def test_upload_lowercases_extension(self, db_session, photo_service, recipe):
        filename = await photo_service.upload_photo(db_session, {"recipe_id": recipe.id}, make_upload("CAKE.PNG"))
        assert filename.endswith(".png")

    async def test_upload_rejects_non_image(self, db_session, photo_service, photos_root, recipe):
        filename = await photo_service.upload_photo(db_session, {"recipe_id": recipe.id}, make_upload("notes.txt"))

        assert filename is None
        assert not (photos_root / str(recipe.id)).exists()
        assert list(recipe.image_urls) == []

    async def test_upload_rejects_unknown_recipe(self, db_session, photo_service, photos_root):
        filename = await photo_service.upload_photo(db_session, {"recipe_id": 4242}, make_upload("cake.jpg"))

        assert filename is None
        assert not photos_root.exists()

    @pytest.mark.parametrize("ids", [None, {}, {"step_id": 1}])
    async def test_upload_rejects_missing_recipe_id(self, db_session, photo_service, ids):
        assert await photo_service.upload_photo(db_session, ids, make_upload("cake.jpg")) is None

    async def test_upload_rejects_empty_file(self, db_session, photo_service, recipe):
        upload = make_upload("cake.jpg", content=b"")
        assert await photo_service.upload_photo(db_session, {"recipe_id": recipe.id}, upload) is None

    async def test_upload_rejects_missing_filename(self, db_session, photo_service, recipe):
        assert await photo_service.upload_photo(db_session, {"recipe_id": recipe.id}, make_upload(None)) is None

    async def test_get_photo(self, db_session, photo_service, recipe):
        filename = await photo_service.upload_photo(db_session, {"recipe_id": recipe.id}, make_upload("cake.gif"))

        path = await photo_service.get_photo(recipe.id, filename)
        assert path is not None
        assert path.name == filename

        assert await photo_service.get_photo(recipe.id, "missing.gif") is None
        assert await photo_service.get_photo(recipe.id + 1, filename) is None

    @pytest.mark.parametrize("filename", ["../secret.jpg", "..", ".", "", "sub/photo.jpg"])
    async def test_get_photo_rejects_paths(self, photo_service, filename):
        assert await photo_service.get_photo(1, filename) is None

    async def test_get_photo_filenames_keeps_upload_order(self, db_session, photo_service, recipe):
        names = [
            await photo_service.upload_photo(db_session, {"recipe_id": recipe.id}, make_upload(f"{n}.jpg"))
            for n in ("one", "two", "three")
        ]

        assert await photo_service.get_photo_filenames(db_session, {"recipe_id": recipe.id}) == names
        assert await photo_service.get_photo_filenames(db_session, {"recipe_id": 4242}) == []

    async def test_delete_photo(self, db_session, photo_service, photos_root, recipe):
        keep = await photo_service.upload_photo(db_session, {"recipe_id": recipe.id}, make_upload("keep.jpg"))
        drop = await photo_service.upload_photo(db_session, {"recipe_id": recipe.id}, make_upload("drop.jpg"))

        assert await photo_service.delete_photo(db_session, recipe.id, drop) is True
        assert not (photos_root / str(recipe.id) / drop).exists()
        assert await photo_service.get_photo_filenames(db_session, {"recipe_id": recipe.id}) == [keep]

        assert await photo_service.delete_photo(db_session, recipe.id, drop) is False

    async def test_delete_photo_without_reference(self, db_session, photo_service, photos_root, recipe):
        directory = photos_root / str(recipe.id)
        directory.mkdir(parents=True)
        (directory / "stray.jpg").write_bytes(b"stray")

        assert await photo_service.delete_photo(db_session, recipe.id, "stray.jpg") is True
        assert not (directory / "stray.jpg").exists()

    async def test_delete_all_without_photos(self, db_session, photo_service, photos_root, recipe):
        assert await photo_service.delete_all_photos(db_session, {"recipe_id": recipe.id}) is True
        assert not photos_root.exists()

    async def test_delete_all_photos(self, db_session, photo_service, photos_root, recipe):
        for name in ("a.jpg", "b.png"):
            await photo_service.upload_photo(db_session, {"recipe_id": recipe.id}, make_upload(name))

        assert await photo_service.delete_all_photos(db_session, {"recipe_id": recipe.id}) is True
        assert not (photos_root / str(recipe.id)).exists()
        assert await photo_service.get_photo_filenames(db_session, {"recipe_id": recipe.id}) == []

    async def test_delete_all_rejects_missing_ids(self, db_session, photo_service):
        assert await photo_service.delete_all_photos(db_session, None) is False

    async def test_disk_access_runs_in_worker_threads(self, db_session, photo_service, recipe, monkeypatch):
        threaded = []
        real_to_thread = asyncio.to_thread

        async def recording_to_thread(func, *args, **kwargs):
            threaded.append(func.__name__)
            return await real_to_thread(func, *args, **kwargs)

        monkeypatch.setattr(photo_service_module.asyncio, "to_thread", recording_to_thread)
        ids = {"recipe_id": recipe.id}

        filename = await photo_service.upload_photo(db_session, ids, make_upload("cake.jpg"))
        assert await photo_service.get_photo(recipe.id, filename) is not None
        assert await photo_service.delete_photo(db_session, recipe.id, filename) is True
        assert await photo_service.delete_all_photos(db_session, ids) is True

        assert {"_write_photo", "_readable_file", "_unlink_photo", "_remove_directory"} <= set(threaded)


@pytest.mark.asyncio
class TestStepPhotoService:

    async def test_upload_sets_step_reference(self, db_session, step_photo_service, photos_root, recipe):
        step = recipe.steps[0]
        ids = {"recipe_id": recipe.id, "step_id": step.id}

        filename = await step_photo_service.upload_photo(db_session, ids, make_upload("mix.webp"))

        assert filename.startswith(f"{step.id}_")
        assert filename.endswith(".webp")
        assert (photos_root / str(recipe.id) / filename).is_file()
        assert step.image_url == filename
        assert recipe.steps[1].image_url is None

    async def test_new_upload_replaces_reference_and_keeps_old_file(
        self, db_session, step_photo_service, photos_root, recipe
    ):
        step = recipe.steps[0]
        ids = {"recipe_id": recipe.id, "step_id": step.id}

        first = await step_photo_service.upload_photo(db_session, ids, make_upload("first.jpg"))
        second = await step_photo_service.upload_photo(db_session, ids, make_upload("second.jpg"))

        assert await step_photo_service.get_photo_filenames(db_session, ids) == [second]
        assert (photos_root / str(recipe.id) / first).exists()

    async def test_upload_rejects_unknown_step(self, db_session, step_photo_service, photos_root, recipe):
        ids = {"recipe_id": recipe.id, "step_id": 4242}

        assert await step_photo_service.upload_photo(db_session, ids, make_upload("mix.jpg")) is None
        assert not photos_root.exists()

    async def test_upload_requires_step_id(self, db_session, step_photo_service, recipe):
        ids = {"recipe_id": recipe.id}
        assert await step_photo_service.upload_photo(db_session, ids, make_upload("mix.jpg")) is None

    async def test_get_photo_filenames_without_photo(self, db_session, step_photo_service, recipe):
        ids = {"recipe_id": recipe.id, "step_id": recipe.steps[1].id}
        assert await step_photo_service.get_photo_filenames(db_session, ids) == []

    async def test_delete_photo_clears_reference(self, db_session, step_photo_service, recipe):
        step = recipe.steps[1]
        ids = {"recipe_id": recipe.id, "step_id": step.id}
        filename = await step_photo_service.upload_photo(db_session, ids, make_upload("bake.jpg"))

        assert await step_photo_service.delete_photo(db_session, recipe.id, filename) is True
        assert step.image_url is None

    async def test_delete_all_only_touches_the_step(
        self, db_session, photo_service, step_photo_service, photos_root, recipe
    ):
        recipe_photo = await photo_service.upload_photo(db_session, {"recipe_id": recipe.id}, make_upload("cake.jpg"))
        step = recipe.steps[0]
        ids = {"recipe_id": recipe.id, "step_id": step.id}
        step_photo = await step_photo_service.upload_photo(db_session, ids, make_upload("mix.jpg"))

        assert await step_photo_service.delete_all_photos(db_session, ids) is True

        assert step.image_url is None
        assert not (photos_root / str(recipe.id) / step_photo).exists()
        assert (photos_root / str(recipe.id) / recipe_photo).exists()
        assert list(recipe.image_urls) == [recipe_photo]

    async def test_delete_all_without_photo(self, db_session, step_photo_service, recipe):
        ids = {"recipe_id": recipe.id, "step_id": recipe.steps[0].id}
        assert await step_photo_service.delete_all_photos(db_session, ids) is True

    async def test_delete_all_unknown_step(self, db_session, step_photo_service, recipe):
        ids = {"recipe_id": recipe.id, "step_id": 4242}
        assert await step_photo_service.delete_all_photos(db_session, ids) is False

    async def test_recipe_delete_all_also_removes_step_files(
        self, db_session, photo_service, step_photo_service, photos_root, recipe
    ):
        step = recipe.steps[0]
        ids = {"recipe_id": recipe.id, "step_id": step.id}
        await step_photo_service.upload_photo(db_session, ids, make_upload("mix.jpg"))

        assert await photo_service.delete_all_photos(db_session, {"recipe_id": recipe.id}) is True
        assert not (photos_root / str(recipe.id)).exists()
        # the step keeps its now dangling reference
        assert step.image_url is not None
