"""Tests for local-disk image storage."""

import io

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from app.config import settings
from app.errors import InvalidInputError
from app.uploads import FileStorage

pytestmark = pytest.mark.asyncio


def _upload(name: str, content: bytes = b"data", content_type: str = "image/jpeg") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=name,
        headers=Headers({"content-type": content_type}),
    )


class TestFileStorage:
    async def test_save_returns_public_reference(self, file_storage: FileStorage) -> None:
        reference = await file_storage.save(_upload("Front.JPG", b"jpeg-bytes"))
        assert reference.startswith("/uploads/")
        assert reference.endswith(".jpg")
        assert (file_storage.directory / reference.rsplit("/", 1)[1]).read_bytes() == b"jpeg-bytes"

    async def test_names_are_unique(self, file_storage: FileStorage) -> None:
        first = await file_storage.save(_upload("same.png", content_type="image/png"))
        second = await file_storage.save(_upload("same.png", content_type="image/png"))
        assert first != second

    async def test_suffix_derived_from_content_type(self, file_storage: FileStorage) -> None:
        reference = await file_storage.save(_upload("photo", content_type="image/webp"))
        assert reference.endswith(".webp")

    async def test_save_all_keeps_order_and_skips_empty_parts(self, file_storage: FileStorage) -> None:
        references = await file_storage.save_all(
            [_upload("a.jpg"), _upload(""), _upload("b.webp", content_type="image/webp")]
        )
        assert len(references) == 2
        assert references[0].endswith(".jpg")
        assert references[1].endswith(".webp")

    async def test_too_many_files(self, file_storage: FileStorage) -> None:
        uploads = [_upload(f"{i}.jpg") for i in range(settings.max_upload_files + 1)]
        with pytest.raises(InvalidInputError):
            await file_storage.save_all(uploads)
        assert not file_storage.directory.exists()


class TestImageValidation:
    @pytest.mark.parametrize(
        ("name", "content_type"),
        [
            ("evil.html", "text/html"),
            ("vector.svg", "image/svg+xml"),
            ("notes.txt", "text/plain"),
            ("blob", "application/octet-stream"),
        ],
    )
    async def test_non_image_content_type_rejected(
        self, file_storage: FileStorage, name: str, content_type: str
    ) -> None:
        with pytest.raises(InvalidInputError):
            await file_storage.save(_upload(name, b"<script>alert(1)</script>", content_type))
        assert not file_storage.directory.exists()

    async def test_image_content_type_with_script_suffix_rejected(self, file_storage: FileStorage) -> None:
        with pytest.raises(InvalidInputError):
            await file_storage.save(_upload("evil.html", b"<script></script>", "image/png"))

    async def test_rejected_file_stops_whole_batch(self, file_storage: FileStorage) -> None:
        with pytest.raises(InvalidInputError):
            await file_storage.save_all([_upload("ok.jpg"), _upload("evil.html", content_type="text/html")])
        assert not file_storage.directory.exists()


class TestDiscard:
    async def test_removes_stored_files(self, file_storage: FileStorage) -> None:
        references = await file_storage.save_all([_upload("a.jpg"), _upload("b.jpg")])

        file_storage.discard(references)

        assert list(file_storage.directory.iterdir()) == []

    async def test_ignores_foreign_and_missing_references(self, file_storage: FileStorage) -> None:
        kept = await file_storage.save(_upload("keep.jpg"))

        file_storage.discard(["https://cdn.example.com/x.jpg", "/uploads/missing.jpg"])

        assert (file_storage.directory / kept.rsplit("/", 1)[1]).exists()
