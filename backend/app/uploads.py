"""Local-disk storage for uploaded property images.

Files are written under ``settings.upload_dir`` and served by the
``StaticFiles`` mount at ``settings.upload_url_prefix``. Only the returned
reference strings are ever stored in the database.

Only raster image types are accepted, and the stored suffix always comes from
an allow-list, so nothing served from ``/uploads`` can render as HTML or SVG.
"""

import logging
import secrets
import time
from pathlib import Path

from fastapi import UploadFile

from app.config import settings
from app.errors import InvalidInputError, StorageError

logger = logging.getLogger(__name__)

# Accepted content types and the suffix stored for each
IMAGE_CONTENT_TYPES = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/gif": ".gif",
}
IMAGE_SUFFIXES = {".jpg", ".jpeg", ".png", ".webp", ".gif"}


def _content_type(upload: UploadFile) -> str:
    return (upload.content_type or "").split(";", 1)[0].strip().lower()


def _safe_suffix(upload: UploadFile) -> str:
    """Keep the client's suffix when it is an allowed image suffix, else derive it from the content type."""
    suffix = Path(upload.filename or "").suffix.lower()
    if suffix in IMAGE_SUFFIXES:
        return suffix
    return IMAGE_CONTENT_TYPES[_content_type(upload)]


def validate_image(upload: UploadFile) -> None:
    """Reject anything that is not a JPEG, PNG, WebP or GIF upload.

    Raises:
        InvalidInputError: If the content type or file suffix is not an allowed image type.
    """
    content_type = _content_type(upload)
    if content_type not in IMAGE_CONTENT_TYPES:
        raise InvalidInputError(f"Only image uploads are allowed: {upload.filename!r} is {content_type or 'untyped'}")

    suffix = Path(upload.filename or "").suffix.lower()
    if suffix and suffix not in IMAGE_SUFFIXES:
        raise InvalidInputError(f"Unsupported image file extension: {upload.filename!r}")


class FileStorage:
    """Stores uploaded files in a directory and returns their public paths."""

    def __init__(self, directory: str | Path, url_prefix: str) -> None:
        self.directory = Path(directory)
        self.url_prefix = url_prefix.rstrip("/")

    def _unique_name(self, upload: UploadFile) -> str:
        return f"{int(time.time() * 1000)}-{secrets.token_hex(6)}{_safe_suffix(upload)}"

    async def save(self, upload: UploadFile) -> str:
        """Validate ``upload``, write it to disk and return its public reference."""
        validate_image(upload)
        name = self._unique_name(upload)
        content = await upload.read()
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            (self.directory / name).write_bytes(content)
        except OSError as exc:
            raise StorageError("Could not store uploaded file") from exc

        logger.info("Stored upload %r as %s (%d bytes)", upload.filename, name, len(content))
        return f"{self.url_prefix}/{name}"

    async def save_all(self, uploads: list[UploadFile]) -> list[str]:
        """Store every non-empty upload in order.

        Every file is validated before the first one is written, so a
        rejected batch leaves nothing on disk.

        Raises:
            InvalidInputError: If more than ``settings.max_upload_files`` files
                are sent or any of them is not an allowed image.
        """
        files = [upload for upload in uploads if upload.filename]
        if len(files) > settings.max_upload_files:
            raise InvalidInputError(f"At most {settings.max_upload_files} images may be uploaded at once")
        for upload in files:
            validate_image(upload)
        return [await self.save(upload) for upload in files]

    def discard(self, references: list[str]) -> None:
        """Remove files written by this storage, e.g. after the listing write that used them failed.

        Unknown references are ignored; removal failures are logged, not raised.
        """
        prefix = f"{self.url_prefix}/"
        for reference in references:
            if not reference.startswith(prefix):
                continue
            path = self.directory / Path(reference[len(prefix):]).name
            try:
                path.unlink(missing_ok=True)
            except OSError:
                logger.warning("Could not remove orphaned upload %s", path, exc_info=True)
            else:
                logger.info("Removed orphaned upload %s", path.name)


def get_file_storage() -> FileStorage:
    """FastAPI dependency returning the configured storage; tests override it."""
    return FileStorage(settings.upload_dir, settings.upload_url_prefix)
