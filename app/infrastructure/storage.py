"""Local file storage for product images.

Uploaded images are written to the configured upload directory and
served back by the application under ``/uploads/<filename>``.
"""

from pathlib import Path
from uuid import uuid4

import structlog
from fastapi import UploadFile

from app.domain.exceptions import ValidationError
from app.infrastructure.config import settings

logger = structlog.get_logger()

UPLOADS_URL_PATH = "/uploads"

ALLOWED_CONTENT_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


class ImageStorage:
    """Stores product images on the local filesystem.

    Example usage:
        storage = ImageStorage()
        image_path = await storage.save(upload)  # "/uploads/3f2a...9c.jpg"
    """

    def __init__(
        self,
        upload_dir: str | Path | None = None,
        max_bytes: int | None = None,
    ) -> None:
        """Initialize storage.

        Args:
            upload_dir: Target directory (defaults to settings.upload_dir).
            max_bytes: Maximum accepted file size.
        """
        self.upload_dir = Path(upload_dir or settings.upload_dir)
        self.max_bytes = max_bytes or settings.max_upload_bytes

    async def save(self, upload: UploadFile) -> str:
        """Validate and persist an uploaded image.

        Args:
            upload: Multipart file from the request.

        Returns:
            Public path of the stored image.

        Raises:
            ValidationError: If the file is not an accepted image or too large.
        """
        extension = ALLOWED_CONTENT_TYPES.get(upload.content_type or "")
        if extension is None:
            raise ValidationError(
                "Only JPEG, PNG, GIF and WebP images are allowed",
                field="image",
            )

        # One byte past the limit is enough to tell the file is too large
        data = await upload.read(self.max_bytes + 1)
        if not data:
            raise ValidationError("Uploaded image is empty", field="image")
        if len(data) > self.max_bytes:
            raise ValidationError(
                f"Image exceeds the {self.max_bytes} byte limit",
                field="image",
            )

        return self.save_bytes(data, f"{uuid4().hex}{extension}")

    def save_bytes(self, data: bytes, filename: str) -> str:
        """Write raw image bytes under a given filename.

        Args:
            data: Image content.
            filename: Target file name (no directories).

        Returns:
            Public path of the stored image.
        """
        name = Path(filename).name
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        (self.upload_dir / name).write_bytes(data)

        logger.info("Image stored", filename=name, size=len(data))
        return f"{UPLOADS_URL_PATH}/{name}"

    def discard(self, image_path: str) -> None:
        """Remove a stored image given its public path.

        Paths outside ``/uploads`` (remote URLs) are left alone.
        """
        prefix = f"{UPLOADS_URL_PATH}/"
        if not image_path.startswith(prefix):
            return

        name = Path(image_path[len(prefix):]).name
        (self.upload_dir / name).unlink(missing_ok=True)
        logger.info("Image discarded", filename=name)
