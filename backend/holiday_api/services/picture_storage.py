"""Local-disk storage for holiday and activity pictures."""
import io
import logging
import os
import uuid

from PIL import Image, UnidentifiedImageError

from holiday_api.config import settings
from holiday_api.errors import PictureStorageError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = (".png", ".jpg", ".jpeg")


class PictureStorage:
    """Stores uploads under ``<root>/<folder>`` and hands back web-relative paths.

    Uploads are decoded, narrowed to ``max_width`` keeping the aspect ratio and
    re-encoded. Stock pictures live under ``stock_folder`` and are never deleted.
    """

    def __init__(
        self,
        root: str,
        folder: str = "images",
        default_holiday_picture: str = settings.DEFAULT_HOLIDAY_PICTURE,
        default_activity_picture: str = settings.DEFAULT_ACTIVITY_PICTURE,
        max_size: int = settings.MAX_PICTURE_SIZE,
        stock_folder: str = settings.STOCK_PICTURE_FOLDER,
        max_width: int = settings.MAX_PICTURE_WIDTH,
        jpeg_quality: int = settings.JPEG_QUALITY,
    ):
        self.root = root
        self.folder = folder
        self.default_holiday_picture = default_holiday_picture
        self.default_activity_picture = default_activity_picture
        self.max_size = max_size
        self.stock_folder = stock_folder.rstrip("/")
        self.max_width = max_width
        self.jpeg_quality = jpeg_quality

    def is_stock_picture(self, path: str) -> bool:
        return (
            path in (self.default_holiday_picture, self.default_activity_picture)
            or path.startswith(f"{self.stock_folder}/")
        )

    def _reencode(self, content: bytes, extension: str) -> bytes:
        try:
            with Image.open(io.BytesIO(content)) as image:
                image.load()
                if image.width > self.max_width:
                    height = max(1, int(image.height * self.max_width / image.width))
                    image = image.resize((self.max_width, height))
                buffer = io.BytesIO()
                if extension == ".png":
                    image.save(buffer, format="PNG")
                else:
                    if image.mode not in ("RGB", "L"):
                        image = image.convert("RGB")
                    image.save(buffer, format="JPEG", quality=self.jpeg_quality)
        except (UnidentifiedImageError, OSError) as exc:
            raise PictureStorageError("The file is not a valid image.") from exc
        return buffer.getvalue()

    def store(self, filename: str, content: bytes) -> str:
        """Save an uploaded picture and return its path relative to the root."""
        extension = os.path.splitext(filename or "")[1].lower()
        if extension not in ALLOWED_EXTENSIONS:
            raise PictureStorageError("Invalid file extension. Only .png, .jpg or .jpeg are allowed.")
        if not content:
            raise PictureStorageError("The uploaded file is empty.")
        if len(content) > self.max_size:
            raise PictureStorageError(f"The file exceeds the {self.max_size // (1024 * 1024)} MB limit.")
        encoded = self._reencode(content, extension)

        relative_path = f"{self.folder}/{uuid.uuid4().hex}{extension}"
        try:
            os.makedirs(os.path.join(self.root, self.folder), exist_ok=True)
            with open(os.path.join(self.root, relative_path), "wb") as fh:
                fh.write(encoded)
        except OSError as exc:
            raise PictureStorageError("An error occurred while saving the file.") from exc
        logger.info("Stored picture %s", relative_path)
        return relative_path

    def delete(self, path: str) -> None:
        """Delete a stored picture; stock pictures are left alone."""
        if not path or self.is_stock_picture(path):
            return
        full_path = os.path.join(self.root, path)
        if not os.path.isfile(full_path):
            raise PictureStorageError(f"The file {path} was not found.")
        try:
            os.remove(full_path)
        except OSError as exc:
            raise PictureStorageError(f"An error occurred while deleting the file {path}.") from exc
        logger.info("Deleted picture %s", path)

    def discard(self, path: str) -> None:
        """Best-effort delete used once the owning row no longer points at the file."""
        try:
            self.delete(path)
        except PictureStorageError:
            logger.exception("Could not delete picture %s", path)


def get_picture_storage() -> PictureStorage:
    """FastAPI dependency."""
    return PictureStorage(root=settings.PICTURE_ROOT, folder=settings.PICTURE_FOLDER)
