import base64
import logging
import os
import tempfile
from functools import lru_cache

from imagekitio import ImageKit
from imagekitio.models.UploadFileRequestOptions import UploadFileRequestOptions

from core.config import settings
from core.errors import BackendUnavailable

logger = logging.getLogger(__name__)

MIN_IMAGE_BYTES = 100
MAX_IMAGE_BYTES = 25 * 1024 * 1024


@lru_cache(maxsize=1)
def get_imagekit() -> ImageKit:
    return ImageKit(
        public_key=settings.imagekit_public_key,
        private_key=settings.imagekit_private_key,
        url_endpoint=settings.imagekit_url_endpoint
    )


def validate_image_bytes(file_data: bytes) -> None:
    if len(file_data) < MIN_IMAGE_BYTES:
        raise ValueError("Image file appears to be corrupted or too small")
    if len(file_data) > MAX_IMAGE_BYTES:
        raise ValueError("Image size must be less than 25MB")


def decode_base64_image(base64_string: str) -> bytes:
    # Drop a data URL prefix such as "data:image/jpeg;base64,"
    if "," in base64_string:
        base64_string = base64_string.split(",", 1)[1]
    return base64.b64decode(base64_string)


async def upload_item_image(file_data: bytes, filename: str, folder: str = None) -> str:
    """
    Upload an item picture to ImageKit.

    Args:
        file_data: Image file bytes
        filename: Name for the file
        folder: Folder path in ImageKit (default: settings.imagekit_folder)

    Returns:
        The public URL of the uploaded image
    """
    validate_image_bytes(file_data)

    # ImageKit SDK requires a file object opened in binary mode
    file_ext = os.path.splitext(filename)[1] or ".jpg"
    temp_file_path = None
    try:
        with tempfile.NamedTemporaryFile(delete=False, suffix=file_ext, mode="wb") as temp_file:
            temp_file.write(file_data)
            temp_file_path = temp_file.name

        upload_options = UploadFileRequestOptions(
            folder=folder or settings.imagekit_folder,
            use_unique_file_name=True,
            is_private_file=False
        )
        with open(temp_file_path, "rb") as file_obj:
            upload = get_imagekit().upload_file(
                file=file_obj,
                file_name=filename,
                options=upload_options
            )
    except Exception as e:
        logger.exception("Image upload to ImageKit failed")
        raise BackendUnavailable("No se pudo subir la imagen. Por favor, intente nuevamente.") from e
    finally:
        if temp_file_path and os.path.exists(temp_file_path):
            try:
                os.unlink(temp_file_path)
            except OSError:
                logger.warning("Failed to delete temporary file %s", temp_file_path)

    if not upload or not getattr(upload, "url", None):
        raise BackendUnavailable("No se pudo subir la imagen. Por favor, intente nuevamente.")

    logger.info("Uploaded image %s (%d bytes) -> %s", filename, len(file_data), upload.url)
    return upload.url
