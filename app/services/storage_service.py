"""
Image storage on Cloudinary behind two calls: upload(file) -> url and
delete(url). Batch uploads are all-or-nothing.
"""
import logging
import re
import uuid
from typing import List, Tuple
import cloudinary
import cloudinary.uploader
from app.config import settings
from app.utils.exceptions import InternalError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "webp", "gif"}

# .../image/upload/[transformations/][v123/]<public_id>.<ext>
_PUBLIC_ID_PATTERN = re.compile(r"/upload/(?:[^/]*,[^/]*/)*(?:v\d+/)?(?P<public_id>.+?)(?:\.[A-Za-z0-9]+)?$")

_cloudinary_configured = False


def _ensure_cloudinary_configured():
    """Ensure Cloudinary is configured"""
    global _cloudinary_configured
    if not _cloudinary_configured:
        if not settings.CLOUDINARY_CLOUD_NAME or not settings.CLOUDINARY_API_KEY or not settings.CLOUDINARY_API_SECRET:
            raise InternalError("Image storage is not configured")
        cloudinary.config(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            secure=True
        )
        _cloudinary_configured = True


def file_extension(file_name: str) -> str:
    return file_name.rsplit('.', 1)[-1].lower() if '.' in file_name else ''


def validate_image(file_content: bytes, file_name: str) -> None:
    if file_extension(file_name) not in ALLOWED_IMAGE_EXTENSIONS:
        raise ValidationError(f"Unsupported image type: {file_name}")
    if len(file_content) == 0:
        raise ValidationError(f"File is empty: {file_name}")
    if len(file_content) > settings.max_upload_size_bytes:
        raise ValidationError(f"File is larger than {settings.MAX_UPLOAD_SIZE_MB} MB: {file_name}")


def public_id_from_url(url: str) -> str:
    """Recover the Cloudinary public id from a delivery URL"""
    match = _PUBLIC_ID_PATTERN.search(url.split("?", 1)[0])
    if not match:
        raise ValidationError("Not an image storage URL")
    return match.group("public_id")


def upload_image(file_content: bytes, file_name: str) -> str:
    """Upload one image and return its public URL"""
    _ensure_cloudinary_configured()
    public_id = f"{settings.CLOUDINARY_FOLDER}/{uuid.uuid4()}"
    try:
        result = cloudinary.uploader.upload(
            file_content,
            public_id=public_id,
            resource_type="image",
        )
        return result["secure_url"]
    except Exception as e:
        logger.error(f"Image upload failed - file: {file_name}, error: {str(e)}")
        raise InternalError("Failed to upload image")


def delete_image(url: str) -> None:
    _ensure_cloudinary_configured()
    public_id = public_id_from_url(url)
    try:
        result = cloudinary.uploader.destroy(public_id, resource_type="image")
    except Exception as e:
        logger.error(f"Image delete failed - public_id: {public_id}, error: {str(e)}")
        raise InternalError("Failed to delete image")

    if result.get("result") not in ("ok", "not found"):
        logger.warning(f"Unexpected delete result for {public_id}: {result}")


def upload_images(files: List[Tuple[bytes, str]]) -> List[str]:
    """
    Upload a batch of (content, file_name) pairs.
    If any upload fails, the images already uploaded for this batch are
    deleted again before the error propagates.
    """
    for file_content, file_name in files:
        validate_image(file_content, file_name)

    uploaded: List[str] = []
    try:
        for file_content, file_name in files:
            uploaded.append(upload_image(file_content, file_name))
    except Exception:
        logger.warning(f"Batch upload failed after {len(uploaded)} of {len(files)} images, rolling back")
        for url in uploaded:
            try:
                delete_image(url)
            except InternalError:
                logger.error(f"Rollback could not delete {url}", exc_info=True)
        raise

    return uploaded
