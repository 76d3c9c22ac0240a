# core/storage.py
"""
Object storage used by the portal: evidence files, certificates and
profile photos.

Uploads go to Django's default storage (local filesystem in dev, S3 when
USE_S3_MEDIA=1) and are mirrored to Supabase Storage when it is configured.
Paths are deterministic, so uploading twice to the same path replaces the
previous object instead of creating a second one.
"""
import logging
import mimetypes

from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.utils.text import get_valid_filename

from .constants import CERTIFICATE_PATH, EVIDENCE_PATH, PROFILE_PHOTO_PATH
from .exceptions import StorageError
from .supabase_client import upload_object

logger = logging.getLogger("fdp.storage")


def evidence_path(user_id, activity_id, filename: str) -> str:
    return EVIDENCE_PATH.format(
        user_id=user_id,
        activity_id=activity_id,
        filename=get_valid_filename(filename) or "evidence",
    )


def certificate_path(user_id, activity_id) -> str:
    return CERTIFICATE_PATH.format(user_id=user_id, activity_id=activity_id)


def profile_photo_path(user_id) -> str:
    return PROFILE_PHOTO_PATH.format(user_id=user_id)


def upload_bytes(path: str, content: bytes, content_type: str | None = None) -> str:
    """
    Store `content` at `path` and return a URL the frontend can fetch.

    Raises StorageError if the primary storage rejects the write.
    """
    if content_type is None:
        content_type = mimetypes.guess_type(path)[0] or "application/octet-stream"

    try:
        if default_storage.exists(path):
            default_storage.delete(path)
        saved_path = default_storage.save(path, ContentFile(content))
    except Exception as e:
        logger.error(f"Upload to {path} failed: {e}")
        raise StorageError() from e

    logger.info(f"Stored {len(content)} bytes at {saved_path}")

    # Mirror is best effort; the primary storage already has the object
    mirrored_url = upload_object(saved_path, content, content_type)

    return mirrored_url or public_url(saved_path)


def upload_file(path: str, uploaded_file) -> str:
    """
    Store a Django UploadedFile (multipart form upload) at `path`.
    """
    content_type = getattr(uploaded_file, "content_type", None)
    uploaded_file.seek(0)
    return upload_bytes(path, uploaded_file.read(), content_type)


def public_url(path: str) -> str:
    return default_storage.url(path)
