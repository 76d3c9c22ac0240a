# core/supabase_client.py
# Supabase client for the storage mirror

import logging

from django.conf import settings
from supabase import create_client

logger = logging.getLogger("fdp.storage")

_supabase_client = None


def get_supabase_client():
    """
    Get the Supabase client instance (singleton pattern).
    Uses service_role key for admin access.
    Returns None when credentials are not configured.
    """
    global _supabase_client

    if _supabase_client is None:
        url = getattr(settings, "SUPABASE_URL", None)
        key = getattr(settings, "SUPABASE_SERVICE_ROLE_KEY", None)

        if not url or not key:
            logger.debug("Supabase credentials not configured")
            return None

        try:
            _supabase_client = create_client(url, key)
            logger.info("Supabase client initialized")
        except Exception as e:
            logger.error(f"Failed to create Supabase client: {e}")
            return None

    return _supabase_client


def upload_object(path: str, content: bytes, content_type: str = "application/octet-stream") -> str | None:
    """
    Upload bytes to the portal bucket, replacing anything already at `path`.

    Returns:
        The public URL if successful, None otherwise
    """
    client = get_supabase_client()
    if not client:
        return None

    bucket = client.storage.from_(settings.SUPABASE_STORAGE_BUCKET)
    try:
        bucket.upload(
            path,
            content,
            file_options={"content-type": content_type, "upsert": "true"},
        )
        logger.info(f"Mirrored object to Supabase storage: {path}")
        return bucket.get_public_url(path)
    except Exception as e:
        logger.error(f"Failed to upload {path} to Supabase: {e}")
        return None


def get_signed_url(path: str, expires_in: int = 600) -> str | None:
    """
    Generate a signed URL for an object in the portal bucket.

    Args:
        path: The storage path (e.g., "certificates/<user>/<activity>.pdf")
        expires_in: URL expiry in seconds (default 10 minutes)
    """
    client = get_supabase_client()
    if not client:
        return None

    try:
        result = client.storage.from_(settings.SUPABASE_STORAGE_BUCKET).create_signed_url(
            path,
            expires_in
        )

        if result and "signedURL" in result:
            return result["signedURL"]
        return None
    except Exception as e:
        logger.error(f"Failed to generate signed URL: {e}")
        return None
