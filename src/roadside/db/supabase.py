"""Supabase client used by the durable storage backend."""

import logging
from functools import lru_cache
from urllib.parse import urlparse

from supabase import Client, create_client

from ..config import settings

logger = logging.getLogger(__name__)


def supabase_configured() -> bool:
    return bool(settings.supabase_url and settings.supabase_key)


@lru_cache()
def get_supabase_client() -> Client | None:
    """Build the client once per process, or return None without credentials.

    No request is made here, so an unreachable project only surfaces on the
    first query, as a ``StorageError`` raised by ``SupabaseStorage``.
    """
    if not supabase_configured():
        logger.warning("Supabase credentials not configured (ROADSIDE_SUPABASE_URL / ROADSIDE_SUPABASE_KEY)")
        return None

    host = urlparse(settings.supabase_url).netloc or settings.supabase_url
    try:
        client = create_client(settings.supabase_url, settings.supabase_key)
    except Exception as exc:
        logger.error("Could not create Supabase client for %s: %s", host, exc)
        return None
    logger.info("Supabase client ready for %s", host)
    return client
