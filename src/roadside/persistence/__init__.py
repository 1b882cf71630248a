"""Storage backends and the process-wide backend selector."""

from __future__ import annotations

import functools
import logging

from ..config import settings
from ..errors import StorageError
from .base import Storage
from .memory import MemoryStorage

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=1)
def get_storage() -> Storage:
    """Return the storage backend chosen by ``settings.storage_backend``.

    The choice is made once per process; call ``get_storage.cache_clear()`` to
    force a new selection (tests only).
    """
    if settings.storage_backend == "supabase":
        from ..db.supabase import get_supabase_client, supabase_configured
        from .supabase_store import SupabaseStorage

        if not supabase_configured():
            raise StorageError(
                "Supabase storage selected but not configured. "
                "Set ROADSIDE_SUPABASE_URL and ROADSIDE_SUPABASE_KEY environment variables."
            )
        client = get_supabase_client()
        if client is None:
            raise StorageError("Supabase client could not be created; see the log for details")
        storage: Storage = SupabaseStorage(client)
    else:
        storage = MemoryStorage()
    logger.info("Using %s storage backend", storage.name)
    return storage


__all__ = ["Storage", "MemoryStorage", "get_storage"]
