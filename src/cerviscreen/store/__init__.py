from __future__ import annotations

import logging

from cerviscreen.config import PortalConfig
from cerviscreen.store.base import Row, TableStore
from cerviscreen.store.db import Database
from cerviscreen.store.migrations import run_migrations
from cerviscreen.store.sqlite import SqliteStore
from cerviscreen.store.supabase import SupabaseClient, SupabaseStore

logger = logging.getLogger(__name__)

__all__ = [
    "Row",
    "TableStore",
    "Database",
    "run_migrations",
    "SqliteStore",
    "SupabaseClient",
    "SupabaseStore",
    "open_store",
]


def open_store(config: PortalConfig) -> TableStore:
    """Open the backend named by ``config.backend``.

    The SQLite backend is connected and migrated before it is returned.
    """
    if config.backend == "supabase":
        if not config.supabase_url or not config.supabase_key:
            raise ValueError("supabase backend requires SUPABASE_URL and SUPABASE_ANON_KEY")
        logger.info("Using hosted backend at %s", config.supabase_url)
        client = SupabaseClient(
            config.supabase_url, config.supabase_key, timeout=config.request_timeout
        )
        return SupabaseStore(client)

    if config.backend != "sqlite":
        raise ValueError(f"Unknown backend: {config.backend!r}")

    logger.info("Using SQLite database %s", config.db_path)
    db = Database(config.db_path)
    db.connect()
    run_migrations(db)
    return SqliteStore(db)
