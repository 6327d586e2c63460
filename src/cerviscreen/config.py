from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class PortalConfig:
    db_path: str = "cerviscreen.db"
    backend: str = "sqlite"  # "sqlite" or "supabase"
    supabase_url: str = ""  # e.g., "https://<project>.supabase.co"
    supabase_key: str = ""
    host: str = "127.0.0.1"
    port: int = 5000
    log_level: str = "INFO"
    request_timeout: float = 10.0

    @classmethod
    def from_env(cls) -> PortalConfig:
        """Create config from environment variables, falling back to defaults.

        Reads CERVISCREEN_DB_PATH, CERVISCREEN_BACKEND, SUPABASE_URL,
        SUPABASE_ANON_KEY, CERVISCREEN_HOST, CERVISCREEN_PORT and
        CERVISCREEN_LOG_LEVEL.
        """
        defaults = cls()
        return cls(
            db_path=os.environ.get("CERVISCREEN_DB_PATH", defaults.db_path),
            backend=os.environ.get("CERVISCREEN_BACKEND", defaults.backend),
            supabase_url=os.environ.get("SUPABASE_URL", defaults.supabase_url),
            supabase_key=os.environ.get("SUPABASE_ANON_KEY", defaults.supabase_key),
            host=os.environ.get("CERVISCREEN_HOST", defaults.host),
            port=int(os.environ.get("CERVISCREEN_PORT", defaults.port)),
            log_level=os.environ.get("CERVISCREEN_LOG_LEVEL", defaults.log_level),
        )
