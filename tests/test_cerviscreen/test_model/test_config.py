from __future__ import annotations

import logging

import pytest

from cerviscreen.config import PortalConfig
from cerviscreen.errors import (
    BackendAuthError,
    BackendConflict,
    BackendError,
    PortalError,
    RequiredAnswerMissing,
    error_from_status_code,
)
from cerviscreen.logging_config import configure_logging


class TestPortalConfig:
    def test_defaults(self) -> None:
        config = PortalConfig()
        assert config.backend == "sqlite"
        assert config.db_path == "cerviscreen.db"
        assert config.port == 5000

    def test_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("CERVISCREEN_BACKEND", "supabase")
        monkeypatch.setenv("SUPABASE_URL", "https://demo.supabase.co")
        monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
        monkeypatch.setenv("CERVISCREEN_PORT", "8080")
        config = PortalConfig.from_env()
        assert config.backend == "supabase"
        assert config.supabase_url == "https://demo.supabase.co"
        assert config.supabase_key == "anon"
        assert config.port == 8080

    def test_is_frozen(self) -> None:
        with pytest.raises(AttributeError):
            PortalConfig().port = 1  # type: ignore[misc]


class TestErrors:
    def test_required_answer_default_message(self) -> None:
        exc = RequiredAnswerMissing("hpv-vaccine")
        assert str(exc) == "This question is required. Please provide an answer."
        assert exc.status_code == 422
        assert isinstance(exc, PortalError)

    def test_cause_is_kept(self) -> None:
        root = OSError("disk")
        assert PortalError("failed", cause=root).cause is root

    @pytest.mark.parametrize(
        ("status", "error_type"),
        [(401, BackendAuthError), (403, BackendAuthError), (409, BackendConflict), (422, BackendError)],
    )
    def test_status_mapping(self, status, error_type) -> None:
        exc = error_from_status_code(status, "msg", raw={"message": "msg"})
        assert type(exc) is error_type
        assert exc.upstream_status == status
        assert exc.raw == {"message": "msg"}


def test_configure_logging_installs_single_handler() -> None:
    logger = logging.getLogger("cerviscreen")
    try:
        configure_logging("debug")
        configure_logging("info")
        assert len(logger.handlers) == 1
        assert logger.level == logging.INFO
        assert logger.propagate is False
    finally:
        logger.handlers = []
        logger.propagate = True
