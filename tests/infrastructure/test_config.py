"""Tests for settings and logging setup."""

import logging

import pytest
import structlog

from fulfillment.infrastructure.config import Settings, get_settings
from fulfillment.infrastructure.database import build_engine
from fulfillment.infrastructure.logging import configure_logging


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Defaults point at the development Postgres database."""
        monkeypatch.delenv("FULFILLMENT_DATABASE_URL", raising=False)
        settings = Settings(_env_file=None)
        assert settings.database_url.startswith("postgresql+psycopg://")
        assert settings.database_echo is False
        assert settings.log_level == "INFO"

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Variables use the FULFILLMENT_ prefix."""
        monkeypatch.setenv("FULFILLMENT_DATABASE_URL", "sqlite+pysqlite:///:memory:")
        monkeypatch.setenv("FULFILLMENT_DATABASE_ECHO", "true")
        monkeypatch.setenv("FULFILLMENT_LOG_JSON", "1")

        settings = Settings(_env_file=None)

        assert settings.database_url == "sqlite+pysqlite:///:memory:"
        assert settings.database_echo is True
        assert settings.log_json is True

    def test_get_settings_is_cached(self) -> None:
        """get_settings returns one shared instance."""
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()

    def test_build_engine_uses_settings(self) -> None:
        """The engine URL and echo flag come from settings."""
        settings = Settings(database_url="sqlite+pysqlite:///:memory:", database_echo=True)
        engine = build_engine(settings)
        try:
            assert engine.dialect.name == "sqlite"
            assert engine.echo is True
        finally:
            engine.dispose()


class TestConfigureLogging:
    """Tests for configure_logging."""

    @pytest.fixture(autouse=True)
    def _restore_logging(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        structlog.reset_defaults()
        for handler in root.handlers[:]:
            if handler not in handlers:
                root.removeHandler(handler)
        for handler in handlers:
            if handler not in root.handlers:
                root.addHandler(handler)
        root.setLevel(level)

    def test_console_logging(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Console mode renders key/value pairs."""
        configure_logging("DEBUG")
        structlog.get_logger("fulfillment.test").info("Order saved", order_id="ORD-1")

        err = capsys.readouterr().err
        assert "Order saved" in err
        assert "order_id=ORD-1" in err

    def test_json_logging(self, capsys: pytest.CaptureFixture[str]) -> None:
        """JSON mode renders one object per line."""
        configure_logging("INFO", json_logs=True)
        structlog.get_logger("fulfillment.test").info("Order deleted", order_id="ORD-2")

        err = capsys.readouterr().err
        assert '"event": "Order deleted"' in err
        assert '"order_id": "ORD-2"' in err

    def test_level_filtering(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Records below the configured level are dropped."""
        configure_logging("WARNING")
        structlog.get_logger("fulfillment.test").info("quiet")

        assert "quiet" not in capsys.readouterr().err
        assert logging.getLogger().level == logging.WARNING
