"""Unit tests for logging module.

Tests cover:
- Logger retrieval
- InterceptHandler
- JSON and development output
- File logging setup
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import orjson
import pytest
from loguru import logger

from catalog_client.core.config import Settings
from catalog_client.observability.logging import (
    InterceptHandler,
    get_logger,
    setup_logging,
    setup_logging_from_settings,
)


if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


pytestmark = pytest.mark.unit


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Restore default loguru and stdlib logging after setup_logging."""
    yield
    logger.remove()
    logger.add(sys.stderr)
    logging.basicConfig(handlers=[], force=True)


class TestGetLogger:
    """Tests for get_logger function."""

    def test_binds_name(self, log_records: list[dict[str, Any]]) -> None:
        """Should attach the name to every record."""
        get_logger("catalog.test").info("hello", barcode="123")

        record = log_records[-1]
        assert record["message"] == "hello"
        assert record["extra"]["name"] == "catalog.test"
        assert record["extra"]["barcode"] == "123"


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.mark.usefixtures("restore_logging")
    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Should write one JSON object per line with extra fields."""
        setup_logging("INFO", "json")

        get_logger("catalog.test").info("Looked up product", barcode="123")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        data = orjson.loads(line)
        assert data["level"] == "INFO"
        assert data["name"] == "catalog.test"
        assert data["barcode"] == "123"

    @pytest.mark.usefixtures("restore_logging")
    def test_level_filters(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Should drop records below the configured level."""
        setup_logging("WARNING", "json")

        get_logger("catalog.test").info("quiet")

        assert capsys.readouterr().out == ""

    @pytest.mark.usefixtures("restore_logging")
    def test_development_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Should write human-readable lines in development."""
        setup_logging("DEBUG", "json", is_development=True)

        get_logger("catalog.test").warning("Token not set", header="X-API-Key")

        out = capsys.readouterr().out
        assert "Token not set" in out
        assert "header=X-API-Key" in out

    @pytest.mark.usefixtures("restore_logging")
    def test_development_output_escapes_braces(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Should print mapping fields verbatim instead of formatting them."""
        setup_logging("DEBUG", "text")

        get_logger("catalog.test").info("Login succeeded", user={"username": "u"})

        assert "user={'username': 'u'}" in capsys.readouterr().out

    @pytest.mark.usefixtures("restore_logging")
    def test_file_output(self, tmp_path: Path) -> None:
        """Should also write JSON lines to the log file."""
        log_file = tmp_path / "logs" / "client.log"
        setup_logging("INFO", "text", log_file=log_file)

        get_logger("catalog.test").error("API error", status_code=500)
        logger.complete()

        data = orjson.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
        assert data["message"] == "API error"
        assert data["status_code"] == 500

    @pytest.mark.usefixtures("restore_logging")
    def test_quiets_transport_loggers(self) -> None:
        """Should raise httpx and httpcore to WARNING."""
        setup_logging("DEBUG", "text")

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    @pytest.mark.usefixtures("restore_logging")
    def test_from_settings(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Should honour the level and format from settings."""
        settings = Settings(
            APP_ENV="production",
            logging={"level": "ERROR", "format": "json"},
        )
        setup_logging_from_settings(settings)

        log = get_logger("catalog.test")
        log.warning("dropped")
        log.error("kept")

        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 1
        assert orjson.loads(lines[0])["message"] == "kept"


class TestInterceptHandler:
    """Tests for InterceptHandler."""

    def test_forwards_stdlib_records(self, log_records: list[dict[str, Any]]) -> None:
        """Should forward standard library records to loguru."""
        handler = InterceptHandler()
        record = logging.LogRecord(
            name="httpx",
            level=logging.WARNING,
            pathname=__file__,
            lineno=1,
            msg="retrying %s",
            args=("request",),
            exc_info=None,
        )

        handler.emit(record)

        assert log_records[-1]["message"] == "retrying request"
        assert log_records[-1]["level"].name == "WARNING"
