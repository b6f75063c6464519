"""Logging configuration using Loguru.

JSON lines go to stdout (and the optional log file) outside development;
development gets colorized text. Standard library records, such as those
from httpx, are routed into the same sinks.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import orjson
from loguru import logger

from catalog_client.core.config import get_settings


if TYPE_CHECKING:
    from typing import Any

    from catalog_client.core.config import Settings


_TRANSPORT_LOGGERS = ("httpx", "httpcore", "asyncio")


class InterceptHandler(logging.Handler):
    """Forward standard library log records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging's own frames so the record points at the caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _public_extra(record: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in record["extra"].items() if not k.startswith("_")}


def _to_json_line(record: dict[str, Any]) -> str:
    fields = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "logger": record["name"],
        "function": record["function"],
        "line": record["line"],
        **_public_extra(record),
    }

    exc = record["exception"]
    if exc:
        fields["exception"] = {
            "type": exc.type.__name__ if exc.type else None,
            "value": str(exc.value) if exc.value else None,
        }

    return orjson.dumps(fields, default=str).decode()


def _json_format(record: dict[str, Any]) -> str:
    # Loguru treats the returned string as a template, so the JSON rides in extra
    record["extra"]["_json"] = _to_json_line(record)
    return "{extra[_json]}\n"


def _text_format(record: dict[str, Any]) -> str:
    fields = {k: v for k, v in _public_extra(record).items() if k != "name"}
    suffix = ""
    if fields:
        pairs = " ".join(f"{k}={v}" for k, v in fields.items())
        suffix = " | " + pairs.replace("{", "{{").replace("}", "}}")

    fmt = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
        f"{suffix}\n"
    )
    if record["exception"]:
        fmt += "{exception}\n"
    return fmt


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    *,
    is_development: bool = False,
    log_file: Path | str | None = None,
) -> None:
    """Configure Loguru sinks for the client.

    Args:
        log_level: Minimum level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: "json" or "text"; development always uses text
        is_development: Use the colorized text format on stdout
        log_file: Optional path for a rotating JSON log file
    """
    level = log_level.upper()
    logger.remove()
    logger.configure(extra={"name": "catalog_client"})

    if log_format == "json" and not is_development:
        logger.add(
            sys.stdout,
            format=_json_format,
            level=level,
            colorize=False,
            backtrace=True,
            diagnose=False,
        )
    else:
        logger.add(
            sys.stdout,
            format=_text_format,
            level=level,
            colorize=True,
            backtrace=True,
            diagnose=True,
        )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=_json_format,
            level=level,
            rotation="100 MB",
            retention="7 days",
            compression="gz",
            backtrace=True,
            diagnose=False,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    # Transport libraries are chatty at DEBUG
    for name in _TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logging_from_settings(settings: Settings | None = None) -> None:
    """Configure logging from the logging section of the settings."""
    settings = settings or get_settings()
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
        log_file=settings.logging.file,
    )


def get_logger(name: str) -> "logger":  # type: ignore[valid-type]
    """Return the Loguru logger bound to ``name`` (typically __name__)."""
    return logger.bind(name=name)


__all__ = [
    "InterceptHandler",
    "get_logger",
    "logger",
    "setup_logging",
    "setup_logging_from_settings",
]
