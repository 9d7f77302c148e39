"""Loguru setup for the rental client."""

from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar, Token
from pathlib import Path
from typing import Iterator

from loguru import logger

from .sensitive_filter import sanitize_record

_NO_CORRELATION = "-"

_CONSOLE_FMT = (
    "<green>{time:HH:mm:ss.SSS}</green> "
    "<lvl>{level:<7}</lvl> "
    "<magenta>[{extra[correlation_id]}]</magenta> "
    "<lvl>{message}</lvl>"
)
_FILE_FMT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {extra[correlation_id]} | "
    "{name}:{function}:{line} | {message}"
)

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default=_NO_CORRELATION)


def _inject_correlation_id(record) -> None:
    record["extra"].setdefault("correlation_id", _correlation_id.get())


logger.configure(patcher=_inject_correlation_id)


def default_log_file() -> Path:
    return Path.home() / ".rentalclient" / "logs" / "client.log"


class _StdlibBridge(logging.Handler):
    """Routes stdlib ``logging`` records (httpx, asyncio) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1
        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def set_correlation_id(value: str | None) -> Token[str]:
    return _correlation_id.set(value or _NO_CORRELATION)


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


def get_correlation_id() -> str:
    return _correlation_id.get()


@contextmanager
def correlation_scope(value: str | None) -> Iterator[str]:
    """Tag every record logged inside the block with ``value``."""
    token = set_correlation_id(value)
    try:
        yield _correlation_id.get()
    finally:
        reset_correlation_id(token)


def setup_logging(
    level: str | None = None,
    log_file: str | Path | None = None,
    *,
    console: bool = True,
) -> None:
    """Install the console and rotating file sinks.

    ``LOG_LEVEL`` and ``LOG_FILE`` are read from the environment when the
    arguments are omitted. Records pass through the sensitive-data filter
    before reaching either sink.
    """
    level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    path = Path(log_file or os.getenv("LOG_FILE") or default_log_file())
    path.parent.mkdir(parents=True, exist_ok=True)

    logger.remove()
    if console:
        logger.add(
            sys.stderr,
            level=level,
            format=_CONSOLE_FMT,
            colorize=None,
            backtrace=False,
            diagnose=False,
            filter=sanitize_record,
        )
    logger.add(
        path,
        level=level,
        format=_FILE_FMT,
        backtrace=False,
        diagnose=False,
        filter=sanitize_record,
        rotation="5 MB",
        retention=3,
        encoding="utf-8",
    )

    logging.basicConfig(handlers=[_StdlibBridge()], level=0, force=True)
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


__all__ = [
    "correlation_scope",
    "default_log_file",
    "get_correlation_id",
    "logger",
    "reset_correlation_id",
    "set_correlation_id",
    "setup_logging",
]
