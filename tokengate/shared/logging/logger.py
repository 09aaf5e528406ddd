"""Structured logging utilities."""

from __future__ import annotations

import logging
import os
import sys
import threading
from contextvars import ContextVar
from types import TracebackType

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_CORRELATION_ID: ContextVar[str] = ContextVar("correlation_id", default="-")


class _InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        _logger.bind(correlation_id=_CORRELATION_ID.get()).opt(
            depth=6, exception=record.exc_info
        ).log(level, record.getMessage())


class ContextualLogger:
    """Proxy for loguru that injects correlation ids via ContextVar."""

    def __getattr__(self, name):  # pragma: no cover
        bound = _logger.bind(correlation_id=_CORRELATION_ID.get())
        return getattr(bound, name)


def set_correlation_id(value: str | None) -> None:
    _CORRELATION_ID.set(value or "-")


def get_correlation_id() -> str:
    return _CORRELATION_ID.get()


def clear_correlation_id() -> None:
    _CORRELATION_ID.set("-")


def _patch(record) -> None:
    record["extra"].setdefault("correlation_id", _CORRELATION_ID.get())
    sanitize_record(record)


def setup_logging(level: str | None = None, *, debug_mode: bool = False) -> None:
    """Route all logging through loguru.

    ``debug_mode`` (development environment) lowers the default level to DEBUG
    and lets SQLAlchemy's statement logging through.
    """
    default_level = "DEBUG" if debug_mode else "INFO"
    level = (level or os.getenv("LOG_LEVEL") or default_level).upper()

    _logger.remove()
    _logger.configure(patcher=_patch, extra={"correlation_id": "-"})
    _logger.add(
        sys.stderr,
        level=level,
        format=_FMT,
        colorize=True,
        backtrace=False,
        diagnose=False,
    )
    log_file = os.getenv("LOG_FILE")
    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        _logger.add(
            log_file,
            level=level,
            format=_FMT,
            colorize=False,
            backtrace=False,
            diagnose=False,
            enqueue=True,
            encoding="utf-8",
        )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    logging.getLogger("werkzeug").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if debug_mode else logging.WARNING
    )


def _log_uncaught(
    exc_type: type[BaseException],
    exc_value: BaseException,
    exc_tb: TracebackType | None,
    where: str,
) -> None:
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_tb)
        return
    _logger.bind(correlation_id=_CORRELATION_ID.get()).opt(
        exception=(exc_type, exc_value, exc_tb)
    ).critical(f"Uncaught exception in {where}; process left running")


def install_exception_hooks() -> None:
    """Log uncaught exceptions loudly instead of letting them vanish.

    Worker threads that die this way do not take the process down; the server
    keeps serving. A supervisor restart is the operator's choice, not ours.
    """

    def _sys_hook(exc_type, exc_value, exc_tb) -> None:
        _log_uncaught(exc_type, exc_value, exc_tb, "main thread")

    def _thread_hook(args: threading.ExceptHookArgs) -> None:
        name = args.thread.name if args.thread is not None else "unknown"
        _log_uncaught(args.exc_type, args.exc_value, args.exc_traceback, f"thread {name}")

    sys.excepthook = _sys_hook
    threading.excepthook = _thread_hook


logger = ContextualLogger()

__all__ = [
    "logger",
    "setup_logging",
    "install_exception_hooks",
    "set_correlation_id",
    "clear_correlation_id",
    "get_correlation_id",
]
