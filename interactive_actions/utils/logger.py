# interactive_actions/utils/logger.py
from __future__ import annotations

import json
import logging
import threading
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from rich.console import Console
from rich.logging import RichHandler

from interactive_actions.utils.config import get_settings, LogLevel


__all__ = [
    "get_logger",
    "set_log_level",
    "bind",
    "unbind",
    "log_with_context",
]


# ------------- Internal state -------------

_config_lock = threading.Lock()
_configured = False
_global_extra: Dict[str, Any] = {}  # run-wide context attached to every record


# ------------- JSON Formatter (for file logs) -------------

class JsonFormatter(logging.Formatter):
    """
    One JSON object per line.
    Keeps the message as `msg` and merges the adapter context if present.
    """

    default_time_format = "%Y-%m-%dT%H:%M:%S"

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(self.default_time_format),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        if hasattr(record, "extra") and isinstance(record.extra, dict):
            payload.update(record.extra)

        return json.dumps(payload, ensure_ascii=False, default=str)


# ------------- Helpers -------------

_LEVEL_MAP = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRITICAL: logging.CRITICAL,
}


def _ensure_configured() -> None:
    """
    Configure the package logger once based on settings.
    Subsequent calls are no-ops.
    """
    global _configured
    if _configured:
        return

    with _config_lock:
        if _configured:
            return

        settings = get_settings()
        level = _LEVEL_MAP.get(settings.LOG_LEVEL, logging.INFO)

        # Only the package tree is configured; a host application keeps its root logger.
        base = logging.getLogger("interactive_actions")
        base.setLevel(level)
        base.propagate = False
        for h in list(base.handlers):
            base.removeHandler(h)

        console = Console(stderr=True, color_system="auto" if settings.COLORIZED_OUTPUT else None)
        rich_handler = RichHandler(
            console=console,
            show_time=True,
            show_path=False,
            rich_tracebacks=True,
            markup=False,
            omit_repeated_times=False,
        )
        rich_handler.setFormatter(logging.Formatter("%(message)s"))
        rich_handler.setLevel(level)
        base.addHandler(rich_handler)

        if settings.LOG_TO_FILE:
            settings.LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                filename=str(settings.LOG_FILE),
                maxBytes=5 * 1024 * 1024,  # 5MB per file
                backupCount=5,
                encoding="utf-8",
                delay=True,
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(JsonFormatter())
            base.addHandler(file_handler)

        # prompt_toolkit is chatty at DEBUG about input/output detection
        logging.getLogger("prompt_toolkit").setLevel(max(level, logging.WARNING))
        logging.getLogger("asyncio").setLevel(max(level, logging.WARNING))

        _configured = True


def get_logger(name: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a configured logger wrapped with a LoggerAdapter
    that injects the bound run context into every log record.
    """
    _ensure_configured()
    base = logging.getLogger(name if name else "interactive_actions")
    return logging.LoggerAdapter(base, extra={"extra": _global_extra})


def set_log_level(level: LogLevel | str) -> None:
    """Adjust the package log level at runtime."""
    _ensure_configured()
    lvl = level if isinstance(level, str) else level.value
    py_level = getattr(logging, lvl.upper(), logging.INFO)
    base = logging.getLogger("interactive_actions")
    base.setLevel(py_level)
    for h in base.handlers:
        h.setLevel(py_level)


def bind(**kwargs: Any) -> None:
    """
    Bind run-wide context (e.g., run_id="20261017T120000Z").
    Attached to every subsequent log line.
    """
    _global_extra.update(kwargs)


def unbind(*keys: str) -> None:
    """Remove keys from the run-wide context."""
    for k in keys:
        _global_extra.pop(k, None)


def log_with_context(logger: logging.LoggerAdapter, **kwargs: Any) -> logging.LoggerAdapter:
    """
    Return a new LoggerAdapter that merges additional context for a scoped section.
    Usage:
        log = get_logger(__name__)
        scoped = log_with_context(log, action="pick-env")
        scoped.info("playing interaction")
    """
    merged = dict(_global_extra)
    merged.update(kwargs)
    return logging.LoggerAdapter(logger.logger, extra={"extra": merged})
