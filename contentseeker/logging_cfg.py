"""Centralized logging helpers for ContentSeeker.

Module loggers live under the ``contentseeker`` namespace and never print on
their own: the console handler is installed once on the root logger by
``configure_logging`` (called by the CLI), so library users keep full control
over output. An optional rotating file log can be attached per logger.
"""

from __future__ import annotations

import contextvars
import functools
import json
import logging
import logging.handlers
import os
import sys
import time
import uuid
from pathlib import Path
from typing import Optional

from .config import LOG_FORMAT_ENV

_STD_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
_CONSOLE_HANDLER_NAME = "contentseeker_console"


def get_logger(
    name: str = "contentseeker",
    log_dir: Optional[Path] = None,
    level: int = logging.NOTSET,
) -> logging.Logger:
    if name != "contentseeker" and not name.startswith("contentseeker."):
        name = f"contentseeker.{name}"
    logger = logging.getLogger(name)
    if level:
        logger.setLevel(level)

    has_rotating = any(
        isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers
    )
    if log_dir and not has_rotating:
        try:
            log_dir = Path(log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)
            rfh = logging.handlers.RotatingFileHandler(
                str(log_dir / "contentseeker.log"),
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8",
            )
            rfh.setFormatter(logging.Formatter(_STD_FORMAT))
            logger.addHandler(rfh)
        except OSError:
            logger.debug("Could not create file handler for logger at %s", log_dir)

    return logger


# Correlation ID support for tracing one scan across modules
_cid_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "contentseeker_correlation_id", default=None
)


def set_correlation_id(cid: str | None = None) -> str:
    """Set or create and set a correlation id for the current context.

    Returns the correlation id string.
    """
    if cid is None:
        cid = uuid.uuid4().hex
    _cid_var.set(cid)
    return cid


def get_correlation_id() -> str | None:
    return _cid_var.get()


class JsonFormatter(logging.Formatter):
    """Minimal JSON formatter that includes correlation id when available."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        cid = get_correlation_id()
        if cid:
            payload["correlation_id"] = cid
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def log_call(level: int = logging.DEBUG):
    """Decorator that logs function entry, duration and exit.

    Usage:
        @log_call()
        def foo(...):
            ...
    """

    def _decorator(func):
        @functools.wraps(func)
        def _wrapper(*args, **kwargs):
            logger = logging.getLogger(func.__module__)
            start = time.time()
            logger.debug("Entering %s", func.__qualname__)
            try:
                result = func(*args, **kwargs)
            except Exception:
                duration = (time.time() - start) * 1000.0
                logger.debug(
                    "Exception in %s after %.2fms",
                    func.__qualname__,
                    duration,
                )
                raise
            duration = (time.time() - start) * 1000.0
            logger.log(
                level,
                "Exited %s; duration_ms=%.2f",
                func.__qualname__,
                duration,
            )
            return result

        return _wrapper

    return _decorator


def _resolve_mode(env: Optional[str]) -> str:
    chosen = env or os.getenv(LOG_FORMAT_ENV, "auto")
    chosen = chosen.lower()
    if chosen in ("json", "human"):
        return chosen
    # auto: prefer human when interactive
    try:
        return "human" if sys.stderr.isatty() else "json"
    except (AttributeError, ValueError):
        return "json"


def configure_logging(env: Optional[str] = None, level: int = logging.WARNING):
    """Configure the root logger.

    env: 'auto' | 'json' | 'human'; None reads CONTENTSEEKER_LOG_FORMAT
    (default 'auto').
    - 'auto' chooses human-readable when stderr is a TTY, otherwise JSON.

    Calling it again replaces the console handler instead of adding a
    second one. Returns the root logger.
    """
    mode = _resolve_mode(env)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # The previous handler may point at a stream that no longer exists
    for old in [h for h in root_logger.handlers if h.name == _CONSOLE_HANDLER_NAME]:
        root_logger.removeHandler(old)

    handler = logging.StreamHandler(sys.stderr)
    handler.name = _CONSOLE_HANDLER_NAME
    handler.setLevel(level)
    root_logger.addHandler(handler)

    if mode == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    return root_logger
