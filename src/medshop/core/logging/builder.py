"""
Logging builder: turn Settings into a dictConfig mapping, apply it, and optionally
move handler IO to a background QueueListener.

Usage (once, from the app factory):
    setup_logging(settings)
    ...
    stop_queue_logging()   # at shutdown, flushes queued records

Handlers by configuration:
| LOG_TO_STDOUT | LOG_DIR set | Active handlers                |
| ------------- | ----------- | ------------------------------ |
| true          | any         | console + error_console        |
| false         | no          | console + error_console        |
| false         | yes         | console + file + error_file    |
"""

from __future__ import annotations

import logging
import logging.config
import queue as _queue
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from typing import Optional

from medshop.config.settings import Settings
from medshop.utils.logging import get_project_name

from .filters import RedactFilter, RequestIdFilter
from .formatters import ColorFormatter, JsonFormatter
from .handlers import (
    get_console_handler,
    get_error_console_handler,
    get_error_file_handler,
    get_file_handler,
)

# Running QueueListener (queue mode only) so shutdown can stop it
_QUEUE_LISTENER: Optional[QueueListener] = None

STANDARD_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s"


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping:
      - formatters: "standard" (coloured in text mode) and "json"
      - filters: "request_id", "redact"
      - handlers: see module table
      - loggers: root, uvicorn.error, uvicorn.access, sqlalchemy.engine
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": STANDARD_FORMAT,
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(),
        },
    }

    filters = {
        "request_id": {"()": RequestIdFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}

    if (not settings.LOG_TO_STDOUT) and settings.LOG_DIR:
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers.keys()),
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "uvicorn.error": {
                "level": settings.LOG_LEVEL,
                "handlers": list(handlers.keys()),
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
            # SQL echo may contain parameter values: opt-in only
            "sqlalchemy.engine": {
                "level": "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Settings) -> None:
    """
    Apply the dictConfig. With LOG_USE_QUEUE the root handlers are moved behind a
    QueueListener and a QueueHandler takes their place; the producer-side filters
    run on the QueueHandler so the request id is read in the request's context.
    """
    global _QUEUE_LISTENER

    # re-configuring (tests, reload) must not leave a listener thread behind
    stop_queue_logging()

    if (not settings.LOG_TO_STDOUT) and settings.LOG_DIR:
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    root_logger = logging.getLogger()
    root_logger.addFilter(RequestIdFilter())

    if not getattr(settings, "LOG_USE_QUEUE", False):
        return

    current_handlers = list(root_logger.handlers)
    if not current_handlers:
        return

    # Detach the real handlers everywhere so they only run on the listener thread
    handlers_to_move = set(current_handlers)
    for logger_obj in list(logging.Logger.manager.loggerDict.values()):
        if isinstance(logger_obj, logging.Logger):
            for h in list(logger_obj.handlers):
                if h in handlers_to_move:
                    logger_obj.removeHandler(h)
    for h in current_handlers:
        root_logger.removeHandler(h)

    log_queue: _queue.Queue = _queue.Queue()
    listener = QueueListener(log_queue, *current_handlers, respect_handler_level=True)
    listener.start()

    qh = QueueHandler(log_queue)
    qh.addFilter(RequestIdFilter())
    qh.addFilter(RedactFilter())
    root_logger.addHandler(qh)

    _QUEUE_LISTENER = listener


def stop_queue_logging() -> None:
    """Flush and stop the QueueListener if queue mode is active. Safe to call repeatedly."""
    global _QUEUE_LISTENER
    listener = _QUEUE_LISTENER
    if listener is None:
        return

    try:
        listener.stop()
    except RuntimeError:
        logging.getLogger(__name__).exception("Failed to stop QueueListener cleanly")
    finally:
        _QUEUE_LISTENER = None


def is_queue_logging_active() -> bool:
    return _QUEUE_LISTENER is not None
