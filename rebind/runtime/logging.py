"""Logging setup for hosts embedding the binding engine."""

from __future__ import annotations

import logging
import queue
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from rebind.api.logging import LoggingConfig
from rebind.runtime.config import resolve_log_level_name
from rebind.runtime.json_codec import dumps_text

_QUEUE_LISTENER: QueueListener | None = None

_STANDARD_RECORD_FIELDS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "taskName",
    }
)


class JsonFormatter(logging.Formatter):
    """JSON formatter with extra-field preservation."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        extras = {k: v for k, v in record.__dict__.items() if k not in _STANDARD_RECORD_FIELDS}
        if extras:
            payload["fields"] = extras
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return dumps_text(payload)


def configure_logging(config: LoggingConfig) -> None:
    """Route root logging to the console, and to a file through a queue when set.

    Calling again replaces the previous handlers and stops any running listener.
    """
    global _QUEUE_LISTENER

    shutdown_logging()
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(getattr(logging, config.level_name.upper(), logging.INFO))

    console = logging.StreamHandler()
    console.setFormatter(_resolve_formatter(config.console_format))
    file_handler = _file_handler(config)
    if file_handler is None:
        root.addHandler(console)
        return

    # File writes stay off the caller's thread.
    log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(log_queue))
    _QUEUE_LISTENER = QueueListener(log_queue, console, file_handler, respect_handler_level=True)
    _QUEUE_LISTENER.start()


def _file_handler(config: LoggingConfig) -> logging.Handler | None:
    if not config.file_path:
        return None
    file_path = Path(config.file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(file_path, mode="a", encoding="utf-8", delay=True)
    handler.setFormatter(_resolve_formatter(config.file_format))
    return handler


def setup_logging() -> None:
    """Configure minimal logging if no handlers are present."""
    root = logging.getLogger()
    if root.handlers:
        return
    configure_logging(
        LoggingConfig(
            level_name=resolve_log_level_name(default="INFO"),
            console_format="text",
            file_path=None,
            file_format="json",
        )
    )


def shutdown_logging() -> None:
    """Flush and stop the background file listener, if any."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        _QUEUE_LISTENER = None


def _resolve_formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")


__all__ = ["JsonFormatter", "configure_logging", "setup_logging", "shutdown_logging"]
