from __future__ import annotations

import logging

import numpy as np
import orjson

from rebind.api.logging import LoggingConfig
from rebind.runtime import logging as rebind_logging
from rebind.runtime.json_codec import dumps_text
from rebind.runtime.logging import JsonFormatter, configure_logging, setup_logging, shutdown_logging


def test_setup_logging_adds_handler_when_missing(monkeypatch) -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    try:
        root.handlers.clear()
        root.setLevel(logging.NOTSET)
        monkeypatch.setenv("REBIND_LOG_LEVEL", "DEBUG")
        setup_logging()
        assert root.handlers
        assert root.level == logging.DEBUG
    finally:
        root.handlers.clear()
        root.handlers.extend(original_handlers)
        root.setLevel(original_level)


def test_setup_logging_does_not_override_existing_handlers() -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    sentinel = logging.NullHandler()
    try:
        root.handlers.clear()
        root.addHandler(sentinel)
        root.setLevel(logging.WARNING)
        setup_logging()
        assert root.handlers == [sentinel]
        assert root.level == logging.WARNING
    finally:
        root.handlers.clear()
        root.handlers.extend(original_handlers)
        root.setLevel(original_level)


def test_json_formatter_keeps_extra_fields() -> None:
    record = logging.LogRecord(
        name="rebind.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="capture_committed id=%s",
        args=("builtin:jump",),
        exc_info=None,
    )
    record.player = 2

    payload = orjson.loads(JsonFormatter().format(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "rebind.test"
    assert payload["msg"] == "capture_committed id=builtin:jump"
    assert payload["fields"] == {"player": 2}


def test_dumps_text_handles_numpy_values() -> None:
    text = dumps_text({"active": np.array([0, 3]), "flag": np.bool_(True)}, sort_keys=True)
    assert orjson.loads(text) == {"active": [0, 3], "flag": True}


def test_configure_logging_streams_json_to_file(tmp_path) -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    log_file = tmp_path / "logs" / "rebind.jsonl"
    try:
        configure_logging(
            LoggingConfig(level_name="debug", file_path=str(log_file), file_format="json")
        )
        logging.getLogger("rebind.persistence.store").info("bindings_saved path=%s", "x.sav")
        shutdown_logging()

        lines = log_file.read_text(encoding="utf-8").splitlines()
        assert orjson.loads(lines[-1])["msg"] == "bindings_saved path=x.sav"
        assert root.level == logging.DEBUG
    finally:
        shutdown_logging()
        for handler in root.handlers:
            handler.close()
        root.handlers.clear()
        root.handlers.extend(original_handlers)
        root.setLevel(original_level)


def test_reconfigure_stops_file_listener(tmp_path) -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    try:
        configure_logging(LoggingConfig(file_path=str(tmp_path / "rebind.jsonl")))
        assert rebind_logging._QUEUE_LISTENER is not None

        configure_logging(LoggingConfig(level_name="warning"))

        assert rebind_logging._QUEUE_LISTENER is None
        assert [type(handler) for handler in root.handlers] == [logging.StreamHandler]
        assert root.level == logging.WARNING
    finally:
        shutdown_logging()
        for handler in root.handlers:
            handler.close()
        root.handlers.clear()
        root.handlers.extend(original_handlers)
        root.setLevel(original_level)
