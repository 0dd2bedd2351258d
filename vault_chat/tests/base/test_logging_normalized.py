from __future__ import annotations

import json
import logging

from vault_chat.base.logging import (
    REQUIRED_NORMALIZED_KEYS,
    LogContext,
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)
from vault_chat.base.log_support import JsonFormatter
from vault_chat.base.models import Usage


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):  # pragma: no cover - trivial
        self.records.append(record.getMessage())


def _capture():
    base = get_logger()
    handler = _ListHandler()
    base.addHandler(handler)
    return base, handler


def test_normalized_event_has_required_keys():
    base, handler = _capture()
    try:
        normalized_log_event(
            get_logger("providers.test"),
            "chat.error",
            LogContext(provider="p", model="m"),
            phase="finalize",
            attempt=1,
            error_code="timeout",
            emitted=False,
            tokens=Usage(prompt_tokens=1, completion_tokens=2),
        )
    finally:
        base.removeHandler(handler)
    payload = json.loads(handler.records[-1])
    for key in REQUIRED_NORMALIZED_KEYS:
        assert key in payload  # nosec B101 - asserts are appropriate in unit tests
    assert payload["tokens"] == {"prompt_tokens": 1, "completion_tokens": 2}  # nosec B101 - asserts are appropriate in unit tests
    assert payload["provider"] == "p"  # nosec B101 - asserts are appropriate in unit tests


def test_error_code_omitted_and_none_extras_dropped():
    base, handler = _capture()
    try:
        normalized_log_event(get_logger("providers.test"), "chat.end", phase="finalize", phase_extra=None, latency_ms=3.5, emitted=True)
    finally:
        base.removeHandler(handler)
    first = json.loads(handler.records[-1])
    assert "error_code" not in first  # nosec B101 - asserts are appropriate in unit tests
    assert first["attempt"] is None  # nosec B101 - asserts are appropriate in unit tests
    assert first["latency_ms"] == 3.5  # nosec B101 - asserts are appropriate in unit tests
    assert "phase_extra" not in first  # nosec B101 - asserts are appropriate in unit tests


def test_log_event_drops_none_fields():
    base, handler = _capture()
    try:
        log_event(get_logger("providers.test"), "x.y", a=1, b=None)
    finally:
        base.removeHandler(handler)
    assert json.loads(handler.records[-1]) == {"event": "x.y", "a": 1}  # nosec B101 - asserts are appropriate in unit tests


def test_child_loggers_propagate_to_isolated_base():
    base = get_logger()
    child = get_logger("providers.ollama")
    assert base.propagate is False  # nosec B101 - asserts are appropriate in unit tests
    assert child.propagate is True  # nosec B101 - asserts are appropriate in unit tests
    assert child.parent is base  # nosec B101 - asserts are appropriate in unit tests


def test_configure_logger_level_and_file(tmp_path):
    path = tmp_path / "logs" / "providers.log"
    logger = configure_logger(level="WARNING", file_path=str(path))
    try:
        assert logger.level == logging.WARNING  # nosec B101 - asserts are appropriate in unit tests
        log_event(get_logger("providers.test"), "kept", level=logging.ERROR)
        log_event(logger, "dropped", level=logging.INFO)
    finally:
        configure_logger(level="INFO", file_path=None)
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 1  # nosec B101 - asserts are appropriate in unit tests
    assert json.loads(lines[0])["event"] == "kept"  # nosec B101 - asserts are appropriate in unit tests


def test_json_formatter_hoists_event_fields():
    record = logging.LogRecord("providers.x", logging.INFO, __file__, 1, json.dumps({"event": "e", "n": 2}), None, None)
    out = json.loads(JsonFormatter().format(record))
    assert out["event"] == "e" and out["n"] == 2  # nosec B101 - asserts are appropriate in unit tests
    assert out["level"] == "INFO"  # nosec B101 - asserts are appropriate in unit tests
    assert "msg" not in out  # nosec B101 - asserts are appropriate in unit tests
