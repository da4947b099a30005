import json
import logging

import pytest
import structlog

from eventemitter import EmitterSettings, EventEmitter
from eventemitter.logging_config import configure_from_settings, configure_logging, get_logger


def teardown_function(function):
    configure_logging(level="WARNING", colors=False, cache_loggers=False)


def test_get_logger_supports_keyword_context():
    logger = get_logger("tests.logging")
    logger.info("logger_ready", component="tests")


def test_json_output_written_to_file(tmp_path):
    log_file = tmp_path / "logs" / "emitter.log"
    configure_logging(level="DEBUG", json_output=True, log_file=log_file, cache_loggers=False)

    emitter = EventEmitter(EmitterSettings(trace_emits=True))
    emitter.on("evt", lambda: None, 3)
    emitter.emit("evt")
    logging.getLogger().handlers[0].flush()

    records = [json.loads(line) for line in log_file.read_text().splitlines() if line.strip()]
    events = [r["event"] for r in records]
    assert "listener_added" in events
    assert "event_emitted" in events
    emitted = next(r for r in records if r["event"] == "event_emitted")
    assert emitted["event_name"] == "evt"
    assert emitted["outcome"] == "completed"
    assert emitted["listeners"] == 1


def test_listener_failure_is_logged_before_propagating(tmp_path):
    log_file = tmp_path / "emitter.log"
    configure_logging(level="INFO", colors=False, cache_loggers=False)
    configure_logging(level="DEBUG", json_output=True, log_file=log_file, cache_loggers=False)

    emitter = EventEmitter()

    def broken():
        raise KeyError("missing")

    emitter.on("evt", broken)
    with pytest.raises(KeyError):
        emitter.emit("evt")
    logging.getLogger().handlers[0].flush()

    lines = [line for line in log_file.read_text().splitlines() if line.strip()]
    assert not any(line.startswith("Traceback") for line in lines)
    records = [json.loads(line) for line in lines]
    failure = next(r for r in records if r["event"] == "listener_failed")
    assert failure["level"] == "error"
    assert "KeyError" in failure["exception"]


def test_reconfiguring_closes_previous_log_file(tmp_path):
    configure_logging(json_output=True, log_file=tmp_path / "first.log", cache_loggers=False)
    first_handler = logging.getLogger().handlers[0]

    configure_logging(json_output=True, log_file=tmp_path / "second.log", cache_loggers=False)

    assert first_handler not in logging.getLogger().handlers
    assert first_handler.stream is None


def test_configure_from_settings_sets_level():
    configure_from_settings(EmitterSettings(log_level="ERROR"))
    assert logging.getLogger().level == logging.ERROR
    assert structlog.is_configured()
