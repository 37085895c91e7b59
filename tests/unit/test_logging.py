import io
import json
import logging

import pytest
import structlog

from smart_sac.config.settings import settings
from smart_sac.core.logging import CustomJsonFormatter, LoggingConfig, get_logger, request_id

LOGGER_NAME = 'smart_sac.tests.logging'


@pytest.fixture
def json_output(monkeypatch):
    """Structured pipeline feeding a JSON handler on a private logger"""
    monkeypatch.setattr(settings, 'LOG_FORMAT', 'json')
    LoggingConfig.configure_structured_logging()

    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(CustomJsonFormatter('%(message)s'))
    target = logging.getLogger(LOGGER_NAME)
    target.addHandler(handler)
    target.setLevel(logging.INFO)
    target.propagate = False

    yield stream

    target.removeHandler(handler)
    target.propagate = True
    structlog.reset_defaults()


def emitted(stream):
    return [json.loads(line) for line in stream.getvalue().splitlines()]


def test_event_carries_request_context_and_caller(json_output):
    token = request_id.set('req-123')
    try:
        get_logger(LOGGER_NAME).info("Equipment status changed", extra={"equipment_id": "eq-1"})
    finally:
        request_id.reset(token)

    [record] = emitted(json_output)
    assert record['message'] == "Equipment status changed"
    assert record['equipment_id'] == 'eq-1'
    assert record['request_id'] == 'req-123'
    assert record['service'] == 'smart-sac'
    assert record['level'] == 'INFO'
    assert record['logger'] == LOGGER_NAME
    assert record['module'] == 'test_logging'
    assert record['function'] == 'test_event_carries_request_context_and_caller'


def test_sensitive_fields_are_redacted(json_output):
    get_logger(LOGGER_NAME).warning("Login attempt", extra={"password": "hunter2", "headers": {"authorization": "x"}})

    [record] = emitted(json_output)
    assert record['password'] == '[REDACTED]'
    assert record['headers'] == {'authorization': '[REDACTED]'}


def test_exception_is_rendered(json_output):
    try:
        raise RuntimeError("disk I/O error")
    except RuntimeError:
        get_logger(LOGGER_NAME).error("Purge failed", exc_info=True)

    [record] = emitted(json_output)
    assert 'RuntimeError: disk I/O error' in record['exception']


def test_level_filter_applies_before_processing(json_output):
    get_logger(LOGGER_NAME).debug("Transaction committed successfully")

    assert emitted(json_output) == []
