"""Unit tests for the JSON logging setup in logging.py."""

import sys
import json
import logging

import pytest

from tinylinks.utils.logging import JsonFormatter, initialize_logging


def make_record(msg: str = 'Handled request.', level: int = logging.INFO, **extra) -> logging.LogRecord:
    record = logging.LogRecord('tinylinks.server', level, __file__, 10, msg, None, None)
    record.created = 1760529600.5  # 2025-10-15T12:00:00.500Z
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_standard_fields():
    log = json.loads(JsonFormatter().format(make_record()))

    assert log == {
        'timestamp': '2025-10-15T12:00:00.500Z',
        'level': 'INFO',
        'logger': 'tinylinks.server',
        'message': 'Handled request.',
    }


def test_json_formatter_includes_extras():
    log = json.loads(JsonFormatter().format(make_record(method='GET', path='/abc123', status=302, latency_ms=0.5)))

    assert log['method'] == 'GET'
    assert log['path'] == '/abc123'
    assert log['status'] == 302
    assert log['latency_ms'] == 0.5


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError('boom')
    except RuntimeError:
        record = make_record(level=logging.ERROR)
        record.exc_info = sys.exc_info()

    log = json.loads(JsonFormatter().format(record))

    assert 'RuntimeError: boom' in log['exception']


@pytest.mark.parametrize('level_name, level', [('DEBUG', logging.DEBUG), ('warning', logging.WARNING)])
def test_initialize_logging_uses_log_level(monkeypatch, level_name, level):
    monkeypatch.setenv('LOG_LEVEL', level_name)
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, root.handlers[:]

    try:
        initialize_logging()
        assert root.level == level
        assert any(isinstance(handler.formatter, JsonFormatter) for handler in root.handlers)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
