"""Unit tests for the shorten_url request handler.

Test coverage includes:

1. Successful shortening
   - Ensures the handler returns the shortcode and its expiry (HTTP 200).
   - Ensures optional fields are forwarded to the DAO.

2. Invalid request bodies
   - Ensures malformed JSON, non-object bodies and bad fields return HTTP 400.

3. DAO errors
   - Ensures taken shortcodes return HTTP 409.
   - Ensures registry-side URL rejection returns HTTP 400.
   - Ensures out-of-range validity windows return HTTP 400.
   - Ensures shortcode exhaustion returns HTTP 503.

Fixtures:
    - `event`: builds an HTTP event around a JSON body.
    - `dao`: mock DAO implementing ShortURLBaseDAO with a stubbed `create` method.
"""

import json
from datetime import datetime, timedelta, UTC
from unittest.mock import MagicMock

import pytest

from tinylinks.handlers import shorten_url
from tinylinks.models import ShortURLModel
from tinylinks.dao.base import ShortURLBaseDAO
from tinylinks.dao.memory import ShortURLMemoryDAO
from tinylinks.dao.exceptions import (
    InvalidTargetURLError,
    InvalidValidityError,
    ShortURLAlreadyExistsError,
    ShortcodeSpaceExhaustedError,
)


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def event():
    def _event(body):
        return {
            'httpMethod': 'POST',
            'path': '/shorturls',
            'headers': {'Content-Type': 'application/json'},
            'pathParameters': {},
            'body': body if isinstance(body, str) else json.dumps(body),
        }

    return _event


@pytest.fixture
def created_at():
    return datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def dao(created_at):
    _dao = MagicMock(spec=ShortURLBaseDAO)
    _dao.create.return_value = ShortURLModel(
        shortcode='abc123',
        target='https://example.com',
        created_at=created_at,
        expires_at=created_at + timedelta(seconds=30),
    )
    return _dao


# -------------------------------
# 1. Successful shortening
# -------------------------------


def test_handler(event, dao):
    response = shorten_url.handler(event({'url': 'https://example.com'}), dao)
    body = json.loads(response['body'])

    assert response['statusCode'] == 200
    assert response['headers']['Content-Type'] == 'application/json'
    assert response['headers']['Access-Control-Allow-Origin'] == '*'
    assert body == {'shortcode': 'abc123', 'expiry': '2025-10-15T12:00:30Z'}
    dao.create.assert_called_once_with('https://example.com', validity=0, shortcode=None)


def test_handler_forwards_optional_fields(event, dao):
    shorten_url.handler(event({'url': 'https://example.com', 'validity': 1, 'shortcode': 'abc123'}), dao)
    dao.create.assert_called_once_with('https://example.com', validity=1, shortcode='abc123')


@pytest.mark.parametrize(
    'extra, validity, shortcode',
    [
        ({'validity': None, 'shortcode': None}, 0, None),
        ({'validity': -5, 'shortcode': ''}, -5, None),
    ],
)
def test_handler_with_empty_optional_fields(event, dao, extra, validity, shortcode):
    response = shorten_url.handler(event({'url': 'https://example.com', **extra}), dao)

    assert response['statusCode'] == 200
    dao.create.assert_called_once_with('https://example.com', validity=validity, shortcode=shortcode)


def test_handler_with_real_registry(event):
    registry = ShortURLMemoryDAO()
    response = shorten_url.handler(event({'url': 'https://example.com', 'shortcode': 'abc123'}), registry)

    assert response['statusCode'] == 200
    assert registry.get('abc123').target == 'https://example.com'


# -------------------------------
# 2. Invalid request bodies
# -------------------------------


@pytest.mark.parametrize(
    'body, message',
    [
        ('{not json', 'Bad Request (invalid JSON body)'),
        ('["https://example.com"]', 'Bad Request (JSON body must be an object)'),
        ('"https://example.com"', 'Bad Request (JSON body must be an object)'),
        ('', "Bad Request (missing 'url' in JSON body)"),
        ('null', "Bad Request (missing 'url' in JSON body)"),
        ({}, "Bad Request (missing 'url' in JSON body)"),
        ({'url': ''}, "Bad Request (missing 'url' in JSON body)"),
        ({'url': 'not-a-url'}, 'Bad Request (invalid URL format)'),
        ({'url': 'ftp://example.com'}, 'Bad Request (invalid URL format)'),
        ({'url': ['https://example.com']}, 'Bad Request (invalid URL format)'),
        ({'url': 'https://example.com', 'validity': '30'}, "Bad Request ('validity' must be an integer number of seconds)"),
        ({'url': 'https://example.com', 'validity': 1.5}, "Bad Request ('validity' must be an integer number of seconds)"),
        ({'url': 'https://example.com', 'validity': True}, "Bad Request ('validity' must be an integer number of seconds)"),
        ({'url': 'https://example.com', 'shortcode': 123}, "Bad Request ('shortcode' must be a string)"),
    ],
)
def test_handler_with_bad_request(event, dao, body, message):
    response = shorten_url.handler(event(body), dao)
    body = json.loads(response['body'])

    assert response['statusCode'] == 400
    assert body['message'] == message
    dao.create.assert_not_called()


def test_handler_without_body(dao):
    response = shorten_url.handler({'httpMethod': 'POST', 'path': '/shorturls'}, dao)
    assert response['statusCode'] == 400


# -------------------------------
# 3. DAO errors
# -------------------------------


def test_handler_with_taken_shortcode(event, dao):
    dao.create.side_effect = ShortURLAlreadyExistsError()

    response = shorten_url.handler(event({'url': 'https://example.com', 'shortcode': 'abc123'}), dao)
    body = json.loads(response['body'])

    assert response['statusCode'] == 409
    assert body['message'] == "Conflict (shortcode 'abc123' already exists)"
    assert body['errorCode'] == 'SHORTCODE_TAKEN'


def test_handler_with_url_rejected_by_registry(event, dao):
    dao.create.side_effect = InvalidTargetURLError()

    response = shorten_url.handler(event({'url': 'https://example.com'}), dao)

    assert response['statusCode'] == 400
    assert json.loads(response['body'])['errorCode'] == 'INVALID_TARGET_URL'


def test_handler_with_exhausted_shortcodes(event, dao):
    dao.create.side_effect = ShortcodeSpaceExhaustedError()

    response = shorten_url.handler(event({'url': 'https://example.com'}), dao)

    assert response['statusCode'] == 503
    assert json.loads(response['body'])['errorCode'] == 'SHORTCODE_SPACE_EXHAUSTED'


def test_handler_with_out_of_range_validity(event, dao):
    dao.create.side_effect = InvalidValidityError()

    response = shorten_url.handler(event({'url': 'https://example.com', 'validity': 10**12}), dao)
    body = json.loads(response['body'])

    assert response['statusCode'] == 400
    assert body['message'] == "Bad Request ('validity' is out of range)"
    assert body['errorCode'] == 'INVALID_VALIDITY'


def test_handler_with_out_of_range_validity_and_real_registry(event):
    registry = ShortURLMemoryDAO()
    response = shorten_url.handler(event({'url': 'https://example.com', 'validity': 10**12}), registry)

    assert response['statusCode'] == 400
    assert json.loads(response['body'])['errorCode'] == 'INVALID_VALIDITY'
    assert len(registry) == 0
