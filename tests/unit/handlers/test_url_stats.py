"""Unit tests for the url_stats request handler."""

import json
from datetime import datetime, timedelta, UTC

import pytest
from freezegun import freeze_time

from tinylinks.handlers import url_stats


@pytest.fixture
def stats_event():
    def _event(shortcode):
        return {
            'httpMethod': 'GET',
            'path': f'/shorturls/{shortcode}',
            'headers': {},
            'pathParameters': {'shortcode': shortcode},
        }

    return _event


def test_handler(dao, stats_event):
    with freeze_time('2025-10-15 12:00:00') as frozen:
        dao.create('https://example.com', validity=60, shortcode='abc123')
        frozen.tick(timedelta(seconds=1, milliseconds=250))
        dao.hit('abc123', referrer='https://news.example.org', source_address='192.168.1.10:5000')
        frozen.tick(timedelta(seconds=2))
        dao.hit('abc123')

    response = url_stats.handler(stats_event('abc123'), dao)
    body = json.loads(response['body'])

    assert response['statusCode'] == 200
    assert body == {
        'url': 'https://example.com',
        'created_at': '2025-10-15T12:00:00Z',
        'expiry': '2025-10-15T12:01:00Z',
        'hits': 2,
        'clicks': [
            {'timestamp': '2025-10-15T12:00:01.250Z', 'referrer': 'https://news.example.org', 'location': '192.168.x.x'},
            {'timestamp': '2025-10-15T12:00:03.250Z', 'referrer': '', 'location': 'Unknown'},
        ],
    }


def test_handler_after_expiry(dao, stats_event):
    with freeze_time('2025-10-15 12:00:00') as frozen:
        dao.create('https://example.com', validity=1, shortcode='abc123')
        frozen.tick(timedelta(seconds=10))

        response = url_stats.handler(stats_event('abc123'), dao)

    assert response['statusCode'] == 200
    assert json.loads(response['body'])['hits'] == 0


def test_handler_with_unknown_shortcode(dao, stats_event):
    response = url_stats.handler(stats_event('doesnotexist'), dao)
    body = json.loads(response['body'])

    assert response['statusCode'] == 404
    assert body['message'] == "Not Found (shortcode 'doesnotexist' doesn't exist)"


def test_handler_with_missing_shortcode(dao):
    response = url_stats.handler({'pathParameters': {}}, dao)
    assert response['statusCode'] == 400


def test_serialize_stats_without_clicks(dao):
    created = datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)
    with freeze_time(created):
        short_url = dao.create('https://example.com', validity=30)

    assert url_stats.serialize_stats(short_url) == {
        'url': 'https://example.com',
        'created_at': '2025-10-15T12:00:00Z',
        'expiry': '2025-10-15T12:00:30Z',
        'hits': 0,
        'clicks': [],
    }
