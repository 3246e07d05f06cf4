"""Unit tests for ClickModel and ShortURLModel."""

import dataclasses
from datetime import datetime, timedelta, UTC

import pytest

from tinylinks.models import ClickModel, ShortURLModel


@pytest.fixture
def created_at() -> datetime:
    return datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)


def test_short_url_model_defaults(created_at):
    short_url = ShortURLModel(
        shortcode='abc123',
        target='https://example.com',
        created_at=created_at,
        expires_at=created_at + timedelta(seconds=30),
    )

    assert short_url.hits == 0
    assert short_url.clicks == ()


def test_click_model_defaults(created_at):
    click = ClickModel(timestamp=created_at)

    assert click.referrer == ''
    assert click.location == 'Unknown'


@pytest.mark.parametrize('offset', [timedelta(0), timedelta(seconds=-1)])
def test_short_url_model_rejects_expiry_not_after_creation(created_at, offset):
    with pytest.raises(ValueError, match='must be later than created_at'):
        ShortURLModel(
            shortcode='abc123',
            target='https://example.com',
            created_at=created_at,
            expires_at=created_at + offset,
        )


def test_short_url_model_rejects_negative_hits(created_at):
    with pytest.raises(ValueError, match='non-negative'):
        ShortURLModel(
            shortcode='abc123',
            target='https://example.com',
            created_at=created_at,
            expires_at=created_at + timedelta(seconds=1),
            hits=-1,
        )


def test_models_are_frozen(created_at):
    click = ClickModel(timestamp=created_at, referrer='https://ref.example', location='10.0.x.x')
    short_url = ShortURLModel(
        shortcode='abc123',
        target='https://example.com',
        created_at=created_at,
        expires_at=created_at + timedelta(seconds=1),
        hits=1,
        clicks=(click,),
    )

    with pytest.raises(dataclasses.FrozenInstanceError):
        short_url.hits = 2
    with pytest.raises(dataclasses.FrozenInstanceError):
        click.location = 'Unknown'
