"""Data Access Object (DAO) implementation keeping shortened URLs in process memory

This module provides the shortcode registry: a ShortURLBaseDAO whose records
live in a dictionary guarded by a reader/writer lock. Nothing survives a
restart.

Responsibilities:
    - Create short URLs with caller-chosen or generated, unique shortcodes;
    - Refuse redirects strictly after a record's expiry;
    - Count hits and append click analytics atomically on every redirect;
    - Hand out immutable snapshots, never live records.

Classes:
    ShortURLMemoryDAO:
        DAO for storing and retrieving short URLs in memory.

Example:
    >>> from tinylinks.dao.memory import ShortURLMemoryDAO

    >>> dao = ShortURLMemoryDAO(default_validity=60)
    >>> short_url = dao.create('https://example.com/page', shortcode='abc123')
    >>> short_url.shortcode
    'abc123'

    >>> dao.hit('abc123', referrer='', source_address='192.168.1.10:50312')
    'https://example.com/page'

    >>> dao.get('abc123').clicks[0].location
    '192.168.x.x'
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, UTC
from collections.abc import Callable

from beartype import beartype

from tinylinks.types import Locator
from tinylinks.models import ClickModel, ShortURLModel
from tinylinks.constants import Defaults
from tinylinks.exceptions import BadConfigurationError
from tinylinks.dao.base import ShortURLBaseDAO
from tinylinks.dao.memory.helpers import ReadWriteLock, read_locked, write_locked
from tinylinks.dao.exceptions import (
    InvalidTargetURLError,
    InvalidValidityError,
    ShortURLAlreadyExistsError,
    ShortURLExpiredError,
    ShortURLNotFoundError,
    ShortcodeSpaceExhaustedError,
)
from tinylinks.utils.location import coarse_location
from tinylinks.utils.shortener import generate_shortcode
from tinylinks.utils.validation import is_valid_url


logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass
class _ShortURLRecord:
    target: str
    created_at: datetime
    expires_at: datetime
    hits: int = 0
    clicks: list[ClickModel] = field(default_factory=list)

    def snapshot(self, shortcode: str) -> ShortURLModel:
        return ShortURLModel(
            shortcode=shortcode,
            target=self.target,
            created_at=self.created_at,
            expires_at=self.expires_at,
            hits=self.hits,
            clicks=tuple(self.clicks),
        )


class ShortURLMemoryDAO(ShortURLBaseDAO):
    """In-memory Data Access Object (DAO) for managing short URL mappings

    One instance is shared by every request thread. `create()` and `hit()`
    mutate state under the exclusive side of `lock`; `get()` only needs the
    shared side.

    Attributes:
        lock (ReadWriteLock):
            Guards `_records`.
        shortcode_length (int):
            Length of generated shortcodes.
        default_validity (int):
            Validity window in seconds used when a caller passes validity <= 0.
        max_attempts (int | None):
            Generation attempts before giving up. None retries forever.

    Methods:
        create(target: str, validity: int = 0, shortcode: str | None = None) -> ShortURLModel:
            Store a new short URL.
            Raises InvalidTargetURLError, ShortURLAlreadyExistsError or ShortcodeSpaceExhaustedError.

        hit(shortcode: str, referrer: str = '', source_address: str = '') -> str:
            Record a click and return the target URL.
            Raises ShortURLNotFoundError or ShortURLExpiredError.

        get(shortcode: str) -> ShortURLModel:
            Return a snapshot, regardless of expiry.
            Raises ShortURLNotFoundError.
    """

    def __init__(
        self,
        shortcode_length: int = Defaults.SHORTCODE_LENGTH,
        default_validity: int = Defaults.VALIDITY_SECONDS,
        max_attempts: int | None = None,
        locate: Locator = coarse_location,
        clock: Callable[[], datetime] = utcnow,
    ):
        """Initialize an empty registry

        Args:
            shortcode_length (int): length of generated shortcodes (>= 1).
            default_validity (int): fallback validity window in seconds (>= 1).
            max_attempts (int | None): cap on generation attempts per create (>= 1), None for no cap.
            locate (Locator): maps a visitor address to a coarse location.
            clock (Callable[[], datetime]): returns the current timezone-aware moment.

        Raises:
            BadConfigurationError: If any numeric setting is out of range.
        """
        if shortcode_length < 1:
            raise BadConfigurationError(f'shortcode_length must be a positive integer (given value: {shortcode_length}).')
        if default_validity < 1:
            raise BadConfigurationError(f'default_validity must be a positive integer (given value: {default_validity}).')
        if max_attempts is not None and max_attempts < 1:
            raise BadConfigurationError(f'max_attempts must be a positive integer or None (given value: {max_attempts}).')

        self.lock = ReadWriteLock()
        self.shortcode_length = shortcode_length
        self.default_validity = default_validity
        self.max_attempts = max_attempts
        self.locate = locate
        self.clock = clock
        self._records: dict[str, _ShortURLRecord] = {}

    @write_locked
    @beartype
    def create(self, target: str, validity: int = 0, shortcode: str | None = None) -> ShortURLModel:
        """Store a new short URL mapping

        Validation, the collision search and the insert form a single critical
        section, so two concurrent creations never end up with the same code.

        Args:
            target (str):
                Absolute http(s) URL to redirect to.
            validity (int):
                Seconds until expiry; values <= 0 select `default_validity`.
            shortcode (str | None):
                Desired shortcode, used verbatim. None or '' generates one.

        Returns:
            ShortURLModel: snapshot of the new record (no hits, no clicks).

        Raises:
            InvalidTargetURLError:
                If target is not an absolute http(s) URL with a host.
            InvalidValidityError:
                If the expiry would fall outside the representable date range.
            ShortURLAlreadyExistsError:
                If the desired shortcode already exists.
            ShortcodeSpaceExhaustedError:
                If `max_attempts` generated codes were all taken.

        Example:
            >>> dao.create('https://example.com', validity=1, shortcode='abc123').expires_at
            datetime.datetime(2025, 10, 15, 12, 0, 1, tzinfo=datetime.timezone.utc)
        """
        if not is_valid_url(target):
            raise InvalidTargetURLError(f'Target URL {target!r} is not an absolute http(s) URL.')

        if shortcode:
            if shortcode in self._records:
                raise ShortURLAlreadyExistsError(f"Short URL with code '{shortcode}' already exists.")
        else:
            shortcode = self._free_shortcode()

        if validity <= 0:
            validity = self.default_validity

        now = self.clock()
        try:
            expires_at = now + timedelta(seconds=validity)
        except OverflowError as e:
            raise InvalidValidityError(f'Validity of {validity} seconds is out of range.') from e

        record = _ShortURLRecord(target=target, created_at=now, expires_at=expires_at)
        self._records[shortcode] = record
        logger.debug('Stored short URL.', extra={'shortcode': shortcode, 'validity': validity})
        return record.snapshot(shortcode)

    def _free_shortcode(self) -> str:
        # NOTE: caller must hold the write lock
        attempts = 0
        while self.max_attempts is None or attempts < self.max_attempts:
            attempts += 1
            candidate = generate_shortcode(self.shortcode_length)
            if candidate not in self._records:
                return candidate
            logger.debug('Generated shortcode collided. Retrying.', extra={'shortcode': candidate, 'attempt': attempts})
        raise ShortcodeSpaceExhaustedError(f'No free shortcode of length {self.shortcode_length} found after {attempts} attempts.')

    @write_locked
    @beartype
    def hit(self, shortcode: str, referrer: str = '', source_address: str = '') -> str:
        """Record one redirect and return the target URL

        The hit counter and the click list are updated in the same critical
        section, so `hits == len(clicks)` holds whenever the lock is free.

        Args:
            shortcode (str):
                The shortcode being visited.
            referrer (str):
                Referer header of the visitor, possibly empty.
            source_address (str):
                Visitor address; a trailing ':<port>' is ignored.

        Returns:
            str: target URL of the record.

        Raises:
            ShortURLNotFoundError:
                If the shortcode doesn't exist.
            ShortURLExpiredError:
                If now is strictly after the record's expiry.
        """
        record = self._records.get(shortcode)
        if record is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' doesn't exist.")

        now = self.clock()
        if now > record.expires_at:
            raise ShortURLExpiredError(f"Short URL with code '{shortcode}' expired at {record.expires_at.isoformat()}.")

        record.hits += 1
        record.clicks.append(ClickModel(timestamp=now, referrer=referrer, location=self.locate(source_address)))
        return record.target

    @read_locked
    @beartype
    def get(self, shortcode: str) -> ShortURLModel:
        """Retrieve a snapshot of a short URL, expired or not

        Raises:
            ShortURLNotFoundError: If the shortcode doesn't exist.

        Example:
            >>> dao.get('abc123')
            ShortURLModel(shortcode='abc123', target='https://example.com', ...)
        """
        record = self._records.get(shortcode)
        if record is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' doesn't exist.")
        return record.snapshot(shortcode)

    @read_locked
    def __len__(self) -> int:
        return len(self._records)
