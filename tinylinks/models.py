"""Immutable snapshots of registry records.

Classes:
    ClickModel:
        One observed redirect event (time, referrer, coarse location).
    ShortURLModel:
        A shortened URL mapping together with its hit analytics.

Example:
    >>> from datetime import datetime, timedelta, UTC
    >>> now = datetime.now(UTC)
    >>> url = ShortURLModel(
    ...     shortcode='abc123',
    ...     target='https://example.com/article/123',
    ...     created_at=now,
    ...     expires_at=now + timedelta(seconds=30),
    ... )
    >>> url.hits
    0
    >>> url.clicks
    ()
"""

from dataclasses import dataclass
from datetime import datetime


# fmt: off
@dataclass(frozen=True)
class ClickModel:
    timestamp: datetime             # Moment the redirect was served
    referrer: str = ''              # Referer header of the visitor, may be empty
    location: str = 'Unknown'       # Coarse location derived from the visitor's address


@dataclass(frozen=True)
class ShortURLModel:
    shortcode: str                          # Unique, case-sensitive short identifier
    target: str                             # Original long URL
    created_at: datetime                    # Creation moment
    expires_at: datetime                    # Redirects are refused strictly after this moment
    hits: int = 0                           # Number of served redirects
    clicks: tuple[ClickModel, ...] = ()     # Redirect events in chronological order

    def __post_init__(self) -> None:
        if self.expires_at <= self.created_at:
            raise ValueError(f'expires_at ({self.expires_at}) must be later than created_at ({self.created_at}).')
        if self.hits < 0:
            raise ValueError(f'hits must be a non-negative integer (given value: {self.hits}).')
# fmt: on
