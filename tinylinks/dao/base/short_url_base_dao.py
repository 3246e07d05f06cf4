"""Abstract base class for ShortURL data access objects (DAOs).

This class establishes a consistent contract for all ShortURL DAO implementations,
regardless of the underlying storage mechanism.

Responsibilities:
    - Provide an interface for creating, hitting and inspecting short URLs.
    - Standardize error handling across data store implementations.
    - Enforce a consistent API for use by request handlers.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from tinylinks.dao.memory import ShortURLMemoryDAO

        >>> dao = ShortURLMemoryDAO()

        >>> short_url = dao.create('https://example.com/blog/article-123', validity=60)
        >>> short_url.shortcode
        'a1B2c3'

        >>> dao.hit('a1B2c3', referrer='https://news.example.org', source_address='203.0.113.7')
        'https://example.com/blog/article-123'

        >>> dao.get('a1B2c3').hits
        1
"""

from abc import ABC, abstractmethod

from tinylinks.models import ShortURLModel


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Methods:
        create(target: str, validity: int = 0, shortcode: str | None = None) -> ShortURLModel:
            Store a new short URL, picking a free shortcode unless one is requested.
            Raises InvalidTargetURLError for malformed target URLs.
            Raises ShortURLAlreadyExistsError if the requested shortcode is taken.
            Raises ShortcodeSpaceExhaustedError if no free shortcode was found.

        hit(shortcode: str, referrer: str = '', source_address: str = '') -> str:
            Record a redirect and return the target URL.
            Raises ShortURLNotFoundError if the shortcode doesn't exist.
            Raises ShortURLExpiredError if the shortcode is past its validity window.

        get(shortcode: str) -> ShortURLModel:
            Return a snapshot of a short URL and its analytics, expired or not.
            Raises ShortURLNotFoundError if the shortcode doesn't exist.

    NOTE:
        - Expired mappings are never removed; they stop redirecting but keep
          their statistics.
    """

    @abstractmethod
    def create(self, target: str, validity: int = 0, shortcode: str | None = None) -> ShortURLModel:
        """Store a new short URL mapping.

        Args:
            target (str):
                Absolute http(s) URL to redirect to.
            validity (int):
                Seconds until the mapping expires. Values <= 0 select the default.
            shortcode (str | None):
                Desired shortcode. None or '' lets the data store pick one.

        Returns:
            ShortURLModel: snapshot of the stored mapping.

        Raises:
            InvalidTargetURLError:
                If target is not an absolute http(s) URL with a host.
            ShortURLAlreadyExistsError:
                If the desired shortcode already exists.
            ShortcodeSpaceExhaustedError:
                If no free shortcode could be generated.
        """
        pass

    @abstractmethod
    def hit(self, shortcode: str, referrer: str = '', source_address: str = '') -> str:
        """Record one redirect on a shortcode and return its target URL.

        Args:
            shortcode (str):
                The shortcode being visited.
            referrer (str):
                Referer header of the visitor, possibly empty.
            source_address (str):
                Network address of the visitor, possibly with a port suffix.

        Returns:
            str: the target URL to redirect to.

        Raises:
            ShortURLNotFoundError:
                If the shortcode doesn't exist.
            ShortURLExpiredError:
                If the current moment is strictly after the expiry.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str) -> ShortURLModel:
        """Retrieve an immutable snapshot of a short URL by its shortcode.

        Raises:
            ShortURLNotFoundError:
                If no short URL with the given shortcode exists.
        """
        pass
