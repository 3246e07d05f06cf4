"""Exceptions related to Data Access Objects (DAO) operations.

Each exception names one error kind of the shortcode registry. Request
handlers translate them into HTTP status codes.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    InvalidTargetURLError:
        Raised when the URL to shorten is not an absolute http(s) URL.

    InvalidValidityError:
        Raised when the validity window is too large to compute an expiry.

    ShortURLAlreadyExistsError:
        Raised when a requested shortcode is already taken.

    ShortURLNotFoundError:
        Raised when a shortcode is not present in the registry.

    ShortURLExpiredError:
        Raised when a shortcode is past its validity window.

    ShortcodeSpaceExhaustedError:
        Raised when no free shortcode was found within the attempt limit.

Example:
    >>> from tinylinks.dao.exceptions import ShortURLNotFoundError
    >>> raise ShortURLNotFoundError("Short URL with code 'abc123' doesn't exist.")
    Traceback (most recent call last):
        ...
    tinylinks.dao.exceptions.ShortURLNotFoundError: Short URL with code 'abc123' doesn't exist.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class InvalidTargetURLError(DAOError):
    """Exception raised when the target URL is malformed or not http(s)."""

    pass


class InvalidValidityError(DAOError):
    """Exception raised when a validity window pushes the expiry past the representable date range."""

    pass


class ShortURLAlreadyExistsError(DAOError):
    """Exception raised when attempting to insert a shortcode that already exists in the data store."""

    pass


class ShortURLNotFoundError(DAOError):
    """Exception raised when a shortcode is not found in the data store."""

    pass


class ShortURLExpiredError(DAOError):
    """Exception raised when a shortcode exists but its validity window has passed."""

    pass


class ShortcodeSpaceExhaustedError(DAOError):
    """Exception raised when shortcode generation keeps colliding past the attempt limit."""

    pass
