"""Helper utilities for request handlers.

Functions:
    isoformat_utc(dt: datetime, timespec: str = 'seconds') -> str
        Render a datetime as ISO-8601 UTC with a trailing 'Z'
    get_header(event: HttpEvent, name: str) -> str | None
        Case-insensitive header lookup in an HTTP event
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(handler: Callable) -> Callable
        Decorator: Turn unexpected handler errors into a 500 response

Example:
    >>> from datetime import datetime, UTC
    >>> isoformat_utc(datetime(2025, 10, 15, 12, 0, tzinfo=UTC))
    '2025-10-15T12:00:00Z'

    >>> get_header({'headers': {'x-forwarded-for': '10.0.0.1'}}, 'X-Forwarded-For')
    '10.0.0.1'
"""

import os
import json
import logging
import functools
from datetime import datetime, UTC
from collections.abc import Callable

from tinylinks.types import HttpEvent, HttpResponse
from tinylinks.constants import UNKNOWN_INTERNAL_SERVER_ERROR
from tinylinks.exceptions import MissingEnvironmentVariableError
from tinylinks.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def isoformat_utc(dt: datetime, timespec: str = 'seconds') -> str:
    """Render a timezone-aware datetime as ISO-8601 in UTC

    Args:
        dt (datetime): moment to render
        timespec (str): precision passed to datetime.isoformat()

    Returns:
        str: e.g. '2025-10-15T12:00:00Z' or '2025-10-15T12:00:00.123Z'
    """
    return dt.astimezone(UTC).isoformat(timespec=timespec).replace('+00:00', 'Z')


def get_header(event: HttpEvent, name: str) -> str | None:
    """Look up a request header by name, ignoring case

    Args:
        event (dict): HTTP event passed to a request handler
        name (str): header name, e.g. 'Referer'

    Returns:
        str | None: header value, None if the header is absent
    """
    headers = event.get('headers') or {}
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable[..., HttpResponse]) -> Callable[..., HttpResponse]:
    """Decorator: respond with HTTP 500 instead of leaking unexpected errors

    When running locally the exception is re-raised so it surfaces in the
    developer's console.
    """

    @functools.wraps(handler)
    def wrapper(*args, **kwargs) -> HttpResponse:
        try:
            return handler(*args, **kwargs)
        except Exception:
            if running_locally():
                raise
            logger.exception('Unhandled error in request handler. Responding with 500.', extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR})
            return {
                'statusCode': 500,
                'headers': {'Content-Type': 'application/json'},
                'body': json.dumps(
                    {
                        'message': 'Internal Server Error',
                        'errorCode': UNKNOWN_INTERNAL_SERVER_ERROR,
                    }
                ),
            }

    return wrapper
