"""Runtime utilities

Functions:
    running_locally() -> bool:
        True if the service runs on a developer machine, False otherwise.

Example:
    >>> from tinylinks.utils.runtime import running_locally
    >>> os.environ['APP_ENV'] = 'local'
    >>> running_locally()
    True
    >>> os.environ['APP_ENV'] = 'dev'
    >>> running_locally()
    False
"""

import os

from tinylinks.constants import ENV


def running_locally() -> bool:
    """Return True if APP_ENV is 'local' (the default), False otherwise."""
    return os.getenv(ENV.App.APP_ENV, 'local').lower() == 'local'
