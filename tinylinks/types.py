from typing import Any
from collections.abc import Callable

from botocore.client import BaseClient


# Type aliases for Python dictionaries
type HttpEvent = dict[str, Any]
type HttpResponse = dict[str, Any]
type AppConfig = dict[str, Any]

# Maps a client network address to a coarse, human-readable location
type Locator = Callable[[str], str]

# Type aliases for boto3 clients
type AppConfigDataClient = BaseClient
