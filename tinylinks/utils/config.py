"""Utility functions for application configuration management.

Configuration is a small JSON/YAML document with two sections:

    {
        "registry": {
            "shortcode_length": 6,
            "default_validity": 30,
            "max_attempts": null
        },
        "server": {
            "host": "0.0.0.0",
            "port": 3001
        }
    }

Where the document comes from depends on the application environment:

    - local (`APP_ENV=local`, the default): a YAML file pointed to by
      `CONFIG_FILE`, falling back to `<PROJECT_ROOT>/config/<APP_ENV>.yml`.
      A missing file means "use the defaults".
    - anything else: a configuration profile deployed to **AWS AppConfig**,
      identified by `APPCONFIG_APP_ID`, `APPCONFIG_ENV_ID` and
      `APPCONFIG_PROFILE_ID`.

Whatever the source, the document is merged over DEFAULT_CONFIG and
validated, so callers always receive every key.

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    project_root() -> Path
        Return the project root directory, using `PROJECT_ROOT` when available.

    load_config() -> dict
        Load, merge and validate the application configuration.

Example:
    >>> from tinylinks.utils.config import load_config
    >>> config = load_config()
    >>> config['registry']['default_validity']
    30
"""

import os
import copy
import json
import functools
import logging
from pathlib import Path
from typing import Any
from collections.abc import Callable

import boto3
import yaml

from tinylinks.types import AppConfig, AppConfigDataClient
from tinylinks.constants import ENV, Defaults
from tinylinks.exceptions import BadConfigurationError
from tinylinks.utils.helpers import require_environment
from tinylinks.utils.runtime import running_locally


logger = logging.getLogger(__name__)


DEFAULT_CONFIG: AppConfig = {
    'registry': {
        'shortcode_length': Defaults.SHORTCODE_LENGTH,
        'default_validity': Defaults.VALIDITY_SECONDS,
        'max_attempts': None,
    },
    'server': {
        'host': Defaults.HOST,
        'port': Defaults.PORT,
    },
}

# key -> (accepted types, nullable)
_SCHEMA: dict[str, dict[str, tuple[type, bool]]] = {
    'registry': {
        'shortcode_length': (int, False),
        'default_validity': (int, False),
        'max_attempts': (int, True),
    },
    'server': {
        'host': (str, False),
        'port': (int, False),
    },
}


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def project_root() -> Path:
    """Return PROJECT_ROOT, falling back to the current working directory."""
    return Path(os.environ.get(ENV.App.PROJECT_ROOT, os.getcwd()))


def _config_file() -> Path:
    explicit = os.environ.get(ENV.App.CONFIG_FILE)
    if explicit:
        return Path(explicit)
    return project_root() / 'config' / f'{app_env()}.yml'


def _load_local_config(func: Callable[[], dict]) -> Callable[[], dict]:
    """Decorator: read the configuration from a local YAML file when running locally

    Behavior:
        - If the application is not running locally, call the wrapped function
          (which pulls from AWS AppConfig via boto3).
        - Else, parse the YAML file from `_config_file()`. A missing file yields
          an empty document, so every key falls back to its default.
    """

    @functools.wraps(func)
    def wrapper() -> dict:
        if not running_locally():
            return func()

        path = _config_file()
        if not path.is_file():
            logger.debug('No local configuration file found. Using defaults.', extra={'configFile': str(path)})
            return {}

        logger.debug('Loading configuration from local file.', extra={'configFile': str(path)})
        with path.open(encoding='utf-8') as fp:
            try:
                document = yaml.safe_load(fp)
            except yaml.YAMLError as e:
                raise BadConfigurationError(f'Malformed YAML in {path}') from e
        return document or {}

    return wrapper


@_load_local_config
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def _fetch_config() -> dict:
    """Fetch the raw configuration document from AWS AppConfig

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.')

    appconfig: AppConfigDataClient = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    try:
        document = json.loads(content.decode('utf-8'))
    except json.JSONDecodeError as e:
        raise BadConfigurationError('AppConfig returned a malformed JSON document') from e

    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'build': document.get('build')})
    return document


def _merge_and_validate(document: Any) -> AppConfig:
    if not isinstance(document, dict):
        raise BadConfigurationError(f'Configuration must be a mapping (given type: {type(document)}).')

    config = copy.deepcopy(DEFAULT_CONFIG)
    for section, values in document.items():
        if section == 'build':
            continue
        if section not in _SCHEMA:
            raise BadConfigurationError(f"Unknown configuration section '{section}'.")
        if not isinstance(values, dict):
            raise BadConfigurationError(f"Configuration section '{section}' must be a mapping.")

        for key, value in values.items():
            if key not in _SCHEMA[section]:
                raise BadConfigurationError(f"Unknown configuration key '{section}.{key}'.")
            expected, nullable = _SCHEMA[section][key]
            if value is None and nullable:
                pass
            elif not isinstance(value, expected) or isinstance(value, bool):
                raise BadConfigurationError(f"Configuration key '{section}.{key}' must be of type {expected.__name__} (given value: {value!r}).")
            config[section][key] = value

    return config


def load_config() -> AppConfig:
    """Load the application configuration

    Returns:
        dict: DEFAULT_CONFIG overridden by the environment's configuration document.

    Raises:
        MissingEnvironmentVariableError:
            If not running locally and AppConfig identifiers are missing.
        BadConfigurationError:
            If the document is malformed or contains unknown/mistyped keys.
    """
    return _merge_and_validate(_fetch_config())
