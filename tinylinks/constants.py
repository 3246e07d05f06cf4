from enum import StrEnum


class Defaults:
    """Default registry and server settings."""

    VALIDITY_SECONDS = 30  # Applied when a client asks for validity <= 0
    SHORTCODE_LENGTH = 6  # 62**6 ~ 5.6e10 candidate codes
    HOST = '0.0.0.0'  # noqa: S104
    PORT = 3001


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        PROJECT_ROOT = 'PROJECT_ROOT'
        CONFIG_FILE = 'CONFIG_FILE'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
