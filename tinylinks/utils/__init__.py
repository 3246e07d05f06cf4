from tinylinks.utils.config import app_env, app_name, project_root, load_config
from tinylinks.utils.helpers import isoformat_utc, get_header, require_environment, guarantee_500_response
from tinylinks.utils.location import strip_port, coarse_location
from tinylinks.utils.shortener import generate_shortcode
from tinylinks.utils.validation import is_valid_url
from tinylinks.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'app_env',
    'app_name',
    'project_root',
    'load_config',
    'isoformat_utc',
    'get_header',
    'require_environment',
    'guarantee_500_response',
    'strip_port',
    'coarse_location',
    'is_valid_url',
    'initialize_logging',
]
