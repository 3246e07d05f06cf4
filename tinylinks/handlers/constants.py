# Outcome codes, attached to log records as `event` and to error bodies as `errorCode`

# shorten_url
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
MISSING_TARGET_URL = 'MISSING_TARGET_URL'
INVALID_TARGET_URL = 'INVALID_TARGET_URL'
INVALID_VALIDITY = 'INVALID_VALIDITY'
INVALID_SHORTCODE = 'INVALID_SHORTCODE'
SHORTCODE_TAKEN = 'SHORTCODE_TAKEN'
SHORTCODE_SPACE_EXHAUSTED = 'SHORTCODE_SPACE_EXHAUSTED'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'

# redirect_url & url_stats
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
SHORT_URL_EXPIRED = 'SHORT_URL_EXPIRED'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
STATS_SUCCESS = 'STATS_SUCCESS'
