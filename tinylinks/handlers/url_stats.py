import logging
from typing import Any

from tinylinks.types import HttpEvent, HttpResponse
from tinylinks.models import ShortURLModel
from tinylinks.dao.base import ShortURLBaseDAO
from tinylinks.dao.exceptions import ShortURLNotFoundError
from tinylinks.utils.helpers import guarantee_500_response, isoformat_utc
from tinylinks.handlers.responses import response_200, response_400, response_404
from tinylinks.handlers.constants import MISSING_SHORTCODE, SHORT_URL_NOT_FOUND, STATS_SUCCESS


logger = logging.getLogger(__name__)


def serialize_stats(short_url: ShortURLModel) -> dict[str, Any]:
    return {
        'url': short_url.target,
        'created_at': isoformat_utc(short_url.created_at),
        'expiry': isoformat_utc(short_url.expires_at),
        'hits': short_url.hits,
        'clicks': [
            {
                'timestamp': isoformat_utc(click.timestamp, timespec='milliseconds'),
                'referrer': click.referrer,
                'location': click.location,
            }
            for click in short_url.clicks
        ],
    }


@guarantee_500_response
def handler(event: HttpEvent, dao: ShortURLBaseDAO) -> HttpResponse:
    """Handle GET /shorturls/{shortcode} requests

    Statistics stay available after a short URL expires.

    HTTP responses:
        200: Statistics
            url, created_at, expiry, hits, clicks: [{timestamp, referrer, location}]
        400: Bad client request
            message: missing shortcode in path parameters
        404: Not found
            message: shortcode doesn't exist
    """
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)

    try:
        short_url = dao.get(shortcode)
    except ShortURLNotFoundError:
        logger.info(
            'Short URL record not found. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_404(message=f"shortcode '{shortcode}' doesn't exist", error_code=SHORT_URL_NOT_FOUND)

    logger.debug('Serving statistics.', extra={'shortcode': shortcode, 'event': STATS_SUCCESS, 'hits': short_url.hits})
    return response_200(serialize_stats(short_url))
