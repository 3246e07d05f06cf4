import logging

from tinylinks.types import HttpEvent, HttpResponse
from tinylinks.dao.base import ShortURLBaseDAO
from tinylinks.dao.exceptions import ShortURLNotFoundError, ShortURLExpiredError
from tinylinks.utils.helpers import guarantee_500_response, get_header
from tinylinks.handlers.responses import response_302, response_400, response_404, response_410
from tinylinks.handlers.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    SHORT_URL_EXPIRED,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


def source_address(event: HttpEvent) -> str:
    """Return the visitor's address, preferring the first X-Forwarded-For entry"""
    forwarded_for = get_header(event, 'X-Forwarded-For')
    if forwarded_for:
        return forwarded_for.split(',')[0].strip()
    return event.get('requestContext', {}).get('identity', {}).get('sourceIp') or ''


@guarantee_500_response
def handler(event: HttpEvent, dao: ShortURLBaseDAO) -> HttpResponse:
    """Handle GET /{shortcode} requests

    This handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Extract referrer and visitor address from request headers
    - Step 3: Hit the link (via DAO), recording the click
    - Step 4: Redirect client to target URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: target URL destination
        400: Bad client request
            message: missing shortcode in path parameters
        404: Not found
            message: shortcode doesn't exist
        410: Gone
            message: shortcode is past its validity window

    Example:
        >>> event = {'pathParameters': {'shortcode': 'abc123'}}
        >>> response = handler(event, dao)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)

    # 2- Extract click analytics from the request
    referrer = get_header(event, 'Referer') or ''
    address = source_address(event)

    # 3- Hit the link
    try:
        target_url = dao.hit(shortcode, referrer=referrer, source_address=address)
    except ShortURLNotFoundError:
        logger.info(
            'Short URL record not found. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_404(message=f"shortcode '{shortcode}' doesn't exist", error_code=SHORT_URL_NOT_FOUND)
    except ShortURLExpiredError:
        logger.info(
            'Short URL record expired. Responding with 410.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_EXPIRED},
        )
        return response_410(message=f"shortcode '{shortcode}' has expired", error_code=SHORT_URL_EXPIRED)

    # 4- Redirect client to target URL
    logger.info(
        'Redirecting client to target URL. Responding with 302.',
        extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS},
    )
    return response_302(location=target_url)
