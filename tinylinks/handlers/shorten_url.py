import json
import logging

from tinylinks.types import HttpEvent, HttpResponse
from tinylinks.dao.base import ShortURLBaseDAO
from tinylinks.dao.exceptions import (
    InvalidTargetURLError,
    InvalidValidityError,
    ShortURLAlreadyExistsError,
    ShortcodeSpaceExhaustedError,
)
from tinylinks.utils.helpers import guarantee_500_response, isoformat_utc
from tinylinks.utils.validation import is_valid_url
from tinylinks.handlers.responses import response_200, response_400, response_409, response_503
from tinylinks.handlers.constants import (
    INVALID_JSON_BODY,
    MISSING_TARGET_URL,
    INVALID_TARGET_URL,
    INVALID_VALIDITY,
    INVALID_SHORTCODE,
    SHORTCODE_TAKEN,
    SHORTCODE_SPACE_EXHAUSTED,
    SHORTEN_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def handler(event: HttpEvent, dao: ShortURLBaseDAO) -> HttpResponse:
    """Handle POST /shorturls requests

    This handler follows this procedure to shorten URLs:
    - Step 1: Parse the JSON request body
    - Step 2: Validate the target URL
    - Step 3: Validate the optional validity window and shortcode
    - Step 4: Store the short URL (via DAO)
    - Step 5: Respond to user with 200 success

    HTTP responses:
        200: Successful URL shortening
            shortcode: chosen or generated shortcode
            expiry: ISO-8601 UTC expiry of the short URL
        400: Bad client request
            message: invalid JSON, missing/invalid url, validity or shortcode
        409: Conflict
            message: requested shortcode is already taken
        503: Service unavailable
            message: no free shortcode could be generated

    Args:
        event (dict):
            HTTP event with a JSON `body`: {"url": str, "validity": int?, "shortcode": str?}
        dao (ShortURLBaseDAO):
            Shared shortcode registry.

    Returns:
        dict: response with statusCode, headers and body.

    Example:
        >>> event = {'body': '{"url": "https://example.com", "validity": 60}'}
        >>> response = handler(event, dao)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])
        {'shortcode': 'Xk29aQ', 'expiry': '2025-10-15T12:01:00Z'}
    """
    # 1- Parse request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Request body is not valid JSON. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)
    if request_body is None:
        request_body = {}
    if not isinstance(request_body, dict):
        logger.info('Request body is not a JSON object. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='JSON body must be an object', error_code=INVALID_JSON_BODY)

    # 2- Validate target URL
    target_url = request_body.get('url')
    if not target_url:
        logger.info('Missing "url" in request body. Responding with 400.', extra={'event': MISSING_TARGET_URL})
        return response_400(message="missing 'url' in JSON body", error_code=MISSING_TARGET_URL)
    if not isinstance(target_url, str) or not is_valid_url(target_url):
        logger.info('Invalid target URL. Responding with 400.', extra={'event': INVALID_TARGET_URL})
        return response_400(message='invalid URL format', error_code=INVALID_TARGET_URL)

    # 3- Validate optional fields
    validity = request_body.get('validity')
    if validity is None:
        validity = 0
    elif not isinstance(validity, int) or isinstance(validity, bool):
        logger.info('Invalid "validity" in request body. Responding with 400.', extra={'event': INVALID_VALIDITY})
        return response_400(message="'validity' must be an integer number of seconds", error_code=INVALID_VALIDITY)

    shortcode = request_body.get('shortcode')
    if shortcode is not None and not isinstance(shortcode, str):
        logger.info('Invalid "shortcode" in request body. Responding with 400.', extra={'event': INVALID_SHORTCODE})
        return response_400(message="'shortcode' must be a string", error_code=INVALID_SHORTCODE)

    # 4- Store the short URL
    try:
        short_url = dao.create(target_url, validity=validity, shortcode=shortcode or None)
    except InvalidTargetURLError:
        logger.info('Registry rejected target URL. Responding with 400.', extra={'event': INVALID_TARGET_URL})
        return response_400(message='invalid URL format', error_code=INVALID_TARGET_URL)
    except InvalidValidityError:
        logger.info('Registry rejected "validity". Responding with 400.', extra={'validity': validity, 'event': INVALID_VALIDITY})
        return response_400(message="'validity' is out of range", error_code=INVALID_VALIDITY)
    except ShortURLAlreadyExistsError:
        logger.info(
            'Requested shortcode already exists. Responding with 409.',
            extra={'shortcode': shortcode, 'event': SHORTCODE_TAKEN},
        )
        return response_409(message=f"shortcode '{shortcode}' already exists", error_code=SHORTCODE_TAKEN)
    except ShortcodeSpaceExhaustedError:
        logger.warning('Could not generate a free shortcode. Responding with 503.', extra={'event': SHORTCODE_SPACE_EXHAUSTED})
        return response_503(message='could not generate a free shortcode', error_code=SHORTCODE_SPACE_EXHAUSTED)

    # 5- Return successful response to user
    logger.info(
        'Shortened URL. Responding with 200.',
        extra={'shortcode': short_url.shortcode, 'event': SHORTEN_SUCCESS},
    )
    return response_200(
        {
            'shortcode': short_url.shortcode,
            'expiry': isoformat_utc(short_url.expires_at),
        }
    )
