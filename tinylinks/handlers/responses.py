"""HTTP response builders shared by request handlers.

Every response is an API-Gateway-proxy-shaped dict:

    {'statusCode': int, 'headers': dict[str, str], 'body': str}
"""

import json
from typing import Any

from tinylinks.types import HttpResponse


CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'GET, POST, OPTIONS',
    'Access-Control-Allow-Headers': 'Content-Type',
}


def json_response(status: int, body: dict[str, Any], headers: dict[str, str] | None = None) -> HttpResponse:
    return {
        'statusCode': status,
        'headers': {
            'Content-Type': 'application/json',
            **CORS_HEADERS,
            **(headers or {}),
        },
        'body': json.dumps(body),
    }


def error_response(status: int, base: str, message: str | None = None, error_code: str | None = None) -> HttpResponse:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return json_response(status, body)


def response_200(body: dict[str, Any]) -> HttpResponse:
    return json_response(200, body)


def response_302(*, location: str) -> HttpResponse:
    return json_response(302, {}, headers={'Location': location})


def response_400(message: str | None = None, error_code: str | None = None) -> HttpResponse:
    return error_response(400, 'Bad Request', message, error_code)


def response_404(message: str | None = None, error_code: str | None = None) -> HttpResponse:
    return error_response(404, 'Not Found', message, error_code)


def response_409(message: str | None = None, error_code: str | None = None) -> HttpResponse:
    return error_response(409, 'Conflict', message, error_code)


def response_410(message: str | None = None, error_code: str | None = None) -> HttpResponse:
    return error_response(410, 'Gone', message, error_code)


def response_503(message: str | None = None, error_code: str | None = None) -> HttpResponse:
    return error_response(503, 'Service Unavailable', message, error_code)
