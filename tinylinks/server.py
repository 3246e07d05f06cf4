"""Flask application exposing the request handlers over HTTP.

Routes:
    POST /shorturls              -> handlers.shorten_url
    GET  /shorturls/<shortcode>  -> handlers.url_stats
    GET  /<shortcode>            -> handlers.redirect_url

Cross-cutting behavior:
    - OPTIONS on any path short-circuits with 200 and an empty body.
    - Every response carries permissive CORS headers.
    - Framework errors (unknown route, wrong method) use the JSON error body.
    - Every request is logged once with method, path, status and latency.

Each Flask request is translated into an API-Gateway-proxy-shaped event, so
handlers never touch Flask objects:

    {
        "httpMethod": "GET",
        "path": "/abc123",
        "headers": {"Referer": "...", "X-Forwarded-For": "..."},
        "pathParameters": {"shortcode": "abc123"},
        "body": "",
        "requestContext": {"identity": {"sourceIp": "127.0.0.1"}}
    }

Example:
    >>> from tinylinks.dao.memory import ShortURLMemoryDAO
    >>> app = create_app(dao=ShortURLMemoryDAO())
    >>> app.run(port=3001, threaded=True)
"""

import time
import logging

from flask import Flask, Response, current_app, g, request
from werkzeug.exceptions import HTTPException, MethodNotAllowed, NotFound

from tinylinks.types import AppConfig, HttpEvent, HttpResponse
from tinylinks.dao.base import ShortURLBaseDAO
from tinylinks.dao.memory import ShortURLMemoryDAO
from tinylinks.handlers import redirect_url, shorten_url, url_stats
from tinylinks.handlers.responses import CORS_HEADERS, error_response
from tinylinks.utils.config import load_config


logger = logging.getLogger(__name__)

DAO_EXTENSION = 'tinylinks.dao'


def build_event(shortcode: str | None = None) -> HttpEvent:
    """Translate the current Flask request into an HTTP event"""
    return {
        'httpMethod': request.method,
        'path': request.path,
        'headers': dict(request.headers),
        'pathParameters': {'shortcode': shortcode} if shortcode is not None else {},
        'body': request.get_data(as_text=True),
        'requestContext': {
            'domainName': request.host,
            'identity': {'sourceIp': request.remote_addr or ''},
        },
    }


def to_flask_response(response: HttpResponse) -> Response:
    return Response(
        response.get('body', ''),
        status=response['statusCode'],
        headers=response.get('headers', {}),
    )


def current_dao() -> ShortURLBaseDAO:
    return current_app.extensions[DAO_EXTENSION]


def create_app(dao: ShortURLBaseDAO | None = None, config: AppConfig | None = None) -> Flask:
    """Create the Flask application around a shortcode registry

    Args:
        dao (ShortURLBaseDAO | None):
            Registry shared by all request threads. Built from `config` when omitted.
        config (dict | None):
            Application configuration. Loaded via `load_config()` when both
            `dao` and `config` are omitted.

    Returns:
        Flask: the WSGI application.
    """
    if dao is None:
        config = config if config is not None else load_config()
        dao = ShortURLMemoryDAO(**config['registry'])

    app = Flask(__name__)
    app.extensions[DAO_EXTENSION] = dao

    @app.before_request
    def _start_request():
        g.started_at = time.perf_counter()
        if request.method == 'OPTIONS':
            return Response(status=200)
        return None

    @app.after_request
    def _finish_request(response: Response) -> Response:
        for header, value in CORS_HEADERS.items():
            response.headers.setdefault(header, value)

        started_at = g.get('started_at')
        latency_ms = round((time.perf_counter() - started_at) * 1000, 3) if started_at is not None else None
        logger.info(
            'Handled request.',
            extra={
                'method': request.method,
                'path': request.path,
                'status': response.status_code,
                'latency_ms': latency_ms,
            },
        )
        return response

    @app.errorhandler(HTTPException)
    def _http_error(error: HTTPException) -> Response:
        error_code = error.name.upper().replace(' ', '_')
        return to_flask_response(error_response(error.code or 500, error.name, error_code=error_code))

    @app.post('/shorturls')
    def create_short_url() -> Response:
        return to_flask_response(shorten_url.handler(build_event(), current_dao()))

    @app.get('/shorturls/<path:shortcode>')
    def short_url_stats(shortcode: str) -> Response:
        return to_flask_response(url_stats.handler(build_event(shortcode), current_dao()))

    @app.get('/<path:shortcode>')
    def redirect_short_url(shortcode: str) -> Response:
        # Paths under /shorturls belong to the API, never to a shortcode
        if shortcode == 'shorturls':
            raise MethodNotAllowed(valid_methods=['POST', 'OPTIONS'])
        if shortcode.startswith('shorturls'):
            raise NotFound()
        return to_flask_response(redirect_url.handler(build_event(shortcode), current_dao()))

    return app
