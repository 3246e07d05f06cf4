"""Run the URL-shortening service

Usage:
    python -m tinylinks [--host HOST] [--port PORT]

Host and port default to the `server` section of the configuration
(see tinylinks.utils.config).
"""

import argparse
import logging

from tinylinks.dao.memory import ShortURLMemoryDAO
from tinylinks.server import create_app
from tinylinks.utils.config import load_config, app_env
from tinylinks.utils.logging import initialize_logging


logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog='tinylinks', description='In-memory URL-shortening service.')
    parser.add_argument('--host', default=None, help='interface to bind (default: server.host from config)')
    parser.add_argument('--port', type=int, default=None, help='port to listen on (default: server.port from config)')
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    initialize_logging()
    args = parse_args(argv)

    config = load_config()
    host = args.host if args.host is not None else config['server']['host']
    port = args.port if args.port is not None else config['server']['port']

    # One registry per process, shared by every request thread
    dao = ShortURLMemoryDAO(**config['registry'])
    app = create_app(dao=dao)

    logger.info('Starting server.', extra={'host': host, 'port': port, 'appEnv': app_env()})
    app.run(host=host, port=port, threaded=True)


if __name__ == '__main__':
    main()
