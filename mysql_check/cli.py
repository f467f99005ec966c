"""
Command line entry point

Loads the config, builds the application and serves it with uvicorn.
"""

import argparse
import sys
from typing import Optional, Sequence

import uvicorn

from mysql_check.core.config import DEFAULT_CONFIG_PATH, load_config
from mysql_check.core.context import build_context
from mysql_check.core.dsn import split_address
from mysql_check.core.errors import ConfigError, ConfigReadError
from mysql_check.core.logging import get_error_logger, setup_logging
from mysql_check.main import create_app

LISTEN_ALL = "0.0.0.0"
DEFAULT_HTTP_PORT = 80


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mysql-check",
        description="HTTP health check for a MySQL node",
    )
    parser.add_argument("-c", dest="config", default=DEFAULT_CONFIG_PATH, help="path to the config")
    parser.add_argument("-d", dest="debug", action="store_true", help="debug messages")
    return parser


def parse_http_address(address: str) -> tuple[str, int]:
    """`:8080` listens on every interface, an empty address on port 80"""
    return split_address(address, LISTEN_ALL, DEFAULT_HTTP_PORT)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging()
    error_log = get_error_logger()

    try:
        settings = load_config(args.config)
    except ConfigError as e:
        if isinstance(e, ConfigReadError):
            parser.print_help(sys.stderr)
        error_log.error(str(e))
        return 0

    try:
        host, port = parse_http_address(settings.http_address)
    except ValueError as e:
        error_log.critical(f"cannot listen on {settings.http_address!r}: {e}")
        return 1

    app = create_app(build_context(settings, debug=args.debug))

    # uvicorn logs a failed bind itself and raises SystemExit(1)
    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level="info" if args.debug else "warning",
        access_log=args.debug,
    )
    return 0

