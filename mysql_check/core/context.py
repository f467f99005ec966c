"""
Application context

Built once at startup and shared read-only by every request.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from mysql_check.core.config import Settings
from mysql_check.core.dsn import build_dsn
from mysql_check.core.logging import get_error_logger, get_info_logger


@dataclass(frozen=True)
class AppContext:
    debug: bool
    info_log: logging.Logger
    error_log: logging.Logger
    dsn: str


def build_context(
    settings: Settings,
    debug: bool = False,
    info_log: Optional[logging.Logger] = None,
    error_log: Optional[logging.Logger] = None,
) -> AppContext:
    return AppContext(
        debug=debug,
        info_log=info_log or get_info_logger(),
        error_log=error_log or get_error_logger(),
        dsn=build_dsn(settings),
    )


def get_context(request: Request) -> AppContext:
    """Dependency returning the context attached by create_app()"""
    return request.app.state.context
