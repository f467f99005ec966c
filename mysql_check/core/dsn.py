"""
Connection string handling.

The probe keeps its connection string in the compact
`user:password@tcp(host:port)/?timeout=5s` form and turns it into a
SQLAlchemy URL for the aiomysql driver only when a check runs.
"""

import re
import socket
from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qsl

from sqlalchemy.engine import URL

from mysql_check.core.config import Settings

DRIVER = "mysql+aiomysql"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3306

_DSN_RE = re.compile(
    r"^(?:(?P<credentials>.*)@)?"
    r"(?P<protocol>[a-z0-9]+)"
    r"(?:\((?P<address>[^)]*)\))?"
    r"/(?P<database>[^/?]*)"
    r"(?:\?(?P<params>.*))?$"
)

_DURATION_RE = re.compile(r"^(?P<value>\d+(?:\.\d*)?|\.\d+)(?P<unit>ns|us|µs|ms|s|m|h)$")

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


@dataclass(frozen=True)
class DataSource:
    url: URL
    connect_timeout: Optional[float] = None


def build_dsn(settings: Settings) -> str:
    """Render the connection string for the configured server"""
    return (
        f"{settings.mysql_user_password}@tcp({settings.mysql_address})"
        f"/?timeout={settings.mysql_timeout}s"
    )


def parse_duration(value: str) -> float:
    """Parse a duration such as `5s` or `500ms` into seconds"""
    match = _DURATION_RE.match(value)
    if not match:
        raise ValueError(f"invalid duration {value!r}")
    return float(match.group("value")) * _DURATION_UNITS[match.group("unit")]


def split_address(address: str, default_host: str, default_port: int) -> tuple[str, int]:
    """Split `host:port`, unwrapping `[ipv6]` hosts and resolving named ports"""
    if not address:
        return default_host, default_port

    host, sep, port = address.rpartition(":")
    if not sep or "]" in port:
        host, port = address, ""
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    if not port:
        return host or default_host, default_port
    if not port.isdigit():
        try:
            port = str(socket.getservbyname(port, "tcp"))
        except OSError as e:
            raise ValueError(f"unknown port in address {address!r}") from e
    if not 0 <= int(port) <= 65535:
        raise ValueError(f"invalid port in address {address!r}")
    return host or default_host, int(port)


def parse_dsn(dsn: str) -> DataSource:
    """
    Parse a connection string into a SQLAlchemy URL.

    Raises ValueError for anything the aiomysql driver could not use.
    """
    match = _DSN_RE.match(dsn)
    if not match:
        raise ValueError("invalid DSN: missing the slash separating the database name")

    protocol = match.group("protocol")
    if protocol != "tcp":
        raise ValueError(f"invalid DSN: unsupported protocol {protocol!r}")

    username, password = None, None
    credentials = match.group("credentials")
    if credentials:
        user, sep, secret = credentials.partition(":")
        username = user or None
        password = secret if sep else None

    host, port = split_address(match.group("address") or "", DEFAULT_HOST, DEFAULT_PORT)

    connect_timeout = None
    for key, value in parse_qsl(match.group("params") or "", keep_blank_values=True):
        if key == "timeout":
            connect_timeout = parse_duration(value)

    url = URL.create(
        DRIVER,
        username=username,
        password=password,
        host=host,
        port=port,
        database=match.group("database") or None,
    )
    return DataSource(url=url, connect_timeout=connect_timeout)
