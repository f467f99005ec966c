"""
mysql-check Core Configuration

Settings are read from a YAML file given on the command line.
Fields missing from the file may come from MYSQL_CHECK_* environment variables.
"""

from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mysql_check.core.errors import ConfigError, ConfigReadError

DEFAULT_CONFIG_PATH = "config.yml"


class Settings(BaseSettings):
    """Probe settings. Immutable once loaded."""

    model_config = SettingsConfigDict(
        env_prefix="MYSQL_CHECK_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Database
    mysql_address: str = ""
    mysql_timeout: str = ""
    mysql_user_password: str = ""

    # HTTP listener
    http_address: str = ""

    @field_validator(
        "mysql_address",
        "mysql_timeout",
        "mysql_user_password",
        "http_address",
        mode="before",
    )
    @classmethod
    def coerce_scalar(cls, v: Any) -> Any:
        """Accept plain YAML scalars (`mysql_timeout: 5`) as their string form"""
        if v is None:
            return ""
        if isinstance(v, (bool, int, float)):
            return str(v)
        return v


def load_config(path: Union[str, Path]) -> Settings:
    """
    Read and parse the YAML config file.

    Raises ConfigReadError when the file can't be read, ConfigError when it
    can't be parsed.
    Nothing else is validated: bad values show up later as failed checks.
    """
    try:
        raw_config = Path(path).read_bytes()
    except OSError as e:
        raise ConfigReadError(f"cannot read config {path}: {e}") from e

    try:
        data = yaml.safe_load(raw_config)
    except yaml.YAMLError as e:
        raise ConfigError(f"cannot parse config {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"cannot parse config {path}: expected a mapping")

    try:
        return Settings(**{str(k): v for k, v in data.items()})
    except ValidationError as e:
        raise ConfigError(f"cannot parse config {path}: {e}") from e
