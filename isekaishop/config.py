"""Application configuration loaded from YAML with environment overrides."""

import functools
import os
from dataclasses import dataclass, fields, is_dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, get_origin

import yaml

DEFAULT_CONFIG_PATH = Path("config") / "config.yaml"


class ConfigError(ValueError):
    """Raised when the configuration cannot be read or is invalid."""


@dataclass(frozen=True)
class DatabaseConfig:
    host: str
    port: int
    user: str
    password: str
    dbname: str
    sslmode: str
    schema: str


@dataclass(frozen=True)
class ServerConfig:
    port: int
    allow_origins: list[str]
    body_limit: str
    timeout: int  # seconds


@dataclass(frozen=True)
class EndpointConfig:
    auth_url: str
    token_url: str
    device_auth_url: str


@dataclass(frozen=True)
class OAuth2Config:
    player_redirect_url: str
    admin_redirect_url: str
    client_id: str
    client_secret: str
    endpoints: EndpointConfig
    scopes: list[str]
    user_info_url: str
    revoke_url: str


@dataclass(frozen=True)
class Config:
    database: DatabaseConfig
    server: ServerConfig
    oauth2: OAuth2Config


def _file_key(field_name: str) -> str:
    """The key used in the file: the field name in camel case."""
    first, *rest = field_name.split("_")
    return first + "".join(part.capitalize() for part in rest)


def _convert(raw: Any, kind: Any, name: str) -> Any:
    if raw is None or raw == "":
        raise ConfigError(f"{name} is required")
    if get_origin(kind) is list:
        if isinstance(raw, str):
            return raw.split()
        if isinstance(raw, (list, tuple)):
            return [str(item) for item in raw]
        raise ConfigError(f"{name} must be a list")
    if kind is int:
        if isinstance(raw, bool) or not isinstance(raw, (int, str)):
            raise ConfigError(f"{name} must be an integer")
        try:
            value = int(raw)
        except ValueError as exc:
            raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc
        if value == 0:
            raise ConfigError(f"{name} is required")
        return value
    if isinstance(raw, (Mapping, list, tuple)):
        raise ConfigError(f"{name} must be a string")
    return str(raw)


def _build(cls: type, data: Any, environ: Mapping[str, str], prefix: tuple) -> Any:
    data = data or {}
    if not isinstance(data, Mapping):
        raise ConfigError(f"{'.'.join(prefix) or 'config'} must be a mapping")
    section = {str(key).lower(): value for key, value in data.items()}
    values = {}
    for spec in fields(cls):
        key = _file_key(spec.name)
        path = (*prefix, key)
        raw = section.get(key.lower())
        if is_dataclass(spec.type):
            values[spec.name] = _build(spec.type, raw, environ, path)
        else:
            raw = environ.get("_".join(path).upper(), raw)
            values[spec.name] = _convert(raw, spec.type, ".".join(path))
    return cls(**values)


def load_config(path=DEFAULT_CONFIG_PATH, environ: Optional[Mapping[str, str]] = None) -> Config:
    """Read and validate the configuration file.

    Any setting may be overridden by an environment variable named after its
    dotted key, upper-cased with dots replaced by underscores
    (``database.host`` becomes ``DATABASE_HOST``).
    """
    if environ is None:
        environ = os.environ
    try:
        with open(path, encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"cannot load config file {os.fspath(path)!r}: {exc}") from exc
    return _build(Config, data, environ, ())


@functools.lru_cache(maxsize=None)
def get_config() -> Config:
    """Return the process-wide configuration, loading it on first use."""
    return load_config()