"""Configuration loading for the pivnet client."""

from __future__ import annotations

import argparse
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping, Optional

from . import __version__


CONFIG_ENV_PREFIX = "PIVNET_"
DEFAULT_HOST = "https://network.pivotal.io"
DEFAULT_USER_AGENT = f"pivnet-cli/{__version__}"
OUTPUT_FORMATS = ("text", "json", "yaml")
LOG_FORMATS = ("plain", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ClientConfig:
    """Connection and presentation settings for the API client."""

    host: str = DEFAULT_HOST
    api_token: Optional[str] = None
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = 30.0
    output_format: str = "text"
    log_level: str = "WARNING"
    log_format: str = "plain"

    def __post_init__(self) -> None:
        _validate_config(self)

    def logging_dict(self) -> Dict[str, Any]:
        """Return a sanitized mapping suitable for structured logging."""

        return {
            "host": self.host,
            "api_token": "***REDACTED***" if self.api_token else None,
            "user_agent": self.user_agent,
            "timeout": self.timeout,
            "output_format": self.output_format,
            "log_level": self.log_level,
            "log_format": self.log_format,
        }


def _validate_config(config: ClientConfig) -> None:
    if not config.host.startswith(("http://", "https://")):
        raise ValueError(f"host must start with http:// or https://; got {config.host}.")
    _validate_range("timeout", config.timeout, 0.1, 600.0)
    _validate_choice("output_format", config.output_format, OUTPUT_FORMATS)
    _validate_choice("log_format", config.log_format, LOG_FORMATS)
    _validate_choice("log_level", config.log_level.upper(), LOG_LEVELS)


def _validate_range(name: str, value: float, minimum: float, maximum: float) -> None:
    if value < minimum or value > maximum:
        raise ValueError(f"{name} must be between {minimum} and {maximum}; got {value}.")


def _validate_choice(name: str, value: str, allowed: tuple[str, ...]) -> None:
    if value not in allowed:
        raise ValueError(f"{name} must be one of {list(allowed)}; got {value}.")


def _load_file_config(path: Optional[Path]) -> Dict[str, Any]:
    if path is None:
        return {}
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("rb") as f:
        parsed = tomllib.load(f)
    if not isinstance(parsed, Mapping):
        raise ValueError("Configuration file must contain a TOML table.")
    return {k.replace("-", "_"): v for k, v in parsed.items()}


def _load_env_config(prefix: str) -> Dict[str, Any]:
    mapping: Dict[str, Any] = {}
    for field in ClientConfig.__dataclass_fields__:
        env_key = f"{prefix}{field}".upper()
        if env_key in os.environ:
            mapping[field] = os.environ[env_key]
    return mapping


def _cli_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    return {
        field: getattr(args, field)
        for field in ClientConfig.__dataclass_fields__
        if getattr(args, field, None) is not None
    }


def _apply_mapping(config: ClientConfig, overrides: Mapping[str, Any]) -> ClientConfig:
    data: MutableMapping[str, Any] = {}
    for key, value in overrides.items():
        if value is None:
            continue
        if key not in ClientConfig.__dataclass_fields__:
            raise ValueError(f"Unknown configuration key: {key}")
        if key == "timeout":
            data[key] = float(value)
        elif key == "log_level":
            data[key] = str(value).upper()
        elif key in {"output_format", "log_format"}:
            data[key] = str(value).lower()
        elif key == "host":
            data[key] = str(value).rstrip("/")
        else:
            data[key] = str(value)
    return replace(config, **data)


def _coerce_path(value: Any) -> Optional[Path]:
    if value is None or value == "":
        return None
    return value if isinstance(value, Path) else Path(str(value)).expanduser()


def load_config(args: argparse.Namespace) -> ClientConfig:
    """Load configuration from defaults, file, env, and CLI (in that order)."""

    file_config = _load_file_config(
        _coerce_path(getattr(args, "config", None))
        or _coerce_path(os.environ.get(f"{CONFIG_ENV_PREFIX}CONFIG"))
    )
    env_config = _load_env_config(CONFIG_ENV_PREFIX)
    cli_config = _cli_overrides(args)

    config = ClientConfig()
    config = _apply_mapping(config, file_config)
    config = _apply_mapping(config, env_config)
    config = _apply_mapping(config, cli_config)
    return config
