"""Configuration models and loader for json-fastpath.

Supports two config sources:

1. An explicit file: a TOML file (flat, or with a ``[tool.json_fastpath]``
   table) or a YAML mapping. ``JSON_FASTPATH_CONFIG_PATH`` points at one too.
2. ``pyproject.toml [tool.json_fastpath]``, discovered in the working
   directory or its parents.

Environment variables override file values:

- ``JSON_FASTPATH_STRICT``: reserved strict flag (true/false)
- ``JSON_FASTPATH_MAX_DEPTH``: deepest nesting the validator walks
- ``JSON_FASTPATH_LOG_LEVEL``: log level
- ``JSON_FASTPATH_LOG_FORMAT``: log format (console, json, structured, rich)

Examples
--------
TOML configuration:

```toml
[tool.json_fastpath]
strict = false
max_depth = 200
hook_names = ["__json__", "toJSON"]

[tool.json_fastpath.logging]
level = "DEBUG"
format = "rich"
```
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from json_fastpath.exceptions import ConfigurationError
from json_fastpath.logging import get_logger
from json_fastpath.shapes import DEFAULT_HOOK_NAMES

logger = get_logger(__name__)

_TOOL_KEY = "json_fastpath"
_ENV_PREFIX = "JSON_FASTPATH_"

# One validator frame per nesting level, under the default recursion limit of 1000
MAX_DEPTH_LIMIT = 700

# Constants for boolean environment variable parsing
_TRUTHY_VALUES = frozenset({"true", "1", "yes", "on", "enabled"})
_FALSY_VALUES = frozenset({"false", "0", "no", "off", "disabled"})


class LoggingConfig(BaseModel):
    """Logging section, passed through to ``configure_logging``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "structured", "rich"] = "structured"
    output_file: str | None = None
    use_color: bool = True
    include_timestamp: bool = True


class FastPathConfig(BaseModel):
    """Validator configuration.

    Attributes
    ----------
    strict : bool, default=False
        Reserved for stricter rule tiers. Accepted and exposed, but no rule
        reads it yet.
    max_depth : int, default=500
        Deepest nesting the validator walks before raising
        ``DepthExceededError``. At most ``MAX_DEPTH_LIMIT``, which keeps the
        recursive walk below the default interpreter recursion limit.
    hook_names : tuple[str, ...]
        Method names treated as custom serialization hooks, both by the
        detector rules and by the encoder.
    logging : LoggingConfig
        Logging settings for the CLI.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    strict: bool = False
    max_depth: int = Field(default=500, gt=0, le=MAX_DEPTH_LIMIT)
    hook_names: tuple[str, ...] = Field(default=DEFAULT_HOOK_NAMES, min_length=1)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("hook_names")
    @classmethod
    def _hook_names_are_identifiers(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for name in value:
            if not name.isidentifier():
                raise ValueError(f"hook name {name!r} is not a valid identifier")
        return value


def _parse_bool_env(value: str) -> bool:
    """Parse boolean from environment variable value.

    Raises
    ------
    ValueError
        If value is not a recognized boolean string
    """
    normalized = value.lower().strip()
    if normalized in _TRUTHY_VALUES:
        return True
    if normalized in _FALSY_VALUES:
        return False
    expected = sorted(_TRUTHY_VALUES | _FALSY_VALUES)
    raise ValueError(f"Invalid boolean value: {value!r}. Expected one of: {expected}")


def _find_config_file(path: str | Path | None) -> Path | None:
    """Find a configuration file.

    Discovery order:
    1. Explicit path argument
    2. ``JSON_FASTPATH_CONFIG_PATH`` env var
    3. ``pyproject.toml`` with a ``[tool.json_fastpath]`` table in CWD or a parent
    """
    if path:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigurationError(str(config_path), "configuration file not found")
        return config_path

    if env_path := os.getenv(f"{_ENV_PREFIX}CONFIG_PATH"):
        config_path = Path(env_path)
        if config_path.exists():
            logger.debug("Using config from {}CONFIG_PATH: {}", _ENV_PREFIX, config_path)
            return config_path
        logger.warning("{}CONFIG_PATH set but file not found: {}", _ENV_PREFIX, config_path)

    current = Path.cwd()
    while True:
        pyproject = current / "pyproject.toml"
        if pyproject.exists():
            with pyproject.open("rb") as f:
                data = tomllib.load(f)
            if _TOOL_KEY in data.get("tool", {}):
                return pyproject
        if current == current.parent:
            return None
        current = current.parent


def _read_config_file(config_path: Path) -> dict[str, Any]:
    """Read the raw json-fastpath section of a TOML or YAML file."""
    logger.debug("Loading configuration from {path}", path=config_path)
    try:
        if config_path.suffix in (".yaml", ".yml"):
            with config_path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        else:
            with config_path.open("rb") as f:
                data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(str(config_path), str(e)) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            str(config_path), f"expected a mapping, got {type(data).__name__}"
        )

    section = data.get("tool", {}).get(_TOOL_KEY) if "tool" in data else None
    if section is None:
        if config_path.name == "pyproject.toml":
            logger.warning("No [tool.{}] section found in pyproject.toml, using defaults", _TOOL_KEY)
            return {}
        section = data
    if not isinstance(section, dict):
        raise ConfigurationError(_TOOL_KEY, "configuration section must be a mapping")
    return section


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``data`` with environment variable overrides applied."""
    data = dict(data)
    logging_data = dict(data.get("logging") or {})

    if env_strict := os.getenv(f"{_ENV_PREFIX}STRICT"):
        try:
            data["strict"] = _parse_bool_env(env_strict)
        except ValueError as e:
            raise ConfigurationError("strict", str(e)) from e

    if env_depth := os.getenv(f"{_ENV_PREFIX}MAX_DEPTH"):
        try:
            data["max_depth"] = int(env_depth)
        except ValueError as e:
            raise ConfigurationError("max_depth", f"not an integer: {env_depth!r}") from e

    if env_level := os.getenv(f"{_ENV_PREFIX}LOG_LEVEL"):
        logging_data["level"] = env_level.upper()
        logger.debug("Overriding log level from env: {}", logging_data["level"])

    if env_format := os.getenv(f"{_ENV_PREFIX}LOG_FORMAT"):
        logging_data["format"] = env_format.lower()
        logger.debug("Overriding log format from env: {}", logging_data["format"])

    if logging_data:
        data["logging"] = logging_data
    return data


def parse_config(data: dict[str, Any]) -> FastPathConfig:
    """Validate raw configuration data.

    Raises
    ------
    ConfigurationError
        If a value is out of range, of the wrong type, or unknown
    """
    try:
        return FastPathConfig.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or _TOOL_KEY
        raise ConfigurationError(location, first["msg"]) from e


def load_config(path: str | Path | None = None) -> FastPathConfig:
    """Load configuration from a file (or defaults) plus environment overrides.

    Parameters
    ----------
    path : str | Path | None
        Explicit config file. If None, uses the discovery order above.

    Returns
    -------
    FastPathConfig
        Validated configuration
    """
    config_path = _find_config_file(path)
    data = _read_config_file(config_path) if config_path else {}
    return parse_config(_apply_env_overrides(data))


def get_default_config() -> FastPathConfig:
    return FastPathConfig()
