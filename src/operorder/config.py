"""
Calculator configuration.

Configuration is a frozen pydantic model. It can be built directly, loaded
from a YAML or JSON file, or assembled from environment variables:

    OPERORDER_CONFIG_FILE - Path to a .yaml/.yml/.json config file
    OPERORDER_MODE        - Converter mode (standard, single_pop)
    OPERORDER_TRACE       - Log the expression tree at DEBUG (true/false)

Environment values override values read from the config file.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError
from .limits import DEFAULT_EXPRESSION_LIMITS, ExpressionLimits
from .shunting_yard import ConverterMode

ENV_VAR_CONFIG_FILE = "OPERORDER_CONFIG_FILE"
ENV_VAR_MODE = "OPERORDER_MODE"
ENV_VAR_TRACE = "OPERORDER_TRACE"

_TRUTHY = ("1", "true", "yes", "on")

logger = logging.getLogger("operorder.config")


class CalculatorConfig(BaseModel):
    """Options for a single calculation."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    # Shunting-yard mode; single_pop reproduces the original calculator
    mode: ConverterMode = "standard"

    # Log the postfix sequence and the rendered tree at DEBUG
    trace: bool = False

    expression_limits: ExpressionLimits = Field(
        default=DEFAULT_EXPRESSION_LIMITS, alias="expressionLimits"
    )


DEFAULT_CALCULATOR_CONFIG = CalculatorConfig()


def _parse_json(content: str) -> dict[str, Any]:
    """Parse JSON content as a config object."""
    parsed = json.loads(content)
    if not isinstance(parsed, dict):
        raise ConfigurationError("Parsed JSON config must be an object")
    return parsed


def _parse_yaml(content: str) -> dict[str, Any]:
    """Parse YAML content as a config object."""
    parsed = yaml.safe_load(content or "")
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ConfigurationError("Parsed YAML config must be an object")
    return parsed


def _validate(data: Mapping[str, Any], origin: str) -> CalculatorConfig:
    try:
        return CalculatorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid calculator config from {origin}: {e}") from e


def load_config(path: str | Path) -> CalculatorConfig:
    """
    Loads a calculator config from a YAML or JSON file.

    Raises:
        ConfigurationError: If the file type is unsupported, the file cannot be
            read, or the content is invalid
    """
    file_path = Path(path)
    ext = file_path.suffix.lower()
    if ext not in (".json", ".yaml", ".yml"):
        raise ConfigurationError(f"Unsupported config file type: '{ext}'")

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read config file {file_path}: {e}") from e

    try:
        data = _parse_json(content) if ext == ".json" else _parse_yaml(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot parse config file {file_path}: {e}") from e

    logger.debug("config_file_loaded", extra={"path": str(file_path)})
    return _validate(data, str(file_path))


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> CalculatorConfig:
    """Builds a config from the environment, starting from an optional config file."""
    environ = os.environ if environ is None else environ

    data: dict[str, Any] = {}
    config_file = environ.get(ENV_VAR_CONFIG_FILE)
    if config_file:
        data = load_config(config_file).model_dump()

    mode = environ.get(ENV_VAR_MODE)
    if mode:
        data["mode"] = mode.strip().lower()

    trace = environ.get(ENV_VAR_TRACE)
    if trace:
        data["trace"] = trace.strip().lower() in _TRUTHY

    return _validate(data, "environment")
