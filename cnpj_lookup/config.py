"""Configuration helpers for the CNPJ lookup tools."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

LOGGER = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CNPJ_LOOKUP_CONFIG"
DEFAULT_COPY_FEEDBACK_SECONDS = 1.0


class ConfigurationError(RuntimeError):
    """Raised when configuration files are missing or malformed."""


_SUPPORTED_EXTENSIONS = {".json", ".yaml", ".yml"}


def load_configuration(path: str | Path) -> Dict[str, Any]:
    """Load configuration data from a JSON or YAML file."""

    file_path = Path(path)
    if not file_path.exists():
        raise ConfigurationError(f"Configuration file '{file_path}' was not found")

    if file_path.suffix.lower() not in _SUPPORTED_EXTENSIONS:
        raise ConfigurationError(
            f"Unsupported configuration format '{file_path.suffix}'. Supported extensions: {sorted(_SUPPORTED_EXTENSIONS)}"
        )

    text = file_path.read_text(encoding="utf-8")
    if file_path.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise ConfigurationError(f"Configuration file '{file_path}' is not valid JSON: {exc}") from exc
    else:
        import yaml

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Configuration file '{file_path}' is not valid YAML: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file '{file_path}' must contain a mapping")
    return data


def load_configuration_from_env(environ: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """Load the file named by ``CNPJ_LOOKUP_CONFIG``, or return an empty config."""

    environ = os.environ if environ is None else environ
    path = environ.get(CONFIG_ENV_VAR)
    if not path:
        LOGGER.debug("%s is not set - using defaults", CONFIG_ENV_VAR)
        return {}
    return load_configuration(path)


def api_options(config: Dict[str, Any]) -> Dict[str, Any]:
    options = config.get("api") or {}
    if not isinstance(options, dict):
        raise ConfigurationError("The 'api' section must be a mapping")
    return options


def copy_feedback_seconds(config: Dict[str, Any]) -> float:
    value = config.get("copy_feedback_seconds", DEFAULT_COPY_FEEDBACK_SECONDS)
    try:
        seconds = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid copy_feedback_seconds value {value!r}") from exc
    if seconds <= 0:
        raise ConfigurationError("copy_feedback_seconds must be positive")
    return seconds
