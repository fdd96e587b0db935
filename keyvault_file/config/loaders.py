"""
Configuration loading functions for the key vault encrypted file.

This module builds a validated KeyVaultConfig from:
- A plain mapping (e.g., an application's parsed settings)
- A YAML file, either flat or under a ``key-vault:`` section
- Environment variables (``KEYVAULT_*``)

All validation failures are reported as KeyVaultConfigurationError.
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from keyvault_file.config.schemas import KeyVaultConfig
from keyvault_file.exceptions import KeyVaultConfigurationError

CONFIG_SECTION = "key-vault"
ENV_PREFIX = "KEYVAULT_"

# Environment suffix -> config field
_ENV_FIELDS = {
    "PROVIDER": "provider",
    "REGION": "region",
    "API_KEY": "api_key",
    "API_SECRET": "api_secret",
    "KEY_ID": "key_id",
    "ENDPOINT_URL": "endpoint_url",
}


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(loc) for loc in item["loc"]) or "config"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def load_config(data: Mapping[str, Any] | KeyVaultConfig) -> KeyVaultConfig:
    """
    Validate a mapping into a KeyVaultConfig.

    Args:
    ----
        data: Option mapping using dash or snake_case keys, or an existing config

    Returns:
    -------
        Validated, immutable KeyVaultConfig

    Raises:
    ------
        KeyVaultConfigurationError: If the mapping has unknown keys or an invalid shape

    """
    if isinstance(data, KeyVaultConfig):
        return data
    if not isinstance(data, Mapping):
        raise KeyVaultConfigurationError(f"Key vault configuration must be a mapping, got {type(data).__name__}")

    try:
        return KeyVaultConfig.model_validate(dict(data))
    except ValidationError as e:
        raise KeyVaultConfigurationError(f"Invalid key vault configuration: {_format_validation_error(e)}") from e


def load_config_file(path: Path | str) -> KeyVaultConfig:
    """
    Load key vault configuration from a YAML file.

    The file may hold the options at the top level or nested under a
    ``key-vault`` section.

    Args:
    ----
        path: Path to the YAML file

    Returns:
    -------
        Validated KeyVaultConfig

    Raises:
    ------
        KeyVaultConfigurationError: If the file is missing, unparsable or invalid

    """
    config_file = Path(path)
    if not config_file.exists():
        raise KeyVaultConfigurationError(f"Key vault config file not found: {config_file}")

    try:
        with open(config_file) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise KeyVaultConfigurationError(f"Failed to parse {config_file}: {e}") from e
    except OSError as e:
        raise KeyVaultConfigurationError(f"Failed to read {config_file}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise KeyVaultConfigurationError(f"Config file {config_file} must contain a mapping")

    section = data.get(CONFIG_SECTION, data)
    if not isinstance(section, dict):
        raise KeyVaultConfigurationError(f"'{CONFIG_SECTION}' section in {config_file} must be a mapping")

    return load_config(section)


def load_config_from_env(
    environ: Mapping[str, str] | None = None,
    prefix: str = ENV_PREFIX,
) -> KeyVaultConfig:
    """
    Load key vault configuration from environment variables.

    Reads ``<prefix>PROVIDER``, ``<prefix>REGION``, ``<prefix>API_KEY``,
    ``<prefix>API_SECRET``, ``<prefix>KEY_ID`` and ``<prefix>ENDPOINT_URL``.
    Unset variables fall back to the schema defaults.

    Args:
    ----
        environ: Mapping to read from (defaults to os.environ)
        prefix: Variable name prefix

    Returns:
    -------
        Validated KeyVaultConfig

    """
    source = os.environ if environ is None else environ
    data = {field: source[f"{prefix}{suffix}"] for suffix, field in _ENV_FIELDS.items() if f"{prefix}{suffix}" in source}
    return load_config(data)
