"""Key vault configuration: schema and loaders."""

from keyvault_file.config.loaders import load_config, load_config_file, load_config_from_env
from keyvault_file.config.schemas import (
    AWS_KMS_API_VERSION,
    DEFAULT_KEY_ID,
    DEFAULT_PROVIDER,
    KeyVaultConfig,
    ProviderFamily,
)

__all__ = [
    "KeyVaultConfig",
    "ProviderFamily",
    "DEFAULT_PROVIDER",
    "DEFAULT_KEY_ID",
    "AWS_KMS_API_VERSION",
    "load_config",
    "load_config_file",
    "load_config_from_env",
]
