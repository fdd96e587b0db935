"""
keyvault_file - Files encrypted at rest by a managed key vault.

This library stores a sensitive blob (e.g., a node private key) on local disk
without ever persisting plaintext. Encryption and decryption are delegated to
a remote key vault (AWS KMS) that holds the master key:
- EncryptedFileStore: write/read a file through the vault
- Provider factory: single dispatch point from provider id to vault client
- Configuration from mappings, YAML files or environment variables
"""

from keyvault_file.cal.factory import create_key_vault_client
from keyvault_file.config import (
    DEFAULT_KEY_ID,
    KeyVaultConfig,
    load_config,
    load_config_file,
    load_config_from_env,
)
from keyvault_file.encrypted_file import EncryptedFileStore
from keyvault_file.exceptions import (
    KeyVaultConfigurationError,
    KeyVaultFileError,
    StorageError,
    StorageErrorKind,
    UnsupportedProviderError,
    VaultOperationError,
    VaultOperationKind,
)
from keyvault_file.logging import configure_logging

__version__ = "0.1.0"

__all__ = [
    # Store
    "EncryptedFileStore",
    "create_key_vault_client",
    # Config
    "KeyVaultConfig",
    "DEFAULT_KEY_ID",
    "load_config",
    "load_config_file",
    "load_config_from_env",
    # Exceptions
    "KeyVaultFileError",
    "KeyVaultConfigurationError",
    "UnsupportedProviderError",
    "VaultOperationError",
    "VaultOperationKind",
    "StorageError",
    "StorageErrorKind",
    # Logging
    "configure_logging",
    # Version
    "__version__",
]
