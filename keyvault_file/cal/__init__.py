"""
Cloud Abstraction Layer for key vault providers.

Provides the provider-agnostic client protocol, the provider factory and the
IoC container used to build encrypted files.
"""

from keyvault_file.cal.factory import create_key_vault_client, supported_providers
from keyvault_file.cal.ioc import (
    KeyVaultIoCContainer,
    create_key_vault_container,
    get_key_vault_container,
    reset_key_vault_container,
)
from keyvault_file.cal.protocols import FileSystemProtocol, KeyVaultClientProtocol

__all__ = [
    "KeyVaultClientProtocol",
    "FileSystemProtocol",
    "create_key_vault_client",
    "supported_providers",
    "KeyVaultIoCContainer",
    "create_key_vault_container",
    "get_key_vault_container",
    "reset_key_vault_container",
]
