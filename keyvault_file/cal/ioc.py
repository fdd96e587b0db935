"""
Key Vault IoC Container.

This module provides dependency injection for the encrypted file and its
collaborators. The container manages:
- The key vault client factory (injectable for testing)
- The filesystem collaborator (singleton)
- The structured logger (singleton)
- Encrypted file construction (factory, one store per path)

Example:
-------
    ```python
    from keyvault_file.cal.ioc import get_key_vault_container
    from keyvault_file.config import load_config_file

    container = get_key_vault_container(load_config_file("keyvault.yaml"))
    store = container.encrypted_file(filepath="/data/nodekey.enc")
    await store.write(nodekey)

    # Override in tests
    container.client_factory.override(providers.Object(fake_factory))
    ```

"""

from dependency_injector import containers, providers

from keyvault_file.config.schemas import KeyVaultConfig


def _encrypted_file(filepath, config, client_factory, filesystem, logger):
    from keyvault_file.encrypted_file import EncryptedFileStore

    return EncryptedFileStore(
        filepath,
        config,
        client_factory=client_factory,
        filesystem=filesystem,
        logger=logger,
    )


class KeyVaultIoCContainer(containers.DeclarativeContainer):
    """
    Inversion of Control (IoC) container for the key vault encrypted file.

    Every store built by the container gets its own key vault client; only the
    factory that builds clients is shared.
    """

    # Configuration input (dependency)
    config = providers.Dependency(instance_of=KeyVaultConfig)

    # Client factory - can be overridden in tests with fakes
    client_factory = providers.Singleton(
        providers.Callable(
            lambda: __import__(
                "keyvault_file.cal.factory",
                fromlist=["create_key_vault_client"],
            ).create_key_vault_client
        )
    )

    filesystem = providers.Singleton(
        providers.Callable(
            lambda: __import__(
                "keyvault_file.utils.file",
                fromlist=["LocalFileSystem"],
            ).LocalFileSystem()
        )
    )

    logger = providers.Singleton(
        providers.Callable(
            lambda: __import__(
                "keyvault_file.logging",
                fromlist=["get_logger"],
            ).get_logger("keyvault_file")
        )
    )

    # Factory (not singleton): one store per call, filepath supplied by caller
    encrypted_file = providers.Factory(
        _encrypted_file,
        config=config,
        client_factory=client_factory,
        filesystem=filesystem,
        logger=logger,
    )


def create_key_vault_container(config: KeyVaultConfig) -> KeyVaultIoCContainer:
    """
    Create a key vault IoC container with configuration.

    Args:
    ----
        config: Validated key vault configuration

    Returns:
    -------
        Configured container

    """
    container = KeyVaultIoCContainer()
    container.config.override(config)
    return container


# Global singleton container (can be overridden in tests)
_global_container: KeyVaultIoCContainer | None = None


def get_key_vault_container(config: KeyVaultConfig | None = None) -> KeyVaultIoCContainer:
    """
    Get or create the global key vault container.

    Args:
    ----
        config: KeyVaultConfig (required on first call)

    Returns:
    -------
        Global container

    """
    global _global_container

    if _global_container is None:
        if config is None:
            raise ValueError(
                "config is required on first call to get_key_vault_container(). "
                "Subsequent calls can omit it to reuse the global container."
            )
        _global_container = create_key_vault_container(config)

    return _global_container


def reset_key_vault_container() -> None:
    """Reset the global container (used between tests)."""
    global _global_container
    _global_container = None
