"""
Key Vault Provider Factory.

This module is the single dispatch point from a provider identifier to a bound
key vault client. It handles:

- Provider identifier validation (closed set, see ProviderFamily)
- Adapter selection and instantiation
- Region and credential injection

Usage:
------
    >>> from keyvault_file.cal.factory import create_key_vault_client
    >>> from keyvault_file.config import KeyVaultConfig
    >>>
    >>> cfg = KeyVaultConfig(region="us-west-2", api_key="AKIA...", api_secret="...")
    >>> client = create_key_vault_client(cfg.provider, cfg)
    >>> blob = await client.encrypt("alias/kaleido", b"secret")

"""

from collections.abc import Callable
from typing import Any

from keyvault_file.cal.adapters.aws_family import AWSKeyVaultClient
from keyvault_file.cal.protocols import KeyVaultClientProtocol
from keyvault_file.config.schemas import AWS_KMS_API_VERSION, KeyVaultConfig, ProviderFamily
from keyvault_file.exceptions import UnsupportedProviderError
from keyvault_file.logging import get_logger

ClientBuilder = Callable[[KeyVaultConfig], KeyVaultClientProtocol]


def _build_aws_client(config: KeyVaultConfig) -> KeyVaultClientProtocol:
    return AWSKeyVaultClient(
        region=config.region,
        api_key=config.api_key,
        api_secret=config.api_secret,
        endpoint_url=config.endpoint_url,
        api_version=AWS_KMS_API_VERSION,
    )


# Adding a provider: one ProviderFamily member, one adapter, one entry here
_BUILDERS: dict[ProviderFamily, ClientBuilder] = {
    ProviderFamily.AWS: _build_aws_client,
}


def supported_providers() -> list[str]:
    """Return the provider identifiers the factory can build."""
    return [family.value for family in _BUILDERS]


def create_key_vault_client(
    provider: str,
    config: KeyVaultConfig,
    *,
    logger: Any | None = None,
) -> KeyVaultClientProtocol:
    """
    Create a key vault client for the given provider.

    Args:
    ----
        provider: Provider identifier (currently only "aws")
        config: Validated key vault configuration
        logger: Optional structlog logger for the diagnostic record

    Returns:
    -------
        KeyVaultClientProtocol: Client bound to config's region and credentials

    Raises:
    ------
        UnsupportedProviderError: If provider is not a recognized identifier

    """
    log = logger if logger is not None else get_logger(__name__)

    try:
        family = ProviderFamily(provider)
    except ValueError:
        log.error("key_vault_provider_unsupported", provider=provider, supported=supported_providers())
        raise UnsupportedProviderError(provider) from None

    builder = _BUILDERS.get(family)
    if builder is None:
        raise UnsupportedProviderError(provider)

    log.info("key_vault_provider_selected", provider=family.value, config=config.redacted())
    return builder(config)
