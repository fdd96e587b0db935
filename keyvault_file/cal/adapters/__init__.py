"""Provider adapters for the key vault abstraction."""

from keyvault_file.cal.adapters.aws_family import AWSKeyVaultClient

__all__ = ["AWSKeyVaultClient"]
