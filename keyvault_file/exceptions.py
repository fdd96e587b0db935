"""
Key vault file exception classes.

Every failure raised by this library derives from KeyVaultFileError so callers
can catch library errors with a single except clause without masking built-in
Python errors.
"""

from enum import Enum
from pathlib import Path


class VaultOperationKind(str, Enum):
    """Remote key vault operation that failed."""

    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


class StorageErrorKind(str, Enum):
    """Category of local file access failure."""

    NOT_FOUND = "notFound"
    IO_ERROR = "ioError"


class KeyVaultFileError(Exception):
    """
    Base exception for all key vault file errors.

    All library exceptions inherit from this.
    """

    pass


class KeyVaultConfigurationError(KeyVaultFileError):
    """
    Raised when the key vault configuration is malformed.

    This includes mismatched credentials, unreadable YAML files and
    invalid environment variables. Credential correctness is never checked
    locally; that is left to the vault.
    """

    pass


class UnsupportedProviderError(KeyVaultFileError):
    """
    Raised when attempting to use an unsupported key vault provider.

    Example:
    -------
        >>> create_key_vault_client("unknown-x", config)
        UnsupportedProviderError: Unsupported key vault provider: unknown-x

    """

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Unsupported key vault provider: {provider}")


class VaultOperationError(KeyVaultFileError):
    """
    Raised when a remote encrypt or decrypt call fails.

    The underlying SDK exception is kept on ``cause`` and chained as
    ``__cause__``. Never retried.
    """

    def __init__(self, kind: VaultOperationKind, cause: BaseException):
        self.kind = kind
        self.cause = cause
        super().__init__(f"Failed to {kind.value} data with key vault: {cause}")


class StorageError(KeyVaultFileError):
    """
    Raised when the encrypted file cannot be read or written.

    During ``write`` this may happen after the vault already returned a
    ciphertext; that ciphertext is lost and the caller must retry the whole
    write.
    """

    def __init__(self, kind: StorageErrorKind, path: Path, cause: BaseException | None = None):
        self.kind = kind
        self.path = path
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Storage error ({kind.value}) for {path}{detail}")


__all__ = [
    "KeyVaultFileError",
    "KeyVaultConfigurationError",
    "UnsupportedProviderError",
    "VaultOperationError",
    "VaultOperationKind",
    "StorageError",
    "StorageErrorKind",
]
