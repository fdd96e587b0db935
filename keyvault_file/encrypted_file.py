"""
Key vault encrypted file.

The content of the file is protected by a master key that is only reachable
through a key vault API. One example is the private key of an ethereum node:
the raw key bytes go to AWS KMS for encryption with the CMK and come back as a
ciphertext blob, which is what lands on disk. Reading sends the blob back to
KMS for decryption.

Each ``write`` is one encrypt call followed by one file write; each ``read`` is
one file read followed by one decrypt call. There is no locking, retry or
atomic rename: concurrent writers to the same path race and the last write
wins.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from keyvault_file.cal.factory import create_key_vault_client
from keyvault_file.cal.protocols import FileSystemProtocol, KeyVaultClientProtocol
from keyvault_file.config.loaders import load_config
from keyvault_file.config.schemas import DEFAULT_KEY_ID, KeyVaultConfig
from keyvault_file.exceptions import (
    StorageError,
    StorageErrorKind,
    VaultOperationError,
    VaultOperationKind,
)
from keyvault_file.logging import get_logger
from keyvault_file.utils.file import LocalFileSystem


def resolve_master_key_id(config: KeyVaultConfig) -> str:
    """Return the configured key id, or the default alias when unset."""
    return config.key_id if config.key_id else DEFAULT_KEY_ID


def _storage_error(path: Path, error: OSError) -> StorageError:
    kind = StorageErrorKind.NOT_FOUND if isinstance(error, FileNotFoundError) else StorageErrorKind.IO_ERROR
    return StorageError(kind, path, error)


class EncryptedFileStore:
    """
    A file on local disk whose plaintext is never persisted.

    Example:
    -------
        ```python
        from keyvault_file import EncryptedFileStore

        store = EncryptedFileStore(
            "/data/nodekey.enc",
            {"region": "us-west-2", "api-key": "AKIA...", "api-secret": "..."},
        )
        await store.write(nodekey_bytes)
        nodekey = await store.read()
        ```

    """

    def __init__(
        self,
        filepath: Path | str,
        config: KeyVaultConfig | Mapping[str, Any],
        *,
        client_factory: Any | None = None,
        filesystem: FileSystemProtocol | None = None,
        logger: Any | None = None,
    ):
        """
        Initialize the encrypted file.

        Args:
        ----
            filepath: File to manage
            config: KeyVaultConfig or an option mapping (provider, region,
                api-key, api-secret, key-id, endpoint-url)
            client_factory: Callable ``(provider, config, logger=...)`` returning a
                key vault client (defaults to create_key_vault_client)
            filesystem: Filesystem collaborator (defaults to LocalFileSystem)
            logger: structlog logger (defaults to this module's logger)

        Raises:
        ------
            KeyVaultConfigurationError: If config is malformed
            UnsupportedProviderError: If config.provider is not supported

        """
        self._log = logger if logger is not None else get_logger(__name__)
        self._config = load_config(config)
        self._filepath = Path(filepath)
        self._master_key_id = resolve_master_key_id(self._config)
        self._fs: FileSystemProtocol = filesystem if filesystem is not None else LocalFileSystem()

        factory = client_factory if client_factory is not None else create_key_vault_client
        self._client: KeyVaultClientProtocol = factory(self._config.provider, self._config, logger=self._log)

        self._log.info(
            "encrypted_file_initialized",
            filepath=str(self._filepath),
            key_id=self._master_key_id,
        )

    @property
    def filepath(self) -> Path:
        """Path of the managed file."""
        return self._filepath

    @property
    def master_key_id(self) -> str:
        """Key id passed to every encrypt call."""
        return self._master_key_id

    @property
    def client(self) -> KeyVaultClientProtocol:
        """Key vault client owned by this store."""
        return self._client

    async def write(self, plaintext: bytes) -> None:
        """
        Encrypt ``plaintext`` with the vault and overwrite the file with the blob.

        Raises
        ------
            VaultOperationError: If the encrypt call fails (file left untouched)
            StorageError: If the file cannot be written (ciphertext is lost)

        """
        try:
            ciphertext = await self._client.encrypt(self._master_key_id, plaintext)
        except Exception as e:
            self._log.error("key_vault_encrypt_failed", key_id=self._master_key_id, error=str(e))
            raise VaultOperationError(VaultOperationKind.ENCRYPT, e) from e

        try:
            await self._fs.write(self._filepath, ciphertext)
        except OSError as e:
            self._log.error("encrypted_file_write_failed", filepath=str(self._filepath), error=str(e))
            raise _storage_error(self._filepath, e) from e

        self._log.info("encrypted_file_written", filepath=str(self._filepath), size=len(ciphertext))

    async def read(self) -> bytes:
        """
        Read the blob from the file and decrypt it with the vault.

        Returns
        -------
            Plaintext bytes exactly as returned by the vault

        Raises
        ------
            StorageError: If the file is missing or unreadable (vault not called)
            VaultOperationError: If the decrypt call fails

        """
        try:
            encrypted = await self._fs.read(self._filepath)
        except OSError as e:
            self._log.error("encrypted_file_read_failed", filepath=str(self._filepath), error=str(e))
            raise _storage_error(self._filepath, e) from e

        try:
            plaintext = await self._client.decrypt(encrypted)
        except Exception as e:
            self._log.error("key_vault_decrypt_failed", filepath=str(self._filepath), error=str(e))
            raise VaultOperationError(VaultOperationKind.DECRYPT, e) from e

        self._log.debug("encrypted_file_read", filepath=str(self._filepath))
        return plaintext

    async def ensure_dir(self) -> None:
        """Create the parent directory of the file. Never called by ``write``."""
        try:
            await self._fs.ensure_dir(self._filepath.parent)
        except OSError as e:
            raise StorageError(StorageErrorKind.IO_ERROR, self._filepath.parent, e) from e

    async def exists(self) -> bool:
        """Return True if the encrypted file exists."""
        return await self._fs.exists(self._filepath)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"EncryptedFileStore(filepath={self._filepath}, key_id={self._master_key_id}, client={self._client!r})"
