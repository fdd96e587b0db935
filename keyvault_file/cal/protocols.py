"""
Cloud Abstraction Layer Protocol Definitions.

This module defines protocols (structural typing) for the two collaborators of
the encrypted file: the key vault client and the filesystem. Any implementation
that matches the interface can be used, so adding a provider never touches the
encrypted file's read/write logic.

Key protocols:
- KeyVaultClientProtocol: remote encrypt/decrypt over a managed master key
- FileSystemProtocol: whole-file byte reads and writes
"""

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyVaultClientProtocol(Protocol):
    """
    Protocol for a key vault bound to one provider, region and credentials.

    Implementations:
    - cal/adapters/aws_family.py - AWS KMS via aioboto3

    The master key never leaves the vault. Both operations are single remote
    calls with no local retry.
    """

    async def encrypt(self, key_id: str, plaintext: bytes) -> bytes:
        """
        Encrypt plaintext under a master key.

        Args:
        ----
            key_id: Master key id, ARN or alias (e.g., "alias/kaleido")
            plaintext: Raw bytes to protect

        Returns:
        -------
            Provider-opaque ciphertext blob

        Raises:
        ------
            Exception: Provider SDK error on any remote failure

        """
        ...

    async def decrypt(self, ciphertext: bytes) -> bytes:
        """
        Decrypt a ciphertext blob produced by ``encrypt``.

        Args:
        ----
            ciphertext: Ciphertext blob exactly as returned by ``encrypt``

        Returns:
        -------
            Plaintext bytes

        Raises:
        ------
            Exception: Provider SDK error on any remote failure

        """
        ...


@runtime_checkable
class FileSystemProtocol(Protocol):
    """
    Protocol for the filesystem operations used by the encrypted file.

    Implementations raise the built-in OSError family on failure.
    """

    async def read(self, path: Path) -> bytes:
        """Read the full contents of ``path``."""
        ...

    async def write(self, path: Path, data: bytes) -> None:
        """Create or fully overwrite ``path``. Parent directories are not created."""
        ...

    async def ensure_dir(self, path: Path) -> None:
        """Create ``path`` and its parents if missing."""
        ...

    async def exists(self, path: Path) -> bool:
        """Return True if ``path`` exists."""
        ...
