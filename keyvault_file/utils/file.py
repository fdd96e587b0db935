"""File utilities."""

import asyncio
import fcntl
import os
from pathlib import Path


def _write_bytes(path: Path, data: bytes) -> None:
    # Truncate and write under one exclusive flock; direct overwrite, no rename
    fd = os.open(path, os.O_WRONLY | os.O_CREAT, 0o600)
    try:
        fcntl.flock(fd, fcntl.LOCK_EX)
        try:
            os.ftruncate(fd, 0)
            view = memoryview(data)
            while view:
                written = os.write(fd, view)
                view = view[written:]
        finally:
            fcntl.flock(fd, fcntl.LOCK_UN)
    finally:
        os.close(fd)


def _read_bytes(path: Path) -> bytes:
    with open(path, "rb") as f:
        fcntl.flock(f.fileno(), fcntl.LOCK_SH)
        try:
            return f.read()
        finally:
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)


class LocalFileSystem:
    """
    Local disk implementation of FileSystemProtocol.

    Blocking calls run in a worker thread so the event loop is not held while
    the disk is busy. Writes hold an exclusive flock across truncate and write,
    reads a shared one, so a reader or a racing writer never sees a mix of two
    blobs. Errors are the built-in OSError family, unchanged.

    Example:
    -------
        ```python
        from keyvault_file.utils import LocalFileSystem

        fs = LocalFileSystem()
        await fs.ensure_dir(Path("/var/lib/node"))
        await fs.write(Path("/var/lib/node/nodekey.enc"), blob)
        ```

    """

    async def read(self, path: Path) -> bytes:
        """Read the whole file as bytes."""
        return await asyncio.to_thread(_read_bytes, Path(path))

    async def write(self, path: Path, data: bytes) -> None:
        """Create or overwrite the file with ``data``."""
        await asyncio.to_thread(_write_bytes, Path(path), data)

    async def ensure_dir(self, path: Path) -> None:
        """Create the directory and any missing parents."""
        await asyncio.to_thread(Path(path).mkdir, parents=True, exist_ok=True)

    async def exists(self, path: Path) -> bool:
        """Return True if the path exists."""
        return await asyncio.to_thread(Path(path).exists)

    def __repr__(self) -> str:
        """Return string representation."""
        return "LocalFileSystem()"
