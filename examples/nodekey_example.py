#!/usr/bin/env python3
"""
Example: Protecting a node private key with a KMS-encrypted file.

This example writes a freshly generated 32-byte key through AWS KMS (or
LocalStack) and reads it back. Only the KMS ciphertext blob ever reaches disk.

Requirements:
- KEYVAULT_* environment variables (see keyvault_file.config.loaders), e.g.
    KEYVAULT_REGION=us-east-1
    KEYVAULT_API_KEY=test
    KEYVAULT_API_SECRET=test
    KEYVAULT_ENDPOINT_URL=http://localhost:4566   # LocalStack only
- A CMK reachable through alias/kaleido, or KEYVAULT_KEY_ID

Usage:
    python examples/nodekey_example.py /tmp/node/nodekey.enc
"""

import asyncio
import secrets
import sys

from keyvault_file import EncryptedFileStore, KeyVaultFileError, configure_logging, load_config_from_env


async def main(filepath: str) -> int:
    """Write and read back a node key."""
    configure_logging("info")

    try:
        store = EncryptedFileStore(filepath, load_config_from_env())
        await store.ensure_dir()

        nodekey = secrets.token_bytes(32)
        await store.write(nodekey)
        print(f"   ✓ Wrote encrypted node key to {store.filepath}")

        restored = await store.read()
        print(f"   ✓ Read back node key ({len(restored)} bytes), match={restored == nodekey}")
    except KeyVaultFileError as e:
        print(f"\n❌ Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "nodekey.enc")))
