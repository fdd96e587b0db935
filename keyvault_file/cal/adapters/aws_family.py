"""
AWS Family Key Vault Adapter.

This module provides the KeyVaultClientProtocol implementation for AWS KMS
(Key Management Service) and KMS-compatible endpoints such as LocalStack.

To encrypt, the raw bytes are passed to the KMS Encrypt API together with the
CMK (customer master key) id and come back as a ciphertext blob. To decrypt,
the blob is passed to the KMS Decrypt API; KMS finds the CMK from metadata in
the blob, so no key id is needed. Both calls require the AWS access key id and
secret access key (or any credential source boto3 resolves by itself).
"""

from typing import Any

import aioboto3

from keyvault_file.config.schemas import AWS_KMS_API_VERSION

KMS_SERVICE_NAME = "kms"


class AWSKeyVaultClient:
    """
    AWS KMS key vault client.

    Holds an aioboto3 session bound to one region and one set of credentials.
    Creating it performs no network call; bad credentials or regions surface on
    the first encrypt/decrypt.
    """

    def __init__(
        self,
        region: str | None = None,
        api_key: str | None = None,
        api_secret: str | None = None,
        endpoint_url: str | None = None,
        api_version: str = AWS_KMS_API_VERSION,
    ):
        """
        Initialize AWS KMS client.

        Args:
        ----
            region: AWS region name (e.g., "us-west-2")
            api_key: AWS access key id
            api_secret: AWS secret access key
            endpoint_url: Optional KMS endpoint (LocalStack)
            api_version: KMS API version

        """
        self._region = region
        self._session = aioboto3.Session(
            aws_access_key_id=api_key,
            aws_secret_access_key=api_secret,
            region_name=region,
        )

        self._client_kwargs: dict[str, Any] = {"api_version": api_version}
        if endpoint_url:
            self._client_kwargs["endpoint_url"] = endpoint_url

    def _client(self) -> Any:
        """Return an async context manager yielding a KMS client."""
        return self._session.client(KMS_SERVICE_NAME, **self._client_kwargs)

    async def encrypt(self, key_id: str, plaintext: bytes) -> bytes:
        """Encrypt plaintext with the CMK identified by ``key_id``."""
        async with self._client() as kms:
            response = await kms.encrypt(KeyId=key_id, Plaintext=plaintext)
        return response["CiphertextBlob"]

    async def decrypt(self, ciphertext: bytes) -> bytes:
        """Decrypt a KMS ciphertext blob."""
        async with self._client() as kms:
            response = await kms.decrypt(CiphertextBlob=ciphertext)
        return response["Plaintext"]

    def __repr__(self) -> str:
        """Return string representation."""
        endpoint = self._client_kwargs.get("endpoint_url", "default")
        return f"AWSKeyVaultClient(region={self._region}, endpoint={endpoint})"
