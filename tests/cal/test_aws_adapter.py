"""Tests for AWS family key vault adapter."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from keyvault_file.cal.adapters.aws_family import KMS_SERVICE_NAME, AWSKeyVaultClient
from keyvault_file.cal.protocols import KeyVaultClientProtocol
from keyvault_file.config.schemas import AWS_KMS_API_VERSION


@pytest.fixture
def mock_kms_client():
    """Create a mock async KMS client."""
    client = MagicMock()
    client.encrypt = AsyncMock(return_value={"CiphertextBlob": b"ciphertext", "KeyId": "arn:aws:kms:key"})
    client.decrypt = AsyncMock(return_value={"Plaintext": b"plaintext", "KeyId": "arn:aws:kms:key"})
    return client


@pytest.fixture
def mock_session(mock_kms_client):
    """Patch aioboto3.Session so session.client() yields mock_kms_client."""
    with patch("keyvault_file.cal.adapters.aws_family.aioboto3.Session") as session_cls:
        session = session_cls.return_value
        session.client.return_value.__aenter__.return_value = mock_kms_client
        session.client.return_value.__aexit__.return_value = False
        yield session_cls


class TestAWSKeyVaultClient:
    """Tests for AWSKeyVaultClient adapter."""

    def test_session_bound_to_region_and_credentials(self, mock_session):
        """Test the aioboto3 session receives region and credentials."""
        AWSKeyVaultClient(region="us-west-2", api_key="AKIA", api_secret="secret")

        mock_session.assert_called_once_with(
            aws_access_key_id="AKIA",
            aws_secret_access_key="secret",
            region_name="us-west-2",
        )

    def test_construction_makes_no_remote_call(self, mock_session):
        """Test that no KMS client is opened at construction."""
        AWSKeyVaultClient(region="us-west-2", api_key="AKIA", api_secret="secret")

        mock_session.return_value.client.assert_not_called()

    def test_implements_protocol(self, mock_session):
        """Test structural conformance to KeyVaultClientProtocol."""
        assert isinstance(AWSKeyVaultClient(region="us-west-2"), KeyVaultClientProtocol)

    @pytest.mark.asyncio
    async def test_encrypt(self, mock_session, mock_kms_client):
        """Test encrypt sends KeyId/Plaintext and returns the blob."""
        client = AWSKeyVaultClient(region="us-west-2", api_key="AKIA", api_secret="secret")

        blob = await client.encrypt("alias/kaleido", b"plaintext")

        assert blob == b"ciphertext"
        mock_kms_client.encrypt.assert_awaited_once_with(KeyId="alias/kaleido", Plaintext=b"plaintext")
        mock_session.return_value.client.assert_called_once_with(KMS_SERVICE_NAME, api_version=AWS_KMS_API_VERSION)

    @pytest.mark.asyncio
    async def test_decrypt(self, mock_session, mock_kms_client):
        """Test decrypt sends CiphertextBlob and returns the plaintext."""
        client = AWSKeyVaultClient(region="us-west-2")

        plaintext = await client.decrypt(b"ciphertext")

        assert plaintext == b"plaintext"
        mock_kms_client.decrypt.assert_awaited_once_with(CiphertextBlob=b"ciphertext")

    @pytest.mark.asyncio
    async def test_endpoint_url_passed_to_client(self, mock_session, mock_kms_client):
        """Test a custom endpoint (LocalStack) reaches the KMS client."""
        client = AWSKeyVaultClient(region="us-east-1", endpoint_url="http://localhost:4566")

        await client.encrypt("alias/kaleido", b"x")

        mock_session.return_value.client.assert_called_once_with(
            "kms",
            api_version="2014-11-01",
            endpoint_url="http://localhost:4566",
        )

    @pytest.mark.asyncio
    async def test_client_error_propagates(self, mock_session, mock_kms_client):
        """Test SDK errors are not swallowed by the adapter."""
        mock_kms_client.encrypt.side_effect = ClientError(
            {"Error": {"Code": "NotFoundException", "Message": "Alias not found"}},
            "Encrypt",
        )
        client = AWSKeyVaultClient(region="us-west-2")

        with pytest.raises(ClientError):
            await client.encrypt("alias/missing", b"x")

    def test_repr_hides_credentials(self, mock_session):
        """Test repr shows region and endpoint only."""
        client = AWSKeyVaultClient(region="us-west-2", api_key="AKIA", api_secret="secret")

        text = repr(client)

        assert "us-west-2" in text
        assert "secret" not in text
