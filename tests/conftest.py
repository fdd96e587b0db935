"""Pytest configuration and fixtures for keyvault-file tests."""

import json
import shutil
import subprocess
import time
from collections.abc import Generator

import pytest

from keyvault_file.config import KeyVaultConfig

LOCALSTACK_ENDPOINT = "http://localhost:4566"
LOCALSTACK_IMAGE = "localstack/localstack:latest"
CONTAINER_NAME = "keyvault-file-test-kms"
KMS_READY = ("available", "running")


class FakeKeyVault:
    """
    In-memory key vault that satisfies KeyVaultClientProtocol.

    Ciphertext is the key id, a separator and the reversed plaintext, so
    decrypt(encrypt(key_id, p)) == p and ciphertexts of equal-length plaintexts
    have equal length.
    """

    SEPARATOR = b"|"

    def __init__(self, fail_encrypt: Exception | None = None, fail_decrypt: Exception | None = None):
        self.fail_encrypt = fail_encrypt
        self.fail_decrypt = fail_decrypt
        self.encrypt_calls: list[tuple[str, bytes]] = []
        self.decrypt_calls: list[bytes] = []

    def ciphertext_for(self, key_id: str, plaintext: bytes) -> bytes:
        return key_id.encode() + self.SEPARATOR + plaintext[::-1]

    async def encrypt(self, key_id: str, plaintext: bytes) -> bytes:
        self.encrypt_calls.append((key_id, plaintext))
        if self.fail_encrypt is not None:
            raise self.fail_encrypt
        return self.ciphertext_for(key_id, plaintext)

    async def decrypt(self, ciphertext: bytes) -> bytes:
        self.decrypt_calls.append(ciphertext)
        if self.fail_decrypt is not None:
            raise self.fail_decrypt
        _, _, body = ciphertext.partition(self.SEPARATOR)
        return body[::-1]


class FakeClientFactory:
    """Client factory returning a fixed vault and recording its calls."""

    def __init__(self, vault: FakeKeyVault):
        self.vault = vault
        self.calls: list[tuple[str, KeyVaultConfig]] = []

    def __call__(self, provider: str, config: KeyVaultConfig, *, logger=None) -> FakeKeyVault:
        self.calls.append((provider, config))
        return self.vault


@pytest.fixture
def vault_config() -> KeyVaultConfig:
    """A complete AWS configuration with dummy credentials."""
    return KeyVaultConfig(
        provider="aws",
        region="us-west-2",
        api_key="AKIAEXAMPLEKEY",
        api_secret="super-secret-value",
    )


@pytest.fixture
def fake_vault() -> FakeKeyVault:
    """A faithful encrypt/decrypt pair."""
    return FakeKeyVault()


@pytest.fixture
def fake_factory(fake_vault: FakeKeyVault) -> FakeClientFactory:
    """Client factory handing out fake_vault."""
    return FakeClientFactory(fake_vault)


def kms_status() -> str | None:
    """Return LocalStack's reported KMS status, or None if LocalStack is unreachable."""
    try:
        result = subprocess.run(
            ["curl", "-sf", f"{LOCALSTACK_ENDPOINT}/_localstack/health"],
            capture_output=True,
            timeout=2,
        )
    except (subprocess.TimeoutExpired, FileNotFoundError):
        return None
    if result.returncode != 0:
        return None
    try:
        return json.loads(result.stdout).get("services", {}).get("kms")
    except ValueError:
        return None


def wait_for_kms(timeout: int = 60) -> bool:
    """Poll the health endpoint until KMS is usable."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if kms_status() in KMS_READY:
            return True
        time.sleep(1)
    return False


@pytest.fixture(scope="session")
def localstack() -> Generator[str, None, None]:
    """Yield a LocalStack endpoint with KMS enabled.

    Reuses a running LocalStack when its health payload lists KMS; otherwise
    starts a KMS-only container if Docker is available and stops it afterwards.
    """
    if kms_status() is not None:
        if not wait_for_kms(timeout=10):
            pytest.skip(f"LocalStack is running without KMS (status: {kms_status()})")
        yield LOCALSTACK_ENDPOINT
        return

    if shutil.which("docker") is None:
        pytest.skip("Docker not available - skipping LocalStack KMS tests")

    try:
        subprocess.run(
            [
                "docker", "run", "-d", "--rm",
                "--name", CONTAINER_NAME,
                "-e", "SERVICES=kms",
                "-p", "4566:4566",
                LOCALSTACK_IMAGE,
            ],
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        pytest.skip(f"Failed to start LocalStack: {e.stderr}")

    try:
        if not wait_for_kms():
            pytest.skip("LocalStack KMS did not become ready")
        yield LOCALSTACK_ENDPOINT
    finally:
        subprocess.run(["docker", "stop", CONTAINER_NAME], capture_output=True, timeout=30)
