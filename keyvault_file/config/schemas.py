"""
Configuration schema for the key vault encrypted file.

Option names follow the dash-separated form used by existing deployments
(``api-key``, ``api-secret``, ``key-id``); the snake_case field names are
accepted too.

Example:
-------
    provider: aws
    region: us-west-2
    api-key: AKIA...
    api-secret: ...
    key-id: alias/kaleido

"""

from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from keyvault_file.logging import redact_mapping

DEFAULT_PROVIDER = "aws"
DEFAULT_KEY_ID = "alias/kaleido"
AWS_KMS_API_VERSION = "2014-11-01"


class ProviderFamily(str, Enum):
    """Key vault provider family - which SDK binding to use."""

    AWS = "aws"  # aioboto3 KMS


class KeyVaultConfig(BaseModel):
    """
    Key vault configuration.

    Immutable once constructed. Only the shape is validated here; whether the
    provider is supported is decided by the client factory, and whether the
    credentials work is decided by the vault on first use.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    provider: Annotated[
        str,
        Field(default=DEFAULT_PROVIDER, description="Key vault provider identifier (e.g., 'aws')"),
    ]
    region: Annotated[str | None, Field(default=None, description="Provider region (e.g., 'us-west-2')")]
    api_key: Annotated[
        str | None,
        Field(default=None, alias="api-key", description="For AWS this maps to AWS_ACCESS_KEY_ID"),
    ]
    api_secret: Annotated[
        str | None,
        Field(default=None, alias="api-secret", description="For AWS this maps to AWS_SECRET_ACCESS_KEY"),
    ]
    key_id: Annotated[
        str | None,
        Field(
            default=None,
            alias="key-id",
            description=f"Master key id or alias. None means '{DEFAULT_KEY_ID}'",
        ),
    ]
    endpoint_url: Annotated[
        str | None,
        Field(default=None, alias="endpoint-url", description="Custom endpoint (LocalStack). None means provider default"),
    ]

    @field_validator("region", "api_key", "api_secret", "key_id", "endpoint_url", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        """Strip strings and treat empty values as unset."""
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("provider", mode="before")
    @classmethod
    def default_blank_provider(cls, value: Any) -> Any:
        """Fall back to the default provider when none is given."""
        if value is None:
            return DEFAULT_PROVIDER
        if isinstance(value, str):
            return value.strip() or DEFAULT_PROVIDER
        return value

    @model_validator(mode="after")
    def validate_credential_pair(self) -> "KeyVaultConfig":
        """Require api-key and api-secret together."""
        if (self.api_key is None) != (self.api_secret is None):
            raise ValueError("api-key and api-secret must be provided together")
        return self

    def redacted(self) -> dict[str, Any]:
        """Return the configuration with credentials masked, safe for logging."""
        return redact_mapping(self.model_dump(by_alias=True))
