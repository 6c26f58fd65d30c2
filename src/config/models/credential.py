from abc import ABC
from typing import Annotated, Union, Any, Literal, TypeVar, Generic
from pydantic import Field, BaseModel

from auth.credential import CredentialType
from auth.token.models import TokenRequest


T = TypeVar("T", bound=CredentialType)


class CredentialConfigModel(BaseModel, ABC, Generic[T]):
    """Base config for all base credential providers."""

    type: T

    model_config = {"frozen": True}

    def to_runtime_args(self) -> dict[str, Any]:
        return {}


class StaticCredentialConfig(CredentialConfigModel):
    type: Literal[CredentialType.STATIC] = CredentialType.STATIC
    token: str
    expires_in: int | None = None

    def to_runtime_args(self) -> dict[str, Any]:
        return {
            "token": self.token,
            "expires_in": self.expires_in,
        }


class ClientCredentialsConfig(CredentialConfigModel):
    type: Literal[CredentialType.OAUTH2_CLIENT_CREDENTIALS] = (
        CredentialType.OAUTH2_CLIENT_CREDENTIALS
    )
    token_url: str
    client_id: str
    client_secret: str
    default_expiration: int = 300
    timeout: float = 10
    max_retries: int = 5

    def to_runtime_args(self) -> dict[str, Any]:
        return {
            "token_url": self.token_url,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "default_expiration": self.default_expiration,
            "timeout": self.timeout,
            "max_retries": self.max_retries,
        }


class AzureClientSecretConfig(CredentialConfigModel):
    type: Literal[CredentialType.AZURE_CLIENT_SECRET] = CredentialType.AZURE_CLIENT_SECRET
    tenant_id: str
    client_id: str
    client_secret: str
    authority: str | None = None

    def to_runtime_args(self) -> dict[str, Any]:
        args = {
            "tenant_id": self.tenant_id,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
        }
        # Only pass authority when targeting a non-public cloud
        if self.authority is not None:
            args["authority"] = self.authority
        return args


CredentialConfigUnion = Annotated[
    Union[
        StaticCredentialConfig,
        ClientCredentialsConfig,
        AzureClientSecretConfig,
    ],
    Field(discriminator="type"),
]


class TokenDebugConfig(BaseModel):
    """
    Opt-in switch for token debug mode. The expiry override is only validated
    when debug mode is enabled and the interceptor is built.
    """

    enabled: bool = False
    expiry_minutes: int = Field(default=2, alias="expiry-minutes")

    model_config = {"frozen": True, "populate_by_name": True}


class CredentialSettings(BaseModel):
    credential: CredentialConfigUnion
    scopes: list[str] = Field(default_factory=list)
    claims: str | None = None
    tenant_id: str | None = None
    refresh_margin: int = 60
    token_debug: TokenDebugConfig = Field(default_factory=TokenDebugConfig)

    model_config = {"frozen": True}

    def token_request(self) -> TokenRequest:
        return TokenRequest(
            scopes=tuple(self.scopes),
            claims=self.claims,
            tenant_id=self.tenant_id,
        )
