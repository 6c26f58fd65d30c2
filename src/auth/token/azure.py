"""
Adapters between the TokenProvider capability and the Azure SDK credential
protocol.

AzureCredentialProvider lets any azure-identity async credential act as a base
provider. AsyncTokenCredentialAdapter goes the other way, so a provider stack
(for example one wrapped by DebugTokenProvider) can be handed to Azure SDK
clients that expect an AsyncTokenCredential.
"""

import logging
from types import TracebackType
from typing import Any
from datetime import datetime, timezone
from typing_extensions import Self

from azure.core.credentials import AccessToken
from azure.core.credentials_async import AsyncTokenCredential
from azure.identity.aio import ClientSecretCredential

from auth.token.models import Token, TokenRequest
from auth.token.token_provider import TokenProvider


class AzureCredentialProvider(TokenProvider):
    def __init__(self, credential: AsyncTokenCredential) -> None:
        self._credential = credential
        self._logger = logging.getLogger(f"[{self.__class__.__name__}]")

    async def get_token(self, request: TokenRequest) -> Token:
        access_token = await self._credential.get_token(
            *request.scopes,
            claims=request.claims,
            tenant_id=request.tenant_id,
        )
        self._logger.debug(f"Acquired Azure token for scopes {list(request.scopes)}")
        return Token(
            token_value=access_token.token,
            expires_at=datetime.fromtimestamp(access_token.expires_on, tz=timezone.utc),
        )

    def token_telemetry(self) -> dict[str, Any]:
        return {
            "provider": self.__class__.__name__,
            "credential": type(self._credential).__name__,
            "path": "azure",
        }

    async def close(self) -> None:
        await self._credential.close()


class AzureClientSecretTokenProvider(AzureCredentialProvider):
    def __init__(
        self,
        tenant_id: str,
        client_id: str,
        client_secret: str,
        authority: str | None = None,
    ) -> None:
        kwargs: dict[str, Any] = {}
        if authority:
            kwargs["authority"] = authority
        super().__init__(
            ClientSecretCredential(tenant_id, client_id, client_secret, **kwargs)
        )


class AsyncTokenCredentialAdapter(AsyncTokenCredential):
    """Exposes a TokenProvider as an Azure SDK AsyncTokenCredential."""

    def __init__(self, provider: TokenProvider) -> None:
        self._provider = provider

    async def get_token(
        self,
        *scopes: str,
        claims: str | None = None,
        tenant_id: str | None = None,
        **kwargs: Any,
    ) -> AccessToken:
        token = await self._provider.get_token(
            TokenRequest(scopes=scopes, claims=claims, tenant_id=tenant_id)
        )
        if token.expires_at is None:
            expires_on = int(datetime.max.replace(tzinfo=timezone.utc).timestamp())
        else:
            expires_on = int(token.expires_at.timestamp())
        return AccessToken(token.token_value, expires_on)

    async def close(self) -> None:
        await self._provider.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None = None,
        exc_value: BaseException | None = None,
        traceback: TracebackType | None = None,
    ) -> None:
        await self.close()
