import aiohttp
import asyncio
import base64
import logging
from typing import Any, Mapping
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone

from utils.common import async_exponential_backoff
from auth.token.models import Token, TokenRequest
from core.exceptions import TokenAcquisitionError


class TokenProvider(ABC):
    """
    Credential provider capability. Base providers and decorators over them
    (see auth.token.debug) implement the same interface so they can be nested.
    """

    @abstractmethod
    async def get_token(self, request: TokenRequest) -> Token: ...

    @abstractmethod
    def token_telemetry(self) -> Mapping[str, Any]: ...

    async def close(self) -> None:
        return None


class StaticTokenProvider(TokenProvider):
    def __init__(self, token: str, expires_in: int | None = None) -> None:
        self._token = token
        self._expires_in = expires_in

    async def get_token(self, request: TokenRequest) -> Token:
        if self._expires_in is None:
            expires_at = datetime.max.replace(tzinfo=timezone.utc)
        else:
            expires_at = datetime.now(timezone.utc) + timedelta(seconds=self._expires_in)
        return Token(token_value=self._token, expires_at=expires_at)

    def token_telemetry(self) -> dict[str, Any]:
        return {"provider": self.__class__.__name__, "path": "static"}


class OAuth2ClientCredentialsTokenProvider(TokenProvider):
    """
    Acquires tokens from an OAuth2 token endpoint with the client credentials
    grant. The client id and secret are sent as HTTP basic auth; the request
    scopes are space-joined into the `scope` form field.

    Transport errors, HTTP 429 and 5xx responses are retried with exponential
    backoff. Any other 4xx (bad client, bad scope) is raised straight away.
    """

    RETRYABLE_STATUS = frozenset({429, 500, 502, 503, 504})

    def __init__(
        self,
        token_url: str,
        client_id: str,
        client_secret: str,
        default_expiration: int = 300,
        timeout: float = 10,
        max_retries: int = 5,
        base_delay: float = 0.25,
    ) -> None:
        self._url = token_url
        self._client_id = client_id
        self._client_secret = client_secret
        self._default_expiration = default_expiration
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._max_retries = max_retries
        self._base_delay = base_delay
        self._logger = logging.getLogger(f"[{self.__class__.__name__}]")

    def build_request_body(self, request: TokenRequest) -> dict[str, str]:
        data = {"grant_type": "client_credentials"}
        if request.scopes:
            data["scope"] = " ".join(request.scopes)
        if request.claims:
            data["claims"] = request.claims
        return data

    def build_auth_header(self) -> dict[str, str]:
        credentials = f"{self._client_id}:{self._client_secret}".encode("utf-8")
        return {"Authorization": f"Basic {base64.b64encode(credentials).decode('ascii')}"}

    async def _request_token(self, request: TokenRequest) -> Token:
        async with aiohttp.ClientSession(timeout=self._timeout) as session:
            async with session.post(
                self._url, data=self.build_request_body(request),
                headers=self.build_auth_header(),
            ) as response:
                response.raise_for_status()
                payload: dict[str, Any] = await response.json(content_type=None)

        access_token = payload.get("access_token")
        if not access_token:
            raise TokenAcquisitionError(
                f"Token endpoint {self._url} returned no access_token"
            )

        expires_in = int(payload.get("expires_in", self._default_expiration))
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
        return Token(token_value=access_token, expires_at=expires_at)

    async def get_token(self, request: TokenRequest) -> Token:
        last_exc: Exception | None = None

        for attempt in range(1, self._max_retries + 1):
            try:
                token = await self._request_token(request)
                self._logger.info("Successfully retrieved token from the vendor.")
                return token
            except aiohttp.ClientResponseError as exc:
                if exc.status not in self.RETRYABLE_STATUS:
                    self._logger.error(f"Token request rejected ({exc.status}): {exc.message}")
                    raise
                last_exc = exc
            except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
                last_exc = exc

            if attempt >= self._max_retries:
                break

            self._logger.warning(
                "Token request failed "
                f"(attempt {attempt}/{self._max_retries}): {last_exc!r}"
            )
            await async_exponential_backoff(self._base_delay, attempt)

        self._logger.error("Exhausted retries retrieving token", exc_info=last_exc)
        raise last_exc or TokenAcquisitionError("Failed to retrieve token")

    def token_telemetry(self) -> dict[str, Any]:
        return {"provider": self.__class__.__name__, "path": "token_url"}
