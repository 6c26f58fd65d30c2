import logging
import asyncio
from typing import Callable

from auth.token.models import Clock, Token, TokenRequest, utc_now
from auth.token.token_provider import TokenProvider


class TokenManager:
    """
    Asynchronous token manager responsible for acquiring and caching a single
    access token from a given TokenProvider for one TokenRequest.

    Core responsibilities:
      • Hold the current Token instance.
      • Lazily refresh the token when it is missing, expired, or within a
        configured refresh margin.
      • Serialize concurrent refresh attempts using an asyncio.Lock so multiple
        callers don't all trigger separate token requests.
      • Report every refresh to an optional `on_refresh` hook. With token debug
        mode on this is TokenDebugInterceptor.log_token_refresh, so the log
        shows which call site caused each acquisition.

    TokenManager does not own any event loop or threads; it exposes async
    methods that are awaited inline from existing async code.
    """

    def __init__(
        self,
        provider: TokenProvider,
        request: TokenRequest | None = None,
        refresh_margin: int = 60,
        clock: Clock | None = None,
        on_refresh: Callable[[str], None] | None = None,
    ) -> None:
        self.provider = provider
        self.request = request or TokenRequest()
        self._refresh_margin = refresh_margin
        self._clock = clock or utc_now
        self._on_refresh = on_refresh
        self._token: Token | None = None
        self._lock = asyncio.Lock()
        self._logger = logging.getLogger(f"[{self.__class__.__name__}]")

    def _needs_refresh(self) -> bool:
        if self._token is None:
            return True
        now = self._clock()
        return self._token.expired_at(now) or self._token.will_expire_within(
            self._refresh_margin, now
        )

    async def _acquire(self, context: str) -> Token:
        if self._on_refresh is not None:
            self._on_refresh(context)
        self._token = await self.provider.get_token(self.request)
        self._logger.debug(
            f"Token refreshed ({context}), expires at {self._token.expires_at}"
        )
        return self._token

    async def _refresh_token(self) -> Token:

        # Fast path - token exists and is not near expiring.
        if not self._needs_refresh():
            return self._token

        async with self._lock:
            if self._needs_refresh():
                await self._acquire(f"{self.__class__.__name__}.get_token")

        return self._token

    async def get_token(self) -> Token:
        return await self._refresh_token()

    async def get_token_value(self) -> str:
        token = await self._refresh_token()
        return token.token_value

    async def force_refresh(self) -> Token:
        async with self._lock:
            return await self._acquire(f"{self.__class__.__name__}.force_refresh")

    def invalidate(self) -> None:
        self._token = None
