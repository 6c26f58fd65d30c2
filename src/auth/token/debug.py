import asyncio
import logging
from dataclasses import replace
from datetime import timedelta
from typing import Any, Mapping

from auth.token.models import Clock, Token, TokenRequest, utc_now
from auth.token.token_provider import TokenProvider
from core.exceptions import InvalidConfigurationError


TOKEN_FRAGMENT_LENGTH = 10


def validate_expiry_minutes(expiry_minutes: Any) -> int:
    if isinstance(expiry_minutes, bool) or not isinstance(expiry_minutes, int):
        raise InvalidConfigurationError(
            f"Token expiry override must be an integer number of minutes, got {expiry_minutes!r}"
        )
    if expiry_minutes <= 0:
        raise InvalidConfigurationError(
            f"Token expiry override must be positive, got {expiry_minutes} minutes"
        )
    return expiry_minutes


class DebugTokenProvider(TokenProvider):
    """
    Decorates a TokenProvider so every acquired token is logged and handed back
    with an artificially short expiry of `now + expiry_minutes`.

    Callers that cache tokens and refresh them near expiry (TokenManager, Azure
    SDK clients through AsyncTokenCredentialAdapter) therefore hit their refresh
    path within minutes instead of waiting out the real token lifetime.

    The token string is passed through unchanged and the provider's Token
    object is never mutated; a copy carrying the new expiry is returned.
    Failures and cancellation from the wrapped provider propagate as-is.
    The expiry is always overwritten, even when the real token expires sooner.
    """

    def __init__(
        self,
        provider: TokenProvider,
        expiry_minutes: int = 2,
        logger: logging.Logger | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._expiry_minutes = validate_expiry_minutes(expiry_minutes)
        self._expiry_delta = timedelta(minutes=self._expiry_minutes)
        self._provider = provider
        self._logger = logger or logging.getLogger(f"[{self.__class__.__name__}]")
        self._clock = clock or utc_now

    @property
    def expiry_minutes(self) -> int:
        return self._expiry_minutes

    async def get_token(self, request: TokenRequest) -> Token:
        self._logger.info("TOKEN REQUEST START")
        self._logger.info(f"  Scopes: {list(request.scopes)}")
        self._logger.info(f"  Claims: {request.claims}")

        try:
            token = await self._provider.get_token(request)
        except asyncio.CancelledError:
            self._logger.warning("TOKEN REQUEST CANCELLED")
            raise
        except Exception as exc:
            self._logger.error("TOKEN ACQUISITION FAILED", exc_info=exc)
            raise

        custom_expiry = self._clock() + self._expiry_delta

        self._logger.info("TOKEN ACQUIRED")
        self._logger.info(f"  Original Expiry: {token.expires_at}")
        self._logger.info(f"  Custom Expiry: {custom_expiry} ({self._expiry_minutes} minutes)")
        self._logger.info(
            f"  Token (first {TOKEN_FRAGMENT_LENGTH} chars): "
            f"{token.token_value[:TOKEN_FRAGMENT_LENGTH]}..."
        )

        return replace(token, expires_at=custom_expiry)

    def log_token_refresh(self, context: str) -> None:
        self._logger.info(f"TOKEN REFRESH triggered from: {context}")

    def token_telemetry(self) -> Mapping[str, Any]:
        return {
            **self._provider.token_telemetry(),
            "debug_expiry_minutes": self._expiry_minutes,
        }

    async def close(self) -> None:
        await self._provider.close()


class TokenDebugInterceptor:
    """
    Entry point for token debug mode. Building one announces loudly that
    expiry overriding is active; `wrap_credential` then decorates providers
    with DebugTokenProvider bound to the same duration, logger and clock.

    Only build this when debug mode is explicitly switched on in the
    configuration (see config.factories).
    """

    def __init__(
        self,
        expiry_minutes: int = 2,
        logger: logging.Logger | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._expiry_minutes = validate_expiry_minutes(expiry_minutes)
        self._logger = logger or logging.getLogger(f"[{self.__class__.__name__}]")
        self._clock = clock

        self._logger.warning("========================================")
        self._logger.warning("TOKEN DEBUG MODE ENABLED")
        self._logger.warning(f"Token expiry override: {self._expiry_minutes} minutes")
        self._logger.warning("DO NOT USE IN PRODUCTION!")
        self._logger.warning("========================================")

    @property
    def expiry_minutes(self) -> int:
        return self._expiry_minutes

    def wrap_credential(self, provider: TokenProvider) -> DebugTokenProvider:
        """
        Wraps a TokenProvider to override token expiry time for testing.
        """
        return DebugTokenProvider(
            provider,
            expiry_minutes=self._expiry_minutes,
            logger=self._logger,
            clock=self._clock,
        )

    def log_token_refresh(self, context: str) -> None:
        self._logger.info(f"TOKEN REFRESH triggered from: {context}")
