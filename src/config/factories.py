import logging
from abc import ABC, abstractmethod
from typing import Any, Callable

from auth.credential import CredentialProviderFactory
from auth.token.debug import TokenDebugInterceptor
from auth.token.models import Clock
from auth.token.token_manager import TokenManager
from auth.token.token_provider import TokenProvider
from config.models.credential import CredentialSettings


class RuntimeFactory(ABC):

    @staticmethod
    @abstractmethod
    def build_factory(cfg: Any, *args, **kwargs) -> Callable[[], Any]: ...


def build_debug_interceptor(
    cfg: CredentialSettings,
    logger: logging.Logger | None = None,
    clock: Clock | None = None,
) -> TokenDebugInterceptor | None:
    """
    Returns an interceptor only when token debug mode is switched on.
    Building it validates the expiry override and logs the warning banner.
    """
    if not cfg.token_debug.enabled:
        return None
    return TokenDebugInterceptor(
        cfg.token_debug.expiry_minutes, logger=logger, clock=clock
    )


class CredentialRuntimeFactory(RuntimeFactory):

    @staticmethod
    def build_factory(
        cfg: CredentialSettings,
        logger: logging.Logger | None = None,
        clock: Clock | None = None,
    ) -> Callable[[], TokenProvider]:

        # Built eagerly so a bad override fails before any token traffic
        interceptor = build_debug_interceptor(cfg, logger=logger, clock=clock)
        credential_cfg = cfg.credential

        def factory() -> TokenProvider:
            provider = CredentialProviderFactory.create(
                credential_cfg.type, **credential_cfg.to_runtime_args()
            )
            if interceptor is not None:
                return interceptor.wrap_credential(provider)
            return provider

        return factory


class TokenManagerRuntimeFactory(RuntimeFactory):

    @staticmethod
    def build_factory(
        cfg: CredentialSettings,
        logger: logging.Logger | None = None,
        clock: Clock | None = None,
    ) -> Callable[[], TokenManager]:

        interceptor = build_debug_interceptor(cfg, logger=logger, clock=clock)
        credential_cfg = cfg.credential
        request = cfg.token_request()
        refresh_margin = int(cfg.refresh_margin)

        def factory() -> TokenManager:
            provider = CredentialProviderFactory.create(
                credential_cfg.type, **credential_cfg.to_runtime_args()
            )
            on_refresh = None
            if interceptor is not None:
                provider = interceptor.wrap_credential(provider)
                on_refresh = interceptor.log_token_refresh

            return TokenManager(
                provider,
                request=request,
                refresh_margin=refresh_margin,
                clock=clock,
                on_refresh=on_refresh,
            )

        return factory
