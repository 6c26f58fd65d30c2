from .auth_token import (
    FakeTokenProvider,
    FailingTokenProvider,
    CountingTokenProvider,
    ScopeEchoTokenProvider,
    BlockingTokenProvider,
    FakeClock,
    valid_token,
    expired_token,
    long_lived_token,
)


__all__ = [
    'FakeTokenProvider',
    'FailingTokenProvider',
    'CountingTokenProvider',
    'ScopeEchoTokenProvider',
    'BlockingTokenProvider',
    'FakeClock',
    'valid_token',
    'expired_token',
    'long_lived_token',
]
