from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Iterable


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenRequest:
    """
    The scopes and optional claims a caller asks a credential provider for.
    Scopes keep the caller's order.
    """

    scopes: tuple[str, ...] = field(default_factory=tuple)
    claims: str | None = None
    tenant_id: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.scopes, tuple):
            object.__setattr__(self, "scopes", tuple(self.scopes))

    @classmethod
    def for_scopes(cls, scopes: Iterable[str], claims: str | None = None) -> "TokenRequest":
        return cls(scopes=tuple(scopes), claims=claims)


@dataclass(frozen=True)
class Token:
    token_value: str
    expires_at: datetime | None = None

    @property
    def is_expired(self) -> bool:
        """
        Returns boolean to flag if the token has expired.
        """
        return self.expired_at(utc_now())

    def expired_at(self, now: datetime) -> bool:
        if self.expires_at is None:
            return False
        return now >= self.expires_at

    def seconds_until_expiration(self, now: datetime | None = None) -> float:
        if self.expires_at is not None:
            return (self.expires_at - (now or utc_now())).total_seconds()
        return 0

    def will_expire_within(self, seconds: int, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        return self.seconds_until_expiration(now) <= seconds

    def serialize_token(self) -> dict[str, str]:
        return {
            "token_value": self.token_value,
            "expires_at": self.expires_at.isoformat() if self.expires_at else "",
        }
