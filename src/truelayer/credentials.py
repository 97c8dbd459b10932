"""Credentials cache: OAuth2 access tokens with expiry and single-flight refresh."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
import logging
import time
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from truelayer._singleflight import singleflight_cached
from truelayer.errors import IssuanceError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

logger = logging.getLogger(__name__)

DEFAULT_SAFETY_MARGIN_S = 30.0


class IssuedToken(Protocol):
    """What a token-issuance call hands back."""

    access_token: str
    expires_in: int | float


@dataclass(frozen=True)
class CredentialsKey:
    """Identity a token is cached and deduplicated under."""

    client_id: str
    scopes: tuple[str, ...]

    @classmethod
    def of(cls, client_id: str, scopes: Iterable[str]) -> CredentialsKey:
        """Build a key whose identity ignores scope order and duplicates."""
        return cls(client_id=client_id, scopes=tuple(sorted(set(scopes))))

    def __str__(self) -> str:
        return f"{self.client_id}[{' '.join(self.scopes)}]"


@dataclass(frozen=True)
class CachedCredential:
    """An access token plus the instant it was issued.

    Times come from the owning cache's clock (monotonic seconds by default).
    """

    access_token: str
    issued_at: float
    expires_in: float

    @property
    def expires_at(self) -> float:
        """Absolute expiry instant on the issuing clock."""
        return self.issued_at + self.expires_in

    def is_usable(self, now: float, *, safety_margin_s: float = 0.0) -> bool:
        """Return True while *now* is before expiry minus the safety margin."""
        return now < self.expires_at - safety_margin_s

    @classmethod
    def issue(cls, token: IssuedToken, *, now: float) -> CachedCredential:
        """Validate an issued token and stamp it with *now*."""
        access_token = getattr(token, "access_token", None)
        expires_in = getattr(token, "expires_in", None)
        if not isinstance(access_token, str) or not access_token:
            raise IssuanceError("Token issuance returned an empty access token")
        if (
            isinstance(expires_in, bool)
            or not isinstance(expires_in, (int, float))
            or expires_in < 0
        ):
            raise IssuanceError(
                f"Token issuance returned an invalid expires_in: {expires_in!r}"
            )
        return cls(access_token=access_token, issued_at=now, expires_in=float(expires_in))

    def __repr__(self) -> str:
        return (
            f"CachedCredential(access_token='[REDACTED]', issued_at={self.issued_at!r}, "
            f"expires_in={self.expires_in!r})"
        )


@runtime_checkable
class CredentialsCache(Protocol):
    """Supplies a valid bearer token for a credentials key."""

    async def get_token(
        self, key: CredentialsKey, fetch: Callable[[], Awaitable[IssuedToken]]
    ) -> CachedCredential:
        """Return a usable token for *key*, invoking *fetch* when needed."""
        ...

    def invalidate(
        self,
        key: CredentialsKey | None = None,
        *,
        stale: CachedCredential | None = None,
    ) -> None:
        """Drop the cached token for *key*, or every token when *key* is None.

        With *stale*, the entry is dropped only while it still equals *stale*.
        """
        ...


@dataclass
class SimpleCredentialsCache:
    """In-memory token cache, one per client instance.

    Concurrent callers for the same key share a single in-flight fetch.
    Tokens are treated as expired ``safety_margin_s`` before their stated
    expiry so they do not lapse mid-request.
    """

    safety_margin_s: float = DEFAULT_SAFETY_MARGIN_S
    clock: Callable[[], float] = time.monotonic
    _entries: dict[CredentialsKey, CachedCredential] = field(default_factory=dict)
    _inflight: dict[CredentialsKey, asyncio.Task[CachedCredential]] = field(
        default_factory=dict
    )
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def __post_init__(self) -> None:
        """Validate the safety margin."""
        if self.safety_margin_s < 0:
            raise ValueError("SimpleCredentialsCache.safety_margin_s must be >= 0")

    def get(self, key: CredentialsKey) -> CachedCredential | None:
        """Get the cached token if it is still usable."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not entry.is_usable(self.clock(), safety_margin_s=self.safety_margin_s):
            del self._entries[key]
            logger.debug("Cached token for %s expired", key)
            return None
        return entry

    def set(self, key: CredentialsKey, credential: CachedCredential) -> None:
        """Store *credential*, replacing any previous token for *key*."""
        self._entries[key] = credential

    def invalidate(
        self,
        key: CredentialsKey | None = None,
        *,
        stale: CachedCredential | None = None,
    ) -> None:
        """Drop the cached token for *key*, or every token when *key* is None.

        With *stale*, the entry is dropped only while it still equals *stale*.
        """
        if key is None:
            self._entries.clear()
        elif stale is None or self._entries.get(key) == stale:
            self._entries.pop(key, None)
        else:
            logger.debug("Kept refreshed token for %s", key)

    def is_fetching(self, key: CredentialsKey) -> bool:
        """Return True while a token fetch for *key* is in flight."""
        return key in self._inflight

    async def get_token(
        self, key: CredentialsKey, fetch: Callable[[], Awaitable[IssuedToken]]
    ) -> CachedCredential:
        """Return a usable token for *key*, fetching at most once concurrently."""

        async def _work() -> CachedCredential:
            logger.debug("Fetching access token for %s", key)
            try:
                token = await fetch()
            except Exception as e:
                logger.debug("Token fetch for %s failed: %s", key, e)
                raise
            return CachedCredential.issue(token, now=self.clock())

        return await singleflight_cached(
            key,
            lock=self._lock,
            inflight=self._inflight,
            cache_get=self.get,
            cache_set=self.set,
            work=_work,
        )


@dataclass
class NoopCredentialsCache:
    """Cache that never caches: every call fetches a fresh token."""

    clock: Callable[[], float] = time.monotonic

    async def get_token(
        self, key: CredentialsKey, fetch: Callable[[], Awaitable[IssuedToken]]
    ) -> CachedCredential:
        """Fetch and return a fresh token."""
        logger.debug("Fetching access token for %s (caching disabled)", key)
        return CachedCredential.issue(await fetch(), now=self.clock())

    def invalidate(
        self,
        key: CredentialsKey | None = None,
        *,
        stale: CachedCredential | None = None,
    ) -> None:
        """Nothing to drop."""
        del key, stale
