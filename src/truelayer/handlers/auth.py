"""Authentication API: OAuth2 client-credentials token issuance."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast
from urllib.parse import urlencode

from truelayer._http import FORM_CONTENT_TYPE
from truelayer.credentials import CredentialsKey
from truelayer.entities.common import AccessToken, ProblemDetails
from truelayer.errors import DecodeError, IssuanceError, TransportError
from truelayer.handlers.base import ApiHandler

if TYPE_CHECKING:
    from collections.abc import Iterable

    from truelayer.config import ClientCredentials
    from truelayer.credentials import CachedCredential, CredentialsCache
    from truelayer.result import ResultEnvelope

logger = logging.getLogger(__name__)

PAYMENTS_SCOPES: tuple[str, ...] = ("payments",)
MANDATES_SCOPES: tuple[str, ...] = ("recurring_payments:sweeping",)


class AuthenticationHandler(ApiHandler):
    """Client for ``{auth_api_uri}/connect/token``."""

    def __init__(self, *, credentials: ClientCredentials, **kwargs) -> None:
        """Initialize with the client credentials to exchange."""
        super().__init__(**kwargs)
        self._credentials = credentials

    @property
    def client_credentials(self) -> ClientCredentials:
        return self._credentials

    async def get_oauth_token(
        self, scopes: Iterable[str]
    ) -> ResultEnvelope[AccessToken, ProblemDetails]:
        """Request an access token for *scopes*."""
        form = urlencode(
            {
                "grant_type": "client_credentials",
                "client_id": cast("str", self._credentials.client_id),
                "client_secret": cast("str", self._credentials.client_secret),
                "scope": " ".join(scopes),
            }
        )
        return await self._execute(
            "POST",
            "/connect/token",
            response_type=AccessToken,
            raw_body=form.encode(),
            content_type=FORM_CONTENT_TYPE,
            idempotent=True,
        )

    async def issue_token(self, scopes: Iterable[str]) -> AccessToken:
        """Request a token, raising ``IssuanceError`` on any failure."""
        scopes = tuple(scopes)
        try:
            result = await self.get_oauth_token(scopes)
        except (TransportError, DecodeError) as e:
            raise IssuanceError(
                f"Token request failed: {e}",
                hint=e.hint,
            ) from e
        if result.is_error():
            problem = cast("ProblemDetails", result.error)
            raise IssuanceError(
                f"Token request rejected: {problem.title or 'unknown error'}",
                hint=problem.detail
                or "Check the client id and secret for the selected environment.",
                status_code=problem.status,
                problem=problem,
            )
        token = result.data
        if token is None:
            raise IssuanceError("Token request returned an empty body")
        return token


class TokenSource:
    """Supplies bearer tokens for a client, through its credentials cache."""

    def __init__(
        self, auth: AuthenticationHandler, cache: CredentialsCache
    ) -> None:
        """Bind the issuance handler to the cache that fronts it."""
        self._auth = auth
        self._cache = cache

    @property
    def cache(self) -> CredentialsCache:
        return self._cache

    def key_for(self, scopes: Iterable[str]) -> CredentialsKey:
        client_id = cast("str", self._auth.client_credentials.client_id)
        return CredentialsKey.of(client_id, scopes)

    async def __call__(self, scopes: Iterable[str]) -> CachedCredential:
        """Return a usable token for *scopes*."""
        scopes = tuple(scopes)
        return await self._cache.get_token(
            self.key_for(scopes), lambda: self._auth.issue_token(scopes)
        )

    def invalidate(
        self, scopes: Iterable[str], rejected: CachedCredential | None = None
    ) -> None:
        """Forget the token for *scopes* after the API rejected it.

        With *rejected*, a token refreshed by another call in the meantime
        is kept.
        """
        key = self.key_for(scopes)
        logger.debug("Invalidating cached token for %s", key)
        self._cache.invalidate(key, stale=rejected)
