"""Payments providers API handler."""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote

from truelayer.entities.payments_providers import PaymentsProvider
from truelayer.errors import ConfigurationError
from truelayer.handlers.base import ApiHandler

if TYPE_CHECKING:
    from truelayer.entities.common import ProblemDetails
    from truelayer.result import ResultEnvelope


class PaymentsProvidersHandler(ApiHandler):
    """Look up providers by id.

    The endpoint takes no access token; the client id travels in the query.
    """

    def __init__(self, *, client_id: str, **kwargs) -> None:
        """Initialize with the client id sent on every lookup."""
        super().__init__(**kwargs)
        self._client_id = client_id

    async def get_provider(
        self, provider_id: str
    ) -> ResultEnvelope[PaymentsProvider, ProblemDetails]:
        if not provider_id or not provider_id.strip():
            raise ConfigurationError("provider id must be not empty")
        return await self._execute(
            "GET",
            f"/payments-providers/{quote(provider_id, safe='')}",
            response_type=PaymentsProvider,
            query={"client_id": self._client_id},
        )
