"""Mandates API handler."""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote

from truelayer.entities.mandates import (
    CreateMandateResponse,
    ListMandatesResponse,
    MandateDetail,
)
from truelayer.entities.payments import AuthorizationFlowResponse, SubmitConsentRequest
from truelayer.errors import ConfigurationError
from truelayer.handlers.auth import MANDATES_SCOPES
from truelayer.handlers.base import ApiHandler

if TYPE_CHECKING:
    from truelayer.entities.common import ProblemDetails
    from truelayer.entities.mandates import CreateMandateRequest
    from truelayer.entities.payments import StartAuthorizationFlowRequest
    from truelayer.result import ResultEnvelope


def _mandate_path(mandate_id: str, suffix: str = "") -> str:
    if not mandate_id or not mandate_id.strip():
        raise ConfigurationError(
            "mandate id must be not empty",
            hint="Pass the id returned by create_mandate().",
        )
    return f"/mandates/{quote(mandate_id, safe='')}{suffix}"


class MandatesHandler(ApiHandler):
    """Create, authorize, read and revoke mandates.

    State-changing calls are signed and idempotent, like payments.
    """

    async def create_mandate(
        self, request: CreateMandateRequest
    ) -> ResultEnvelope[CreateMandateResponse, ProblemDetails]:
        return await self._execute(
            "POST",
            "/mandates",
            response_type=CreateMandateResponse,
            scopes=MANDATES_SCOPES,
            body=request,
            signed=True,
            idempotent=True,
        )

    async def start_authorization_flow(
        self, mandate_id: str, request: StartAuthorizationFlowRequest
    ) -> ResultEnvelope[AuthorizationFlowResponse, ProblemDetails]:
        return await self._execute(
            "POST",
            _mandate_path(mandate_id, "/authorization-flow"),
            response_type=AuthorizationFlowResponse,
            scopes=MANDATES_SCOPES,
            body=request,
            signed=True,
            idempotent=True,
        )

    async def submit_consent(
        self, mandate_id: str, request: SubmitConsentRequest | None = None
    ) -> ResultEnvelope[AuthorizationFlowResponse, ProblemDetails]:
        if request is None:
            request = SubmitConsentRequest()
        return await self._execute(
            "POST",
            _mandate_path(mandate_id, "/authorization-flow/actions/consent"),
            response_type=AuthorizationFlowResponse,
            scopes=MANDATES_SCOPES,
            body=request,
            signed=True,
            idempotent=True,
        )

    async def list_mandates(
        self,
        user_id: str | None = None,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> ResultEnvelope[ListMandatesResponse, ProblemDetails]:
        """List mandates, one page at a time.

        Pass ``pagination.next_cursor`` from the previous page as *cursor*.
        """
        if limit is not None and limit <= 0:
            raise ConfigurationError(f"limit must be > 0, got {limit}")
        return await self._execute(
            "GET",
            "/mandates",
            response_type=ListMandatesResponse,
            scopes=MANDATES_SCOPES,
            query={"user_id": user_id, "cursor": cursor, "limit": limit},
        )

    async def get_mandate(
        self, mandate_id: str
    ) -> ResultEnvelope[MandateDetail, ProblemDetails]:
        return await self._execute(
            "GET",
            _mandate_path(mandate_id),
            response_type=MandateDetail,
            scopes=MANDATES_SCOPES,
        )

    async def revoke_mandate(self, mandate_id: str) -> ResultEnvelope[None, ProblemDetails]:
        """Revoke an authorized mandate; the API answers without a body."""
        return await self._execute(
            "POST",
            _mandate_path(mandate_id, "/revoke"),
            response_type=None,
            scopes=MANDATES_SCOPES,
            raw_body=b"{}",
            signed=True,
            idempotent=True,
        )
