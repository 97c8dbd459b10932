"""Endpoints shared by every integration, usable without signing options."""

from __future__ import annotations

from typing import TYPE_CHECKING

from truelayer.entities.payments_providers import SubmitPaymentReturnsResponse
from truelayer.handlers.base import ApiHandler

if TYPE_CHECKING:
    from truelayer.entities.common import ProblemDetails
    from truelayer.entities.payments_providers import SubmitPaymentReturnsRequest
    from truelayer.result import ResultEnvelope


class CommonHandler(ApiHandler):
    async def submit_payment_returns(
        self, request: SubmitPaymentReturnsRequest
    ) -> ResultEnvelope[SubmitPaymentReturnsResponse, ProblemDetails]:
        """Relay the parameters a provider redirected the user back with.

        For integrations that host their own return page instead of
        TrueLayer's.
        """
        return await self._execute(
            "POST",
            "/spa/payments-provider-return",
            response_type=SubmitPaymentReturnsResponse,
            body=request,
            idempotent=True,
        )
