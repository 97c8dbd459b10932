"""Payments API v3 handler."""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote

from truelayer.entities.payments import (
    AuthorizationFlowResponse,
    CreatePaymentResponse,
    PaymentDetail,
    SubmitConsentRequest,
)
from truelayer.errors import ConfigurationError
from truelayer.handlers.auth import PAYMENTS_SCOPES
from truelayer.handlers.base import ApiHandler

if TYPE_CHECKING:
    from truelayer.entities.common import ProblemDetails
    from truelayer.entities.payments import (
        CreatePaymentRequest,
        StartAuthorizationFlowRequest,
        SubmitFormRequest,
        SubmitProviderSelectionRequest,
    )
    from truelayer.result import ResultEnvelope


def _payment_path(payment_id: str, suffix: str = "") -> str:
    if not payment_id or not payment_id.strip():
        raise ConfigurationError(
            "payment id must be not empty",
            hint="Pass the id returned by create_payment().",
        )
    return f"/payments/{quote(payment_id, safe='')}{suffix}"


class PaymentsHandler(ApiHandler):
    """Create payments and drive their authorization flow.

    Every state-changing call is signed and carries a fresh idempotency key;
    the key is kept across transport retries of that call.
    """

    async def create_payment(
        self, request: CreatePaymentRequest
    ) -> ResultEnvelope[CreatePaymentResponse, ProblemDetails]:
        return await self._execute(
            "POST",
            "/payments",
            response_type=CreatePaymentResponse,
            scopes=PAYMENTS_SCOPES,
            body=request,
            signed=True,
            idempotent=True,
        )

    async def get_payment(
        self, payment_id: str
    ) -> ResultEnvelope[PaymentDetail, ProblemDetails]:
        return await self._execute(
            "GET",
            _payment_path(payment_id),
            response_type=PaymentDetail,
            scopes=PAYMENTS_SCOPES,
        )

    async def start_authorization_flow(
        self, payment_id: str, request: StartAuthorizationFlowRequest
    ) -> ResultEnvelope[AuthorizationFlowResponse, ProblemDetails]:
        return await self._execute(
            "POST",
            _payment_path(payment_id, "/authorization-flow"),
            response_type=AuthorizationFlowResponse,
            scopes=PAYMENTS_SCOPES,
            body=request,
            signed=True,
            idempotent=True,
        )

    async def submit_provider_selection(
        self, payment_id: str, request: SubmitProviderSelectionRequest
    ) -> ResultEnvelope[AuthorizationFlowResponse, ProblemDetails]:
        return await self._submit_action(payment_id, "provider-selection", request)

    async def submit_consent(
        self, payment_id: str, request: SubmitConsentRequest | None = None
    ) -> ResultEnvelope[AuthorizationFlowResponse, ProblemDetails]:
        if request is None:
            request = SubmitConsentRequest()
        return await self._submit_action(payment_id, "consent", request)

    async def submit_form(
        self, payment_id: str, request: SubmitFormRequest
    ) -> ResultEnvelope[AuthorizationFlowResponse, ProblemDetails]:
        return await self._submit_action(payment_id, "form", request)

    async def cancel_payment(self, payment_id: str) -> ResultEnvelope[None, ProblemDetails]:
        """Cancel a payment that has not been executed yet."""
        return await self._execute(
            "POST",
            _payment_path(payment_id, "/actions/cancel"),
            response_type=None,
            scopes=PAYMENTS_SCOPES,
            raw_body=b"{}",
            signed=True,
            idempotent=True,
        )

    async def _submit_action(self, payment_id, action, request):
        return await self._execute(
            "POST",
            _payment_path(payment_id, f"/authorization-flow/actions/{action}"),
            response_type=AuthorizationFlowResponse,
            scopes=PAYMENTS_SCOPES,
            body=request,
            signed=True,
            idempotent=True,
        )
