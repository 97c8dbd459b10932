"""Payments API DTOs: create/get responses, authorization flow, request bodies."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any, Literal

from pydantic import Field

from truelayer.entities.beneficiary import PaymentSource
from truelayer.entities.common import CurrencyCode, RequestBody, User
from truelayer.entities.payment_method import PaymentMethod
from truelayer.variants import Entity, Tagged, Variant


class PaymentStatus(StrEnum):
    """Lifecycle states of a payment."""

    AUTHORIZATION_REQUIRED = "authorization_required"
    AUTHORIZING = "authorizing"
    AUTHORIZED = "authorized"
    EXECUTED = "executed"
    SETTLED = "settled"
    FAILED = "failed"


# =============================================================================
# Authorization flow
# =============================================================================


class Provider(Entity):
    """A bank the user can authorize the payment with."""

    provider_id: str | None = None
    display_name: str | None = None
    icon_uri: str | None = None
    logo_uri: str | None = None
    bg_color: str | None = None
    country_code: str | None = None


class Action(Variant, discriminator="type"):
    """Next step the user has to complete in the authorization flow."""

    type: str | None = None

    def is_provider_selection(self) -> bool:
        return self.is_variant(ProviderSelectionAction)

    def as_provider_selection(self) -> ProviderSelectionAction:
        return self.as_variant(ProviderSelectionAction)

    def is_redirect(self) -> bool:
        return self.is_variant(RedirectAction)

    def as_redirect(self) -> RedirectAction:
        return self.as_variant(RedirectAction)

    def is_consent(self) -> bool:
        return self.is_variant(ConsentAction)

    def as_consent(self) -> ConsentAction:
        return self.as_variant(ConsentAction)

    def is_form(self) -> bool:
        return self.is_variant(FormAction)

    def as_form(self) -> FormAction:
        return self.as_variant(FormAction)

    def is_wait(self) -> bool:
        return self.is_variant(WaitAction)

    def as_wait(self) -> WaitAction:
        return self.as_variant(WaitAction)


class ProviderSelectionAction(Action):
    type: Literal["provider_selection"] = "provider_selection"
    providers: list[Provider] | None = None


class RedirectAction(Action):
    type: Literal["redirect"] = "redirect"
    uri: str | None = None
    metadata: dict[str, Any] | None = None


class ConsentAction(Action):
    type: Literal["consent"] = "consent"
    subsequent_action_hint: str | None = None
    requirements: dict[str, Any] | None = None


class FormAction(Action):
    type: Literal["form"] = "form"
    inputs: list[dict[str, Any]] | None = None


class WaitAction(Action):
    type: Literal["wait"] = "wait"


class AuthorizationFlowActions(Entity):
    next: Tagged[Action] | None = None


class AuthorizationFlow(Entity):
    actions: AuthorizationFlowActions | None = None
    configuration: dict[str, Any] | None = None


class AuthorizationFlowResponse(Variant, discriminator="status", default="authorizing"):
    """Outcome of starting or advancing an authorization flow.

    Unknown statuses decode as ``authorizing``.
    """

    status: str | None = None
    authorization_flow: AuthorizationFlow | None = None

    def is_authorizing(self) -> bool:
        return self.is_variant(AuthorizationFlowAuthorizing)

    def as_authorizing(self) -> AuthorizationFlowAuthorizing:
        return self.as_variant(AuthorizationFlowAuthorizing)

    def is_failed(self) -> bool:
        return self.is_variant(AuthorizationFlowFailed)

    def as_failed(self) -> AuthorizationFlowFailed:
        return self.as_variant(AuthorizationFlowFailed)


class AuthorizationFlowAuthorizing(AuthorizationFlowResponse):
    status: Literal["authorizing"] = "authorizing"


class AuthorizationFlowFailed(AuthorizationFlowResponse):
    status: Literal["failed"] = "failed"
    failure_stage: str | None = None
    failure_reason: str | None = None


# =============================================================================
# Create payment
# =============================================================================


class CreatePaymentResponse(Variant, discriminator="status"):
    """Immediate result of creating a payment."""

    id: str | None = None
    user: User | None = None
    resource_token: str | None = None
    status: str | None = None

    def is_authorization_required(self) -> bool:
        return self.is_variant(CreatePaymentAuthorizationRequired)

    def as_authorization_required(self) -> CreatePaymentAuthorizationRequired:
        return self.as_variant(CreatePaymentAuthorizationRequired)

    def is_authorized(self) -> bool:
        return self.is_variant(CreatePaymentAuthorized)

    def as_authorized(self) -> CreatePaymentAuthorized:
        return self.as_variant(CreatePaymentAuthorized)

    def is_failed(self) -> bool:
        return self.is_variant(CreatePaymentFailed)

    def as_failed(self) -> CreatePaymentFailed:
        return self.as_variant(CreatePaymentFailed)


class CreatePaymentAuthorizationRequired(CreatePaymentResponse):
    status: Literal["authorization_required"] = "authorization_required"


class CreatePaymentAuthorized(CreatePaymentResponse):
    status: Literal["authorized"] = "authorized"


class CreatePaymentFailed(CreatePaymentResponse):
    status: Literal["failed"] = "failed"
    failure_stage: str | None = None
    failure_reason: str | None = None


# =============================================================================
# Payment detail
# =============================================================================


class PaymentDetail(Variant, discriminator="status"):
    """A payment as returned by ``GET /payments/{id}``."""

    id: str | None = None
    amount_in_minor: int | None = None
    currency: str | None = None
    user: User | None = None
    payment_method: Tagged[PaymentMethod] | None = None
    created_at: datetime | None = None
    metadata: dict[str, str] | None = None
    status: str | None = None

    def is_authorization_required(self) -> bool:
        return self.is_variant(PaymentAuthorizationRequired)

    def as_authorization_required(self) -> PaymentAuthorizationRequired:
        return self.as_variant(PaymentAuthorizationRequired)

    def is_authorizing(self) -> bool:
        return self.is_variant(PaymentAuthorizing)

    def as_authorizing(self) -> PaymentAuthorizing:
        return self.as_variant(PaymentAuthorizing)

    def is_authorized(self) -> bool:
        return self.is_variant(PaymentAuthorized)

    def as_authorized(self) -> PaymentAuthorized:
        return self.as_variant(PaymentAuthorized)

    def is_executed(self) -> bool:
        return self.is_variant(PaymentExecuted)

    def as_executed(self) -> PaymentExecuted:
        return self.as_variant(PaymentExecuted)

    def is_settled(self) -> bool:
        return self.is_variant(PaymentSettled)

    def as_settled(self) -> PaymentSettled:
        return self.as_variant(PaymentSettled)

    def is_failed(self) -> bool:
        return self.is_variant(PaymentFailed)

    def as_failed(self) -> PaymentFailed:
        return self.as_variant(PaymentFailed)


class PaymentAuthorizationRequired(PaymentDetail):
    status: Literal["authorization_required"] = "authorization_required"


class PaymentAuthorizing(PaymentDetail):
    status: Literal["authorizing"] = "authorizing"
    authorization_flow: AuthorizationFlow | None = None


class PaymentAuthorized(PaymentDetail):
    status: Literal["authorized"] = "authorized"
    authorization_flow: AuthorizationFlow | None = None


class PaymentExecuted(PaymentDetail):
    status: Literal["executed"] = "executed"
    executed_at: datetime | None = None
    authorization_flow: AuthorizationFlow | None = None


class PaymentSettled(PaymentDetail):
    status: Literal["settled"] = "settled"
    executed_at: datetime | None = None
    settled_at: datetime | None = None
    payment_source: PaymentSource | None = None
    authorization_flow: AuthorizationFlow | None = None


class PaymentFailed(PaymentDetail):
    status: Literal["failed"] = "failed"
    failed_at: datetime | None = None
    failure_stage: str | None = None
    failure_reason: str | None = None
    authorization_flow: AuthorizationFlow | None = None


# =============================================================================
# Request bodies
# =============================================================================


class CreatePaymentRequest(RequestBody):
    """Body of ``POST /payments``."""

    amount_in_minor: int = Field(gt=0)
    currency: CurrencyCode
    payment_method: Tagged[PaymentMethod]
    user: User
    metadata: dict[str, str] | None = None


class RedirectOptions(RequestBody):
    return_uri: str = Field(min_length=1)
    direct_return_uri: str | None = None


class FormOptions(RequestBody):
    input_types: list[str] = Field(min_length=1)


class StartAuthorizationFlowRequest(RequestBody):
    """Capabilities the integration supports for this authorization flow.

    An empty ``provider_selection`` mapping still enables provider selection.
    """

    provider_selection: dict[str, Any] | None = None
    redirect: RedirectOptions | None = None
    form: FormOptions | None = None
    consent: dict[str, Any] | None = None


class SubmitProviderSelectionRequest(RequestBody):
    provider_id: str = Field(min_length=1)
    scheme_id: str | None = None


class SubmitConsentRequest(RequestBody):
    """Records that the user gave consent; the body carries no fields."""


class SubmitFormRequest(RequestBody):
    inputs: dict[str, str] = Field(min_length=1)
