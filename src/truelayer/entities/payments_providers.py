"""Payments providers and provider-return DTOs."""

from __future__ import annotations

from typing import Any, Literal

from truelayer.entities.common import RequestBody
from truelayer.variants import Entity, Tagged, Variant


class PaymentsProvider(Entity):
    """A bank as listed by ``GET /payments-providers/{id}``."""

    id: str | None = None
    display_name: str | None = None
    icon_uri: str | None = None
    logo_uri: str | None = None
    bg_color: str | None = None
    country_code: str | None = None
    #: Per-product capability flags, e.g. ``{"payments": {"bank_transfer": {...}}}``.
    capabilities: dict[str, Any] | None = None


class SubmitPaymentReturnsRequest(RequestBody):
    """Query string and fragment the provider redirected the user back with."""

    query: str | None = None
    fragment: str | None = None


class ReturnResource(Variant, discriminator="type"):
    """The resource a provider redirect belongs to."""

    type: str | None = None

    def is_payment(self) -> bool:
        return self.is_variant(PaymentReturnResource)

    def as_payment(self) -> PaymentReturnResource:
        return self.as_variant(PaymentReturnResource)


class PaymentReturnResource(ReturnResource):
    type: Literal["payment"] = "payment"
    payment_id: str | None = None


class SubmitPaymentReturnsResponse(Entity):
    resource: Tagged[ReturnResource] | None = None
