"""Merchant accounts API DTOs."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import Field

from truelayer.entities.beneficiary import AccountIdentifier, PaymentSource, Remitter
from truelayer.variants import Entity, Tagged, Variant


class MerchantAccountDetails(Entity):
    """A merchant account and its balances."""

    id: str | None = None
    currency: str | None = None
    account_identifiers: list[Tagged[AccountIdentifier]] | None = None
    available_balance_in_minor: int | None = None
    current_balance_in_minor: int | None = None
    account_holder_name: str | None = None


class ListMerchantAccountsResponse(Entity):
    items: list[MerchantAccountDetails] = Field(default_factory=list)


class Transaction(Variant, discriminator="type"):
    """A movement of money on a merchant account."""

    type: str | None = None
    id: str | None = None
    currency: str | None = None
    amount_in_minor: int | None = None
    status: str | None = None

    def is_merchant_account_payment(self) -> bool:
        return self.is_variant(MerchantAccountPayment)

    def as_merchant_account_payment(self) -> MerchantAccountPayment:
        return self.as_variant(MerchantAccountPayment)

    def is_external_payment(self) -> bool:
        return self.is_variant(ExternalPayment)

    def as_external_payment(self) -> ExternalPayment:
        return self.as_variant(ExternalPayment)

    def is_payout(self) -> bool:
        return self.is_variant(Payout)

    def as_payout(self) -> Payout:
        return self.as_variant(Payout)


class MerchantAccountPayment(Transaction):
    """Incoming payment created through the payments API."""

    type: Literal["merchant_account_payment"] = "merchant_account_payment"
    settled_at: datetime | None = None
    payment_source: PaymentSource | None = None
    payment_id: str | None = None


class ExternalPayment(Transaction):
    """Incoming payment made outside the payments API."""

    type: Literal["external_payment"] = "external_payment"
    settled_at: datetime | None = None
    remitter: Remitter | None = None
    reference: str | None = None


class Payout(Transaction):
    """Outgoing payout."""

    type: Literal["payout"] = "payout"
    created_at: datetime | None = None
    executed_at: datetime | None = None
    beneficiary: dict[str, Any] | None = None
    context_code: str | None = None
    payout_id: str | None = None


class ListTransactionsResponse(Entity):
    items: list[Tagged[Transaction]] = Field(default_factory=list)
