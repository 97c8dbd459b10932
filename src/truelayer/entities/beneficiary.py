"""Beneficiaries and the account identifiers that address them."""

from __future__ import annotations

from typing import Literal

from truelayer.variants import Entity, Tagged, Variant


class AccountIdentifier(Variant, discriminator="type"):
    """How a bank account is addressed."""

    type: str | None = None

    def is_sort_code_account_number(self) -> bool:
        return self.is_variant(SortCodeAccountNumber)

    def as_sort_code_account_number(self) -> SortCodeAccountNumber:
        return self.as_variant(SortCodeAccountNumber)

    def is_iban(self) -> bool:
        return self.is_variant(Iban)

    def as_iban(self) -> Iban:
        return self.as_variant(Iban)


class SortCodeAccountNumber(AccountIdentifier):
    type: Literal["sort_code_account_number"] = "sort_code_account_number"
    sort_code: str | None = None
    account_number: str | None = None


class Iban(AccountIdentifier):
    type: Literal["iban"] = "iban"
    iban: str | None = None


class Beneficiary(Variant, discriminator="type"):
    """Who receives the money of a payment."""

    type: str | None = None
    account_holder_name: str | None = None
    reference: str | None = None

    def is_merchant_account(self) -> bool:
        return self.is_variant(MerchantAccount)

    def as_merchant_account(self) -> MerchantAccount:
        return self.as_variant(MerchantAccount)

    def is_external_account(self) -> bool:
        return self.is_variant(ExternalAccount)

    def as_external_account(self) -> ExternalAccount:
        return self.as_variant(ExternalAccount)


class MerchantAccount(Beneficiary):
    """One of the merchant's own TrueLayer accounts."""

    type: Literal["merchant_account"] = "merchant_account"
    merchant_account_id: str | None = None


class ExternalAccount(Beneficiary):
    """Any other bank account."""

    type: Literal["external_account"] = "external_account"
    account_identifier: Tagged[AccountIdentifier] | None = None


class PaymentSource(Entity):
    """The account a payment was made from."""

    id: str | None = None
    account_holder_name: str | None = None
    account_identifiers: list[Tagged[AccountIdentifier]] | None = None


class Remitter(Entity):
    """Payer account details supplied up front."""

    account_holder_name: str | None = None
    account_identifier: Tagged[AccountIdentifier] | None = None
