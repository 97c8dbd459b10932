"""Payment methods and provider selection."""

from __future__ import annotations

from typing import Literal

from truelayer.entities.beneficiary import Beneficiary, Remitter
from truelayer.variants import Entity, Tagged, Variant


class ProviderFilter(Entity):
    """Restricts which providers the user may pick."""

    countries: list[str] | None = None
    release_channel: str | None = None
    customer_segments: list[str] | None = None
    provider_ids: list[str] | None = None


class ProviderSelection(Variant, discriminator="type"):
    """Whether the user picks the bank or the merchant already did."""

    type: str | None = None

    def is_user_selected(self) -> bool:
        return self.is_variant(UserSelectedProviderSelection)

    def as_user_selected(self) -> UserSelectedProviderSelection:
        return self.as_variant(UserSelectedProviderSelection)

    def is_preselected(self) -> bool:
        return self.is_variant(PreselectedProviderSelection)

    def as_preselected(self) -> PreselectedProviderSelection:
        return self.as_variant(PreselectedProviderSelection)


class UserSelectedProviderSelection(ProviderSelection):
    type: Literal["user_selected"] = "user_selected"
    filter: ProviderFilter | None = None
    #: Populated in responses once the user has chosen.
    provider_id: str | None = None
    scheme_id: str | None = None


class PreselectedProviderSelection(ProviderSelection):
    type: Literal["preselected"] = "preselected"
    provider_id: str | None = None
    scheme_id: str | None = None
    remitter: Remitter | None = None


class PaymentMethod(Variant, discriminator="type"):
    """How the payment is executed."""

    type: str | None = None

    def is_bank_transfer(self) -> bool:
        return self.is_variant(BankTransfer)

    def as_bank_transfer(self) -> BankTransfer:
        return self.as_variant(BankTransfer)

    def is_mandate(self) -> bool:
        return self.is_variant(Mandate)

    def as_mandate(self) -> Mandate:
        return self.as_variant(Mandate)


class BankTransfer(PaymentMethod):
    type: Literal["bank_transfer"] = "bank_transfer"
    provider_selection: Tagged[ProviderSelection] | None = None
    beneficiary: Tagged[Beneficiary] | None = None


class Mandate(PaymentMethod):
    """Payment taken against an existing mandate."""

    type: Literal["mandate"] = "mandate"
    mandate_id: str | None = None
    reference: str | None = None
