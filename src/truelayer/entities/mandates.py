"""Mandates API DTOs: mandate definitions, constraints and mandate details."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from truelayer.entities.beneficiary import Beneficiary, Remitter
from truelayer.entities.common import CurrencyCode, RequestBody, User
from truelayer.entities.payment_method import ProviderSelection
from truelayer.variants import Entity, Tagged, Variant


class MandateDefinition(Variant, discriminator="type"):
    """What the payer agrees to: the mandate kind plus where money goes."""

    type: str | None = None
    provider_selection: Tagged[ProviderSelection] | None = None
    beneficiary: Tagged[Beneficiary] | None = None
    reference: str | None = None

    def is_sweeping(self) -> bool:
        return self.is_variant(SweepingMandate)

    def as_sweeping(self) -> SweepingMandate:
        return self.as_variant(SweepingMandate)

    def is_commercial(self) -> bool:
        return self.is_variant(CommercialMandate)

    def as_commercial(self) -> CommercialMandate:
        return self.as_variant(CommercialMandate)


class SweepingMandate(MandateDefinition):
    """Moves money between accounts the payer owns."""

    type: Literal["sweeping"] = "sweeping"


class CommercialMandate(MandateDefinition):
    type: Literal["commercial"] = "commercial"


class Limit(Entity):
    maximum_amount: int | None = Field(default=None, gt=0)
    period_alignment: Literal["consent", "calendar"] | None = None


class PeriodicLimits(Entity):
    """Spending caps per period; unset periods are unconstrained."""

    day: Limit | None = None
    week: Limit | None = None
    fortnight: Limit | None = None
    month: Limit | None = None
    half_year: Limit | None = None
    year: Limit | None = None


class Constraints(Entity):
    valid_from: datetime | None = None
    valid_to: datetime | None = None
    maximum_individual_amount: int | None = None
    periodic_limits: PeriodicLimits | None = None


class CreateMandateRequest(RequestBody):
    """Body of ``POST /mandates``."""

    mandate: Tagged[MandateDefinition]
    currency: CurrencyCode
    user: User
    constraints: Constraints
    metadata: dict[str, str] | None = None


class CreateMandateResponse(Entity):
    id: str | None = None
    user: User | None = None
    resource_token: str | None = None


class MandateDetail(Variant, discriminator="status"):
    """A mandate as returned by ``GET /mandates/{id}``."""

    id: str | None = None
    currency: str | None = None
    beneficiary: Tagged[Beneficiary] | None = None
    reference: str | None = None
    user: User | None = None
    provider_selection: Tagged[ProviderSelection] | None = None
    constraints: Constraints | None = None
    created_at: datetime | None = None
    metadata: dict[str, str] | None = None
    status: str | None = None

    def is_authorization_required(self) -> bool:
        return self.is_variant(MandateAuthorizationRequired)

    def as_authorization_required(self) -> MandateAuthorizationRequired:
        return self.as_variant(MandateAuthorizationRequired)

    def is_authorizing(self) -> bool:
        return self.is_variant(MandateAuthorizing)

    def as_authorizing(self) -> MandateAuthorizing:
        return self.as_variant(MandateAuthorizing)

    def is_authorized(self) -> bool:
        return self.is_variant(MandateAuthorized)

    def as_authorized(self) -> MandateAuthorized:
        return self.as_variant(MandateAuthorized)

    def is_failed(self) -> bool:
        return self.is_variant(MandateFailed)

    def as_failed(self) -> MandateFailed:
        return self.as_variant(MandateFailed)

    def is_revoked(self) -> bool:
        return self.is_variant(MandateRevoked)

    def as_revoked(self) -> MandateRevoked:
        return self.as_variant(MandateRevoked)


class MandateAuthorizationRequired(MandateDetail):
    status: Literal["authorization_required"] = "authorization_required"


class MandateAuthorizing(MandateDetail):
    status: Literal["authorizing"] = "authorizing"


class MandateAuthorized(MandateDetail):
    status: Literal["authorized"] = "authorized"
    authorized_at: datetime | None = None
    remitter: Remitter | None = None


class MandateFailed(MandateDetail):
    status: Literal["failed"] = "failed"
    failed_at: datetime | None = None
    failure_stage: str | None = None
    failure_reason: str | None = None


class MandateRevoked(MandateDetail):
    status: Literal["revoked"] = "revoked"
    revoked_at: datetime | None = None
    revocation_source: str | None = None


class Pagination(Entity):
    next_cursor: str | None = None


class ListMandatesResponse(Entity):
    items: list[Tagged[MandateDetail]] = Field(default_factory=list)
    pagination: Pagination | None = None
