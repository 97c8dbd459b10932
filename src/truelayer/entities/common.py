"""Shared DTOs: problem details, access tokens, users, request bodies."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import ConfigDict, ValidationError

from truelayer.variants import Entity


class CurrencyCode(StrEnum):
    """Currencies accepted by the payments API."""

    GBP = "GBP"
    EUR = "EUR"


class ProblemDetails(Entity):
    """Structured error body returned with non-2xx responses (RFC 7807).

    Unknown members are kept so the error round-trips field for field.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    type: str | None = None
    title: str | None = None
    status: int | None = None
    trace_id: str | None = None
    detail: str | None = None
    errors: dict[str, Any] | list[Any] | None = None

    @classmethod
    def from_status(cls, status: int, title: str | None = None) -> ProblemDetails:
        """Synthesize problem details for an error response without a body."""
        return cls(status=status, title=title or f"HTTP {status}")

    @classmethod
    def from_body(cls, status: int, body: Mapping[str, Any]) -> ProblemDetails:
        """Salvage an error body whose members do not all fit this model.

        Known members with the wrong type are dropped, extension members are
        kept, and ``status``/``title`` fall back to the HTTP status.
        """
        kept: dict[str, Any] = {}
        for name, value in body.items():
            if name in cls.model_fields:
                try:
                    cls.model_validate({name: value})
                except ValidationError:
                    continue
            kept[name] = value
        kept.setdefault("status", status)
        kept.setdefault("title", f"HTTP {status}")
        return cls.model_validate(kept)


class AccessToken(Entity):
    """OAuth2 token issued by the authentication API."""

    access_token: str | None = None
    expires_in: int | None = None
    token_type: str | None = None
    scope: str | None = None

    def __repr__(self) -> str:
        return (
            f"AccessToken(access_token='[REDACTED]', expires_in={self.expires_in!r}, "
            f"token_type={self.token_type!r}, scope={self.scope!r})"
        )


class User(Entity):
    """The payer, as sent and echoed back by the payments API."""

    id: str | None = None
    name: str | None = None
    email: str | None = None
    phone: str | None = None


class RequestBody(Entity):
    """Base for outbound request bodies: strict fields, JSON without nulls."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    def to_json(self) -> bytes:
        """Serialize the exact bytes sent (and signed)."""
        return self.model_dump_json(exclude_none=True).encode()
