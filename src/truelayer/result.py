"""Result envelope: success-or-error outcome of every API call."""

from __future__ import annotations

import dataclasses
from typing import Any

from truelayer.errors import APIError


@dataclasses.dataclass(frozen=True, slots=True)
class ResultEnvelope[T, E]:
    """Outcome of an API call: either ``data`` or ``error``, never both.

    ``is_error()`` is the sole discriminant. Exactly one slot is populated,
    with one exception: a successful call without a response body (HTTP 204,
    or an operation that returns nothing) carries neither, and ``data`` is
    None. An error envelope always has ``error`` set.

    Example:
        result = await client.payments.get_payment("a-payment-id")
        if result.is_error():
            print(result.error.title)
        elif result.data.is_settled():
            ...
    """

    data: T | None = None
    error: E | None = None

    def __post_init__(self) -> None:
        """Reject envelopes carrying both a value and an error."""
        if self.data is not None and self.error is not None:
            raise ValueError("ResultEnvelope cannot hold both data and error")

    @classmethod
    def success(cls, data: T | None = None) -> ResultEnvelope[T, E]:
        """Build a successful envelope."""
        return cls(data=data)

    @classmethod
    def failure(cls, error: E) -> ResultEnvelope[T, E]:
        """Build an error envelope."""
        if error is None:
            raise ValueError("ResultEnvelope.failure requires an error value")
        return cls(error=error)

    def is_error(self) -> bool:
        """Return True when this envelope carries an API error."""
        return self.error is not None

    def unwrap(self) -> T | None:
        """Return ``data``, raising ``APIError`` for an error envelope."""
        if self.error is None:
            return self.data
        status = _attr(self.error, "status")
        title = _attr(self.error, "title") or "API call failed"
        status_note = f" (status={status})" if isinstance(status, int) else ""
        raise APIError(
            f"{title}{status_note}",
            hint=_attr(self.error, "detail"),
            status_code=status if isinstance(status, int) else None,
            problem=self.error,
        )


def _attr(obj: Any, name: str) -> Any:
    return getattr(obj, name, None)
