"""Request signing seam.

The SDK does not implement the signature cryptography. A ``Signer`` receives
the exact bytes about to be sent and returns the ``Tl-Signature`` header.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from truelayer.config import SigningOptions


@dataclass(frozen=True)
class SignaturePayload:
    """The parts of a request covered by its signature."""

    method: str
    path: str
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)


@runtime_checkable
class Signer(Protocol):
    """Produces a signature header value for a request."""

    def __call__(self, payload: SignaturePayload, options: SigningOptions) -> str:
        """Sign *payload* with the key in *options*."""
        ...
