"""Exception hierarchy for the TrueLayer SDK.

Expected API failures (non-2xx responses with a problem-details body) are not
exceptions: they travel in the ``error`` slot of a ``ResultEnvelope``. The
classes below cover everything that cannot be handled locally.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator


class TrueLayerError(Exception):
    """Base exception for all SDK errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(TrueLayerError):
    """Client configuration or request construction is invalid."""


class DecodeError(TrueLayerError):
    """A payload cannot be decoded into any variant of its family."""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        family: str | None = None,
        tag: Any = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.family = family
        self.tag = tag


class TypeMismatchError(TrueLayerError):
    """A narrowing accessor was called for a variant the instance is not."""

    def __init__(self, message: str, *, actual: str, expected: str) -> None:
        super().__init__(message, hint=f"Consider using as_{actual}() instead.")
        self.actual = actual
        self.expected = expected


class IssuanceError(TrueLayerError):
    """Fetching an OAuth2 access token failed.

    ``problem`` holds the problem-details body when the auth server answered,
    and is *None* when the failure happened before any response.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        status_code: int | None = None,
        problem: Any = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code = status_code
        self.problem = problem


class TransportError(TrueLayerError):
    """No interpretable server response was received.

    Distinct from an API error body: this means the server said nothing we
    could read (timeout, connection reset, malformed body).
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        method: str | None = None,
        url: str | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message, hint=hint)
        self.method = method
        self.url = url
        self.retryable = retryable


class APIError(TrueLayerError):
    """Raised by ``ResultEnvelope.unwrap()`` for an error envelope."""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        status_code: int | None = None,
        problem: Any = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code = status_code
        self.problem = problem


def _walk_exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield *exc* and its ``__cause__``/``__context__`` chain, with cycle protection."""
    seen: set[int] = set()
    stack: list[BaseException] = [exc]
    while stack:
        cur = stack.pop()
        if id(cur) in seen:
            continue
        seen.add(id(cur))
        yield cur

        cause = cur.__cause__
        if isinstance(cause, BaseException):
            stack.append(cause)
        context = cur.__context__
        if isinstance(context, BaseException):
            stack.append(context)
