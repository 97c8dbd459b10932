"""HTTP transport seam and its default httpx implementation."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import logging
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import httpx

from truelayer._http import IDEMPOTENCY_KEY, redact_headers
from truelayer.errors import TransportError

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

# httpx failures after which the request may simply not have arrived.
_RETRYABLE_HTTPX_ERRORS = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


@dataclass(frozen=True)
class RawResponse:
    """A server response before any decoding."""

    status_code: int
    content: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        """True for 2xx status codes."""
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Parse the body as JSON; an empty body is *None*.

        Raises:
            TransportError: If the body is not valid JSON.
        """
        if not self.content.strip():
            return None
        try:
            return json.loads(self.content)
        except ValueError as e:
            preview = self.content[:200].decode("utf-8", errors="replace")
            raise TransportError(
                f"Malformed response body (status={self.status_code}): {preview}",
                hint="The server answered with a body that is not JSON.",
            ) from e


@runtime_checkable
class Transport(Protocol):
    """Sends one HTTP request and returns the raw response."""

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        body: bytes | None = None,
    ) -> RawResponse:
        """Send a request; raise ``TransportError`` when no response arrives."""
        ...

    async def aclose(self) -> None:
        """Release underlying connections."""
        ...


class HttpxTransport:
    """Transport backed by ``httpx.AsyncClient``.

    When no client is passed, one is created and owned (closed by
    ``aclose``). A caller-supplied client is left open.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        timeout_s: float | None = None,
        http_logs: bool = False,
    ) -> None:
        """Initialize with an optional preconfigured client."""
        self._owns_client = client is None
        if client is None:
            timeout = (
                httpx.Timeout(timeout_s)
                if timeout_s is not None
                else httpx.Timeout(30.0, connect=10.0)
            )
            client = httpx.AsyncClient(timeout=timeout)
        if http_logs:
            hooks = client.event_hooks
            hooks.setdefault("request", []).append(_log_request)
            hooks.setdefault("response", []).append(_log_response)
            client.event_hooks = hooks
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """The underlying httpx client."""
        return self._client

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        body: bytes | None = None,
    ) -> RawResponse:
        """Send a request through httpx."""
        try:
            response = await self._client.request(
                method, url, headers=dict(headers), content=body
            )
        except httpx.RequestError as e:
            retryable = isinstance(e, _RETRYABLE_HTTPX_ERRORS)
            raise TransportError(
                f"{method} {url} failed: {type(e).__name__}: {e}",
                hint="Check network connectivity and the configured environment.",
                method=method,
                url=url,
                retryable=retryable,
            ) from e
        return RawResponse(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
        )

    async def aclose(self) -> None:
        """Close the client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()


async def _log_request(request: httpx.Request) -> None:
    logger.info(
        "--> %s %s idempotency_key=%s headers=%s",
        request.method,
        request.url,
        request.headers.get(IDEMPOTENCY_KEY),
        redact_headers(dict(request.headers)),
    )


async def _log_response(response: httpx.Response) -> None:
    request = response.request
    logger.info(
        "<-- %s %s %s idempotency_key=%s",
        response.status_code,
        request.method,
        request.url,
        request.headers.get(IDEMPOTENCY_KEY),
    )
