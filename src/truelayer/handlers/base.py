"""Handler core: one API operation from request object to ``ResultEnvelope``.

Per call:
1. Generate one idempotency key and, for signed routes, one signature.
2. Obtain a bearer token through the credentials cache (if the route needs one).
3. Send through the transport, retrying only transport failures; every
   attempt reuses the key and signature from step 1.
4. Classify: 2xx decodes into the expected model, any other status decodes
   into ``ProblemDetails`` in the error slot.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import TYPE_CHECKING, Any, TypeVar
from urllib.parse import urlencode
import uuid

from truelayer._http import (
    AUTHORIZATION,
    CONTENT_TYPE,
    IDEMPOTENCY_KEY,
    JSON_CONTENT_TYPE,
    TL_SIGNATURE,
    USER_AGENT,
    user_agent,
)
from truelayer.entities.common import ProblemDetails
from truelayer.errors import ConfigurationError, DecodeError
from truelayer.result import ResultEnvelope
from truelayer.retry import RetryPolicy, retry_async
from truelayer.signing import SignaturePayload
from truelayer.variants import decode_model

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

    from pydantic import BaseModel

    from truelayer.config import SigningOptions
    from truelayer.credentials import CachedCredential
    from truelayer.entities.common import RequestBody
    from truelayer.transport import RawResponse, Transport

M = TypeVar("M", bound="BaseModel")

logger = logging.getLogger(__name__)


def new_idempotency_key() -> str:
    """Default idempotency key generator."""
    return str(uuid.uuid4())


class ApiHandler:
    """Shared request pipeline for one API base URI."""

    def __init__(
        self,
        *,
        transport: Transport,
        base_uri: str,
        retry: RetryPolicy | None = None,
        token_provider: Callable[[Iterable[str]], Awaitable[CachedCredential]]
        | None = None,
        on_unauthorized: Callable[[Iterable[str], CachedCredential], None]
        | None = None,
        signing: SigningOptions | None = None,
        idempotency_key_factory: Callable[[], str] = new_idempotency_key,
    ) -> None:
        """Initialize the pipeline's collaborators."""
        self._transport = transport
        self._base_uri = base_uri.rstrip("/")
        self._retry = retry or RetryPolicy()
        self._token_provider = token_provider
        self._on_unauthorized = on_unauthorized
        self._signing = signing
        self._idempotency_key_factory = idempotency_key_factory

    @property
    def signing_options(self) -> SigningOptions | None:
        """Signing options used for signed routes."""
        return self._signing

    async def _execute(
        self,
        method: str,
        path: str,
        *,
        response_type: type[M] | None,
        scopes: Iterable[str] = (),
        body: RequestBody | None = None,
        raw_body: bytes | None = None,
        content_type: str = JSON_CONTENT_TYPE,
        query: Mapping[str, Any] | None = None,
        signed: bool = False,
        idempotent: bool = False,
    ) -> ResultEnvelope[M, ProblemDetails]:
        """Run one logical API operation end to end."""
        scopes = tuple(scopes)
        content = body.to_json() if body is not None else raw_body

        headers: dict[str, str] = {USER_AGENT: user_agent()}
        if content is not None:
            headers[CONTENT_TYPE] = content_type
        if idempotent:
            headers[IDEMPOTENCY_KEY] = self._idempotency_key_factory()
        if signed:
            headers[TL_SIGNATURE] = self._sign(method, path, content, headers)
        credential: CachedCredential | None = None
        if scopes:
            if self._token_provider is None:
                raise ConfigurationError(
                    f"{method} {path} requires an access token but no token provider is set"
                )
            credential = await self._token_provider(scopes)
            headers[AUTHORIZATION] = f"Bearer {credential.access_token}"

        url = self._base_uri + path
        if query:
            params = {k: v for k, v in query.items() if v is not None}
            if params:
                url = f"{url}?{urlencode(params)}"

        response = await retry_async(
            lambda: self._transport.send(method, url, headers=headers, body=content),
            policy=self._retry,
            label=f"{method} {path}",
        )
        logger.debug("%s %s -> %s", method, path, response.status_code)

        if (
            response.status_code == 401
            and credential is not None
            and self._on_unauthorized is not None
        ):
            self._on_unauthorized(scopes, credential)
        return _classify(response, response_type)

    def _sign(
        self, method: str, path: str, content: bytes | None, headers: dict[str, str]
    ) -> str:
        if self._signing is None:
            raise ConfigurationError(
                "signing options must be set",
                hint="Pass Config(signing=SigningOptions(...)) to call signed endpoints.",
            )
        signed_headers = {
            name: value for name, value in headers.items() if name == IDEMPOTENCY_KEY
        }
        payload = SignaturePayload(
            method=method.upper(),
            path=path,
            body=content or b"",
            headers=signed_headers,
        )
        return self._signing.signer(payload, self._signing)


def _classify(
    response: RawResponse, response_type: type[M] | None
) -> ResultEnvelope[M, ProblemDetails]:
    payload = response.json()
    if response.is_success:
        if response_type is None or payload is None:
            return ResultEnvelope.success(None)
        return ResultEnvelope.success(decode_model(response_type, payload))

    if isinstance(payload, Mapping):
        try:
            problem = decode_model(ProblemDetails, payload)
        except DecodeError as e:
            logger.debug("Error body does not match ProblemDetails: %s", e)
            problem = ProblemDetails.from_body(response.status_code, payload)
        if problem.status is None:
            problem = problem.model_copy(update={"status": response.status_code})
    else:
        problem = ProblemDetails.from_status(response.status_code)
    logger.debug(
        "API error %s: %s (trace_id=%s)",
        response.status_code,
        problem.title,
        problem.trace_id,
    )
    return ResultEnvelope.failure(problem)
