"""TrueLayer client: wires configuration, transport, cache and handlers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

from truelayer.credentials import NoopCredentialsCache, SimpleCredentialsCache
from truelayer.errors import ConfigurationError
from truelayer.handlers.auth import AuthenticationHandler, TokenSource
from truelayer.handlers.base import new_idempotency_key
from truelayer.handlers.common import CommonHandler
from truelayer.handlers.mandates import MandatesHandler
from truelayer.handlers.merchant_accounts import MerchantAccountsHandler
from truelayer.handlers.payments import PaymentsHandler
from truelayer.handlers.payments_providers import PaymentsProvidersHandler
from truelayer.hpp import HostedPaymentPageLinkBuilder
from truelayer.transport import HttpxTransport

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from truelayer.config import Config
    from truelayer.credentials import CredentialsCache
    from truelayer.transport import Transport

logger = logging.getLogger(__name__)


class TrueLayerClient:
    """Entry point to the TrueLayer APIs.

    Example:
        async with TrueLayerClient(config) as tl:
            result = await tl.payments.create_payment(request)
            if result.is_error():
                print(result.error.title)
            elif result.data.is_authorization_required():
                link = tl.hpp.build(result.data.id, result.data.resource_token, uri)

    Without ``Config.signing`` only ``auth``, ``hpp`` and ``common`` are
    available.
    """

    def __init__(
        self,
        config: Config,
        *,
        transport: Transport | None = None,
        credentials_cache: CredentialsCache | None = None,
        idempotency_key_factory: Callable[[], str] = new_idempotency_key,
    ) -> None:
        """Build the handlers for *config*.

        A supplied *transport* is not closed by ``aclose``.
        """
        self._config = config
        self._owns_transport = transport is None
        if transport is None:
            transport = HttpxTransport(
                timeout_s=config.timeout_s, http_logs=config.http_logs
            )
        self._transport = transport

        if credentials_cache is None:
            if config.credentials_caching:
                credentials_cache = SimpleCredentialsCache(
                    safety_margin_s=config.token_safety_margin_s
                )
            else:
                credentials_cache = NoopCredentialsCache()
        self._credentials_cache = credentials_cache

        environment = config.api_environment
        self._auth = AuthenticationHandler(
            credentials=config.credentials,
            transport=transport,
            base_uri=environment.auth_api_uri,
            retry=config.retry,
            idempotency_key_factory=idempotency_key_factory,
        )
        self._tokens = TokenSource(self._auth, credentials_cache)
        self._hpp = HostedPaymentPageLinkBuilder(environment.hpp_uri)
        self._common = CommonHandler(
            transport=transport,
            base_uri=environment.payments_api_uri,
            retry=config.retry,
            idempotency_key_factory=idempotency_key_factory,
        )

        self._payments: PaymentsHandler | None = None
        self._merchant_accounts: MerchantAccountsHandler | None = None
        self._mandates: MandatesHandler | None = None
        self._payments_providers: PaymentsProvidersHandler | None = None
        if config.signing is not None:
            shared = {
                "transport": transport,
                "base_uri": environment.payments_api_uri,
                "retry": config.retry,
                "token_provider": self._tokens,
                "on_unauthorized": self._tokens.invalidate,
                "signing": config.signing,
                "idempotency_key_factory": idempotency_key_factory,
            }
            self._payments = PaymentsHandler(**shared)
            self._merchant_accounts = MerchantAccountsHandler(**shared)
            self._mandates = MandatesHandler(**shared)
            self._payments_providers = PaymentsProvidersHandler(
                client_id=cast("str", config.credentials.client_id),
                transport=transport,
                base_uri=environment.payments_api_uri,
                retry=config.retry,
                idempotency_key_factory=idempotency_key_factory,
            )

        logger.debug(
            "TrueLayerClient ready (auth=%s, payments=%s, caching=%s)",
            environment.auth_api_uri,
            environment.payments_api_uri,
            type(credentials_cache).__name__,
        )

    @property
    def config(self) -> Config:
        return self._config

    @property
    def credentials_cache(self) -> CredentialsCache:
        return self._credentials_cache

    @property
    def auth(self) -> AuthenticationHandler:
        """Authentication API handler."""
        return self._auth

    @property
    def hpp(self) -> HostedPaymentPageLinkBuilder:
        """Hosted payment page link builder."""
        return self._hpp

    @property
    def payments(self) -> PaymentsHandler:
        """Payments API handler; requires signing options."""
        if self._payments is None:
            raise _signing_required()
        return self._payments

    @property
    def merchant_accounts(self) -> MerchantAccountsHandler:
        """Merchant accounts API handler; requires signing options."""
        if self._merchant_accounts is None:
            raise _signing_required()
        return self._merchant_accounts

    @property
    def mandates(self) -> MandatesHandler:
        """Mandates API handler; requires signing options."""
        if self._mandates is None:
            raise _signing_required()
        return self._mandates

    @property
    def payments_providers(self) -> PaymentsProvidersHandler:
        """Payments providers API handler; requires signing options."""
        if self._payments_providers is None:
            raise _signing_required()
        return self._payments_providers

    @property
    def common(self) -> CommonHandler:
        """Endpoints available with or without signing options."""
        return self._common

    async def aclose(self) -> None:
        """Release the transport if this client created it."""
        if self._owns_transport:
            await self._transport.aclose()

    async def __aenter__(self) -> TrueLayerClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


def _signing_required() -> ConfigurationError:
    return ConfigurationError(
        "signing options must be set",
        hint="Pass Config(signing=SigningOptions(key_id=..., private_key=..., signer=...)).",
    )
