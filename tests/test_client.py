"""End-to-end client behavior through the real httpx transport."""

from __future__ import annotations

import asyncio
from dataclasses import replace
import json

from conftest import API_URI, AUTH_URI, HPP_URI, StubTransport
import httpx
import pytest

from truelayer import TrueLayerClient
from truelayer.config import Config
from truelayer.credentials import NoopCredentialsCache, SimpleCredentialsCache
from truelayer.entities import (
    BankTransfer,
    CreatePaymentRequest,
    CurrencyCode,
    MerchantAccount,
    User,
    UserSelectedProviderSelection,
)
from truelayer.errors import ConfigurationError, IssuanceError
from truelayer.transport import HttpxTransport

pytestmark = pytest.mark.integration


def _payment_request() -> CreatePaymentRequest:
    return CreatePaymentRequest(
        amount_in_minor=1,
        currency=CurrencyCode.GBP,
        payment_method=BankTransfer(
            provider_selection=UserSelectedProviderSelection(),
            beneficiary=MerchantAccount(merchant_account_id="ma-1"),
        ),
        user=User(name="Jane Doe", email="jane@example.com"),
    )


class FakeTrueLayer:
    """In-memory auth + payments API behind ``httpx.MockTransport``."""

    def __init__(self) -> None:
        self.tokens_issued = 0
        self.requests: list[httpx.Request] = []
        self.payments_status = 201
        self.payments_body: dict[str, object] = {
            "id": "pay-1",
            "status": "authorization_required",
            "resource_token": "rt-1",
            "user": {"id": "user-1"},
        }
        self.token_status = 200
        self.fail_connects = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "auth.test" and request.url.path == "/connect/token":
            if self.token_status != 200:
                return httpx.Response(
                    self.token_status, json={"title": "invalid_client", "status": 401}
                )
            self.tokens_issued += 1
            return httpx.Response(
                200,
                json={
                    "access_token": f"at-{self.tokens_issued}",
                    "expires_in": 3600,
                    "token_type": "Bearer",
                },
            )
        if request.url.host == "api.test" and request.url.path == "/payments":
            if self.fail_connects:
                self.fail_connects -= 1
                raise httpx.ConnectError("connection refused")
            return httpx.Response(self.payments_status, json=self.payments_body)
        return httpx.Response(404, json={"title": "Not Found", "status": 404})

    def api_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == "api.test"]


@pytest.fixture
def fake_tl() -> FakeTrueLayer:
    return FakeTrueLayer()


@pytest.fixture
def client_for(mock_api, fake_tl):
    def _build(config: Config, **kwargs) -> TrueLayerClient:
        transport = HttpxTransport(mock_api(fake_tl))
        return TrueLayerClient(config, transport=transport, **kwargs)

    return _build


@pytest.mark.asyncio
async def test_create_payment_then_build_hpp_link(config, client_for, fake_tl) -> None:
    async with client_for(config) as tl:
        result = await tl.payments.create_payment(_payment_request())

        assert not result.is_error()
        assert result.data is not None
        created = result.data.as_authorization_required()
        link = tl.hpp.build(created.id, created.resource_token, "https://shop.test/done")

    assert link.startswith(f"{HPP_URI}/payments#payment_id=pay-1&resource_token=rt-1")
    assert fake_tl.tokens_issued == 1
    [payment_call] = fake_tl.api_requests()
    assert payment_call.headers["Authorization"] == "Bearer at-1"
    assert payment_call.headers["Tl-Signature"] == "sig:kid-1:1"
    assert json.loads(payment_call.content)["payment_method"]["beneficiary"] == {
        "type": "merchant_account",
        "merchant_account_id": "ma-1",
    }


@pytest.mark.asyncio
async def test_authorized_status_decodes_to_authorized(config, client_for, fake_tl) -> None:
    fake_tl.payments_body = {"id": "pay-2", "status": "authorized", "user": {"id": "u"}}

    async with client_for(config) as tl:
        result = await tl.payments.create_payment(_payment_request())

    assert result.data is not None
    assert result.data.is_authorized()
    assert not result.data.is_authorization_required()


@pytest.mark.asyncio
async def test_concurrent_calls_share_one_token_issuance(config, client_for, fake_tl) -> None:
    async with client_for(config) as tl:
        results = await asyncio.gather(
            *(tl.payments.create_payment(_payment_request()) for _ in range(5))
        )

    assert all(not r.is_error() for r in results)
    assert fake_tl.tokens_issued == 1
    keys = {r.headers["Idempotency-Key"] for r in fake_tl.api_requests()}
    assert len(keys) == 5


@pytest.mark.asyncio
async def test_unauthorized_problem_details_round_trip(config, client_for, fake_tl) -> None:
    fake_tl.payments_status = 401
    fake_tl.payments_body = {
        "type": "https://docs.truelayer.com/docs/error-types#unauthenticated",
        "title": "Unauthorized",
        "status": 401,
        "trace_id": "trace-401",
    }

    async with client_for(config) as tl:
        first = await tl.payments.create_payment(_payment_request())
        await tl.payments.create_payment(_payment_request())

    assert first.is_error()
    assert first.error is not None
    assert first.error.model_dump(exclude_none=True) == fake_tl.payments_body
    assert fake_tl.tokens_issued == 2


@pytest.mark.asyncio
async def test_connection_failure_is_retried_with_the_same_key(
    config, client_for, fake_tl
) -> None:
    fake_tl.fail_connects = 1

    async with client_for(config) as tl:
        result = await tl.payments.create_payment(_payment_request())

    assert not result.is_error()
    attempts = fake_tl.api_requests()
    assert len(attempts) == 2
    assert attempts[0].headers["Idempotency-Key"] == attempts[1].headers["Idempotency-Key"]
    assert attempts[0].headers["Tl-Signature"] == attempts[1].headers["Tl-Signature"]


@pytest.mark.asyncio
async def test_token_rejection_raises_issuance_error(config, client_for, fake_tl) -> None:
    fake_tl.token_status = 401

    async with client_for(config) as tl:
        with pytest.raises(IssuanceError) as exc:
            await tl.payments.create_payment(_payment_request())

    assert exc.value.status_code == 401
    assert fake_tl.api_requests() == []


@pytest.mark.asyncio
async def test_disabled_caching_fetches_a_token_per_call(config, client_for, fake_tl) -> None:
    async with client_for(replace(config, credentials_caching=False)) as tl:
        assert isinstance(tl.credentials_cache, NoopCredentialsCache)
        await tl.payments.create_payment(_payment_request())
        await tl.payments.create_payment(_payment_request())

    assert fake_tl.tokens_issued == 2


@pytest.mark.asyncio
async def test_auth_handler_issues_tokens_directly(config, client_for, fake_tl) -> None:
    async with client_for(config) as tl:
        result = await tl.auth.get_oauth_token(["payments"])

    assert result.data is not None
    assert result.data.access_token == "at-1"
    assert fake_tl.requests[0].url == httpx.URL(f"{AUTH_URI}/connect/token")


def test_handlers_are_stable_per_client(config) -> None:
    tl = TrueLayerClient(config, transport=StubTransport())

    assert tl.auth is tl.auth
    assert tl.payments is tl.payments
    assert tl.merchant_accounts is tl.merchant_accounts
    assert tl.mandates is tl.mandates
    assert tl.payments_providers is tl.payments_providers
    assert tl.common is tl.common
    assert tl.hpp is tl.hpp
    assert isinstance(tl.credentials_cache, SimpleCredentialsCache)


def test_client_without_signing_exposes_only_unsigned_surfaces(credentials, environment) -> None:
    tl = TrueLayerClient(
        Config(credentials=credentials, environment=environment),
        transport=StubTransport(),
    )

    assert tl.auth is not None
    assert tl.hpp.build("p", "rt", "https://r").startswith(HPP_URI)
    with pytest.raises(ConfigurationError, match="signing options must be set"):
        _ = tl.payments
    for name in ("merchant_accounts", "mandates", "payments_providers"):
        with pytest.raises(ConfigurationError, match="signing options must be set"):
            getattr(tl, name)
    assert tl.common is not None


def test_explicit_cache_wins_over_config(config) -> None:
    cache = NoopCredentialsCache()

    tl = TrueLayerClient(config, transport=StubTransport(), credentials_cache=cache)

    assert tl.credentials_cache is cache


@pytest.mark.asyncio
async def test_supplied_transport_is_left_open(config) -> None:
    transport = StubTransport()

    async with TrueLayerClient(config, transport=transport):
        pass

    assert transport.closed is False


@pytest.mark.asyncio
async def test_payments_base_uri_comes_from_the_environment(config, client_for, fake_tl) -> None:
    async with client_for(config) as tl:
        await tl.payments.create_payment(_payment_request())

    assert str(fake_tl.api_requests()[0].url) == f"{API_URI}/payments"


@pytest.mark.asyncio
async def test_provider_lookup_uses_the_client_id_not_a_token(
    config, client_for, fake_tl
) -> None:
    async with client_for(config) as tl:
        result = await tl.payments_providers.get_provider("ob-bank")

    assert result.is_error()
    [lookup] = fake_tl.api_requests()
    assert lookup.url.path == "/payments-providers/ob-bank"
    assert lookup.url.params["client_id"] == "client-123"
    assert "Authorization" not in lookup.headers
    assert fake_tl.tokens_issued == 0
