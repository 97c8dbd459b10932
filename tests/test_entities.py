"""Request serialization and entity invariants."""

from __future__ import annotations

import json

from pydantic import ValidationError
import pytest

from truelayer.entities import (
    AccessToken,
    BankTransfer,
    CreatePaymentRequest,
    CurrencyCode,
    ExternalAccount,
    Iban,
    PreselectedProviderSelection,
    ProblemDetails,
    Remitter,
    SortCodeAccountNumber,
    SubmitProviderSelectionRequest,
    User,
)

pytestmark = pytest.mark.contract


def _request(**overrides) -> CreatePaymentRequest:
    fields = {
        "amount_in_minor": 250,
        "currency": CurrencyCode.EUR,
        "payment_method": BankTransfer(
            provider_selection=PreselectedProviderSelection(
                provider_id="ob-bank",
                remitter=Remitter(
                    account_holder_name="Jane Doe",
                    account_identifier=Iban(iban="GB33BUKB20201555555555"),
                ),
            ),
            beneficiary=ExternalAccount(
                account_holder_name="Shop Ltd",
                reference="order-7",
                account_identifier=SortCodeAccountNumber(
                    sort_code="040668", account_number="00000871"
                ),
            ),
        ),
        "user": User(name="Jane Doe", email="jane@example.com"),
    }
    fields.update(overrides)
    return CreatePaymentRequest(**fields)


def test_request_json_keeps_every_variant_field_and_drops_nulls() -> None:
    body = json.loads(_request().to_json())

    assert body == {
        "amount_in_minor": 250,
        "currency": "EUR",
        "payment_method": {
            "type": "bank_transfer",
            "provider_selection": {
                "type": "preselected",
                "provider_id": "ob-bank",
                "remitter": {
                    "account_holder_name": "Jane Doe",
                    "account_identifier": {"type": "iban", "iban": "GB33BUKB20201555555555"},
                },
            },
            "beneficiary": {
                "type": "external_account",
                "account_holder_name": "Shop Ltd",
                "reference": "order-7",
                "account_identifier": {
                    "type": "sort_code_account_number",
                    "sort_code": "040668",
                    "account_number": "00000871",
                },
            },
        },
        "user": {"name": "Jane Doe", "email": "jane@example.com"},
    }


def test_request_accepts_plain_mappings_for_families() -> None:
    request = _request(
        payment_method={
            "type": "bank_transfer",
            "provider_selection": {"type": "user_selected"},
            "beneficiary": {"type": "merchant_account", "merchant_account_id": "ma-1"},
        }
    )

    transfer = request.payment_method.as_bank_transfer()
    assert transfer.beneficiary is not None
    assert transfer.beneficiary.as_merchant_account().merchant_account_id == "ma-1"


@pytest.mark.parametrize("amount", [0, -5])
def test_request_rejects_non_positive_amounts(amount) -> None:
    with pytest.raises(ValidationError):
        _request(amount_in_minor=amount)


def test_request_rejects_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        SubmitProviderSelectionRequest(provider_id="ob-bank", surprise=True)


def test_entities_are_immutable() -> None:
    request = _request()

    with pytest.raises(ValidationError):
        request.amount_in_minor = 1  # type: ignore[misc]


def test_access_token_repr_redacts_the_token() -> None:
    token = AccessToken(access_token="secret-token", expires_in=3600)

    assert "secret-token" not in repr(token)


def test_problem_details_from_status() -> None:
    problem = ProblemDetails.from_status(502)

    assert (problem.status, problem.title) == (502, "HTTP 502")
