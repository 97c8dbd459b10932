from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

import pytest

from truelayer.errors import ConfigurationError
from truelayer.hpp import HostedPaymentPageLinkBuilder

pytestmark = pytest.mark.unit


def test_link_carries_parameters_in_the_fragment() -> None:
    builder = HostedPaymentPageLinkBuilder("https://payment.truelayer-sandbox.com/")

    link = builder.build("pay-1", "rt-1", "https://shop.test/return?order=7")

    parts = urlsplit(link)
    assert f"{parts.scheme}://{parts.netloc}{parts.path}" == (
        "https://payment.truelayer-sandbox.com/payments"
    )
    assert parts.query == ""
    assert parse_qs(parts.fragment) == {
        "payment_id": ["pay-1"],
        "resource_token": ["rt-1"],
        "return_uri": ["https://shop.test/return?order=7"],
    }


@pytest.mark.parametrize(
    ("args", "message"),
    [
        (("", "rt", "https://r"), "payment id"),
        (("p", " ", "https://r"), "resource token"),
        (("p", "rt", ""), "return uri"),
    ],
)
def test_blank_arguments_are_rejected(args, message) -> None:
    builder = HostedPaymentPageLinkBuilder("https://hpp.test")

    with pytest.raises(ConfigurationError, match=message):
        builder.build(*args)
