"""Hosted payment page links."""

from __future__ import annotations

from urllib.parse import urlencode

from truelayer.errors import ConfigurationError


class HostedPaymentPageLinkBuilder:
    """Builds links to the TrueLayer hosted payment page (HPP)."""

    def __init__(self, hpp_uri: str) -> None:
        self._hpp_uri = hpp_uri.rstrip("/")

    @property
    def hpp_uri(self) -> str:
        return self._hpp_uri

    def build(self, payment_id: str, resource_token: str, return_uri: str) -> str:
        """Return the HPP URL for a payment.

        Parameters travel in the URL fragment so they are never sent to the
        server hosting the page.
        """
        params = {
            "payment_id": payment_id,
            "resource_token": resource_token,
            "return_uri": return_uri,
        }
        for name, value in params.items():
            if not value or not value.strip():
                raise ConfigurationError(
                    f"{name.replace('_', ' ')} must be not empty",
                    hint="Use the id and resource_token returned by create_payment().",
                )
        return f"{self._hpp_uri}/payments#{urlencode(params)}"
