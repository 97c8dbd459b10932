"""API handlers: one per TrueLayer API surface."""

from .auth import AuthenticationHandler, TokenSource
from .base import ApiHandler, new_idempotency_key
from .common import CommonHandler
from .mandates import MandatesHandler
from .merchant_accounts import MerchantAccountsHandler
from .payments import PaymentsHandler
from .payments_providers import PaymentsProvidersHandler

__all__ = [
    "ApiHandler",
    "AuthenticationHandler",
    "CommonHandler",
    "MandatesHandler",
    "MerchantAccountsHandler",
    "PaymentsHandler",
    "PaymentsProvidersHandler",
    "TokenSource",
    "new_idempotency_key",
]
