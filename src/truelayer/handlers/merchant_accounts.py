"""Merchant accounts API handler."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from urllib.parse import quote

from truelayer.entities.merchant_accounts import (
    ListMerchantAccountsResponse,
    ListTransactionsResponse,
    MerchantAccountDetails,
)
from truelayer.errors import ConfigurationError
from truelayer.handlers.auth import PAYMENTS_SCOPES
from truelayer.handlers.base import ApiHandler

if TYPE_CHECKING:
    from truelayer.entities.common import ProblemDetails
    from truelayer.result import ResultEnvelope


def _account_path(merchant_account_id: str, suffix: str = "") -> str:
    if not merchant_account_id or not merchant_account_id.strip():
        raise ConfigurationError("merchant account id must be not empty")
    return f"/merchant-accounts/{quote(merchant_account_id, safe='')}{suffix}"


def _timestamp(value: datetime | str) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class MerchantAccountsHandler(ApiHandler):
    """Read merchant accounts and their transactions."""

    async def list_merchant_accounts(
        self,
    ) -> ResultEnvelope[ListMerchantAccountsResponse, ProblemDetails]:
        return await self._execute(
            "GET",
            "/merchant-accounts",
            response_type=ListMerchantAccountsResponse,
            scopes=PAYMENTS_SCOPES,
        )

    async def get_merchant_account(
        self, merchant_account_id: str
    ) -> ResultEnvelope[MerchantAccountDetails, ProblemDetails]:
        return await self._execute(
            "GET",
            _account_path(merchant_account_id),
            response_type=MerchantAccountDetails,
            scopes=PAYMENTS_SCOPES,
        )

    async def list_transactions(
        self,
        merchant_account_id: str,
        from_: datetime | str,
        to: datetime | str,
        type: str | None = None,
    ) -> ResultEnvelope[ListTransactionsResponse, ProblemDetails]:
        """List transactions between *from_* and *to*, optionally by type."""
        return await self._execute(
            "GET",
            _account_path(merchant_account_id, "/transactions"),
            response_type=ListTransactionsResponse,
            scopes=PAYMENTS_SCOPES,
            query={"from": _timestamp(from_), "to": _timestamp(to), "type": type},
        )
