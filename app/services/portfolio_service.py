from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable

from app.errors import MissingCredentialsError
from app.integrations.upbit_auth import Signer, UpbitJwtSigner
from app.integrations.upbit_rest import UpbitRestClient
from app.schemas.portfolio import PortfolioSummary, parse_account_rows
from app.services.valuation import distinct_markets, value_portfolio


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PortfolioService:
    """Signed account fetch, batched ticker lookup, then valuation.

    Holds no per-request state; every call builds its own signer.
    """

    def __init__(
        self,
        *,
        client: UpbitRestClient,
        base_currency: str = "KRW",
        signer_factory: Callable[[str, str], Signer] = UpbitJwtSigner,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.client = client
        self.base_currency = base_currency
        self.signer_factory = signer_factory
        self.clock = clock or _utc_now

    def summarize(self, access_key: str | None, secret_key: str | None, user_id: Any = None) -> PortfolioSummary:
        if not access_key or not secret_key:
            raise MissingCredentialsError()

        now = self.clock()
        signer = self.signer_factory(access_key, secret_key)
        parsed = parse_account_rows(self.client.get_accounts(signer))
        if parsed.malformed:
            print(f"[PORTFOLIO][accounts_malformed_skip] count={parsed.malformed}", flush=True)

        markets = distinct_markets(parsed.records, self.base_currency)
        prices = self.client.get_ticker_prices(markets)

        return value_portfolio(
            parsed.records,
            prices,
            user_id=user_id,
            base_currency=self.base_currency,
            now=now,
        )
