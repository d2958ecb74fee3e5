from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import requests

from app.errors import UpstreamAccountsError
from app.integrations.upbit_auth import Signer


class UpbitRestClient:
    """Upbit REST client: signed account listing and public ticker lookup."""

    def __init__(
        self,
        base_url: str = "https://api.upbit.com",
        session: Optional[Any] = None,
        timeout: float = 5,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests
        self.timeout = timeout

    def get_accounts(self, signer: Signer) -> Any:
        headers = {"accept": "application/json"}
        headers.update(signer.authorization_header())
        try:
            response = self.session.get(
                f"{self.base_url}/v1/accounts",
                headers=headers,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as exc:
            raise UpstreamAccountsError(504, f"accounts request timed out: {exc}") from exc
        except requests.exceptions.ConnectionError as exc:
            raise UpstreamAccountsError(502, f"accounts request failed: {exc}") from exc

        if not response.ok:
            print(f"[UPBIT][accounts_error] status={response.status_code}", flush=True)
            raise UpstreamAccountsError(response.status_code, response.text)
        return response.json()

    def get_ticker_prices(self, markets: Sequence[str]) -> Dict[str, Any]:
        if not markets:
            return {}

        try:
            response = self.session.get(
                f"{self.base_url}/v1/ticker",
                headers={"accept": "application/json"},
                params={"markets": ",".join(markets)},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as exc:
            print(f"[UPBIT][ticker_fail_open] reason={exc}", flush=True)
            return {}

        if not response.ok:
            print(f"[UPBIT][ticker_fail_open] status={response.status_code}", flush=True)
            return {}

        try:
            rows = response.json()
        except ValueError as exc:
            print(f"[UPBIT][ticker_fail_open] reason=invalid json {exc}", flush=True)
            return {}

        prices: Dict[str, Any] = {}
        for row in self._rows(rows):
            market = row.get("market")
            if isinstance(market, str):
                prices[market] = row.get("trade_price")
        return prices

    @staticmethod
    def _rows(payload: Any) -> List[Dict[str, Any]]:
        if isinstance(payload, dict):
            return [payload]
        if isinstance(payload, list):
            return [row for row in payload if isinstance(row, dict)]
        return []
