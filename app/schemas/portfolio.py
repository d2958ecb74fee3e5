from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ValidationError


class PortfolioRequest(BaseModel):
    access_key: str | None = None
    secret_key: str | None = None
    user_id: Any = None


class AccountRecord(BaseModel):
    # numeric fields stay raw; valuation parses them zero-on-invalid
    currency: str
    balance: Any = None
    locked: Any = None
    avg_buy_price: Any = None
    unit_currency: str | None = None


@dataclass
class AccountParseResult:
    records: list[AccountRecord] = field(default_factory=list)
    malformed: int = 0


def parse_account_rows(rows: Any) -> AccountParseResult:
    if not isinstance(rows, list):
        raise ValueError(f"unexpected accounts payload type: {type(rows).__name__}")

    result = AccountParseResult()
    for row in rows:
        try:
            result.records.append(AccountRecord.model_validate(row))
        except ValidationError:
            result.malformed += 1
    return result


class AssetValuation(BaseModel):
    user_id: Any = None
    currency: str
    market: str
    amount: float
    avg_buy_price: float
    price: float
    value_krw: float
    pnl_krw: float
    return_pct: float


class PortfolioTotals(BaseModel):
    krw_balance: float
    total_value_krw: float
    total_cost_krw: float
    total_pnl_krw: float
    total_return_pct: float


class PortfolioSummary(BaseModel):
    user_id: Any = None
    totals: PortfolioTotals
    assets: list[AssetValuation]
    ts: str
