from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from app.schemas.portfolio import (
    AccountRecord,
    AssetValuation,
    PortfolioSummary,
    PortfolioTotals,
)


_DECIMAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)
_RADIX = re.compile(r"0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)", re.ASCII)


def to_number(value: Any) -> float:
    """Parse an upstream numeric field; anything not finite counts as 0.

    Strings follow JavaScript number syntax: plain decimals, exponents and
    0x/0o/0b literals. Digit separators and other forms float() would
    accept are invalid.
    """
    if value is None:
        return 0.0
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if _RADIX.fullmatch(text):
            value = int(text, 0)
        elif _DECIMAL.fullmatch(text):
            value = text
        else:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return _finite(number)


def _finite(number: float) -> float:
    return number if math.isfinite(number) else 0.0


def format_timestamp(now: datetime) -> str:
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    stamp = now.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def market_symbol(base_currency: str, currency: str) -> str:
    return f"{base_currency}-{currency}"


def tradeable_accounts(records: Iterable[AccountRecord], base_currency: str) -> list[AccountRecord]:
    return [
        r for r in records
        if r.currency != base_currency and r.unit_currency == base_currency
    ]


def distinct_markets(records: Iterable[AccountRecord], base_currency: str) -> list[str]:
    markets: list[str] = []
    for record in tradeable_accounts(records, base_currency):
        market = market_symbol(base_currency, record.currency)
        if market not in markets:
            markets.append(market)
    return markets


def _return_pct(pnl: float, cost: float) -> float:
    return _finite(pnl / cost * 100) if cost > 0 else 0.0


def value_portfolio(
    records: list[AccountRecord],
    prices: Mapping[str, Any],
    *,
    user_id: Any = None,
    base_currency: str = "KRW",
    now: datetime,
) -> PortfolioSummary:
    cash = next((r for r in records if r.currency == base_currency), None)
    base_balance = 0.0
    if cash is not None:
        base_balance = _finite(to_number(cash.balance) + to_number(cash.locked))

    total_value = base_balance
    total_cost = 0.0
    total_pnl = 0.0
    assets: list[AssetValuation] = []

    for record in tradeable_accounts(records, base_currency):
        market = market_symbol(base_currency, record.currency)
        amount = _finite(to_number(record.balance) + to_number(record.locked))
        avg_buy = to_number(record.avg_buy_price)
        price = to_number(prices.get(market))

        # products of finite inputs can still overflow
        cost = _finite(amount * avg_buy)
        value = _finite(amount * price)
        pnl = _finite(value - cost)

        total_value = _finite(total_value + value)
        total_cost = _finite(total_cost + cost)
        total_pnl = _finite(total_pnl + pnl)

        assets.append(
            AssetValuation(
                user_id=user_id,
                currency=record.currency,
                market=market,
                amount=amount,
                avg_buy_price=avg_buy,
                price=price,
                value_krw=value,
                pnl_krw=pnl,
                return_pct=_return_pct(pnl, cost),
            )
        )

    return PortfolioSummary(
        user_id=user_id,
        totals=PortfolioTotals(
            krw_balance=base_balance,
            total_value_krw=total_value,
            total_cost_krw=total_cost,
            total_pnl_krw=total_pnl,
            total_return_pct=_return_pct(total_pnl, total_cost),
        ),
        assets=assets,
        ts=format_timestamp(now),
    )
