"""Price deltas for matched pairs."""
from __future__ import annotations

from decimal import Decimal
from typing import Optional

from contract_compare.contracts.models import ComparisonMatch, ContractItem, NormalizedItem


def currencies_match(currency_a: str, currency_b: str) -> bool:
    """Both sides must carry the same, non-empty currency for a delta to be meaningful."""
    return bool(currency_a) and currency_a == currency_b


def price_delta(price_a: Decimal, price_b: Decimal) -> Decimal:
    return price_b - price_a


def build_match(
    item_a: ContractItem,
    normalized_a: NormalizedItem,
    index_a: int,
    normalized_b: NormalizedItem,
    index_b: int,
) -> ComparisonMatch:
    """Combine one pair into a ComparisonMatch.

    Display text comes from the A record; both sides normalize to the same key,
    so the A wording represents the key. Dates come from the key itself.
    """
    comparable = currencies_match(normalized_a.currency, normalized_b.currency)
    delta: Optional[Decimal] = None
    if comparable:
        delta = price_delta(normalized_a.price, normalized_b.price)

    key = normalized_a.key
    return ComparisonMatch(
        hotel_name=str(item_a.hotel_name).strip(),
        room_type=str(item_a.room_type).strip(),
        period_start=key.period_start,
        period_end=key.period_end,
        price_a=normalized_a.price,
        price_b=normalized_b.price,
        currency=normalized_a.currency,
        currency_b=normalized_b.currency,
        currency_mismatch=not comparable,
        price_delta=delta,
        index_a=index_a,
        index_b=index_b,
    )
