"""Aggregate statistics over matched pairs."""
from __future__ import annotations

import statistics
from collections.abc import Sequence
from decimal import Decimal

from contract_compare.contracts.models import ComparisonMatch, ComparisonSummary

_ZERO = Decimal(0)


def median_delta(deltas: Sequence[Decimal]) -> Decimal:
    if not deltas:
        return _ZERO
    return statistics.median(sorted(deltas))


def average_delta(deltas: Sequence[Decimal]) -> Decimal:
    if not deltas:
        return _ZERO
    # statistics.mean sums exactly, so the result does not depend on order.
    return statistics.mean(deltas)


def summarize(
    matches: Sequence[ComparisonMatch],
    *,
    count_only_in_a: int = 0,
    count_only_in_b: int = 0,
    count_malformed: int = 0,
) -> ComparisonSummary:
    """Summarize ``matches``; currency-mismatched pairs count as matches but carry no delta."""
    deltas = [match.price_delta for match in matches if match.comparable and match.price_delta is not None]
    return ComparisonSummary(
        count_matches=len(matches),
        median_delta=median_delta(deltas),
        avg_delta=average_delta(deltas),
        count_comparable=len(deltas),
        count_currency_mismatch=len(matches) - len(deltas),
        count_only_in_a=count_only_in_a,
        count_only_in_b=count_only_in_b,
        count_malformed=count_malformed,
    )
