"""Entry point that turns two contract record sets into a ComparisonResult."""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Union

from contract_compare.contracts.models import (
    ComparisonResult,
    ContractItem,
    MatchKey,
    NormalizedItem,
    RecordIssue,
    UnmatchedItem,
)
from contract_compare.contracts.normalizer import normalize_item
from contract_compare.errors import MalformedRecordError

from .deltas import build_match
from .matcher import pair_by_key
from .summary import summarize

logger = logging.getLogger(__name__)

ItemLike = Union[ContractItem, Mapping[str, Any]]


def _coerce_items(items: Optional[Iterable[ItemLike]], *, side: str) -> tuple[ContractItem, ...]:
    if items is None:
        raise TypeError(f"contract {side} records must be a sequence, got None")
    if isinstance(items, (str, bytes, Mapping)):
        raise TypeError(f"contract {side} records must be a sequence of records, got {type(items).__name__}")
    coerced: list[ContractItem] = []
    for item in items:
        if isinstance(item, ContractItem):
            coerced.append(item)
        elif isinstance(item, Mapping):
            coerced.append(ContractItem.from_dict(item))
        else:
            raise TypeError(f"contract {side} contains unsupported record type {type(item).__name__}")
    return tuple(coerced)


def _normalize_side(
    items: tuple[ContractItem, ...],
    *,
    side: str,
) -> tuple[list[Optional[NormalizedItem]], dict[int, RecordIssue]]:
    normalized: list[Optional[NormalizedItem]] = []
    issues: dict[int, RecordIssue] = {}
    for index, item in enumerate(items):
        try:
            normalized.append(normalize_item(item))
        except MalformedRecordError as exc:
            logger.warning("Contract %s record %s excluded from matching: %s", side, index, exc.message)
            issues[index] = RecordIssue(code=exc.code, field=exc.field, message=exc.message)
            normalized.append(None)
    return normalized, issues


def _keys(normalized: list[Optional[NormalizedItem]]) -> list[Optional[MatchKey]]:
    return [entry.key if entry is not None else None for entry in normalized]


def compare_contracts(
    items_a: Iterable[ItemLike],
    items_b: Iterable[ItemLike],
) -> ComparisonResult:
    """Compare two record sets.

    Business outcomes (no matches, empty sets, malformed lines, currency
    mismatches) are represented in the result. Only an invalid call, such as
    passing ``None`` instead of a sequence, raises ``TypeError``.
    """
    contract_a = _coerce_items(items_a, side="A")
    contract_b = _coerce_items(items_b, side="B")

    normalized_a, issues_a = _normalize_side(contract_a, side="A")
    normalized_b, issues_b = _normalize_side(contract_b, side="B")

    pairing = pair_by_key(_keys(normalized_a), _keys(normalized_b))

    matches = []
    for index_a, index_b in pairing.pairs:
        entry_a = normalized_a[index_a]
        entry_b = normalized_b[index_b]
        if entry_a is None or entry_b is None:  # pragma: no cover - matcher never pairs unkeyed records
            raise RuntimeError("Matcher paired a record without a key")
        matches.append(build_match(contract_a[index_a], entry_a, index_a, entry_b, index_b))

    only_in_a = tuple(
        UnmatchedItem(item=contract_a[index], index=index, issue=issues_a.get(index))
        for index in pairing.only_in_a
    )
    only_in_b = tuple(
        UnmatchedItem(item=contract_b[index], index=index, issue=issues_b.get(index))
        for index in pairing.only_in_b
    )

    summary = summarize(
        matches,
        count_only_in_a=len(only_in_a),
        count_only_in_b=len(only_in_b),
        count_malformed=len(issues_a) + len(issues_b),
    )
    logger.info(
        "Compared %s vs %s records: %s matches (%s currency mismatches), %s only in A, %s only in B",
        len(contract_a),
        len(contract_b),
        summary.count_matches,
        summary.count_currency_mismatch,
        summary.count_only_in_a,
        summary.count_only_in_b,
    )

    return ComparisonResult(
        contract_a_data=contract_a,
        contract_b_data=contract_b,
        matches=tuple(matches),
        only_in_a=only_in_a,
        only_in_b=only_in_b,
        summary=summary,
    )
