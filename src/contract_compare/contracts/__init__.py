"""Contract record models and normalization helpers."""

from .models import (
    ComparisonMatch,
    ComparisonResult,
    ComparisonSummary,
    ContractItem,
    MatchKey,
    NormalizedItem,
    RecordIssue,
    UnmatchedItem,
)
from .normalizer import (
    normalize_currency,
    normalize_date,
    normalize_item,
    normalize_price,
    normalize_text,
)

__all__ = [
    "ComparisonMatch",
    "ComparisonResult",
    "ComparisonSummary",
    "ContractItem",
    "MatchKey",
    "NormalizedItem",
    "RecordIssue",
    "UnmatchedItem",
    "normalize_currency",
    "normalize_date",
    "normalize_item",
    "normalize_price",
    "normalize_text",
]
