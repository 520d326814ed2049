"""Matching, price deltas and summary statistics."""

from .engine import compare_contracts
from .matcher import Pairing, bucket_by_key, pair_by_key
from .summary import summarize

__all__ = [
    "Pairing",
    "bucket_by_key",
    "compare_contracts",
    "pair_by_key",
    "summarize",
]
