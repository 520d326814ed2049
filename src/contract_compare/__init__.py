"""Compare pricing records extracted from two hotel contracts."""

from contract_compare.comparison import compare_contracts
from contract_compare.contracts import (
    ComparisonMatch,
    ComparisonResult,
    ComparisonSummary,
    ContractItem,
    UnmatchedItem,
)

__all__ = [
    "ComparisonMatch",
    "ComparisonResult",
    "ComparisonSummary",
    "ContractItem",
    "UnmatchedItem",
    "compare_contracts",
]

__version__ = "0.1.0"
