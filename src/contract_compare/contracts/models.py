"""Dataclasses for contract pricing records and comparison results."""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, NamedTuple, Optional, Tuple, Union

RawDate = Union[date, str, None]
RawPrice = Union[Decimal, int, float, str, None]


def _json_number(value: Optional[Decimal]) -> Union[int, float, str, None]:
    if value is None:
        return None
    if not value.is_finite():
        return str(value)
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def _json_date(value: RawDate) -> Optional[str]:
    if isinstance(value, date):
        return value.isoformat()
    return value


def _json_price(value: RawPrice) -> object:
    if isinstance(value, Decimal):
        return _json_number(value)
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    return value


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True, slots=True)
class ContractItem:
    """A single offer line as produced by the extraction service.

    Dates and price keep whatever the extraction produced so that malformed
    lines can be reported back verbatim; the normalizer validates them.
    """

    hotel_name: str
    room_type: str
    period_start: RawDate
    period_end: RawDate
    price: RawPrice
    currency: str = ""

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> "ContractItem":
        return cls(
            hotel_name=_text(row.get("hotel_name") or row.get("hotel")),
            room_type=_text(row.get("room_type") or row.get("room")),
            period_start=row.get("period_start"),
            period_end=row.get("period_end"),
            price=row.get("price"),
            currency=_text(row.get("currency")),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "hotel_name": self.hotel_name,
            "room_type": self.room_type,
            "period_start": _json_date(self.period_start),
            "period_end": _json_date(self.period_end),
            "price": _json_price(self.price),
            "currency": _text(self.currency).strip().upper(),
        }

    @classmethod
    def from_iterable(cls, items: Iterable["ContractItem"]) -> List[dict[str, object]]:
        return [item.to_dict() for item in items]


class MatchKey(NamedTuple):
    """Composite identity of an offer: normalized hotel, room type and period."""

    hotel_name: str
    room_type: str
    period_start: date
    period_end: date


@dataclass(frozen=True, slots=True)
class NormalizedItem:
    """Comparison view of a ContractItem; never surfaced in results."""

    key: MatchKey
    price: Decimal
    currency: str


@dataclass(frozen=True, slots=True)
class RecordIssue:
    """Diagnostic attached to a record that could not take part in matching."""

    code: str
    field: str
    message: str

    def to_dict(self) -> dict[str, object]:
        return {"code": self.code, "field": self.field, "message": self.message}


@dataclass(frozen=True, slots=True)
class UnmatchedItem:
    """Entry of ``only_in_a`` / ``only_in_b``."""

    item: ContractItem
    index: int
    issue: Optional[RecordIssue] = None

    @property
    def malformed(self) -> bool:
        return self.issue is not None

    def to_dict(self) -> dict[str, object]:
        payload = self.item.to_dict()
        payload["index"] = self.index
        payload["issue"] = self.issue.to_dict() if self.issue else None
        return payload


@dataclass(frozen=True, slots=True)
class ComparisonMatch:
    """A record of set A paired with a record of set B sharing the same key."""

    hotel_name: str
    room_type: str
    period_start: date
    period_end: date
    price_a: Decimal
    price_b: Decimal
    currency: str
    currency_b: str
    currency_mismatch: bool
    price_delta: Optional[Decimal]
    index_a: int
    index_b: int

    @property
    def comparable(self) -> bool:
        return not self.currency_mismatch

    def to_dict(self) -> dict[str, object]:
        return {
            "hotel_name": self.hotel_name,
            "room_type": self.room_type,
            "period_start": self.period_start.isoformat(),
            "period_end": self.period_end.isoformat(),
            "price_a": _json_number(self.price_a),
            "price_b": _json_number(self.price_b),
            "currency": self.currency,
            "currency_b": self.currency_b,
            "currency_mismatch": self.currency_mismatch,
            "price_delta": _json_number(self.price_delta),
            "index_a": self.index_a,
            "index_b": self.index_b,
        }


@dataclass(frozen=True, slots=True)
class ComparisonSummary:
    """Aggregate statistics over the matched pairs."""

    count_matches: int
    median_delta: Decimal
    avg_delta: Decimal
    count_comparable: int = 0
    count_currency_mismatch: int = 0
    count_only_in_a: int = 0
    count_only_in_b: int = 0
    count_malformed: int = 0

    def to_dict(self) -> dict[str, object]:
        return {
            "count_matches": self.count_matches,
            "median_delta": _json_number(self.median_delta),
            "avg_delta": _json_number(self.avg_delta),
            "count_comparable": self.count_comparable,
            "count_currency_mismatch": self.count_currency_mismatch,
            "count_only_in_a": self.count_only_in_a,
            "count_only_in_b": self.count_only_in_b,
            "count_malformed": self.count_malformed,
        }


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    """Outcome of comparing two contracts; every container is an immutable tuple."""

    contract_a_data: Tuple[ContractItem, ...]
    contract_b_data: Tuple[ContractItem, ...]
    matches: Tuple[ComparisonMatch, ...]
    only_in_a: Tuple[UnmatchedItem, ...]
    only_in_b: Tuple[UnmatchedItem, ...]
    summary: ComparisonSummary

    def to_dict(self) -> dict[str, object]:
        return {
            "contract_a_data": ContractItem.from_iterable(self.contract_a_data),
            "contract_b_data": ContractItem.from_iterable(self.contract_b_data),
            "comparison": {
                "matches": [match.to_dict() for match in self.matches],
                "only_in_a": [entry.to_dict() for entry in self.only_in_a],
                "only_in_b": [entry.to_dict() for entry in self.only_in_b],
                "summary": self.summary.to_dict(),
            },
        }
