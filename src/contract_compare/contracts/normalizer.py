"""Canonicalisation of contract records into comparable matching keys."""
from __future__ import annotations

import re
import unicodedata
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from contract_compare.errors import MalformedRecordError

from .models import ContractItem, MatchKey, NormalizedItem

# Day-first: contracts are issued by European suppliers.
_DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%d/%m/%Y",
    "%d.%m.%Y",
    "%d-%m-%Y",
    "%Y/%m/%d",
)

_SEPARATORS = re.compile(r"[\-‐‑‒–—―−_/\\|]+")
_PUNCTUATION = re.compile(r"[.,;:!?'\"`‘’“”()\[\]{}*#]+")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(value: Any) -> str:
    """Case-fold and strip formatting noise so that equivalent labels compare equal."""
    if value is None:
        return ""
    text = unicodedata.normalize("NFKC", str(value)).casefold()
    text = _SEPARATORS.sub(" ", text)
    text = _PUNCTUATION.sub("", text)
    text = _WHITESPACE.sub(" ", text).strip()
    return unicodedata.normalize("NFKC", text)


def normalize_currency(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip().upper()


def normalize_date(value: Any, *, field: str = "date") -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MalformedRecordError("missing_date", field, f"{field} is missing")
    if not isinstance(value, str):
        raise MalformedRecordError("invalid_date", field, f"{field} has unsupported type {type(value).__name__}")

    text = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    raise MalformedRecordError("invalid_date", field, f"{field} {text!r} is not a recognised date")


def _decimal_literal(text: str) -> str:
    """Turn ``1.234,50`` / ``1,234.50`` / ``120,5`` into a plain decimal literal."""
    text = _WHITESPACE.sub("", text)
    if "," in text and "." in text:
        if text.rfind(",") > text.rfind("."):
            return text.replace(".", "").replace(",", ".")
        return text.replace(",", "")
    if "," in text:
        return text.replace(",", ".")
    return text


def normalize_price(value: Any) -> Decimal:
    """Return the price as an exact Decimal; floats are converted via their repr."""
    if isinstance(value, bool) or value is None:
        raise MalformedRecordError("invalid_price", "price", f"price {value!r} is not numeric")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        amount = Decimal(repr(value))
    else:
        text = _decimal_literal(str(value))
        try:
            amount = Decimal(text)
        except InvalidOperation as exc:
            raise MalformedRecordError(
                "invalid_price", "price", f"price {value!r} is not numeric"
            ) from exc

    if not amount.is_finite():
        raise MalformedRecordError("invalid_price", "price", f"price {value!r} is not finite")
    if amount < 0:
        raise MalformedRecordError("negative_price", "price", f"price {value!r} is negative")
    return amount


def normalize_item(item: ContractItem) -> NormalizedItem:
    """Build the comparison view of ``item`` or raise MalformedRecordError."""
    hotel_name = normalize_text(item.hotel_name)
    if not hotel_name:
        raise MalformedRecordError("missing_text", "hotel_name", "hotel_name is empty")
    room_type = normalize_text(item.room_type)
    if not room_type:
        raise MalformedRecordError("missing_text", "room_type", "room_type is empty")

    period_start = normalize_date(item.period_start, field="period_start")
    period_end = normalize_date(item.period_end, field="period_end")
    if period_start > period_end:
        raise MalformedRecordError(
            "inverted_period",
            "period_start",
            f"period_start {period_start.isoformat()} is after period_end {period_end.isoformat()}",
        )

    return NormalizedItem(
        key=MatchKey(hotel_name, room_type, period_start, period_end),
        price=normalize_price(item.price),
        currency=normalize_currency(item.currency),
    )
