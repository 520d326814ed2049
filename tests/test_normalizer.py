from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from contract_compare.contracts import (
    ContractItem,
    MatchKey,
    normalize_currency,
    normalize_date,
    normalize_item,
    normalize_price,
    normalize_text,
)
from contract_compare.errors import MalformedRecordError


@pytest.mark.parametrize(
    ("left", "right"),
    [
        ("Hotel Bellevue", "  hotel   BELLEVUE "),
        ("Double-Superior", "double superior"),
        ("Junior Suite – Sea View", "junior suite sea view"),
        ("St. Regis", "st regis"),
        ("Deluxe_Room/Garden", "deluxe room garden"),
    ],
)
def test_normalize_text_collapses_formatting_noise(left: str, right: str) -> None:
    assert normalize_text(left) == normalize_text(right)


def test_normalize_text_is_idempotent() -> None:
    raw = "  Grand-Hôtel  du Lac (Annex), Superior ROOM "
    once = normalize_text(raw)
    assert once == "grand hôtel du lac annex superior room"
    assert normalize_text(once) == once


def test_normalize_text_keeps_distinct_labels_distinct() -> None:
    assert normalize_text("Double Room") != normalize_text("Double Room Sea View")


@pytest.mark.parametrize(
    "value",
    ["2025-06-01", "01/06/2025", "01.06.2025", "01-06-2025", "2025/06/01", "2025-06-01T00:00:00"],
)
def test_normalize_date_accepts_common_formats(value: str) -> None:
    assert normalize_date(value) == date(2025, 6, 1)


def test_normalize_date_is_idempotent_on_dates() -> None:
    value = date(2025, 6, 1)
    assert normalize_date(value) is value
    assert normalize_date(datetime(2025, 6, 1, 14, 30)) == value


@pytest.mark.parametrize("value", ["", None, "next summer", "31/02/2025", 20250601])
def test_normalize_date_rejects_unparsable_values(value: object) -> None:
    with pytest.raises(MalformedRecordError) as excinfo:
        normalize_date(value, field="period_start")
    assert excinfo.value.field == "period_start"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (100, Decimal("100")),
        (99.95, Decimal("99.95")),
        ("120,50", Decimal("120.50")),
        ("1.234,50", Decimal("1234.50")),
        ("1,234.50", Decimal("1234.50")),
        (" 85 ", Decimal("85")),
        (Decimal("0"), Decimal("0")),
    ],
)
def test_normalize_price_is_exact(value: object, expected: Decimal) -> None:
    assert normalize_price(value) == expected


@pytest.mark.parametrize("value", [None, True, "n/a", "", "NaN", "-5", -0.5])
def test_normalize_price_rejects_invalid_values(value: object) -> None:
    with pytest.raises(MalformedRecordError):
        normalize_price(value)


def test_normalize_price_avoids_binary_float_noise() -> None:
    delta = normalize_price(0.3) - normalize_price(0.1)
    assert delta == Decimal("0.2")


def test_normalize_currency_uppercases() -> None:
    assert normalize_currency(" eur ") == "EUR"
    assert normalize_currency(None) == ""


def test_normalize_item_builds_key() -> None:
    item = ContractItem(
        hotel_name="Hotel Miramare",
        room_type="Double-Standard",
        period_start="01/05/2025",
        period_end="2025-05-31",
        price="110",
        currency="eur",
    )

    normalized = normalize_item(item)

    assert normalized.key == MatchKey("hotel miramare", "double standard", date(2025, 5, 1), date(2025, 5, 31))
    assert normalized.price == Decimal("110")
    assert normalized.currency == "EUR"


def test_normalize_item_rejects_inverted_period() -> None:
    item = ContractItem("Hotel", "Single", "2025-06-30", "2025-06-01", 80, "EUR")

    with pytest.raises(MalformedRecordError) as excinfo:
        normalize_item(item)

    assert excinfo.value.code == "inverted_period"


def test_normalize_item_rejects_blank_room_type() -> None:
    item = ContractItem("Hotel", "  - ", "2025-06-01", "2025-06-30", 80, "EUR")

    with pytest.raises(MalformedRecordError) as excinfo:
        normalize_item(item)

    assert excinfo.value.field == "room_type"


def test_single_day_period_is_valid() -> None:
    item = ContractItem("Hotel", "Single", "2025-06-01", "2025-06-01", 80, "EUR")
    assert normalize_item(item).key.period_start == date(2025, 6, 1)
