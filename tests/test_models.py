from __future__ import annotations

from datetime import date
from decimal import Decimal

from contract_compare.contracts import ContractItem, RecordIssue, UnmatchedItem


def test_contract_item_from_dict_accepts_short_keys() -> None:
    item = ContractItem.from_dict(
        {"hotel": "Hotel Lido", "room": "Suite", "period_start": "2025-08-01",
         "period_end": "2025-08-31", "price": "210,00", "currency": None}
    )

    assert item.hotel_name == "Hotel Lido"
    assert item.room_type == "Suite"
    assert item.currency == ""
    assert item.price == "210,00"


def test_contract_item_to_dict_serialises_dates_and_decimals() -> None:
    item = ContractItem("Hotel Lido", "Suite", date(2025, 8, 1), "31/08/2025", Decimal("210.00"), " eur")

    assert item.to_dict() == {
        "hotel_name": "Hotel Lido",
        "room_type": "Suite",
        "period_start": "2025-08-01",
        "period_end": "31/08/2025",
        "price": 210,
        "currency": "EUR",
    }


def test_unmatched_item_carries_issue() -> None:
    item = ContractItem("Hotel Lido", "Suite", "soon", "2025-08-31", 210, "EUR")
    entry = UnmatchedItem(
        item=item,
        index=4,
        issue=RecordIssue(code="invalid_date", field="period_start", message="period_start 'soon' is not a recognised date"),
    )

    payload = entry.to_dict()

    assert entry.malformed
    assert payload["index"] == 4
    assert payload["issue"]["code"] == "invalid_date"
    assert payload["period_start"] == "soon"
