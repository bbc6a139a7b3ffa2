from __future__ import annotations

from datetime import UTC, datetime

from trackpulse.domain.model import ShipmentState
from trackpulse.domain.reconciliation import NOTES_FIELDS, encode_notes, parse_notes
from trackpulse.domain.reconciliation.notes import format_timestamp, parse_delivery_date
from tests.helpers.shipments import make_record


def test_encode_notes_writes_fixed_key_order() -> None:
    record = make_record(
        state=ShipmentState.WITH_ISSUE,
        order_confirmed=True,
        issue_description="Broken seal",
    )

    assert encode_notes(record).split("\n") == [
        "Shipment Title: Olive oil pallets",
        "Origin: Jaen",
        "Destination: Lisbon",
        "Est. Delivery: 2024-05-14",
        "Internal Shipment ID: shp_1715000000000_abcde",
        "Order Confirmed: true",
        "Issue: Broken seal",
    ]


def test_encode_notes_includes_actual_delivery_in_milliseconds() -> None:
    delivered_at = datetime(2024, 5, 13, 17, 4, 5, 678901, tzinfo=UTC)
    record = make_record(state=ShipmentState.DELIVERED, actual_delivery=delivered_at)

    assert "Actual Delivery: 2024-05-13T17:04:05.678Z" in encode_notes(record).split("\n")


def test_notes_fields_cover_each_key_once() -> None:
    keys = [field.key for field in NOTES_FIELDS]

    assert len(keys) == len(set(keys))
    assert keys[0] == "Shipment Title"
    assert keys[-1] == "Issue"


def test_parse_notes_reads_known_keys() -> None:
    notes = "\n".join(
        [
            "Shipment Title: Olive oil pallets",
            "Origin:  Jaen ",
            "Est. Delivery: 2024-05-14",
            "Order Confirmed: TRUE",
            "Actual Delivery: 2024-05-13T17:04:05.678Z",
            "Issue: Carrier said: damaged",
        ]
    )

    parsed = parse_notes(notes)

    assert parsed["title"] == "Olive oil pallets"
    assert parsed["origin"] == "Jaen"
    assert parsed["estimated_delivery"] == datetime(2024, 5, 14, tzinfo=UTC)
    assert parsed["order_confirmed"] is True
    assert parsed["actual_delivery"] == datetime(2024, 5, 13, 17, 4, 5, 678000, tzinfo=UTC)
    assert parsed["issue_description"] == "Carrier said: damaged"


def test_parse_notes_skips_noise() -> None:
    notes = "Free text written by a person\nColour: blue\nEst. Delivery: someday\n\n"

    assert parse_notes(notes) == {}


def test_parse_notes_handles_missing_notes() -> None:
    assert parse_notes(None) == {}
    assert parse_notes("") == {}


def test_parse_notes_last_value_wins() -> None:
    assert parse_notes("Origin: Jaen\nOrigin: Cordoba") == {"origin": "Cordoba"}


def test_parse_delivery_date_accepts_full_timestamps() -> None:
    assert parse_delivery_date("2024-05-14T10:00:00+02:00") == datetime(
        2024, 5, 14, 8, tzinfo=UTC
    )
    assert parse_delivery_date("2024-02-30") is None


def test_format_timestamp_converts_to_utc() -> None:
    value = datetime.fromisoformat("2024-05-13T19:04:05.001+02:00")

    assert format_timestamp(value) == "2024-05-13T17:04:05.001Z"
