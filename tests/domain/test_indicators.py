from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from trackpulse.domain.indicators import compute_indicators, format_duration
from trackpulse.domain.model import ShipmentState
from tests.helpers.shipments import make_record

NOW = datetime(2024, 5, 10, 15, tzinfo=UTC)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (timedelta(0), "0s"),
        (timedelta(seconds=42), "42s"),
        (timedelta(days=1, hours=2, minutes=3, seconds=4), "1d 2h 3m 4s"),
        (timedelta(days=2), "2d"),
        (timedelta(hours=5, seconds=9), "5h 9s"),
    ],
)
def test_format_duration(value: timedelta, expected: str) -> None:
    assert format_duration(value) == expected


def test_compute_indicators() -> None:
    shipments = [
        make_record(created_at=NOW - timedelta(hours=2)),
        make_record(
            state=ShipmentState.WITH_ISSUE,
            issue_description="Late",
            created_at=NOW - timedelta(days=3),
        ),
        make_record(
            state=ShipmentState.DELIVERED,
            order_confirmed=True,
            created_at=NOW - timedelta(days=4),
            actual_delivery=NOW - timedelta(days=2),
        ),
        make_record(
            state=ShipmentState.DELIVERED,
            order_confirmed=True,
            created_at=NOW - timedelta(days=5),
            actual_delivery=NOW - timedelta(days=1),
        ),
    ]

    indicators = compute_indicators(shipments, now=NOW)

    assert indicators.shipments_today == 1
    assert indicators.shipments_with_issue == 1
    assert indicators.average_delivery_time == "3d"


def test_compute_indicators_without_deliveries() -> None:
    indicators = compute_indicators([make_record(created_at=NOW)], now=NOW)

    assert indicators.average_delivery_time == "N/A"
    assert indicators.shipments_today == 1
