"""Dashboard key indicators computed from decoded shipments."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from trackpulse.domain.model import ShipmentState

if TYPE_CHECKING:
    from collections.abc import Sequence

    from trackpulse.domain.model import ShipmentRecord

NOT_AVAILABLE = "N/A"


@dataclass(frozen=True, slots=True)
class KeyIndicators:
    shipments_today: int
    shipments_with_issue: int
    average_delivery_time: str


def format_duration(value: timedelta) -> str:
    """Format as ``1d 2h 3m 4s``, dropping zero parts (``0s`` for nothing at all)."""

    total = int(value.total_seconds())
    days, remainder = divmod(total, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)

    units = ((days, "d"), (hours, "h"), (minutes, "m"))
    parts = [f"{amount}{unit}" for amount, unit in units if amount]
    if seconds or not parts:
        parts.append(f"{seconds}s")
    return " ".join(parts)


def compute_indicators(shipments: Sequence[ShipmentRecord], *, now: datetime) -> KeyIndicators:
    day_start = now.astimezone(UTC).replace(hour=0, minute=0, second=0, microsecond=0)

    durations = [
        shipment.actual_delivery - shipment.created_at
        for shipment in shipments
        if shipment.state is ShipmentState.DELIVERED and shipment.actual_delivery is not None
    ]
    durations = [duration for duration in durations if duration >= timedelta(0)]
    average = (
        format_duration(sum(durations, timedelta(0)) / len(durations))
        if durations
        else NOT_AVAILABLE
    )

    return KeyIndicators(
        shipments_today=sum(1 for shipment in shipments if shipment.created_at >= day_start),
        shipments_with_issue=sum(
            1 for shipment in shipments if shipment.state is ShipmentState.WITH_ISSUE
        ),
        average_delivery_time=average,
    )
