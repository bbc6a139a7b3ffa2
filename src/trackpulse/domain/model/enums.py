"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ShipmentState(StrEnum):
    PENDING_CONFIRMATION = "pending-confirmation"
    IN_TRANSIT = "in-transit"
    DELIVERED = "delivered"
    WITH_ISSUE = "with-issue"
    CANCELLED = "cancelled"


class Role(StrEnum):
    LOGISTICS = "logistics"
    TRACK_TEAM = "track-team"


ORDER_CONFIRMED_TAG = "order-confirmed"
