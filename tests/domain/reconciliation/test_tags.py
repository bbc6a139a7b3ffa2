from __future__ import annotations

import pytest

from trackpulse.domain.model import ShipmentState
from trackpulse.domain.reconciliation import (
    desired_tags,
    merge_tags,
    normalize_tag,
    resolve_state,
    to_external_tag,
)
from trackpulse.domain.reconciliation.tags import normalize_tags, partition_tags


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("In Transit", "in-transit"),
        ("intransit", "in-transit"),
        ("  WithIssue ", "with-issue"),
        ("orderconfirmed", "order-confirmed"),
        ({"name": "Pending Confirmation"}, "pending-confirmation"),
        ("Cold  Chain", "cold-chain"),
        ({"name": 3}, ""),
        ({"label": "delivered"}, ""),
        (None, ""),
        (42, ""),
    ],
)
def test_normalize_tag_handles_every_shape(raw: object, expected: str) -> None:
    assert normalize_tag(raw) == expected


def test_normalize_tags_drops_empty_and_duplicates() -> None:
    assert normalize_tags(["sensor", None, "Sensor", "", "intransit"]) == (
        "sensor",
        "in-transit",
    )


def test_partition_tags_keeps_order() -> None:
    recognized, foreign = partition_tags(["sensor", "delivered", "fragile", "order-confirmed"])

    assert recognized == ("delivered", "order-confirmed")
    assert foreign == ("sensor", "fragile")


def test_resolve_state_prefers_problems_over_progress() -> None:
    assert resolve_state(["in-transit", "with-issue"]) is ShipmentState.WITH_ISSUE
    assert resolve_state(["delivered", "cancelled"]) is ShipmentState.CANCELLED
    assert resolve_state(["pending-confirmation", "in-transit"]) is ShipmentState.IN_TRANSIT


def test_resolve_state_defaults_to_pending() -> None:
    assert resolve_state([]) is ShipmentState.PENDING_CONFIRMATION
    assert resolve_state(["order-confirmed"]) is ShipmentState.PENDING_CONFIRMATION


def test_desired_tags_adds_confirmation_flag() -> None:
    assert desired_tags(ShipmentState.IN_TRANSIT, order_confirmed=True) == (
        "in-transit",
        "order-confirmed",
    )
    assert desired_tags(ShipmentState.CANCELLED, order_confirmed=False) == ("cancelled",)


def test_to_external_tag_strips_hyphens_of_recognized_tags_only() -> None:
    assert to_external_tag("in-transit") == "intransit"
    assert to_external_tag("Order-Confirmed") == "orderconfirmed"
    assert to_external_tag("cold-chain") == "cold-chain"


def test_merge_tags_preserves_foreign_tags() -> None:
    final = merge_tags(
        ["sensor", "pendingconfirmation", {"name": "Fragile"}],
        ["in-transit", "order-confirmed"],
    )

    assert final == ["sensor", "fragile", "intransit", "orderconfirmed"]


def test_merge_tags_replaces_stale_status_tags() -> None:
    final = merge_tags(["withissue", "orderconfirmed"], ["pending-confirmation"])

    assert final == ["pendingconfirmation"]


def test_merge_tags_is_idempotent() -> None:
    live = ["sensor", "intransit", None, {"name": "Fragile"}]
    desired = ["delivered", "order-confirmed"]

    once = merge_tags(live, desired)

    assert merge_tags(once, desired) == once
