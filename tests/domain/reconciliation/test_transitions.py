from __future__ import annotations

import pytest

from trackpulse.domain.errors import InvalidTransition
from trackpulse.domain.model import Role, ShipmentState
from trackpulse.domain.reconciliation import TRANSITIONS, allowed_targets, find_transition

PENDING = ShipmentState.PENDING_CONFIRMATION
IN_TRANSIT = ShipmentState.IN_TRANSIT
DELIVERED = ShipmentState.DELIVERED
WITH_ISSUE = ShipmentState.WITH_ISSUE
CANCELLED = ShipmentState.CANCELLED


@pytest.mark.parametrize(
    ("current", "target", "role"),
    [
        (PENDING, IN_TRANSIT, Role.TRACK_TEAM),
        (PENDING, WITH_ISSUE, Role.TRACK_TEAM),
        (PENDING, CANCELLED, Role.LOGISTICS),
        (IN_TRANSIT, DELIVERED, Role.TRACK_TEAM),
        (IN_TRANSIT, WITH_ISSUE, Role.TRACK_TEAM),
        (WITH_ISSUE, PENDING, Role.LOGISTICS),
    ],
)
def test_legal_transitions(current: ShipmentState, target: ShipmentState, role: Role) -> None:
    rule = find_transition(current, target, role, order_confirmed=False)

    assert (rule.source, rule.target, rule.role) == (current, target, role)


def test_transition_table_has_six_rules() -> None:
    assert len(TRANSITIONS) == 6


@pytest.mark.parametrize(
    ("current", "target", "role", "reason"),
    [
        (DELIVERED, IN_TRANSIT, Role.LOGISTICS, "delivered is a final state"),
        (CANCELLED, PENDING, Role.LOGISTICS, "cancelled is a final state"),
        (
            PENDING,
            DELIVERED,
            Role.TRACK_TEAM,
            "track-team may only move it to in-transit, with-issue",
        ),
        (IN_TRANSIT, CANCELLED, Role.LOGISTICS, "logistics cannot move it from in-transit"),
        (PENDING, IN_TRANSIT, Role.LOGISTICS, "only track-team may do this"),
        (PENDING, CANCELLED, Role.TRACK_TEAM, "only logistics may do this"),
        (WITH_ISSUE, PENDING, Role.TRACK_TEAM, "only logistics may do this"),
    ],
)
def test_illegal_transitions(
    current: ShipmentState,
    target: ShipmentState,
    role: Role,
    reason: str,
) -> None:
    with pytest.raises(InvalidTransition) as excinfo:
        find_transition(current, target, role, order_confirmed=False)

    assert excinfo.value.reason == reason
    assert excinfo.value.current is current
    assert excinfo.value.requested is target


def test_cancellation_requires_unconfirmed_order() -> None:
    with pytest.raises(InvalidTransition) as excinfo:
        find_transition(PENDING, CANCELLED, Role.LOGISTICS, order_confirmed=True)

    assert excinfo.value.reason == "the order was already confirmed"


def test_allowed_targets_per_role() -> None:
    assert allowed_targets(PENDING, Role.TRACK_TEAM, order_confirmed=False) == (
        IN_TRANSIT,
        WITH_ISSUE,
    )
    assert allowed_targets(PENDING, Role.LOGISTICS, order_confirmed=False) == (CANCELLED,)
    assert allowed_targets(PENDING, Role.LOGISTICS, order_confirmed=True) == ()
    assert allowed_targets(DELIVERED, Role.TRACK_TEAM, order_confirmed=True) == ()
