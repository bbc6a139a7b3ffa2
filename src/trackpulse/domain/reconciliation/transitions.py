"""Shipment lifecycle: which role may move a shipment between which states."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from trackpulse.domain.errors import InvalidTransition
from trackpulse.domain.model.enums import Role, ShipmentState


@dataclass(frozen=True, slots=True, kw_only=True)
class Transition:
    source: ShipmentState
    target: ShipmentState
    role: Role
    confirms_order: bool = False
    records_delivery: bool = False
    reports_issue: bool = False
    resolves_issue: bool = False
    requires_unconfirmed: bool = False


TRANSITIONS: Final[tuple[Transition, ...]] = (
    Transition(
        source=ShipmentState.PENDING_CONFIRMATION,
        target=ShipmentState.IN_TRANSIT,
        role=Role.TRACK_TEAM,
        confirms_order=True,
    ),
    Transition(
        source=ShipmentState.PENDING_CONFIRMATION,
        target=ShipmentState.WITH_ISSUE,
        role=Role.TRACK_TEAM,
        reports_issue=True,
    ),
    Transition(
        source=ShipmentState.PENDING_CONFIRMATION,
        target=ShipmentState.CANCELLED,
        role=Role.LOGISTICS,
        requires_unconfirmed=True,
    ),
    Transition(
        source=ShipmentState.IN_TRANSIT,
        target=ShipmentState.DELIVERED,
        role=Role.TRACK_TEAM,
        records_delivery=True,
    ),
    Transition(
        source=ShipmentState.IN_TRANSIT,
        target=ShipmentState.WITH_ISSUE,
        role=Role.TRACK_TEAM,
        reports_issue=True,
    ),
    Transition(
        source=ShipmentState.WITH_ISSUE,
        target=ShipmentState.PENDING_CONFIRMATION,
        role=Role.LOGISTICS,
        resolves_issue=True,
    ),
)

TERMINAL_STATES: Final[frozenset[ShipmentState]] = frozenset(
    {ShipmentState.DELIVERED, ShipmentState.CANCELLED}
)

_BY_EDGE: Final[dict[tuple[ShipmentState, ShipmentState], Transition]] = {
    (transition.source, transition.target): transition for transition in TRANSITIONS
}


def find_transition(
    current: ShipmentState,
    requested: ShipmentState,
    role: Role,
    *,
    order_confirmed: bool,
) -> Transition:
    """Return the rule allowing this change or raise ``InvalidTransition``."""

    rule = _BY_EDGE.get((current, requested))
    if rule is None:
        if current in TERMINAL_STATES:
            reason = f"{current} is a final state"
        else:
            targets = allowed_targets(current, role, order_confirmed=order_confirmed)
            reason = (
                f"{role} may only move it to {', '.join(targets)}"
                if targets
                else f"{role} cannot move it from {current}"
            )
        raise InvalidTransition(current, requested, role, reason=reason)
    if rule.role is not role:
        raise InvalidTransition(current, requested, role, reason=f"only {rule.role} may do this")
    if rule.requires_unconfirmed and order_confirmed:
        raise InvalidTransition(
            current, requested, role, reason="the order was already confirmed"
        )
    return rule


def allowed_targets(
    current: ShipmentState,
    role: Role,
    *,
    order_confirmed: bool,
) -> tuple[ShipmentState, ...]:
    return tuple(
        rule.target
        for rule in TRANSITIONS
        if rule.source is current
        and rule.role is role
        and not (rule.requires_unconfirmed and order_confirmed)
    )
