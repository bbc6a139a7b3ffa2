"""Turn a requested status change into the tags and notes to persist."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from trackpulse.domain.errors import InvalidTransition
from trackpulse.domain.model import Role

from .notes import encode_notes
from .tags import desired_tags
from .transitions import find_transition

if TYPE_CHECKING:
    from trackpulse.domain.model import ShipmentRecord, ShipmentState


@dataclass(frozen=True, slots=True)
class ShipmentPatch:
    """Recognized tags (internal spelling) and full notes text for one document."""

    tags: tuple[str, ...]
    notes: str


@dataclass(frozen=True, slots=True)
class TransitionPlan:
    record: ShipmentRecord
    patch: ShipmentPatch

    @property
    def tags(self) -> tuple[str, ...]:
        return self.patch.tags

    @property
    def notes(self) -> str:
        return self.patch.notes


def encode_shipment(record: ShipmentRecord) -> ShipmentPatch:
    return ShipmentPatch(
        tags=desired_tags(record.state, order_confirmed=record.order_confirmed),
        notes=encode_notes(record),
    )


def _to_millis(value: datetime) -> datetime:
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def plan_transition(
    record: ShipmentRecord,
    target: ShipmentState,
    role: Role,
    *,
    confirmation: bool | None = None,
    issue_text: str | None = None,
    now: datetime | None = None,
) -> TransitionPlan:
    """Validate a status change and compute the resulting record and patch.

    ``confirmation`` overrides the order-confirmed flag: ``None`` lets the
    transition decide, ``True`` confirms explicitly (track team only), and
    ``False`` is only accepted while the order is still unconfirmed.

    Raises ``InvalidTransition`` without touching ``record``.
    """

    rule = find_transition(record.state, target, role, order_confirmed=record.order_confirmed)

    confirmed = record.order_confirmed or rule.confirms_order
    if confirmation is True:
        if role is not Role.TRACK_TEAM:
            raise InvalidTransition(
                record.state, target, role, reason="only track-team confirms orders"
            )
        confirmed = True
    elif confirmation is False and confirmed:
        raise InvalidTransition(
            record.state, target, role, reason="a confirmed order cannot be unconfirmed"
        )

    issue = record.issue_description
    if rule.reports_issue:
        issue = (issue_text or "").strip()
        if not issue:
            raise InvalidTransition(
                record.state, target, role, reason="an issue description is required"
            )
    elif rule.resolves_issue:
        issue = None

    actual_delivery = record.actual_delivery
    if rule.records_delivery and actual_delivery is None:
        actual_delivery = _to_millis((now or datetime.now(UTC)).astimezone(UTC))

    updated = replace(
        record,
        state=target,
        order_confirmed=confirmed,
        issue_description=issue,
        actual_delivery=actual_delivery,
    )
    return TransitionPlan(record=updated, patch=encode_shipment(updated))
