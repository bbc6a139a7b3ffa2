"""The ``Key: Value`` notes format used to persist shipment attributes.

The external store keeps the notes as opaque text, so this module is the only
authority on the format. Documents written years ago must still decode, so keys,
their order, and the date spellings are fixed.

Values are written as-is: a newline inside a value cuts it short on the next read.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from trackpulse.domain.model import ShipmentRecord

KEY_SEPARATOR: Final[str] = ": "
_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def format_date(value: datetime) -> str:
    return value.astimezone(UTC).strftime("%Y-%m-%d")


def format_timestamp(value: datetime) -> str:
    """Format as ``2024-05-01T10:15:30.123Z`` (UTC, millisecond precision)."""

    value = value.astimezone(UTC)
    return f"{value:%Y-%m-%dT%H:%M:%S}.{value.microsecond // 1000:03d}Z"


def parse_timestamp(value: str) -> datetime | None:
    normalized = value.strip()
    if normalized.endswith("Z"):
        normalized = normalized[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def parse_delivery_date(value: str) -> datetime | None:
    """Parse ``yyyy-MM-dd`` as UTC midnight; fall back to a full ISO timestamp."""

    if _DATE_ONLY.match(value):
        try:
            day = datetime.strptime(value, "%Y-%m-%d")  # noqa: DTZ007
        except ValueError:
            return None
        return day.replace(tzinfo=UTC)
    return parse_timestamp(value)


def _text(value: str) -> str:
    return value


def _optional_text(value: str) -> str | None:
    return value or None


def _flag(value: str) -> bool:
    return value.lower() == "true"


@dataclass(frozen=True, slots=True)
class NotesField:
    """One notes line: its key, the record attribute it carries, and both directions."""

    key: str
    attribute: str
    render: Callable[[ShipmentRecord], str | None]
    parse: Callable[[str], object | None]


def _render_actual_delivery(record: ShipmentRecord) -> str | None:
    if record.actual_delivery is None:
        return None
    return format_timestamp(record.actual_delivery)


NOTES_FIELDS: Final[tuple[NotesField, ...]] = (
    NotesField("Shipment Title", "title", lambda r: r.title, _text),
    NotesField("Origin", "origin", lambda r: r.origin, _text),
    NotesField("Destination", "destination", lambda r: r.destination, _text),
    NotesField(
        "Est. Delivery",
        "estimated_delivery",
        lambda r: format_date(r.estimated_delivery),
        parse_delivery_date,
    ),
    NotesField("Internal Shipment ID", "id", lambda r: r.id, _text),
    NotesField(
        "Order Confirmed",
        "order_confirmed",
        lambda r: "true" if r.order_confirmed else "false",
        _flag,
    ),
    NotesField("Actual Delivery", "actual_delivery", _render_actual_delivery, parse_timestamp),
    NotesField(
        "Issue",
        "issue_description",
        lambda r: r.issue_description or None,
        _optional_text,
    ),
)

_FIELDS_BY_KEY: Final[dict[str, NotesField]] = {field.key: field for field in NOTES_FIELDS}


def encode_notes(record: ShipmentRecord) -> str:
    lines: list[str] = []
    for field in NOTES_FIELDS:
        value = field.render(record)
        if value is not None:
            lines.append(f"{field.key}{KEY_SEPARATOR}{value}")
    return "\n".join(lines)


def parse_notes(notes: str | None) -> dict[str, object]:
    """Return parsed values keyed by record attribute.

    Unknown keys, lines without a separator, and values that fail to parse are left
    out, so callers apply their own defaults. A repeated key keeps its last value.
    """

    parsed: dict[str, object] = {}
    if not notes:
        return parsed

    for line in notes.split("\n"):
        key, separator, value = line.partition(KEY_SEPARATOR)
        if not separator:
            continue
        field = _FIELDS_BY_KEY.get(key.strip())
        if field is None:
            continue
        result = field.parse(value.strip())
        if result is not None:
            parsed[field.attribute] = result
    return parsed
