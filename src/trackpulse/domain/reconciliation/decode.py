"""Rebuild shipment records from raw external documents.

Listings must render even against half-broken historical documents, so decoding
never raises: every document yields exactly one record, with defaults filled in.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Final

from trackpulse.domain.model import ORDER_CONFIRMED_TAG, ShipmentRecord

from .notes import parse_notes
from .tags import normalize_tags, partition_tags, resolve_state

if TYPE_CHECKING:
    from collections.abc import Callable

    from trackpulse.domain.model import ExternalDocument

log = getLogger(__name__)

SHIPMENT_ID_FIELD: Final[str] = "shipment_id"
_DESCRIPTION = re.compile(
    r"Invoice for Shipment: (?P<title>[^(]+?)(?:\s*\(TrackPulse ID: (?P<ref>[^)]+)\))?\s*$"
)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def describe_invoice(title: str, reference: str) -> str:
    """Invoice description for a new shipment; ``decode_document`` reads it back."""

    return f"Invoice for Shipment: {title} (TrackPulse ID: {reference})"


def _document_date(document: ExternalDocument) -> datetime | None:
    if document.date is None:
        return None
    try:
        return datetime.fromtimestamp(document.date, tz=UTC)
    except (OverflowError, OSError, ValueError):
        log.warning("Ignoring out-of-range date %r on document %s", document.date, document.id)
        return None


def decode_document(
    document: ExternalDocument,
    *,
    clock: Callable[[], datetime] = _utcnow,
) -> ShipmentRecord:
    recognized, foreign = partition_tags(normalize_tags(document.tags))
    notes = parse_notes(document.notes)

    described = _DESCRIPTION.search(document.description or "")

    shipment_id = document.custom_fields.get(SHIPMENT_ID_FIELD) or notes.get("id")
    if not shipment_id and described and described.group("ref"):
        shipment_id = f"shp_{described.group('ref').strip()}"
    if not shipment_id:
        shipment_id = f"inv_{document.id}"

    title = notes.get("title")
    if title is None and described:
        title = described.group("title").strip()
    if title is None:
        title = f"Shipment for Invoice {document.doc_number or document.id}"

    issued_at = _document_date(document)
    created_at = issued_at or clock()
    estimated = notes.get("estimated_delivery") or issued_at or clock()

    return ShipmentRecord(
        id=str(shipment_id),
        title=str(title),
        origin=str(notes.get("origin", "")),
        destination=str(notes.get("destination", "")),
        estimated_delivery=estimated,  # type: ignore[arg-type]
        created_at=created_at,
        state=resolve_state(recognized),
        order_confirmed=ORDER_CONFIRMED_TAG in recognized or bool(notes.get("order_confirmed")),
        actual_delivery=notes.get("actual_delivery"),  # type: ignore[arg-type]
        issue_description=notes.get("issue_description"),  # type: ignore[arg-type]
        foreign_tags=foreign,
        document_id=document.id,
        products=tuple(document.products),
    )
