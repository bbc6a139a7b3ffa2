"""Application orchestration entry points."""

from __future__ import annotations

from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from trackpulse.adapters.copilot import CopilotClient
from trackpulse.adapters.holded import HoldedClient
from trackpulse.config.holded import DEFAULT_HOLDED_CONTACT_ID, DEFAULT_HOLDED_TAX
from trackpulse.domain import copilot as copilot_questions
from trackpulse.domain import shipments
from trackpulse.domain.errors import ShipmentError
from trackpulse.domain.indicators import KeyIndicators, compute_indicators
from trackpulse.domain.model import ShipmentState

if TYPE_CHECKING:
    from trackpulse.domain.model import NewShipment, Product, Role, ShipmentRecord
    from trackpulse.domain.ports import (
        CopilotAnswer,
        CopilotService,
        DocumentStore,
        ProductCatalog,
    )


log = getLogger(__name__)


def _holded_ports(
    store: DocumentStore | None,
    catalog: ProductCatalog | None,
) -> tuple[DocumentStore, ProductCatalog]:
    if store is not None and catalog is not None:
        return store, catalog
    client = HoldedClient()
    return store or client, catalog or client


def list_shipments(*, store: DocumentStore | None = None) -> list[ShipmentRecord]:
    effective_store = store or HoldedClient()
    records = shipments.list_shipments(effective_store)
    log.info("Loaded %s shipments", len(records))
    return records


def find_shipment(shipment_id: str, *, store: DocumentStore | None = None) -> ShipmentRecord:
    """Look a shipment up by its shipment id or by the id of its invoice."""

    for record in list_shipments(store=store):
        if shipment_id in (record.id, record.document_id):
            return record
    raise ShipmentError(f"Shipment {shipment_id} not found")


def change_shipment_status(
    shipment_id: str,
    target: ShipmentState,
    role: Role,
    *,
    confirmation: bool | None = None,
    issue_text: str | None = None,
    store: DocumentStore | None = None,
    catalog: ProductCatalog | None = None,
) -> ShipmentRecord:
    effective_store, effective_catalog = _holded_ports(store, catalog)
    record = find_shipment(shipment_id, store=effective_store)
    log.info(
        "Moving shipment %s from %s to %s as %s",
        record.id,
        record.state,
        target,
        role,
    )
    updated = shipments.update_shipment_status(
        record,
        target,
        role,
        store=effective_store,
        catalog=effective_catalog,
        confirmation=confirmation,
        issue_text=issue_text,
    )
    log.info(f"Shipment {updated.id} is now {updated.state} (confirmed={updated.order_confirmed})")
    return updated


def create_shipment(
    new: NewShipment,
    *,
    store: DocumentStore | None = None,
    catalog: ProductCatalog | None = None,
    contact_id: str | None = None,
    tax: str | None = None,
) -> ShipmentRecord:
    if store is None and catalog is None:
        client = HoldedClient()
        effective_store, effective_catalog = client, client
        contact_id = contact_id or client.config.contact_id
        tax = tax or client.config.tax
    else:
        effective_store, effective_catalog = _holded_ports(store, catalog)

    record = shipments.create_shipment(
        new,
        store=effective_store,
        catalog=effective_catalog,
        contact_id=contact_id or DEFAULT_HOLDED_CONTACT_ID,
        tax=tax or DEFAULT_HOLDED_TAX,
    )
    log.info("Created shipment %s (%s)", record.id, record.title)
    return record


def download_invoice_pdf(shipment_id: str, *, store: DocumentStore | None = None) -> bytes:
    effective_store = store or HoldedClient()
    record = find_shipment(shipment_id, store=effective_store)
    if record.state is ShipmentState.CANCELLED:
        raise ShipmentError(f"Shipment {record.id} is cancelled; its invoice is void")
    if record.document_id is None:
        raise ShipmentError(f"Shipment {record.id} has no invoice document")
    return effective_store.get_document_pdf(record.document_id)


def list_products(*, catalog: ProductCatalog | None = None) -> list[Product]:
    effective_catalog = catalog or HoldedClient()
    return effective_catalog.list_products()


def shipment_indicators(
    *,
    store: DocumentStore | None = None,
    now: datetime | None = None,
) -> KeyIndicators:
    records = list_shipments(store=store)
    return compute_indicators(records, now=now or datetime.now(UTC))


def ask_copilot(
    question: str,
    *,
    shipment_id: str | None = None,
    store: DocumentStore | None = None,
    catalog: ProductCatalog | None = None,
    service: CopilotService | None = None,
) -> CopilotAnswer:
    """Ask the logistics copilot, with current stock and optionally one shipment as context."""

    # Reject short questions before touching any service.
    copilot_questions.build_question(question)

    effective_store, effective_catalog = _holded_ports(store, catalog)
    shipment = find_shipment(shipment_id, store=effective_store) if shipment_id else None
    products = effective_catalog.list_products()

    request = copilot_questions.build_question(question, shipment=shipment, products=products)
    return copilot_questions.ask(service or CopilotClient(), request)
