"""Shipment workflows built on the reconciliation core and the store ports."""

from __future__ import annotations

import secrets
import string
from dataclasses import replace
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from trackpulse.domain.errors import (
    DocumentStoreError,
    InsufficientStockError,
    MalformedExternalData,
    PartialCompensationFailure,
    ShipmentError,
    StaleFetchFailure,
)
from trackpulse.domain.model import (
    InvoiceDraft,
    InvoiceLine,
    ShipmentRecord,
    ShipmentState,
)
from trackpulse.domain.reconciliation import (
    decode_document,
    describe_invoice,
    desired_tags,
    encode_notes,
    merge_tags,
    plan_transition,
    to_external_tag,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from trackpulse.domain.model import NewShipment, Role, ShipmentProduct
    from trackpulse.domain.ports import DocumentStore, ProductCatalog

log = getLogger(__name__)

_REFERENCE_ALPHABET = string.ascii_lowercase + string.digits


def _utcnow() -> datetime:
    return datetime.now(UTC)


def new_reference(now: datetime) -> str:
    """Return ``<epoch millis>_<5 random chars>``, the suffix of a shipment id."""

    random_part = "".join(secrets.choice(_REFERENCE_ALPHABET) for _ in range(5))
    return f"{int(now.timestamp() * 1000)}_{random_part}"


def list_shipments(
    store: DocumentStore,
    *,
    clock: Callable[[], datetime] = _utcnow,
) -> list[ShipmentRecord]:
    return [decode_document(document, clock=clock) for document in store.list_documents()]


def update_shipment_status(
    record: ShipmentRecord,
    target: ShipmentState,
    role: Role,
    *,
    store: DocumentStore,
    catalog: ProductCatalog,
    confirmation: bool | None = None,
    issue_text: str | None = None,
    clock: Callable[[], datetime] = _utcnow,
) -> ShipmentRecord:
    """Apply a status change to the shipment's document.

    Runs validate, fetch live tags, merge, write. Nothing is written when the
    transition is invalid or the live fetch fails. Cancelling an unconfirmed order
    gives its units back to stock afterwards.

    Returns the shipment decoded from what was written.
    """

    document_id = record.document_id
    if document_id is None:
        raise ShipmentError(f"Shipment {record.id} has no invoice document")

    plan = plan_transition(
        record,
        target,
        role,
        confirmation=confirmation,
        issue_text=issue_text,
        now=clock(),
    )

    try:
        live = store.get_document(document_id)
    except (DocumentStoreError, MalformedExternalData) as exc:
        log.error("Live tag fetch failed for document %s: %s", document_id, exc)
        raise StaleFetchFailure(document_id) from exc

    final_tags = merge_tags(live.tags, plan.tags)
    log.info(
        "Updating document %s: live=%s desired=%s final=%s",
        document_id,
        list(live.tags),
        list(plan.tags),
        final_tags,
    )
    store.update_document(document_id, tags=final_tags, notes=plan.notes)

    shipment = decode_document(replace(live, tags=tuple(final_tags), notes=plan.notes), clock=clock)

    if target is ShipmentState.CANCELLED:
        failed = restore_stock(shipment.products, catalog)
        if failed:
            raise PartialCompensationFailure(shipment, failed)

    return shipment


def restore_stock(
    products: Iterable[ShipmentProduct],
    catalog: ProductCatalog,
) -> tuple[str, ...]:
    """Give units back to stock one product at a time; return the ids that failed."""

    failed: list[str] = []
    for item in products:
        try:
            catalog.adjust_stock(item.product_id, item.units)
        except (DocumentStoreError, MalformedExternalData) as exc:
            log.warning("Could not restore %s units of %s: %s", item.units, item.product_id, exc)
            failed.append(item.product_id)
    return tuple(failed)


def create_shipment(
    new: NewShipment,
    *,
    store: DocumentStore,
    catalog: ProductCatalog,
    contact_id: str,
    tax: str,
    clock: Callable[[], datetime] = _utcnow,
    reference_factory: Callable[[datetime], str] = new_reference,
) -> ShipmentRecord:
    """Create the invoice backing a new shipment and return it decoded.

    Stock is checked against the catalog first; the store itself deducts stock when
    the invoice is created.
    """

    if not new.products:
        raise ValueError("A shipment needs at least one product")

    products = {product.id: product for product in catalog.list_products()}
    lines: list[InvoiceLine] = []
    for item in new.products:
        if item.units <= 0:
            raise ValueError(f"Units for {item.product_id} must be positive")
        product = products.get(item.product_id)
        available = product.stock_level if product else 0
        if product is None or available < item.units:
            raise InsufficientStockError(item.product_id, available=available, requested=item.units)
        lines.append(
            InvoiceLine(
                product_id=product.id,
                name=product.name,
                units=item.units,
                price=product.price,
                tax=tax,
                sku=product.sku or None,
            )
        )

    now = clock()
    reference = reference_factory(now)
    record = ShipmentRecord(
        id=f"shp_{reference}",
        title=new.title,
        origin=new.origin,
        destination=new.destination,
        estimated_delivery=new.estimated_delivery,
        created_at=now,
        products=new.products,
    )
    draft = InvoiceDraft(
        contact_id=contact_id,
        items=tuple(lines),
        description=describe_invoice(new.title, reference),
        date=int(now.timestamp()),
        tags=tuple(
            to_external_tag(tag)
            for tag in desired_tags(record.state, order_confirmed=record.order_confirmed)
        ),
        notes=encode_notes(record),
    )

    document = store.create_document(draft)
    log.info("Created document %s for shipment %s", document.id, record.id)
    return decode_document(document, clock=clock)
