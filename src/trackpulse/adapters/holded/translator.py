"""Translate Holded payloads into domain documents and products, and back."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from logging import getLogger
from typing import TYPE_CHECKING, cast

from pydantic import ValidationError

from trackpulse.domain.errors import MalformedExternalData
from trackpulse.domain.model import ExternalDocument, Product, ShipmentProduct

from .schema import (
    CreateInvoicePayload,
    InvoiceItemPayload,
    InvoicePayload,
    InvoiceProductPayload,
    ProductPayload,
)

if TYPE_CHECKING:
    from trackpulse.domain.model import InvoiceDraft

log = getLogger(__name__)

UNNAMED_PRODUCT = "Unnamed Product"


def _line_product_id(item: InvoiceProductPayload) -> str:
    if item.product_id:
        return item.product_id
    if item.sku:
        return item.sku
    return f"unknown_pid_for_{re.sub(r'\s+', '_', item.name or '')}"


def to_external_document(payload: InvoicePayload) -> ExternalDocument:
    return ExternalDocument(
        id=payload.id,
        tags=tuple(payload.tags),
        notes=payload.notes or "",
        date=payload.date,
        description=payload.desc,
        doc_number=payload.doc_number,
        products=tuple(
            ShipmentProduct(product_id=_line_product_id(item), units=round(item.units))
            for item in payload.products
        ),
        custom_fields={field.field: field.value for field in payload.custom_fields},
    )


def _salvage_document(raw: Mapping[str, object]) -> ExternalDocument | None:
    document_id = raw.get("id")
    if document_id is None or isinstance(document_id, Mapping | list):
        return None
    tags = raw.get("tags")
    notes = raw.get("notes")
    return ExternalDocument(
        id=str(document_id),
        tags=tuple(tags) if isinstance(tags, list) else (),
        notes=notes if isinstance(notes, str) else "",
    )


def parse_document(raw: object) -> ExternalDocument:
    """Validate one invoice, keeping whatever is usable when the payload is off-schema."""

    try:
        return to_external_document(InvoicePayload.model_validate(raw))
    except ValidationError as exc:
        salvaged = (
            _salvage_document(cast(Mapping[str, object], raw)) if isinstance(raw, Mapping) else None
        )
        if salvaged is None:
            raise MalformedExternalData(f"Unusable invoice payload: {exc}") from exc
        log.warning("Invoice %s has unexpected fields, decoding tags and notes only", salvaged.id)
        return salvaged


def parse_documents(raw: object) -> list[ExternalDocument]:
    if not isinstance(raw, Sequence) or isinstance(raw, str | bytes):
        raise MalformedExternalData("Expected a list of invoices")

    documents: list[ExternalDocument] = []
    for item in cast(Sequence[object], raw):
        try:
            documents.append(parse_document(item))
        except MalformedExternalData as exc:
            log.warning("Skipping invoice without an id: %s", exc)
    return documents


def to_product(payload: ProductPayload) -> Product:
    return Product(
        id=payload.id,
        name=payload.name or UNNAMED_PRODUCT,
        sku=payload.sku or "",
        price=payload.price,
        stock_level=int(payload.stock),
        warehouse_id=payload.resolved_warehouse_id,
    )


def parse_products(raw: object) -> list[Product]:
    if not isinstance(raw, Sequence) or isinstance(raw, str | bytes):
        raise MalformedExternalData("Expected a list of products")
    try:
        return [
            to_product(ProductPayload.model_validate(item)) for item in cast(Sequence[object], raw)
        ]
    except ValidationError as exc:
        raise MalformedExternalData(f"Unusable product payload: {exc}") from exc


def to_create_payload(draft: InvoiceDraft) -> CreateInvoicePayload:
    return CreateInvoicePayload(
        contact_id=draft.contact_id,
        items=[
            InvoiceItemPayload(
                name=line.name,
                units=line.units,
                price=line.price,
                tax=line.tax,
                sku=line.sku,
            )
            for line in draft.items
        ],
        desc=draft.description,
        date=draft.date,
        tags=list(draft.tags),
        notes=draft.notes,
    )
