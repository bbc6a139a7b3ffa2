"""Shipment records and the external documents they are projected from."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .enums import ShipmentState

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from datetime import datetime


@dataclass(frozen=True, slots=True)
class ShipmentProduct:
    product_id: str
    units: int


@dataclass(frozen=True, slots=True, kw_only=True)
class ShipmentRecord:
    """Shipment as seen by the dashboard.

    Records are never stored locally: they are decoded from an external document on
    every read and planned into a tag/notes patch on every write.
    """

    id: str
    title: str
    origin: str
    destination: str
    estimated_delivery: datetime
    created_at: datetime
    state: ShipmentState = ShipmentState.PENDING_CONFIRMATION
    order_confirmed: bool = False
    actual_delivery: datetime | None = None
    issue_description: str | None = None
    foreign_tags: tuple[str, ...] = ()
    document_id: str | None = None
    products: tuple[ShipmentProduct, ...] = ()


type RawTag = object
"""A tag as returned by the store: a bare string, a ``{"name": ...}`` mapping, or junk."""


@dataclass(frozen=True, slots=True, kw_only=True)
class ExternalDocument:
    """Invoice document owned by the external store.

    Only ``tags`` and ``notes`` are ever rewritten; everything else is read-only here.
    """

    id: str
    tags: Sequence[RawTag] = ()
    notes: str = ""
    date: int | None = None
    description: str | None = None
    doc_number: str | None = None
    products: tuple[ShipmentProduct, ...] = ()
    custom_fields: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True, kw_only=True)
class Product:
    id: str
    name: str
    sku: str = ""
    price: float = 0.0
    stock_level: int = 0
    warehouse_id: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NewShipment:
    """Input for creating a shipment (before it has an id or a document)."""

    title: str
    origin: str
    destination: str
    estimated_delivery: datetime
    products: tuple[ShipmentProduct, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class InvoiceLine:
    product_id: str
    name: str
    units: int
    price: float
    tax: str
    sku: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class InvoiceDraft:
    """Payload for creating the external document backing a new shipment."""

    contact_id: str
    items: tuple[InvoiceLine, ...]
    description: str
    date: int
    tags: tuple[str, ...]
    notes: str
