"""Public domain model surface."""

from __future__ import annotations

from trackpulse.domain.model.enums import ORDER_CONFIRMED_TAG, Role, ShipmentState
from trackpulse.domain.model.shipment import (
    ExternalDocument,
    InvoiceDraft,
    InvoiceLine,
    NewShipment,
    Product,
    RawTag,
    ShipmentProduct,
    ShipmentRecord,
)

__all__ = [
    "ORDER_CONFIRMED_TAG",
    "ExternalDocument",
    "InvoiceDraft",
    "InvoiceLine",
    "NewShipment",
    "Product",
    "RawTag",
    "Role",
    "ShipmentProduct",
    "ShipmentRecord",
    "ShipmentState",
]
