"""Public interface for the Holded adapter."""

from __future__ import annotations

from .client import HoldedAPIError, HoldedClient
from .schema import InvoicePayload, ProductPayload
from .translator import parse_documents, parse_products, to_create_payload, to_external_document

__all__ = [
    "HoldedAPIError",
    "HoldedClient",
    "InvoicePayload",
    "ProductPayload",
    "parse_documents",
    "parse_products",
    "to_create_payload",
    "to_external_document",
]
