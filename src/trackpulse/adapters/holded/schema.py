"""Pydantic models describing the Holded invoicing API payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _to_str(value: object) -> object:
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return value


def _optional_id(value: object) -> object:
    return _blank_to_none(_to_str(value))


def _lenient_number(value: object) -> object:
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0
    return value


class HoldedBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class CustomFieldPayload(HoldedBaseModel):
    field: str
    value: str = ""

    _normalize_value = field_validator("value", mode="before")(_to_str)


class InvoiceProductPayload(HoldedBaseModel):
    product_id: str | None = Field(default=None, alias="productId")
    name: str | None = None
    sku: str | None = None
    units: float = 0

    _normalize_ids = field_validator("product_id", "sku", mode="before")(_optional_id)
    _normalize_units = field_validator("units", mode="before")(_lenient_number)


class InvoicePayload(HoldedBaseModel):
    """A document as returned by ``GET documents/invoice``.

    Tags stay untyped: Holded returns strings, ``{"name": ...}`` objects, and the
    occasional null, and the reconciliation core sorts them out.
    """

    id: str
    doc_number: str | None = Field(default=None, alias="docNumber")
    date: int | None = None
    desc: str | None = None
    notes: str | None = None
    tags: list[Any] = Field(default_factory=list)
    products: list[InvoiceProductPayload] = Field(default_factory=list)
    custom_fields: list[CustomFieldPayload] = Field(default_factory=list, alias="customFields")

    _normalize_id = field_validator("id", "doc_number", mode="before")(_to_str)

    @field_validator("date", mode="before")
    @classmethod
    def _parse_epoch(cls, value: object) -> int | None:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, int | float):
            return int(value)
        if isinstance(value, str) and value.strip().lstrip("-").isdigit():
            return int(value.strip())
        return None

    @field_validator("tags", "products", "custom_fields", mode="before")
    @classmethod
    def _null_to_empty(cls, value: object) -> object:
        return [] if value is None else value


class InvoiceItemPayload(HoldedBaseModel):
    name: str
    units: int
    price: float
    tax: str
    sku: str | None = None


class CreateInvoicePayload(HoldedBaseModel):
    contact_id: str = Field(alias="contactId")
    items: list[InvoiceItemPayload]
    desc: str
    date: int
    tags: list[str]
    notes: str


class UpdateInvoicePayload(HoldedBaseModel):
    tags: list[str]
    notes: str


class StatusResponse(HoldedBaseModel):
    """Write acknowledgement: ``{"status": 1, "id": ...}``."""

    status: int | None = None
    id: str | None = None
    info: str | None = None

    _normalize_id = field_validator("id", mode="before")(_to_str)


class PdfPayload(HoldedBaseModel):
    status: int | None = None
    data: str | None = None
    info: str | None = None


class ProductDefaultsPayload(HoldedBaseModel):
    warehouse_id: str | None = Field(default=None, alias="warehouseId")

    _normalize_warehouse = field_validator("warehouse_id", mode="before")(_optional_id)


class ProductPayload(HoldedBaseModel):
    id: str
    name: str | None = None
    desc: str | None = None
    sku: str | None = None
    price: float = 0
    stock: float = 0
    warehouse_id: str | None = Field(default=None, alias="warehouseId")
    defaults: ProductDefaultsPayload | None = None

    _normalize_id = field_validator("id", mode="before")(_to_str)
    _normalize_sku = field_validator("sku", mode="before")(_to_str)
    _normalize_numbers = field_validator("price", "stock", mode="before")(_lenient_number)
    _normalize_warehouse = field_validator("warehouse_id", mode="before")(_optional_id)

    @property
    def resolved_warehouse_id(self) -> str | None:
        if self.warehouse_id:
            return self.warehouse_id
        if self.defaults is not None:
            return self.defaults.warehouse_id
        return None


__all__ = [
    "CreateInvoicePayload",
    "CustomFieldPayload",
    "HoldedBaseModel",
    "InvoiceItemPayload",
    "InvoicePayload",
    "InvoiceProductPayload",
    "PdfPayload",
    "ProductDefaultsPayload",
    "ProductPayload",
    "StatusResponse",
    "UpdateInvoicePayload",
]
