"""HTTP client for the Holded invoicing API."""

from __future__ import annotations

import asyncio
import base64
import binascii
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from trackpulse.adapters.http_resilience import ResilienceConfig, ResilientClient
from trackpulse.config.holded import HoldedConfig, get_holded_config
from trackpulse.domain.errors import DocumentStoreError, MalformedExternalData
from trackpulse.domain.model import ExternalDocument, ShipmentProduct
from trackpulse.domain.ports import DocumentStore, ProductCatalog

from .schema import PdfPayload, ProductPayload, StatusResponse, UpdateInvoicePayload
from .translator import parse_document, parse_documents, parse_products, to_create_payload

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from trackpulse.domain.model import InvoiceDraft, Product

log = getLogger(__name__)

INVOICES_PATH = "/documents/invoice"
PRODUCTS_PATH = "/products"
_PDF_MAGIC = b"%PDF"


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class HoldedAPIError(DocumentStoreError):
    """Raised when Holded rejects a request or cannot be reached."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _error_detail(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(payload, dict):
        for key in ("info", "message"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    return response.text[:200]


def _json(response: httpx.Response, what: str) -> object:
    try:
        return response.json()
    except ValueError as exc:
        raise MalformedExternalData(f"Holded returned non-JSON {what}") from exc


@dataclass(slots=True)
class HoldedClient:
    """Document store and product catalog backed by Holded invoices and products."""

    config: HoldedConfig = field(default_factory=get_holded_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    # Documents

    def list_documents(self) -> list[ExternalDocument]:
        return asyncio.run(self._list_documents_async())

    def get_document(self, document_id: str) -> ExternalDocument:
        return asyncio.run(self._get_document_async(document_id))

    def create_document(self, draft: InvoiceDraft) -> ExternalDocument:
        return asyncio.run(self._create_document_async(draft))

    def update_document(self, document_id: str, *, tags: Sequence[str], notes: str) -> None:
        asyncio.run(self._update_document_async(document_id, tags=tags, notes=notes))

    def get_document_pdf(self, document_id: str) -> bytes:
        return asyncio.run(self._get_document_pdf_async(document_id))

    # Products

    def list_products(self) -> list[Product]:
        return asyncio.run(self._list_products_async())

    def adjust_stock(self, product_id: str, delta: int) -> None:
        asyncio.run(self._adjust_stock_async(product_id, delta))

    async def _list_documents_async(self) -> list[ExternalDocument]:
        async with self.client_factory(self.config.documents) as client:
            response = await self._send(client, "GET", INVOICES_PATH)
        return parse_documents(_json(response, "invoice list"))

    async def _get_document_async(self, document_id: str) -> ExternalDocument:
        async with self.client_factory(self.config.documents) as client:
            response = await self._send(client, "GET", f"{INVOICES_PATH}/{document_id}")
        return parse_document(_json(response, f"invoice {document_id}"))

    async def _create_document_async(self, draft: InvoiceDraft) -> ExternalDocument:
        payload = to_create_payload(draft).model_dump(by_alias=True, exclude_none=True)
        async with self.client_factory(self.config.documents) as client:
            response = await self._send(client, "POST", INVOICES_PATH, json=payload)

        raw = _json(response, "invoice creation response")
        if isinstance(raw, dict) and isinstance(raw.get("data"), dict):
            raw = raw["data"]
        try:
            status = StatusResponse.model_validate(raw)
        except ValidationError as exc:
            raise MalformedExternalData("Unexpected invoice creation response") from exc
        if not status.id or (status.status is not None and status.status != 1):
            raise MalformedExternalData(
                f"Invoice creation did not return an id: {status.info or raw!r}"
            )

        return ExternalDocument(
            id=status.id,
            tags=draft.tags,
            notes=draft.notes,
            date=draft.date,
            description=draft.description,
            products=tuple(
                ShipmentProduct(product_id=line.product_id, units=line.units)
                for line in draft.items
            ),
        )

    async def _update_document_async(
        self, document_id: str, *, tags: Sequence[str], notes: str
    ) -> None:
        payload = UpdateInvoicePayload(tags=list(tags), notes=notes).model_dump()
        async with self.client_factory(self.config.documents) as client:
            await self._send(client, "PUT", f"{INVOICES_PATH}/{document_id}", json=payload)

    async def _get_document_pdf_async(self, document_id: str) -> bytes:
        async with self.client_factory(self.config.documents) as client:
            response = await self._send(
                client,
                "GET",
                f"{INVOICES_PATH}/{document_id}/pdf",
                headers={"Accept": "application/pdf, application/json"},
            )

        content_type = response.headers.get("content-type", "")
        if "application/pdf" in content_type or response.content.startswith(_PDF_MAGIC):
            return response.content

        try:
            pdf = PdfPayload.model_validate(_json(response, f"PDF for invoice {document_id}"))
        except ValidationError as exc:
            raise MalformedExternalData(f"Unexpected PDF payload for {document_id}") from exc
        if pdf.status != 1 or not pdf.data:
            raise MalformedExternalData(
                f"Holded did not return a PDF for {document_id}: {pdf.info or 'no data'}"
            )
        try:
            return base64.b64decode(pdf.data, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise MalformedExternalData(f"PDF data for {document_id} is not base64") from exc

    async def _list_products_async(self) -> list[Product]:
        async with self.client_factory(self.config.products) as client:
            response = await self._send(client, "GET", PRODUCTS_PATH)
        return parse_products(_json(response, "product list"))

    async def _adjust_stock_async(self, product_id: str, delta: int) -> None:
        async with self.client_factory(self.config.documents) as client:
            response = await self._send(client, "GET", f"{PRODUCTS_PATH}/{product_id}")
            try:
                product = ProductPayload.model_validate(_json(response, f"product {product_id}"))
            except ValidationError as exc:
                raise MalformedExternalData(f"Unusable product payload for {product_id}") from exc

            warehouse_id = product.resolved_warehouse_id
            if warehouse_id is None:
                raise MalformedExternalData(f"No warehouse found for product {product_id}")

            payload = {"stock": {warehouse_id: {product_id: delta}}}
            log.info("Adjusting stock of %s in warehouse %s by %s", product_id, warehouse_id, delta)
            await self._send(client, "PUT", f"{PRODUCTS_PATH}/{product_id}/stock", json=payload)

    async def _send(
        self,
        client: ResilientClient,
        method: str,
        path: str,
        *,
        json: object = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        try:
            response = await client.request(method, path, json=json, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            detail = _error_detail(exc.response)
            log.error(f"Holded API error {status_code} on {method} {path}: {detail}")
            raise HoldedAPIError(
                f"Holded returned {status_code} for {method} {path}: {detail}",
                status_code=status_code,
            ) from exc
        except httpx.HTTPError as exc:
            log.error(f"Holded request {method} {path} failed: {exc}")
            raise HoldedAPIError(f"Could not reach Holded for {method} {path}: {exc}") from exc
        return response


if TYPE_CHECKING:
    _store_check: DocumentStore = HoldedClient()
    _catalog_check: ProductCatalog = HoldedClient()
