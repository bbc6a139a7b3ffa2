"""Port for the external store that holds shipment invoices."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from trackpulse.domain.model import ExternalDocument, InvoiceDraft


@runtime_checkable
class DocumentStore(Protocol):
    """Invoice documents backing shipments.

    Implementations raise ``DocumentStoreError`` when a request cannot be completed.
    """

    def list_documents(self) -> list[ExternalDocument]: ...

    def get_document(self, document_id: str) -> ExternalDocument: ...

    def create_document(self, draft: InvoiceDraft) -> ExternalDocument: ...

    def update_document(self, document_id: str, *, tags: Sequence[str], notes: str) -> None: ...

    def get_document_pdf(self, document_id: str) -> bytes: ...


__all__ = ["DocumentStore"]
