"""Errors raised by shipment operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from trackpulse.domain.model import Role, ShipmentRecord, ShipmentState


class ShipmentError(RuntimeError):
    """Base class for failures surfaced to dashboard callers."""


class InvalidTransition(ShipmentError):  # noqa: N818
    """Raised when a role or the state machine forbids the requested change."""

    def __init__(
        self,
        current: ShipmentState,
        requested: ShipmentState,
        role: Role,
        *,
        reason: str | None = None,
    ) -> None:
        message = f"{role} cannot move a shipment from {current} to {requested}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.current = current
        self.requested = requested
        self.role = role
        self.reason = reason


class MalformedExternalData(ShipmentError):  # noqa: N818
    """Raised by adapters when the store answers with something unusable."""


class DocumentStoreError(ShipmentError):
    """Raised when the external document store cannot complete a request."""


class StaleFetchFailure(ShipmentError):  # noqa: N818
    """Raised when the live tags could not be fetched; nothing was written."""

    def __init__(self, document_id: str) -> None:
        super().__init__(
            f"Could not fetch current tags for document {document_id}; update aborted"
        )
        self.document_id = document_id


class PartialCompensationFailure(ShipmentError):  # noqa: N818
    """Raised when some stock restorations failed after a cancellation was written.

    The status change itself succeeded; ``shipment`` holds the updated record and
    ``failed_products`` the product ids whose stock needs a manual fix.
    """

    def __init__(self, shipment: ShipmentRecord, failed_products: tuple[str, ...]) -> None:
        failed = ", ".join(failed_products)
        super().__init__(
            f"Shipment {shipment.id} was cancelled but stock could not be restored for: "
            f"{failed}. Manual intervention needed."
        )
        self.shipment = shipment
        self.failed_products = failed_products


class InsufficientStockError(ShipmentError):
    """Raised when a new shipment asks for more units than are in stock."""

    def __init__(self, product_id: str, *, available: int, requested: int) -> None:
        super().__init__(
            f"Not enough stock for {product_id}: available {available}, requested {requested}"
        )
        self.product_id = product_id
        self.available = available
        self.requested = requested
