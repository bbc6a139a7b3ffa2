"""Port for product stock kept by the external store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from trackpulse.domain.model import Product


@runtime_checkable
class ProductCatalog(Protocol):
    def list_products(self) -> list[Product]: ...

    def adjust_stock(self, product_id: str, delta: int) -> None:
        """Apply ``delta`` units (positive or negative) to the product's stock."""
        ...


__all__ = ["ProductCatalog"]
