from __future__ import annotations

import pytest

from trackpulse.domain.model import Product, ShipmentProduct, ShipmentState
from tests.helpers.shipments import (
    FakeDocumentStore,
    FakeProductCatalog,
    make_document,
    make_record,
)


@pytest.fixture
def products() -> list[Product]:
    return [
        Product(id="p-oil", name="Olive oil 5L", sku="OIL-5", price=24.5, stock_level=40),
        Product(id="p-jar", name="Glass jar", sku="JAR-1", price=1.2, stock_level=3),
    ]


@pytest.fixture
def catalog(products: list[Product]) -> FakeProductCatalog:
    return FakeProductCatalog(products)


@pytest.fixture
def pending_store() -> FakeDocumentStore:
    record = make_record(
        state=ShipmentState.PENDING_CONFIRMATION,
        products=(
            ShipmentProduct(product_id="p-oil", units=4),
            ShipmentProduct(product_id="p-jar", units=2),
        ),
    )
    return FakeDocumentStore([make_document(record, extra_tags=["sensor"])])
