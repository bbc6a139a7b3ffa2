"""Questions to the logistics copilot, enriched with shipment and stock context."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Final

from trackpulse.domain.ports.copilot import CopilotProduct, CopilotQuestion
from trackpulse.domain.reconciliation.notes import format_date

if TYPE_CHECKING:
    from collections.abc import Iterable

    from trackpulse.domain.model import Product, ShipmentRecord
    from trackpulse.domain.ports.copilot import CopilotAnswer, CopilotService

MIN_QUESTION_LENGTH: Final[int] = 5


def build_question(
    question: str,
    *,
    shipment: ShipmentRecord | None = None,
    products: Iterable[Product] = (),
) -> CopilotQuestion:
    text = question.strip()
    if len(text) < MIN_QUESTION_LENGTH:
        raise ValueError(f"Question must be at least {MIN_QUESTION_LENGTH} characters")

    available = tuple(
        CopilotProduct(name=product.name, sku=product.sku or None, stock_level=product.stock_level)
        for product in products
    )
    if shipment is None:
        return CopilotQuestion(question=text, available_products=available)
    return CopilotQuestion(
        question=text,
        estimated_delivery_date=format_date(shipment.estimated_delivery),
        origin=shipment.origin or None,
        destination=shipment.destination or None,
        available_products=available,
    )


def ask(service: CopilotService, question: CopilotQuestion) -> CopilotAnswer:
    answer = service(question)
    if answer.include_suggested_actions and answer.suggested_actions:
        return answer
    return replace(answer, suggested_actions=None, include_suggested_actions=False)
