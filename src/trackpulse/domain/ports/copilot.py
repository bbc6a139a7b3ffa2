"""Port for the logistics copilot (question answering) service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True, kw_only=True)
class CopilotProduct:
    name: str
    sku: str | None = None
    stock_level: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CopilotQuestion:
    question: str
    estimated_delivery_date: str | None = None
    origin: str | None = None
    destination: str | None = None
    available_products: tuple[CopilotProduct, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class CopilotAnswer:
    answer: str
    suggested_actions: str | None = None
    include_suggested_actions: bool = False


@runtime_checkable
class CopilotService(Protocol):
    def __call__(self, question: CopilotQuestion) -> CopilotAnswer: ...


__all__ = ["CopilotAnswer", "CopilotProduct", "CopilotQuestion", "CopilotService"]
