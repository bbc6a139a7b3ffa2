"""Domain port definitions for adapters."""

from __future__ import annotations

from .copilot import CopilotAnswer, CopilotProduct, CopilotQuestion, CopilotService
from .documents import DocumentStore
from .inventory import ProductCatalog

__all__ = [
    "CopilotAnswer",
    "CopilotProduct",
    "CopilotQuestion",
    "CopilotService",
    "DocumentStore",
    "ProductCatalog",
]
