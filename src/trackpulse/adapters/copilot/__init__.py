"""Public interface for the logistics copilot adapter."""

from __future__ import annotations

from .client import CopilotAPIError, CopilotClient, to_request_payload
from .schema import CopilotRequestPayload, CopilotResponsePayload

__all__ = [
    "CopilotAPIError",
    "CopilotClient",
    "CopilotRequestPayload",
    "CopilotResponsePayload",
    "to_request_payload",
]
