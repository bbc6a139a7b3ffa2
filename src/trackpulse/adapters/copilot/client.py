"""HTTP client for the logistics copilot service."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from trackpulse.adapters.http_resilience import ResilienceConfig, ResilientClient
from trackpulse.config.copilot import CopilotConfig, get_copilot_config
from trackpulse.domain.ports.copilot import CopilotAnswer, CopilotService

from .schema import CopilotRequestPayload, CopilotResponsePayload, ProductContextPayload

if TYPE_CHECKING:
    from collections.abc import Callable

    from trackpulse.domain.ports.copilot import CopilotQuestion

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class CopilotAPIError(RuntimeError):
    """Raised when the copilot service fails or answers with an unexpected payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def to_request_payload(question: CopilotQuestion) -> CopilotRequestPayload:
    return CopilotRequestPayload(
        question=question.question,
        estimated_delivery_date=question.estimated_delivery_date,
        origin=question.origin,
        destination=question.destination,
        available_products=[
            ProductContextPayload(name=item.name, sku=item.sku, stock_level=item.stock_level)
            for item in question.available_products
        ]
        or None,
    )


@dataclass(slots=True)
class CopilotClient:
    config: CopilotConfig = field(default_factory=get_copilot_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(self, question: CopilotQuestion) -> CopilotAnswer:
        return asyncio.run(self._ask_async(question))

    async def _ask_async(self, question: CopilotQuestion) -> CopilotAnswer:
        payload = to_request_payload(question).model_dump(by_alias=True, exclude_none=True)
        async with self.client_factory(self.config.resilience) as client:
            try:
                response = await client.post(self.config.url, json=payload)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                status_code = exc.response.status_code
                log.error(f"Copilot returned {status_code}: {exc.response.text[:200]}")
                raise CopilotAPIError(
                    f"Copilot request failed with {status_code}", status_code=status_code
                ) from exc
            except httpx.HTTPError as exc:
                log.error(f"Copilot request failed: {exc}")
                raise CopilotAPIError(f"Could not reach the copilot: {exc}") from exc

        try:
            body = CopilotResponsePayload.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise CopilotAPIError("Unexpected copilot response payload") from exc

        return CopilotAnswer(
            answer=body.answer,
            suggested_actions=body.suggested_actions,
            include_suggested_actions=body.include_suggested_actions,
        )


if TYPE_CHECKING:
    _service_check: CopilotService = CopilotClient()
