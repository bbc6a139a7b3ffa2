"""Pydantic models for the logistics copilot service."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CopilotBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ProductContextPayload(CopilotBaseModel):
    name: str
    sku: str | None = None
    stock_level: int | None = Field(default=None, alias="stockLevel")


class CopilotRequestPayload(CopilotBaseModel):
    question: str = Field(min_length=5)
    estimated_delivery_date: str | None = Field(default=None, alias="estimatedDeliveryDate")
    origin: str | None = None
    destination: str | None = None
    available_products: list[ProductContextPayload] | None = Field(
        default=None, alias="availableProducts"
    )


class CopilotResponsePayload(CopilotBaseModel):
    answer: str
    suggested_actions: str | None = Field(default=None, alias="suggestedActions")
    include_suggested_actions: bool = Field(default=False, alias="includeSuggestedActions")

    @field_validator("suggested_actions", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value
