"""Shared fixtures for Holded adapter tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from trackpulse.adapters.http_resilience import ResilienceConfig
from trackpulse.config.holded import HoldedConfig

FIXTURES = Path(__file__).resolve().parents[2] / "data" / "holded"
BASE_URL = "https://holded.test/api/invoicing/v1"


@pytest.fixture
def holded_config() -> HoldedConfig:
    resilience = ResilienceConfig(
        name="holded-test",
        base_url=BASE_URL,
        cache=None,
        default_headers={"key": "test-key", "Accept": "application/json"},
    )
    return HoldedConfig(
        api_key="test-key",
        contact_id="contact-1",
        tax="s_iva_21",
        documents=resilience,
        products=resilience,
    )


@pytest.fixture
def invoice_payloads() -> list[dict[str, object]]:
    return json.loads((FIXTURES / "invoices.json").read_text())
