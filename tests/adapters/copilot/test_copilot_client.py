from __future__ import annotations

import json

import httpx
import pytest

from trackpulse.adapters.copilot import CopilotAPIError, CopilotClient
from trackpulse.config import CopilotConfig, MissingConfigurationError, get_copilot_config
from trackpulse.config.http_resilience import ResilienceConfig
from trackpulse.domain.ports import CopilotProduct, CopilotQuestion
from tests.helpers.http import make_client_factory

COPILOT_URL = "https://copilot.test/v1/logistics"


@pytest.fixture
def copilot_config() -> CopilotConfig:
    return CopilotConfig(
        url=COPILOT_URL,
        resilience=ResilienceConfig(name="copilot-test", cache=None),
    )


def test_copilot_posts_camel_case_question(copilot_config: CopilotConfig) -> None:
    bodies: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert str(request.url) == COPILOT_URL
        bodies.append(json.loads(request.content))
        return httpx.Response(
            200,
            json={
                "answer": "The shipment should arrive on time.",
                "suggestedActions": "Notify the customer",
                "includeSuggestedActions": True,
            },
        )

    client = CopilotClient(config=copilot_config, client_factory=make_client_factory(handler))

    answer = client(
        CopilotQuestion(
            question="Will it arrive on time?",
            estimated_delivery_date="2024-05-14",
            destination="Lisbon",
            available_products=(CopilotProduct(name="Olive oil 5L", sku="OIL-5", stock_level=40),),
        )
    )

    assert bodies[0] == {
        "question": "Will it arrive on time?",
        "estimatedDeliveryDate": "2024-05-14",
        "destination": "Lisbon",
        "availableProducts": [{"name": "Olive oil 5L", "sku": "OIL-5", "stockLevel": 40}],
    }
    assert answer.answer == "The shipment should arrive on time."
    assert answer.suggested_actions == "Notify the customer"
    assert answer.include_suggested_actions is True


def test_copilot_defaults_missing_flags(copilot_config: CopilotConfig) -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"answer": "Stock is fine.", "suggestedActions": " "})

    client = CopilotClient(config=copilot_config, client_factory=make_client_factory(handler))

    answer = client(CopilotQuestion(question="How is stock?"))

    assert answer.suggested_actions is None
    assert answer.include_suggested_actions is False


def test_copilot_http_errors_are_wrapped(copilot_config: CopilotConfig) -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="overloaded")

    client = CopilotClient(config=copilot_config, client_factory=make_client_factory(handler))

    with pytest.raises(CopilotAPIError) as excinfo:
        client(CopilotQuestion(question="How is stock?"))

    assert excinfo.value.status_code == 503


def test_copilot_rejects_payload_without_answer(copilot_config: CopilotConfig) -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"message": "ok"})

    client = CopilotClient(config=copilot_config, client_factory=make_client_factory(handler))

    with pytest.raises(CopilotAPIError):
        client(CopilotQuestion(question="How is stock?"))


def test_copilot_config_requires_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("COPILOT_API_URL", raising=False)

    with pytest.raises(MissingConfigurationError):
        get_copilot_config()


def test_copilot_config_adds_bearer_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COPILOT_API_URL", COPILOT_URL)
    monkeypatch.setenv("COPILOT_API_KEY", "token-1")

    config = get_copilot_config()

    assert config.url == COPILOT_URL
    assert config.resilience.default_headers is not None
    assert config.resilience.default_headers["Authorization"] == "Bearer token-1"
    assert config.resilience.cache is None
