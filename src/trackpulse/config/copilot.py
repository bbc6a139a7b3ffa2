"""Logistics copilot configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

COPILOT_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True, slots=True)
class CopilotConfig:
    url: str
    resilience: ResilienceConfig


def get_copilot_config() -> CopilotConfig:
    values = require_env_vars(("COPILOT_API_URL",))
    headers = {"Accept": "application/json"}
    token = os.getenv("COPILOT_API_KEY")
    if token:
        headers["Authorization"] = f"Bearer {token}"

    resilience = ResilienceConfig(
        name="copilot",
        timeout_seconds=COPILOT_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=1, per_seconds=1.0),
        retry=RetryPolicy(total=2),
        cache=None,
        default_headers=headers,
    )
    return CopilotConfig(url=values["COPILOT_API_URL"], resilience=resilience)
