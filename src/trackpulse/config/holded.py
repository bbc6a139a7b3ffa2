"""Holded configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_HOLDED_BASE_URL = "https://api.holded.com/api/invoicing/v1"
DEFAULT_HOLDED_CONTACT_ID = "clth9pt0a000008l30176h2yv"
DEFAULT_HOLDED_TAX = "s_iva_21"
HOLDED_TIMEOUT_SECONDS = 15.0
PRODUCTS_CACHE_TTL_SECONDS = 60.0


@dataclass(frozen=True, slots=True)
class HoldedConfig:
    """Holds Holded API credentials and invoice defaults."""

    api_key: str
    contact_id: str
    tax: str
    documents: ResilienceConfig
    products: ResilienceConfig


def get_holded_config() -> HoldedConfig:
    values = require_env_vars(("HOLDED_API_KEY",))
    api_key = values["HOLDED_API_KEY"]
    base_url = os.getenv("HOLDED_BASE_URL") or DEFAULT_HOLDED_BASE_URL
    headers = {"key": api_key, "Accept": "application/json"}

    # Document reads feed read-modify-write cycles and must always hit the API.
    documents = ResilienceConfig(
        name="holded-documents",
        base_url=base_url,
        timeout_seconds=HOLDED_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        retry=RetryPolicy(allowed_methods=frozenset({"GET", "HEAD", "OPTIONS"})),
        cache=None,
        default_headers=headers,
    )
    products = ResilienceConfig(
        name="holded-products",
        base_url=base_url,
        timeout_seconds=HOLDED_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        retry=RetryPolicy(allowed_methods=frozenset({"GET", "HEAD", "OPTIONS"})),
        # One client per call: only the on-disk cache survives between listings.
        cache=CacheConfig(backend="sqlite", default_ttl_seconds=PRODUCTS_CACHE_TTL_SECONDS),
        default_headers=headers,
    )

    return HoldedConfig(
        api_key=api_key,
        contact_id=os.getenv("HOLDED_CONTACT_ID") or DEFAULT_HOLDED_CONTACT_ID,
        tax=os.getenv("HOLDED_TAX") or DEFAULT_HOLDED_TAX,
        documents=documents,
        products=products,
    )
