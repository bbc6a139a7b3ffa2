"""Read required settings from the environment."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable


def require_env_vars(names: Iterable[str]) -> dict[str, str]:
    """Return ``{name: value}`` for every name; blank values count as missing."""

    values = {name: (os.getenv(name) or "").strip() for name in names}
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise MissingConfigurationError(missing)
    return values


def require_env_var(name: str) -> str:
    return require_env_vars((name,))[name]
