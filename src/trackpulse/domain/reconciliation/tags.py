"""Status tags: normalization, state resolution and merge-on-update.

Tags live on the external document next to tags written by other tools. Only the
recognized tags (the five states plus ``order-confirmed``) belong to us; anything
else is foreign and must survive every write untouched.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Final

from trackpulse.domain.model.enums import ORDER_CONFIRMED_TAG, ShipmentState

if TYPE_CHECKING:
    from collections.abc import Iterable

    from trackpulse.domain.model import RawTag

STATUS_TAGS: Final[frozenset[str]] = frozenset(state.value for state in ShipmentState)
RECOGNIZED_TAGS: Final[frozenset[str]] = STATUS_TAGS | {ORDER_CONFIRMED_TAG}

# First match wins. Problems must never hide behind a forward-progress tag.
STATE_PRIORITY: Final[tuple[ShipmentState, ...]] = (
    ShipmentState.WITH_ISSUE,
    ShipmentState.CANCELLED,
    ShipmentState.DELIVERED,
    ShipmentState.IN_TRANSIT,
    ShipmentState.PENDING_CONFIRMATION,
)

# The store drops hyphens from tag names ("intransit").
_COMPACT_FORMS: Final[dict[str, str]] = {tag.replace("-", ""): tag for tag in RECOGNIZED_TAGS}
_WHITESPACE = re.compile(r"\s+")


def normalize_tag(raw: RawTag) -> str:
    """Return the internal hyphenated form of a raw tag, or ``""`` for unusable shapes."""

    match raw:
        case str():
            name = raw
        case Mapping() if isinstance(raw.get("name"), str):
            name = raw["name"]
        case _:
            return ""

    lowered = _WHITESPACE.sub("-", name.strip().lower())
    return _COMPACT_FORMS.get(lowered.replace("-", ""), lowered)


def normalize_tags(raw_tags: Iterable[RawTag]) -> tuple[str, ...]:
    normalized = (normalize_tag(tag) for tag in raw_tags)
    return tuple(dict.fromkeys(tag for tag in normalized if tag))


def partition_tags(tags: Iterable[str]) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Split normalized tags into ``(recognized, foreign)`` keeping their order."""

    recognized: list[str] = []
    foreign: list[str] = []
    for tag in tags:
        (recognized if tag in RECOGNIZED_TAGS else foreign).append(tag)
    return tuple(recognized), tuple(foreign)


def resolve_state(tags: Iterable[str]) -> ShipmentState:
    present = set(tags)
    for state in STATE_PRIORITY:
        if state.value in present:
            return state
    return ShipmentState.PENDING_CONFIRMATION


def desired_tags(state: ShipmentState, *, order_confirmed: bool) -> tuple[str, ...]:
    if order_confirmed:
        return (state.value, ORDER_CONFIRMED_TAG)
    return (state.value,)


def to_external_tag(tag: str) -> str:
    lowered = tag.lower()
    if lowered in RECOGNIZED_TAGS:
        return lowered.replace("-", "")
    return lowered


def merge_tags(live_tags: Iterable[RawTag], desired: Iterable[RawTag]) -> list[str]:
    """Compute the tags to write back: ``(live - recognized) | desired``.

    ``live_tags`` must come from a fresh read of the document. Foreign tags keep their
    position ahead of the desired ones; the result is in the store's spelling.
    """

    preserved = [tag for tag in normalize_tags(live_tags) if tag not in RECOGNIZED_TAGS]
    combined = dict.fromkeys([*preserved, *normalize_tags(desired)])
    return [to_external_tag(tag) for tag in combined]
