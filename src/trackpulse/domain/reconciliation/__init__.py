"""Status/tag reconciliation between shipments and external invoice documents.

Write path: ``plan_transition`` validates a status change and encodes it into
recognized tags plus notes text, then ``merge_tags`` folds those tags into a fresh
read of the document's tags so foreign tags survive.

Read path: ``decode_document`` re-derives the shipment from whatever the store
holds, never from a locally cached copy.
"""

from __future__ import annotations

from .decode import decode_document, describe_invoice
from .notes import NOTES_FIELDS, encode_notes, parse_notes
from .plan import ShipmentPatch, TransitionPlan, encode_shipment, plan_transition
from .tags import (
    RECOGNIZED_TAGS,
    STATE_PRIORITY,
    desired_tags,
    merge_tags,
    normalize_tag,
    resolve_state,
    to_external_tag,
)
from .transitions import TRANSITIONS, Transition, allowed_targets, find_transition

__all__ = [
    "NOTES_FIELDS",
    "RECOGNIZED_TAGS",
    "STATE_PRIORITY",
    "TRANSITIONS",
    "ShipmentPatch",
    "Transition",
    "TransitionPlan",
    "allowed_targets",
    "decode_document",
    "describe_invoice",
    "desired_tags",
    "encode_notes",
    "encode_shipment",
    "find_transition",
    "merge_tags",
    "normalize_tag",
    "parse_notes",
    "plan_transition",
    "resolve_state",
    "to_external_tag",
]
