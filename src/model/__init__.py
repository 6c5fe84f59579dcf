"""Model classes for tierlist."""

from model.tier import BANK_ID, DEFAULT_TIERS, Tier, tier_ids
from model.item import FALLBACK_ITEMS, Item, Template
from model.arrangement import (
    SavedArrangement,
    SavedArrangementSummary,
    parse_arrangement_data,
    sort_summaries,
)
from model.container_store import ContainerStore, MoveOutcome
from model.drag import DragSession, DragState, DropOutcome, DropResult

__all__ = [
    "BANK_ID",
    "DEFAULT_TIERS",
    "Tier",
    "tier_ids",
    "FALLBACK_ITEMS",
    "Item",
    "Template",
    "SavedArrangement",
    "SavedArrangementSummary",
    "parse_arrangement_data",
    "sort_summaries",
    "ContainerStore",
    "MoveOutcome",
    "DragSession",
    "DragState",
    "DropOutcome",
    "DropResult",
]
