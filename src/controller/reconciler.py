"""Saved-list reconciler: between persisted arrangements and the container store."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from model import BANK_ID, ContainerStore, SavedArrangement, parse_arrangement_data

if TYPE_CHECKING:
    from api import TierListClient
    from model import SavedArrangementSummary

log = logging.getLogger(__name__)


def save_current_arrangement(containers: Mapping[str, Iterable[str]]) -> dict[str, list[str]]:
    """Project containers to a saved arrangement by dropping the bank."""
    return {cid: list(ids) for cid, ids in containers.items() if cid != BANK_ID}


class ArrangementReconciler:
    """Loads saved arrangements into a ContainerStore and persists it."""

    def __init__(self, store: ContainerStore, client: TierListClient) -> None:
        self.store = store
        self.client = client

    def load_saved_arrangement(
        self,
        arrangement: SavedArrangement | Mapping[str, Any],
        tier_ids: Iterable[str],
        current_item_ids: Iterable[str],
    ) -> None:
        """Rebuild the store from saved tier data.

        The bank becomes every current item not placed in a tier, in catalog
        order. Raises ValidationFailure for a malformed payload, leaving the
        store untouched.
        """
        if isinstance(arrangement, SavedArrangement):
            data = arrangement.data
        else:
            data = parse_arrangement_data(arrangement)
        self.store.apply_saved_arrangement(tier_ids, data, current_item_ids)
        log.info(f"Loaded arrangement with {sum(len(v) for v in data.values())} ranked items")

    def save_current_arrangement(self) -> dict[str, list[str]]:
        return save_current_arrangement(self.store.containers)

    def persist(
        self, template_id: str, name: str | None, is_public: bool, data: dict[str, list[str]]
    ) -> SavedArrangementSummary:
        """Hand a projection to the client. Does not touch the store."""
        summary = self.client.save_arrangement(
            template_id, (name or "").strip() or None, is_public, data
        )
        log.info(f"Saved arrangement {summary.id} for template {template_id}")
        return summary

    def mark_saved(self, data: Mapping[str, Iterable[str]]) -> bool:
        """Clear the dirty flag if the store still matches what was saved."""
        saved = {cid: list(ids) for cid, ids in data.items()}
        if self.save_current_arrangement() != saved:
            return False
        self.store.mark_clean()
        return True
