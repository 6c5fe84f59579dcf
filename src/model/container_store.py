"""Container store: the single source of truth for a tier list arrangement.

A container is either a tier or the bank. Each holds an ordered list of item
ids. Two invariants hold after every public operation:

    exclusivity   an item id is in at most one container
    completeness  the union of all containers is the loaded item set

The store does not know about Item objects, only their ids. Whoever loads
items (the binding layer) resets the store with the matching ids.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from enum import Enum

from model.tier import BANK_ID

log = logging.getLogger(__name__)


class MoveOutcome(Enum):
    """Result of a move request."""

    MOVED = "moved"
    UNCHANGED = "unchanged"
    REJECTED = "rejected"


class ContainerStore:
    """Mapping of container id to ordered item ids."""

    def __init__(self, tier_ids: Iterable[str] = (), item_ids: Iterable[str] = ()) -> None:
        self._containers: dict[str, list[str]] = {}
        self._dirty = False
        self.reset_for_item_set(tier_ids, item_ids)

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def containers(self) -> dict[str, list[str]]:
        """Snapshot of all containers (copies, safe to mutate)."""
        return {cid: list(ids) for cid, ids in self._containers.items()}

    @property
    def tier_ids(self) -> list[str]:
        return [cid for cid in self._containers if cid != BANK_ID]

    @property
    def dirty(self) -> bool:
        """True if the arrangement changed since the last reset, load, or save."""
        return self._dirty

    def mark_clean(self) -> None:
        self._dirty = False

    def has_container(self, container_id: str) -> bool:
        return container_id in self._containers

    def get(self, container_id: str) -> list[str]:
        """Item ids in a container (empty if the container is unknown)."""
        return list(self._containers.get(container_id, []))

    def find_container(self, item_id: str) -> str | None:
        for container_id, ids in self._containers.items():
            if item_id in ids:
                return container_id
        return None

    def index_of(self, item_id: str) -> int | None:
        container_id = self.find_container(item_id)
        if container_id is None:
            return None
        return self._containers[container_id].index(item_id)

    def item_ids(self) -> set[str]:
        return {i for ids in self._containers.values() for i in ids}

    def check_invariants(self, loaded_ids: Iterable[str]) -> list[str]:
        """Return a list of invariant violations (empty when consistent)."""
        problems = []
        seen: dict[str, str] = {}
        for container_id, ids in self._containers.items():
            for item_id in ids:
                if item_id in seen:
                    problems.append(
                        f"{item_id} is in both {seen[item_id]} and {container_id}"
                    )
                seen.setdefault(item_id, container_id)
        loaded = set(loaded_ids)
        for item_id in sorted(set(seen) - loaded):
            problems.append(f"{item_id} is placed but not loaded")
        for item_id in sorted(loaded - set(seen)):
            problems.append(f"{item_id} is loaded but not placed")
        return problems

    # =========================================================================
    # Mutations
    # =========================================================================

    def reset_for_item_set(self, tier_ids: Iterable[str], item_ids: Iterable[str]) -> None:
        """Empty every tier and put all items in the bank, in catalog order."""
        containers: dict[str, list[str]] = {tid: [] for tid in tier_ids}
        containers[BANK_ID] = list(dict.fromkeys(item_ids))
        self._containers = containers
        self._dirty = False
        log.debug(
            f"Reset containers: {len(containers) - 1} tiers, {len(containers[BANK_ID])} items in bank"
        )

    def apply_saved_arrangement(
        self,
        tier_ids: Iterable[str],
        saved: Mapping[str, Iterable[str]],
        all_item_ids: Iterable[str],
    ) -> None:
        """Populate tiers from a saved arrangement; the rest go to the bank.

        Saved ids that are no longer loaded, or that already appear in an
        earlier tier, are dropped so the invariants hold.
        """
        catalog = list(dict.fromkeys(all_item_ids))
        loaded = set(catalog)
        tier_ids = list(tier_ids)
        placed: set[str] = set()
        containers: dict[str, list[str]] = {}

        for tier_id in tier_ids:
            sequence = []
            for item_id in saved.get(tier_id) or []:
                if item_id not in loaded:
                    log.warning(f"Saved item {item_id} in {tier_id} is not in the current catalog")
                    continue
                if item_id in placed:
                    log.warning(f"Saved item {item_id} appears more than once, keeping first")
                    continue
                placed.add(item_id)
                sequence.append(item_id)
            containers[tier_id] = sequence

        unknown = set(saved) - set(tier_ids) - {BANK_ID}
        if unknown:
            log.debug(f"Ignoring saved containers that are not tiers: {sorted(unknown)}")

        containers[BANK_ID] = [i for i in catalog if i not in placed]
        self._containers = containers
        self._dirty = False

    def move_item(
        self,
        item_id: str,
        source_id: str,
        dest_id: str,
        dest_index: int | None = None,
    ) -> MoveOutcome:
        """Move an item from one container to another.

        Args:
            item_id: Item to move
            source_id: Container the caller believes holds the item
            dest_id: Target container
            dest_index: Position in the target, counted after the item has been
                removed from its source. Out of range or None appends.

        Returns:
            MOVED if the arrangement changed, UNCHANGED if the item landed where
            it already was, REJECTED if the target or item could not be found.
        """
        if dest_id not in self._containers:
            log.warning(f"Rejected move of {item_id}: destination {dest_id} does not exist")
            return MoveOutcome.REJECTED

        actual_source = source_id
        if item_id not in self._containers.get(source_id, []):
            actual_source = self._repair_source(item_id, source_id)
            if actual_source is None:
                log.warning(f"Rejected move of {item_id}: not present in any container")
                return MoveOutcome.REJECTED

        source_items = list(self._containers[actual_source])
        source_items.remove(item_id)
        if actual_source == dest_id:
            dest_items = source_items
        else:
            dest_items = list(self._containers[dest_id])

        if dest_index is not None and 0 <= dest_index <= len(dest_items):
            dest_items.insert(dest_index, item_id)
        else:
            dest_items.append(item_id)

        if actual_source == dest_id and dest_items == self._containers[dest_id]:
            return MoveOutcome.UNCHANGED

        self._containers[actual_source] = source_items
        self._containers[dest_id] = dest_items
        self._dirty = True
        log.debug(f"Moved {item_id}: {actual_source} -> {dest_id}")
        return MoveOutcome.MOVED

    def _repair_source(self, item_id: str, expected_source: str) -> str | None:
        """Locate an item that was not in its expected container."""
        found = self.find_container(item_id)
        if found is not None:
            log.warning(
                f"Consistency anomaly: {item_id} expected in {expected_source} but found in {found}"
            )
        return found
