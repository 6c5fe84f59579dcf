"""Tests for ContainerStore."""

import pytest

from model import BANK_ID, DEFAULT_TIERS, ContainerStore, MoveOutcome, tier_ids


class TestReset:
    """Tests for reset_for_item_set."""

    def test_all_items_in_bank_in_catalog_order(self, tiers):
        store = ContainerStore(tiers, ["c", "a", "b"])
        assert store.get(BANK_ID) == ["c", "a", "b"]
        for tier_id in tiers:
            assert store.get(tier_id) == []

    def test_duplicate_ids_collapsed(self, tiers):
        store = ContainerStore(tiers, ["a", "b", "a"])
        assert store.get(BANK_ID) == ["a", "b"]

    def test_reset_clears_dirty(self, store, tiers):
        store.move_item("a", BANK_ID, "tier-s")
        assert store.dirty
        store.reset_for_item_set(tiers, ["z"])
        assert not store.dirty
        assert store.containers == {**{t: [] for t in tiers}, BANK_ID: ["z"]}

    def test_empty_item_set(self, tiers):
        store = ContainerStore(tiers, [])
        assert store.get(BANK_ID) == []
        assert store.check_invariants([]) == []

    def test_containers_snapshot_is_a_copy(self, store):
        snapshot = store.containers
        snapshot[BANK_ID].clear()
        assert store.get(BANK_ID) == ["a", "b", "c"]


class TestMoveItem:
    """Tests for move_item."""

    def test_move_bank_to_tier(self, store):
        """Moving a from bank into tier S."""
        outcome = store.move_item("a", BANK_ID, "tier-s")
        assert outcome is MoveOutcome.MOVED
        assert store.get("tier-s") == ["a"]
        assert store.get(BANK_ID) == ["b", "c"]
        assert store.dirty

    def test_move_appends_without_index(self, store):
        store.move_item("a", BANK_ID, "tier-s")
        store.move_item("b", BANK_ID, "tier-s")
        assert store.get("tier-s") == ["a", "b"]

    def test_move_at_index(self, store):
        store.move_item("a", BANK_ID, "tier-s")
        store.move_item("b", BANK_ID, "tier-s", 0)
        assert store.get("tier-s") == ["b", "a"]

    def test_out_of_range_index_appends(self, store):
        store.move_item("a", BANK_ID, "tier-s")
        store.move_item("b", BANK_ID, "tier-s", 99)
        store.move_item("c", BANK_ID, "tier-s", -1)
        assert store.get("tier-s") == ["a", "b", "c"]

    def test_reorder_within_container(self, store):
        """Reorder within the bank: c to the front."""
        outcome = store.move_item("c", BANK_ID, BANK_ID, 0)
        assert outcome is MoveOutcome.MOVED
        assert store.get(BANK_ID) == ["c", "a", "b"]

    def test_reorder_index_counts_after_removal(self, store):
        """Index 1 after removing a from [a, b, c] lands between b and c."""
        store.move_item("a", BANK_ID, BANK_ID, 1)
        assert store.get(BANK_ID) == ["b", "a", "c"]

    def test_same_position_is_unchanged(self, store):
        outcome = store.move_item("b", BANK_ID, BANK_ID, 1)
        assert outcome is MoveOutcome.UNCHANGED
        assert store.get(BANK_ID) == ["a", "b", "c"]
        assert not store.dirty

    def test_last_item_append_to_own_container_is_unchanged(self, store):
        assert store.move_item("c", BANK_ID, BANK_ID) is MoveOutcome.UNCHANGED

    def test_unknown_destination_rejected(self, store):
        before = store.containers
        assert store.move_item("a", BANK_ID, "tier-z") is MoveOutcome.REJECTED
        assert store.containers == before
        assert not store.dirty

    def test_unknown_item_rejected(self, store):
        before = store.containers
        assert store.move_item("nope", BANK_ID, "tier-s") is MoveOutcome.REJECTED
        assert store.containers == before

    def test_wrong_source_is_repaired(self, store, caplog):
        """A stale source hint is corrected by scanning all containers."""
        store.move_item("a", BANK_ID, "tier-s")
        outcome = store.move_item("a", "tier-b", "tier-a")
        assert outcome is MoveOutcome.MOVED
        assert store.get("tier-s") == []
        assert store.get("tier-a") == ["a"]
        assert "Consistency anomaly" in caplog.text

    def test_repeated_move_is_idempotent(self, store):
        store.move_item("a", BANK_ID, "tier-s")
        snapshot = store.containers
        outcome = store.move_item("a", "tier-s", "tier-s")
        assert outcome is MoveOutcome.UNCHANGED
        assert store.containers == snapshot

    def test_invariants_hold_after_many_moves(self, store, tiers):
        moves = [
            ("a", "tier-s", None),
            ("b", "tier-s", 0),
            ("c", "tier-d", None),
            ("a", BANK_ID, None),
            ("b", "tier-d", 0),
            ("c", "tier-d", 0),
        ]
        for item_id, dest, index in moves:
            source = store.find_container(item_id)
            store.move_item(item_id, source, dest, index)
            assert store.check_invariants(["a", "b", "c"]) == []
        assert store.get("tier-d") == ["c", "b"]
        assert store.get(BANK_ID) == ["a"]


class TestApplySavedArrangement:
    """Tests for apply_saved_arrangement."""

    def test_bank_gets_unplaced_items_in_catalog_order(self, store, tiers):
        store.apply_saved_arrangement(tiers, {"tier-s": ["c"], "tier-a": ["a"]}, ["a", "b", "c"])
        assert store.get("tier-s") == ["c"]
        assert store.get("tier-a") == ["a"]
        assert store.get(BANK_ID) == ["b"]
        assert store.check_invariants(["a", "b", "c"]) == []

    def test_missing_tiers_are_empty(self, store, tiers):
        store.apply_saved_arrangement(tiers, {"tier-s": ["a"]}, ["a", "b", "c"])
        for tier_id in tiers[1:]:
            assert store.get(tier_id) == []

    def test_unknown_items_dropped(self, store, tiers, caplog):
        store.apply_saved_arrangement(tiers, {"tier-s": ["gone", "a"]}, ["a", "b", "c"])
        assert store.get("tier-s") == ["a"]
        assert "gone" in caplog.text
        assert store.check_invariants(["a", "b", "c"]) == []

    def test_duplicate_items_keep_first(self, store, tiers):
        store.apply_saved_arrangement(
            tiers, {"tier-s": ["a"], "tier-a": ["a", "b"]}, ["a", "b", "c"]
        )
        assert store.get("tier-s") == ["a"]
        assert store.get("tier-a") == ["b"]
        assert store.get(BANK_ID) == ["c"]

    def test_non_tier_keys_ignored(self, store, tiers):
        store.apply_saved_arrangement(
            tiers, {"tier-x": ["a"], BANK_ID: ["b"]}, ["a", "b", "c"]
        )
        assert not store.has_container("tier-x")
        assert store.get(BANK_ID) == ["a", "b", "c"]

    def test_clears_dirty(self, store, tiers):
        store.move_item("a", BANK_ID, "tier-s")
        store.apply_saved_arrangement(tiers, {}, ["a", "b", "c"])
        assert not store.dirty


class TestQueries:
    """Tests for lookup helpers."""

    def test_find_container_and_index(self, store):
        store.move_item("b", BANK_ID, "tier-c")
        assert store.find_container("b") == "tier-c"
        assert store.index_of("c") == 1
        assert store.find_container("nope") is None
        assert store.index_of("nope") is None

    def test_get_unknown_container_is_empty(self, store):
        assert store.get("nope") == []

    def test_tier_ids_excludes_bank(self, store, tiers):
        assert store.tier_ids == tiers

    def test_tier_ids_follow_display_order(self):
        shuffled = list(reversed(DEFAULT_TIERS))
        assert tier_ids(shuffled) == ["tier-s", "tier-a", "tier-b", "tier-c", "tier-d"]

    @pytest.mark.parametrize(
        "loaded,expected",
        [
            (["a", "b", "c"], []),
            (["a", "b"], ["c is placed but not loaded"]),
            (["a", "b", "c", "d"], ["d is loaded but not placed"]),
        ],
    )
    def test_check_invariants(self, store, loaded, expected):
        assert store.check_invariants(loaded) == expected


class TestFallbackScenarios:
    """Moves on the sample item set."""

    @pytest.fixture
    def sample(self, tiers):
        return ContainerStore(tiers, [f"item-{n}" for n in range(1, 6)])

    def test_move_to_tier_then_back_to_bank_front(self, sample):
        sample.move_item("item-3", BANK_ID, "tier-a")
        assert sample.get("tier-a") == ["item-3"]
        assert sample.get(BANK_ID) == ["item-1", "item-2", "item-4", "item-5"]

        sample.move_item("item-3", "tier-a", BANK_ID, 0)
        assert sample.get("tier-a") == []
        assert sample.get(BANK_ID) == ["item-3", "item-1", "item-2", "item-4", "item-5"]

    def test_drop_in_place_is_not_dirty(self, sample):
        sample.move_item("item-3", BANK_ID, "tier-a")
        sample.mark_clean()
        assert sample.move_item("item-3", "tier-a", "tier-a", 0) is MoveOutcome.UNCHANGED
        assert not sample.dirty
