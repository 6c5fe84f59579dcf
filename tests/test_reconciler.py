"""Tests for ArrangementReconciler and the saved-list projection."""

import pytest

from controller import ArrangementReconciler, TemplateBinding, save_current_arrangement
from errors import ValidationFailure
from model import BANK_ID, ContainerStore, SavedArrangement


@pytest.fixture
def loaded(client, tiers):
    """Store bound to template t1 (items a, b, c)."""
    store = ContainerStore(tiers)
    binding = TemplateBinding(client, store, tiers)
    binding.select_template(client.templates[0])
    return store, binding, ArrangementReconciler(store, client)


class TestProjection:
    """Tests for save_current_arrangement."""

    def test_bank_excluded(self):
        data = save_current_arrangement({"tier-s": ["a"], "tier-a": [], BANK_ID: ["b"]})
        assert data == {"tier-s": ["a"], "tier-a": []}

    def test_empty_tiers_kept(self, loaded, tiers):
        _, _, reconciler = loaded
        assert reconciler.save_current_arrangement() == {t: [] for t in tiers}


class TestLoad:
    """Tests for load_saved_arrangement."""

    def test_load_arrangement(self, loaded, tiers):
        """Tier S gets c, tier A gets a, the bank keeps b."""
        store, binding, reconciler = loaded
        arrangement = SavedArrangement(
            id="l1", template_id="t1", data={"tier-s": ["c"], "tier-a": ["a"]}
        )
        reconciler.load_saved_arrangement(arrangement, tiers, binding.item_ids)
        assert store.get("tier-s") == ["c"]
        assert store.get("tier-a") == ["a"]
        assert store.get(BANK_ID) == ["b"]
        assert not store.dirty

    def test_load_from_mapping(self, loaded, tiers):
        store, binding, reconciler = loaded
        reconciler.load_saved_arrangement({"tier-b": ["b", "a"]}, tiers, binding.item_ids)
        assert store.get("tier-b") == ["b", "a"]
        assert store.get(BANK_ID) == ["c"]

    def test_load_drops_items_no_longer_in_catalog(self, loaded, tiers):
        store, binding, reconciler = loaded
        reconciler.load_saved_arrangement({"tier-s": ["z", "a"]}, tiers, binding.item_ids)
        assert store.get("tier-s") == ["a"]
        assert store.check_invariants(binding.item_ids) == []

    def test_malformed_mapping_leaves_store_untouched(self, loaded, tiers):
        store, binding, reconciler = loaded
        store.move_item("a", BANK_ID, "tier-s")
        before = store.containers
        with pytest.raises(ValidationFailure):
            reconciler.load_saved_arrangement({"tier-s": "a"}, tiers, binding.item_ids)
        assert store.containers == before

    def test_round_trip(self, loaded, tiers):
        store, binding, reconciler = loaded
        store.move_item("c", BANK_ID, "tier-s")
        store.move_item("a", BANK_ID, "tier-s", 0)
        store.move_item("b", BANK_ID, "tier-d")
        data = reconciler.save_current_arrangement()
        snapshot = store.containers

        store.reset_for_item_set(tiers, binding.item_ids)
        reconciler.load_saved_arrangement(data, tiers, binding.item_ids)
        assert store.containers == snapshot


class TestPersist:
    """Tests for persist and mark_saved."""

    def test_persist_sends_projection(self, loaded, client):
        store, _, reconciler = loaded
        store.move_item("a", BANK_ID, "tier-s")
        data = reconciler.save_current_arrangement()
        summary = reconciler.persist("t1", "  My list ", True, data)
        assert summary.name == "My list"
        assert summary.is_public
        saved = client.lists[summary.id]
        assert saved.data["tier-s"] == ["a"]
        assert BANK_ID not in saved.data

    def test_blank_name_saved_as_none(self, loaded, client):
        _, _, reconciler = loaded
        summary = reconciler.persist("t1", "   ", False, reconciler.save_current_arrangement())
        assert summary.name is None

    def test_persist_does_not_touch_store(self, loaded):
        store, _, reconciler = loaded
        store.move_item("a", BANK_ID, "tier-s")
        reconciler.persist("t1", None, False, reconciler.save_current_arrangement())
        assert store.dirty

    def test_mark_saved_clears_dirty(self, loaded):
        store, _, reconciler = loaded
        store.move_item("a", BANK_ID, "tier-s")
        data = reconciler.save_current_arrangement()
        assert reconciler.mark_saved(data)
        assert not store.dirty

    def test_mark_saved_after_further_edits_keeps_dirty(self, loaded):
        store, _, reconciler = loaded
        store.move_item("a", BANK_ID, "tier-s")
        data = reconciler.save_current_arrangement()
        store.move_item("b", BANK_ID, "tier-a")
        assert not reconciler.mark_saved(data)
        assert store.dirty


class TestReloadAfterSwitch:
    """Save, switch away and back, then load the saved list."""

    def test_bank_follows_catalog_order(self, client, tiers):
        client.add_template("t5", [f"item-{n}" for n in range(1, 6)])
        template = client.templates[-1]
        store = ContainerStore(tiers)
        binding = TemplateBinding(client, store, tiers)
        reconciler = ArrangementReconciler(store, client)

        binding.select_template(template)
        store.move_item("item-3", BANK_ID, "tier-a")
        data = reconciler.save_current_arrangement()
        assert data["tier-a"] == ["item-3"]

        binding.select_template(client.templates[0])
        binding.select_template(template)
        assert store.get("tier-a") == []

        reconciler.load_saved_arrangement(data, tiers, binding.item_ids)
        assert store.get("tier-a") == ["item-3"]
        assert store.get(BANK_ID) == ["item-1", "item-2", "item-4", "item-5"]
