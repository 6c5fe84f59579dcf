"""Board event handlers: pointer drags and keyboard moves."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from textual.css.query import NoMatches
from textual.errors import NoWidget

from model import BANK_ID, DropOutcome, MoveOutcome
from ui.helpers import drop_target_at
from ui.ids import css
import ui.ids as ids

if TYPE_CHECKING:
    from model import ContainerStore, DragSession, DropResult, Tier

log = logging.getLogger(__name__)

# Ghost sits below-right of the pointer so hit testing sees what is underneath
GHOST_OFFSET = (2, 1)


class BoardEventsMixin:
    """Mixin translating pointer and key events into drag transitions."""

    # Expected from App class
    store: ContainerStore
    drag: DragSession
    tiers: tuple[Tier, ...]
    template_binding: Any
    screen: Any
    query: Callable
    query_one: Callable
    call_after_refresh: Callable
    _render_board: Callable
    _set_status: Callable
    _report_error: Callable

    def _ghost(self) -> Any:
        from ui import DragGhost

        try:
            return self.query_one(css(ids.DRAG_GHOST), DragGhost)
        except NoMatches:
            return None

    def handle_grab(self, item_id: str, x: int, y: int) -> None:
        """Pointer pressed on an item."""
        self.drag.press(item_id, x, y)

    def handle_pointer_move(self, x: int, y: int) -> None:
        """Pointer moved while pressed; may start the drag."""
        started = self.drag.move(x, y)
        ghost = self._ghost()
        if ghost is None:
            return
        gx, gy = x + GHOST_OFFSET[0], y + GHOST_OFFSET[1]
        if started:
            item = self.template_binding.item(self.drag.active_id)
            ghost.show_at(item.name if item else self.drag.active_id, gx, gy)
        elif self.drag.active_id is not None:
            ghost.move_to(gx, gy)

    def handle_release(self, x: int, y: int) -> None:
        """Pointer released: resolve the drop target under the pointer."""
        if self.drag.active_id is None:
            self.drag.release()
            return
        try:
            widget, _ = self.screen.get_widget_at(x, y)
        except NoWidget:
            widget = None
        self.drop_on(drop_target_at(widget))

    def drop_on(self, target_id: str | None) -> DropResult:
        """Finish the current drag on a container id, item id, or nothing."""
        result = self.drag.drop(target_id)
        ghost = self._ghost()
        if ghost is not None:
            ghost.hide()
        self._after_move(result.outcome, result.error)
        if result.outcome is DropOutcome.MOVED:
            self._set_status(f"Moved to {self._container_label(result.dest_id)}")
        return result

    def action_cancel_drag(self) -> None:
        """Abandon a drag in progress."""
        if self.reset_drag():
            self._set_status("Drag cancelled")

    def reset_drag(self) -> bool:
        """Drop any press or drag and hide the ghost.

        Called whenever the board's items are replaced: the grabbed tile is
        gone and its release never arrives. Returns True if anything was in
        progress.
        """
        if self.drag.active_id is None and not self.drag.armed:
            return False
        log.debug(f"Resetting drag of {self.drag.active_id}")
        self.drag.cancel()
        ghost = self._ghost()
        if ghost is not None:
            ghost.hide()
        return True

    def send_item(self, item_id: str, slot: int) -> MoveOutcome:
        """Move an item to the bank (slot 0) or to the Nth tier."""
        ordered = sorted(self.tiers, key=lambda t: t.order)
        if slot == 0:
            dest_id = BANK_ID
        elif 1 <= slot <= len(ordered):
            dest_id = ordered[slot - 1].id
        else:
            return MoveOutcome.UNCHANGED
        source_id = self.store.find_container(item_id) or BANK_ID
        outcome = self.store.move_item(item_id, source_id, dest_id)
        self._after_move(DropOutcome(outcome.value), None)
        if outcome is MoveOutcome.MOVED:
            self._set_status(f"Moved to {self._container_label(dest_id)}")
            self._refocus(item_id)
        return outcome

    def shift_item(self, item_id: str, offset: int) -> MoveOutcome:
        """Move an item left or right inside its container."""
        source_id = self.store.find_container(item_id)
        index = self.store.index_of(item_id)
        if source_id is None or index is None:
            return MoveOutcome.REJECTED
        new_index = index + offset
        if new_index < 0 or new_index >= len(self.store.get(source_id)):
            return MoveOutcome.UNCHANGED
        outcome = self.store.move_item(item_id, source_id, source_id, new_index)
        self._after_move(DropOutcome(outcome.value), None)
        if outcome is MoveOutcome.MOVED:
            self._refocus(item_id)
        return outcome

    def _after_move(self, outcome: DropOutcome, error: Any) -> None:
        if outcome is DropOutcome.MOVED:
            self._render_board()
        elif outcome is DropOutcome.REJECTED:
            if error is not None:
                self._report_error(error)
            self._render_board()

    def _refocus(self, item_id: str) -> None:
        """Keep keyboard focus on a tile after the board was rebuilt."""
        from ui import ItemTile

        def focus_tile() -> None:
            for tile in self.query(ItemTile):
                if tile.item_id == item_id:
                    tile.focus()
                    return

        self.call_after_refresh(focus_tile)

    def _container_label(self, container_id: str | None) -> str:
        if container_id == BANK_ID:
            return "bank"
        for tier in self.tiers:
            if tier.id == container_id:
                return f"tier {tier.label}"
        return str(container_id)
