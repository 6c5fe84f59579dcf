"""Drag session state machine.

    IDLE --press--> IDLE (armed) --move past threshold--> DRAGGING --drop/cancel--> IDLE

A press only arms the session. The drag starts once the pointer has moved at
least ``activation_distance`` cells from where it was pressed, so a plain
click never moves anything. A drag always resolves back to IDLE.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum

from errors import StaleReferenceFailure
from model.container_store import ContainerStore, MoveOutcome

log = logging.getLogger(__name__)


class DragState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class DropOutcome(Enum):
    MOVED = "moved"
    UNCHANGED = "unchanged"
    CANCELLED = "cancelled"
    REJECTED = "rejected"


@dataclass(frozen=True)
class DropResult:
    """How a drag resolved."""

    outcome: DropOutcome
    item_id: str | None = None
    source_id: str | None = None
    dest_id: str | None = None
    error: StaleReferenceFailure | None = None

    @property
    def changed(self) -> bool:
        return self.outcome is DropOutcome.MOVED


@dataclass(frozen=True)
class _Press:
    item_id: str
    x: float
    y: float


class DragSession:
    """Tracks the dragged item and applies drops to a ContainerStore."""

    def __init__(self, store: ContainerStore, activation_distance: float = 2.0) -> None:
        self.store = store
        self.activation_distance = activation_distance
        self._state = DragState.IDLE
        self._press: _Press | None = None
        self._active_id: str | None = None

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def active_id(self) -> str | None:
        """Item being dragged, or None when idle."""
        return self._active_id

    @property
    def armed(self) -> bool:
        return self._press is not None

    def press(self, item_id: str, x: float, y: float) -> bool:
        """Arm the session with a pointer press on an item."""
        if self._state is DragState.DRAGGING:
            log.debug(f"Ignoring press on {item_id}: drag of {self._active_id} in progress")
            return False
        self._press = _Press(item_id, x, y)
        return True

    def move(self, x: float, y: float) -> bool:
        """Track pointer motion. Returns True when this motion starts the drag."""
        if self._state is DragState.DRAGGING or self._press is None:
            return False
        distance = math.hypot(x - self._press.x, y - self._press.y)
        if distance < self.activation_distance:
            return False
        self._state = DragState.DRAGGING
        self._active_id = self._press.item_id
        log.debug(f"Drag started: {self._active_id}")
        return True

    def cancel(self) -> DropResult:
        """Abandon any press or drag without touching the store."""
        item_id = self._active_id
        self._reset()
        return DropResult(DropOutcome.CANCELLED, item_id=item_id)

    def release(self) -> DropResult | None:
        """Pointer released without a resolved target (click or missed drop)."""
        if self._state is DragState.DRAGGING:
            return self.drop(None)
        self._reset()
        return None

    def drop(self, target_id: str | None) -> DropResult:
        """Resolve the drag onto a container id or item id.

        None, or the dragged item itself, cancels. A container id appends to
        that container; an item id inserts at that item's position.
        """
        if self._state is not DragState.DRAGGING or self._active_id is None:
            self._reset()
            return DropResult(DropOutcome.CANCELLED)

        item_id = self._active_id
        self._reset()

        if target_id is None or target_id == item_id:
            return DropResult(DropOutcome.CANCELLED, item_id=item_id)

        source_id = self.store.find_container(item_id)
        if source_id is None:
            error = StaleReferenceFailure(f"Item {item_id} is no longer on the board")
            log.warning(str(error))
            return DropResult(DropOutcome.REJECTED, item_id=item_id, error=error)

        if self.store.has_container(target_id):
            dest_id, dest_index = target_id, None
        else:
            dest_id = self.store.find_container(target_id)
            if dest_id is None:
                error = StaleReferenceFailure(f"Drop target {target_id} no longer exists")
                log.warning(str(error))
                return DropResult(
                    DropOutcome.REJECTED, item_id=item_id, source_id=source_id, error=error
                )
            dest_index = self._index_after_removal(item_id, source_id, target_id, dest_id)

        outcome = self.store.move_item(item_id, source_id, dest_id, dest_index)
        result_outcome = {
            MoveOutcome.MOVED: DropOutcome.MOVED,
            MoveOutcome.UNCHANGED: DropOutcome.UNCHANGED,
            MoveOutcome.REJECTED: DropOutcome.REJECTED,
        }[outcome]
        error = None
        if outcome is MoveOutcome.REJECTED:
            error = StaleReferenceFailure(f"Could not move {item_id} to {dest_id}")
        return DropResult(result_outcome, item_id, source_id, dest_id, error)

    def _index_after_removal(
        self, item_id: str, source_id: str, target_item_id: str, dest_id: str
    ) -> int:
        """Index of the target item once the dragged item has left its source."""
        dest_items = self.store.get(dest_id)
        if source_id == dest_id:
            dest_items.remove(item_id)
        return dest_items.index(target_item_id)

    def _reset(self) -> None:
        self._state = DragState.IDLE
        self._press = None
        self._active_id = None
