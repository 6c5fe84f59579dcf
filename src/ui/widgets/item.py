"""Item tile widget: ItemTile."""

from textual import events
from textual.binding import Binding
from textual.message import Message
from textual.widgets import Static

from model import Item


class ItemTile(Static, can_focus=True):
    """A draggable item on the board.

    Pointer events are captured for the whole press so the app keeps receiving
    motion after the pointer leaves the tile. The tile only reports what
    happened; the app decides whether that is a click or a drag.
    """

    BINDINGS = [
        Binding("0", "send(0)", "To bank", show=False),
        *[Binding(str(n), f"send({n})", f"To tier {n}", show=False) for n in range(1, 10)],
        Binding("shift+left", "shift(-1)", "Move left", show=False),
        Binding("shift+right", "shift(1)", "Move right", show=False),
    ]

    class Grabbed(Message):
        """Pointer pressed on a tile."""

        def __init__(self, item_id: str, x: int, y: int) -> None:
            super().__init__()
            self.item_id = item_id
            self.x = x
            self.y = y

    class Dragged(Message):
        """Pointer moved while a tile holds the capture."""

        def __init__(self, x: int, y: int) -> None:
            super().__init__()
            self.x = x
            self.y = y

    class Released(Message):
        """Pointer released after a press on a tile."""

        def __init__(self, x: int, y: int) -> None:
            super().__init__()
            self.x = x
            self.y = y

    class SendRequested(Message):
        """Keyboard request to move a tile to the bank (0) or tier N."""

        def __init__(self, item_id: str, slot: int) -> None:
            super().__init__()
            self.item_id = item_id
            self.slot = slot

    class ShiftRequested(Message):
        """Keyboard request to move a tile left or right in its container."""

        def __init__(self, item_id: str, offset: int) -> None:
            super().__init__()
            self.item_id = item_id
            self.offset = offset

    def __init__(self, item: Item) -> None:
        super().__init__(item.name or item.id, classes="item-tile")
        self.item = item
        self.tooltip = item.image_url
        self._pressed = False

    @property
    def item_id(self) -> str:
        return self.item.id

    def on_mouse_down(self, event: events.MouseDown) -> None:
        if event.button != 1:
            return
        event.stop()
        self._pressed = True
        self.capture_mouse()
        self.post_message(self.Grabbed(self.item_id, event.screen_x, event.screen_y))

    def on_mouse_move(self, event: events.MouseMove) -> None:
        if not self._pressed:
            return
        event.stop()
        self.post_message(self.Dragged(event.screen_x, event.screen_y))

    def on_mouse_up(self, event: events.MouseUp) -> None:
        if not self._pressed:
            return
        event.stop()
        self._pressed = False
        self.release_mouse()
        self.post_message(self.Released(event.screen_x, event.screen_y))

    def on_unmount(self) -> None:
        if self._pressed:
            self._pressed = False
            self.release_mouse()

    def action_send(self, slot: int) -> None:
        self.post_message(self.SendRequested(self.item_id, slot))

    def action_shift(self, offset: int) -> None:
        self.post_message(self.ShiftRequested(self.item_id, offset))
