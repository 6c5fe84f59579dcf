"""Drag overlay widget: DragGhost."""

from textual.widgets import Static


class DragGhost(Static):
    """Follows the pointer while an item is dragged.

    Lives on the overlay layer so it never affects container layout.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__("", **kwargs)
        self.display = False

    def show_at(self, label: str, x: int, y: int) -> None:
        self.update(label)
        self.styles.offset = (x, y)
        self.display = True

    def move_to(self, x: int, y: int) -> None:
        self.styles.offset = (x, y)

    def hide(self) -> None:
        self.display = False
