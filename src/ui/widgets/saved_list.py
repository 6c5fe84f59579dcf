"""Saved list widget: SavedListItem."""

from typing import Callable

from textual import on
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import Button, Label

from model import SavedArrangementSummary


class SavedListItem(Container):
    """A saved tier list entry with load/share and, for owned lists, visibility/delete."""

    def __init__(
        self,
        summary: SavedArrangementSummary,
        on_action: Callable[[str, SavedArrangementSummary], None],
        owned: bool = True,
    ) -> None:
        super().__init__(classes="saved-list-item")
        self.summary = summary
        self._on_action = on_action
        self._owned = owned

    def compose(self) -> ComposeResult:
        with Horizontal(classes="saved-list-row"):
            yield Label(self.summary.display_name, classes="saved-list-name")
            yield Button("Load", classes="saved-list-load-btn", variant="primary")
            yield Button("Share", classes="saved-list-share-btn", variant="default")
            if self._owned:
                label = "public" if self.summary.is_public else "private"
                variant = "warning" if self.summary.is_public else "default"
                yield Button(label, classes="saved-list-public-btn", variant=variant)
                yield Button("x", classes="saved-list-delete-btn", variant="error")

    @on(Button.Pressed, ".saved-list-load-btn")
    def on_load_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self._on_action("load", self.summary)

    @on(Button.Pressed, ".saved-list-share-btn")
    def on_share_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self._on_action("share", self.summary)

    @on(Button.Pressed, ".saved-list-public-btn")
    def on_public_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self._on_action("toggle_public", self.summary)

    @on(Button.Pressed, ".saved-list-delete-btn")
    def on_delete_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self._on_action("delete", self.summary)
