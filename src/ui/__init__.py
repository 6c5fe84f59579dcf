"""UI module containing widgets, modals, styles, and board composition."""

from ui.widgets import (
    BankPanel,
    ContainerPanel,
    DragGhost,
    ItemTile,
    SavedListItem,
    TierRow,
)
from ui.board import compose_board
from ui.helpers import drop_target_at, render_board
from ui import ids

__all__ = [
    # Widgets
    "BankPanel",
    "ContainerPanel",
    "DragGhost",
    "ItemTile",
    "SavedListItem",
    "TierRow",
    # Composers
    "compose_board",
    # Helpers
    "drop_target_at",
    "render_board",
]
