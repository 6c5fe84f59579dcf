"""Custom Textual widgets for tierlist.

This package contains all custom widgets organized by domain.
"""

from ui.widgets.item import ItemTile
from ui.widgets.container import BankPanel, ContainerPanel, TierRow
from ui.widgets.overlay import DragGhost
from ui.widgets.saved_list import SavedListItem

__all__ = [
    # Board widgets
    "ItemTile",
    "ContainerPanel",
    "TierRow",
    "BankPanel",
    # Overlay widgets
    "DragGhost",
    # Saved list widgets
    "SavedListItem",
]
