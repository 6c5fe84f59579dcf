"""UI helper functions for tierlist."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from textual.widget import Widget

from ui.widgets import ContainerPanel, ItemTile

if TYPE_CHECKING:
    from textual.app import App

    from controller.binding import TemplateBinding
    from model import ContainerStore

log = logging.getLogger(__name__)


def render_board(app: App, store: ContainerStore, binding: TemplateBinding) -> None:
    """Rebuild every container panel from the store.

    Args:
        app: The Textual app instance
        store: Arrangement to show
        binding: Source of Item objects for the ids in the store
    """
    for panel in app.query(ContainerPanel):
        items = []
        for item_id in store.get(panel.container_id):
            item = binding.item(item_id)
            if item is None:
                log.warning(f"No loaded item for {item_id} in {panel.container_id}")
                continue
            items.append(item)
        panel.set_items(items)


def drop_target_at(widget: Widget | None) -> str | None:
    """Resolve the widget under the pointer to an item id or container id.

    Returns None when the pointer is outside every container.
    """
    node = widget
    while node is not None:
        if isinstance(node, ItemTile):
            return node.item_id
        if isinstance(node, ContainerPanel):
            return node.container_id
        node = node.parent if isinstance(node.parent, Widget) else None
    return None
