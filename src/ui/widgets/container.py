"""Container widgets: TierRow, BankPanel."""

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.widget import Widget
from textual.widgets import Label

from model import BANK_ID, Item, Tier
from ui.ids import container_widget_id
from ui.widgets.item import ItemTile


class ContainerPanel(Container):
    """Base for widgets that show one container and accept drops."""

    def __init__(self, container_id: str, **kwargs) -> None:
        super().__init__(id=container_widget_id(container_id), **kwargs)
        self.container_id = container_id

    @property
    def items_area(self) -> Widget:
        return self.query_one(".container-items", Widget)

    def item_ids(self) -> list[str]:
        return [tile.item_id for tile in self.query(ItemTile)]

    def set_items(self, items: list[Item]) -> None:
        """Replace the tiles shown, keeping the given order."""
        area = self.items_area
        area.remove_children()
        if items:
            area.mount(*[ItemTile(item) for item in items])


class TierRow(ContainerPanel):
    """A tier: colored label on the left, items flowing to the right."""

    def __init__(self, tier: Tier) -> None:
        super().__init__(tier.id, classes="tier-row")
        self.tier = tier

    def compose(self) -> ComposeResult:
        label = Label(self.tier.label, classes="tier-label")
        label.styles.background = self.tier.color
        yield label
        yield Horizontal(classes="container-items tier-items")


class BankPanel(ContainerPanel):
    """Unranked items."""

    def __init__(self) -> None:
        super().__init__(BANK_ID, classes="bank-panel")

    def compose(self) -> ComposeResult:
        yield Label("Unranked", classes="section-label")
        yield Container(classes="container-items bank-items")
