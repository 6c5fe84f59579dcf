"""Board composition: tier rows above the bank."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.app import ComposeResult
from textual.containers import VerticalScroll

from ui.widgets import BankPanel, TierRow
import ui.ids as ids

if TYPE_CHECKING:
    from model import Tier


def compose_board(tiers: tuple[Tier, ...] | list[Tier]) -> ComposeResult:
    """Compose the board content.

    Args:
        tiers: Tiers to show, in any order (sorted by their order field)

    Yields:
        Textual widgets for the tier rows and the bank
    """
    with VerticalScroll(id=ids.TIER_ROWS):
        for tier in sorted(tiers, key=lambda t: t.order):
            yield TierRow(tier)
    with VerticalScroll(id=ids.BANK_SECTION):
        yield BankPanel()
