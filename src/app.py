"""Main TUI application for tierlist."""

import logging
from pathlib import Path

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.css.query import NoMatches
from textual.widgets import Button, Label, Static

from api import SessionManager, TierListClient
from controller import (
    ArrangementEventsMixin,
    ArrangementReconciler,
    BoardEventsMixin,
    SessionEventsMixin,
    TemplateBinding,
    TemplateEventsMixin,
)
from errors import TierListError
from model import (
    DEFAULT_TIERS,
    ContainerStore,
    DragSession,
    SavedArrangementSummary,
    Template,
    Tier,
    tier_ids,
)
from settings import Settings, state_dir
from sharelink import ShareLink
from ui import DragGhost, ItemTile, compose_board, render_board
from ui.ids import css
import ui.ids as ids


# Set up logging to XDG state directory
def _get_log_path() -> Path:
    """Get the log file path using XDG Base Directory spec."""
    log_dir = state_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / "tierlist.log"


logging.basicConfig(
    filename=str(_get_log_path()),
    level=logging.DEBUG,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
log = logging.getLogger(__name__)

APP_CSS = (Path(__file__).parent / "ui" / "styles.css").read_text()


class TierListApp(
    BoardEventsMixin,
    TemplateEventsMixin,
    ArrangementEventsMixin,
    SessionEventsMixin,
    App,
):
    """TUI for ranking a template's items into tiers."""

    TITLE = "Tier List"
    ENABLE_COMMAND_PALETTE = False
    CSS = APP_CSS

    BINDINGS = [
        Binding("t", "pick_template", "Templates", show=True),
        Binding("n", "new_template", "New", show=True),
        Binding("s", "save_list", "Save", show=True),
        Binding("l", "open_lists", "Lists", show=True),
        Binding("escape", "cancel_drag", "Cancel drag", show=False),
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        client: TierListClient,
        sessions: SessionManager,
        settings: Settings | None = None,
        tiers: tuple[Tier, ...] = DEFAULT_TIERS,
        share_link: ShareLink | None = None,
    ) -> None:
        super().__init__()
        self.client = client
        self.sessions = sessions
        self.settings = settings or Settings()
        self.tiers = tiers
        tier_order = tier_ids(tiers)
        self.store = ContainerStore(tier_order)
        self.drag = DragSession(self.store, self.settings.drag_distance)
        self.template_binding = TemplateBinding(
            client, self.store, tier_order, on_change=self.reset_drag
        )
        self.reconciler = ArrangementReconciler(self.store, client)
        self.templates: list[Template] = []
        self.saved_lists: list[SavedArrangementSummary] = []
        self.pending_link = share_link
        self.status_message = ""
        self._unsubscribe = None

    def compose(self) -> ComposeResult:
        session = self.sessions.get_current_session()
        yield Horizontal(
            Label("tierlist", id=ids.HEADER_TITLE),
            Label("No template", id=ids.TEMPLATE_LABEL),
            Button("Templates [t]", id=ids.TEMPLATES_BTN, variant="default"),
            Button("New [n]", id=ids.NEW_TEMPLATE_BTN, variant="default"),
            Button("Save [s]", id=ids.SAVE_LIST_BTN, variant="primary"),
            Button("Lists [l]", id=ids.SAVED_LISTS_BTN, variant="default"),
            Label(session.display_name if session else "Not signed in", id=ids.SESSION_LABEL),
            Button("Sign out" if session else "Sign in", id=ids.SIGN_IN_BTN, variant="default"),
            id=ids.HEADER_CONTAINER,
        )
        with Container(id=ids.BOARD):
            yield from compose_board(self.tiers)
        yield DragGhost(id=ids.DRAG_GHOST)
        yield Horizontal(
            Static("", id=ids.STATUS_BAR),
            id=ids.FOOTER,
        )

    # =========================================================================
    # Status and rendering
    # =========================================================================

    def _set_status(self, message: str) -> None:
        """Set status bar message."""
        self.status_message = message
        try:
            status = self.query_one(css(ids.STATUS_BAR), Static)
            status.update(message)
        except NoMatches:
            pass

    def _report_error(self, error: TierListError) -> None:
        """Surface a failure to the user and the log."""
        log.error(f"{type(error).__name__}: {error}")
        self.notify(str(error), severity="error")
        self._set_status(f"Error: {error}")

    def _render_board(self) -> None:
        """Redraw containers from the store and refresh the header."""
        render_board(self, self.store, self.template_binding)
        template = self.template_binding.template
        if template is None:
            name = "No template"
        elif self.template_binding.loading:
            name = f"{template.name} (loading)"
        else:
            name = template.name
        try:
            self.query_one(css(ids.TEMPLATE_LABEL), Label).update(name)
        except NoMatches:
            pass
        self.sub_title = f"{name} *" if self.store.dirty else name

    # =========================================================================
    # Mixin Handler Forwarding
    # =========================================================================
    # Textual's @on decorator only registers handlers defined on the class itself,
    # not on mixins. These forwarding handlers ensure events are routed to mixins.

    # Board handlers (from BoardEventsMixin)
    @on(ItemTile.Grabbed)
    def _on_tile_grabbed(self, event: ItemTile.Grabbed) -> None:
        """Forward to mixin handler."""
        self.handle_grab(event.item_id, event.x, event.y)

    @on(ItemTile.Dragged)
    def _on_tile_dragged(self, event: ItemTile.Dragged) -> None:
        """Forward to mixin handler."""
        self.handle_pointer_move(event.x, event.y)

    @on(ItemTile.Released)
    def _on_tile_released(self, event: ItemTile.Released) -> None:
        """Forward to mixin handler."""
        self.handle_release(event.x, event.y)

    @on(ItemTile.SendRequested)
    def _on_tile_send(self, event: ItemTile.SendRequested) -> None:
        """Forward to mixin handler."""
        self.send_item(event.item_id, event.slot)

    @on(ItemTile.ShiftRequested)
    def _on_tile_shift(self, event: ItemTile.ShiftRequested) -> None:
        """Forward to mixin handler."""
        self.shift_item(event.item_id, event.offset)

    # Template handlers (from TemplateEventsMixin)
    @on(Button.Pressed, css(ids.TEMPLATES_BTN))
    def _on_templates_btn(self, event: Button.Pressed) -> None:
        """Forward to mixin handler."""
        self.action_pick_template()

    @on(Button.Pressed, css(ids.NEW_TEMPLATE_BTN))
    def _on_new_template_btn(self, event: Button.Pressed) -> None:
        """Forward to mixin handler."""
        self.action_new_template()

    # Saved list handlers (from ArrangementEventsMixin)
    @on(Button.Pressed, css(ids.SAVE_LIST_BTN))
    def _on_save_list_btn(self, event: Button.Pressed) -> None:
        """Forward to mixin handler."""
        self.action_save_list()

    @on(Button.Pressed, css(ids.SAVED_LISTS_BTN))
    def _on_saved_lists_btn(self, event: Button.Pressed) -> None:
        """Forward to mixin handler."""
        self.action_open_lists()

    # Session handlers (from SessionEventsMixin)
    @on(Button.Pressed, css(ids.SIGN_IN_BTN))
    def _on_sign_in_btn(self, event: Button.Pressed) -> None:
        """Forward to mixin handler."""
        self.action_toggle_session()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def on_mount(self) -> None:
        """Called when the app is mounted."""
        self._render_board()
        self._unsubscribe = self.sessions.subscribe(self._on_session_change)
        self.refresh_templates()

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
