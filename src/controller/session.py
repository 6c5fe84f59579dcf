"""Session event handlers: sign in, sign out and reacting to auth changes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from textual.css.query import NoMatches
from textual.widgets import Button, Label

from api import SessionEvent
from errors import ValidationFailure
from ui.ids import css
import ui.ids as ids

if TYPE_CHECKING:
    from api import Session, SessionManager

log = logging.getLogger(__name__)


class SessionEventsMixin:
    """Mixin for authentication handlers."""

    # Expected from App class
    sessions: SessionManager
    saved_lists: list
    push_screen: Callable
    query_one: Callable
    notify: Callable
    select_template: Callable
    refresh_saved_lists: Callable
    _set_status: Callable
    _report_error: Callable

    def action_toggle_session(self) -> None:
        """Sign in when signed out, and the reverse."""
        if self.sessions.get_current_session() is None:
            self.action_sign_in()
        else:
            self.action_sign_out()

    def action_sign_in(self) -> None:
        from ui.modals import SignInModal

        self.push_screen(SignInModal(), self._on_sign_in_result)

    def _on_sign_in_result(self, token: str | None) -> None:
        if not token:
            return
        try:
            self.sessions.sign_in(token)
        except ValidationFailure as e:
            self._report_error(e)

    def action_sign_out(self) -> None:
        self.sessions.sign_out()

    def _on_session_change(self, event: SessionEvent, session: Session | None) -> None:
        """Listener registered with the SessionManager."""
        log.info(f"Session event: {event.value}")
        self._update_session_label(session)
        if event is SessionEvent.SIGNED_OUT:
            self.saved_lists = []
            self.select_template(None)
            self.notify("Signed out")
        else:
            self.refresh_saved_lists()
            self.notify(f"Signed in as {session.display_name}" if session else "Signed in")

    def _update_session_label(self, session: Session | None) -> None:
        try:
            label = self.query_one(css(ids.SESSION_LABEL), Label)
            button = self.query_one(css(ids.SIGN_IN_BTN), Button)
        except NoMatches:
            return
        if session is None:
            label.update("Not signed in")
            button.label = "Sign in"
        else:
            label.update(session.display_name)
            button.label = "Sign out"
