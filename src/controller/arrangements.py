"""Saved tier list event handlers: save, load, share, visibility and delete."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Callable

from textual import work

from errors import TierListError, ValidationFailure
from model import sort_summaries
from sharelink import ShareLink, build_share_link

if TYPE_CHECKING:
    from api import SessionManager, TierListClient
    from controller.binding import TemplateBinding
    from controller.reconciler import ArrangementReconciler
    from model import SavedArrangement, SavedArrangementSummary, Template
    from settings import Settings
    from ui.modals import SavedListAction, SaveListRequest

log = logging.getLogger(__name__)


class ArrangementEventsMixin:
    """Mixin for saved tier list handlers."""

    # Expected from App class
    client: TierListClient
    sessions: SessionManager
    settings: Settings
    template_binding: TemplateBinding
    reconciler: ArrangementReconciler
    saved_lists: list[SavedArrangementSummary]
    pending_link: ShareLink | None
    call_from_thread: Callable
    push_screen: Callable
    notify: Callable
    copy_to_clipboard: Callable
    _render_board: Callable
    reset_drag: Callable
    _set_status: Callable
    _report_error: Callable
    _apply_pending_link: Callable

    def _require_template_and_session(self, action: str) -> Template:
        template = self.template_binding.template
        if template is None:
            raise ValidationFailure(f"Cannot {action}: no template selected.")
        if self.sessions.get_current_session() is None:
            raise ValidationFailure(f"Cannot {action}: you are not signed in.")
        return template

    def _still_selected(self, template_id: str) -> bool:
        template = self.template_binding.template
        return template is not None and template.id == template_id

    # =========================================================================
    # Listing
    # =========================================================================

    def refresh_saved_lists(self) -> None:
        """Fetch the signed-in user's lists for the selected template."""
        template = self.template_binding.template
        if template is None or self.sessions.get_current_session() is None:
            self.saved_lists = []
            return
        self._fetch_saved_lists(template.id)

    @work(thread=True, exclusive=True, group="saved-lists")
    def _fetch_saved_lists(self, template_id: str) -> None:
        try:
            summaries = self.client.list_saved_arrangements(template_id, "mine")
        except TierListError as e:
            self.call_from_thread(self._on_saved_lists_failed, template_id, e)
            return
        self.call_from_thread(self._on_saved_lists_loaded, template_id, summaries)

    def _on_saved_lists_loaded(
        self, template_id: str, summaries: list[SavedArrangementSummary]
    ) -> None:
        if not self._still_selected(template_id):
            log.debug(f"Discarding saved lists for {template_id}: template changed")
            return
        self.saved_lists = sort_summaries(summaries)

    def _on_saved_lists_failed(self, template_id: str, error: TierListError) -> None:
        if not self._still_selected(template_id):
            return
        self.saved_lists = []
        log.error(f"Failed to fetch saved lists: {error}")

    def action_open_lists(self) -> None:
        """Show saved lists (mine and public).

        With a template selected only its lists are shown; otherwise lists
        across all templates, public first.
        """
        template = self.template_binding.template
        self._set_status("Fetching saved lists...")
        self._fetch_lists_for_dialog(template.id if template else None)

    @work(thread=True, exclusive=True, group="saved-lists-dialog")
    def _fetch_lists_for_dialog(self, template_id: str | None) -> None:
        try:
            public = self.client.list_saved_arrangements(template_id, "public")
            mine = []
            if self.sessions.get_current_session() is not None:
                mine = self.client.list_saved_arrangements(template_id, "mine")
        except TierListError as e:
            self.call_from_thread(self._report_error, e)
            return
        self.call_from_thread(self._show_lists_dialog, template_id, mine, public)

    def _show_lists_dialog(
        self,
        template_id: str | None,
        mine: list[SavedArrangementSummary],
        public: list[SavedArrangementSummary],
    ) -> None:
        from ui.modals import SavedListsModal

        if template_id is None:
            if self.template_binding.template is not None:
                return
            scope = "public"
        else:
            if not self._still_selected(template_id):
                return
            self.saved_lists = sort_summaries(mine)
            scope = "mine"
        self._set_status("")
        self.push_screen(
            SavedListsModal(sort_summaries(mine), public, scope=scope), self._on_list_action
        )

    def _on_list_action(self, choice: SavedListAction | None) -> None:
        if choice is None:
            return
        summary = choice.summary
        if choice.action == "load":
            self.open_saved_list(summary)
        elif choice.action == "share":
            self.share_list(summary)
        elif choice.action == "toggle_public":
            self.toggle_list_public(summary)
        elif choice.action == "delete":
            self.confirm_delete_list(summary)

    # =========================================================================
    # Save
    # =========================================================================

    def action_save_list(self) -> None:
        """Open the save dialog for the current arrangement."""
        from ui.modals import SaveListModal

        try:
            self._require_template_and_session("save")
        except ValidationFailure as e:
            self._report_error(e)
            return
        self.push_screen(SaveListModal(), self._on_save_list_result)

    def _on_save_list_result(self, request: SaveListRequest | None) -> None:
        if request is None:
            return
        try:
            template = self._require_template_and_session("save")
        except ValidationFailure as e:
            self._report_error(e)
            return
        data = self.reconciler.save_current_arrangement()
        self._set_status("Saving...")
        self._save_list(template.id, request, data)

    @work(thread=True, group="save-list")
    def _save_list(
        self, template_id: str, request: SaveListRequest, data: dict[str, list[str]]
    ) -> None:
        try:
            summary = self.reconciler.persist(template_id, request.name, request.is_public, data)
        except TierListError as e:
            self.call_from_thread(self._report_error, e)
            return
        self.call_from_thread(self._on_list_saved, template_id, summary, data)

    def _on_list_saved(
        self,
        template_id: str,
        summary: SavedArrangementSummary,
        data: dict[str, list[str]],
    ) -> None:
        if self._still_selected(template_id):
            self.reconciler.mark_saved(data)
            others = [s for s in self.saved_lists if s.id != summary.id]
            self.saved_lists = sort_summaries([summary, *others])
        suffix = f" as '{summary.name}'" if summary.name else ""
        self.notify(f"List saved{suffix}")
        self._set_status(f"List saved{suffix}")
        self._render_board()

    # =========================================================================
    # Load
    # =========================================================================

    def load_saved_list(self, list_id: str) -> None:
        """Fetch a saved list and apply it to the current template's items."""
        template = self.template_binding.template
        if template is None:
            self._report_error(ValidationFailure("Select a template before loading a list."))
            return
        self._set_status("Loading list...")
        self._fetch_saved_list(template.id, list_id)

    def open_saved_list(self, summary: SavedArrangementSummary) -> None:
        """Load a list, switching to its template first if needed."""
        template = self.template_binding.template
        if template is not None and template.id == summary.template_id:
            self.load_saved_list(summary.id)
            return
        self.pending_link = ShareLink(summary.template_id, summary.id)
        self._apply_pending_link()

    @work(thread=True, exclusive=True, group="load-list")
    def _fetch_saved_list(self, template_id: str, list_id: str) -> None:
        try:
            arrangement = self.client.get_saved_arrangement(list_id)
        except TierListError as e:
            self.call_from_thread(self._report_error, e)
            return
        self.call_from_thread(self._on_saved_list_fetched, template_id, arrangement)

    def _on_saved_list_fetched(self, template_id: str, arrangement: SavedArrangement) -> None:
        if not self._still_selected(template_id):
            log.debug(f"Discarding saved list {arrangement.id}: template changed")
            return
        if self.template_binding.loading:
            log.info(f"Discarding saved list {arrangement.id}: catalog still loading")
            self.notify("Items are still loading; open the list again.", severity="warning")
            self._set_status("List not loaded")
            return
        if arrangement.template_id and arrangement.template_id != template_id:
            self._report_error(
                ValidationFailure("That list belongs to a different template.")
            )
            return
        self.reset_drag()
        self.reconciler.load_saved_arrangement(
            arrangement, self.template_binding.tier_ids, self.template_binding.item_ids
        )
        self._render_board()
        self.notify("List loaded")
        self._set_status(f"Loaded {arrangement.name or 'list'}")

    # =========================================================================
    # Share, visibility, delete
    # =========================================================================

    def share_list(self, summary: SavedArrangementSummary) -> str:
        """Copy a link that opens this list."""
        link = build_share_link(self.settings.share_base, summary.template_id, summary.id)
        self.copy_to_clipboard(link)
        self.notify(f"Link copied: {link}")
        return link

    def toggle_list_public(self, summary: SavedArrangementSummary) -> None:
        """Flip a list's visibility, optimistically."""
        if self.sessions.get_current_session() is None:
            return
        new_status = not summary.is_public
        self._replace_summary(replace(summary, is_public=new_status))
        self._update_visibility(summary, new_status)

    @work(thread=True, group="visibility")
    def _update_visibility(self, original: SavedArrangementSummary, is_public: bool) -> None:
        try:
            updated = self.client.update_arrangement_visibility(original.id, is_public)
        except TierListError as e:
            self.call_from_thread(self._on_visibility_failed, original, e)
            return
        self.call_from_thread(self._on_visibility_updated, updated)

    def _on_visibility_updated(self, updated: SavedArrangementSummary) -> None:
        self._replace_summary(updated)
        self.notify(f"List marked as {'public' if updated.is_public else 'private'}")

    def _on_visibility_failed(
        self, original: SavedArrangementSummary, error: TierListError
    ) -> None:
        self._replace_summary(original)
        self._report_error(error)

    def _replace_summary(self, summary: SavedArrangementSummary) -> None:
        self.saved_lists = sort_summaries(
            [summary if s.id == summary.id else s for s in self.saved_lists]
        )

    def confirm_delete_list(self, summary: SavedArrangementSummary) -> None:
        from ui.modals import ConfirmModal

        def on_confirm(confirmed: bool | None) -> None:
            if confirmed:
                self._delete_list(summary)

        self.push_screen(
            ConfirmModal(f"Delete '{summary.display_name}'? This cannot be undone."),
            on_confirm,
        )

    @work(thread=True, group="delete-list")
    def _delete_list(self, summary: SavedArrangementSummary) -> None:
        try:
            self.client.delete_arrangement(summary.id)
        except TierListError as e:
            self.call_from_thread(self._report_error, e)
            return
        self.call_from_thread(self._on_list_deleted, summary)

    def _on_list_deleted(self, summary: SavedArrangementSummary) -> None:
        self.saved_lists = [s for s in self.saved_lists if s.id != summary.id]
        self.notify("List deleted")
        self._set_status(f"Deleted {summary.display_name}")
