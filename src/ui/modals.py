"""Modal dialogs for templates, saved lists and sign-in."""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Checkbox, Input, Label, Static

from errors import TierListError
from model import SavedArrangementSummary, Template
from ui.widgets import SavedListItem
import ui.ids as ids
from ui.ids import css


@dataclass(frozen=True)
class NewTemplateRequest:
    name: str
    files: list[Path]
    is_public: bool


@dataclass(frozen=True)
class SaveListRequest:
    name: str | None
    is_public: bool


@dataclass(frozen=True)
class SavedListAction:
    action: str  # "load", "share", "toggle_public" or "delete"
    summary: SavedArrangementSummary


class TemplateListItem(Static):
    """A clickable template list item."""

    def __init__(self, template: Template) -> None:
        label = template.name + (" (public)" if template.is_public else "")
        super().__init__(label)
        self.template = template
        self.add_class("template-list-item")

    def on_click(self) -> None:
        """Handle click - dismiss modal with this template."""
        self.screen.dismiss(self.template)


class TemplatePickerModal(ModalScreen[Template | None]):
    """Modal for choosing a template, with server-side search."""

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(
        self,
        templates: list[Template],
        search: Callable[[str | None], list[Template]],
    ) -> None:
        super().__init__()
        self._templates = templates
        self._search = search

    def compose(self) -> ComposeResult:
        with Vertical(id="template-picker-modal", classes="modal"):
            yield Label("Select Template", id=ids.MODAL_TITLE)
            yield Input(placeholder="Search templates (Enter)...", id=ids.TEMPLATE_SEARCH_INPUT)
            yield VerticalScroll(id=ids.MODAL_LIST)
            with Horizontal(id=ids.MODAL_BUTTONS):
                yield Button("Cancel", id=ids.CANCEL_BTN, variant="default")

    def on_mount(self) -> None:
        self.show_templates(self._templates)
        self.query_one(css(ids.TEMPLATE_SEARCH_INPUT), Input).focus()

    def show_templates(self, templates: list[Template]) -> None:
        self._templates = templates
        listing = self.query_one(css(ids.MODAL_LIST), VerticalScroll)
        listing.remove_children()
        if templates:
            listing.mount(*[TemplateListItem(t) for t in templates])
        else:
            listing.mount(Static("No templates found", classes="modal-empty"))

    @on(Input.Submitted, css(ids.TEMPLATE_SEARCH_INPUT))
    def on_search_submitted(self, event: Input.Submitted) -> None:
        self._run_search(event.value.strip() or None)

    @work(thread=True, exclusive=True, group="template-search")
    def _run_search(self, query: str | None) -> None:
        try:
            results = self._search(query)
        except TierListError as e:
            self.app.call_from_thread(self.app.notify, str(e), severity="error")
            return
        self.app.call_from_thread(self.show_templates, results)

    def action_cancel(self) -> None:
        self.dismiss(None)

    @on(Button.Pressed, css(ids.CANCEL_BTN))
    def on_cancel(self, event: Button.Pressed) -> None:
        self.dismiss(None)


class CreateTemplateModal(ModalScreen[NewTemplateRequest | None]):
    """Modal for creating a template from local image files."""

    BINDINGS = [("escape", "cancel", "Cancel")]

    def compose(self) -> ComposeResult:
        with Vertical(id="create-template-modal", classes="modal"):
            yield Label("New Template", id=ids.MODAL_TITLE)
            yield Input(placeholder="Template name...", id=ids.TEMPLATE_NAME_INPUT)
            yield Input(placeholder="Image files (space separated)...", id=ids.TEMPLATE_FILES_INPUT)
            yield Checkbox("Make this template public", id=ids.TEMPLATE_PUBLIC_CHECK)
            with Horizontal(id=ids.MODAL_BUTTONS):
                yield Button("Cancel", id=ids.CANCEL_BTN, variant="default")
                yield Button("Create", id=ids.CONFIRM_BTN, variant="success")

    def on_mount(self) -> None:
        self.query_one(css(ids.TEMPLATE_NAME_INPUT), Input).focus()

    def action_cancel(self) -> None:
        self.dismiss(None)

    @on(Button.Pressed, css(ids.CANCEL_BTN))
    def on_cancel(self, event: Button.Pressed) -> None:
        self.dismiss(None)

    @on(Button.Pressed, css(ids.CONFIRM_BTN))
    def on_create(self, event: Button.Pressed) -> None:
        raw_files = self.query_one(css(ids.TEMPLATE_FILES_INPUT), Input).value
        try:
            files = [Path(f).expanduser() for f in shlex.split(raw_files)]
        except ValueError:
            self.notify("Could not parse the file list", severity="error")
            return
        self.dismiss(
            NewTemplateRequest(
                name=self.query_one(css(ids.TEMPLATE_NAME_INPUT), Input).value.strip(),
                files=files,
                is_public=self.query_one(css(ids.TEMPLATE_PUBLIC_CHECK), Checkbox).value,
            )
        )


class SaveListModal(ModalScreen[SaveListRequest | None]):
    """Modal for saving the current arrangement."""

    BINDINGS = [("escape", "cancel", "Cancel")]

    def compose(self) -> ComposeResult:
        with Vertical(id="save-list-modal", classes="modal"):
            yield Label("Save Tier List", id=ids.MODAL_TITLE)
            yield Input(placeholder="List name (optional)...", id=ids.LIST_NAME_INPUT)
            yield Checkbox("Make this list public", id=ids.LIST_PUBLIC_CHECK)
            with Horizontal(id=ids.MODAL_BUTTONS):
                yield Button("Cancel", id=ids.CANCEL_BTN, variant="default")
                yield Button("Save", id=ids.CONFIRM_BTN, variant="success")

    def on_mount(self) -> None:
        self.query_one(css(ids.LIST_NAME_INPUT), Input).focus()

    def _request(self) -> SaveListRequest:
        name = self.query_one(css(ids.LIST_NAME_INPUT), Input).value.strip()
        return SaveListRequest(
            name=name or None,
            is_public=self.query_one(css(ids.LIST_PUBLIC_CHECK), Checkbox).value,
        )

    def action_cancel(self) -> None:
        self.dismiss(None)

    @on(Button.Pressed, css(ids.CANCEL_BTN))
    def on_cancel(self, event: Button.Pressed) -> None:
        self.dismiss(None)

    @on(Button.Pressed, css(ids.CONFIRM_BTN))
    def on_save(self, event: Button.Pressed) -> None:
        self.dismiss(self._request())

    @on(Input.Submitted, css(ids.LIST_NAME_INPUT))
    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.dismiss(self._request())


class SavedListsModal(ModalScreen[SavedListAction | None]):
    """Modal listing the user's saved lists, or public lists."""

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(
        self,
        mine: list[SavedArrangementSummary],
        public: list[SavedArrangementSummary],
        scope: str = "mine",
    ) -> None:
        super().__init__()
        self._lists = {"mine": mine, "public": public}
        self._scope = scope

    def compose(self) -> ComposeResult:
        with Vertical(id="saved-lists-modal", classes="modal"):
            yield Label("Saved Tier Lists", id=ids.MODAL_TITLE)
            yield Button("Showing: mine", id=ids.SCOPE_BTN, variant="default")
            yield VerticalScroll(id=ids.MODAL_LIST)
            with Horizontal(id=ids.MODAL_BUTTONS):
                yield Button("Cancel", id=ids.CANCEL_BTN, variant="default")

    def on_mount(self) -> None:
        self._show_scope()

    def _show_scope(self) -> None:
        self.query_one(css(ids.SCOPE_BTN), Button).label = f"Showing: {self._scope}"
        listing = self.query_one(css(ids.MODAL_LIST), VerticalScroll)
        listing.remove_children()
        summaries = self._lists[self._scope]
        if summaries:
            owned = self._scope == "mine"
            listing.mount(*[SavedListItem(s, self._on_item_action, owned) for s in summaries])
        else:
            listing.mount(Static("No saved lists", classes="modal-empty"))

    def _on_item_action(self, action: str, summary: SavedArrangementSummary) -> None:
        self.dismiss(SavedListAction(action, summary))

    @on(Button.Pressed, css(ids.SCOPE_BTN))
    def on_scope_pressed(self, event: Button.Pressed) -> None:
        self._scope = "public" if self._scope == "mine" else "mine"
        self._show_scope()

    def action_cancel(self) -> None:
        self.dismiss(None)

    @on(Button.Pressed, css(ids.CANCEL_BTN))
    def on_cancel(self, event: Button.Pressed) -> None:
        self.dismiss(None)


class ConfirmModal(ModalScreen[bool]):
    """Yes/no confirmation."""

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, message: str) -> None:
        super().__init__()
        self._message = message

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-modal", classes="modal"):
            yield Label(self._message, id=ids.MODAL_TITLE)
            with Horizontal(id=ids.MODAL_BUTTONS):
                yield Button("Cancel", id=ids.CANCEL_BTN, variant="default")
                yield Button("Confirm", id=ids.CONFIRM_BTN, variant="error")

    def action_cancel(self) -> None:
        self.dismiss(False)

    @on(Button.Pressed, css(ids.CANCEL_BTN))
    def on_cancel(self, event: Button.Pressed) -> None:
        self.dismiss(False)

    @on(Button.Pressed, css(ids.CONFIRM_BTN))
    def on_confirm(self, event: Button.Pressed) -> None:
        self.dismiss(True)


class SignInModal(ModalScreen[str | None]):
    """Modal for pasting an access token issued by the auth provider."""

    BINDINGS = [("escape", "cancel", "Cancel")]

    def compose(self) -> ComposeResult:
        with Vertical(id="sign-in-modal", classes="modal"):
            yield Label("Sign In", id=ids.MODAL_TITLE)
            yield Input(placeholder="Access token...", password=True, id=ids.TOKEN_INPUT)
            with Horizontal(id=ids.MODAL_BUTTONS):
                yield Button("Cancel", id=ids.CANCEL_BTN, variant="default")
                yield Button("Sign in", id=ids.CONFIRM_BTN, variant="success")

    def on_mount(self) -> None:
        self.query_one(css(ids.TOKEN_INPUT), Input).focus()

    def action_cancel(self) -> None:
        self.dismiss(None)

    @on(Button.Pressed, css(ids.CANCEL_BTN))
    def on_cancel(self, event: Button.Pressed) -> None:
        self.dismiss(None)

    @on(Button.Pressed, css(ids.CONFIRM_BTN))
    def on_sign_in(self, event: Button.Pressed) -> None:
        token = self.query_one(css(ids.TOKEN_INPUT), Input).value.strip()
        if token:
            self.dismiss(token)

    @on(Input.Submitted, css(ids.TOKEN_INPUT))
    def on_input_submitted(self, event: Input.Submitted) -> None:
        token = event.value.strip()
        if token:
            self.dismiss(token)
