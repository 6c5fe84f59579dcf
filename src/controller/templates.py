"""Template event handlers: listing, selecting and creating templates."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from textual import work

from errors import TierListError, ValidationFailure

if TYPE_CHECKING:
    from api import SessionManager, TierListClient
    from controller.binding import CatalogRequest, TemplateBinding
    from model import Item, Template
    from sharelink import ShareLink
    from ui.modals import NewTemplateRequest

log = logging.getLogger(__name__)


class TemplateEventsMixin:
    """Mixin for template selection and creation."""

    # Expected from App class
    client: TierListClient
    sessions: SessionManager
    template_binding: TemplateBinding
    templates: list[Template]
    pending_link: ShareLink | None
    call_from_thread: Callable
    push_screen: Callable
    notify: Callable
    _render_board: Callable
    _set_status: Callable
    _report_error: Callable
    refresh_saved_lists: Callable
    load_saved_list: Callable

    # =========================================================================
    # Template list
    # =========================================================================

    @work(thread=True, exclusive=True, group="templates")
    def refresh_templates(self, select_id: str | None = None) -> None:
        """Fetch the template list, then optionally select one by id."""
        try:
            templates = self.client.list_templates()
        except TierListError as e:
            self.call_from_thread(self._report_error, e)
            return
        self.call_from_thread(self._on_templates_loaded, templates, select_id)

    def _on_templates_loaded(self, templates: list[Template], select_id: str | None = None) -> None:
        self.templates = templates
        log.info(f"Loaded {len(templates)} templates")
        if select_id is not None:
            template = self._find_template(select_id)
            if template is not None:
                self.select_template(template)
            return
        self._apply_pending_link()

    def _find_template(self, template_id: str) -> Template | None:
        for template in self.templates:
            if template.id == template_id:
                return template
        return None

    def _apply_pending_link(self) -> None:
        """Select the template named by a share link once templates are known."""
        link = self.pending_link
        if link is None:
            return
        template = self._find_template(link.template_id)
        if template is None:
            self.pending_link = None
            log.warning(f"Template {link.template_id} from link not found")
            self.notify(f"Template {link.template_id} from link not found", severity="warning")
            return
        current = self.template_binding.template
        if current is not None and current.id == template.id and not self.template_binding.loading:
            self._on_catalog_ready()
            return
        self.select_template(template)

    def action_pick_template(self) -> None:
        """Open the template picker."""
        from ui.modals import TemplatePickerModal

        self.push_screen(
            TemplatePickerModal(self.templates, self.client.list_templates),
            self._on_template_picked,
        )

    def _on_template_picked(self, template: Template | None) -> None:
        if template is not None:
            self.select_template(template)

    # =========================================================================
    # Selection
    # =========================================================================

    def select_template(self, template: Template | None) -> None:
        """Switch the board to a template (None shows the sample items)."""
        link = self.pending_link
        if link is not None and (template is None or link.template_id != template.id):
            log.info(f"Dropping shared link for {link.template_id}: another template selected")
            self.pending_link = None
        if self.template_binding.store.dirty:
            self._set_status("Discarded unsaved arrangement")
        request = self.template_binding.on_template_selected(template)
        self._render_board()
        if request is None:
            self._set_status("No template selected")
            self.refresh_saved_lists()
            return
        self._set_status(f"Loading {template.name}...")
        self._fetch_catalog(request)

    @work(thread=True, group="catalog")
    def _fetch_catalog(self, request: CatalogRequest) -> None:
        try:
            items = self.template_binding.fetch(request)
        except TierListError as e:
            self.call_from_thread(self._on_catalog_failed, request, e)
            return
        self.call_from_thread(self._on_catalog_fetched, request, items)

    def _on_catalog_fetched(self, request: CatalogRequest, items: list[Item]) -> None:
        if not self.template_binding.apply_catalog(request, items):
            return
        self._render_board()
        self._set_status(f"{request.template.name}: {len(items)} items")
        self._on_catalog_ready()

    def _on_catalog_failed(self, request: CatalogRequest, error: TierListError) -> None:
        if not self.template_binding.apply_failure(request, error):
            return
        self._render_board()
        self._report_error(error)
        link = self.pending_link
        if link is not None and link.template_id == request.template.id:
            self.pending_link = None
            if link.load_list_id:
                log.warning(f"Dropping shared list {link.load_list_id}: catalog fetch failed")
                self.notify("Shared list not loaded.", severity="warning")
        self.refresh_saved_lists()

    def _on_catalog_ready(self) -> None:
        """Catalog is on the board: fetch saved lists and finish a pending link."""
        self.refresh_saved_lists()
        link = self.pending_link
        template = self.template_binding.template
        if link is None or template is None or link.template_id != template.id:
            return
        self.pending_link = None
        if link.load_list_id:
            self.load_saved_list(link.load_list_id)

    # =========================================================================
    # Creation
    # =========================================================================

    def action_new_template(self) -> None:
        """Open the new template dialog."""
        from ui.modals import CreateTemplateModal

        if self.sessions.get_current_session() is None:
            self._report_error(ValidationFailure("Sign in to create templates."))
            return
        self.push_screen(CreateTemplateModal(), self._on_new_template_result)

    def _on_new_template_result(self, request: NewTemplateRequest | None) -> None:
        if request is None:
            return
        try:
            validate_new_template(request)
        except ValidationFailure as e:
            self._report_error(e)
            return
        self._set_status(f"Creating {request.name}...")
        self._create_template(request)

    @work(thread=True, exclusive=True, group="create-template")
    def _create_template(self, request: NewTemplateRequest) -> None:
        try:
            template = self.client.create_template(request.name, request.is_public)
            items = self.client.upload_and_register_items(template.id, request.files)
        except TierListError as e:
            self.call_from_thread(self._report_error, e)
            return
        self.call_from_thread(self._on_template_created, template, items, len(request.files))

    def _on_template_created(self, template: Template, items: list[Item], requested: int) -> None:
        if items:
            message = f"Template '{template.name}' created with {len(items)} item(s)"
        else:
            message = f"Template '{template.name}' created, but no items were uploaded"
        if 0 < len(items) < requested:
            message += f" ({requested - len(items)} failed)"
        self.notify(message)
        self._set_status(message)
        self.refresh_templates(select_id=template.id)


def validate_new_template(request: NewTemplateRequest) -> None:
    """Check a new template request before anything is sent.

    Raises ValidationFailure naming the first problem.
    """
    if not request.name.strip():
        raise ValidationFailure("Please provide a template name.")
    if not request.files:
        raise ValidationFailure("Please select at least one image file.")
    missing = [str(f) for f in request.files if not f.is_file()]
    if missing:
        raise ValidationFailure(f"File not found: {missing[0]}")
