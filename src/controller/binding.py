"""Template/item binding: keeps the loaded catalog and the containers in step.

Selecting a template is split in three so the fetch can run off the UI thread:

    request = binding.on_template_selected(template)   # UI thread
    items = binding.fetch(request)                       # worker thread
    binding.apply_catalog(request, items)                # UI thread

Every selection bumps a generation counter. A response is applied only if its
request is still the latest one, so a slow fetch for a template the user has
already left cannot overwrite the current board.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from errors import TierListError
from model import FALLBACK_ITEMS, ContainerStore, Item, Template

if TYPE_CHECKING:
    from api import TierListClient

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogRequest:
    """A pending catalog fetch, tagged with the generation it belongs to."""

    generation: int
    template: Template


class TemplateBinding:
    """Owns the selected template and its items, and resets the store on change."""

    def __init__(
        self,
        client: TierListClient,
        store: ContainerStore,
        tier_ids: list[str],
        fallback_items: tuple[Item, ...] = FALLBACK_ITEMS,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self.client = client
        self.store = store
        self.tier_ids = list(tier_ids)
        self.fallback_items = fallback_items
        self._on_change = on_change
        self._generation = 0
        self._template: Template | None = None
        self._items: list[Item] = list(fallback_items)
        self._loading = False
        self.store.reset_for_item_set(self.tier_ids, self.item_ids)

    @property
    def template(self) -> Template | None:
        return self._template

    @property
    def items(self) -> list[Item]:
        return list(self._items)

    @property
    def item_ids(self) -> list[str]:
        return [item.id for item in self._items]

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def loading(self) -> bool:
        """True while the latest catalog request is unresolved."""
        return self._loading

    def item(self, item_id: str) -> Item | None:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def is_current(self, request: CatalogRequest) -> bool:
        return request.generation == self._generation

    def on_template_selected(self, template: Template | None) -> CatalogRequest | None:
        """Switch templates. Discards the current arrangement.

        With no template the fallback items are loaded immediately and None is
        returned. Otherwise the board is emptied and a request is returned for
        the caller to fetch.
        """
        self._generation += 1
        self._template = template
        if template is None:
            self._loading = False
            self._replace_items(list(self.fallback_items))
            return None
        log.info(f"Selected template {template.id} ({template.name})")
        self._loading = True
        self._replace_items([])
        return CatalogRequest(self._generation, template)

    def fetch(self, request: CatalogRequest) -> list[Item]:
        """Fetch the catalog for a request. Touches no state; safe in a worker."""
        return self.client.list_items(request.template.id)

    def apply_catalog(self, request: CatalogRequest, items: list[Item]) -> bool:
        """Apply fetched items if the request is still current."""
        if not self.is_current(request):
            log.debug(
                f"Discarding stale catalog for {request.template.id} "
                f"(generation {request.generation}, current {self._generation})"
            )
            return False
        self._loading = False
        self._replace_items(_unique(items))
        log.info(f"Loaded {len(self._items)} items for template {request.template.id}")
        return True

    def apply_failure(self, request: CatalogRequest, error: TierListError) -> bool:
        """Record a failed fetch as an empty board if the request is still current."""
        if not self.is_current(request):
            log.debug(f"Discarding stale failure for {request.template.id}: {error}")
            return False
        log.error(f"Failed to fetch items for template {request.template.id}: {error}")
        self._loading = False
        self._replace_items([])
        return True

    def select_template(self, template: Template | None) -> bool:
        """Select a template and fetch its catalog synchronously.

        Returns False if the fetch failed (the board is then empty).
        """
        request = self.on_template_selected(template)
        if request is None:
            return True
        try:
            items = self.fetch(request)
        except TierListError as e:
            self.apply_failure(request, e)
            return False
        return self.apply_catalog(request, items)

    def _replace_items(self, items: list[Item]) -> None:
        self._items = items
        self.store.reset_for_item_set(self.tier_ids, self.item_ids)
        if self._on_change is not None:
            self._on_change()


def _unique(items: list[Item]) -> list[Item]:
    """Drop repeated item ids, keeping catalog order."""
    seen: set[str] = set()
    result = []
    for item in items:
        if item.id in seen:
            log.warning(f"Duplicate item id {item.id} in catalog")
            continue
        seen.add(item.id)
        result.append(item)
    return result
