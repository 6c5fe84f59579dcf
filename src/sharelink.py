"""Shareable links: ``<base>/?template_id=<id>&load_list_id=<id>``."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import parse_qs, urlencode, urlsplit


@dataclass(frozen=True)
class ShareLink:
    """Template to preselect and optional saved list to load once it is ready."""

    template_id: str
    load_list_id: str | None = None

    def query(self) -> str:
        params = {"template_id": self.template_id}
        if self.load_list_id:
            params["load_list_id"] = self.load_list_id
        return urlencode(params)


def build_share_link(base_url: str, template_id: str, load_list_id: str | None = None) -> str:
    """Build a link that opens a template and loads a saved list."""
    return f"{base_url.rstrip('/')}/?{ShareLink(template_id, load_list_id).query()}"


def parse_share_link(text: str) -> ShareLink | None:
    """Parse a full URL or a bare query string.

    Returns None if there is no template_id.
    """
    text = text.strip()
    if not text:
        return None
    query = urlsplit(text).query if "?" in text or "://" in text else text
    params = parse_qs(query.lstrip("?"))
    template_id = (params.get("template_id") or [""])[0].strip()
    if not template_id:
        return None
    list_id = (params.get("load_list_id") or [""])[0].strip() or None
    return ShareLink(template_id, list_id)
