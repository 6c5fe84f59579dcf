"""Collaborator interface for templates, items and saved tier lists.

TierListClient is the contract the app consumes. HttpTierListClient talks to
the web backend's REST routes:

    GET    /api/templates?q=             list templates
    POST   /api/templates                create template
    GET    /api/templates/{id}/items     list items of a template
    POST   /api/items/batch              register uploaded images
    GET    /api/tier-lists               saved lists (mine, or scope=public)
    POST   /api/tier-lists               save a list
    GET    /api/tier-lists/{id}          fetch one list with its data
    PUT    /api/tier-lists/{id}          update name/data/visibility
    DELETE /api/tier-lists/{id}          delete a list

Image bytes go to object storage before they are registered.
"""

from __future__ import annotations

import logging
import mimetypes
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Literal

import requests

from api.session import Session, SessionManager
from errors import NetworkFailure, NotFoundOrForbidden, ValidationFailure
from model import Item, SavedArrangement, SavedArrangementSummary, Template, sort_summaries
from settings import IMAGE_BUCKET, Settings

log = logging.getLogger(__name__)

Scope = Literal["mine", "public"]


class TierListClient(ABC):
    """Everything the arrangement engine needs from the outside world."""

    @abstractmethod
    def list_templates(self, search_query: str | None = None) -> list[Template]: ...

    @abstractmethod
    def list_items(self, template_id: str) -> list[Item]: ...

    @abstractmethod
    def create_template(self, name: str, is_public: bool) -> Template: ...

    @abstractmethod
    def upload_and_register_items(self, template_id: str, files: list[Path]) -> list[Item]: ...

    @abstractmethod
    def list_saved_arrangements(
        self, template_id: str | None, scope: Scope = "mine"
    ) -> list[SavedArrangementSummary]:
        """Saved lists for a template, or across all templates when template_id is None."""

    @abstractmethod
    def get_saved_arrangement(self, arrangement_id: str) -> SavedArrangement: ...

    @abstractmethod
    def save_arrangement(
        self,
        template_id: str,
        name: str | None,
        is_public: bool,
        data: dict[str, list[str]],
    ) -> SavedArrangementSummary: ...

    @abstractmethod
    def update_arrangement_visibility(
        self, arrangement_id: str, is_public: bool
    ) -> SavedArrangementSummary: ...

    @abstractmethod
    def delete_arrangement(self, arrangement_id: str) -> None: ...


class HttpTierListClient(TierListClient):
    """TierListClient over HTTP using requests."""

    def __init__(self, settings: Settings, sessions: SessionManager) -> None:
        self.settings = settings
        self.sessions = sessions
        self._http = requests.Session()

    # =========================================================================
    # Transport
    # =========================================================================

    def _headers(self) -> dict[str, str]:
        session = self.sessions.get_current_session()
        if session is None:
            return {}
        return {"Authorization": f"Bearer {session.access_token}"}

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request to the API and decode the JSON body.

        Raises NotFoundOrForbidden for 401/403/404 and NetworkFailure for
        transport errors, other non-2xx statuses, and undecodable bodies.
        """
        url = f"{self.settings.api_url}{path}"
        try:
            response = self._http.request(
                method, url, headers=self._headers(), timeout=self.settings.timeout, **kwargs
            )
        except requests.RequestException as e:
            log.error(f"{method} {path} failed: {e}")
            raise NetworkFailure(f"Could not reach server: {e}") from e

        if response.status_code in (401, 403, 404):
            message = _error_message(response) or "Not found or access denied."
            log.error(f"{method} {path} -> {response.status_code}: {message}")
            raise NotFoundOrForbidden(message, response.status_code)
        if not response.ok:
            message = _error_message(response) or response.reason or "Request failed"
            log.error(f"{method} {path} -> {response.status_code}: {message}")
            raise NetworkFailure(f"{message} ({response.status_code})", response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise NetworkFailure(f"Invalid response from {path}: {e}") from e

    # =========================================================================
    # Templates and items
    # =========================================================================

    def list_templates(self, search_query: str | None = None) -> list[Template]:
        params = {"q": search_query} if search_query else None
        data = self._request("GET", "/api/templates", params=params)
        return [Template.from_dict(t) for t in data or []]

    def list_items(self, template_id: str) -> list[Item]:
        data = self._request("GET", f"/api/templates/{template_id}/items")
        return [Item.from_dict(i) for i in data or []]

    def create_template(self, name: str, is_public: bool) -> Template:
        if not name.strip():
            raise ValidationFailure("Template name is required.")
        data = self._request(
            "POST", "/api/templates", json={"name": name.strip(), "is_public": is_public}
        )
        if not isinstance(data, dict) or not data.get("id"):
            raise NetworkFailure("Template creation response did not contain a template.")
        return Template.from_dict(data)

    def upload_and_register_items(self, template_id: str, files: list[Path]) -> list[Item]:
        """Upload image files and register them as items of a template.

        Files that fail to upload are skipped. Returns the template's items as
        listed after registration.
        """
        session = self._require_session()
        if not self.settings.storage_url:
            raise ValidationFailure("No storage URL configured (set TIERLIST_STORAGE_URL).")

        records = []
        for path in files:
            image_url = self._upload(session, template_id, path)
            if image_url is None:
                continue
            records.append({"templateId": template_id, "imageUrl": image_url, "name": path.name})

        if records:
            self._request("POST", "/api/items/batch", json=records)
            log.info(f"Registered {len(records)} of {len(files)} items for template {template_id}")
        else:
            log.warning(f"No files uploaded for template {template_id}")
        return self.list_items(template_id)

    def _upload(self, session: Session, template_id: str, path: Path) -> str | None:
        """Upload one file to storage. Returns its public URL, or None on failure."""
        object_path = f"{session.user_id}/{template_id}/{uuid.uuid4()}{path.suffix.lower()}"
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        base = f"{self.settings.storage_url}/storage/v1/object"
        try:
            body = path.read_bytes()
            response = self._http.post(
                f"{base}/{IMAGE_BUCKET}/{object_path}",
                data=body,
                headers={**self._headers(), "Content-Type": content_type, "x-upsert": "false"},
                timeout=self.settings.timeout,
            )
        except (OSError, requests.RequestException) as e:
            log.error(f"Upload of {path} failed: {e}")
            return None
        if not response.ok:
            log.error(f"Upload of {path} failed: {response.status_code} {response.text[:200]}")
            return None
        return f"{base}/public/{IMAGE_BUCKET}/{object_path}"

    # =========================================================================
    # Saved tier lists
    # =========================================================================

    def list_saved_arrangements(
        self, template_id: str | None, scope: Scope = "mine"
    ) -> list[SavedArrangementSummary]:
        params = {}
        if template_id is not None:
            params["template_id"] = template_id
        if scope == "public":
            params["scope"] = "public"
        data = self._request("GET", "/api/tier-lists", params=params)
        return sort_summaries([SavedArrangementSummary.from_dict(r) for r in data or []])

    def get_saved_arrangement(self, arrangement_id: str) -> SavedArrangement:
        data = self._request("GET", f"/api/tier-lists/{arrangement_id}")
        if not isinstance(data, dict):
            raise NetworkFailure("Saved list response was empty.")
        return SavedArrangement.from_dict(data)

    def save_arrangement(
        self,
        template_id: str,
        name: str | None,
        is_public: bool,
        data: dict[str, list[str]],
    ) -> SavedArrangementSummary:
        self._require_session()
        if not template_id:
            raise ValidationFailure("Cannot save: no template selected.")
        payload = {
            "template_id": template_id,
            "name": (name or "").strip() or None,
            "data": data,
            "is_public": is_public,
        }
        records = self._request("POST", "/api/tier-lists", json=payload)
        return SavedArrangementSummary.from_dict(_first_record(records, "Save"))

    def update_arrangement_visibility(
        self, arrangement_id: str, is_public: bool
    ) -> SavedArrangementSummary:
        self._require_session()
        records = self._request(
            "PUT", f"/api/tier-lists/{arrangement_id}", json={"is_public": is_public}
        )
        return SavedArrangementSummary.from_dict(_first_record(records, "Update"))

    def delete_arrangement(self, arrangement_id: str) -> None:
        self._require_session()
        self._request("DELETE", f"/api/tier-lists/{arrangement_id}")

    def _require_session(self) -> Session:
        session = self.sessions.get_current_session()
        if session is None:
            raise ValidationFailure("You need to sign in first.")
        return session


def _first_record(records: Any, action: str) -> dict[str, Any]:
    """The server answers writes with either a record or a one-element array."""
    if isinstance(records, list):
        records = records[0] if records else None
    if not isinstance(records, dict):
        raise NetworkFailure(f"{action} response did not contain list data.")
    return records


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()[:200]
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return ""
