"""Shared fixtures for tierlist tests."""

import base64
import json
import threading
from pathlib import Path

import pytest

from api import SessionManager, TierListClient
from errors import NotFoundOrForbidden, ValidationFailure
from model import (
    DEFAULT_TIERS,
    ContainerStore,
    Item,
    SavedArrangement,
    SavedArrangementSummary,
    Template,
    sort_summaries,
    tier_ids,
)


def make_token(sub: str = "user-1", email: str | None = "user@example.com") -> str:
    """Build an unsigned JWT carrying the given claims."""

    def encode(obj: dict) -> str:
        return base64.urlsafe_b64encode(json.dumps(obj).encode()).rstrip(b"=").decode()

    claims = {"sub": sub}
    if email:
        claims["email"] = email
    return f"{encode({'alg': 'none'})}.{encode(claims)}.signature"


class FakeClient(TierListClient):
    """In-memory TierListClient.

    ``gates`` maps a template id to a threading.Event that list_items waits on,
    so tests can hold a catalog fetch open while the user switches templates.
    """

    def __init__(self, sessions: SessionManager | None = None) -> None:
        self.sessions = sessions
        self.templates: list[Template] = []
        self.items: dict[str, list[Item]] = {}
        self.lists: dict[str, SavedArrangement] = {}
        self.owners: dict[str, str] = {}
        self.gates: dict[str, threading.Event] = {}
        self.fail_items: set[str] = set()
        self.fail_visibility = False
        self.calls: list[tuple] = []
        self._next_id = 1

    def _new_id(self, prefix: str) -> str:
        value = f"{prefix}-{self._next_id}"
        self._next_id += 1
        return value

    def _user(self) -> str | None:
        session = self.sessions.get_current_session() if self.sessions else None
        return session.user_id if session else None

    def add_template(self, template_id: str, item_ids: list[str], name: str | None = None) -> Template:
        template = Template(id=template_id, name=name or template_id.title())
        self.templates.append(template)
        self.items[template_id] = [
            Item(id=i, name=i.upper(), image_url=f"https://img/{i}.png", template_id=template_id)
            for i in item_ids
        ]
        return template

    def add_list(
        self,
        list_id: str,
        template_id: str,
        data: dict[str, list[str]],
        owner: str = "user-1",
        is_public: bool = False,
        updated_at: str = "2024-01-01T00:00:00Z",
    ) -> SavedArrangement:
        arrangement = SavedArrangement(
            id=list_id,
            template_id=template_id,
            data=data,
            name=list_id,
            is_public=is_public,
            updated_at=updated_at,
        )
        self.lists[list_id] = arrangement
        self.owners[list_id] = owner
        return arrangement

    # TierListClient

    def list_templates(self, search_query=None):
        self.calls.append(("list_templates", search_query))
        if not search_query:
            return list(self.templates)
        return [t for t in self.templates if search_query.lower() in t.name.lower()]

    def list_items(self, template_id):
        self.calls.append(("list_items", template_id))
        gate = self.gates.get(template_id)
        if gate is not None:
            gate.wait(timeout=5)
        if template_id in self.fail_items:
            raise NotFoundOrForbidden(f"Template {template_id} not found", 404)
        return list(self.items.get(template_id, []))

    def create_template(self, name, is_public):
        self.calls.append(("create_template", name, is_public))
        template = Template(id=self._new_id("tmpl"), name=name, is_public=is_public)
        self.templates.append(template)
        self.items[template.id] = []
        return template

    def upload_and_register_items(self, template_id, files):
        self.calls.append(("upload_and_register_items", template_id, list(files)))
        for path in files:
            item_id = self._new_id("item")
            self.items[template_id].append(
                Item(id=item_id, name=Path(path).name, image_url=f"https://img/{item_id}")
            )
        return list(self.items[template_id])

    def list_saved_arrangements(self, template_id, scope="mine"):
        self.calls.append(("list_saved_arrangements", template_id, scope))
        user = self._user()
        result = []
        for list_id, arrangement in self.lists.items():
            if template_id is not None and arrangement.template_id != template_id:
                continue
            if scope == "public" and not arrangement.is_public:
                continue
            if scope == "mine" and self.owners[list_id] != user:
                continue
            result.append(arrangement.summary())
        return sort_summaries(result)

    def get_saved_arrangement(self, arrangement_id):
        self.calls.append(("get_saved_arrangement", arrangement_id))
        arrangement = self.lists.get(arrangement_id)
        if arrangement is None:
            raise NotFoundOrForbidden("Tier list not found", 404)
        if not arrangement.is_public and self.owners[arrangement_id] != self._user():
            raise NotFoundOrForbidden("Tier list not found", 404)
        return arrangement

    def save_arrangement(self, template_id, name, is_public, data):
        self.calls.append(("save_arrangement", template_id, name, is_public, data))
        user = self._user()
        if user is None:
            raise ValidationFailure("You need to sign in first.")
        list_id = self._new_id("list")
        arrangement = self.add_list(
            list_id, template_id, data, owner=user, is_public=is_public,
            updated_at=f"2024-06-01T00:00:{self._next_id:02d}Z",
        )
        arrangement.name = name
        return arrangement.summary()

    def update_arrangement_visibility(self, arrangement_id, is_public):
        self.calls.append(("update_arrangement_visibility", arrangement_id, is_public))
        if self.fail_visibility:
            raise NotFoundOrForbidden("Not allowed", 403)
        arrangement = self.lists[arrangement_id]
        arrangement.is_public = is_public
        return arrangement.summary()

    def delete_arrangement(self, arrangement_id):
        self.calls.append(("delete_arrangement", arrangement_id))
        self.lists.pop(arrangement_id, None)


@pytest.fixture
def tiers():
    """Tier ids of the default tiers, in display order."""
    return tier_ids(DEFAULT_TIERS)


@pytest.fixture
def store(tiers):
    """Store with items a, b, c in the bank."""
    return ContainerStore(tiers, ["a", "b", "c"])


@pytest.fixture
def token():
    return make_token()


@pytest.fixture
def sessions():
    """Signed-out SessionManager with no persistence."""
    return SessionManager(session_path=None)


@pytest.fixture
def signed_in(token):
    """Signed-in SessionManager with no persistence."""
    return SessionManager(session_path=None, access_token=token)


@pytest.fixture
def client(signed_in):
    """FakeClient with two templates and one saved list for the signed-in user."""
    fake = FakeClient(signed_in)
    fake.add_template("t1", ["a", "b", "c"], name="Fruits")
    fake.add_template("t2", ["x", "y"], name="Veggies")
    fake.add_list("list-1", "t1", {"tier-s": ["c"], "tier-a": ["a"]})
    return fake


@pytest.fixture
def summary():
    return SavedArrangementSummary(
        id="list-1", name="Mine", template_id="t1", updated_at="2024-01-01T00:00:00Z"
    )
