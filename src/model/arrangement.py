"""Saved arrangement models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from errors import ValidationFailure


@dataclass(frozen=True)
class SavedArrangementSummary:
    """A saved tier list as listed by the server (no tier data)."""

    id: str
    name: str | None
    template_id: str
    updated_at: str = ""
    is_public: bool = False

    @property
    def display_name(self) -> str:
        return self.name or f"Untitled ({self.updated_at[:10] or self.id[:8]})"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SavedArrangementSummary:
        return cls(
            id=str(data["id"]),
            name=data.get("name"),
            template_id=str(data.get("template_id", "")),
            updated_at=data.get("updated_at") or "",
            is_public=bool(data.get("is_public", False)),
        )


def parse_arrangement_data(data: Any) -> dict[str, list[str]]:
    """Validate a persisted tier -> item ids mapping.

    Raises ValidationFailure if the payload is missing or not a mapping of
    lists of strings.
    """
    if not isinstance(data, dict):
        raise ValidationFailure("Saved list data is missing or invalid.")
    result: dict[str, list[str]] = {}
    for tier_id, item_ids in data.items():
        if not isinstance(item_ids, list) or not all(isinstance(i, str) for i in item_ids):
            raise ValidationFailure(f"Saved list data for '{tier_id}' is invalid.")
        result[str(tier_id)] = list(item_ids)
    return result


@dataclass
class SavedArrangement:
    """A persisted projection of the containers, bank excluded."""

    id: str
    template_id: str
    data: dict[str, list[str]] = field(default_factory=dict)
    name: str | None = None
    is_public: bool = False
    updated_at: str = ""

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> SavedArrangement:
        return cls(
            id=str(record["id"]),
            template_id=str(record.get("template_id", "")),
            data=parse_arrangement_data(record.get("data")),
            name=record.get("name"),
            is_public=bool(record.get("is_public", False)),
            updated_at=record.get("updated_at") or "",
        )

    def summary(self) -> SavedArrangementSummary:
        return SavedArrangementSummary(
            id=self.id,
            name=self.name,
            template_id=self.template_id,
            updated_at=self.updated_at,
            is_public=self.is_public,
        )


def sort_summaries(summaries: list[SavedArrangementSummary]) -> list[SavedArrangementSummary]:
    """Most recently updated first."""
    return sorted(summaries, key=lambda s: s.updated_at, reverse=True)
