"""Item and template models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Item:
    """An image belonging to one template."""

    id: str
    name: str
    image_url: str
    template_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Item:
        """Build from an API record (camelCase keys, as the server sends them)."""
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            image_url=data.get("imageUrl") or data.get("image_url") or "",
            template_id=data.get("templateId") or data.get("template_id"),
        )


@dataclass(frozen=True)
class Template:
    """A named collection of items that can be ranked."""

    id: str
    name: str
    created_at: str = ""
    is_public: bool = False
    description: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Template:
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            created_at=data.get("createdAt") or data.get("created_at") or "",
            is_public=bool(data.get("is_public", False)),
            description=data.get("description"),
        )


# Shown when no template is selected
FALLBACK_ITEMS: tuple[Item, ...] = tuple(
    Item(id=f"item-{n}", name=f"Item {n}", image_url="/placeholder.svg") for n in range(1, 6)
)
