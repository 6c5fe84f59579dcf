"""Tier model."""

from dataclasses import dataclass

# Reserved container id for unranked items
BANK_ID = "bank"


@dataclass(frozen=True)
class Tier:
    """A labeled ranking bucket. Fixed for the lifetime of a session."""

    id: str
    label: str
    color: str
    order: int

    def __str__(self) -> str:
        return self.label


DEFAULT_TIERS: tuple[Tier, ...] = (
    Tier(id="tier-s", label="S", color="red", order=0),
    Tier(id="tier-a", label="A", color="darkorange", order=1),
    Tier(id="tier-b", label="B", color="gold", order=2),
    Tier(id="tier-c", label="C", color="green", order=3),
    Tier(id="tier-d", label="D", color="dodgerblue", order=4),
)


def tier_ids(tiers: tuple[Tier, ...] | list[Tier]) -> list[str]:
    """Return tier ids in display order."""
    return [t.id for t in sorted(tiers, key=lambda t: t.order)]
