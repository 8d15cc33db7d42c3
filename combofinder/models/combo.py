"""
Decoded combo records.

A ComboRecord is built once by the catalog decoder and never mutated
afterwards; matching sessions share records read-only.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from combofinder.models.card import (
    CardRequirement,
    Requirement,
    TemplateRequirement,
    normalize_card_name,
)
from combofinder.models.color_identity import ColorIdentity

PERMALINK_BASE = "https://commanderspellbook.com/combo"

VENDORS = ("cardkingdom", "tcgplayer")


@dataclass(frozen=True, slots=True)
class CardGrouping:
    """
    Ordered requirement list of a combo: concrete cards followed by templates.

    `len()` counts requirement entries, so a card needed twice counts once.
    """

    requirements: tuple[Requirement, ...] = ()

    def __len__(self) -> int:
        return len(self.requirements)

    def __iter__(self) -> Iterator[Requirement]:
        return iter(self.requirements)

    @property
    def cards(self) -> tuple[CardRequirement, ...]:
        return tuple(r for r in self.requirements if isinstance(r, CardRequirement))

    @property
    def templates(self) -> tuple[TemplateRequirement, ...]:
        return tuple(r for r in self.requirements if isinstance(r, TemplateRequirement))

    def names(self) -> list[str]:
        return [r.name for r in self.requirements]

    def includes(self, card_name: str) -> bool:
        """Check whether a concrete card (by normalized name) is part of the grouping."""
        key = normalize_card_name(card_name)
        return any(card.key == key for card in self.cards)

    def total_price(
        self,
        card_prices: Mapping[str, Mapping[str, float]],
        vendor: str,
    ) -> float:
        """
        Sum vendor prices over the concrete cards, weighted by quantity.

        Args:
            card_prices: {normalized card name: {vendor: price}}
            vendor: Vendor key (e.g. "cardkingdom")

        Cards without price data contribute nothing. Templates have no price.
        """
        total = 0.0
        for card in self.cards:
            price = card_prices.get(card.key, {}).get(vendor, 0.0)
            total += float(price) * card.quantity
        return round(total, 2)


@dataclass(frozen=True, slots=True)
class SpellbookList:
    """Ordered text list (prerequisites, steps or results)."""

    items: tuple[str, ...] = ()

    @classmethod
    def create(cls, value: str | list[str] | tuple[str, ...] | None) -> "SpellbookList":
        """
        Build from a list of strings or one string of sentences.

        A string is split on ". " and each part loses its trailing period.
        """
        if value is None:
            return cls()
        if isinstance(value, str):
            parts = value.split(". ")
        else:
            parts = [str(v) for v in value]
        cleaned = [p.strip().rstrip(".").strip() for p in parts]
        return cls(tuple(p for p in cleaned if p))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[str]:
        return iter(self.items)


@dataclass(frozen=True, slots=True)
class ComboRecord:
    """
    One catalog combo.

    Attributes:
        id: Catalog identifier
        cards: Card and template requirements
        color_identity: Colors the combo is restricted to
        prerequisites: Board state needed before starting
        steps: How to perform the combo
        results: What the combo achieves
        prices: Vendor key -> combined price of the combo's cards
        has_banned_card: A required card is banned in the format
        has_spoiled_card: A required card is from an unreleased set
    """

    id: int
    cards: CardGrouping
    color_identity: ColorIdentity = field(default_factory=ColorIdentity)
    prerequisites: SpellbookList = field(default_factory=SpellbookList)
    steps: SpellbookList = field(default_factory=SpellbookList)
    results: SpellbookList = field(default_factory=SpellbookList)
    prices: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))
    has_banned_card: bool = False
    has_spoiled_card: bool = False

    @property
    def permalink(self) -> str:
        return f"{PERMALINK_BASE}/{self.id}/"

    def price(self, vendor: str) -> float:
        """Combined price at a vendor; 0.0 when the vendor is unknown."""
        return self.prices.get(vendor, 0.0)
