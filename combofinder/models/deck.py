from collections.abc import Mapping
from dataclasses import dataclass, field

from combofinder.models.card import normalize_card_name
from combofinder.models.color_identity import ColorIdentity


@dataclass
class Deck:
    """
    A player's deck.

    Cards are keyed by normalized name with the quantity held. Each card's
    individual color identity is kept alongside so the deck identity can be
    derived whenever the deck changes.
    """

    cards: dict[str, int] = field(default_factory=dict)
    card_colors: dict[str, ColorIdentity] = field(default_factory=dict)

    def __post_init__(self) -> None:
        cards = self.cards
        self.cards = {}
        for name, quantity in cards.items():
            self.add_card(name, quantity)
        self.card_colors = {
            normalize_card_name(name): identity for name, identity in self.card_colors.items()
        }

    @classmethod
    def from_quantities(
        cls,
        cards: Mapping[str, int],
        color_lookup: Mapping[str, str | ColorIdentity] | None = None,
    ) -> "Deck":
        """
        Build a deck from {card name: quantity}.

        Args:
            cards: Card names (any casing) to quantities
            color_lookup: Normalized card name -> color identity; unknown cards are colorless
        """
        deck = cls()
        for name, quantity in cards.items():
            colors = None
            if color_lookup is not None:
                colors = color_lookup.get(normalize_card_name(name))
            deck.add_card(name, quantity, colors)
        return deck

    def add_card(
        self,
        card_name: str,
        quantity: int = 1,
        colors: str | ColorIdentity | None = None,
    ) -> None:
        """Add copies of a card. Quantities must be positive."""
        if quantity < 1:
            raise ValueError(f"Quantity for {card_name!r} must be at least 1, got {quantity}")
        key = normalize_card_name(card_name)
        self.cards[key] = self.cards.get(key, 0) + quantity
        if colors is not None:
            identity = colors if isinstance(colors, ColorIdentity) else ColorIdentity(colors)
            existing = self.card_colors.get(key, ColorIdentity())
            self.card_colors[key] = existing.union(identity)

    def get_quantity(self, card_name: str) -> int:
        """Get quantity held of a card; the name is normalized first."""
        return self.cards.get(normalize_card_name(card_name), 0)

    def has(self, card_name: str, quantity: int = 1) -> bool:
        return self.get_quantity(card_name) >= quantity

    @property
    def color_identity(self) -> ColorIdentity:
        """Union of the color identities of every card in the deck."""
        identity = ColorIdentity()
        for key in self.cards:
            card_identity = self.card_colors.get(key)
            if card_identity is not None:
                identity = identity.union(card_identity)
        return identity

    def total_cards(self) -> int:
        return sum(self.cards.values())

    def unique_cards(self) -> int:
        return len(self.cards)
