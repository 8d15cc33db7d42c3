from dataclasses import dataclass, field
from enum import Enum

from combofinder.models.card import Requirement
from combofinder.models.color_identity import ColorIdentity
from combofinder.models.combo import ComboRecord


class MatchClass(str, Enum):
    """How completely a deck assembles a combo."""

    EXACT = "exact"
    POTENTIAL = "potential"
    NO_MATCH = "no_match"


@dataclass(frozen=True, slots=True)
class PotentialMatch:
    """A combo the deck is close to, with the requirements it lacks."""

    combo: ComboRecord
    missing: tuple[Requirement, ...]

    @property
    def missing_count(self) -> int:
        return len(self.missing)

    def missing_names(self) -> list[str]:
        return [item.name for item in self.missing]


@dataclass(frozen=True, slots=True)
class DeckMatches:
    """Matcher output: exact combos and potential matches, both in catalog order."""

    exact: tuple[ComboRecord, ...] = ()
    potential: tuple[PotentialMatch, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.exact and not self.potential


@dataclass(frozen=True, slots=True)
class IdentityPartition:
    """Potential matches split by whether they fit the deck's colors."""

    within_identity: tuple[PotentialMatch, ...] = ()
    outside_identity: tuple[PotentialMatch, ...] = ()


@dataclass(frozen=True)
class ComboResults:
    """
    Everything the presentation layer renders for one decklist.

    Attributes:
        exact: Combos the deck fully assembles
        within_identity: Potential matches inside the deck's color identity
        outside_identity: Potential matches needing other colors, narrowed by the selection
        missing_cards: Distinct concrete cards missing from within-identity matches
        deck_identity: Derived deck color identity
        selected_identity: Colors the caller allowed for outside-identity matches
        is_partial_catalog: Some catalog entries were skipped while decoding
    """

    exact: list[ComboRecord] = field(default_factory=list)
    within_identity: list[PotentialMatch] = field(default_factory=list)
    outside_identity: list[PotentialMatch] = field(default_factory=list)
    missing_cards: list[str] = field(default_factory=list)
    deck_identity: ColorIdentity = field(default_factory=ColorIdentity)
    selected_identity: ColorIdentity = field(default_factory=ColorIdentity.all_colors)
    is_partial_catalog: bool = False
