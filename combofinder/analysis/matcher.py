"""
Deck-to-combo matching.

Classifies every catalog combo against a deck as an exact match, a
potential match (some requirements missing, within tolerance), or no match.
"""

import logging
from collections.abc import Iterable

from combofinder.config import MIN_DISTINCT_CARDS
from combofinder.models.card import CardRequirement, Requirement
from combofinder.models.combo import ComboRecord
from combofinder.models.deck import Deck
from combofinder.models.match import DeckMatches, MatchClass, PotentialMatch

logger = logging.getLogger(__name__)


def find_missing(combo: ComboRecord, deck: Deck) -> list[Requirement]:
    """
    List the requirements of a combo the deck does not satisfy.

    A card counts once however many copies are short. Templates are
    always missing.
    """
    missing: list[Requirement] = []
    for requirement in combo.cards:
        if isinstance(requirement, CardRequirement):
            if deck.get_quantity(requirement.key) < requirement.quantity:
                missing.append(requirement)
        else:
            missing.append(requirement)
    return missing


def classify(
    missing: list[Requirement],
    tolerance: int | None = None,
) -> MatchClass:
    """Turn a missing-requirement list into a match class."""
    if not missing:
        return MatchClass.EXACT
    if tolerance is None or len(missing) <= tolerance:
        return MatchClass.POTENTIAL
    return MatchClass.NO_MATCH


def match_deck(
    deck: Deck,
    catalog: Iterable[ComboRecord],
    tolerance: int | None = None,
) -> DeckMatches:
    """
    Find the combos a deck assembles and the ones it nearly assembles.

    Args:
        deck: The player's deck
        catalog: Decoded combos (read only)
        tolerance: Max missing requirements for a potential match; None = unbounded

    Returns:
        DeckMatches with exact and potential matches, both in catalog order.
        Empty when the deck has fewer than two distinct cards.
    """
    if tolerance is not None and tolerance < 0:
        raise ValueError(f"tolerance must be non-negative, got {tolerance}")

    if deck.unique_cards() < MIN_DISTINCT_CARDS:
        logger.debug(
            "Deck has %d distinct cards; skipping catalog scan",
            deck.unique_cards(),
        )
        return DeckMatches()

    exact: list[ComboRecord] = []
    potential: list[PotentialMatch] = []

    for combo in catalog:
        missing = find_missing(combo, deck)
        match_class = classify(missing, tolerance)
        if match_class is MatchClass.EXACT:
            exact.append(combo)
        elif match_class is MatchClass.POTENTIAL:
            potential.append(PotentialMatch(combo=combo, missing=tuple(missing)))

    return DeckMatches(exact=tuple(exact), potential=tuple(potential))
