"""
Combo finder pipeline.

Runs matching, color identity partitioning and sorting for one deck
against one decoded catalog and returns the three lists the combo finder
page renders.
"""

import logging
from collections.abc import Iterable

from combofinder.analysis.matcher import match_deck
from combofinder.analysis.partition import (
    default_selected_identity,
    filter_by_selected_identity,
    partition_by_identity,
)
from combofinder.analysis.sorter import DEFAULT_VENDOR, SortDirection, SortKey, sort_combos
from combofinder.catalog.decoder import DecodedCatalog
from combofinder.models.card import CardRequirement
from combofinder.models.color_identity import ColorIdentity
from combofinder.models.deck import Deck
from combofinder.models.match import ComboResults, PotentialMatch

logger = logging.getLogger(__name__)


def find_combos(
    deck: Deck,
    catalog: DecodedCatalog,
    selected_identity: ColorIdentity | None = None,
    sort_key: SortKey | str = SortKey.ID,
    direction: SortDirection | str = SortDirection.ASCENDING,
    tolerance: int | None = None,
    vendor: str = DEFAULT_VENDOR,
) -> ComboResults:
    """
    Find exact and potential combos for a deck.

    Args:
        deck: The player's deck
        catalog: Decoded catalog handle (shared, read only)
        selected_identity: Colors allowed for outside-identity matches;
            defaults to all five colors
        sort_key: Ordering applied to all three lists
        direction: Ascending or descending
        tolerance: Max missing requirements for a potential match; None = unbounded
        vendor: Vendor used by the "price" sort key

    Returns:
        ComboResults with sorted exact, within-identity and outside-identity lists
    """
    deck_identity = deck.color_identity
    if selected_identity is None:
        selected_identity = default_selected_identity(deck_identity)

    matches = match_deck(deck, catalog.combos, tolerance)
    partition = partition_by_identity(matches.potential, deck_identity)
    outside = filter_by_selected_identity(partition.outside_identity, selected_identity)

    within = sort_combos(partition.within_identity, sort_key, direction, vendor)

    logger.debug(
        "Deck (%d distinct cards, identity %s): %d exact, %d within, %d outside",
        deck.unique_cards(),
        deck_identity,
        len(matches.exact),
        len(within),
        len(outside),
    )

    return ComboResults(
        exact=sort_combos(matches.exact, sort_key, direction, vendor),
        within_identity=within,
        outside_identity=sort_combos(outside, sort_key, direction, vendor),
        missing_cards=collect_missing_cards(partition.within_identity),
        deck_identity=deck_identity,
        selected_identity=selected_identity,
        is_partial_catalog=catalog.is_partial,
    )


def collect_missing_cards(potential: Iterable[PotentialMatch]) -> list[str]:
    """Distinct concrete cards missing across potential matches, first seen first."""
    seen: set[str] = set()
    names: list[str] = []
    for match in potential:
        for requirement in match.missing:
            if isinstance(requirement, CardRequirement) and requirement.key not in seen:
                seen.add(requirement.key)
                names.append(requirement.name)
    return names
