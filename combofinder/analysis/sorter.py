"""
Combo ordering.

Each sort key owns an ordered chain of comparators. The chain is tried
left to right until one comparator tells the two combos apart; if none
does, the combos keep their prior relative order (the sort is stable).

Descending order reverses the ascending result as a whole, so tied combos
also swap places.
"""

from collections.abc import Callable, Iterable
from enum import Enum
from functools import cmp_to_key
from typing import TypeVar

from combofinder.models.color_identity import color_order_rank
from combofinder.models.combo import ComboRecord
from combofinder.models.match import PotentialMatch

DEFAULT_VENDOR = "cardkingdom"

# (first, second, vendor) -> negative if first sorts before second, 0 if tied, positive otherwise
Comparator = Callable[[ComboRecord, ComboRecord, str], int]

Sortable = TypeVar("Sortable", ComboRecord, PotentialMatch)


class SortKey(str, Enum):
    """Supported sort keys."""

    ID = "id"
    CARDS = "cards"
    PREREQUISITES = "prerequisites"
    STEPS = "steps"
    RESULTS = "results"
    COLORS = "colors"
    PRICE = "price"

    @property
    def comparators(self) -> tuple[Comparator, ...]:
        return COMPARATOR_CHAINS[self]


class SortDirection(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


def _compare(first: float, second: float) -> int:
    return (first > second) - (first < second)


def compare_id(first: ComboRecord, second: ComboRecord, vendor: str) -> int:
    return _compare(first.id, second.id)


def compare_cards(first: ComboRecord, second: ComboRecord, vendor: str) -> int:
    return _compare(len(first.cards), len(second.cards))


def compare_prerequisites(first: ComboRecord, second: ComboRecord, vendor: str) -> int:
    return _compare(len(first.prerequisites), len(second.prerequisites))


def compare_steps(first: ComboRecord, second: ComboRecord, vendor: str) -> int:
    return _compare(len(first.steps), len(second.steps))


def compare_results(first: ComboRecord, second: ComboRecord, vendor: str) -> int:
    return _compare(len(first.results), len(second.results))


def compare_colors(first: ComboRecord, second: ComboRecord, vendor: str) -> int:
    return _compare(
        color_order_rank(first.color_identity),
        color_order_rank(second.color_identity),
    )


def compare_price(first: ComboRecord, second: ComboRecord, vendor: str) -> int:
    return _compare(first.price(vendor), second.price(vendor))


COMPARATOR_CHAINS: dict[SortKey, tuple[Comparator, ...]] = {
    SortKey.ID: (compare_id,),
    SortKey.CARDS: (compare_cards,),
    SortKey.PREREQUISITES: (compare_prerequisites,),
    SortKey.STEPS: (compare_steps,),
    SortKey.RESULTS: (compare_results,),
    SortKey.COLORS: (compare_colors, compare_cards),
    SortKey.PRICE: (compare_price, compare_colors, compare_cards),
}


def compare_combos(
    first: ComboRecord,
    second: ComboRecord,
    key: SortKey,
    vendor: str = DEFAULT_VENDOR,
) -> int:
    """Run a key's comparator chain until one reports a difference."""
    for comparator in key.comparators:
        result = comparator(first, second, vendor)
        if result != 0:
            return result
    return 0


def _combo_of(item: ComboRecord | PotentialMatch) -> ComboRecord:
    return item.combo if isinstance(item, PotentialMatch) else item


def sort_combos(
    records: Iterable[Sortable],
    key: SortKey | str = SortKey.ID,
    direction: SortDirection | str = SortDirection.ASCENDING,
    vendor: str = DEFAULT_VENDOR,
) -> list[Sortable]:
    """
    Order combos (or potential matches, by their combo).

    Args:
        records: Combos or potential matches in their current order
        key: Sort key; strings must name a SortKey
        direction: Ascending, or descending (the ascending result reversed)
        vendor: Vendor whose price the "price" key compares

    Returns:
        A new list; the input is left untouched.

    Raises:
        ValueError: If key or direction is not supported
    """
    key = SortKey(key)
    direction = SortDirection(direction)

    ordered = sorted(
        records,
        key=cmp_to_key(
            lambda first, second: compare_combos(
                _combo_of(first), _combo_of(second), key, vendor
            )
        ),
    )

    if direction is SortDirection.DESCENDING:
        ordered.reverse()

    return ordered
