from combofinder.analysis.finder import collect_missing_cards, find_combos
from combofinder.analysis.matcher import classify, find_missing, match_deck
from combofinder.analysis.partition import (
    default_selected_identity,
    filter_by_selected_identity,
    partition_by_identity,
)
from combofinder.analysis.sorter import (
    COMPARATOR_CHAINS,
    SortDirection,
    SortKey,
    compare_combos,
    sort_combos,
)

__all__ = [
    "COMPARATOR_CHAINS",
    "SortDirection",
    "SortKey",
    "classify",
    "collect_missing_cards",
    "compare_combos",
    "default_selected_identity",
    "filter_by_selected_identity",
    "find_combos",
    "find_missing",
    "match_deck",
    "partition_by_identity",
    "sort_combos",
]
