"""
Color identity partitioning of potential matches.

Potential matches whose colors fit inside the deck's identity are shown as
"within identity"; the rest need extra colors and are narrowed further by
the colors the user chose to allow.
"""

from collections.abc import Iterable

from combofinder.models.color_identity import ColorIdentity
from combofinder.models.match import IdentityPartition, PotentialMatch


def default_selected_identity(deck_identity: ColorIdentity) -> ColorIdentity:
    """
    Starting selection for outside-identity filtering.

    The deck's colors plus every color it lacks, so nothing is hidden
    until the user deselects a color.
    """
    return deck_identity.union(ColorIdentity.all_colors().difference(deck_identity))


def partition_by_identity(
    potential: Iterable[PotentialMatch],
    deck_identity: ColorIdentity,
) -> IdentityPartition:
    """
    Split potential matches by whether their combo fits the deck's colors.

    Colorless combos are always within identity. Relative order is kept in
    both halves.
    """
    within: list[PotentialMatch] = []
    outside: list[PotentialMatch] = []

    for match in potential:
        if match.combo.color_identity.is_subset_of(deck_identity):
            within.append(match)
        else:
            outside.append(match)

    return IdentityPartition(within_identity=tuple(within), outside_identity=tuple(outside))


def filter_by_selected_identity(
    outside: Iterable[PotentialMatch],
    selected_identity: ColorIdentity | None = None,
) -> list[PotentialMatch]:
    """
    Keep outside-identity matches whose colors fit the user's selection.

    Args:
        outside: Outside-identity potential matches
        selected_identity: Allowed colors; None means all five colors
    """
    if selected_identity is None:
        selected_identity = ColorIdentity.all_colors()

    return [m for m in outside if m.combo.color_identity.is_subset_of(selected_identity)]
