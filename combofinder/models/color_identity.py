"""
Color identity value type.

A color identity is a subset of the five-color alphabet W, U, B, R, G.
It is stored canonically as the lower-case letters present, in WUBRG order,
so two identities are equal exactly when their canonical strings match.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

WUBRG = "wubrg"

# Letters accepted on input that denote "no colors"
_COLORLESS_MARKERS = frozenset({"c"})

# Canonical ranking of color-set shapes: colorless, mono, guilds, shards,
# wedges, four-color, five-color.
COLOR_ORDER: tuple[str, ...] = (
    "",
    "w",
    "u",
    "b",
    "r",
    "g",
    "wu",
    "ub",
    "br",
    "rg",
    "wg",
    "wb",
    "ur",
    "bg",
    "wr",
    "ug",
    "wub",
    "ubr",
    "brg",
    "wrg",
    "wug",
    "wbg",
    "wur",
    "ubg",
    "wbr",
    "urg",
    "wubr",
    "ubrg",
    "wbrg",
    "wurg",
    "wubg",
    "wubrg",
)

_RANKS: dict[str, int] = {colors: index for index, colors in enumerate(COLOR_ORDER)}


class InvalidColorError(ValueError):
    """Raised when a color string contains letters outside WUBRG."""


def _canonicalize(colors: Iterable[str]) -> str:
    present: set[str] = set()
    for raw in colors:
        for letter in str(raw).strip().lower():
            if letter in _COLORLESS_MARKERS or letter.isspace() or letter == ",":
                continue
            if letter not in WUBRG:
                raise InvalidColorError(f"Unknown color {letter!r}")
            present.add(letter)
    return "".join(letter for letter in WUBRG if letter in present)


@dataclass(frozen=True, slots=True)
class ColorIdentity:
    """
    An immutable set of colors.

    Attributes:
        colors: Canonical lower-case WUBRG subsequence (e.g. "wb", "" for colorless)
    """

    colors: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "colors", _canonicalize(self.colors))

    @classmethod
    def from_colors(cls, colors: Iterable[str] | str | None) -> "ColorIdentity":
        """Build an identity from a string ("WB") or an iterable of letters."""
        if colors is None:
            return cls()
        if isinstance(colors, str):
            return cls(colors)
        return cls(_canonicalize(colors))

    @classmethod
    def all_colors(cls) -> "ColorIdentity":
        return cls(WUBRG)

    @property
    def is_colorless(self) -> bool:
        return not self.colors

    def is_subset_of(self, other: "ColorIdentity") -> bool:
        """True if every color here also appears in `other`."""
        return all(letter in other.colors for letter in self.colors)

    def is_superset_of(self, other: "ColorIdentity") -> bool:
        return other.is_subset_of(self)

    def union(self, other: "ColorIdentity") -> "ColorIdentity":
        return ColorIdentity(self.colors + other.colors)

    def difference(self, other: "ColorIdentity") -> "ColorIdentity":
        return ColorIdentity("".join(c for c in self.colors if c not in other.colors))

    def __contains__(self, color: object) -> bool:
        return isinstance(color, str) and len(color) == 1 and color.lower() in self.colors

    def __iter__(self) -> Iterator[str]:
        return iter(self.colors)

    def __len__(self) -> int:
        return len(self.colors)

    def __str__(self) -> str:
        return self.colors or "c"


def color_order_rank(identity: ColorIdentity) -> int:
    """
    Position of an identity in the canonical color order.

    Identities missing from the table share the last rank.
    """
    return _RANKS.get(identity.colors, len(COLOR_ORDER))
