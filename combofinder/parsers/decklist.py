"""
Decklist text parser.

Supports one card per line:
- "1 Sol Ring" or "1x Sol Ring"
- "Sol Ring" (quantity 1)
- Arena style "1 Sol Ring (CMR) 472" (set info dropped)

Blank lines, comments ("//", "#") and section headers are skipped.
"""

import re
from collections.abc import Mapping

from combofinder.models.card import normalize_card_name
from combofinder.models.color_identity import ColorIdentity
from combofinder.models.deck import Deck
from combofinder.models.failure import InvalidDeckInputError

# Pattern: "4 Lightning Bolt" or "4x Lightning Bolt" or "4X Lightning Bolt"
# Groups: (quantity, card_name)
QUANTITY_PATTERN = re.compile(r"^(\d+)x?\s+(.+)$", re.IGNORECASE)

# Trailing Arena set code and collector number: "(CMR) 472"
SET_SUFFIX_PATTERN = re.compile(r"\s+\([A-Z0-9]+\)(\s+\S+)?$", re.IGNORECASE)

SECTION_HEADERS = frozenset({"deck", "sideboard", "commander", "companion", "maybeboard"})

COMMENT_PREFIXES = ("//", "#")


def parse_decklist_lines(text: str) -> dict[str, int]:
    """
    Parse decklist text into {card name: quantity}.

    Names keep their original spelling; duplicates (by normalized name)
    aggregate under the first spelling seen.

    Raises:
        InvalidDeckInputError: If a line has a zero quantity
    """
    cards: dict[str, int] = {}
    spellings: dict[str, str] = {}

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue
        if line.rstrip(":").lower() in SECTION_HEADERS:
            continue

        match = QUANTITY_PATTERN.match(line)
        if match:
            quantity = int(match.group(1))
            name = match.group(2)
        else:
            quantity = 1
            name = line

        name = SET_SUFFIX_PATTERN.sub("", name).strip()
        if not name:
            raise InvalidDeckInputError(raw_line, "missing card name")
        if quantity < 1:
            raise InvalidDeckInputError(raw_line, "quantity must be at least 1")

        key = normalize_card_name(name)
        spelling = spellings.setdefault(key, name)
        cards[spelling] = cards.get(spelling, 0) + quantity

    return cards


def parse_decklist(
    text: str,
    color_lookup: Mapping[str, str | ColorIdentity] | None = None,
) -> Deck:
    """
    Parse decklist text into a Deck.

    Args:
        text: Raw decklist (one card per line)
        color_lookup: Normalized card name -> color identity; unknown cards are colorless

    Raises:
        InvalidDeckInputError: If a line cannot be read
    """
    return Deck.from_quantities(parse_decklist_lines(text), color_lookup)
