import re
from dataclasses import dataclass

_WHITESPACE = re.compile(r"\s+")
_APOSTROPHES = str.maketrans({"‘": "'", "’": "'", "`": "'"})


def normalize_card_name(name: str) -> str:
    """Card identity key: lower-case, single-spaced, straight apostrophes."""
    return _WHITESPACE.sub(" ", name.translate(_APOSTROPHES)).strip().lower()


@dataclass(frozen=True, slots=True)
class CardRequirement:
    """
    A concrete card a combo needs.

    Attributes:
        name: Card name as printed in the catalog
        quantity: Copies required (at least 1)
    """

    name: str
    quantity: int = 1

    @property
    def key(self) -> str:
        """Normalized name used for deck lookups."""
        return normalize_card_name(self.name)

    @property
    def is_template(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class TemplateRequirement:
    """
    An open-ended requirement ("any creature with power 3 or greater").

    Templates are never satisfied by a concrete deck.
    """

    description: str
    quantity: int = 1

    @property
    def name(self) -> str:
        return self.description

    @property
    def is_template(self) -> bool:
        return True


Requirement = CardRequirement | TemplateRequirement
