from collections.abc import Callable
from types import MappingProxyType
from typing import Any

import pytest

from combofinder.catalog.decoder import DecodedCatalog, decode_catalog
from combofinder.models import failure as failure_module
from combofinder.models.card import CardRequirement, Requirement, TemplateRequirement
from combofinder.models.color_identity import ColorIdentity
from combofinder.models.combo import CardGrouping, ComboRecord, SpellbookList


@pytest.fixture(autouse=True)
def clear_finalized_responses():
    """Clear the finalized responses set between tests.

    This prevents test isolation issues where Python reuses memory
    addresses for new objects, causing id() collisions with previously
    finalized responses.
    """
    failure_module._finalized_responses.clear()
    yield
    failure_module._finalized_responses.clear()


def build_combo(
    combo_id: int,
    cards: list[str] | None = None,
    colors: str = "",
    templates: list[str] | None = None,
    quantities: dict[str, int] | None = None,
    prerequisites: int = 0,
    steps: int = 0,
    results: int = 0,
    prices: dict[str, float] | None = None,
) -> ComboRecord:
    """Build a ComboRecord without going through the decoder."""
    quantities = quantities or {}
    requirements: list[Requirement] = [
        CardRequirement(name, quantities.get(name, 1)) for name in (cards or [])
    ]
    requirements.extend(TemplateRequirement(t) for t in (templates or []))
    return ComboRecord(
        id=combo_id,
        cards=CardGrouping(tuple(requirements)),
        color_identity=ColorIdentity(colors),
        prerequisites=SpellbookList(tuple(f"Prerequisite {i}" for i in range(prerequisites))),
        steps=SpellbookList(tuple(f"Step {i}" for i in range(steps))),
        results=SpellbookList(tuple(f"Result {i}" for i in range(results))),
        prices=MappingProxyType(prices or {}),
    )


@pytest.fixture
def make_combo() -> Callable[..., ComboRecord]:
    return build_combo


@pytest.fixture
def sample_snapshot() -> list[dict[str, Any]]:
    """Compact catalog entries as served by the data service."""
    return [
        {
            "d": 1,
            "c": ["Thassa's Oracle", "Demonic Consultation"],
            "i": "ub",
            "p": "Thassa's Oracle in hand. Demonic Consultation in hand",
            "s": "Cast Demonic Consultation, naming a card not in your deck. "
            "Cast Thassa's Oracle",
            "r": "Win the game",
            "x": {"cardkingdom": 31.5, "tcgplayer": 28.0},
            "b": 0,
            "o": 0,
        },
        {
            "d": 2,
            "c": "Basalt Monolith|Rings of Brighthearth",
            "i": "c",
            "p": ["Both permanents on the battlefield"],
            "s": ["Tap Basalt Monolith for three mana", "Untap it and copy the ability"],
            "r": ["Infinite colorless mana"],
            "x": {"cardkingdom": 12.0, "tcgplayer": 10.0},
            "b": 0,
            "o": 0,
        },
        {
            "d": 3,
            "c": ["Kiki-Jiki, Mirror Breaker", "Zealous Conscripts"],
            "i": "r",
            "p": [],
            "s": ["Activate Kiki-Jiki targeting Zealous Conscripts"],
            "r": ["Infinite hasty tokens"],
            "x": {"cardkingdom": 40.0, "tcgplayer": 36.0},
            "b": 0,
            "o": 0,
            "e": "ignored-unknown-field",
        },
        {
            "d": 4,
            "c": ["Heliod, Sun-Crowned", "Walking Ballista"],
            "t": ["Any lifelink source"],
            "i": "w",
            "s": ["Give Walking Ballista lifelink", "Ping to gain life and add counters"],
            "r": ["Infinite damage"],
            "b": 1,
            "o": 0,
        },
    ]


@pytest.fixture
def sample_catalog(sample_snapshot: list[dict[str, Any]]) -> DecodedCatalog:
    return decode_catalog(sample_snapshot)
