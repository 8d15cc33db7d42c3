"""
Catalog snapshot decoder.

Expands the compact combo snapshot (short keys, delimited card strings,
0/1 flags) into immutable ComboRecords. Decoding is pure: the same snapshot
always yields the same records, in snapshot order.

Entry keys:
    d: id, c: cards, t: templates, i: color identity,
    p/s/r: prerequisites/steps/results, x: vendor prices,
    b: banned flag, o: spoiler flag

Unknown keys are ignored.
"""

import json
import logging
import math
import re
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from combofinder.models.card import (
    CardRequirement,
    Requirement,
    TemplateRequirement,
    normalize_card_name,
)
from combofinder.models.color_identity import ColorIdentity, InvalidColorError
from combofinder.models.combo import VENDORS, CardGrouping, ComboRecord, SpellbookList
from combofinder.models.failure import CatalogDecodeError, CatalogUnavailableError

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("d", "c", "i")

TOKEN_SEPARATOR = "|"

# "2 Sol Ring" or "2x Sol Ring"
# Groups: (quantity, name)
QUANTITY_PREFIX = re.compile(r"^(\d{1,3})x?\s+(.+)$", re.IGNORECASE)

CardPrices = Mapping[str, Mapping[str, float]]


@dataclass(frozen=True)
class DecodedCatalog:
    """
    Read-only handle over a decoded snapshot.

    Attributes:
        combos: Records in snapshot order
        errors: Entries skipped in lenient mode
    """

    combos: tuple[ComboRecord, ...] = ()
    errors: tuple[CatalogDecodeError, ...] = ()

    def __len__(self) -> int:
        return len(self.combos)

    def __iter__(self) -> Iterator[ComboRecord]:
        return iter(self.combos)

    @property
    def is_partial(self) -> bool:
        """True if any entry was skipped while decoding."""
        return bool(self.errors)


def decode_catalog(
    snapshot: str | bytes | Sequence[Mapping[str, Any]],
    *,
    strict: bool = True,
    card_prices: CardPrices | None = None,
) -> DecodedCatalog:
    """
    Decode a compact catalog snapshot.

    Args:
        snapshot: JSON text/bytes of the snapshot, or the already-parsed entry list
        strict: Raise on the first malformed entry (default). When False,
            malformed entries are skipped, logged and kept on `errors`.
        card_prices: Per-card vendor prices used for entries without "x"

    Returns:
        DecodedCatalog with records in snapshot order

    Raises:
        CatalogUnavailableError: If the snapshot is not a JSON array
        CatalogDecodeError: In strict mode, for the first malformed entry
    """
    entries = _load_entries(snapshot)

    combos: list[ComboRecord] = []
    errors: list[CatalogDecodeError] = []

    for index, entry in enumerate(entries):
        try:
            combos.append(decode_entry(entry, index, card_prices))
        except CatalogDecodeError as e:
            if strict:
                raise
            logger.warning("Skipping catalog entry %d: %s", index, e.reason)
            errors.append(e)

    logger.info(
        "Decoded %d combos from catalog snapshot (%d skipped)",
        len(combos),
        len(errors),
    )

    return DecodedCatalog(combos=tuple(combos), errors=tuple(errors))


def decode_entry(
    entry: Any,
    index: int,
    card_prices: CardPrices | None = None,
) -> ComboRecord:
    """
    Decode one snapshot entry into a ComboRecord.

    Raises:
        CatalogDecodeError: If a required key is missing or a field is malformed
    """
    if not isinstance(entry, Mapping):
        raise CatalogDecodeError(index, f"expected an object, got {type(entry).__name__}")

    raw_id = entry.get("d")
    for key in REQUIRED_KEYS:
        if key not in entry or entry[key] is None:
            raise CatalogDecodeError(index, f"missing required field {key!r}", raw_id)

    combo_id = _parse_id(raw_id, index)

    requirements: list[Requirement] = list(_parse_cards(entry["c"], index, combo_id))
    requirements.extend(_parse_templates(entry.get("t"), index, combo_id))
    if not requirements:
        raise CatalogDecodeError(index, "combo has no cards or templates", combo_id)
    cards = CardGrouping(tuple(requirements))

    raw_colors = entry["i"]
    if not isinstance(raw_colors, str):
        raise CatalogDecodeError(index, "color identity must be a string", combo_id)
    try:
        color_identity = ColorIdentity(raw_colors)
    except InvalidColorError as e:
        raise CatalogDecodeError(index, str(e), combo_id) from e

    prices = _parse_prices(entry.get("x"), cards, card_prices, index, combo_id)

    return ComboRecord(
        id=combo_id,
        cards=cards,
        color_identity=color_identity,
        prerequisites=_parse_list(entry.get("p"), "p", index, combo_id),
        steps=_parse_list(entry.get("s"), "s", index, combo_id),
        results=_parse_list(entry.get("r"), "r", index, combo_id),
        prices=prices,
        has_banned_card=_parse_flag(entry.get("b")),
        has_spoiled_card=_parse_flag(entry.get("o")),
    )


def _load_entries(snapshot: str | bytes | Sequence[Mapping[str, Any]]) -> Sequence[Any]:
    if isinstance(snapshot, str | bytes):
        try:
            snapshot = json.loads(snapshot)
        except json.JSONDecodeError as e:
            raise CatalogUnavailableError(f"Catalog snapshot is not valid JSON: {e}") from e

    if not isinstance(snapshot, Sequence) or isinstance(snapshot, str | bytes):
        raise CatalogUnavailableError("Catalog snapshot must be a JSON array")

    return snapshot


def _parse_id(raw_id: Any, index: int) -> int:
    if isinstance(raw_id, bool):
        raise CatalogDecodeError(index, "identifier must be an integer", raw_id)
    if isinstance(raw_id, int):
        return raw_id
    if isinstance(raw_id, str) and raw_id.strip().isdigit():
        return int(raw_id.strip())
    raise CatalogDecodeError(index, f"identifier must be an integer, got {raw_id!r}", raw_id)


def _split_tokens(raw: Any, field_name: str, index: int, combo_id: int) -> list[str]:
    if isinstance(raw, str):
        tokens = raw.split(TOKEN_SEPARATOR) if raw.strip() else []
    elif isinstance(raw, list | tuple):
        tokens = list(raw)
    else:
        raise CatalogDecodeError(
            index, f"field {field_name!r} must be a string or list", combo_id
        )

    result: list[str] = []
    for token in tokens:
        if not isinstance(token, str):
            raise CatalogDecodeError(index, f"non-text entry in {field_name!r}", combo_id)
        result.append(token)
    return result


def _parse_quantity(token: str, field_name: str, index: int, combo_id: int) -> tuple[int, str]:
    text = token.strip()
    if not text:
        raise CatalogDecodeError(index, f"empty entry in {field_name!r}", combo_id)

    match = QUANTITY_PREFIX.match(text)
    if match is None:
        return 1, text

    quantity = int(match.group(1))
    name = match.group(2).strip()
    if quantity < 1:
        raise CatalogDecodeError(index, f"quantity for {name!r} must be positive", combo_id)
    return quantity, name


def _parse_cards(raw: Any, index: int, combo_id: int) -> list[CardRequirement]:
    # Duplicate tokens aggregate; first occurrence fixes the position
    quantities: dict[str, int] = {}
    display_names: dict[str, str] = {}
    for token in _split_tokens(raw, "c", index, combo_id):
        quantity, name = _parse_quantity(token, "c", index, combo_id)
        key = normalize_card_name(name)
        if key not in quantities:
            display_names[key] = name
        quantities[key] = quantities.get(key, 0) + quantity

    return [CardRequirement(display_names[key], qty) for key, qty in quantities.items()]


def _parse_templates(raw: Any, index: int, combo_id: int) -> list[TemplateRequirement]:
    if raw is None:
        return []
    templates: list[TemplateRequirement] = []
    for token in _split_tokens(raw, "t", index, combo_id):
        quantity, description = _parse_quantity(token, "t", index, combo_id)
        templates.append(TemplateRequirement(description, quantity))
    return templates


def _parse_list(raw: Any, field_name: str, index: int, combo_id: int) -> SpellbookList:
    if raw is None or isinstance(raw, str):
        return SpellbookList.create(raw)
    if isinstance(raw, list | tuple) and all(isinstance(item, str) for item in raw):
        return SpellbookList.create(list(raw))
    raise CatalogDecodeError(index, f"field {field_name!r} must be text", combo_id)


def _parse_prices(
    raw: Any,
    cards: CardGrouping,
    card_prices: CardPrices | None,
    index: int,
    combo_id: int,
) -> Mapping[str, float]:
    if raw is None:
        if card_prices is None:
            return MappingProxyType({})
        return MappingProxyType(
            {vendor: cards.total_price(card_prices, vendor) for vendor in VENDORS}
        )

    if not isinstance(raw, Mapping):
        raise CatalogDecodeError(index, "field 'x' must be an object", combo_id)

    prices: dict[str, float] = {}
    for vendor, value in raw.items():
        if isinstance(value, bool) or not isinstance(value, int | float):
            raise CatalogDecodeError(index, f"price for {vendor!r} must be numeric", combo_id)
        if not math.isfinite(value):
            raise CatalogDecodeError(index, f"price for {vendor!r} must be finite", combo_id)
        prices[str(vendor)] = float(value)
    return MappingProxyType(prices)


def _parse_flag(raw: Any) -> bool:
    return raw in (1, "1")
