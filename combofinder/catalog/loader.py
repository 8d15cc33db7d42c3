"""
Catalog snapshot storage.

Downloads the compressed combo snapshot from the remote data service,
reads it (and optional per-card data) from disk, and hands out one
decoded, read-only catalog per process.
"""

import json
import logging
import math
from functools import lru_cache
from pathlib import Path
from typing import Any

import httpx

from combofinder.catalog.decoder import DecodedCatalog, decode_catalog
from combofinder.config import settings
from combofinder.models.card import normalize_card_name
from combofinder.models.color_identity import ColorIdentity, InvalidColorError
from combofinder.models.failure import CatalogUnavailableError

logger = logging.getLogger(__name__)

# Short vendor keys used in the per-card data file
VENDOR_KEYS = {"c": "cardkingdom", "t": "tcgplayer"}


async def download_catalog(
    url: str | None = None,
    output_path: Path | None = None,
) -> Path:
    """
    Download the latest combo snapshot.

    Args:
        url: Snapshot URL. Defaults to settings.catalog_url
        output_path: Where to save the file. Defaults to settings.catalog_path

    Returns:
        Path to downloaded file.

    Raises:
        httpx.HTTPError: If download fails
    """
    url = url or settings.catalog_url
    if output_path is None:
        output_path = settings.catalog_path

    output_path.parent.mkdir(parents=True, exist_ok=True)

    async with httpx.AsyncClient(timeout=30.0, follow_redirects=True) as client:
        async with client.stream("GET", url, timeout=300.0) as response:
            response.raise_for_status()
            with open(output_path, "wb") as f:
                async for chunk in response.aiter_bytes(8192):
                    f.write(chunk)

    logger.info("Saved combo snapshot from %s to %s", url, output_path)
    return output_path


def read_snapshot(path: Path | None = None) -> bytes:
    """
    Read raw snapshot bytes.

    Raises:
        CatalogUnavailableError: If the snapshot file doesn't exist or can't be read
    """
    if path is None:
        path = settings.catalog_path

    if not path.exists():
        raise CatalogUnavailableError(
            f"Combo snapshot not found at {path}. "
            "Run `python -m combofinder.jobs.download_catalog` first."
        )

    try:
        return path.read_bytes()
    except OSError as e:
        raise CatalogUnavailableError(f"Could not read combo snapshot at {path}: {e}") from e


def load_card_data(
    path: Path | None = None,
) -> tuple[dict[str, dict[str, float]], dict[str, ColorIdentity]]:
    """
    Load per-card prices and color identities.

    File format: {card name: {"p": {"c": cardkingdom, "t": tcgplayer}, "ci": "wu"}}

    Returns:
        (card_prices, color_lookup), both keyed by normalized card name.
        Two empty dicts if the file does not exist.

    Raises:
        CatalogUnavailableError: If the file exists but is unreadable, not JSON,
            or not a JSON object
    """
    if path is None:
        path = settings.card_data_path

    card_prices: dict[str, dict[str, float]] = {}
    color_lookup: dict[str, ColorIdentity] = {}

    if not path.exists():
        logger.info("No card data at %s; prices and deck colors unavailable", path)
        return card_prices, color_lookup

    try:
        with open(path, encoding="utf-8") as f:
            raw: Any = json.load(f)
    except (OSError, ValueError) as e:
        raise CatalogUnavailableError(f"Could not read card data at {path}: {e}") from e

    if not isinstance(raw, dict):
        raise CatalogUnavailableError(f"Card data at {path} must be a JSON object")

    for name, data in raw.items():
        if not isinstance(data, dict):
            logger.warning("Ignoring card data entry for %s: not an object", name)
            continue

        key = normalize_card_name(name)

        prices = data.get("p")
        if not isinstance(prices, dict):
            prices = {}
        card_prices[key] = {
            VENDOR_KEYS[short]: float(value)
            for short, value in prices.items()
            if short in VENDOR_KEYS and _is_price(value)
        }

        colors = data.get("ci")
        if isinstance(colors, str):
            try:
                color_lookup[key] = ColorIdentity(colors)
            except InvalidColorError:
                logger.warning("Ignoring invalid color identity %r for %s", colors, name)

    return card_prices, color_lookup


def _is_price(value: Any) -> bool:
    return (
        isinstance(value, int | float)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def load_catalog(
    snapshot_path: Path | None = None,
    card_data_path: Path | None = None,
    strict: bool | None = None,
) -> DecodedCatalog:
    """
    Read and decode the combo snapshot.

    Raises:
        CatalogUnavailableError: If the snapshot is missing or not a JSON array,
            or the card data file is corrupt
        CatalogDecodeError: In strict mode, for the first malformed entry
    """
    if strict is None:
        strict = settings.strict_decode

    card_prices, _ = load_card_data(card_data_path)
    return decode_catalog(
        read_snapshot(snapshot_path),
        strict=strict,
        card_prices=card_prices or None,
    )


@lru_cache(maxsize=1)
def get_catalog() -> DecodedCatalog:
    """
    Get the process-wide decoded catalog.

    Cached after the first successful load; failures are not cached.
    """
    return load_catalog()


@lru_cache(maxsize=1)
def get_color_lookup() -> dict[str, ColorIdentity]:
    """Get cached normalized card name -> color identity mapping."""
    _, color_lookup = load_card_data()
    return color_lookup
