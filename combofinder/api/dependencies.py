"""
Shared FastAPI dependencies.

Endpoints receive loader callables rather than loaded data so that a
catalog failure can be classified inside the endpoint instead of escaping
as a raw 500.
"""

from collections.abc import Callable, Mapping

from combofinder.catalog.decoder import DecodedCatalog
from combofinder.catalog.loader import get_catalog, get_color_lookup
from combofinder.models.color_identity import ColorIdentity

CatalogLoader = Callable[[], DecodedCatalog]
ColorLookupLoader = Callable[[], Mapping[str, ColorIdentity]]


def get_catalog_loader() -> CatalogLoader:
    """Loader for the process-wide decoded catalog."""
    return get_catalog


def get_color_lookup_loader() -> ColorLookupLoader:
    """Loader for the normalized card name -> color identity mapping."""
    return get_color_lookup
