from combofinder.catalog.decoder import DecodedCatalog, decode_catalog, decode_entry
from combofinder.catalog.loader import (
    download_catalog,
    get_catalog,
    get_color_lookup,
    load_card_data,
    load_catalog,
    read_snapshot,
)

__all__ = [
    "DecodedCatalog",
    "decode_catalog",
    "decode_entry",
    "download_catalog",
    "get_catalog",
    "get_color_lookup",
    "load_card_data",
    "load_catalog",
    "read_snapshot",
]
