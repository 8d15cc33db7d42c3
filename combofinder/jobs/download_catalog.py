"""
Download the combo catalog snapshot.

Run this job to refresh the local snapshot the combo finder matches against.
"""

import asyncio
import logging

from combofinder.catalog.decoder import decode_catalog
from combofinder.catalog.loader import download_catalog

logger = logging.getLogger(__name__)


async def run_download() -> None:
    """Download the snapshot and check that it decodes."""
    logger.info("Downloading combo catalog snapshot...")

    try:
        path = await download_catalog()
        logger.info("Downloaded combo catalog to %s", path)
    except Exception as e:
        logger.error("Failed to download combo catalog: %s", e)
        raise

    catalog = decode_catalog(path.read_bytes(), strict=False)
    if catalog.is_partial:
        logger.warning(
            "Snapshot has %d malformed entries; strict decoding will reject it",
            len(catalog.errors),
        )
    logger.info("Snapshot holds %d combos", len(catalog))


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_download())


if __name__ == "__main__":
    main()
