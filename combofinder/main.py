import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from combofinder.api import combos_router, health_router
from combofinder.catalog.loader import get_catalog
from combofinder.config import settings
from combofinder.models.failure import KnownError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Warm the catalog cache on startup; /ready reports a failed load."""
    try:
        catalog = get_catalog()
        logger.info("Combo catalog ready with %d combos", len(catalog))
    except KnownError as e:
        logger.warning("Combo catalog not loaded at startup: %s", e.detail or e.message)
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("combofinder"),
    debug=settings.debug,
    lifespan=lifespan,
)

app.include_router(combos_router)
app.include_router(health_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
