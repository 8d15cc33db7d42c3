"""
Health check endpoints.

Provides liveness and readiness checks; readiness requires a loadable
combo catalog.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from combofinder.api.dependencies import CatalogLoader, get_catalog_loader
from combofinder.models.failure import KnownError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check result; catalog and combos are only set by /ready."""

    status: str
    catalog: str | None = None
    combos: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness check. Never touches the catalog."""
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    load_catalog: Annotated[CatalogLoader, Depends(get_catalog_loader)],
) -> HealthResponse:
    """
    Readiness check.

    Returns ready if the combo catalog can be loaded. Returns 503 otherwise.
    """
    try:
        catalog = load_catalog()
    except KnownError as e:
        logger.warning("Catalog not ready: %s", e.detail or e.message)
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", catalog="unavailable")

    state = "partial" if catalog.is_partial else "loaded"
    return HealthResponse(status="ready", catalog=state, combos=len(catalog))
