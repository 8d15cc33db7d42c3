from combofinder.api.combos import router as combos_router
from combofinder.api.health import router as health_router

__all__ = [
    "combos_router",
    "health_router",
]
