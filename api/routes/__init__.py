"""API route modules."""

from .health_routes import router as health_router
from .persons_routes import router as persons_router

__all__ = [
    "health_router",
    "persons_router",
]
