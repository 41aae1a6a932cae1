"""Route modules."""

from .health import router as health_router
from .pets import router as pets_router
from .public import router as public_router
from .users import router as users_router

__all__ = ["health_router", "pets_router", "public_router", "users_router"]
