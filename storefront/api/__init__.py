# Store routers, mounted under /api
from .routes import store_routers

# Service routers, mounted at the root
from .routes import health_router

__all__ = ["store_routers", "health_router"]
