from .products import products_router
from .reviews import reviews_router
from .categories import categories_router
from .offers import offers_router
from .health import health_router

store_routers = [
    ("products", products_router),
    ("reviews", reviews_router),
    ("categories", categories_router),
    ("offers", offers_router),
]

__all__ = ["store_routers", "health_router"]
