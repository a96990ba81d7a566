"""
Routers da API
"""
from .sellers import router as sellers_router
from .products import router as products_router
from .orders import router as orders_router
from .notifications import router as notifications_router
from .dashboard import router as dashboard_router
from .email import router as email_router

__all__ = [
    "sellers_router",
    "products_router",
    "orders_router",
    "notifications_router",
    "dashboard_router",
    "email_router"
]
