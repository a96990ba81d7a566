"""
Modelos da base de dados
"""
from .database import Base, get_db, engine, SessionLocal
from .seller import Seller
from .product import Product
from .stock_movement import StockMovement
from .order import Order, OrderItem, OrderStatus, TERMINAL_STATUSES
from .order_history import OrderHistory
from .notification import Notification

__all__ = [
    "Base",
    "get_db",
    "engine",
    "SessionLocal",
    "Seller",
    "Product",
    "StockMovement",
    "Order",
    "OrderItem",
    "OrderStatus",
    "TERMINAL_STATUSES",
    "OrderHistory",
    "Notification",
]
