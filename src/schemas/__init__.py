"""
Schemas Pydantic para validação
"""
from .seller import (
    SellerCreate,
    SellerUpdate,
    SellerResponse
)
from .product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    StockProductResponse,
    LocationUpdate
)
from .stock import (
    StockMovementCreate,
    StockMovementResponse,
    StockMovementResult
)
from .order import (
    CustomerData,
    OrderItemCreate,
    OrderCreate,
    StatusUpdate,
    OrderItemResponse,
    OrderHistoryResponse,
    OrderResponse,
    OrderDetailResponse
)
from .notification import (
    NotificationResponse,
    UnreadCountResponse,
    MarkAllReadResponse
)
from .dashboard import AdminDashboard, SellerDashboard
from .email import EmailRequest, EmailResponse
from .health import HealthResponse

__all__ = [
    # Seller
    "SellerCreate",
    "SellerUpdate",
    "SellerResponse",
    # Product
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "StockProductResponse",
    "LocationUpdate",
    # Stock
    "StockMovementCreate",
    "StockMovementResponse",
    "StockMovementResult",
    # Order
    "CustomerData",
    "OrderItemCreate",
    "OrderCreate",
    "StatusUpdate",
    "OrderItemResponse",
    "OrderHistoryResponse",
    "OrderResponse",
    "OrderDetailResponse",
    # Notification
    "NotificationResponse",
    "UnreadCountResponse",
    "MarkAllReadResponse",
    # Dashboard
    "AdminDashboard",
    "SellerDashboard",
    # Email
    "EmailRequest",
    "EmailResponse",
    "HealthResponse"
]
