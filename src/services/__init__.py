"""
Regras de negócio do armazém
"""
from .errors import (
    DomainError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
    InsufficientStockError,
    InvalidTransitionError,
    DuplicateSkuError
)
from . import order_lifecycle, stock, notifications, dashboard

__all__ = [
    "DomainError",
    "NotFoundError",
    "PermissionDeniedError",
    "ValidationError",
    "InsufficientStockError",
    "InvalidTransitionError",
    "DuplicateSkuError",
    "order_lifecycle",
    "stock",
    "notifications",
    "dashboard"
]
