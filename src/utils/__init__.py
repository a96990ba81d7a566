"""
Utilidades do serviço
"""
from .auth import get_current_user, require_admin, require_seller

__all__ = [
    "get_current_user",
    "require_admin",
    "require_seller"
]
