"""
Notificação de alterações (push-invalidate)
"""
from .change_feed import change_feed, ChangeEvent, ChangeOperation, ChangeFeed

__all__ = [
    "change_feed",
    "ChangeEvent",
    "ChangeOperation",
    "ChangeFeed"
]
