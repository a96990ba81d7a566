"""
Clientes para serviços externos
"""
from .email_client import email_client, EmailClient

__all__ = [
    "email_client",
    "EmailClient"
]
