"""
Schemas de Notificação
"""
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class NotificationResponse(BaseModel):
    id: int
    usuario_id: str
    tipo: str
    titulo: str
    mensagem: str
    lida: bool
    link: Optional[str] = None
    email_enviado: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UnreadCountResponse(BaseModel):
    usuario_id: str
    nao_lidas: int


class MarkAllReadResponse(BaseModel):
    usuario_id: str
    atualizadas: int
