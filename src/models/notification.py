"""
Modelo de Notificação
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from sqlalchemy.sql import func
from .database import Base


class Notification(Base):
    """
    Modelo de Notificação - endereçada a um lojista (seu id) ou ao
    canal do admin (Settings.ADMIN_CHANNEL)
    Só o campo lida é alterado depois da criação
    """

    __tablename__ = "notificacoes"

    id = Column(Integer, primary_key=True, index=True)
    usuario_id = Column(String(36), nullable=False, index=True)
    tipo = Column(String(50), nullable=False)
    titulo = Column(String(255), nullable=False)
    mensagem = Column(Text, nullable=False)
    lida = Column(Boolean, default=False, nullable=False, index=True)
    link = Column(String(255), nullable=True)
    email_enviado = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Notification(id={self.id}, usuario={self.usuario_id}, tipo={self.tipo}, lida={self.lida})>"
