"""
Modelo de Histórico de Pedido
Uma entrada por transição de status; nunca é alterada
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.sql import func
from .database import Base


class OrderHistory(Base):
    """Modelo de Histórico - trilha de auditoria das transições"""

    __tablename__ = "historico_pedido"

    id = Column(Integer, primary_key=True, index=True)
    pedido_id = Column(Integer, ForeignKey("pedidos.id", ondelete="CASCADE"), nullable=True, index=True)
    # Nulo apenas na criação do pedido
    status_anterior = Column(String(30), nullable=True)
    status_novo = Column(String(30), nullable=False)
    observacao = Column(Text, nullable=True)
    responsavel = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<OrderHistory(pedido={self.pedido_id}, {self.status_anterior} -> {self.status_novo})>"
