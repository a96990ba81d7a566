"""
Modelos de Pedido (Order) e Item de Pedido (OrderItem)
"""
import enum

from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey, Numeric, JSON, CheckConstraint
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from .database import Base


class OrderStatus(str, enum.Enum):
    """Estados do pedido no fluxo separação → embalagem → envio"""

    AWAITING_SEPARATION = "aguardando_separacao"
    IN_SEPARATION = "em_separacao"
    PACKAGED = "embalado"
    SHIPPED = "enviado"
    CANCELLED = "cancelado"


TERMINAL_STATUSES = frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED})


class Order(Base):
    """
    Modelo de Pedido - Venda de marketplace lançada por um lojista
    total_pedido é fixado na criação e nunca recalculado
    """

    __tablename__ = "pedidos"

    id = Column(Integer, primary_key=True, index=True)
    lojista_id = Column(String(36), ForeignKey("lojistas.id"), nullable=False, index=True)
    numero_pedido_externo = Column(String(100), nullable=True)
    marketplace_origem = Column(String(100), nullable=False)
    status = Column(String(30), nullable=False, default=OrderStatus.AWAITING_SEPARATION.value, index=True)

    # Snapshot do cliente (schemas.order.CustomerData serializado)
    dados_cliente = Column(JSON, nullable=False)

    total_pedido = Column(Numeric(12, 2), nullable=False)
    comissao_calculada = Column(Numeric(12, 2), nullable=True)

    # Timestamps de cada transição
    data_criacao = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    data_separacao = Column(DateTime(timezone=True), nullable=True)
    data_embalagem = Column(DateTime(timezone=True), nullable=True)
    data_envio = Column(DateTime(timezone=True), nullable=True)

    codigo_rastreio = Column(String(100), nullable=True)
    transportadora = Column(String(100), nullable=True)

    __table_args__ = (
        CheckConstraint(
            "status IN ('aguardando_separacao', 'em_separacao', 'embalado', 'enviado', 'cancelado')",
            name="check_pedido_status"
        ),
    )

    lojista = relationship("Seller")
    itens = relationship("OrderItem", back_populates="pedido", order_by="OrderItem.id")
    historico = relationship("OrderHistory", order_by="OrderHistory.id")

    def __repr__(self):
        return f"<Order(id={self.id}, lojista={self.lojista_id}, status={self.status}, total={self.total_pedido})>"


class OrderItem(Base):
    """Item de Pedido - preço unitário copiado no momento da venda"""

    __tablename__ = "itens_pedido"

    id = Column(Integer, primary_key=True, index=True)
    pedido_id = Column(Integer, ForeignKey("pedidos.id", ondelete="CASCADE"), nullable=True, index=True)
    produto_id = Column(Integer, ForeignKey("produtos_estoque.id"), nullable=True, index=True)
    quantidade = Column(Integer, nullable=False)
    preco_unitario = Column(Numeric(12, 2), nullable=False)

    pedido = relationship("Order", back_populates="itens")
    produto = relationship("Product")

    def __repr__(self):
        return f"<OrderItem(id={self.id}, pedido={self.pedido_id}, produto={self.produto_id}, quantidade={self.quantidade})>"
