"""
Modelo de Movimentação de Estoque
Livro-razão append-only: nunca é atualizado nem apagado
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, CheckConstraint
from sqlalchemy.sql import func
from .database import Base


class StockMovement(Base):
    """Modelo de Movimentação - Uma entrada por alteração de quantidade"""

    __tablename__ = "movimentacoes_estoque"

    id = Column(Integer, primary_key=True, index=True)
    produto_id = Column(Integer, ForeignKey("produtos_estoque.id"), nullable=True, index=True)
    pedido_id = Column(Integer, ForeignKey("pedidos.id"), nullable=True, index=True)

    # entrada soma, saida subtrai, ajuste define o valor absoluto
    tipo = Column(String(10), nullable=False)
    quantidade = Column(Integer, nullable=False)
    motivo = Column(String(255), nullable=True)
    observacao = Column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint("tipo IN ('entrada', 'saida', 'ajuste')", name="check_movimentacao_tipo"),
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<StockMovement(id={self.id}, produto={self.produto_id}, tipo={self.tipo}, quantidade={self.quantidade})>"
