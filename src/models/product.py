"""
Modelo de Produto em estoque
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from .database import Base


class Product(Base):
    """
    Modelo de Produto - Item físico de um lojista guardado no armazém
    O SKU não é único no banco; a política fica em Settings.SKU_UNIQUENESS
    """

    __tablename__ = "produtos_estoque"

    id = Column(Integer, primary_key=True, index=True)
    lojista_id = Column(String(36), ForeignKey("lojistas.id"), nullable=False, index=True)
    nome = Column(String(255), nullable=False)
    sku = Column(String(100), nullable=False, index=True)
    categoria = Column(String(100), nullable=True)
    descricao = Column(Text, nullable=True)
    peso_gramas = Column(Integer, nullable=True)
    imagem_url = Column(String(500), nullable=True)

    # Só muda através de movimentações (ver services.stock)
    quantidade_atual = Column(Integer, nullable=False, default=0)
    quantidade_minima = Column(Integer, nullable=False, default=1)

    # Posição física no armazém, definida pelo admin
    localizacao = Column(String(100), nullable=True)
    status = Column(String(20), nullable=False, default="ativo")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    lojista = relationship("Seller")

    @property
    def estoque_baixo(self) -> bool:
        return self.quantidade_atual <= self.quantidade_minima

    def __repr__(self):
        return f"<Product(id={self.id}, sku={self.sku}, quantidade_atual={self.quantidade_atual})>"
