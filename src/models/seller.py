"""
Modelo de Lojista (Seller)
"""
import uuid

from sqlalchemy import Column, String, Boolean, DateTime, Numeric, Text
from sqlalchemy.sql import func
from .database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class Seller(Base):
    """Modelo de Lojista - Vendedor independente que usa o armazém"""

    __tablename__ = "lojistas"

    # O id coincide com o id do usuário no provedor de autenticação
    id = Column(String(36), primary_key=True, default=_new_id)
    nome_fantasia = Column(String(255), nullable=False)
    nome_contato = Column(String(255), nullable=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    telefone = Column(String(20), nullable=False)
    cnpj = Column(String(20), nullable=True)
    comissao_percentual = Column(Numeric(5, 2), nullable=False, default=15)
    endereco_completo = Column(Text, nullable=True)
    observacoes = Column(Text, nullable=True)
    ativo = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Seller(id={self.id}, nome_fantasia={self.nome_fantasia}, email={self.email})>"
