"""
Schemas de Pedido (Order)
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from ..models.order import OrderStatus
from .product import ProductResponse


class CustomerData(BaseModel):
    """Snapshot do cliente final, embutido no pedido"""
    nome: str = Field(..., min_length=1, max_length=255)
    cpf_cnpj: Optional[str] = Field(None, max_length=20)
    telefone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    cep: Optional[str] = Field(None, max_length=10)
    endereco: Optional[str] = None
    numero: Optional[str] = Field(None, max_length=20)
    complemento: Optional[str] = None
    bairro: Optional[str] = None
    cidade: Optional[str] = None
    estado: Optional[str] = Field(None, max_length=2)


class OrderItemCreate(BaseModel):
    produto_id: int = Field(..., gt=0)
    quantidade: int = Field(..., gt=0)
    preco_unitario: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)


class OrderCreate(BaseModel):
    """Schema para lançar uma venda"""
    numero_pedido_externo: Optional[str] = Field(None, max_length=100)
    marketplace_origem: str = Field("Mercado Livre", min_length=1, max_length=100)
    dados_cliente: CustomerData
    itens: List[OrderItemCreate] = Field(..., min_length=1)

    class Config:
        json_schema_extra = {
            "example": {
                "numero_pedido_externo": "MLB-2000123456",
                "marketplace_origem": "Mercado Livre",
                "dados_cliente": {
                    "nome": "Maria Souza",
                    "telefone": "11912345678",
                    "cep": "01310-100",
                    "endereco": "Av. Paulista",
                    "numero": "1000",
                    "cidade": "São Paulo",
                    "estado": "SP"
                },
                "itens": [
                    {"produto_id": 1, "quantidade": 2, "preco_unitario": "10.00"}
                ]
            }
        }


class StatusUpdate(BaseModel):
    """Avanço de status; rastreio só é aplicado no envio"""
    status: OrderStatus
    codigo_rastreio: Optional[str] = Field(None, max_length=100)
    transportadora: Optional[str] = Field(None, max_length=100)

    class Config:
        json_schema_extra = {
            "example": {
                "status": "enviado",
                "codigo_rastreio": "BR123456789BR",
                "transportadora": "Correios"
            }
        }


class OrderItemResponse(BaseModel):
    id: int
    pedido_id: Optional[int] = None
    produto_id: Optional[int] = None
    quantidade: int
    preco_unitario: float
    produto: Optional[ProductResponse] = None

    class Config:
        from_attributes = True


class OrderHistoryResponse(BaseModel):
    id: int
    pedido_id: Optional[int] = None
    status_anterior: Optional[str] = None
    status_novo: str
    observacao: Optional[str] = None
    responsavel: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    id: int
    lojista_id: str
    numero_pedido_externo: Optional[str] = None
    marketplace_origem: str
    status: OrderStatus
    dados_cliente: CustomerData
    total_pedido: float
    comissao_calculada: Optional[float] = None
    data_criacao: Optional[datetime] = None
    data_separacao: Optional[datetime] = None
    data_embalagem: Optional[datetime] = None
    data_envio: Optional[datetime] = None
    codigo_rastreio: Optional[str] = None
    transportadora: Optional[str] = None

    class Config:
        from_attributes = True


class OrderDetailResponse(OrderResponse):
    """Pedido com itens, produtos e histórico"""
    lojista_nome: Optional[str] = None
    itens: List[OrderItemResponse] = []
    historico: List[OrderHistoryResponse] = []
