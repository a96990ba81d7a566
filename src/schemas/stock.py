"""
Schemas de Movimentação de Estoque
"""
from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime

from .product import ProductResponse

MovementType = Literal["entrada", "saida", "ajuste"]


class StockMovementCreate(BaseModel):
    """
    Movimentação direta de estoque

    - **entrada**: soma a quantidade ao estoque atual
    - **saida**: subtrai (rejeitada se deixar o estoque negativo)
    - **ajuste**: define o estoque atual com o valor informado
    """
    tipo: MovementType
    quantidade: int = Field(..., ge=0)
    motivo: Optional[str] = Field(None, max_length=255)
    observacao: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "tipo": "entrada",
                "quantidade": 10,
                "motivo": "compra",
                "observacao": "Reposição do fornecedor"
            }
        }


class StockMovementResponse(BaseModel):
    id: int
    produto_id: Optional[int] = None
    pedido_id: Optional[int] = None
    tipo: str
    quantidade: int
    motivo: Optional[str] = None
    observacao: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class StockMovementResult(BaseModel):
    quantidade_anterior: int
    produto: ProductResponse
    movimentacao: StockMovementResponse
