from pydantic import BaseModel, Field, field_validator
from typing import Optional, Literal
from datetime import datetime


class ProductCreate(BaseModel):
    nome: str = Field(..., min_length=1, max_length=255)
    sku: str = Field(..., min_length=1, max_length=100)
    categoria: Optional[str] = Field(None, max_length=100)
    descricao: Optional[str] = None
    peso_gramas: Optional[int] = Field(None, ge=0)
    imagem_url: Optional[str] = Field(None, max_length=500)
    quantidade_atual: int = Field(0, ge=0, description="Estoque inicial (gera uma entrada)")
    quantidade_minima: int = Field(1, ge=0, description="Limite de estoque baixo")


class ProductUpdate(BaseModel):
    """A quantidade atual não é editável aqui: use uma movimentação"""
    nome: Optional[str] = Field(None, min_length=1, max_length=255)
    sku: Optional[str] = Field(None, min_length=1, max_length=100)
    categoria: Optional[str] = Field(None, max_length=100)
    descricao: Optional[str] = None
    peso_gramas: Optional[int] = Field(None, ge=0)
    imagem_url: Optional[str] = Field(None, max_length=500)
    quantidade_minima: Optional[int] = Field(None, ge=0)
    status: Optional[Literal["ativo", "inativo"]] = None

    @field_validator("nome", "sku", "quantidade_minima", "status")
    @classmethod
    def validate_not_null(cls, v):
        """Campos obrigatórios podem ser omitidos, mas não enviados como null"""
        if v is None:
            raise ValueError("Este campo não pode ser nulo")
        return v


class LocationUpdate(BaseModel):
    localizacao: str = Field(..., max_length=100, description="Posição no armazém (texto livre)")

    class Config:
        json_schema_extra = {"example": {"localizacao": "A-03-2"}}


class ProductResponse(BaseModel):
    id: int
    lojista_id: str
    nome: str
    sku: str
    categoria: Optional[str] = None
    descricao: Optional[str] = None
    peso_gramas: Optional[int] = None
    imagem_url: Optional[str] = None
    quantidade_atual: int
    quantidade_minima: int
    localizacao: Optional[str] = None
    status: str
    estoque_baixo: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class StockProductResponse(ProductResponse):
    """Linha da visão de estoque completo do admin"""
    lojista_nome: str
    situacao: Literal["sem_estoque", "estoque_baixo", "sem_localizacao", "ok"]
