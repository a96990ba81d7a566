"""
Schemas de Lojista (Seller)
"""
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime


class SellerBase(BaseModel):
    """Schema base de Lojista"""
    nome_fantasia: str = Field(..., min_length=2, max_length=255, description="Nome fantasia da loja")
    nome_contato: Optional[str] = Field(None, max_length=255, description="Pessoa de contato")
    email: EmailStr = Field(..., description="Email do lojista")
    telefone: str = Field(..., min_length=8, max_length=20, description="Telefone")
    cnpj: Optional[str] = Field(None, max_length=20, description="CNPJ")
    comissao_percentual: float = Field(15.0, ge=0, le=100, description="Comissão da plataforma (%)")
    endereco_completo: Optional[str] = Field(None, description="Endereço")
    observacoes: Optional[str] = Field(None, description="Observações internas")


class SellerCreate(SellerBase):
    """Schema para criar lojista"""
    id: Optional[str] = Field(None, max_length=36, description="ID do usuário no provedor de autenticação (opcional)")

    class Config:
        json_schema_extra = {
            "example": {
                "nome_fantasia": "Loja do João",
                "nome_contato": "João Silva",
                "email": "joao@lojadojoao.com.br",
                "telefone": "11987654321",
                "cnpj": "12.345.678/0001-90",
                "comissao_percentual": 15.0,
                "endereco_completo": "Rua das Flores, 123 - São Paulo/SP"
            }
        }


class SellerUpdate(BaseModel):
    """Schema para atualizar lojista"""
    nome_fantasia: Optional[str] = Field(None, min_length=2, max_length=255)
    nome_contato: Optional[str] = Field(None, max_length=255)
    email: Optional[EmailStr] = None
    telefone: Optional[str] = Field(None, min_length=8, max_length=20)
    cnpj: Optional[str] = Field(None, max_length=20)
    comissao_percentual: Optional[float] = Field(None, ge=0, le=100)
    endereco_completo: Optional[str] = None
    observacoes: Optional[str] = None
    ativo: Optional[bool] = None

    @field_validator("nome_fantasia", "email", "telefone", "comissao_percentual", "ativo")
    @classmethod
    def validate_not_null(cls, v):
        """Campos obrigatórios podem ser omitidos, mas não enviados como null"""
        if v is None:
            raise ValueError("Este campo não pode ser nulo")
        return v


class SellerResponse(SellerBase):
    """Schema de resposta de lojista"""
    id: str = Field(..., description="ID do lojista")
    ativo: bool = Field(..., description="Lojista ativo")
    created_at: Optional[datetime] = Field(None, description="Data de cadastro")

    class Config:
        from_attributes = True
