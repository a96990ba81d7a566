"""
Schemas dos painéis (valores derivados, calculados a cada leitura)
"""
from pydantic import BaseModel, Field


class AdminDashboard(BaseModel):
    aguardando_separacao: int = Field(..., description="Pedidos aguardando separação")
    em_separacao: int = Field(..., description="Pedidos em separação")
    embalado: int = Field(..., description="Pedidos embalados")
    enviados_hoje: int = Field(..., description="Pedidos enviados hoje (UTC)")
    total_produtos: int = Field(..., description="Produtos cadastrados no armazém")
    estoque_baixo: int = Field(..., description="Produtos no limite mínimo ou abaixo")


class SellerDashboard(BaseModel):
    total_produtos: int
    estoque_baixo: int
    pedidos_pendentes: int = Field(..., description="Pedidos ainda não enviados")
    pedidos_enviados_mes: int
    vendas_total_mes: float
