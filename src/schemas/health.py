from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Schema para health check"""
    status: str = Field(..., description="Estado do serviço")
    service: str = Field(..., description="Nome do serviço")
    version: str = Field(..., description="Versão do serviço")
    database: str = Field(..., description="Estado da base de dados")

    class Config:
        json_schema_extra = {
            "example": {
                "status": "healthy",
                "service": "Atlas Fulfillment",
                "version": "1.0.0",
                "database": "connected"
            }
        }
