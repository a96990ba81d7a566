"""
Schemas do envio de email (stub)
"""
from pydantic import BaseModel, Field
from typing import Optional


class EmailRequest(BaseModel):
    para: str = Field(..., min_length=3, description="Destinatário")
    assunto: str = Field(..., description="Assunto")
    corpo: str = Field(..., description="Corpo da mensagem")


class EmailDetails(BaseModel):
    para: str
    assunto: str
    corpo_preview: str


class EmailResponse(BaseModel):
    success: bool
    message: str
    detalhes: Optional[EmailDetails] = None
