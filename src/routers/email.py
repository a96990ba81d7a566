"""
Router de Email (stub de envio)
"""
from fastapi import APIRouter, Depends

from ..clients import email_client
from ..schemas import EmailRequest, EmailResponse
from ..utils import get_current_user

router = APIRouter()


@router.post("/email/send", response_model=EmailResponse)
async def send_email(
    email_data: EmailRequest,
    current_user: dict = Depends(get_current_user)
):
    """
    Enviar email

    **Nota**: sem EMAIL_SERVICE_URL o envio é apenas simulado e registrado no log.
    """
    return await email_client.send(email_data.para, email_data.assunto, email_data.corpo)
