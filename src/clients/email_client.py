"""
Cliente de envio de email

Sem EMAIL_SERVICE_URL configurado apenas registra a mensagem no log e
devolve sucesso (simulação). Com a URL configurada encaminha via HTTP.
"""
import httpx
from typing import Optional, Dict, Any
import logging
from ..config import settings

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 100


class EmailClient:
    """Cliente para o serviço de email"""

    def __init__(self, base_url: Optional[str] = None):
        self.base_url = (base_url if base_url is not None else settings.EMAIL_SERVICE_URL).rstrip('/')
        self.timeout = 10.0

    async def send(self, para: str, assunto: str, corpo: str) -> Dict[str, Any]:
        """
        Envia (ou simula) um email

        Args:
            para: destinatário
            assunto: assunto
            corpo: corpo da mensagem

        Returns:
            Dict com success, message e detalhes (ou error)
        """
        if not self.base_url:
            logger.info(f"Enviando email para: {para}")
            logger.info(f"Assunto: {assunto}")
            logger.debug(f"Corpo: {corpo}")
            return {
                "success": True,
                "message": "Email simulado enviado com sucesso",
                "detalhes": {
                    "para": para,
                    "assunto": assunto,
                    "corpo_preview": corpo[:PREVIEW_LENGTH]
                }
            }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.base_url,
                    json={"para": para, "assunto": assunto, "corpo": corpo}
                )

                if response.status_code == 200:
                    logger.info(f"Email para {para} encaminhado ao serviço de email")
                    return response.json()

                logger.error(
                    f"Erro ao enviar email para {para}: "
                    f"{response.status_code} - {response.text}"
                )
                return {"success": False, "message": f"Serviço de email respondeu {response.status_code}"}

        except httpx.TimeoutException:
            logger.error(f"Timeout ao enviar email para {para}")
            return {"success": False, "message": "Timeout no serviço de email"}
        except httpx.RequestError as e:
            logger.error(f"Erro de conexão com o serviço de email: {str(e)}")
            return {"success": False, "message": f"Erro de conexão: {str(e)}"}


# Instância global do cliente
email_client = EmailClient()
