"""
Router dos painéis e health check
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from ..config import settings
from ..models import get_db
from ..schemas import AdminDashboard, SellerDashboard, HealthResponse
from ..services import dashboard as dashboard_service
from ..utils import require_admin, require_seller

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/dashboard/admin", response_model=AdminDashboard)
async def admin_dashboard(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """Contagem de pedidos por etapa e alertas de estoque do armazém"""
    return dashboard_service.admin_dashboard(db)


@router.get("/dashboard/seller", response_model=SellerDashboard)
async def seller_dashboard(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_seller)
):
    """Resumo do lojista: estoque, pedidos pendentes e vendas do mês"""
    return dashboard_service.seller_dashboard(db, current_user["user_id"])


@router.get("/health", response_model=HealthResponse)
async def health_check(db: Session = Depends(get_db)):
    """Health check com verificação da base de dados"""
    try:
        db.execute(text("SELECT 1"))
        db_status = "connected"
    except SQLAlchemyError as e:
        logger.error(f"Base de dados indisponível: {e}")
        db_status = "disconnected"

    return HealthResponse(
        status="healthy" if db_status == "connected" else "unhealthy",
        service=settings.APP_NAME,
        version=settings.APP_VERSION,
        database=db_status
    )
