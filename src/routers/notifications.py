"""
Router de Notificações
Cada usuário lê o próprio canal: o admin lê o canal do armazém
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from ..models import get_db
from ..schemas import NotificationResponse, UnreadCountResponse, MarkAllReadResponse
from ..services import notifications as notification_service
from ..utils import get_current_user

router = APIRouter()


@router.get("/notifications", response_model=List[NotificationResponse])
async def list_notifications(
    limit: Optional[int] = Query(None, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    """Notificações do canal do usuário, mais recentes primeiro"""
    channel = notification_service.channel_for(current_user)
    return notification_service.list_notifications(db, channel, limit)


@router.get("/notifications/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    channel = notification_service.channel_for(current_user)
    return UnreadCountResponse(
        usuario_id=channel,
        nao_lidas=notification_service.unread_count(db, channel)
    )


@router.patch("/notifications/read-all", response_model=MarkAllReadResponse)
async def mark_all_as_read(
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    """Marcar todas as notificações não lidas do canal como lidas"""
    channel = notification_service.channel_for(current_user)
    updated = notification_service.mark_all_as_read(db, channel)
    return MarkAllReadResponse(usuario_id=channel, atualizadas=updated)


@router.patch("/notifications/{notification_id}/read", response_model=NotificationResponse)
async def mark_as_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    channel = notification_service.channel_for(current_user)
    return notification_service.mark_as_read(db, notification_id, channel)
