"""
Serviço de notificações

As notificações são gravadas na mesma transação da operação que as dispara;
estas funções só adicionam à sessão, quem chama faz o commit.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..config import settings
from ..models import Notification, Product
from ..realtime import change_feed, ChangeOperation
from .errors import NotFoundError, PermissionDeniedError

logger = logging.getLogger(__name__)


def channel_for(current_user: dict) -> str:
    """Canal de notificações do usuário: o canal do admin ou o id do lojista"""
    if current_user.get("is_admin"):
        return settings.ADMIN_CHANNEL

    channel = str(current_user.get("user_id"))
    if channel == settings.ADMIN_CHANNEL:
        raise PermissionDeniedError("O canal do admin é exclusivo do administrador")
    return channel


def create_notification(
    db: Session,
    usuario_id: str,
    tipo: str,
    titulo: str,
    mensagem: str,
    link: Optional[str] = None
) -> Notification:
    notification = Notification(
        usuario_id=usuario_id,
        tipo=tipo,
        titulo=titulo,
        mensagem=mensagem,
        link=link,
        lida=False,
        email_enviado=False
    )
    db.add(notification)
    return notification


def notify_low_stock(db: Session, product: Product) -> Notification:
    return create_notification(
        db,
        usuario_id=product.lojista_id,
        tipo="estoque_baixo",
        titulo="Estoque Baixo",
        mensagem=(
            f"O produto {product.nome} (SKU {product.sku}) está com "
            f"{product.quantidade_atual} unidade(s); mínimo {product.quantidade_minima}"
        ),
        link=f"/lojista/produtos/{product.id}"
    )


def list_notifications(db: Session, channel: str, limit: Optional[int] = None) -> List[Notification]:
    return (
        db.query(Notification)
        .filter(Notification.usuario_id == channel)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(limit or settings.NOTIFICATIONS_LIMIT)
        .all()
    )


def unread_count(db: Session, channel: str) -> int:
    return db.query(Notification).filter(
        Notification.usuario_id == channel,
        Notification.lida == False  # noqa: E712
    ).count()


def mark_as_read(db: Session, notification_id: int, channel: str) -> Notification:
    """Marca uma notificação do canal como lida"""
    notification = db.query(Notification).filter(Notification.id == notification_id).first()
    if not notification:
        raise NotFoundError("Notificação não encontrada")
    if notification.usuario_id != channel:
        raise PermissionDeniedError("Esta notificação pertence a outro canal")

    if not notification.lida:
        notification.lida = True
        db.commit()
        db.refresh(notification)
    return notification


def mark_all_as_read(db: Session, channel: str) -> int:
    """Marca como lidas todas as notificações não lidas do canal"""
    unread = db.query(Notification.id).filter(
        Notification.usuario_id == channel,
        Notification.lida == False  # noqa: E712
    ).all()
    ids = [row.id for row in unread]
    if not ids:
        return 0

    updated = (
        db.query(Notification)
        .filter(Notification.id.in_(ids), Notification.lida == False)  # noqa: E712
        .update({Notification.lida: True}, synchronize_session="fetch")
    )
    for notification_id in ids:
        change_feed.record(db, Notification.__tablename__, ChangeOperation.UPDATE, notification_id)
    db.commit()
    logger.info(f"{updated} notificação(ões) marcadas como lidas no canal {channel}")
    return updated
