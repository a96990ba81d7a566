"""
Ciclo de vida do pedido

Única fonte de verdade das transições de status. Qualquer transição fora da
tabela é rejeitada aqui, independentemente do que a interface oferecer.

    aguardando_separacao -> em_separacao -> embalado -> enviado
    (qualquer não terminal) -> cancelado   [só se CANCELLATION_ENABLED]
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, FrozenSet, Optional

from sqlalchemy.orm import Session

from ..config import settings
from ..models import (
    Order, OrderItem, OrderHistory, OrderStatus, Seller, TERMINAL_STATUSES
)
from ..realtime import change_feed, ChangeOperation
from ..schemas.order import OrderCreate, StatusUpdate
from .errors import (
    InvalidTransitionError, NotFoundError, PermissionDeniedError, ValidationError
)
from .notifications import create_notification
from .stock import decrement_stock, get_product, record_movement

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")

FORWARD_TRANSITIONS = {
    OrderStatus.AWAITING_SEPARATION: OrderStatus.IN_SEPARATION,
    OrderStatus.IN_SEPARATION: OrderStatus.PACKAGED,
    OrderStatus.PACKAGED: OrderStatus.SHIPPED,
}

# Campo de data preenchido ao entrar em cada status
TIMESTAMP_FIELDS = {
    OrderStatus.IN_SEPARATION: "data_separacao",
    OrderStatus.PACKAGED: "data_embalagem",
    OrderStatus.SHIPPED: "data_envio",
}


def allowed_transitions(config=settings) -> Dict[OrderStatus, FrozenSet[OrderStatus]]:
    """Tabela de transições válidas para a configuração informada"""
    table = {status: set() for status in OrderStatus}
    for source, target in FORWARD_TRANSITIONS.items():
        table[source].add(target)

    if config.CANCELLATION_ENABLED:
        for value in config.CANCELLABLE_STATUSES:
            source = OrderStatus(value)
            if source not in TERMINAL_STATUSES:
                table[source].add(OrderStatus.CANCELLED)

    return {status: frozenset(targets) for status, targets in table.items()}


def can_transition(source: OrderStatus, target: OrderStatus, config=settings) -> bool:
    if source in TERMINAL_STATUSES:
        return False
    return target in allowed_transitions(config)[source]


def validate_transition(order: Order, target: OrderStatus, config=settings) -> OrderStatus:
    source = OrderStatus(order.status)
    if not can_transition(source, target, config):
        raise InvalidTransitionError(order.id, source.value, target.value)
    return source


def calculate_totals(itens, comissao_percentual) -> tuple:
    """total = soma(quantidade x preço unitário); comissão = total x % / 100"""
    total = sum(
        (Decimal(item.quantidade) * Decimal(str(item.preco_unitario)) for item in itens),
        Decimal("0")
    ).quantize(CENTS, rounding=ROUND_HALF_UP)
    comissao = (total * Decimal(str(comissao_percentual)) / Decimal("100")).quantize(
        CENTS, rounding=ROUND_HALF_UP
    )
    return total, comissao


def get_order(db: Session, pedido_id: int) -> Order:
    order = db.query(Order).filter(Order.id == pedido_id).first()
    if not order:
        raise NotFoundError(f"Pedido {pedido_id} não encontrado")
    return order


def create_order(db: Session, lojista_id: str, data: OrderCreate) -> Order:
    """
    Lança uma venda de marketplace

    Em uma única transação:
    - cria o pedido (aguardando_separacao) e um item por linha
    - baixa o estoque de cada produto (UPDATE condicional)
    - grava uma movimentação 'saida' / 'venda' por item
    - grava o histórico inicial (status_anterior nulo)
    - notifica o canal do admin

    Se qualquer passo falhar nada é gravado.

    Raises:
        NotFoundError, PermissionDeniedError, ValidationError, InsufficientStockError
    """
    seller = db.query(Seller).filter(Seller.id == lojista_id).first()
    if not seller:
        raise NotFoundError("Lojista não encontrado")
    if not seller.ativo:
        raise PermissionDeniedError("Lojista inativo não pode lançar vendas")
    if not data.itens:
        raise ValidationError("O pedido precisa de pelo menos um item")

    # Valida posse e disponibilidade antes de qualquer escrita
    products = {}
    for item in data.itens:
        product = products.get(item.produto_id) or get_product(db, item.produto_id)
        if product.lojista_id != seller.id:
            raise PermissionDeniedError(f"O produto {product.id} não pertence a este lojista")
        if product.status != "ativo":
            raise ValidationError(f"O produto {product.id} está inativo")
        products[product.id] = product

    total, comissao = calculate_totals(data.itens, seller.comissao_percentual)

    try:
        order = Order(
            lojista_id=seller.id,
            numero_pedido_externo=data.numero_pedido_externo or None,
            marketplace_origem=data.marketplace_origem,
            status=OrderStatus.AWAITING_SEPARATION.value,
            dados_cliente=data.dados_cliente.model_dump(mode="json"),
            total_pedido=total,
            comissao_calculada=comissao,
            data_criacao=datetime.now(timezone.utc)
        )
        db.add(order)
        db.flush()

        for item in data.itens:
            product = products[item.produto_id]
            decrement_stock(db, product, item.quantidade)
            db.add(OrderItem(
                pedido_id=order.id,
                produto_id=product.id,
                quantidade=item.quantidade,
                preco_unitario=item.preco_unitario
            ))
            record_movement(
                db, product, "saida", item.quantidade,
                motivo="venda", observacao=f"Venda #{order.id}", pedido_id=order.id
            )

        db.add(OrderHistory(
            pedido_id=order.id,
            status_anterior=None,
            status_novo=OrderStatus.AWAITING_SEPARATION.value,
            observacao="Pedido criado",
            responsavel=seller.nome_fantasia
        ))

        create_notification(
            db,
            usuario_id=settings.ADMIN_CHANNEL,
            tipo="novo_pedido",
            titulo="Nova Venda Lançada",
            mensagem=f"{seller.nome_fantasia} lançou um novo pedido de R$ {total:.2f}",
            link=f"/admin/pedidos/{order.id}"
        )

        db.commit()
    except Exception as e:
        db.rollback()
        logger.warning(f"Venda do lojista {seller.id} desfeita: {e}")
        raise

    db.refresh(order)
    logger.info(
        f"Pedido {order.id} criado para o lojista {seller.id}: "
        f"{len(data.itens)} item(ns), total {total}, comissão {comissao}"
    )
    return order


def advance_status(
    db: Session,
    pedido_id: int,
    data: StatusUpdate,
    responsavel: Optional[str] = None
) -> Order:
    """
    Avança o pedido para o próximo status

    O UPDATE é condicional ao status lido (WHERE status = :anterior): se outra
    sessão mudou o pedido nesse meio tempo a transição é rejeitada em vez de
    sobrescrever o estado mais novo.
    """
    order = get_order(db, pedido_id)
    target = OrderStatus(data.status)
    source = validate_transition(order, target)

    values = {Order.status: target.value}
    timestamp_field = TIMESTAMP_FIELDS.get(target)
    if timestamp_field:
        values[getattr(Order, timestamp_field)] = datetime.now(timezone.utc)
    if target is OrderStatus.SHIPPED:
        if data.codigo_rastreio:
            values[Order.codigo_rastreio] = data.codigo_rastreio
        if data.transportadora:
            values[Order.transportadora] = data.transportadora

    try:
        rows = (
            db.query(Order)
            .filter(Order.id == order.id, Order.status == source.value)
            .update(values, synchronize_session="fetch")
        )
        if rows != 1:
            raise InvalidTransitionError(order.id, source.value, target.value)
        change_feed.record(db, Order.__tablename__, ChangeOperation.UPDATE, order.id)

        db.add(OrderHistory(
            pedido_id=order.id,
            status_anterior=source.value,
            status_novo=target.value,
            observacao=f"Status atualizado para {target.value}",
            responsavel=responsavel or settings.HISTORY_RESPONSIBLE
        ))
        db.commit()
    except Exception as e:
        db.rollback()
        logger.warning(f"Transição do pedido {pedido_id} {source.value} -> {target.value} desfeita: {e}")
        raise

    db.refresh(order)
    logger.info(f"Pedido {order.id}: {source.value} -> {target.value}")
    return order
