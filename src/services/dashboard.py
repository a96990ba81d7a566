"""
Painéis e visões derivadas

Nada é armazenado: cada leitura varre a coleção visível e recalcula.
"""
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..models import Order, OrderStatus, Product, Seller

PENDING_STATUSES = (
    OrderStatus.AWAITING_SEPARATION.value,
    OrderStatus.IN_SEPARATION.value,
    OrderStatus.PACKAGED.value,
)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite devolve datetimes sem timezone; tudo é gravado em UTC
    if value is None:
        return value
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_low_stock(product: Product) -> bool:
    return product.quantidade_atual <= product.quantidade_minima


def stock_situation(product: Product) -> str:
    if product.quantidade_atual == 0:
        return "sem_estoque"
    if is_low_stock(product):
        return "estoque_baixo"
    if not product.localizacao:
        return "sem_localizacao"
    return "ok"


def admin_dashboard(db: Session, now: Optional[datetime] = None) -> dict:
    today = _as_utc(now or datetime.now(timezone.utc)).date()

    orders = db.query(Order.status, Order.data_envio).all()
    products = db.query(Product.quantidade_atual, Product.quantidade_minima).all()

    def count(status: OrderStatus) -> int:
        return sum(1 for order in orders if order.status == status.value)

    shipped_today = sum(
        1 for order in orders
        if order.status == OrderStatus.SHIPPED.value
        and order.data_envio is not None
        and _as_utc(order.data_envio).date() == today
    )

    return {
        "aguardando_separacao": count(OrderStatus.AWAITING_SEPARATION),
        "em_separacao": count(OrderStatus.IN_SEPARATION),
        "embalado": count(OrderStatus.PACKAGED),
        "enviados_hoje": shipped_today,
        "total_produtos": len(products),
        "estoque_baixo": sum(1 for p in products if p.quantidade_atual <= p.quantidade_minima),
    }


def seller_dashboard(db: Session, lojista_id: str, now: Optional[datetime] = None) -> dict:
    now = now or datetime.now(timezone.utc)
    month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

    products = db.query(Product.quantidade_atual, Product.quantidade_minima).filter(
        Product.lojista_id == lojista_id
    ).all()
    orders = db.query(Order.status, Order.total_pedido, Order.data_criacao).filter(
        Order.lojista_id == lojista_id
    ).all()

    month_orders = [
        order for order in orders
        if order.data_criacao is not None and _as_utc(order.data_criacao) >= month_start
    ]

    return {
        "total_produtos": len(products),
        "estoque_baixo": sum(1 for p in products if p.quantidade_atual <= p.quantidade_minima),
        "pedidos_pendentes": sum(1 for order in orders if order.status in PENDING_STATUSES),
        "pedidos_enviados_mes": sum(
            1 for order in month_orders if order.status == OrderStatus.SHIPPED.value
        ),
        "vendas_total_mes": float(sum(order.total_pedido for order in month_orders)),
    }


def stock_overview(db: Session, search: Optional[str] = None) -> List[dict]:
    """Estoque completo do armazém, do menor estoque para o maior"""
    query = db.query(Product, Seller.nome_fantasia).join(Seller, Product.lojista_id == Seller.id)

    if search:
        term = f"%{search.lower()}%"
        query = query.filter(or_(
            Product.nome.ilike(term),
            Product.sku.ilike(term),
            Seller.nome_fantasia.ilike(term)
        ))

    rows = query.order_by(Product.quantidade_atual.asc(), Product.id.asc()).all()

    result = []
    for product, nome_fantasia in rows:
        result.append({
            **{column.name: getattr(product, column.name) for column in Product.__table__.columns},
            "estoque_baixo": is_low_stock(product),
            "lojista_nome": nome_fantasia,
            "situacao": stock_situation(product),
        })
    return result
