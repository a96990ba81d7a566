"""
Router de Pedidos (Orders)
Lançamento de vendas pelo lojista e fluxo separação → embalagem → envio
"""
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from ..models import get_db, Order, OrderHistory, OrderStatus
from ..schemas import (
    OrderCreate, StatusUpdate, OrderResponse, OrderDetailResponse, OrderHistoryResponse
)
from ..services import order_lifecycle
from ..utils import get_current_user, require_admin, require_seller

router = APIRouter()


def get_visible_order(db: Session, order_id: int, current_user: dict) -> Order:
    order = order_lifecycle.get_order(db, order_id)
    if not current_user.get("is_admin") and order.lojista_id != current_user.get("user_id"):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Você não tem permissão para ver este pedido"
        )
    return order


def to_detail(order: Order) -> OrderDetailResponse:
    detail = OrderDetailResponse.model_validate(order)
    detail.lojista_nome = order.lojista.nome_fantasia if order.lojista else None
    return detail


@router.post("/orders", response_model=OrderDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    order_data: OrderCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_seller)
):
    """
    Lançar venda

    Cria o pedido, baixa o estoque, registra movimentações, histórico e
    notifica o admin. Tudo ou nada: se faltar estoque em qualquer item
    nenhuma alteração é gravada.
    """
    order = order_lifecycle.create_order(db, current_user["user_id"], order_data)
    return to_detail(order)


@router.get("/orders", response_model=List[OrderDetailResponse])
async def list_orders(
    status_filter: Optional[OrderStatus] = Query(None, alias="status", description="Filtrar por status"),
    lojista_id: Optional[str] = Query(None, description="Filtrar por lojista (somente ADMIN)"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    """
    Listar pedidos, mais recentes primeiro
    ADMIN vê todos; o lojista vê apenas os seus
    """
    query = db.query(Order)

    if current_user.get("is_admin"):
        if lojista_id:
            query = query.filter(Order.lojista_id == lojista_id)
    else:
        query = query.filter(Order.lojista_id == current_user.get("user_id"))

    if status_filter:
        query = query.filter(Order.status == status_filter.value)

    orders = query.order_by(Order.data_criacao.desc(), Order.id.desc()).offset(skip).limit(limit).all()
    return [to_detail(order) for order in orders]


@router.get("/orders/queue", response_model=List[OrderDetailResponse])
async def separation_queue(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """Fila de separação: pedidos aguardando, do mais antigo para o mais novo"""
    orders = db.query(Order).filter(
        Order.status == OrderStatus.AWAITING_SEPARATION.value
    ).order_by(Order.data_criacao.asc(), Order.id.asc()).all()
    return [to_detail(order) for order in orders]


@router.get("/orders/{order_id}", response_model=OrderDetailResponse)
async def get_order(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    """Detalhe do pedido com itens e histórico"""
    return to_detail(get_visible_order(db, order_id, current_user))


@router.get("/orders/{order_id}/history", response_model=List[OrderHistoryResponse])
async def get_order_history(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    """Histórico de transições, em ordem cronológica"""
    get_visible_order(db, order_id, current_user)
    return db.query(OrderHistory).filter(
        OrderHistory.pedido_id == order_id
    ).order_by(OrderHistory.id.asc()).all()


@router.patch("/orders/{order_id}/status", response_model=OrderDetailResponse)
async def update_order_status(
    order_id: int,
    status_data: StatusUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """
    Avançar o status do pedido

    Regras de negócio:
    - aguardando_separacao → em_separacao → embalado → enviado
    - sem retrocessos; transições fora da tabela retornam 409
    - código de rastreio e transportadora só são gravados no envio
    """
    order = order_lifecycle.advance_status(db, order_id, status_data)
    return to_detail(order)
