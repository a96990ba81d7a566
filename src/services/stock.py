"""
Serviço de estoque

Toda alteração de quantidade passa por aqui e grava uma movimentação no
mesmo commit. A baixa de estoque é um UPDATE condicional
(quantidade_atual >= n) em vez de ler-e-gravar, então duas vendas
concorrentes não conseguem vender a mesma unidade.
"""
import logging
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from ..config import settings
from ..models import Product, StockMovement
from ..realtime import change_feed, ChangeOperation
from ..schemas.product import ProductCreate, ProductUpdate
from .errors import (
    DuplicateSkuError, InsufficientStockError, NotFoundError, ValidationError
)
from .notifications import notify_low_stock

logger = logging.getLogger(__name__)

MOVEMENT_TYPES = ("entrada", "saida", "ajuste")


def get_product(db: Session, produto_id: int) -> Product:
    product = db.query(Product).filter(Product.id == produto_id).first()
    if not product:
        raise NotFoundError(f"Produto {produto_id} não encontrado")
    return product


def decrement_stock(db: Session, product: Product, quantidade: int) -> None:
    """
    Baixa atômica: só atualiza se houver estoque suficiente no momento do UPDATE

    Raises:
        InsufficientStockError: se nenhuma linha atender à condição
    """
    anterior = product.quantidade_atual
    rows = (
        db.query(Product)
        .filter(Product.id == product.id, Product.quantidade_atual >= quantidade)
        .update(
            {Product.quantidade_atual: Product.quantidade_atual - quantidade},
            synchronize_session="fetch"
        )
    )
    if rows != 1:
        db.refresh(product)
        raise InsufficientStockError(product.id, quantidade, product.quantidade_atual)

    change_feed.record(db, Product.__tablename__, ChangeOperation.UPDATE, product.id)

    if (
        settings.LOW_STOCK_ALERTS
        and anterior > product.quantidade_minima
        and product.quantidade_atual <= product.quantidade_minima
    ):
        notify_low_stock(db, product)


def _increment_stock(db: Session, product: Product, quantidade: int) -> None:
    db.query(Product).filter(Product.id == product.id).update(
        {Product.quantidade_atual: Product.quantidade_atual + quantidade},
        synchronize_session="fetch"
    )
    change_feed.record(db, Product.__tablename__, ChangeOperation.UPDATE, product.id)


def _set_stock(db: Session, product: Product, quantidade: int) -> None:
    db.query(Product).filter(Product.id == product.id).update(
        {Product.quantidade_atual: quantidade},
        synchronize_session="fetch"
    )
    change_feed.record(db, Product.__tablename__, ChangeOperation.UPDATE, product.id)


def record_movement(
    db: Session,
    product: Product,
    tipo: str,
    quantidade: int,
    motivo: Optional[str] = None,
    observacao: Optional[str] = None,
    pedido_id: Optional[int] = None
) -> StockMovement:
    movement = StockMovement(
        produto_id=product.id,
        pedido_id=pedido_id,
        tipo=tipo,
        quantidade=quantidade,
        motivo=motivo,
        observacao=observacao
    )
    db.add(movement)
    return movement


def apply_movement(
    db: Session,
    produto_id: int,
    tipo: str,
    quantidade: int,
    motivo: Optional[str] = None,
    observacao: Optional[str] = None
) -> Tuple[int, Product, StockMovement]:
    """
    Movimentação direta de estoque (fora de pedidos)

    - entrada: quantidade_atual + quantidade
    - saida: quantidade_atual - quantidade (nunca abaixo de zero)
    - ajuste: quantidade_atual = quantidade

    Returns:
        (quantidade anterior, produto atualizado, movimentação gravada)
    """
    if tipo not in MOVEMENT_TYPES:
        raise ValidationError(f"Tipo de movimentação inválido: {tipo}")
    if quantidade < 0 or (tipo != "ajuste" and quantidade == 0):
        raise ValidationError("A quantidade deve ser maior que zero")

    product = get_product(db, produto_id)
    anterior = product.quantidade_atual

    try:
        if tipo == "entrada":
            _increment_stock(db, product, quantidade)
        elif tipo == "saida":
            decrement_stock(db, product, quantidade)
        else:
            _set_stock(db, product, quantidade)

        movement = record_movement(db, product, tipo, quantidade, motivo, observacao)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.warning(f"Movimentação {tipo} de {quantidade} no produto {produto_id} desfeita: {e}")
        raise

    db.refresh(product)
    db.refresh(movement)
    logger.info(
        f"Movimentação {tipo} no produto {produto_id}: {anterior} -> {product.quantidade_atual}"
    )
    return anterior, product, movement


def set_location(db: Session, produto_id: int, localizacao: str) -> Product:
    """Define a posição do produto no armazém (texto livre, sem unicidade)"""
    product = get_product(db, produto_id)
    product.localizacao = localizacao or None
    db.commit()
    db.refresh(product)
    logger.info(f"Localização do produto {produto_id} definida como '{localizacao}'")
    return product


def check_sku_available(db: Session, lojista_id: str, sku: str, exclude_id: Optional[int] = None) -> None:
    """Aplica a política de unicidade de SKU configurada"""
    policy = settings.SKU_UNIQUENESS
    if policy == "none":
        return

    query = db.query(Product).filter(Product.sku == sku)
    if policy == "seller":
        query = query.filter(Product.lojista_id == lojista_id)
    if exclude_id is not None:
        query = query.filter(Product.id != exclude_id)

    if query.first():
        scope = "deste lojista" if policy == "seller" else "do armazém"
        raise DuplicateSkuError(f"O SKU '{sku}' já está cadastrado em outro produto {scope}")


def create_product(db: Session, lojista_id: str, data: ProductCreate) -> Product:
    """Cadastra o produto; estoque inicial vira uma movimentação de entrada"""
    check_sku_available(db, lojista_id, data.sku)

    payload = data.model_dump()
    inicial = payload.pop("quantidade_atual")
    product = Product(lojista_id=lojista_id, quantidade_atual=inicial, status="ativo", **payload)

    try:
        db.add(product)
        db.flush()
        if inicial > 0:
            record_movement(
                db, product, "entrada", inicial,
                motivo="estoque_inicial", observacao="Cadastro do produto"
            )
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Erro ao cadastrar produto {data.sku} do lojista {lojista_id}: {e}")
        raise

    db.refresh(product)
    logger.info(f"Produto {product.id} ({product.sku}) cadastrado para o lojista {lojista_id}")
    return product


def update_product(db: Session, product: Product, data: ProductUpdate) -> Product:
    changes = data.model_dump(exclude_unset=True)
    if changes.get("sku") and changes["sku"] != product.sku:
        check_sku_available(db, product.lojista_id, changes["sku"], exclude_id=product.id)

    for field, value in changes.items():
        setattr(product, field, value)

    db.commit()
    db.refresh(product)
    return product
