"""
Router de Produtos e Estoque
Catálogo do lojista, movimentações e visão de estoque do admin
"""
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from ..models import get_db, Product, StockMovement
from ..schemas import (
    ProductCreate, ProductUpdate, ProductResponse, StockProductResponse,
    LocationUpdate, StockMovementCreate, StockMovementResponse, StockMovementResult
)
from ..services import stock as stock_service
from ..services.dashboard import stock_overview
from ..utils import get_current_user, require_admin, require_seller

router = APIRouter()


def get_visible_product(db: Session, product_id: int, current_user: dict) -> Product:
    """Produto do lojista autenticado (o admin vê todos)"""
    product = stock_service.get_product(db, product_id)
    if not current_user.get("is_admin") and product.lojista_id != current_user.get("user_id"):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Este produto pertence a outro lojista"
        )
    return product


# ============================================================================
# CATÁLOGO DO LOJISTA
# ============================================================================

@router.post("/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    product_data: ProductCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_seller)
):
    """
    Cadastrar produto

    **Nota**: a quantidade inicial é registrada como uma movimentação de entrada.
    """
    return stock_service.create_product(db, current_user["user_id"], product_data)


@router.get("/products", response_model=List[ProductResponse])
async def list_my_products(
    disponiveis: bool = Query(False, description="Só ativos com estoque (formulário de venda)"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_seller)
):
    """Listar produtos do lojista"""
    query = db.query(Product).filter(Product.lojista_id == current_user["user_id"])

    if disponiveis:
        query = query.filter(Product.status == "ativo", Product.quantidade_atual > 0)
        return query.order_by(Product.nome.asc()).all()

    return query.order_by(Product.created_at.desc(), Product.id.desc()).all()


@router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    return get_visible_product(db, product_id, current_user)


@router.put("/products/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    product_data: ProductUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_seller)
):
    """
    Atualizar dados descritivos do produto

    A quantidade atual só muda via movimentação.
    """
    product = get_visible_product(db, product_id, current_user)
    return stock_service.update_product(db, product, product_data)


# ============================================================================
# MOVIMENTAÇÕES
# ============================================================================

@router.post("/products/{product_id}/movements", response_model=StockMovementResult, status_code=status.HTTP_201_CREATED)
async def create_movement(
    product_id: int,
    movement: StockMovementCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    """
    Registrar entrada, saída ou ajuste de estoque

    Exemplo:
    ```json
    {
        "tipo": "ajuste",
        "quantidade": 42,
        "motivo": "inventario"
    }
    ```
    """
    get_visible_product(db, product_id, current_user)

    anterior, product, saved = stock_service.apply_movement(
        db,
        product_id,
        movement.tipo,
        movement.quantidade,
        motivo=movement.motivo,
        observacao=movement.observacao
    )

    return StockMovementResult(
        quantidade_anterior=anterior,
        produto=ProductResponse.model_validate(product),
        movimentacao=StockMovementResponse.model_validate(saved)
    )


@router.get("/products/{product_id}/movements", response_model=List[StockMovementResponse])
async def list_movements(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    """Histórico de movimentações do produto, mais recentes primeiro"""
    get_visible_product(db, product_id, current_user)

    return db.query(StockMovement).filter(
        StockMovement.produto_id == product_id
    ).order_by(StockMovement.created_at.desc(), StockMovement.id.desc()).all()


# ============================================================================
# ESTOQUE DO ARMAZÉM (ADMIN)
# ============================================================================

@router.patch("/products/{product_id}/location", response_model=ProductResponse)
async def set_product_location(
    product_id: int,
    location: LocationUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """Definir a localização do produto no armazém"""
    return stock_service.set_location(db, product_id, location.localizacao)


@router.get("/stock", response_model=List[StockProductResponse])
async def get_full_stock(
    search: Optional[str] = Query(None, description="Busca por nome, SKU ou lojista"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """
    Estoque completo de todos os lojistas

    Ordenado do menor estoque para o maior, com a situação de cada item
    (sem_estoque, estoque_baixo, sem_localizacao, ok).
    """
    return stock_overview(db, search)
