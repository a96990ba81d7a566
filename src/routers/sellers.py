"""
Router de Lojistas (Sellers)
Cadastro e manutenção feitos pelo admin do armazém
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional

from ..config import settings
from ..models import get_db, Seller
from ..schemas import SellerCreate, SellerUpdate, SellerResponse
from ..utils import get_current_user, require_admin, require_seller

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/sellers", response_model=SellerResponse, status_code=status.HTTP_201_CREATED)
async def create_seller(
    seller_data: SellerCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """
    Cadastrar lojista
    O id pode vir do provedor de autenticação; se omitido é gerado
    """
    # Verificar email único
    if db.query(Seller).filter(Seller.email == seller_data.email).first():
        raise HTTPException(400, "O email já está cadastrado para outro lojista")

    if seller_data.id == settings.ADMIN_CHANNEL:
        raise HTTPException(400, "Este id é reservado para o canal do admin")

    if seller_data.id and db.query(Seller).filter(Seller.id == seller_data.id).first():
        raise HTTPException(400, "Já existe um lojista com este id")

    seller_dict = seller_data.model_dump(exclude_none=True)
    new_seller = Seller(**seller_dict)
    db.add(new_seller)
    db.commit()
    db.refresh(new_seller)
    logger.info(f"Lojista {new_seller.id} ({new_seller.nome_fantasia}) cadastrado")
    return new_seller


@router.get("/sellers", response_model=List[SellerResponse])
async def list_sellers(
    ativo: Optional[bool] = None,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """Listar lojistas, mais recentes primeiro"""
    query = db.query(Seller)
    if ativo is not None:
        query = query.filter(Seller.ativo == ativo)
    return query.order_by(Seller.created_at.desc()).all()


@router.get("/sellers/me", response_model=SellerResponse)
async def get_my_seller(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_seller)
):
    """Dados do lojista autenticado"""
    seller = db.query(Seller).filter(Seller.id == current_user["user_id"]).first()
    if not seller:
        raise HTTPException(404, "Lojista não encontrado")
    return seller


@router.get("/sellers/{seller_id}", response_model=SellerResponse)
async def get_seller(
    seller_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    """Obter lojista por ID"""
    if not current_user.get("is_admin") and current_user.get("user_id") != seller_id:
        raise HTTPException(403, "Você só pode consultar o seu próprio cadastro")

    seller = db.query(Seller).filter(Seller.id == seller_id).first()
    if not seller:
        raise HTTPException(404, "Lojista não encontrado")
    return seller


@router.put("/sellers/{seller_id}", response_model=SellerResponse)
async def update_seller(
    seller_id: str,
    seller_data: SellerUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """Atualizar dados do lojista"""
    seller = db.query(Seller).filter(Seller.id == seller_id).first()
    if not seller:
        raise HTTPException(404, "Lojista não encontrado")

    # Verificar email único se mudar
    if seller_data.email and seller_data.email != seller.email:
        if db.query(Seller).filter(Seller.email == seller_data.email).first():
            raise HTTPException(400, "O email já está cadastrado")

    for field, value in seller_data.model_dump(exclude_unset=True).items():
        setattr(seller, field, value)

    db.commit()
    db.refresh(seller)
    return seller


@router.delete("/sellers/{seller_id}", status_code=status.HTTP_204_NO_CONTENT)
async def deactivate_seller(
    seller_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """Desativar lojista (soft delete)"""
    seller = db.query(Seller).filter(Seller.id == seller_id).first()
    if not seller:
        raise HTTPException(404, "Lojista não encontrado")

    seller.ativo = False
    db.commit()
    logger.info(f"Lojista {seller_id} desativado")
    return None
