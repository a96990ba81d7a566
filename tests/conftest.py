"""
Fixtures compartilhadas dos testes
"""
import os

# A base de testes precisa estar configurada antes de importar a aplicação
os.environ["DATABASE_URL"] = "sqlite:///./test.db"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from jose import jwt  # noqa: E402

from src.main import app  # noqa: E402
from src.config import settings  # noqa: E402
from src.models import Base, engine, SessionLocal, get_db, Seller, Product  # noqa: E402
from src.realtime import change_feed  # noqa: E402


def override_get_db():
    """Override da dependência de base de dados"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


def make_token(email: str, role: str, user_id=None) -> str:
    payload = {"sub": email, "role": role, "user_id": user_id}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def auth_headers(email: str, role: str, user_id=None) -> dict:
    return {"Authorization": f"Bearer {make_token(email, role, user_id)}"}


@pytest.fixture(autouse=True)
def setup_database():
    """Criar e limpar a base antes de cada teste"""
    Base.metadata.create_all(bind=engine)
    yield
    change_feed.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def create_seller(db, seller_id="lojista-1", email="loja@teste.com", comissao=15, **extra) -> Seller:
    seller = Seller(
        id=seller_id,
        nome_fantasia=extra.pop("nome_fantasia", "Loja Teste"),
        email=email,
        telefone="11999990000",
        comissao_percentual=comissao,
        **extra
    )
    db.add(seller)
    db.commit()
    db.refresh(seller)
    return seller


def create_product(db, seller, sku="CAM-001", quantidade=10, minima=1, **extra) -> Product:
    product = Product(
        lojista_id=seller.id,
        nome=extra.pop("nome", "Camiseta Básica"),
        sku=sku,
        quantidade_atual=quantidade,
        quantidade_minima=minima,
        **extra
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@pytest.fixture
def seller(db) -> Seller:
    return create_seller(db)


@pytest.fixture
def other_seller(db) -> Seller:
    return create_seller(db, seller_id="lojista-2", email="outra@teste.com", nome_fantasia="Outra Loja")


@pytest.fixture
def product(db, seller) -> Product:
    return create_product(db, seller)


@pytest.fixture
def admin_headers() -> dict:
    return auth_headers(settings.ADMIN_EMAIL, "ADMIN")


@pytest.fixture
def seller_headers(seller) -> dict:
    return auth_headers(seller.email, "LOJISTA", seller.id)


@pytest.fixture
def other_seller_headers(other_seller) -> dict:
    return auth_headers(other_seller.email, "LOJISTA", other_seller.id)


def order_payload(*itens, **extra) -> dict:
    """itens: tuplas (produto_id, quantidade, preco_unitario)"""
    payload = {
        "numero_pedido_externo": "MLB-1001",
        "marketplace_origem": "Mercado Livre",
        "dados_cliente": {
            "nome": "Maria Souza",
            "telefone": "11912345678",
            "cidade": "São Paulo",
            "estado": "SP"
        },
        "itens": [
            {"produto_id": produto_id, "quantidade": quantidade, "preco_unitario": preco}
            for produto_id, quantidade, preco in itens
        ]
    }
    payload.update(extra)
    return payload
