"""
Testes de Produtos, movimentações e localização
"""
import pytest

from src.config import settings
from src.models import Notification, Product, StockMovement
from src.services import stock as stock_service
from src.services.errors import InsufficientStockError, ValidationError

from .conftest import create_product

API = "/api/v1"


def move(client, headers, product_id, tipo, quantidade, **extra):
    return client.post(
        f"{API}/products/{product_id}/movements",
        json={"tipo": tipo, "quantidade": quantidade, **extra},
        headers=headers
    )


# ============================================================================
# CADASTRO
# ============================================================================

def test_create_product_records_initial_stock(client, db, seller_headers, seller):
    """Teste de cadastro: estoque inicial vira entrada"""
    response = client.post(
        f"{API}/products",
        json={"nome": "Caneca", "sku": "CAN-001", "quantidade_atual": 12, "quantidade_minima": 2},
        headers=seller_headers
    )

    assert response.status_code == 201
    data = response.json()
    assert data["lojista_id"] == seller.id
    assert data["quantidade_atual"] == 12
    assert data["status"] == "ativo"
    assert data["estoque_baixo"] is False

    movements = db.query(StockMovement).filter(StockMovement.produto_id == data["id"]).all()
    assert len(movements) == 1
    assert movements[0].tipo == "entrada"
    assert movements[0].quantidade == 12
    assert movements[0].motivo == "estoque_inicial"


def test_create_product_without_stock_has_no_movement(client, db, seller_headers):
    response = client.post(f"{API}/products", json={"nome": "Caneca", "sku": "CAN-001"}, headers=seller_headers)
    assert response.status_code == 201
    assert response.json()["quantidade_atual"] == 0
    assert db.query(StockMovement).count() == 0


def test_duplicate_sku_allowed_by_default(client, seller_headers, product):
    response = client.post(f"{API}/products", json={"nome": "Outra", "sku": product.sku}, headers=seller_headers)
    assert response.status_code == 201


def test_duplicate_sku_per_seller(client, monkeypatch, seller_headers, other_seller_headers, product):
    monkeypatch.setattr(settings, "SKU_UNIQUENESS", "seller")

    response = client.post(f"{API}/products", json={"nome": "Outra", "sku": product.sku}, headers=seller_headers)
    assert response.status_code == 409
    assert response.json()["code"] == "duplicate_sku"

    response = client.post(f"{API}/products", json={"nome": "Outra", "sku": product.sku}, headers=other_seller_headers)
    assert response.status_code == 201


def test_duplicate_sku_global(client, monkeypatch, other_seller_headers, product):
    monkeypatch.setattr(settings, "SKU_UNIQUENESS", "global")
    response = client.post(f"{API}/products", json={"nome": "Outra", "sku": product.sku}, headers=other_seller_headers)
    assert response.status_code == 409


def test_list_my_products(client, db, seller, seller_headers, other_seller, product):
    create_product(db, seller, sku="ZERO", quantidade=0)
    create_product(db, other_seller, sku="OUT-001")

    response = client.get(f"{API}/products", headers=seller_headers)
    assert response.status_code == 200
    assert {p["sku"] for p in response.json()} == {"CAM-001", "ZERO"}

    response = client.get(f"{API}/products?disponiveis=true", headers=seller_headers)
    assert [p["sku"] for p in response.json()] == ["CAM-001"]


def test_update_product_keeps_quantity(client, seller_headers, product):
    response = client.put(
        f"{API}/products/{product.id}",
        json={"nome": "Camiseta Premium", "quantidade_minima": 4, "quantidade_atual": 99},
        headers=seller_headers
    )
    assert response.status_code == 200
    data = response.json()
    assert data["nome"] == "Camiseta Premium"
    assert data["quantidade_minima"] == 4
    assert data["quantidade_atual"] == 10


def test_other_seller_cannot_read_product(client, other_seller_headers, product):
    response = client.get(f"{API}/products/{product.id}", headers=other_seller_headers)
    assert response.status_code == 403


# ============================================================================
# MOVIMENTAÇÕES
# ============================================================================

def test_entrada_adds_stock(client, seller_headers, product):
    """Teste de entrada"""
    response = move(client, seller_headers, product.id, "entrada", 5, motivo="compra")

    assert response.status_code == 201
    data = response.json()
    assert data["quantidade_anterior"] == 10
    assert data["produto"]["quantidade_atual"] == 15
    assert data["movimentacao"]["tipo"] == "entrada"
    assert data["movimentacao"]["quantidade"] == 5
    assert data["movimentacao"]["motivo"] == "compra"


def test_saida_subtracts_stock(client, seller_headers, product):
    response = move(client, seller_headers, product.id, "saida", 4)
    assert response.status_code == 201
    assert response.json()["produto"]["quantidade_atual"] == 6


def test_saida_beyond_stock_rejected(client, db, seller_headers, product):
    """Teste de saída maior que o estoque"""
    response = move(client, seller_headers, product.id, "saida", 11)

    assert response.status_code == 409
    assert response.json()["code"] == "insufficient_stock"
    db.expire_all()
    assert db.get(Product, product.id).quantidade_atual == 10
    assert db.query(StockMovement).count() == 0


def test_ajuste_sets_absolute_value(client, admin_headers, product):
    response = move(client, admin_headers, product.id, "ajuste", 3, motivo="inventario")
    assert response.status_code == 201
    data = response.json()
    assert data["quantidade_anterior"] == 10
    assert data["produto"]["quantidade_atual"] == 3
    assert data["movimentacao"]["quantidade"] == 3


def test_ajuste_to_zero(client, admin_headers, product):
    response = move(client, admin_headers, product.id, "ajuste", 0)
    assert response.status_code == 201
    assert response.json()["produto"]["quantidade_atual"] == 0


def test_zero_entrada_rejected(client, seller_headers, product):
    response = move(client, seller_headers, product.id, "entrada", 0)
    assert response.status_code == 422


def test_unknown_movement_type(client, seller_headers, product):
    response = move(client, seller_headers, product.id, "transferencia", 1)
    assert response.status_code == 422


def test_movement_history_newest_first(client, seller_headers, product):
    move(client, seller_headers, product.id, "entrada", 5)
    move(client, seller_headers, product.id, "saida", 2)

    response = client.get(f"{API}/products/{product.id}/movements", headers=seller_headers)
    assert response.status_code == 200
    assert [m["tipo"] for m in response.json()] == ["saida", "entrada"]


def test_other_seller_cannot_move_stock(client, other_seller_headers, product):
    response = move(client, other_seller_headers, product.id, "entrada", 1)
    assert response.status_code == 403


def test_apply_movement_validation(db, product):
    with pytest.raises(ValidationError):
        stock_service.apply_movement(db, product.id, "saida", 0)
    with pytest.raises(ValidationError):
        stock_service.apply_movement(db, product.id, "ajuste", -1)


def test_decrement_never_goes_negative(db, seller):
    product = create_product(db, seller, quantidade=1)

    stock_service.apply_movement(db, product.id, "saida", 1)
    with pytest.raises(InsufficientStockError) as exc_info:
        stock_service.apply_movement(db, product.id, "saida", 1)

    assert exc_info.value.code == "insufficient_stock"
    db.expire_all()
    assert db.get(Product, product.id).quantidade_atual == 0


def test_low_stock_alert_only_when_crossing(db, seller):
    """O alerta é enviado uma vez, ao cruzar o mínimo"""
    product = create_product(db, seller, quantidade=5, minima=2)

    stock_service.apply_movement(db, product.id, "saida", 2)  # 3, acima do mínimo
    assert db.query(Notification).count() == 0

    stock_service.apply_movement(db, product.id, "saida", 1)  # 2, cruza
    stock_service.apply_movement(db, product.id, "saida", 1)  # 1, já estava baixo

    alerts = db.query(Notification).all()
    assert len(alerts) == 1
    assert alerts[0].tipo == "estoque_baixo"
    assert alerts[0].usuario_id == seller.id
    assert alerts[0].link == f"/lojista/produtos/{product.id}"


def test_low_stock_alerts_can_be_disabled(db, seller, monkeypatch):
    monkeypatch.setattr(settings, "LOW_STOCK_ALERTS", False)
    product = create_product(db, seller, quantidade=3, minima=2)

    stock_service.apply_movement(db, product.id, "saida", 2)
    assert db.query(Notification).count() == 0


# ============================================================================
# LOCALIZAÇÃO E ESTOQUE DO ARMAZÉM
# ============================================================================

def test_set_location(client, admin_headers, seller_headers, product):
    """Teste de localização: leituras seguintes devolvem o mesmo valor"""
    response = client.patch(
        f"{API}/products/{product.id}/location",
        json={"localizacao": "A-03-2"},
        headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["localizacao"] == "A-03-2"

    for _ in range(2):
        response = client.get(f"{API}/products/{product.id}", headers=seller_headers)
        assert response.json()["localizacao"] == "A-03-2"


def test_location_is_not_unique(client, db, admin_headers, seller, product):
    second = create_product(db, seller, sku="CAM-002")
    for product_id in (product.id, second.id):
        response = client.patch(
            f"{API}/products/{product_id}/location",
            json={"localizacao": "B-01"},
            headers=admin_headers
        )
        assert response.status_code == 200


def test_seller_cannot_set_location(client, seller_headers, product):
    response = client.patch(
        f"{API}/products/{product.id}/location",
        json={"localizacao": "A-01"},
        headers=seller_headers
    )
    assert response.status_code == 403


def test_set_location_unknown_product(client, admin_headers):
    response = client.patch(f"{API}/products/999/location", json={"localizacao": "A-01"}, headers=admin_headers)
    assert response.status_code == 404


def test_stock_overview(client, db, admin_headers, seller, other_seller, product):
    """Teste da visão de estoque: menor estoque primeiro, com situação"""
    create_product(db, seller, sku="VAZIO", nome="Boné", quantidade=0)
    create_product(db, other_seller, sku="BAIXO", nome="Meia", quantidade=2, minima=2)
    create_product(db, other_seller, sku="OK", nome="Calça", quantidade=20, localizacao="C-09")

    response = client.get(f"{API}/stock", headers=admin_headers)
    assert response.status_code == 200
    rows = response.json()
    assert [(r["sku"], r["situacao"]) for r in rows] == [
        ("VAZIO", "sem_estoque"),
        ("BAIXO", "estoque_baixo"),
        ("CAM-001", "sem_localizacao"),
        ("OK", "ok"),
    ]
    assert rows[1]["lojista_nome"] == "Outra Loja"

    response = client.get(f"{API}/stock?search=outra", headers=admin_headers)
    assert {r["sku"] for r in response.json()} == {"BAIXO", "OK"}

    response = client.get(f"{API}/stock?search=cam", headers=admin_headers)
    assert {r["sku"] for r in response.json()} == {"CAM-001"}


def test_stock_overview_admin_only(client, seller_headers):
    response = client.get(f"{API}/stock", headers=seller_headers)
    assert response.status_code == 403


def test_update_product_rejects_null_required_fields(client, seller_headers, product):
    """Campos obrigatórios enviados como null retornam 422, não 500"""
    for field in ("nome", "sku", "quantidade_minima", "status"):
        response = client.put(
            f"{API}/products/{product.id}",
            json={field: None},
            headers=seller_headers
        )
        assert response.status_code == 422, field

    response = client.get(f"{API}/products/{product.id}", headers=seller_headers)
    assert response.json()["nome"] == "Camiseta Básica"


def test_update_product_clears_optional_fields(client, seller_headers, product):
    client.put(f"{API}/products/{product.id}", json={"descricao": "Algodão"}, headers=seller_headers)

    response = client.put(f"{API}/products/{product.id}", json={"descricao": None}, headers=seller_headers)
    assert response.status_code == 200
    assert response.json()["descricao"] is None
