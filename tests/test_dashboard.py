"""
Testes dos painéis
"""
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from src.models import Order, OrderStatus
from src.services import dashboard as dashboard_service

from .conftest import create_product

API = "/api/v1"


def add_order(db, seller, status, total="10.00", created=None, shipped=None):
    order = Order(
        lojista_id=seller.id,
        marketplace_origem="Shopee",
        status=status.value,
        dados_cliente={"nome": "Cliente"},
        total_pedido=Decimal(total),
        comissao_calculada=Decimal("0.00"),
        data_criacao=created or datetime.now(timezone.utc),
        data_envio=shipped
    )
    db.add(order)
    db.commit()
    return order


def test_admin_dashboard_counts(db, seller, other_seller):
    now = datetime(2024, 5, 20, 15, 0, tzinfo=timezone.utc)
    add_order(db, seller, OrderStatus.AWAITING_SEPARATION)
    add_order(db, seller, OrderStatus.AWAITING_SEPARATION)
    add_order(db, other_seller, OrderStatus.IN_SEPARATION)
    add_order(db, seller, OrderStatus.PACKAGED)
    add_order(db, seller, OrderStatus.SHIPPED, shipped=now - timedelta(hours=2))
    add_order(db, seller, OrderStatus.SHIPPED, shipped=now - timedelta(days=1))

    create_product(db, seller, sku="A", quantidade=10, minima=2)
    create_product(db, seller, sku="B", quantidade=2, minima=2)
    create_product(db, other_seller, sku="C", quantidade=0, minima=0)

    result = dashboard_service.admin_dashboard(db, now=now)
    assert result == {
        "aguardando_separacao": 2,
        "em_separacao": 1,
        "embalado": 1,
        "enviados_hoje": 1,
        "total_produtos": 3,
        "estoque_baixo": 2,
    }


def test_seller_dashboard_month_window(db, seller, other_seller):
    now = datetime(2024, 5, 20, 15, 0, tzinfo=timezone.utc)
    add_order(db, seller, OrderStatus.AWAITING_SEPARATION, total="30.00", created=now - timedelta(days=1))
    add_order(db, seller, OrderStatus.SHIPPED, total="50.00", created=now - timedelta(days=5))
    add_order(db, seller, OrderStatus.SHIPPED, total="70.00", created=datetime(2024, 4, 28, tzinfo=timezone.utc))
    add_order(db, other_seller, OrderStatus.SHIPPED, total="99.00", created=now)
    create_product(db, seller, sku="A", quantidade=1, minima=1)

    result = dashboard_service.seller_dashboard(db, seller.id, now=now)
    assert result == {
        "total_produtos": 1,
        "estoque_baixo": 1,
        "pedidos_pendentes": 1,
        "pedidos_enviados_mes": 1,
        "vendas_total_mes": 80.0,
    }


def test_dashboards_follow_new_orders(client, admin_headers, seller_headers, product):
    before = client.get(f"{API}/dashboard/admin", headers=admin_headers).json()
    assert before["aguardando_separacao"] == 0

    client.post(
        f"{API}/orders",
        json={
            "dados_cliente": {"nome": "Cliente"},
            "itens": [{"produto_id": product.id, "quantidade": 1, "preco_unitario": "42.00"}]
        },
        headers=seller_headers
    )

    after = client.get(f"{API}/dashboard/admin", headers=admin_headers).json()
    assert after["aguardando_separacao"] == 1

    seller_view = client.get(f"{API}/dashboard/seller", headers=seller_headers).json()
    assert seller_view["pedidos_pendentes"] == 1
    assert seller_view["vendas_total_mes"] == 42.0


def test_dashboard_roles(client, admin_headers, seller_headers):
    assert client.get(f"{API}/dashboard/admin", headers=seller_headers).status_code == 403
    assert client.get(f"{API}/dashboard/seller", headers=admin_headers).status_code == 403


def test_health(client):
    response = client.get(f"{API}/health")
    assert response.status_code == 200
    assert response.json()["database"] == "connected"

    response = client.get("/health")
    assert response.json()["status"] == "healthy"


def test_as_utc_converts_aware_values():
    local = timezone(timedelta(hours=-3))
    value = datetime(2024, 5, 20, 22, 30, tzinfo=local)

    converted = dashboard_service._as_utc(value)
    assert converted.tzinfo == timezone.utc
    assert converted == datetime(2024, 5, 21, 1, 30, tzinfo=timezone.utc)
    assert dashboard_service._as_utc(datetime(2024, 5, 20, 10, 0)).tzinfo == timezone.utc


def test_shipped_today_uses_utc_date(db, seller):
    """'Hoje' é o dia em UTC mesmo quando o relógio informado é local"""
    now = datetime(2024, 5, 20, 22, 0, tzinfo=timezone(timedelta(hours=-3)))
    add_order(db, seller, OrderStatus.SHIPPED, shipped=datetime(2024, 5, 21, 0, 30, tzinfo=timezone.utc))
    add_order(db, seller, OrderStatus.SHIPPED, shipped=datetime(2024, 5, 20, 12, 0, tzinfo=timezone.utc))

    result = dashboard_service.admin_dashboard(db, now=now)
    assert result["enviados_hoje"] == 1
