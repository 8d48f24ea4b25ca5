import asyncio
from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from gestor_ordenes.crud import invoice_crud, order_crud, product_crud
from gestor_ordenes.db.database import AsyncSessionLocal
from gestor_ordenes.db.models.client_model import Client
from gestor_ordenes.db.models.invoice_model import Invoice
from gestor_ordenes.services.invoice_service import is_invoice_number_conflict, run_unit_of_work


def _month_prefix():
    now = datetime.now(timezone.utc)
    return f"FACT-{now.year}{now.month:02d}-"


def _insert_order_without_invoice(client_id, product_id, quantity):
    """Simula una orden cuya factura no llegó a emitirse."""
    async def _insert():
        async with AsyncSessionLocal() as db:
            product = await product_crud.get_product(db, product_id)
            db_order = await order_crud.add_order(db, client_id=client_id, lines=[(product, quantity)])
            await db.commit()
            return db_order.id

    return asyncio.run(_insert())


def test_generate_invoice_for_order_without_one(client, admin_headers, create_client, create_product):
    customer = create_client()
    product = create_product(price=50.0)
    order_id = _insert_order_without_invoice(customer["id"], product["id"], 2)

    response = client.post("/api/invoices/generate", json={"orderId": order_id}, headers=admin_headers)

    assert response.status_code == 201
    invoice = response.json()
    assert invoice["number"] == _month_prefix() + "0001"
    assert invoice["orderId"] == order_id
    assert invoice["clientId"] == customer["id"]
    assert invoice["subtotal"] == 100.0
    assert invoice["tax"] == 19.0
    assert invoice["total"] == 119.0
    assert invoice["order"]["id"] == order_id


def test_generate_invoice_twice_is_rejected(client, admin_headers, create_client, create_product, create_order):
    customer = create_client()
    product = create_product()
    order_id = create_order(customer["id"], [(product["id"], 1)])["order"]["id"]

    response = client.post("/api/invoices/generate", json={"orderId": order_id}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "La orden ya tiene una factura"
    assert len(client.get("/api/invoices", headers=admin_headers).json()) == 1


def test_generate_invoice_for_unknown_order_is_404(client, admin_headers):
    response = client.post("/api/invoices/generate", json={"orderId": 123}, headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Orden no encontrada"


def test_list_and_get_invoices(client, admin_headers, empleado_headers, create_client, create_product, create_order):
    customer = create_client()
    product = create_product()
    first = create_order(customer["id"], [(product["id"], 1)])["invoice"]
    create_order(customer["id"], [(product["id"], 3)])

    listed = client.get("/api/invoices", headers=empleado_headers).json()
    assert [inv["number"] for inv in listed] == [_month_prefix() + "0001", _month_prefix() + "0002"]

    response = client.get(f"/api/invoices/{first['id']}", headers=empleado_headers)
    assert response.status_code == 200
    assert response.json()["client"]["email"] == customer["email"]


def test_get_unknown_invoice_is_404(client, admin_headers):
    response = client.get("/api/invoices/999", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Factura no encontrada"


def test_duplicate_number_is_retried_with_the_next_one(
    client, admin_headers, monkeypatch, create_client, create_product, create_order
):
    customer = create_client()
    product = create_product()
    create_order(customer["id"], [(product["id"], 1)])

    real_lookup = invoice_crud.get_last_invoice_number
    calls = {"n": 0}

    async def stale_lookup(db, year_month):
        # La primera lectura no ve la factura existente, como haría una petición concurrente
        calls["n"] += 1
        if calls["n"] == 1:
            return None
        return await real_lookup(db, year_month)

    monkeypatch.setattr(invoice_crud, "get_last_invoice_number", stale_lookup)

    body = create_order(customer["id"], [(product["id"], 2)])

    assert calls["n"] == 2
    assert body["invoice"]["number"] == _month_prefix() + "0002"
    assert len(client.get("/api/orders", headers=admin_headers).json()) == 2


def test_exhausted_retries_leave_no_orphan_order(
    client, admin_headers, monkeypatch, create_client, create_product, create_order
):
    customer = create_client()
    product = create_product()
    create_order(customer["id"], [(product["id"], 1)])

    async def always_stale(db, year_month):
        return None

    monkeypatch.setattr(invoice_crud, "get_last_invoice_number", always_stale)

    response = client.post(
        "/api/orders",
        json={"clientId": customer["id"], "products": [{"productId": product["id"], "quantity": 1}]},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert "número de factura" in response.json()["detail"]
    assert len(client.get("/api/orders", headers=admin_headers).json()) == 1
    assert len(client.get("/api/invoices", headers=admin_headers).json()) == 1


def test_other_integrity_errors_are_not_retried(client, create_client):
    create_client(email="ana@x.com")
    calls = {"n": 0}

    async def run():
        async with AsyncSessionLocal() as db:
            async def work():
                calls["n"] += 1
                db.add(Client(name="Ana", lastname="Diaz", email="ana@x.com", phone="555"))
                await db.flush()

            await run_unit_of_work(db, work)

    with pytest.raises(IntegrityError) as exc_info:
        asyncio.run(run())

    assert calls["n"] == 1
    assert not is_invoice_number_conflict(exc_info.value)


def test_number_conflict_is_recognised(client, create_client, create_product, create_order):
    customer = create_client()
    product = create_product()
    existing = create_order(customer["id"], [(product["id"], 1)])["invoice"]["number"]

    async def run():
        async with AsyncSessionLocal() as db:
            db.add(Invoice(number=existing, subtotal=1, tax=0, total=1))
            await db.flush()

    with pytest.raises(IntegrityError) as exc_info:
        asyncio.run(run())

    assert is_invoice_number_conflict(exc_info.value)
