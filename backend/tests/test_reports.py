from datetime import date, timedelta


def _seed(create_client, create_product, create_order):
    ana = create_client(name="Ana", lastname="Diaz")
    luis = create_client(name="Luis", lastname="Rojas")
    hammer = create_product(name="Martillo", price=10.0)
    saw = create_product(name="Sierra", price=25.0)
    create_order(ana["id"], [(hammer["id"], 2)])
    create_order(ana["id"], [(saw["id"], 1)])
    create_order(luis["id"], [(hammer["id"], 1), (saw["id"], 2)])
    return ana, luis, hammer, saw


def test_sales_report(client, admin_headers, create_client, create_product, create_order):
    _seed(create_client, create_product, create_order)

    response = client.get("/api/reports/ventas", headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["cantidad"] == 3
    # 20 + 25 + 60 con 19% de impuesto
    assert body["total"] == 124.95
    assert len(body["facturas"]) == 3


def test_sales_by_product(client, admin_headers, create_client, create_product, create_order):
    _, _, hammer, saw = _seed(create_client, create_product, create_order)

    body = client.get("/api/reports/ventas-producto", headers=admin_headers).json()

    by_id = {row["productId"]: row for row in body}
    assert by_id[hammer["id"]] == {"productId": hammer["id"], "nombre": "Martillo", "cantidad": 3, "total": 30.0}
    assert by_id[saw["id"]] == {"productId": saw["id"], "nombre": "Sierra", "cantidad": 3, "total": 75.0}


def test_sales_by_product_groups_deleted_products(client, admin_headers, create_client, create_product, create_order):
    _, _, hammer, _ = _seed(create_client, create_product, create_order)
    client.delete(f"/api/products/{hammer['id']}", headers=admin_headers)

    body = client.get("/api/reports/ventas-producto", headers=admin_headers).json()

    deleted = [row for row in body if row["productId"] is None]
    assert deleted == [{"productId": None, "nombre": "Producto eliminado", "cantidad": 3, "total": 30.0}]


def test_sales_by_client(client, admin_headers, create_client, create_product, create_order):
    ana, luis, _, _ = _seed(create_client, create_product, create_order)

    body = client.get("/api/reports/ventas-cliente", headers=admin_headers).json()

    by_email = {row["cliente"]["email"]: row for row in body}
    assert by_email[ana["email"]]["cantidad"] == 2
    assert by_email[ana["email"]]["total"] == 53.55
    assert by_email[luis["email"]]["cantidad"] == 1
    assert by_email[luis["email"]]["total"] == 71.4


def test_summary(client, admin_headers, create_client, create_product, create_order):
    _seed(create_client, create_product, create_order)
    client.put("/api/orders/1", json={"status": "completed"}, headers=admin_headers)

    body = client.get("/api/reports/resumen", headers=admin_headers).json()

    assert body == {"totalFacturas": 3, "totalIngresos": 124.95, "facturasPendientes": 2}


def test_empty_summary(client, admin_headers):
    body = client.get("/api/reports/resumen", headers=admin_headers).json()
    assert body == {"totalFacturas": 0, "totalIngresos": 0.0, "facturasPendientes": 0}


def test_date_range_filters_results(client, admin_headers, create_client, create_product, create_order):
    _seed(create_client, create_product, create_order)
    today = date.today()
    tomorrow = today + timedelta(days=1)
    yesterday = today - timedelta(days=1)

    # El día de hoy, en UTC, queda dentro de [ayer, mañana]
    inside = client.get(
        "/api/reports/ventas", params={"desde": yesterday.isoformat(), "hasta": tomorrow.isoformat()},
        headers=admin_headers,
    ).json()
    future = client.get(
        "/api/reports/ventas", params={"desde": (tomorrow + timedelta(days=1)).isoformat()},
        headers=admin_headers,
    ).json()
    past = client.get(
        "/api/reports/ventas-producto", params={"hasta": (yesterday - timedelta(days=1)).isoformat()},
        headers=admin_headers,
    ).json()

    assert inside["cantidad"] == 3
    assert future == {"cantidad": 0, "total": 0.0, "facturas": []}
    assert past == []


def test_inverted_range_is_rejected(client, admin_headers):
    response = client.get(
        "/api/reports/ventas", params={"desde": "2024-02-01", "hasta": "2024-01-01"}, headers=admin_headers
    )
    assert response.status_code == 400


def test_malformed_date_is_rejected(client, admin_headers):
    response = client.get("/api/reports/ventas", params={"desde": "ayer"}, headers=admin_headers)
    assert response.status_code == 400


def test_summary_honours_date_range(client, admin_headers, create_client, create_product, create_order):
    _seed(create_client, create_product, create_order)
    today = date.today()

    inside = client.get(
        "/api/reports/resumen",
        params={"desde": (today - timedelta(days=1)).isoformat(), "hasta": (today + timedelta(days=1)).isoformat()},
        headers=admin_headers,
    ).json()
    future = client.get(
        "/api/reports/resumen", params={"desde": (today + timedelta(days=2)).isoformat()}, headers=admin_headers
    ).json()

    assert inside == {"totalFacturas": 3, "totalIngresos": 124.95, "facturasPendientes": 3}
    assert future == {"totalFacturas": 0, "totalIngresos": 0.0, "facturasPendientes": 0}


def test_summary_rejects_inverted_range(client, admin_headers):
    response = client.get(
        "/api/reports/resumen", params={"desde": "2024-02-01", "hasta": "2024-01-01"}, headers=admin_headers
    )
    assert response.status_code == 400
