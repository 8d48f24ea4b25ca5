from datetime import datetime

from gestor_ordenes.api import deps
from gestor_ordenes.core.config import Settings
from gestor_ordenes.db.models.invoice_model import Invoice
from gestor_ordenes.main import app
from gestor_ordenes.services.email_service import EmailService, render_invoice_html


def test_successful_send_is_logged(client, admin_headers, create_client, create_product, create_order):
    customer = create_client()
    product = create_product()
    invoice = create_order(customer["id"], [(product["id"], 1)])["invoice"]

    logs = client.get("/api/email-logs", headers=admin_headers).json()

    assert len(logs) == 1
    assert logs[0]["to"] == customer["email"]
    assert logs[0]["subject"] == f"Factura {invoice['number']} - Tu Compra"
    assert logs[0]["status"] == "success"
    assert logs[0]["attempts"] == 1
    assert logs[0]["error"] is None


def test_failed_send_is_logged_as_error(client, admin_headers, email_service, create_client, create_product, create_order):
    email_service.fail = True
    customer = create_client()
    product = create_product()
    create_order(customer["id"], [(product["id"], 1)])

    logs = client.get("/api/email-logs", headers=admin_headers).json()

    assert len(logs) == 1
    assert logs[0]["status"] == "error"
    assert logs[0]["error"] == "SMTP caído"


def test_send_is_retried_up_to_the_configured_attempts(
    client, admin_headers, email_service, create_client, create_product, create_order
):
    email_service.settings = Settings(EMAIL_MAX_ATTEMPTS=3)
    email_service.fail = True
    customer = create_client()
    product = create_product()
    create_order(customer["id"], [(product["id"], 1)])

    logs = client.get("/api/email-logs", headers=admin_headers).json()

    assert email_service.deliver_calls == 3
    assert len(logs) == 1
    assert logs[0]["status"] == "error"
    assert logs[0]["attempts"] == 3


def test_missing_smtp_configuration_is_logged(client, admin_headers, create_client, create_product, create_order):
    unconfigured = EmailService(Settings(SMTP_HOST=None, SMTP_USER=None, SMTP_PASSWORD=None))
    app.dependency_overrides[deps.get_email_service] = lambda: unconfigured
    customer = create_client()
    product = create_product()

    create_order(customer["id"], [(product["id"], 1)])

    logs = client.get("/api/email-logs", headers=admin_headers).json()
    assert logs[0]["status"] == "error"
    assert logs[0]["error"] == "Configuración SMTP no encontrada"


def test_logs_are_listed_newest_first(client, admin_headers, create_client, create_product, create_order):
    product = create_product()
    first = create_client()
    second = create_client()
    create_order(first["id"], [(product["id"], 1)])
    create_order(second["id"], [(product["id"], 1)])

    logs = client.get("/api/email-logs", headers=admin_headers).json()

    assert [log["to"] for log in logs] == [second["email"], first["email"]]


def test_get_single_log(client, admin_headers, create_client, create_product, create_order):
    customer = create_client()
    product = create_product()
    create_order(customer["id"], [(product["id"], 1)])
    log_id = client.get("/api/email-logs", headers=admin_headers).json()[0]["id"]

    response = client.get(f"/api/email-logs/{log_id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["to"] == customer["email"]


def test_unknown_log_is_404(client, admin_headers):
    response = client.get("/api/email-logs/42", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Log no encontrado"


def test_email_logs_are_admin_only(client, empleado_headers):
    response = client.get("/api/email-logs", headers=empleado_headers)
    assert response.status_code == 403


def test_invoice_html_escapes_user_data():
    invoice = Invoice(number="FACT-202401-0001", date=datetime(2024, 1, 15), subtotal=10, tax=1.9, total=11.9)
    order_data = {
        "id": 1,
        "client_name": "<script>alert(1)</script>",
        "client_email": "ana@x.com",
        "client_phone": "555",
        "items": [{"name": "Tornillo <b>", "quantity": 2, "price": 5.0}],
    }

    html = render_invoice_html(order_data, invoice)

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "Tornillo &lt;b&gt;" in html
    assert "FACT-202401-0001" in html
    assert "15/01/2024" in html
    assert "$11.90" in html
