# backend/tests/conftest.py
"""
Configuración común de los tests.

La base de datos es un fichero SQLite temporal que se recrea en cada test y
el servicio de correo se sustituye por uno que guarda los mensajes en memoria.
"""

import asyncio
import os
import tempfile

_db_dir = tempfile.mkdtemp(prefix="gestor_ordenes_tests_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_db_dir, 'test.sqlite')}"
os.environ["JWT_SECRET_KEY"] = "clave-solo-para-tests"
for _var in ("SMTP_HOST", "SMTP_PORT", "SMTP_USER", "SMTP_PASSWORD", "SENDER_EMAIL", "EMAIL_MAX_ATTEMPTS"):
    os.environ.pop(_var, None)

import pytest
from fastapi.testclient import TestClient

from gestor_ordenes.api import deps
from gestor_ordenes.core.config import settings
from gestor_ordenes.core.security import create_access_token
from gestor_ordenes.db.database import drop_db, init_db
from gestor_ordenes.main import app
from gestor_ordenes.services.email_service import EmailService


class RecordingEmailService(EmailService):
    """Servicio de correo que no abre conexiones SMTP: guarda cada envío."""

    def __init__(self, config=None):
        super().__init__(config or settings)
        self.sent = []
        self.fail = False
        self.deliver_calls = 0

    def is_configured(self) -> bool:
        return True

    async def _deliver(self, to, subject, html):
        self.deliver_calls += 1
        if self.fail:
            raise ConnectionError("SMTP caído")
        self.sent.append({"to": to, "subject": subject, "html": html})


@pytest.fixture
def email_service():
    return RecordingEmailService()


@pytest.fixture
def client(email_service):
    asyncio.run(drop_db())
    asyncio.run(init_db())
    app.dependency_overrides[deps.get_email_service] = lambda: email_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _auth_headers(role: str, email: str) -> dict:
    token = create_access_token({"sub": email, "role": role, "user_id": 1})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    return _auth_headers("admin", "admin@tienda.com")


@pytest.fixture
def empleado_headers():
    return _auth_headers("empleado", "empleado@tienda.com")


@pytest.fixture
def create_client(client, admin_headers):
    counter = {"n": 0}

    def _create(**overrides):
        counter["n"] += 1
        payload = {
            "name": "Ana",
            "lastname": "Diaz",
            "email": f"cliente{counter['n']}@correo.com",
            "phone": "555",
        }
        payload.update(overrides)
        response = client.post("/api/clients", json=payload, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_product(client, admin_headers):
    def _create(name="Martillo", price=10.0, stock=5, **extra):
        payload = {"name": name, "price": price, "stock": stock, **extra}
        response = client.post("/api/products", json=payload, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_order(client, admin_headers):
    def _create(client_id, lines):
        payload = {
            "clientId": client_id,
            "products": [{"productId": pid, "quantity": qty} for pid, qty in lines],
        }
        response = client.post("/api/orders", json=payload, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
