# backend/gestor_ordenes/api/deps.py
"""
Dependencias inyectables en los endpoints: sesión de base de datos y servicio
de correo. Los tests las sustituyen con app.dependency_overrides.
"""

from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession
from gestor_ordenes.db.database import AsyncSessionLocal
from gestor_ordenes.core.config import settings
from gestor_ordenes.services.email_service import EmailService

_email_service = EmailService(settings)

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Una sesión por petición; se cierra al terminar aunque haya error."""
    async with AsyncSessionLocal() as session:
        yield session

def get_email_service() -> EmailService:
    return _email_service
