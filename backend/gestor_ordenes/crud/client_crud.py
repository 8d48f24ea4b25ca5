# backend/gestor_ordenes/crud/client_crud.py
"""
Este archivo contiene las operaciones CRUD para el modelo Client.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gestor_ordenes.db.models.client_model import Client
from gestor_ordenes.schemas.client_schema import ClientCreate


async def get_client(db: AsyncSession, client_id: int) -> Optional[Client]:
    return await db.get(Client, client_id)


async def get_client_by_email(db: AsyncSession, email: str) -> Optional[Client]:
    """
    Busca un cliente por su dirección de correo electrónico de forma asíncrona.
    """
    result = await db.execute(select(Client).filter(Client.email == email))
    return result.scalars().first()


async def get_clients(db: AsyncSession, skip: int = 0, limit: int = 100) -> List[Client]:
    result = await db.execute(select(Client).order_by(Client.id).offset(skip).limit(limit))
    return list(result.scalars().all())


async def create_client(db: AsyncSession, client_in: ClientCreate) -> Client:
    db_client = Client(**client_in.model_dump())
    db.add(db_client)
    await db.commit()
    await db.refresh(db_client)
    return db_client


async def update_client(db: AsyncSession, db_client: Client, changes: Dict[str, Any]) -> Client:
    """Aplica sólo los campos presentes en `changes`."""
    for field, value in changes.items():
        setattr(db_client, field, value)
    await db.commit()
    await db.refresh(db_client)
    return db_client


async def delete_client(db: AsyncSession, db_client: Client) -> None:
    await db.delete(db_client)
    await db.commit()
