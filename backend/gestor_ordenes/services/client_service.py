# backend/gestor_ordenes/services/client_service.py
"""
Reglas de negocio de clientes: el email es único entre todos los clientes.
"""

from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gestor_ordenes.core.exceptions import ConflictError, NotFoundError
from gestor_ordenes.crud import client_crud
from gestor_ordenes.db.models.client_model import Client
from gestor_ordenes.schemas.client_schema import ClientCreate, ClientUpdate

DUPLICATE_EMAIL = "El email ya está registrado"


class ClientService:

    async def get_client(self, db: AsyncSession, client_id: int) -> Client:
        client = await client_crud.get_client(db, client_id)
        if not client:
            raise NotFoundError("Cliente no encontrado")
        return client

    async def list_clients(self, db: AsyncSession, skip: int = 0, limit: int = 100) -> List[Client]:
        return await client_crud.get_clients(db, skip=skip, limit=limit)

    async def create_client(self, db: AsyncSession, client_in: ClientCreate) -> Client:
        if await client_crud.get_client_by_email(db, client_in.email):
            raise ConflictError(DUPLICATE_EMAIL)
        try:
            return await client_crud.create_client(db, client_in)
        except IntegrityError:
            # Otra petición registró el mismo email entre la consulta y el commit
            await db.rollback()
            raise ConflictError(DUPLICATE_EMAIL)

    async def update_client(self, db: AsyncSession, client_id: int, client_in: ClientUpdate) -> Client:
        client = await self.get_client(db, client_id)
        changes = client_in.model_dump(exclude_unset=True, exclude_none=True)
        new_email = changes.get("email")
        if new_email and new_email != client.email:
            existing = await client_crud.get_client_by_email(db, new_email)
            if existing and existing.id != client.id:
                raise ConflictError(DUPLICATE_EMAIL)
        try:
            return await client_crud.update_client(db, client, changes)
        except IntegrityError:
            await db.rollback()
            raise ConflictError(DUPLICATE_EMAIL)

    async def delete_client(self, db: AsyncSession, client_id: int) -> Client:
        client = await self.get_client(db, client_id)
        await client_crud.delete_client(db, client)
        return client


client_service = ClientService()
