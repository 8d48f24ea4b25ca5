# backend/gestor_ordenes/api/endpoints/clients.py
"""
Endpoints REST para operaciones CRUD de clientes.
"""

from typing import List
import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from gestor_ordenes.api import deps
from gestor_ordenes.core.security import admin_only, staff_only
from gestor_ordenes.schemas import client_schema
from gestor_ordenes.services.client_service import client_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=List[client_schema.ClientResponse], dependencies=[Depends(staff_only)])
async def read_clients(
    db: AsyncSession = Depends(deps.get_db),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
):
    """Lista los clientes registrados."""
    return await client_service.list_clients(db, skip=skip, limit=limit)


@router.get("/{client_id}", response_model=client_schema.ClientResponse, dependencies=[Depends(staff_only)])
async def read_client(client_id: int, db: AsyncSession = Depends(deps.get_db)):
    return await client_service.get_client(db, client_id)


@router.post(
    "",
    response_model=client_schema.ClientResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(staff_only)],
)
async def create_client(client_in: client_schema.ClientCreate, db: AsyncSession = Depends(deps.get_db)):
    """
    **Crear Cliente**

    Todos los datos son requeridos y el email debe tener un formato válido.
    Un email ya registrado devuelve 400.
    """
    logger.info(f"🆕 CLIENTE: Creando cliente '{client_in.email}'")
    client = await client_service.create_client(db, client_in)
    logger.info(f"✅ CLIENTE: Creado con ID {client.id}")
    return client


@router.put("/{client_id}", response_model=client_schema.ClientResponse, dependencies=[Depends(staff_only)])
async def update_client(
    client_id: int,
    client_in: client_schema.ClientUpdate,
    db: AsyncSession = Depends(deps.get_db),
):
    """Actualización parcial: sólo cambian los campos enviados."""
    logger.info(f"🔄 CLIENTE: Actualizando cliente {client_id}")
    return await client_service.update_client(db, client_id, client_in)


@router.delete("/{client_id}", response_model=client_schema.ClientDeleted, dependencies=[Depends(admin_only)])
async def delete_client(client_id: int, db: AsyncSession = Depends(deps.get_db)):
    logger.info(f"🗑️ CLIENTE: Eliminando cliente {client_id}")
    client = await client_service.delete_client(db, client_id)
    return {"message": "Cliente eliminado", "client": client}
