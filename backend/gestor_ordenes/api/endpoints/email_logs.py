# backend/gestor_ordenes/api/endpoints/email_logs.py
"""
Consulta del registro de envíos de correo (sólo administradores).
"""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from gestor_ordenes.api import deps
from gestor_ordenes.core.exceptions import NotFoundError
from gestor_ordenes.core.security import admin_only
from gestor_ordenes.crud import email_log_crud
from gestor_ordenes.schemas.email_log_schema import EmailLogResponse

router = APIRouter(dependencies=[Depends(admin_only)])


@router.get("", response_model=List[EmailLogResponse])
async def read_email_logs(
    db: AsyncSession = Depends(deps.get_db),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
):
    """Logs de envío, los más recientes primero."""
    return await email_log_crud.get_email_logs(db, skip=skip, limit=limit)


@router.get("/{log_id}", response_model=EmailLogResponse)
async def read_email_log(log_id: int, db: AsyncSession = Depends(deps.get_db)):
    log = await email_log_crud.get_email_log(db, log_id)
    if not log:
        raise NotFoundError("Log no encontrado")
    return log
