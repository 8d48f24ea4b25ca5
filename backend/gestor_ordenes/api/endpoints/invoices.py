# backend/gestor_ordenes/api/endpoints/invoices.py
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from gestor_ordenes.api import deps
from gestor_ordenes.core.security import staff_only
from gestor_ordenes.schemas import invoice_schema
from gestor_ordenes.services.invoice_service import invoice_service

router = APIRouter(dependencies=[Depends(staff_only)])


@router.get("", response_model=List[invoice_schema.InvoiceResponse])
async def read_invoices(
    db: AsyncSession = Depends(deps.get_db),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
):
    return await invoice_service.list_invoices(db, skip=skip, limit=limit)


@router.get("/{invoice_id}", response_model=invoice_schema.InvoiceResponse)
async def read_invoice(invoice_id: int, db: AsyncSession = Depends(deps.get_db)):
    return await invoice_service.get_invoice(db, invoice_id)


@router.post("/generate", response_model=invoice_schema.InvoiceResponse, status_code=status.HTTP_201_CREATED)
async def generate_invoice(
    request: invoice_schema.InvoiceGenerate,
    db: AsyncSession = Depends(deps.get_db),
):
    """
    **Generar Factura Manualmente**

    Emite la factura de una orden que todavía no la tiene (por ejemplo, órdenes
    cuya facturación automática falló). Una orden sólo puede tener una factura.
    """
    return await invoice_service.generate_invoice(db, request.order_id)
