# backend/gestor_ordenes/api/endpoints/reports.py
"""
Reportes de ventas (sólo administradores).

Parámetros opcionales `desde` y `hasta` en formato ISO (YYYY-MM-DD).
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gestor_ordenes.api import deps
from gestor_ordenes.core.security import admin_only
from gestor_ordenes.schemas import report_schema
from gestor_ordenes.services.report_service import report_service

router = APIRouter(dependencies=[Depends(admin_only)])


@router.get("/ventas", response_model=report_schema.SalesReport)
async def sales_report(
    desde: Optional[date] = None,
    hasta: Optional[date] = None,
    db: AsyncSession = Depends(deps.get_db),
):
    """Ventas totales (cantidad y suma de facturas) en el periodo."""
    return await report_service.sales(db, desde, hasta)


@router.get("/ventas-producto", response_model=List[report_schema.ProductSales])
async def sales_by_product_report(
    desde: Optional[date] = None,
    hasta: Optional[date] = None,
    db: AsyncSession = Depends(deps.get_db),
):
    return await report_service.sales_by_product(db, desde, hasta)


@router.get("/ventas-cliente", response_model=List[report_schema.ClientSales])
async def sales_by_client_report(
    desde: Optional[date] = None,
    hasta: Optional[date] = None,
    db: AsyncSession = Depends(deps.get_db),
):
    return await report_service.sales_by_client(db, desde, hasta)


@router.get("/resumen", response_model=report_schema.SummaryReport)
async def summary_report(
    desde: Optional[date] = None,
    hasta: Optional[date] = None,
    db: AsyncSession = Depends(deps.get_db),
):
    """Facturas emitidas, ingresos totales y órdenes pendientes en el periodo."""
    return await report_service.summary(db, desde, hasta)
