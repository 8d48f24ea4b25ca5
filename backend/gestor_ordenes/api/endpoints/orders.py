# backend/gestor_ordenes/api/endpoints/orders.py
"""
Endpoints de órdenes. La creación dispara la facturación y el envío del correo.
"""

from typing import List
import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from gestor_ordenes.api import deps
from gestor_ordenes.core.security import admin_only, staff_only
from gestor_ordenes.schemas import order_schema
from gestor_ordenes.schemas.base_schema import MessageResponse
from gestor_ordenes.schemas.invoice_schema import OrderCreatedResponse
from gestor_ordenes.services.email_service import EmailService
from gestor_ordenes.services.order_service import order_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=List[order_schema.OrderResponse], dependencies=[Depends(staff_only)])
async def read_orders(
    db: AsyncSession = Depends(deps.get_db),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
):
    return await order_service.list_orders(db, skip=skip, limit=limit)


@router.get("/{order_id}", response_model=order_schema.OrderResponse, dependencies=[Depends(staff_only)])
async def read_order(order_id: int, db: AsyncSession = Depends(deps.get_db)):
    return await order_service.get_order(db, order_id)


@router.post(
    "",
    response_model=OrderCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(staff_only)],
)
async def create_order(
    order_in: order_schema.OrderCreate,
    db: AsyncSession = Depends(deps.get_db),
    email_service: EmailService = Depends(deps.get_email_service),
):
    """
    **Crear Orden**

    Calcula el total con los precios actuales, guarda las líneas, emite la
    factura (subtotal + 19% de impuesto) y la envía por correo al cliente.
    Un fallo del correo no impide la creación.
    """
    logger.info(f"🛒 ORDEN: Nueva orden para el cliente {order_in.client_id} con {len(order_in.products)} productos")
    order, invoice = await order_service.create_order(db, order_in, email_service)
    return {"order": order, "invoice": invoice}


@router.put("/{order_id}", response_model=order_schema.OrderResponse, dependencies=[Depends(staff_only)])
async def update_order(
    order_id: int,
    order_in: order_schema.OrderUpdate,
    db: AsyncSession = Depends(deps.get_db),
):
    logger.info(f"🔄 ORDEN: Actualizando orden {order_id}")
    return await order_service.update_order(db, order_id, order_in)


@router.delete("/{order_id}", response_model=MessageResponse, dependencies=[Depends(admin_only)])
async def delete_order(order_id: int, db: AsyncSession = Depends(deps.get_db)):
    logger.info(f"🗑️ ORDEN: Eliminando orden {order_id}")
    await order_service.delete_order(db, order_id)
    return {"message": "Orden eliminada correctamente"}
