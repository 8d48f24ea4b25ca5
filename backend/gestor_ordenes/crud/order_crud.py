# backend/gestor_ordenes/crud/order_crud.py
"""
Este archivo contiene las operaciones CRUD para el modelo Order.

Las funciones que escriben (add_order, replace_order_lines) no confirman la
transacción: sólo hacen flush para que el servicio de órdenes pueda guardar
orden, líneas y factura en una única unidad de trabajo.
"""

from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from gestor_ordenes.db.models.order_model import Order, OrderProduct, OrderStatus
from gestor_ordenes.db.models.product_model import Product

# Par (producto, cantidad) ya resuelto contra la base de datos
OrderLine = Tuple[Product, int]


def _order_options():
    return (
        selectinload(Order.client),
        selectinload(Order.lines).selectinload(OrderProduct.product),
        selectinload(Order.invoice),
    )


def compute_total(lines: Iterable[OrderLine]) -> Decimal:
    """Suma precio actual x cantidad de cada línea."""
    return sum((Decimal(product.price) * quantity for product, quantity in lines), Decimal("0.00"))


async def get_order(db: AsyncSession, order_id: int) -> Optional[Order]:
    """
    Obtiene una orden con cliente, líneas (y sus productos) y factura.
    Si la orden ya está en la sesión sólo se cargan las relaciones pendientes.
    """
    result = await db.execute(
        select(Order)
        .options(*_order_options())
        .filter(Order.id == order_id)
    )
    return result.scalars().first()


async def get_orders(db: AsyncSession, skip: int = 0, limit: int = 100) -> List[Order]:
    result = await db.execute(
        select(Order).options(*_order_options()).order_by(Order.id).offset(skip).limit(limit)
    )
    return list(result.scalars().all())


async def get_orders_created_between(db: AsyncSession, start=None, end=None) -> List[Order]:
    """Órdenes con sus líneas creadas en [start, end); los límites son opcionales."""
    query = select(Order).options(selectinload(Order.lines).selectinload(OrderProduct.product))
    if start is not None:
        query = query.filter(Order.created_at >= start)
    if end is not None:
        query = query.filter(Order.created_at < end)
    result = await db.execute(query.order_by(Order.id))
    return list(result.scalars().all())


async def count_orders_by_status(db: AsyncSession, status: OrderStatus, start=None, end=None) -> int:
    """Órdenes en un estado, opcionalmente creadas en [start, end)."""
    query = select(func.count(Order.id)).filter(Order.status == status.value)
    if start is not None:
        query = query.filter(Order.created_at >= start)
    if end is not None:
        query = query.filter(Order.created_at < end)
    result = await db.execute(query)
    return result.scalar() or 0


def _build_lines(lines: Iterable[OrderLine]) -> List[OrderProduct]:
    return [
        OrderProduct(product=product, quantity=quantity, price=product.price)
        for product, quantity in lines
    ]


async def add_order(db: AsyncSession, client_id: int, lines: List[OrderLine]) -> Order:
    """Inserta la orden en estado pending con una línea por producto (precio copiado)."""
    db_order = Order(
        client_id=client_id,
        total=compute_total(lines),
        status=OrderStatus.PENDING.value,
        lines=_build_lines(lines),
    )
    db.add(db_order)
    await db.flush()
    return db_order


async def replace_order_lines(db: AsyncSession, db_order: Order, lines: List[OrderLine]) -> Order:
    """Borra las líneas actuales, crea las nuevas y recalcula el total. Requiere `lines` cargado."""
    db_order.lines.clear()
    await db.flush()
    db_order.lines.extend(_build_lines(lines))
    db_order.total = compute_total(lines)
    await db.flush()
    return db_order


async def delete_order(db: AsyncSession, db_order: Order) -> None:
    await db.delete(db_order)
    await db.commit()
