# backend/gestor_ordenes/crud/invoice_crud.py
"""
Operaciones CRUD para facturas y asignación del número de factura.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from gestor_ordenes.db.models.invoice_model import Invoice
from gestor_ordenes.db.models.order_model import Order
from gestor_ordenes.services import billing


def _invoice_options():
    return (selectinload(Invoice.client), selectinload(Invoice.order))


def _invoice_date_filters(query, start=None, end=None):
    """Filtra por fecha de factura en [start, end)."""
    if start is not None:
        query = query.filter(Invoice.date >= start)
    if end is not None:
        query = query.filter(Invoice.date < end)
    return query


async def get_last_invoice_number(db: AsyncSession, year_month: str) -> Optional[str]:
    """
    Número más alto emitido en el mes. Se ordena por longitud y luego por valor
    para que FACT-202401-10000 quede por encima de FACT-202401-9999.
    """
    prefix = billing.invoice_prefix(year_month)
    result = await db.execute(
        select(Invoice.number)
        .filter(Invoice.number.like(f"{prefix}%"))
        .order_by(func.length(Invoice.number).desc(), Invoice.number.desc())
        .limit(1)
    )
    return result.scalar()


async def allocate_invoice_number(db: AsyncSession, current_date: datetime) -> str:
    year_month = billing.year_month_key(current_date)
    last_number = await get_last_invoice_number(db, year_month)
    return billing.next_invoice_number(last_number, current_date)


async def add_invoice(
    db: AsyncSession,
    db_order: Order,
    number: str,
    date: datetime,
    subtotal: Decimal,
    tax: Decimal,
    total: Decimal,
) -> Invoice:
    """Inserta la factura sin confirmar; el flush dispara el control de unicidad del número."""
    db_invoice = Invoice(
        number=number,
        date=date,
        client_id=db_order.client_id,
        order=db_order,
        subtotal=subtotal,
        tax=tax,
        total=total,
    )
    db.add(db_invoice)
    await db.flush()
    return db_invoice


async def get_invoice(db: AsyncSession, invoice_id: int) -> Optional[Invoice]:
    result = await db.execute(
        select(Invoice)
        .options(*_invoice_options())
        .filter(Invoice.id == invoice_id)
    )
    return result.scalars().first()


async def get_invoice_by_order(db: AsyncSession, order_id: int) -> Optional[Invoice]:
    result = await db.execute(select(Invoice).filter(Invoice.order_id == order_id))
    return result.scalars().first()


async def get_invoices(db: AsyncSession, skip: int = 0, limit: int = 100) -> List[Invoice]:
    result = await db.execute(
        select(Invoice).options(*_invoice_options()).order_by(Invoice.id).offset(skip).limit(limit)
    )
    return list(result.scalars().all())


async def get_invoices_between(db: AsyncSession, start=None, end=None) -> List[Invoice]:
    """Facturas con fecha en [start, end); los límites son opcionales."""
    query = _invoice_date_filters(select(Invoice).options(*_invoice_options()), start, end)
    result = await db.execute(query.order_by(Invoice.date, Invoice.id))
    return list(result.scalars().all())


async def count_invoices(db: AsyncSession, start=None, end=None) -> int:
    result = await db.execute(_invoice_date_filters(select(func.count(Invoice.id)), start, end))
    return result.scalar() or 0


async def sum_invoice_totals(db: AsyncSession, start=None, end=None) -> Decimal:
    query = _invoice_date_filters(select(func.coalesce(func.sum(Invoice.total), 0)), start, end)
    result = await db.execute(query)
    return Decimal(str(result.scalar() or 0)).quantize(Decimal("0.01"))
