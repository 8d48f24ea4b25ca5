# backend/gestor_ordenes/services/invoice_service.py
"""
Capa de servicios para la emisión de facturas.

La asignación del número de factura lee el último número del mes y lo
incrementa. Dos peticiones concurrentes pueden calcular el mismo número; la
restricción UNIQUE de invoices.number rechaza la segunda inserción y la unidad
de trabajo completa se repite (rollback, nueva lectura, nueva inserción) hasta
INVOICE_NUMBER_MAX_RETRIES veces.
"""

from datetime import datetime
from typing import Awaitable, Callable, List, Optional, TypeVar
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gestor_ordenes.core.config import settings
from gestor_ordenes.core.exceptions import ConflictError, NotFoundError
from gestor_ordenes.crud import invoice_crud, order_crud
from gestor_ordenes.db.models.invoice_model import INVOICE_NUMBER_CONSTRAINT, Invoice
from gestor_ordenes.db.models.mixins import utc_now
from gestor_ordenes.db.models.order_model import Order
from gestor_ordenes.services import billing

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_invoice_number_conflict(error: IntegrityError) -> bool:
    """
    True si el error viene de la unicidad de invoices.number. SQLite nombra la
    columna ("invoices.number") y PostgreSQL la restricción.
    """
    message = str(error.orig)
    return "invoices.number" in message or INVOICE_NUMBER_CONSTRAINT in message


async def run_unit_of_work(
    db: AsyncSession,
    work: Callable[[], Awaitable[T]],
    max_retries: Optional[int] = None,
) -> T:
    """
    Ejecuta `work` y confirma la transacción.

    Si el número de factura choca con otro ya guardado deshace todo lo hecho
    por `work` y lo vuelve a ejecutar. Cualquier otra excepción, incluidas las
    demás violaciones de integridad, deshace la transacción y se propaga.
    """
    attempts = max_retries or settings.INVOICE_NUMBER_MAX_RETRIES
    for attempt in range(1, attempts + 1):
        try:
            result = await work()
            await db.commit()
            return result
        except IntegrityError as e:
            await db.rollback()
            if not is_invoice_number_conflict(e):
                raise
            logger.warning(f"Número de factura duplicado (intento {attempt}/{attempts}): {e.orig}")
        except Exception:
            await db.rollback()
            raise
    raise ConflictError("No se pudo asignar un número de factura único, intente nuevamente")


async def issue_invoice(db: AsyncSession, db_order: Order, current_date: Optional[datetime] = None) -> Invoice:
    """Asigna número y guarda la factura de la orden sin confirmar la transacción."""
    current_date = current_date or utc_now()
    number = await invoice_crud.allocate_invoice_number(db, current_date)
    subtotal, tax, total = billing.invoice_totals(db_order.total)
    invoice = await invoice_crud.add_invoice(
        db, db_order, number=number, date=current_date, subtotal=subtotal, tax=tax, total=total
    )
    logger.info(f"Factura {number} emitida para la orden {db_order.id} (total {total})")
    return invoice


class InvoiceService:
    """Consulta de facturas y generación manual a partir de una orden existente."""

    async def generate_invoice(self, db: AsyncSession, order_id: int) -> Invoice:
        """
        Genera la factura de una orden que aún no la tiene.

        Raises:
            NotFoundError: la orden no existe.
            ConflictError: la orden ya tiene factura.
        """
        async def work() -> int:
            db_order = await order_crud.get_order(db, order_id)
            if not db_order:
                raise NotFoundError("Orden no encontrada")
            if db_order.invoice is not None:
                raise ConflictError("La orden ya tiene una factura")
            invoice = await issue_invoice(db, db_order)
            return invoice.id

        invoice_id = await run_unit_of_work(db, work)
        return await invoice_crud.get_invoice(db, invoice_id)

    async def get_invoice(self, db: AsyncSession, invoice_id: int) -> Invoice:
        invoice = await invoice_crud.get_invoice(db, invoice_id)
        if not invoice:
            raise NotFoundError("Factura no encontrada")
        return invoice

    async def list_invoices(self, db: AsyncSession, skip: int = 0, limit: int = 100) -> List[Invoice]:
        return await invoice_crud.get_invoices(db, skip=skip, limit=limit)


invoice_service = InvoiceService()
