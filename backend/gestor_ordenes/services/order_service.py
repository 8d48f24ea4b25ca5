# backend/gestor_ordenes/services/order_service.py

"""
Capa de servicios para el flujo de órdenes.

Creación de una orden:
1. Validar cliente y productos.
2. En una sola transacción: orden (pending), líneas con el precio copiado
   del producto y factura con número secuencial del mes.
3. Releer la orden completa.
4. Enviar la factura por correo. Un fallo del envío se registra en el log
   y no afecta a la orden ni a la factura ya guardadas.
"""

from typing import List, Optional, Tuple
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from gestor_ordenes.core.exceptions import ConflictError, EmailDeliveryError, NotFoundError, ValidationError
from gestor_ordenes.crud import client_crud, invoice_crud, order_crud, product_crud
from gestor_ordenes.db.models.invoice_model import Invoice
from gestor_ordenes.db.models.order_model import ALLOWED_STATUS_TRANSITIONS, Order, OrderStatus
from gestor_ordenes.schemas.order_schema import OrderCreate, OrderLineIn, OrderUpdate
from gestor_ordenes.services.email_service import EmailService
from gestor_ordenes.services.invoice_service import issue_invoice, run_unit_of_work

logger = logging.getLogger(__name__)


class OrderService:
    """
    Servicio para operaciones de negocio relacionadas con órdenes.
    """

    async def _resolve_lines(self, db: AsyncSession, items: List[OrderLineIn]) -> List[order_crud.OrderLine]:
        """Empareja cada línea solicitada con su producto; 404 con el primer ID inexistente."""
        if not items:
            raise ValidationError("Datos incompletos o inválidos")
        products = await product_crud.get_products_by_ids(db, (item.product_id for item in items))
        lines = []
        for item in items:
            product = products.get(item.product_id)
            if product is None:
                raise NotFoundError(f"Producto con ID {item.product_id} no encontrado")
            if item.quantity < 1:
                raise ValidationError("La cantidad de cada producto debe ser mayor que cero")
            lines.append((product, item.quantity))
        return lines

    async def create_order(
        self, db: AsyncSession, order_in: OrderCreate, email_service: EmailService
    ) -> Tuple[Order, Invoice]:
        async def work() -> Tuple[int, int]:
            client = await client_crud.get_client(db, order_in.client_id)
            if not client:
                raise NotFoundError("Cliente no encontrado")
            lines = await self._resolve_lines(db, order_in.products)
            db_order = await order_crud.add_order(db, client_id=client.id, lines=lines)
            invoice = await issue_invoice(db, db_order)
            return db_order.id, invoice.id

        order_id, invoice_id = await run_unit_of_work(db, work)
        logger.info(f"Orden {order_id} creada con factura {invoice_id}")

        order = await order_crud.get_order(db, order_id)
        invoice = await invoice_crud.get_invoice(db, invoice_id)

        try:
            await email_service.send_invoice(db, order, invoice)
        except EmailDeliveryError as e:
            logger.error(f"Error al enviar la factura de la orden {order_id}: {e}")

        return order, invoice

    def _check_transition(self, current: str, new: OrderStatus) -> None:
        current_status = OrderStatus(current)
        if new == current_status:
            return
        if new not in ALLOWED_STATUS_TRANSITIONS[current_status]:
            raise ConflictError(
                f"Transición de estado no permitida: {current_status.value} -> {new.value}"
            )

    async def update_order(self, db: AsyncSession, order_id: int, order_in: OrderUpdate) -> Order:
        """
        Reemplaza las líneas (si llegan productos) y/o cambia el estado.
        Todo se guarda en una transacción; un producto inexistente no deja cambios a medias.
        """
        db_order = await order_crud.get_order(db, order_id)
        if not db_order:
            raise NotFoundError("Orden no encontrada")

        try:
            if order_in.products:
                lines = await self._resolve_lines(db, order_in.products)
                await order_crud.replace_order_lines(db, db_order, lines)
                logger.info(f"Orden {order_id}: líneas reemplazadas, nuevo total {db_order.total}")
            if order_in.status is not None:
                self._check_transition(db_order.status, order_in.status)
                db_order.status = order_in.status.value
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        return await order_crud.get_order(db, order_id)

    async def get_order(self, db: AsyncSession, order_id: int) -> Order:
        db_order = await order_crud.get_order(db, order_id)
        if not db_order:
            raise NotFoundError("Orden no encontrada")
        return db_order

    async def list_orders(self, db: AsyncSession, skip: int = 0, limit: int = 100) -> List[Order]:
        return await order_crud.get_orders(db, skip=skip, limit=limit)

    async def delete_order(self, db: AsyncSession, order_id: int) -> None:
        db_order = await order_crud.get_order(db, order_id)
        if not db_order:
            raise NotFoundError("Orden no encontrada")
        await order_crud.delete_order(db, db_order)


order_service = OrderService()
