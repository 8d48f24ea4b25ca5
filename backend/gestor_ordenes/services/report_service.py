# backend/gestor_ordenes/services/report_service.py
"""
Reportes de ventas calculados en cada petición (sin caché).

Todos aceptan un rango opcional [desde, hasta] de fechas; `hasta` incluye el
día completo.
"""

from collections import OrderedDict
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from gestor_ordenes.core.exceptions import ValidationError
from gestor_ordenes.crud import invoice_crud, order_crud
from gestor_ordenes.db.models.order_model import OrderStatus

DELETED_PRODUCT_NAME = "Producto eliminado"


def date_bounds(desde: Optional[date], hasta: Optional[date]) -> Tuple[Optional[datetime], Optional[datetime]]:
    """Convierte el rango de fechas en límites [inicio, fin) de tipo datetime."""
    if desde and hasta and desde > hasta:
        raise ValidationError("La fecha 'desde' no puede ser posterior a 'hasta'")
    start = datetime.combine(desde, time.min) if desde else None
    end = datetime.combine(hasta + timedelta(days=1), time.min) if hasta else None
    return start, end


class ReportService:

    async def sales(self, db: AsyncSession, desde: Optional[date] = None, hasta: Optional[date] = None) -> Dict[str, Any]:
        """Cantidad y suma de facturas emitidas en el rango."""
        start, end = date_bounds(desde, hasta)
        invoices = await invoice_crud.get_invoices_between(db, start, end)
        total = sum((Decimal(invoice.total) for invoice in invoices), Decimal("0"))
        return {"cantidad": len(invoices), "total": float(total), "facturas": invoices}

    async def sales_by_product(
        self, db: AsyncSession, desde: Optional[date] = None, hasta: Optional[date] = None
    ) -> List[Dict[str, Any]]:
        """
        Unidades e ingresos por producto, sobre las líneas de las órdenes creadas
        en el rango. Los ingresos usan el precio copiado en cada línea.
        """
        start, end = date_bounds(desde, hasta)
        orders = await order_crud.get_orders_created_between(db, start, end)
        products: "OrderedDict[Optional[int], Dict[str, Any]]" = OrderedDict()
        for order in orders:
            for line in order.lines:
                entry = products.get(line.product_id)
                if entry is None:
                    entry = {
                        "productId": line.product_id,
                        "nombre": line.product.name if line.product else DELETED_PRODUCT_NAME,
                        "cantidad": 0,
                        "total": Decimal("0"),
                    }
                    products[line.product_id] = entry
                entry["cantidad"] += line.quantity
                entry["total"] += Decimal(line.price) * line.quantity
        return [dict(entry, total=float(entry["total"])) for entry in products.values()]

    async def sales_by_client(
        self, db: AsyncSession, desde: Optional[date] = None, hasta: Optional[date] = None
    ) -> List[Dict[str, Any]]:
        start, end = date_bounds(desde, hasta)
        invoices = await invoice_crud.get_invoices_between(db, start, end)
        clients: "OrderedDict[Optional[int], Dict[str, Any]]" = OrderedDict()
        for invoice in invoices:
            entry = clients.setdefault(
                invoice.client_id, {"cliente": invoice.client, "cantidad": 0, "total": Decimal("0")}
            )
            entry["cantidad"] += 1
            entry["total"] += Decimal(invoice.total)
        return [dict(entry, total=float(entry["total"])) for entry in clients.values()]

    async def summary(self, db: AsyncSession, desde: Optional[date] = None, hasta: Optional[date] = None) -> Dict[str, Any]:
        """
        Facturas emitidas e ingresos (por fecha de factura) y órdenes pendientes
        (por fecha de creación) dentro del rango; sin rango, el histórico completo.
        """
        start, end = date_bounds(desde, hasta)
        return {
            "totalFacturas": await invoice_crud.count_invoices(db, start, end),
            "totalIngresos": float(await invoice_crud.sum_invoice_totals(db, start, end)),
            "facturasPendientes": await order_crud.count_orders_by_status(db, OrderStatus.PENDING, start, end),
        }


report_service = ReportService()
