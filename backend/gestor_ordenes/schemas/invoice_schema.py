# backend/gestor_ordenes/schemas/invoice_schema.py
from datetime import datetime
from typing import Optional

from pydantic import Field

from .base_schema import CamelModel
from .client_schema import ClientResponse
from .order_schema import OrderResponse, OrderSummary


class InvoiceGenerate(CamelModel):
    order_id: int = Field(..., description="ID de la orden a facturar")


class InvoiceResponse(CamelModel):
    id: int
    number: str
    date: datetime
    client_id: Optional[int] = None
    order_id: Optional[int] = None
    subtotal: float
    tax: float
    total: float
    created_at: datetime
    client: Optional[ClientResponse] = None
    order: Optional[OrderSummary] = None


class OrderCreatedResponse(CamelModel):
    """Respuesta de la creación de una orden: la orden completa y su factura."""
    order: OrderResponse
    invoice: InvoiceResponse
