# backend/gestor_ordenes/schemas/order_schema.py
"""
Se encarga de definir los esquemas Pydantic para las órdenes y sus líneas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from gestor_ordenes.db.models.order_model import OrderStatus
from .base_schema import CamelModel
from .client_schema import ClientResponse


class OrderLineIn(CamelModel):
    """Producto y cantidad solicitados en una orden."""
    product_id: int = Field(..., description="ID del producto")
    quantity: int = Field(1, gt=0, description="Cantidad del producto")


class OrderCreate(CamelModel):
    client_id: int = Field(..., description="ID del cliente")
    products: List[OrderLineIn] = Field(..., min_length=1, description="Productos de la orden")


class OrderUpdate(CamelModel):
    """Si llegan productos se reemplazan todas las líneas; el estado se valida contra las transiciones."""
    status: Optional[OrderStatus] = None
    products: Optional[List[OrderLineIn]] = None


class OrderLineResponse(CamelModel):
    product_id: Optional[int] = None
    name: Optional[str] = None
    quantity: int
    price: float


class InvoiceSummary(CamelModel):
    id: int
    number: str
    date: datetime
    subtotal: float
    tax: float
    total: float


class OrderSummary(CamelModel):
    """Orden sin relaciones anidadas, usada dentro de otras respuestas."""
    id: int
    client_id: Optional[int] = None
    total: float
    status: OrderStatus
    created_at: datetime
    updated_at: datetime


class OrderResponse(OrderSummary):
    client: Optional[ClientResponse] = None
    products: List[OrderLineResponse] = []
    invoice: Optional[InvoiceSummary] = None
