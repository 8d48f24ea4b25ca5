# backend/gestor_ordenes/schemas/report_schema.py
"""
Esquemas de los reportes. Los nombres de campo se mantienen en español
porque forman parte del contrato público de /api/reports.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from .client_schema import ClientResponse
from .invoice_schema import InvoiceResponse


class SalesReport(BaseModel):
    cantidad: int
    total: float
    facturas: List[InvoiceResponse]


class ProductSales(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    productId: Optional[int] = None
    nombre: str
    cantidad: int
    total: float


class ClientSales(BaseModel):
    cliente: Optional[ClientResponse] = None
    cantidad: int
    total: float


class SummaryReport(BaseModel):
    totalFacturas: int
    totalIngresos: float
    facturasPendientes: int
