# backend/gestor_ordenes/schemas/product_schema.py
"""
Esquemas Pydantic para el modelo Product.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base_schema import CamelModel


class ProductBase(CamelModel):
    """Propiedades comunes compartidas entre esquemas de producto."""
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    price: float = Field(..., ge=0, description="Precio unitario")
    stock: int = Field(0, ge=0, description="Cantidad en stock")


class ProductCreate(ProductBase):
    """Nombre y precio son requeridos."""
    pass


class ProductUpdate(CamelModel):
    """Esquema para actualizar un producto. Todos los campos son opcionales."""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)


class ProductResponse(ProductBase):
    id: int
    created_at: datetime
    updated_at: datetime
