# backend/gestor_ordenes/crud/product_crud.py

"""
Operaciones CRUD para el modelo Product.

Los precios llegan como float desde la API y se guardan como Decimal para que
los totales de órdenes y facturas no arrastren errores de coma flotante.
"""

from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gestor_ordenes.db.models.product_model import Product
from gestor_ordenes.schemas.product_schema import ProductCreate


def to_money(value) -> Decimal:
    """Convierte un importe (float, int, str o Decimal) a Decimal con dos decimales."""
    return Decimal(str(value)).quantize(Decimal("0.01"))

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_product(db: AsyncSession, product_id: int) -> Optional[Product]:
    return await db.get(Product, product_id)

async def get_products(db: AsyncSession, skip: int = 0, limit: int = 100) -> List[Product]:
    result = await db.execute(select(Product).order_by(Product.id).offset(skip).limit(limit))
    return list(result.scalars().all())

async def get_products_by_ids(db: AsyncSession, product_ids: Iterable[int]) -> Dict[int, Product]:
    """Devuelve un diccionario id -> Product con los productos que existan."""
    ids = set(product_ids)
    if not ids:
        return {}
    result = await db.execute(select(Product).filter(Product.id.in_(ids)))
    return {product.id: product for product in result.scalars().all()}

# ========================================
# OPERACIONES DE ESCRITURA
# ========================================

async def create_product(db: AsyncSession, product_in: ProductCreate) -> Product:
    data = product_in.model_dump()
    data["price"] = to_money(data["price"])
    db_product = Product(**data)
    db.add(db_product)
    await db.commit()
    await db.refresh(db_product)
    return db_product

async def update_product(db: AsyncSession, db_product: Product, changes: Dict[str, Any]) -> Product:
    if "price" in changes:
        changes["price"] = to_money(changes["price"])
    for field, value in changes.items():
        setattr(db_product, field, value)
    await db.commit()
    await db.refresh(db_product)
    return db_product

async def delete_product(db: AsyncSession, db_product: Product) -> None:
    await db.delete(db_product)
    await db.commit()
