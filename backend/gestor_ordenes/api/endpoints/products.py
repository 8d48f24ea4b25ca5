# backend/gestor_ordenes/api/endpoints/products.py

"""
Endpoints REST para operaciones CRUD de productos.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import logging

from gestor_ordenes.api import deps
from gestor_ordenes.core.exceptions import NotFoundError
from gestor_ordenes.core.security import admin_only, staff_only
from gestor_ordenes.crud import product_crud
from gestor_ordenes.schemas import product_schema
from gestor_ordenes.schemas.base_schema import MessageResponse

logger = logging.getLogger(__name__)
router = APIRouter()


async def _get_or_404(db: AsyncSession, product_id: int):
    product = await product_crud.get_product(db, product_id)
    if not product:
        logger.warning(f"⚠️ PRODUCTO: No encontrado ID {product_id}")
        raise NotFoundError("Producto no encontrado")
    return product


@router.post(
    "",
    response_model=product_schema.ProductResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(staff_only)],
)
async def create_product(
    *,
    db: AsyncSession = Depends(deps.get_db),
    product_in: product_schema.ProductCreate,
):
    """Crea un nuevo producto en el catálogo. Nombre y precio son requeridos."""
    logger.info(f"🆕 PRODUCTO: Creando producto '{product_in.name}'")
    product = await product_crud.create_product(db, product_in)
    logger.info(f"✅ PRODUCTO: Creado exitosamente ID {product.id}")
    return product


@router.put("/{product_id}", response_model=product_schema.ProductResponse, dependencies=[Depends(staff_only)])
async def update_product(
    *,
    db: AsyncSession = Depends(deps.get_db),
    product_id: int,
    product_in: product_schema.ProductUpdate,
):
    """Actualiza un producto existente."""
    logger.info(f"🔄 PRODUCTO: Actualizando producto ID {product_id}")
    product = await _get_or_404(db, product_id)
    changes = product_in.model_dump(exclude_unset=True, exclude_none=True)
    return await product_crud.update_product(db, product, changes)


@router.delete("/{product_id}", response_model=MessageResponse, dependencies=[Depends(admin_only)])
async def delete_product(
    *,
    db: AsyncSession = Depends(deps.get_db),
    product_id: int,
):
    """Elimina un producto. Las líneas de órdenes anteriores conservan su precio."""
    logger.info(f"🗑️ PRODUCTO: Eliminando producto ID {product_id}")
    product = await _get_or_404(db, product_id)
    await product_crud.delete_product(db, product)
    return {"message": "Producto eliminado correctamente"}


@router.get("/{product_id}", response_model=product_schema.ProductResponse, dependencies=[Depends(staff_only)])
async def read_product(
    *,
    db: AsyncSession = Depends(deps.get_db),
    product_id: int,
):
    """Obtiene los detalles de un producto por ID."""
    logger.debug(f"🔍 PRODUCTO: Buscando producto ID {product_id}")
    return await _get_or_404(db, product_id)


@router.get("", response_model=List[product_schema.ProductResponse], dependencies=[Depends(staff_only)])
async def read_products(
    db: AsyncSession = Depends(deps.get_db),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
):
    """Obtiene una lista paginada de productos."""
    products = await product_crud.get_products(db, skip=skip, limit=limit)
    logger.debug(f"📋 PRODUCTOS: Encontrados {len(products)} resultados")
    return products
