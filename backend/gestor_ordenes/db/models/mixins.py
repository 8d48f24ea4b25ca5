# backend/gestor_ordenes/db/models/mixins.py
"""
Columnas comunes de auditoría (createdAt / updatedAt).

Las fechas se guardan en UTC sin zona horaria y se generan del lado de Python
para que estén disponibles tras el flush sin recargar el objeto.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TimestampMixin:
    created_at = Column(DateTime, nullable=False, default=utc_now, index=True)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)
