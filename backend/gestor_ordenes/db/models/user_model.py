# backend/gestor_ordenes/db/models/user_model.py
"""
Usuarios del sistema (personal que opera la API), con rol admin o empleado.
"""

from sqlalchemy import Column, Integer, String, Boolean

from gestor_ordenes.db.database import Base
from gestor_ordenes.db.models.mixins import TimestampMixin


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=True)
    role = Column(String(20), nullable=False, default="empleado")
    is_active = Column(Boolean, nullable=False, default=True)
