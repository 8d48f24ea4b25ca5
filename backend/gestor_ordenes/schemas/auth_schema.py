# backend/gestor_ordenes/schemas/auth_schema.py
"""
Esquemas de registro, login y datos del usuario autenticado.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field

from .base_schema import CamelModel


class UserRegister(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    full_name: Optional[str] = None
    role: Literal["admin", "empleado"] = "empleado"


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: str


class UserResponse(CamelModel):
    id: int
    email: str
    full_name: Optional[str] = None
    role: str
    is_active: bool
    created_at: datetime
