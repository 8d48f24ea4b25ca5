# backend/gestor_ordenes/schemas/client_schema.py
"""
Se encarga de definir los esquemas Pydantic para el modelo Client.
"""

from datetime import datetime
from typing import Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import Field, field_validator

from .base_schema import CamelModel


def _check_email(value: str) -> str:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise ValueError("El email no es valido")
    return value


class ClientBase(CamelModel):
    """Datos base del cliente compartidos entre creación y lectura."""
    name: str = Field(..., min_length=1, description="Nombre del cliente")
    lastname: str = Field(..., min_length=1, description="Apellido del cliente")
    email: str = Field(..., description="Email del cliente")
    phone: str = Field(..., min_length=1, description="Teléfono del cliente")


class ClientCreate(ClientBase):
    """Todos los datos son requeridos."""

    @field_validator("email")
    @classmethod
    def validate_email_format(cls, v):
        return _check_email(v)


class ClientUpdate(CamelModel):
    """Actualización parcial: sólo cambian los campos enviados."""
    name: Optional[str] = Field(None, min_length=1)
    lastname: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = Field(None, min_length=1)

    @field_validator("email")
    @classmethod
    def validate_email_format(cls, v):
        if v is None:
            return v
        return _check_email(v)


class ClientResponse(ClientBase):
    id: int
    created_at: datetime
    updated_at: datetime


class ClientDeleted(CamelModel):
    message: str
    client: ClientResponse
