# backend/gestor_ordenes/schemas/base_schema.py
"""
Esquema base compartido: nombres camelCase en el JSON (clientId, createdAt...)
y lectura directa desde objetos ORM.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    message: str
