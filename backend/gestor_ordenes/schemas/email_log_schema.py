# backend/gestor_ordenes/schemas/email_log_schema.py
from datetime import datetime
from typing import Optional

from .base_schema import CamelModel


class EmailLogResponse(CamelModel):
    id: int
    to: str
    subject: str
    status: str
    error: Optional[str] = None
    attempts: int
    created_at: datetime
    updated_at: datetime
