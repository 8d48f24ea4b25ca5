# backend/gestor_ordenes/db/models/email_log_model.py
from sqlalchemy import Column, Integer, String, Text, CheckConstraint

from gestor_ordenes.db.database import Base
from gestor_ordenes.db.models.mixins import TimestampMixin

EMAIL_STATUS_SUCCESS = "success"
EMAIL_STATUS_ERROR = "error"


class EmailLog(TimestampMixin, Base):
    """Registro de solo inserción de cada envío de correo y su resultado."""
    __tablename__ = "email_logs"

    id = Column(Integer, primary_key=True, index=True)
    to = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False)
    error = Column(Text, nullable=True)
    attempts = Column(Integer, nullable=False, default=1)

    __table_args__ = (
        CheckConstraint("attempts >= 1", name="ck_email_log_attempts_positive"),
        CheckConstraint("status IN ('success', 'error')", name="ck_email_log_status"),
    )
