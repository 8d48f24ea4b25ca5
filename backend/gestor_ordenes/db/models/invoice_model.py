# backend/gestor_ordenes/db/models/invoice_model.py
"""
Modelo de factura. Una factura por orden, con número único FACT-YYYYMM-NNNN.
"""

from sqlalchemy import Column, Integer, String, DateTime, Numeric, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from gestor_ordenes.db.database import Base
from gestor_ordenes.db.models.mixins import TimestampMixin, utc_now

INVOICE_NUMBER_CONSTRAINT = "uq_invoices_number"


class Invoice(TimestampMixin, Base):
    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, index=True)
    # La unicidad del número es la que resuelve las asignaciones concurrentes
    number = Column(String(32), nullable=False, index=True)
    date = Column(DateTime, nullable=False, default=utc_now, index=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="SET NULL"), nullable=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="SET NULL"), nullable=True, unique=True)
    subtotal = Column(Numeric(10, 2), nullable=False)
    tax = Column(Numeric(10, 2), nullable=False)
    total = Column(Numeric(10, 2), nullable=False)

    client = relationship("Client", back_populates="invoices")
    order = relationship("Order", back_populates="invoice")

    __table_args__ = (
        UniqueConstraint("number", name=INVOICE_NUMBER_CONSTRAINT),
    )

    def __repr__(self):
        return f"<Invoice(id={self.id}, number='{self.number}', total={self.total})>"
