# backend/gestor_ordenes/db/models/client_model.py
"""
Se encarga de definir los modelos de cliente para la aplicación.
"""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from gestor_ordenes.db.database import Base
from gestor_ordenes.db.models.mixins import TimestampMixin

class Client(TimestampMixin, Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    lastname = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(50), nullable=False)

    # Al borrar el cliente, la base de datos deja client_id a NULL en órdenes y facturas
    orders = relationship("Order", back_populates="client", passive_deletes=True)
    invoices = relationship("Invoice", back_populates="client", passive_deletes=True)

    def __repr__(self):
        return f"<Client(id={self.id}, email='{self.email}')>"
