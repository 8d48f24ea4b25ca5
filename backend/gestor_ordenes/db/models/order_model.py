# backend/gestor_ordenes/db/models/order_model.py
"""
Este archivo contiene el modelo de orden y su tabla de líneas (OrderProduct).
"""

import enum

from sqlalchemy import (
    Column, Integer, String, Numeric, ForeignKey, CheckConstraint
)
from sqlalchemy.orm import relationship

from gestor_ordenes.db.database import Base
from gestor_ordenes.db.models.mixins import TimestampMixin


class OrderStatus(str, enum.Enum):
    """Define los posibles estados de una orden."""
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Transiciones permitidas; repetir el estado actual no cambia nada
ALLOWED_STATUS_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.COMPLETED, OrderStatus.CANCELLED},
    OrderStatus.COMPLETED: set(),
    OrderStatus.CANCELLED: set(),
}


class Order(TimestampMixin, Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="SET NULL"), nullable=True, index=True)
    total = Column(Numeric(10, 2), nullable=False)
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value, index=True)

    client = relationship("Client", back_populates="orders")
    lines = relationship(
        "OrderProduct",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OrderProduct.id",
    )
    invoice = relationship("Invoice", back_populates="order", uselist=False, passive_deletes=True)

    __table_args__ = (
        CheckConstraint("status IN ('pending', 'completed', 'cancelled')", name="ck_order_status"),
    )

    @property
    def products(self):
        """Líneas de la orden; así se exponen en la API (products)."""
        return self.lines

    def __repr__(self):
        return f"<Order(id={self.id}, client_id={self.client_id}, status='{self.status}')>"

    def to_dict(self):
        """Convierte la orden y sus líneas a un diccionario (requiere relaciones cargadas)."""
        client = self.client
        return {
            "id": self.id,
            "client_id": self.client_id,
            "client_name": f"{client.name} {client.lastname}" if client else "",
            "client_email": client.email if client else "",
            "client_phone": client.phone if client else "",
            "total": float(self.total),
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "items": [
                {
                    "product_id": line.product_id,
                    "name": line.product.name if line.product else "Producto eliminado",
                    "quantity": line.quantity,
                    "price": float(line.price),
                } for line in self.lines
            ],
        }


class OrderProduct(Base):
    __tablename__ = "order_products"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="SET NULL"), nullable=True, index=True)
    quantity = Column(Integer, nullable=False, default=1)
    # Copia del precio del producto en el momento de la orden
    price = Column(Numeric(10, 2), nullable=False)

    order = relationship("Order", back_populates="lines")
    product = relationship("Product", back_populates="order_lines")

    @property
    def name(self):
        return self.product.name if self.product else None

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_order_product_quantity_positive"),
    )

    def __repr__(self):
        return f"<OrderProduct(order_id={self.order_id}, product_id={self.product_id}, quantity={self.quantity})>"
