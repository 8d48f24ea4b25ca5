# backend/gestor_ordenes/db/models/product_model.py
from sqlalchemy import Column, Integer, String, Text, Numeric, CheckConstraint
from sqlalchemy.orm import relationship

from gestor_ordenes.db.database import Base
from gestor_ordenes.db.models.mixins import TimestampMixin

class Product(TimestampMixin, Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)  # Precisión decimal para precios
    stock = Column(Integer, nullable=False, default=0)

    # Las líneas históricas conservan su precio aunque el producto desaparezca
    order_lines = relationship("OrderProduct", back_populates="product", passive_deletes=True)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_product_price_non_negative"),
        CheckConstraint("stock >= 0", name="ck_product_stock_non_negative"),
    )

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', price={self.price})>"
