# backend/gestor_ordenes/db/all_models.py
"""
Importa todos los modelos para que queden registrados en Base.metadata
y las relaciones declaradas por nombre puedan resolverse.
"""

from gestor_ordenes.db.models.client_model import Client  # noqa: F401
from gestor_ordenes.db.models.product_model import Product  # noqa: F401
from gestor_ordenes.db.models.order_model import Order, OrderProduct  # noqa: F401
from gestor_ordenes.db.models.invoice_model import Invoice  # noqa: F401
from gestor_ordenes.db.models.email_log_model import EmailLog  # noqa: F401
from gestor_ordenes.db.models.user_model import User  # noqa: F401
