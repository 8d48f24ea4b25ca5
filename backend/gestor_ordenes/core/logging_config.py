# backend/gestor_ordenes/core/logging_config.py
"""
Configuración del logging de la aplicación a partir de settings.
"""

import logging

from gestor_ordenes.core.config import settings


def setup_logging() -> None:
    """Aplica nivel y formato de LOG_LEVEL / LOG_FORMAT al logger raíz."""
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=settings.LOG_FORMAT)
    # SQLAlchemy ya tiene su propio interruptor (DB_ECHO)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
