# backend/gestor_ordenes/db/database.py

"""
Configuración principal de la base de datos para la aplicación.

Este módulo establece la conexión usando SQLAlchemy asíncrono y define
los componentes básicos que serán utilizados por toda la aplicación:
- Motor de base de datos (engine)
- Fábrica de sesiones (AsyncSessionLocal), usada por api/deps.get_db
- Clase base para modelos (Base)
- Creación del esquema al arrancar (init_db)

El esquema se crea/sincroniza con create_all; no hay versionado de migraciones.
"""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool
from gestor_ordenes.core.config import settings # Importamos nuestra configuración

if settings.is_sqlite:
    # Cada sesión abre su propia conexión al fichero SQLite
    engine = create_async_engine(settings.DATABASE_URL, echo=settings.DB_ECHO, poolclass=NullPool)

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # SQLite ignora ON DELETE CASCADE / SET NULL sin este pragma
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
else:
    engine = create_async_engine(settings.DATABASE_URL, echo=settings.DB_ECHO, pool_pre_ping=True)

# expire_on_commit=False es importante para que los objetos sigan siendo utilizables
# después de que la transacción se haya confirmado.
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

# Clase base declarativa para todos los modelos ORM
Base = declarative_base()


async def init_db() -> None:
    """Crea las tablas que falten. Importa los modelos para registrarlos en Base."""
    from gestor_ordenes.db import all_models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

async def drop_db() -> None:
    """Elimina todas las tablas (usado por los tests)."""
    from gestor_ordenes.db import all_models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
