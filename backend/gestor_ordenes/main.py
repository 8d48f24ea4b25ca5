# backend/gestor_ordenes/main.py
"""
Punto de entrada principal de la aplicación FastAPI.

Este módulo configura y inicializa la aplicación completa:
- Configuración del logging
- Creación del esquema de base de datos al arrancar
- Registro de los routers de la API bajo /api
- Traducción de excepciones de negocio a respuestas JSON
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from gestor_ordenes.api.api_router import api_router
from gestor_ordenes.core.config import settings
from gestor_ordenes.core.exceptions import DomainError
from gestor_ordenes.core.logging_config import setup_logging
from gestor_ordenes.db import all_models  # noqa: F401
from gestor_ordenes.db.database import init_db

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    logger.info("Base de datos sincronizada")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description="API para gestionar clientes, productos, órdenes y facturas",
    lifespan=lifespan,
)

app.include_router(api_router, prefix=settings.API_PREFIX)


# ========================================
# MANEJO DE ERRORES
# ========================================

def _validation_message(exc: RequestValidationError) -> str:
    """Mensaje legible a partir del primer error de validación."""
    errors = exc.errors()
    if not errors:
        return "Datos incompletos o inválidos"
    error = errors[0]
    original = (error.get("ctx") or {}).get("error")
    if original is not None:
        return str(original)
    field = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
    if error.get("type") == "missing":
        return f"Campo requerido: {field}" if field else "Datos incompletos o inválidos"
    return f"{field}: {error.get('msg')}" if field else error.get("msg", "Datos inválidos")


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = _validation_message(exc)
    logger.warning(f"Petición inválida {request.method} {request.url.path}: {message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": message})


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    if exc.status_code >= 500:
        logger.error(f"Error en {request.method} {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Error inesperado en {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": str(exc)})


@app.get("/", tags=["Root"])
async def read_root():
    """Health check básico con nombre y versión del proyecto."""
    return {"message": f"Bienvenido a {settings.PROJECT_NAME} v{settings.PROJECT_VERSION}"}
