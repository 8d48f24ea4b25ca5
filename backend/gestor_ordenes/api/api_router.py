# backend/gestor_ordenes/api/api_router.py
"""
Router principal de la API: registra los routers de cada recurso.
"""

from fastapi import APIRouter

from gestor_ordenes.api.endpoints import (
    auth,
    clients,
    email_logs,
    invoices,
    orders,
    products,
    reports,
)

api_router = APIRouter()

api_router.include_router(clients.router, prefix="/clients", tags=["Clients"])
api_router.include_router(products.router, prefix="/products", tags=["Products"])
api_router.include_router(orders.router, prefix="/orders", tags=["Orders"])
api_router.include_router(invoices.router, prefix="/invoices", tags=["Invoices"])
api_router.include_router(email_logs.router, prefix="/email-logs", tags=["Email Logs"])
api_router.include_router(reports.router, prefix="/reports", tags=["Reports"])
api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
