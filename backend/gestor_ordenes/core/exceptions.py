# backend/gestor_ordenes/core/exceptions.py
"""
Excepciones de negocio de la aplicación.

Los servicios y operaciones CRUD lanzan estas excepciones en lugar de
HTTPException; los manejadores registrados en main.py las traducen a
respuestas JSON con el código HTTP correspondiente.
"""


class DomainError(Exception):
    """Base de todas las excepciones de negocio."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Datos de entrada incompletos o inválidos."""
    status_code = 400


class ConflictError(DomainError):
    """Violación de unicidad o de una regla de estado."""
    status_code = 400


class NotFoundError(DomainError):
    """El recurso solicitado no existe."""
    status_code = 404


class EmailDeliveryError(DomainError):
    """Fallo al entregar un correo. Nunca llega al cliente desde el flujo de órdenes."""
    status_code = 502
