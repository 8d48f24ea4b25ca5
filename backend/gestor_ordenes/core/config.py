# backend/gestor_ordenes/core/config.py
"""
Este archivo contiene la configuración de la aplicación.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """
    Configuración de la aplicación usando Pydantic BaseSettings.
    Variables sensibles desde .env, defaults seguros para el resto.
    """
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Configuración general del proyecto
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Gestor de Órdenes API"
    PROJECT_VERSION: str = "1.0.0"

    # Base de datos: SQLite por defecto, PostgreSQL con postgresql+asyncpg://...
    DATABASE_URL: str = "sqlite+aiosqlite:///./database.sqlite"
    DB_ECHO: bool = False

    # Autenticación (JWT)
    JWT_SECRET_KEY: str = "SECRET_SUPER_SECRETO_CAMBIAME"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Facturación
    TAX_RATE: float = 0.19
    INVOICE_NUMBER_MAX_RETRIES: int = 5

    # SMTP para correos
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: Optional[int] = None
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SENDER_EMAIL: Optional[str] = None
    SMTP_STARTTLS: bool = False
    SMTP_SSL_TLS: bool = True
    EMAIL_MAX_ATTEMPTS: int = 1

    # Logging - Defaults seguros
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def smtp_configured(self) -> bool:
        """Indica si hay datos suficientes para conectarse al servidor SMTP."""
        return all([self.SMTP_HOST, self.SMTP_PORT, self.SMTP_USER, self.SMTP_PASSWORD, self.SENDER_EMAIL])

# Instancia global de la configuración
settings = Settings()
