# backend/gestor_ordenes/core/security.py
"""
Autenticación y autorización por token JWT.

Dos comprobaciones componibles por ruta:
- get_current_user: verifica firma y expiración del token Bearer (401).
- RequireRoles: compara el rol del token con la lista permitida de la ruta (403).

No existe almacén de sesiones ni revocación: todo el estado viaja en el token.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from gestor_ordenes.core.config import settings

ROLE_ADMIN = "admin"
ROLE_EMPLEADO = "empleado"
ROLES = (ROLE_ADMIN, ROLE_EMPLEADO)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
bearer_scheme = HTTPBearer(auto_error=False)

# --- UTILIDADES ---
def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password):
    return pwd_context.hash(password)

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode["exp"] = datetime.now(timezone.utc) + expires_delta
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

def decode_token(token: str) -> Optional[dict]:
    """Decodifica y valida el token; None si la firma o la expiración no son válidas."""
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None


# --- DEPENDENCIAS FASTAPI ---
class UserPayload:
    def __init__(self, sub: str, role: str, user_id: Optional[int] = None):
        self.sub = sub
        self.role = role
        self.user_id = user_id

    def has_role(self, *roles: str) -> bool:
        return self.role in roles


def _payload_from_token(token: str) -> UserPayload:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Credenciales inválidas o expiradas",
        headers={"WWW-Authenticate": "Bearer"},
    )
    payload = decode_token(token)
    if payload is None:
        raise credentials_exception
    email = payload.get("sub")
    role = payload.get("role")
    if email is None or role is None:
        raise credentials_exception
    return UserPayload(sub=email, role=role, user_id=payload.get("user_id"))


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> UserPayload:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token no proporcionado",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _payload_from_token(credentials.credentials)


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[UserPayload]:
    """Como get_current_user, pero devuelve None si no hay token."""
    if credentials is None:
        return None
    return _payload_from_token(credentials.credentials)


class RequireRoles:
    def __init__(self, *roles: str):
        self.roles = roles

    def __call__(self, user: UserPayload = Depends(get_current_user)) -> UserPayload:
        if not user.has_role(*self.roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Acceso denegado. Rol requerido: {', '.join(self.roles)}"
            )
        return user


# Listas de roles reutilizadas por los routers
staff_only = RequireRoles(ROLE_ADMIN, ROLE_EMPLEADO)
admin_only = RequireRoles(ROLE_ADMIN)
