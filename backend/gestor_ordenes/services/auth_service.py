from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gestor_ordenes.core import security
from gestor_ordenes.core.exceptions import ConflictError
from gestor_ordenes.crud import user_crud
from gestor_ordenes.schemas.auth_schema import UserRegister

DUPLICATE_EMAIL = "El email ya está registrado"


class AuthService:

    @staticmethod
    async def register_user(
        db: AsyncSession, data: UserRegister, current_user: Optional[security.UserPayload] = None
    ):
        # 1. Registro abierto sólo para el primer usuario; después hace falta token de admin
        if await user_crud.count_users(db) > 0:
            if current_user is None:
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Token no proporcionado",
                    headers={"WWW-Authenticate": "Bearer"},
                )
            if not current_user.has_role(security.ROLE_ADMIN):
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail="Sólo un administrador puede registrar usuarios",
                )

        # 2. Verificar duplicados
        if await user_crud.get_user_by_email(db, email=data.email):
            raise ConflictError(DUPLICATE_EMAIL)

        user_data = {
            "email": data.email,
            "hashed_password": security.get_password_hash(data.password),
            "full_name": data.full_name,
            "role": data.role,
            "is_active": True,
        }
        try:
            return await user_crud.create_user(db, user_data)
        except IntegrityError:
            await db.rollback()
            raise ConflictError(DUPLICATE_EMAIL)

    @staticmethod
    async def authenticate_user(db: AsyncSession, email: str, password: str):
        # 1. Validar Credenciales
        user = await user_crud.get_user_by_email(db, email)
        if not user or not user.is_active or not security.verify_password(password, user.hashed_password):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Credenciales inválidas",
                headers={"WWW-Authenticate": "Bearer"},
            )

        # 2. Generar Token
        access_token = security.create_access_token(
            data={"sub": user.email, "role": user.role, "user_id": user.id}
        )
        return {"access_token": access_token, "token_type": "bearer", "role": user.role}
