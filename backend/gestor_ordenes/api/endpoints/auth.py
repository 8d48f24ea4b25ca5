# backend/gestor_ordenes/api/endpoints/auth.py
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from gestor_ordenes.api import deps
from gestor_ordenes.core.exceptions import NotFoundError
from gestor_ordenes.core.security import UserPayload, get_current_user, get_optional_user
from gestor_ordenes.crud import user_crud
from gestor_ordenes.schemas import auth_schema
from gestor_ordenes.services.auth_service import AuthService

router = APIRouter()

# --- ENDPOINTS PÚBLICOS ---

@router.post("/register", response_model=auth_schema.UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: auth_schema.UserRegister,
    db: AsyncSession = Depends(deps.get_db),
    current_user: Optional[UserPayload] = Depends(get_optional_user),
):
    """Registro de usuarios. Abierto sólo para el primer usuario; después requiere token de admin."""
    return await AuthService.register_user(db, request, current_user)

@router.post("/login", response_model=auth_schema.Token)
async def login(request: auth_schema.LoginRequest, db: AsyncSession = Depends(deps.get_db)):
    return await AuthService.authenticate_user(db, email=request.email, password=request.password)

# --- ENDPOINTS PROTEGIDOS ---

@router.get("/me", response_model=auth_schema.UserResponse)
async def read_users_me(current_user: UserPayload = Depends(get_current_user), db: AsyncSession = Depends(deps.get_db)):
    user = await user_crud.get_user_by_email(db, email=current_user.sub)
    if not user:
        raise NotFoundError("Usuario no encontrado")
    return user
