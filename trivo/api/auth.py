import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.api.deps import get_current_user
from trivo.config.database import get_db
from trivo.core.exceptions import Unauthenticated
from trivo.core.security import create_access_token, verify_password
from trivo.crud.usuario import usuario as crud_usuario
from trivo.models.usuario import Usuario
from trivo.schemas.auth import LoginResponse, UserLogin
from trivo.schemas.usuario import Usuario as UsuarioSchema

logger = logging.getLogger(__name__)

router = APIRouter()


async def authenticate_user(db: AsyncSession, email: str, password: str) -> Optional[Usuario]:
    """Autenticar usuario por email y contraseña"""
    user = await crud_usuario.get_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


@router.post("/login", response_model=LoginResponse)
async def login_for_access_token(user_data: UserLogin, db: AsyncSession = Depends(get_db)):
    """
    Endpoint de login que devuelve un JWT token
    """
    try:
        user = await authenticate_user(db, user_data.email, user_data.password)
        if not user:
            raise Unauthenticated("Email o contraseña incorrectos")

        access_token = create_access_token(subject=user.id, extra_claims={"rol": user.rol})
        logger.info("Login correcto de usuario %s", user.id)
        return {"access_token": access_token, "token_type": "bearer", "user": user}
    except Unauthenticated:
        raise
    except Exception:
        logger.exception("Error en login")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error interno del servidor",
        )


@router.get("/me", response_model=UsuarioSchema)
async def get_current_user_info(current_user: Usuario = Depends(get_current_user)):
    """
    Obtener información del usuario actual
    """
    return current_user
