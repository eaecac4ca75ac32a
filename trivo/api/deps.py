from typing import Callable, Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.config.database import get_db
from trivo.config.settings import TrialPolicy, settings
from trivo.core.exceptions import Unauthenticated
from trivo.core.permissions import check_role
from trivo.core.security import verify_token
from trivo.models.usuario import Usuario

security = HTTPBearer(auto_error=False)  # auto_error=False para responder 401 con el formato propio


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> Usuario:
    """
    Obtener usuario actual desde el token JWT
    """
    if not credentials:
        raise Unauthenticated()

    usuario_id = verify_token(credentials.credentials)
    if usuario_id is None:
        raise Unauthenticated()

    user = await db.get(Usuario, usuario_id)
    if user is None:
        raise Unauthenticated()

    return user


def require(operacion: str) -> Callable:
    """Dependencia que exige sesión y un rol permitido para ``operacion``"""

    async def dependency(current_user: Usuario = Depends(get_current_user)) -> Usuario:
        check_role(operacion, current_user)
        return current_user

    return dependency


def get_trial_policy() -> TrialPolicy:
    return settings.trial_policy()
