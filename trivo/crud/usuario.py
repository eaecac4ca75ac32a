from typing import Any, Dict, List, Optional, Union
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.core.security import get_password_hash
from trivo.crud.base import CRUDBase
from trivo.models.usuario import Usuario
from trivo.schemas.usuario import UsuarioCreate, UsuarioUpdate


class CRUDUsuario(CRUDBase[Usuario, UsuarioCreate, UsuarioUpdate]):
    conflict_message = "El email ya está registrado"

    def __init__(self):
        super().__init__(Usuario)

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[Usuario]:
        result = await db.execute(select(Usuario).where(Usuario.email == email.strip().lower()))
        return result.scalar_one_or_none()

    async def create(self, db: AsyncSession, *, obj_in: UsuarioCreate, **extra: Any) -> Usuario:
        data = obj_in.model_dump(exclude={"password"})
        data["password_hash"] = get_password_hash(obj_in.password)
        return await super().create(db, obj_in=data, **extra)

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: Usuario,
        obj_in: Union[UsuarioUpdate, Dict[str, Any]]
    ) -> Usuario:
        if isinstance(obj_in, dict):
            update_data = dict(obj_in)
        else:
            update_data = obj_in.model_dump(exclude_unset=True)
        password = update_data.pop("password", None)
        if password:
            update_data["password_hash"] = get_password_hash(password)
        return await super().update(db, db_obj=db_obj, obj_in=update_data)

    async def search(self, db: AsyncSession, texto: str, limit: int = 10) -> List[Usuario]:
        patron = f"%{texto.strip()}%"
        result = await db.execute(
            select(Usuario)
            .where(
                or_(
                    Usuario.email.ilike(patron),
                    Usuario.firstname.ilike(patron),
                    Usuario.lastname.ilike(patron),
                )
            )
            .order_by(Usuario.firstname, Usuario.lastname)
            .limit(limit)
        )
        return result.scalars().all()


usuario = CRUDUsuario()
