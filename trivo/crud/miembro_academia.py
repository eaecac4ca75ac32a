from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.crud.base import CRUDBase
from trivo.models.miembro_academia import MiembroAcademia
from trivo.schemas.miembro_academia import MiembroAcademiaCreate, MiembroAcademiaUpdate


class CRUDMiembroAcademia(CRUDBase[MiembroAcademia, MiembroAcademiaCreate, MiembroAcademiaUpdate]):
    conflict_message = "El usuario ya es miembro de esta academia"

    def __init__(self):
        super().__init__(MiembroAcademia)

    async def get_by_academia(self, db: AsyncSession, academia_id: int) -> List[MiembroAcademia]:
        result = await db.execute(
            select(MiembroAcademia)
            .where(MiembroAcademia.academia_id == academia_id)
            .order_by(MiembroAcademia.created_at.desc())
        )
        return result.scalars().all()

    async def get_by_usuario_academia(
        self, db: AsyncSession, usuario_id: int, academia_id: int
    ) -> Optional[MiembroAcademia]:
        result = await db.execute(
            select(MiembroAcademia).where(
                MiembroAcademia.usuario_id == usuario_id,
                MiembroAcademia.academia_id == academia_id,
            )
        )
        return result.scalar_one_or_none()


miembro_academia = CRUDMiembroAcademia()
