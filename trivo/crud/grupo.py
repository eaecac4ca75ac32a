from typing import List
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.crud.base import CRUDBase
from trivo.models.grupo import Grupo
from trivo.schemas.grupo import GrupoCreate, GrupoUpdate


class CRUDGrupo(CRUDBase[Grupo, GrupoCreate, GrupoUpdate]):
    def __init__(self):
        super().__init__(Grupo)

    async def get_by_academia(self, db: AsyncSession, academia_id: int) -> List[Grupo]:
        result = await db.execute(
            select(Grupo)
            .where(Grupo.academia_id == academia_id)
            .order_by(Grupo.created_at.desc())
        )
        return result.scalars().all()


grupo = CRUDGrupo()
