from typing import List, Optional
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.crud.base import CRUDBase
from trivo.models.academia import Academia
from trivo.models.grupo import Grupo
from trivo.models.miembro_academia import MiembroAcademia
from trivo.models.suscripcion import Suscripcion
from trivo.schemas.academia import AcademiaCreate, AcademiaUpdate

ACADEMIA_DUPLICADA = "Ya tienes una academia registrada. Solo puedes tener una academia por usuario."


class CRUDAcademia(CRUDBase[Academia, AcademiaCreate, AcademiaUpdate]):
    conflict_message = ACADEMIA_DUPLICADA
    conflict_status = 400

    def __init__(self):
        super().__init__(Academia)

    async def get_by_dueno(self, db: AsyncSession, dueno_id: int) -> Optional[Academia]:
        result = await db.execute(select(Academia).where(Academia.dueno_id == dueno_id))
        return result.scalar_one_or_none()

    async def get_multi_by_dueno(self, db: AsyncSession, dueno_id: int) -> List[Academia]:
        result = await db.execute(
            select(Academia)
            .where(Academia.dueno_id == dueno_id)
            .order_by(Academia.created_at.desc())
        )
        return result.scalars().all()

    async def count_dependencias(self, db: AsyncSession, academia_id: int) -> dict:
        """Cuenta grupos, miembros y suscripciones que impiden borrar la academia"""
        conteos = {}
        for nombre, modelo in (
            ("grupos", Grupo),
            ("miembros", MiembroAcademia),
            ("suscripciones", Suscripcion),
        ):
            result = await db.execute(
                select(func.count(modelo.id)).where(modelo.academia_id == academia_id)
            )
            conteos[nombre] = result.scalar() or 0
        return conteos


academia = CRUDAcademia()
