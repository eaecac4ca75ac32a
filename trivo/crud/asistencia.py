from datetime import datetime
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.models.asistencia import Asistencia


class CRUDAsistencia:
    async def get_by_grupo(
        self,
        db: AsyncSession,
        grupo_id: int,
        *,
        desde: Optional[datetime] = None,
        hasta: Optional[datetime] = None,
        usuario_id: Optional[int] = None,
        limit: int = 500,
    ) -> List[Asistencia]:
        query = select(Asistencia).where(Asistencia.grupo_id == grupo_id)
        if desde:
            query = query.where(Asistencia.fecha >= desde)
        if hasta:
            query = query.where(Asistencia.fecha <= hasta)
        if usuario_id:
            query = query.where(Asistencia.usuario_id == usuario_id)
        result = await db.execute(
            query.order_by(Asistencia.fecha.desc(), Asistencia.id.desc()).limit(limit)
        )
        return result.scalars().all()

    async def exists_for_grupo(self, db: AsyncSession, grupo_id: int) -> bool:
        result = await db.execute(
            select(Asistencia.id).where(Asistencia.grupo_id == grupo_id).limit(1)
        )
        return result.scalar_one_or_none() is not None


asistencia = CRUDAsistencia()
