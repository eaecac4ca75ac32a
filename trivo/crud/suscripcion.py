from typing import Iterable, List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.models.suscripcion import Suscripcion


class CRUDSuscripcion:
    async def get(self, db: AsyncSession, id: int) -> Optional[Suscripcion]:
        result = await db.execute(select(Suscripcion).where(Suscripcion.id == id))
        return result.scalar_one_or_none()

    async def get_by_usuario_academia(
        self, db: AsyncSession, usuario_id: int, academia_id: int, estados: Iterable[str]
    ) -> Optional[Suscripcion]:
        result = await db.execute(
            select(Suscripcion)
            .where(
                Suscripcion.usuario_id == usuario_id,
                Suscripcion.academia_id == academia_id,
                Suscripcion.estado.in_(list(estados)),
            )
            .order_by(Suscripcion.created_at.desc(), Suscripcion.id.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_by_usuario(self, db: AsyncSession, usuario_id: int) -> List[Suscripcion]:
        result = await db.execute(
            select(Suscripcion)
            .where(Suscripcion.usuario_id == usuario_id)
            .order_by(Suscripcion.created_at.desc(), Suscripcion.id.desc())
        )
        return result.scalars().all()

    async def get_by_academia(self, db: AsyncSession, academia_id: int) -> List[Suscripcion]:
        result = await db.execute(
            select(Suscripcion)
            .where(Suscripcion.academia_id == academia_id)
            .order_by(Suscripcion.created_at.desc(), Suscripcion.id.desc())
        )
        return result.scalars().all()


suscripcion = CRUDSuscripcion()
