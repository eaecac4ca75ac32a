from typing import List, Optional
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.models.notificacion import Notificacion


class CRUDNotificacion:
    """Acceso a notificaciones, siempre acotado al destinatario"""

    async def get_for_usuario(
        self, db: AsyncSession, id: int, usuario_id: int
    ) -> Optional[Notificacion]:
        result = await db.execute(
            select(Notificacion).where(
                Notificacion.id == id, Notificacion.usuario_id == usuario_id
            )
        )
        return result.scalar_one_or_none()

    async def get_by_usuario(
        self, db: AsyncSession, usuario_id: int, *, unread_only: bool = False, limit: int = 20
    ) -> List[Notificacion]:
        query = select(Notificacion).where(Notificacion.usuario_id == usuario_id)
        if unread_only:
            query = query.where(Notificacion.read.is_(False))
        query = query.order_by(Notificacion.created_at.desc(), Notificacion.id.desc()).limit(limit)
        result = await db.execute(query)
        return result.scalars().all()

    async def count_unread(self, db: AsyncSession, usuario_id: int) -> int:
        result = await db.execute(
            select(func.count(Notificacion.id)).where(
                Notificacion.usuario_id == usuario_id, Notificacion.read.is_(False)
            )
        )
        return result.scalar() or 0

    async def mark_all_read(self, db: AsyncSession, usuario_id: int) -> int:
        result = await db.execute(
            update(Notificacion)
            .where(Notificacion.usuario_id == usuario_id, Notificacion.read.is_(False))
            .values(read=True)
            .execution_options(synchronize_session=False)
        )
        await db.commit()
        return result.rowcount or 0


notificacion = CRUDNotificacion()
