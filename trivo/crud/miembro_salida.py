from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.models.miembro_salida import MiembroSalida


class CRUDMiembroSalida:
    """Consultas de membresías de salidas; las escrituras viven en el servicio de membresías"""

    async def get(self, db: AsyncSession, id: int) -> Optional[MiembroSalida]:
        result = await db.execute(select(MiembroSalida).where(MiembroSalida.id == id))
        return result.scalar_one_or_none()

    async def get_by_salida(self, db: AsyncSession, salida_id: int) -> List[MiembroSalida]:
        result = await db.execute(
            select(MiembroSalida)
            .where(MiembroSalida.salida_id == salida_id)
            .order_by(MiembroSalida.created_at.desc(), MiembroSalida.id.desc())
        )
        return result.scalars().all()

    async def get_by_usuario_salida(
        self, db: AsyncSession, usuario_id: int, salida_id: int
    ) -> Optional[MiembroSalida]:
        result = await db.execute(
            select(MiembroSalida).where(
                MiembroSalida.usuario_id == usuario_id,
                MiembroSalida.salida_id == salida_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_by_pago(self, db: AsyncSession, pago_id: int) -> List[MiembroSalida]:
        result = await db.execute(select(MiembroSalida).where(MiembroSalida.pago_id == pago_id))
        return result.scalars().all()


miembro_salida = CRUDMiembroSalida()
