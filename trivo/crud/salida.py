import secrets
import string
from typing import Any, List, Optional, Tuple
from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.core.estados import EstadoMiembroSalida
from trivo.crud.base import CRUDBase
from trivo.models.miembro_salida import MiembroSalida
from trivo.models.pago import Pago
from trivo.models.salida_social import SalidaSocial
from trivo.schemas.salida import SalidaCreate, SalidaUpdate

SHORT_ID_ALFABETO = string.digits + string.ascii_lowercase
SHORT_ID_LARGO = 8


def generar_short_id() -> str:
    return "".join(secrets.choice(SHORT_ID_ALFABETO) for _ in range(SHORT_ID_LARGO))


class CRUDSalida(CRUDBase[SalidaSocial, SalidaCreate, SalidaUpdate]):
    conflict_message = "No se pudo generar un identificador único para la salida"

    def __init__(self):
        super().__init__(SalidaSocial)

    async def get_by_short_id(self, db: AsyncSession, short_id: str) -> Optional[SalidaSocial]:
        result = await db.execute(select(SalidaSocial).where(SalidaSocial.short_id == short_id))
        return result.scalar_one_or_none()

    async def create(self, db: AsyncSession, *, obj_in: SalidaCreate, **extra: Any) -> SalidaSocial:
        short_id = generar_short_id()
        for _ in range(5):
            if await self.get_by_short_id(db, short_id) is None:
                break
            short_id = generar_short_id()
        return await super().create(db, obj_in=obj_in, short_id=short_id, **extra)

    async def get_multi_by_creador(
        self, db: AsyncSession, creador_id: int
    ) -> List[Tuple[SalidaSocial, int]]:
        """Salidas del organizador junto con la cantidad de participantes aprobados"""
        aprobados = (
            select(MiembroSalida.salida_id, func.count(MiembroSalida.id).label("total"))
            .where(MiembroSalida.estado == EstadoMiembroSalida.APROBADO.value)
            .group_by(MiembroSalida.salida_id)
            .subquery()
        )
        result = await db.execute(
            select(SalidaSocial, func.coalesce(aprobados.c.total, 0))
            .outerjoin(aprobados, aprobados.c.salida_id == SalidaSocial.id)
            .where(SalidaSocial.creador_id == creador_id)
            .order_by(SalidaSocial.created_at.desc())
        )
        return [(salida, total) for salida, total in result.all()]

    async def count_aprobados(self, db: AsyncSession, salida_id: int) -> int:
        result = await db.execute(
            select(func.count(MiembroSalida.id)).where(
                MiembroSalida.salida_id == salida_id,
                MiembroSalida.estado == EstadoMiembroSalida.APROBADO.value,
            )
        )
        return result.scalar() or 0

    async def remove(self, db: AsyncSession, *, id: Any) -> Optional[SalidaSocial]:
        obj = await self.get(db, id)
        if obj:
            # Los pagos quedan huérfanos pero conservan el nombre de la salida
            await db.execute(delete(MiembroSalida).where(MiembroSalida.salida_id == id))
            await db.execute(update(Pago).where(Pago.salida_id == id).values(salida_id=None))
            await db.delete(obj)
            await db.commit()
        return obj


salida = CRUDSalida()
