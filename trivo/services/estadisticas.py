from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.core.estados import EstadoPago
from trivo.models.academia import Academia
from trivo.models.pago import Pago
from trivo.models.salida_social import SalidaSocial
from trivo.models.team_social import TeamSocial
from trivo.models.usuario import Usuario


async def _contar(db: AsyncSession, columna, *condiciones) -> int:
    query = select(func.count(columna))
    if condiciones:
        query = query.where(*condiciones)
    result = await db.execute(query)
    return result.scalar() or 0


async def obtener_estadisticas(db: AsyncSession) -> dict:
    """Totales del dashboard. Una AsyncSession no admite consultas concurrentes."""
    ingresos = await db.execute(
        select(func.coalesce(func.sum(Pago.amount), 0)).where(
            Pago.estado == EstadoPago.APROBADO.value
        )
    )
    return {
        "totalSalidas": await _contar(db, SalidaSocial.id),
        "totalTeams": await _contar(db, TeamSocial.id),
        "totalAcademias": await _contar(db, Academia.id),
        "totalMiembros": await _contar(db, Usuario.id),
        "pagosPendientes": await _contar(db, Pago.id, Pago.estado == EstadoPago.PENDIENTE.value),
        "ingresosAprobados": float(ingresos.scalar() or 0),
    }
