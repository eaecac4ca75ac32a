import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.api.deps import require
from trivo.config.database import get_db
from trivo.models.usuario import Usuario
from trivo.schemas.estadisticas import Estadisticas
from trivo.services.estadisticas import obtener_estadisticas

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=Estadisticas)
async def read_stats(
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("estadisticas.ver")),
):
    """Totales para el dashboard"""
    try:
        return await obtener_estadisticas(db)
    except Exception:
        logger.exception("Error obteniendo estadísticas")
        raise HTTPException(status_code=500, detail="Error al obtener estadísticas")
