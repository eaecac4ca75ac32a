"""
Despacho de notificaciones.

Las notificaciones se persisten en la misma transacción que el cambio que las
origina y, una vez confirmada, se publican en Redis para los clientes
conectados por SSE. Si Redis no está disponible la petición no falla.
"""
import logging
from typing import Any, Dict, Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from trivo.core.constantes import TipoNotificacion
from trivo.core.redis_manager import redis_manager
from trivo.models.notificacion import Notificacion
from trivo.schemas.notificacion import NotificacionCreate

logger = logging.getLogger(__name__)


def nueva_notificacion(
    usuario_id: int,
    tipo: TipoNotificacion,
    message: str,
    related_id: Optional[int] = None,
    related_user_id: Optional[int] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Notificacion:
    return Notificacion(
        usuario_id=usuario_id,
        type=TipoNotificacion(tipo).value,
        message=message,
        related_id=related_id,
        related_user_id=related_user_id,
        metadata_=metadata or {},
        read=False,
    )


def _evento(notificacion: Notificacion) -> Dict[str, Any]:
    return {
        "event_type": "notificacion",
        "id": notificacion.id,
        "type": notificacion.type,
        "message": notificacion.message,
        "related_id": notificacion.related_id,
        "related_user_id": notificacion.related_user_id,
        "metadata": notificacion.metadata_ or {},
    }


async def publicar(notificaciones: Iterable[Notificacion]) -> None:
    """Publica notificaciones ya confirmadas en la base de datos"""
    for notificacion in notificaciones:
        publicado = await redis_manager.publish_event(notificacion.usuario_id, _evento(notificacion))
        if not publicado:
            logger.debug("Notificación %s no publicada en tiempo real", notificacion.id)


async def crear_notificacion(db: AsyncSession, datos: NotificacionCreate) -> Notificacion:
    notificacion = nueva_notificacion(
        usuario_id=datos.usuario_id,
        tipo=datos.type,
        message=datos.message,
        related_id=datos.related_id,
        related_user_id=datos.related_user_id,
        metadata=datos.metadata,
    )
    db.add(notificacion)
    await db.commit()
    await db.refresh(notificacion)
    await publicar([notificacion])
    return notificacion
