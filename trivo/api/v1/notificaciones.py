import asyncio
import logging
from typing import Optional
import ujson
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sse_starlette.sse import EventSourceResponse

from trivo.api.deps import require, security
from trivo.config.database import get_db
from trivo.core.exceptions import NotFound, TrivoError, Unauthenticated
from trivo.core.redis_manager import redis_manager
from trivo.core.security import verify_token
from trivo.crud.notificacion import notificacion as crud_notificacion
from trivo.crud.usuario import usuario as crud_usuario
from trivo.models.usuario import Usuario
from trivo.schemas.notificacion import (
    MarkAllReadResponse,
    Notificacion,
    NotificacionCreate,
    NotificacionList,
    NotificacionUpdate,
)
from trivo.services import notificaciones as servicio_notificaciones

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=NotificacionList)
async def read_notificaciones(
    unreadOnly: bool = Query(False),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("notificaciones.propias")),
):
    """Notificaciones del usuario actual, más recientes primero"""
    try:
        notificaciones = await crud_notificacion.get_by_usuario(
            db, current_user.id, unread_only=unreadOnly, limit=limit
        )
        unread = await crud_notificacion.count_unread(db, current_user.id)
        return {"notificaciones": notificaciones, "unreadCount": unread}
    except Exception:
        logger.exception("Error obteniendo notificaciones")
        raise HTTPException(status_code=500, detail="Error al obtener notificaciones")


@router.post("", response_model=Notificacion, status_code=status.HTTP_201_CREATED)
async def create_notificacion(
    datos: NotificacionCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("notificaciones.crear")),
):
    """Crear una notificación para otro usuario (uso interno del frontend)"""
    try:
        if not await crud_usuario.get(db, datos.usuario_id):
            raise NotFound("Usuario no encontrado")
        return await servicio_notificaciones.crear_notificacion(db, datos)
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error creando notificación")
        raise HTTPException(status_code=500, detail="Error al crear notificación")


@router.post("/mark-all-read", response_model=MarkAllReadResponse)
async def mark_all_read(
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("notificaciones.propias")),
):
    try:
        count = await crud_notificacion.mark_all_read(db, current_user.id)
        return {
            "success": True,
            "message": f"{count} notificaciones marcadas como leídas",
            "count": count,
        }
    except Exception:
        logger.exception("Error marcando notificaciones como leídas")
        raise HTTPException(status_code=500, detail="Error al marcar notificaciones")


@router.get("/stream")
async def stream_notificaciones(
    token: Optional[str] = Query(None, description="JWT para clientes EventSource"),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
):
    """Stream de notificaciones en tiempo real usando Server-Sent Events"""
    # EventSource no permite headers, por eso se acepta el token por query
    raw_token = token or (credentials.credentials if credentials else None)
    usuario_id = verify_token(raw_token) if raw_token else None
    if usuario_id is None or not await crud_usuario.get(db, usuario_id):
        raise Unauthenticated()

    if not redis_manager.is_connected:
        raise HTTPException(status_code=503, detail="Redis no conectado")

    async def event_generator():
        try:
            recientes = await redis_manager.get_recent_events(usuario_id, 20)
            for event in reversed(recientes):
                yield {"event": "notificacion", "data": ujson.dumps(event)}

            async for event in redis_manager.subscribe_events(usuario_id):
                yield {"event": "notificacion", "data": ujson.dumps(event)}
        except asyncio.CancelledError:
            logger.info("🛑 Stream de notificaciones cancelado para usuario %s", usuario_id)
            raise

    return EventSourceResponse(event_generator())


@router.patch("/{notificacion_id}", response_model=Notificacion)
async def update_notificacion(
    notificacion_id: int,
    datos: NotificacionUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("notificaciones.propias")),
):
    """Marcar una notificación como leída o no leída"""
    notificacion = await crud_notificacion.get_for_usuario(db, notificacion_id, current_user.id)
    if not notificacion:
        raise NotFound("Notificación no encontrada")
    notificacion.read = datos.read
    await db.commit()
    await db.refresh(notificacion)
    return notificacion


@router.delete("/{notificacion_id}")
async def delete_notificacion(
    notificacion_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("notificaciones.propias")),
):
    notificacion = await crud_notificacion.get_for_usuario(db, notificacion_id, current_user.id)
    if not notificacion:
        raise NotFound("Notificación no encontrada")
    await db.delete(notificacion)
    await db.commit()
    return {"message": "Notificación eliminada"}
