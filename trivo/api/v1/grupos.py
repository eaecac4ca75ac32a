import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.api.deps import require
from trivo.config.database import get_db
from trivo.core.exceptions import Conflict, NotFound, TrivoError, ValidationFailed
from trivo.core.permissions import check_ownership
from trivo.crud.academia import academia as crud_academia
from trivo.crud.asistencia import asistencia as crud_asistencia
from trivo.crud.grupo import grupo as crud_grupo
from trivo.crud.usuario import usuario as crud_usuario
from trivo.models.miembro_academia import MiembroAcademia
from trivo.models.suscripcion import Suscripcion
from trivo.models.usuario import Usuario
from trivo.schemas.grupo import Grupo, GrupoCreate, GrupoUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


async def _academia_del_grupo(db: AsyncSession, operacion: str, usuario: Usuario, academia_id: int):
    academia = await crud_academia.get(db, academia_id)
    if not academia:
        raise NotFound("Academia no encontrada")
    check_ownership(
        operacion,
        usuario,
        academia.dueno_id,
        mensaje="No tienes permisos sobre los grupos de esta academia",
    )
    return academia


async def _get_grupo(db: AsyncSession, grupo_id: int):
    grupo = await crud_grupo.get(db, grupo_id)
    if not grupo:
        raise NotFound("Grupo no encontrado")
    return grupo


async def _validar_profesor(db: AsyncSession, profesor_id) -> None:
    if profesor_id is not None and not await crud_usuario.get(db, profesor_id):
        raise ValidationFailed("El profesor indicado no existe")


@router.get("", response_model=List[Grupo])
async def read_grupos(
    academia_id: int = Query(..., description="Academia de la que se listan los grupos"),
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("grupos.listar")),
):
    """Grupos de una academia"""
    await _academia_del_grupo(db, "grupos.listar", current_user, academia_id)
    return await crud_grupo.get_by_academia(db, academia_id)


@router.post("", response_model=Grupo, status_code=status.HTTP_201_CREATED)
async def create_grupo(
    grupo_in: GrupoCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("grupos.crear")),
):
    try:
        await _academia_del_grupo(db, "grupos.crear", current_user, grupo_in.academia_id)
        await _validar_profesor(db, grupo_in.profesor_id)
        grupo = await crud_grupo.create(db, obj_in=grupo_in)
        logger.info("Grupo %s creado en academia %s", grupo.id, grupo.academia_id)
        return grupo
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error creando grupo")
        raise HTTPException(status_code=500, detail="Error al crear grupo")


@router.get("/{grupo_id}", response_model=Grupo)
async def read_grupo(
    grupo_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("grupos.ver")),
):
    grupo = await _get_grupo(db, grupo_id)
    await _academia_del_grupo(db, "grupos.ver", current_user, grupo.academia_id)
    return grupo


@router.put("/{grupo_id}", response_model=Grupo)
async def update_grupo(
    grupo_id: int,
    grupo_in: GrupoUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("grupos.editar")),
):
    try:
        grupo = await _get_grupo(db, grupo_id)
        await _academia_del_grupo(db, "grupos.editar", current_user, grupo.academia_id)
        await _validar_profesor(db, grupo_in.profesor_id)
        return await crud_grupo.update(db, db_obj=grupo, obj_in=grupo_in)
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error actualizando grupo %s", grupo_id)
        raise HTTPException(status_code=500, detail="Error al actualizar grupo")


@router.delete("/{grupo_id}")
async def delete_grupo(
    grupo_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("grupos.eliminar")),
):
    try:
        grupo = await _get_grupo(db, grupo_id)
        await _academia_del_grupo(db, "grupos.eliminar", current_user, grupo.academia_id)

        if await crud_asistencia.exists_for_grupo(db, grupo.id):
            raise Conflict("No se puede eliminar un grupo con asistencias registradas")

        # Miembros y suscripciones quedan sin grupo asignado
        await db.execute(
            update(MiembroAcademia).where(MiembroAcademia.grupo_id == grupo.id).values(grupo_id=None)
        )
        await db.execute(
            update(Suscripcion).where(Suscripcion.grupo_id == grupo.id).values(grupo_id=None)
        )
        await crud_grupo.remove(db, id=grupo.id)
        return {"message": "Grupo eliminado correctamente"}
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error eliminando grupo %s", grupo_id)
        raise HTTPException(status_code=500, detail="Error al eliminar grupo")
