import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.api.deps import require
from trivo.config.database import get_db
from trivo.core.exceptions import Conflict, NotFound, TrivoError, ValidationFailed
from trivo.core.permissions import check_ownership
from trivo.crud.academia import academia as crud_academia
from trivo.crud.grupo import grupo as crud_grupo
from trivo.crud.miembro_academia import miembro_academia as crud_miembro
from trivo.crud.usuario import usuario as crud_usuario
from trivo.models.usuario import Usuario
from trivo.schemas.miembro_academia import (
    MiembroAcademia,
    MiembroAcademiaCreate,
    MiembroAcademiaUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _verificar_academia(db: AsyncSession, operacion: str, usuario: Usuario, academia_id: int):
    academia = await crud_academia.get(db, academia_id)
    if not academia:
        raise NotFound("Academia no encontrada")
    check_ownership(
        operacion,
        usuario,
        academia.dueno_id,
        mensaje="No tienes permisos sobre los miembros de esta academia",
    )
    return academia


async def _verificar_grupo(db: AsyncSession, grupo_id: Optional[int], academia_id: int) -> None:
    if grupo_id is None:
        return
    grupo = await crud_grupo.get(db, grupo_id)
    if not grupo or grupo.academia_id != academia_id:
        raise ValidationFailed("El grupo no pertenece a la academia")


async def _get_miembro(db: AsyncSession, miembro_id: int):
    miembro = await crud_miembro.get(db, miembro_id)
    if not miembro:
        raise NotFound("Miembro no encontrado")
    return miembro


@router.get("", response_model=List[MiembroAcademia])
async def read_miembros(
    academia_id: int = Query(...),
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("miembros_academia.listar")),
):
    await _verificar_academia(db, "miembros_academia.listar", current_user, academia_id)
    return await crud_miembro.get_by_academia(db, academia_id)


@router.post("", response_model=MiembroAcademia, status_code=status.HTTP_201_CREATED)
async def create_miembro(
    miembro_in: MiembroAcademiaCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("miembros_academia.crear")),
):
    """Inscribir un usuario en la academia"""
    try:
        await _verificar_academia(db, "miembros_academia.crear", current_user, miembro_in.academia_id)
        if not await crud_usuario.get(db, miembro_in.usuario_id):
            raise NotFound("Usuario no encontrado")
        await _verificar_grupo(db, miembro_in.grupo_id, miembro_in.academia_id)

        if await crud_miembro.get_by_usuario_academia(db, miembro_in.usuario_id, miembro_in.academia_id):
            raise Conflict(crud_miembro.conflict_message)

        miembro = await crud_miembro.create(db, obj_in=miembro_in)
        logger.info("Usuario %s inscripto en academia %s", miembro.usuario_id, miembro.academia_id)
        return miembro
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error creando miembro de academia")
        raise HTTPException(status_code=500, detail="Error al crear miembro")


@router.get("/{miembro_id}", response_model=MiembroAcademia)
async def read_miembro(
    miembro_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("miembros_academia.ver")),
):
    miembro = await _get_miembro(db, miembro_id)
    await _verificar_academia(db, "miembros_academia.ver", current_user, miembro.academia_id)
    return miembro


@router.put("/{miembro_id}", response_model=MiembroAcademia)
async def update_miembro(
    miembro_id: int,
    miembro_in: MiembroAcademiaUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("miembros_academia.editar")),
):
    try:
        miembro = await _get_miembro(db, miembro_id)
        await _verificar_academia(db, "miembros_academia.editar", current_user, miembro.academia_id)
        await _verificar_grupo(db, miembro_in.grupo_id, miembro.academia_id)
        return await crud_miembro.update(db, db_obj=miembro, obj_in=miembro_in)
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error actualizando miembro %s", miembro_id)
        raise HTTPException(status_code=500, detail="Error al actualizar miembro")


@router.delete("/{miembro_id}")
async def delete_miembro(
    miembro_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("miembros_academia.eliminar")),
):
    try:
        miembro = await _get_miembro(db, miembro_id)
        await _verificar_academia(db, "miembros_academia.eliminar", current_user, miembro.academia_id)
        await crud_miembro.remove(db, id=miembro.id)
        return {"message": "Miembro eliminado correctamente"}
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error eliminando miembro %s", miembro_id)
        raise HTTPException(status_code=500, detail="Error al eliminar miembro")
