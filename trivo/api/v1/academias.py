import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.api.deps import require
from trivo.config.database import get_db
from trivo.core.exceptions import Conflict, NotFound, TrivoError
from trivo.core.permissions import check_ownership
from trivo.crud.academia import ACADEMIA_DUPLICADA, academia as crud_academia
from trivo.models.pago import Pago
from trivo.models.usuario import Usuario
from trivo.schemas.academia import Academia, AcademiaCreate, AcademiaUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


async def get_academia_or_404(db: AsyncSession, academia_id: int):
    academia = await crud_academia.get(db, academia_id)
    if not academia:
        raise NotFound("Academia no encontrada")
    return academia


@router.get("", response_model=List[Academia])
async def read_academias(
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("academias.listar_propias")),
):
    """Academias del usuario actual"""
    try:
        return await crud_academia.get_multi_by_dueno(db, current_user.id)
    except Exception:
        logger.exception("Error obteniendo academias")
        raise HTTPException(status_code=500, detail="Error al obtener academias")


@router.post("", response_model=Academia, status_code=status.HTTP_201_CREATED)
async def create_academia(
    academia_in: AcademiaCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("academias.crear")),
):
    """Crear la academia del usuario (una por dueño)"""
    try:
        if await crud_academia.get_by_dueno(db, current_user.id):
            raise Conflict(ACADEMIA_DUPLICADA, status_code=status.HTTP_400_BAD_REQUEST)

        academia = await crud_academia.create(db, obj_in=academia_in, dueno_id=current_user.id)
        logger.info("Academia %s creada por usuario %s", academia.id, current_user.id)
        return academia
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error creando academia")
        raise HTTPException(status_code=500, detail="Error al crear academia")


@router.get("/{academia_id}", response_model=Academia)
async def read_academia(
    academia_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("academias.ver")),
):
    academia = await get_academia_or_404(db, academia_id)
    check_ownership("academias.ver", current_user, academia.dueno_id)
    return academia


@router.put("/{academia_id}", response_model=Academia)
async def update_academia(
    academia_id: int,
    academia_in: AcademiaUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("academias.editar")),
):
    try:
        academia = await get_academia_or_404(db, academia_id)
        check_ownership(
            "academias.editar",
            current_user,
            academia.dueno_id,
            mensaje="No tienes permisos para editar esta academia",
        )
        return await crud_academia.update(db, db_obj=academia, obj_in=academia_in)
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error actualizando academia %s", academia_id)
        raise HTTPException(status_code=500, detail="Error al actualizar academia")


@router.delete("/{academia_id}")
async def delete_academia(
    academia_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("academias.eliminar")),
):
    try:
        academia = await get_academia_or_404(db, academia_id)
        check_ownership(
            "academias.eliminar",
            current_user,
            academia.dueno_id,
            mensaje="No tienes permisos para eliminar esta academia",
        )

        dependencias = await crud_academia.count_dependencias(db, academia.id)
        if any(dependencias.values()):
            raise Conflict(
                "No se puede eliminar una academia con grupos, miembros o suscripciones",
                details=dependencias,
            )

        # Los pagos conservan el nombre de la academia
        await db.execute(update(Pago).where(Pago.academia_id == academia.id).values(academia_id=None))
        await crud_academia.remove(db, id=academia.id)
        logger.info("Academia %s eliminada", academia_id)
        return {"message": "Academia eliminada correctamente"}
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error eliminando academia %s", academia_id)
        raise HTTPException(status_code=500, detail="Error al eliminar academia")
