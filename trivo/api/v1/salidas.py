import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.api.deps import get_trial_policy, require
from trivo.config.database import get_db
from trivo.config.settings import TrialPolicy
from trivo.core.exceptions import NotFound, TrivoError, ValidationFailed
from trivo.core.permissions import check_ownership
from trivo.crud.miembro_salida import miembro_salida as crud_miembro_salida
from trivo.crud.salida import salida as crud_salida
from trivo.crud.sponsor import sponsor as crud_sponsor
from trivo.models.usuario import Usuario
from trivo.schemas.miembro_salida import MiembroSalida, UnirseSalida
from trivo.schemas.pago import RevisionUpdate
from trivo.schemas.salida import (
    Salida,
    SalidaConParticipantes,
    SalidaCreate,
    SalidaImagenUpdate,
    SalidaUpdate,
)
from trivo.services.membresias import MembresiaService

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_salida(db: AsyncSession, salida_id: int):
    salida = await crud_salida.get(db, salida_id)
    if not salida:
        raise NotFound("Salida no encontrada")
    return salida


async def _validar_sponsor(db: AsyncSession, sponsor_id) -> None:
    if sponsor_id is not None and not await crud_sponsor.get(db, sponsor_id):
        raise ValidationFailed("El sponsor indicado no existe")


def _solo_organizador(operacion: str, usuario: Usuario, salida) -> None:
    check_ownership(
        operacion,
        usuario,
        salida.creador_id,
        mensaje="Solo el organizador puede modificar esta salida",
    )


@router.get("", response_model=List[SalidaConParticipantes])
async def read_salidas(
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("salidas.listar_propias")),
):
    """Salidas creadas por el usuario con la cantidad de participantes aprobados"""
    try:
        filas = await crud_salida.get_multi_by_creador(db, current_user.id)
        return [
            SalidaConParticipantes.model_validate(salida).model_copy(update={"participantes": total})
            for salida, total in filas
        ]
    except Exception:
        logger.exception("Error obteniendo salidas")
        raise HTTPException(status_code=500, detail="Error al obtener salidas")


@router.post("", response_model=Salida, status_code=status.HTTP_201_CREATED)
async def create_salida(
    salida_in: SalidaCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("salidas.crear")),
):
    try:
        await _validar_sponsor(db, salida_in.sponsor_id)
        salida = await crud_salida.create(db, obj_in=salida_in, creador_id=current_user.id)
        logger.info("🏃 Salida %s (%s) creada por usuario %s", salida.id, salida.short_id, current_user.id)
        return salida
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error creando salida")
        raise HTTPException(status_code=500, detail="Error al crear salida")


@router.get("/short/{short_id}", response_model=Salida)
async def read_salida_por_short_id(
    short_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("salidas.ver")),
):
    """Resolver el enlace corto que se comparte por WhatsApp"""
    salida = await crud_salida.get_by_short_id(db, short_id)
    if not salida:
        raise NotFound("Salida no encontrada")
    return salida


@router.get("/{salida_id}", response_model=Salida)
async def read_salida(
    salida_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("salidas.ver")),
):
    return await _get_salida(db, salida_id)


@router.put("/{salida_id}", response_model=Salida)
async def update_salida(
    salida_id: int,
    salida_in: SalidaUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("salidas.editar")),
):
    try:
        salida = await _get_salida(db, salida_id)
        _solo_organizador("salidas.editar", current_user, salida)
        await _validar_sponsor(db, salida_in.sponsor_id)

        if salida_in.cupo is not None:
            aprobados = await crud_salida.count_aprobados(db, salida.id)
            if salida_in.cupo < aprobados:
                raise ValidationFailed(
                    "El cupo no puede ser menor que la cantidad de participantes aprobados",
                    details={"aprobados": aprobados},
                )

        return await crud_salida.update(db, db_obj=salida, obj_in=salida_in)
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error actualizando salida %s", salida_id)
        raise HTTPException(status_code=500, detail="Error al actualizar salida")


@router.patch("/{salida_id}", response_model=Salida)
async def update_imagen_salida(
    salida_id: int,
    imagen_in: SalidaImagenUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("salidas.editar")),
):
    """Actualizar solo la imagen de la salida"""
    salida = await _get_salida(db, salida_id)
    _solo_organizador("salidas.editar", current_user, salida)
    return await crud_salida.update(db, db_obj=salida, obj_in={"imagen": imagen_in.imagen})


@router.delete("/{salida_id}")
async def delete_salida(
    salida_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("salidas.eliminar")),
):
    try:
        salida = await _get_salida(db, salida_id)
        _solo_organizador("salidas.eliminar", current_user, salida)
        await crud_salida.remove(db, id=salida.id)
        logger.info("Salida %s eliminada por usuario %s", salida_id, current_user.id)
        return {"message": "Salida eliminada correctamente"}
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error eliminando salida %s", salida_id)
        raise HTTPException(status_code=500, detail="Error al eliminar salida")


# ===== MIEMBROS =====

@router.get("/{salida_id}/miembros", response_model=List[MiembroSalida])
async def read_miembros_salida(
    salida_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("salidas.listar_miembros")),
):
    await _get_salida(db, salida_id)
    return await crud_miembro_salida.get_by_salida(db, salida_id)


@router.post(
    "/{salida_id}/miembros",
    response_model=MiembroSalida,
    status_code=status.HTTP_201_CREATED,
)
async def unirse_a_salida(
    salida_id: int,
    datos: UnirseSalida = UnirseSalida(),
    db: AsyncSession = Depends(get_db),
    policy: TrialPolicy = Depends(get_trial_policy),
    current_user: Usuario = Depends(require("salidas.unirse")),
):
    """Solicitar unirse a una salida; queda pendiente hasta que el organizador la revise"""
    try:
        return await MembresiaService(db, policy).unirse(current_user, salida_id, datos)
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error uniendo usuario %s a salida %s", current_user.id, salida_id)
        raise HTTPException(status_code=500, detail="Error al unirse a la salida")


@router.patch("/{salida_id}/miembros/{miembro_id}", response_model=MiembroSalida)
async def revisar_miembro_salida(
    salida_id: int,
    miembro_id: int,
    revision: RevisionUpdate,
    db: AsyncSession = Depends(get_db),
    policy: TrialPolicy = Depends(get_trial_policy),
    current_user: Usuario = Depends(require("salidas.revisar_miembro")),
):
    """Aprobar o rechazar a un miembro; su pago acompaña la decisión"""
    try:
        return await MembresiaService(db, policy).revisar_miembro(
            current_user, salida_id, miembro_id, revision.estado
        )
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error revisando miembro %s de salida %s", miembro_id, salida_id)
        raise HTTPException(status_code=500, detail="Error al actualizar miembro")


@router.delete("/{salida_id}/miembros/{miembro_id}")
async def delete_miembro_salida(
    salida_id: int,
    miembro_id: int,
    db: AsyncSession = Depends(get_db),
    policy: TrialPolicy = Depends(get_trial_policy),
    current_user: Usuario = Depends(require("salidas.eliminar_miembro")),
):
    try:
        await MembresiaService(db, policy).eliminar_miembro(current_user, salida_id, miembro_id)
        return {"message": "Miembro eliminado correctamente"}
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error eliminando miembro %s de salida %s", miembro_id, salida_id)
        raise HTTPException(status_code=500, detail="Error al eliminar miembro")
