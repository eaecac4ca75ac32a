import logging
from collections import defaultdict
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.api.deps import get_trial_policy, require
from trivo.config.database import get_db
from trivo.config.settings import TrialPolicy
from trivo.core.exceptions import NotFound, TrivoError, ValidationFailed
from trivo.core.permissions import check_ownership
from trivo.crud.academia import academia as crud_academia
from trivo.crud.asistencia import asistencia as crud_asistencia
from trivo.crud.grupo import grupo as crud_grupo
from trivo.models.usuario import Usuario
from trivo.schemas.asistencia import (
    Asistencia,
    AsistenciaCreate,
    AsistenciaRegistrada,
    AsistenciasGrupo,
)
from trivo.services.suscripciones import SubscriptionService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/registrar", response_model=AsistenciaRegistrada, status_code=status.HTTP_201_CREATED)
async def registrar_asistencia(
    datos: AsistenciaCreate,
    db: AsyncSession = Depends(get_db),
    policy: TrialPolicy = Depends(get_trial_policy),
    current_user: Usuario = Depends(require("asistencias.registrar")),
):
    """
    Registrar la asistencia de un alumno a una clase.

    Si el alumno está en período de prueba se descuenta una clase gratis y,
    al llegar al límite, el trial queda vencido.
    """
    try:
        academia = await crud_academia.get(db, datos.academia_id)
        if not academia:
            raise NotFound("Academia no encontrada")
        check_ownership(
            "asistencias.registrar",
            current_user,
            academia.dueno_id,
            mensaje="No tienes permisos para registrar asistencias en esta academia",
        )
        grupo = await crud_grupo.get(db, datos.grupo_id)
        if not grupo or grupo.academia_id != academia.id:
            raise ValidationFailed("El grupo no pertenece a la academia")

        asistencia, suscripcion, expirado = await SubscriptionService(db, policy).registrar_asistencia(
            usuario_id=datos.usuario_id,
            academia_id=academia.id,
            grupo_id=grupo.id,
            registrado_por=current_user.id,
            fecha=datos.fecha,
            notas=datos.notas,
        )

        if expirado:
            mensaje = "Asistencia registrada. El período de prueba finalizó"
        else:
            mensaje = "Asistencia registrada correctamente"
        return {
            "asistencia": asistencia,
            "suscripcion": suscripcion,
            "mensaje": mensaje,
            "trialExpirado": expirado,
            "requiereActivacion": expirado,
        }
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error registrando asistencia")
        raise HTTPException(status_code=500, detail="Error al registrar asistencia")


@router.get("/grupo/{grupo_id}", response_model=AsistenciasGrupo)
async def read_asistencias_grupo(
    grupo_id: int,
    fecha_desde: Optional[datetime] = Query(None),
    fecha_hasta: Optional[datetime] = Query(None),
    usuario_id: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("asistencias.listar_grupo")),
):
    """Asistencias del grupo agrupadas por día"""
    grupo = await crud_grupo.get(db, grupo_id)
    if not grupo:
        raise NotFound("Grupo no encontrado")
    academia = await crud_academia.get(db, grupo.academia_id)
    check_ownership(
        "asistencias.listar_grupo",
        current_user,
        academia.dueno_id if academia else None,
        no_encontrado="Grupo no encontrado",
    )

    asistencias = await crud_asistencia.get_by_grupo(
        db, grupo_id, desde=fecha_desde, hasta=fecha_hasta, usuario_id=usuario_id
    )

    por_fecha = defaultdict(list)
    for asistencia in asistencias:
        por_fecha[asistencia.fecha.date().isoformat()].append(Asistencia.model_validate(asistencia))

    trial = sum(1 for a in asistencias if a.es_trial)
    estadisticas = {
        "total": len(asistencias),
        "asistenciasTrial": trial,
        "asistenciasPagas": len(asistencias) - trial,
        "usuariosUnicos": len({a.usuario_id for a in asistencias}),
    }
    return {
        "asistencias": asistencias,
        "estadisticas": estadisticas,
        "asistenciasPorFecha": dict(por_fecha),
    }
