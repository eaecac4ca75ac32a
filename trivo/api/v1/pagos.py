import logging
from typing import List, Literal, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.api.deps import get_trial_policy, require
from trivo.config.database import get_db
from trivo.config.settings import TrialPolicy
from trivo.core.exceptions import TrivoError
from trivo.crud.pago import pago as crud_pago
from trivo.models.usuario import Usuario
from trivo.schemas.pago import Pago, PagoCreate, PagoDetalle, RevisionUpdate
from trivo.services.membresias import MembresiaService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[PagoDetalle])
async def read_pagos(
    estado: Optional[Literal["pendiente", "aprobado", "rechazado"]] = Query(None),
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("pagos.listar")),
):
    """Pagos para revisión, opcionalmente filtrados por estado"""
    try:
        return await crud_pago.get_multi_by_estado(db, estado=estado)
    except Exception:
        logger.exception("Error obteniendo pagos")
        raise HTTPException(status_code=500, detail="Error al obtener pagos")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_pago(
    pago_in: PagoCreate,
    db: AsyncSession = Depends(get_db),
    policy: TrialPolicy = Depends(get_trial_policy),
    current_user: Usuario = Depends(require("pagos.crear")),
):
    """Registrar un comprobante de pago para una salida o una academia"""
    try:
        pago = await MembresiaService(db, policy).registrar_pago(current_user, pago_in)
        return {
            "success": True,
            "message": "Pago registrado exitosamente",
            "pago": Pago.model_validate(pago),
        }
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error registrando pago")
        raise HTTPException(status_code=500, detail="Error al registrar pago")


@router.patch("/{pago_id}")
async def revisar_pago(
    pago_id: int,
    revision: RevisionUpdate,
    db: AsyncSession = Depends(get_db),
    policy: TrialPolicy = Depends(get_trial_policy),
    current_user: Usuario = Depends(require("pagos.revisar")),
):
    """Aprobar o rechazar un pago; las membresías vinculadas siguen la misma decisión"""
    try:
        pago = await MembresiaService(db, policy).revisar_pago(current_user, pago_id, revision.estado)
        return {
            "success": True,
            "message": f"Pago {pago.estado} correctamente",
            "pago": Pago.model_validate(pago),
        }
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error revisando pago %s", pago_id)
        raise HTTPException(status_code=500, detail="Error al actualizar pago")
