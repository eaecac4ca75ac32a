import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.api.deps import get_trial_policy, require
from trivo.config.database import get_db
from trivo.config.settings import TrialPolicy
from trivo.core.estados import EstadoSuscripcion
from trivo.core.exceptions import Forbidden, NotFound, TrivoError, ValidationFailed
from trivo.core.permissions import check_ownership
from trivo.crud.academia import academia as crud_academia
from trivo.crud.grupo import grupo as crud_grupo
from trivo.crud.suscripcion import suscripcion as crud_suscripcion
from trivo.models.usuario import Usuario
from trivo.schemas.suscripcion import (
    SuscripcionActivada,
    SuscripcionActivar,
    SuscripcionCreada,
    SuscripcionCreate,
    Suscripcion,
    SuscripcionEstadoUpdate,
    SuscripcionesAcademia,
    SuscripcionesUsuario,
)
from trivo.services.suscripciones import SubscriptionService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/create", response_model=SuscripcionCreada, status_code=status.HTTP_201_CREATED)
async def create_subscription(
    datos: SuscripcionCreate,
    db: AsyncSession = Depends(get_db),
    policy: TrialPolicy = Depends(get_trial_policy),
    current_user: Usuario = Depends(require("suscripciones.propias")),
):
    """Crear suscripción en una academia, con período de prueba si corresponde"""
    try:
        academia = await crud_academia.get(db, datos.academia_id)
        if not academia:
            raise NotFound("Academia no encontrada")
        if datos.grupo_id is not None:
            grupo = await crud_grupo.get(db, datos.grupo_id)
            if not grupo or grupo.academia_id != academia.id:
                raise ValidationFailed("El grupo no pertenece a la academia")

        suscripcion, requiere_pago = await SubscriptionService(db, policy).crear_suscripcion(
            current_user, academia, datos.grupo_id
        )
        if requiere_pago:
            mensaje = "Suscripción creada. Debes configurar el método de pago para activarla"
        else:
            mensaje = (
                f"Suscripción creada con período de prueba: {policy.max_clases_gratis} clase(s) "
                f"o {policy.max_dias_gratis} día(s) gratis"
            )
        return {
            "suscripcion": suscripcion,
            "requiereConfiguracionPago": requiere_pago,
            "mensaje": mensaje,
        }
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error creando suscripción")
        raise HTTPException(status_code=500, detail="Error al crear suscripción")


@router.post("/activate", response_model=SuscripcionActivada)
async def activate_subscription(
    datos: SuscripcionActivar,
    db: AsyncSession = Depends(get_db),
    policy: TrialPolicy = Depends(get_trial_policy),
    current_user: Usuario = Depends(require("suscripciones.propias")),
):
    """Activar una suscripción una vez configurado el cobro recurrente"""
    try:
        mercado_pago = datos.mercado_pago.model_dump() if datos.mercado_pago else None
        suscripcion = await SubscriptionService(db, policy).activar(
            datos.suscripcion_id, current_user, mercado_pago
        )
        return {"suscripcion": suscripcion, "mensaje": "Suscripción activada correctamente"}
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error activando suscripción %s", datos.suscripcion_id)
        raise HTTPException(status_code=500, detail="Error al activar suscripción")


@router.get("/user", response_model=SuscripcionesUsuario)
async def read_user_subscriptions(
    db: AsyncSession = Depends(get_db),
    policy: TrialPolicy = Depends(get_trial_policy),
    current_user: Usuario = Depends(require("suscripciones.propias")),
):
    suscripciones = await SubscriptionService(db, policy).listar_de_usuario(current_user.id)
    return {"suscripciones": suscripciones, "total": len(suscripciones)}


@router.get("/academia/{academia_id}", response_model=SuscripcionesAcademia)
async def read_academia_subscriptions(
    academia_id: int,
    db: AsyncSession = Depends(get_db),
    policy: TrialPolicy = Depends(get_trial_policy),
    current_user: Usuario = Depends(require("suscripciones.listar_academia")),
):
    """Suscripciones de la academia con conteo por estado"""
    academia = await crud_academia.get(db, academia_id)
    if not academia:
        raise NotFound("Academia no encontrada")
    check_ownership("suscripciones.listar_academia", current_user, academia.dueno_id)

    suscripciones, estadisticas = await SubscriptionService(db, policy).listar_de_academia(academia_id)
    return {"suscripciones": suscripciones, "estadisticas": estadisticas}


@router.patch("/{suscripcion_id}/estado", response_model=Suscripcion)
async def update_subscription_estado(
    suscripcion_id: int,
    datos: SuscripcionEstadoUpdate,
    db: AsyncSession = Depends(get_db),
    policy: TrialPolicy = Depends(get_trial_policy),
    current_user: Usuario = Depends(require("suscripciones.gestionar")),
):
    """Cambio de estado hecho por el dueño de la academia"""
    try:
        suscripcion = await crud_suscripcion.get(db, suscripcion_id)
        if not suscripcion:
            raise NotFound("Suscripción no encontrada")
        academia = await crud_academia.get(db, suscripcion.academia_id)
        check_ownership(
            "suscripciones.gestionar",
            current_user,
            academia.dueno_id if academia else None,
            mensaje="No tienes permisos sobre las suscripciones de esta academia",
        )
        return await SubscriptionService(db, policy).cambiar_estado(
            suscripcion, EstadoSuscripcion(datos.estado)
        )
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error cambiando estado de suscripción %s", suscripcion_id)
        raise HTTPException(status_code=500, detail="Error al actualizar suscripción")


@router.post("/{suscripcion_id}/cancelar", response_model=Suscripcion)
async def cancel_subscription(
    suscripcion_id: int,
    db: AsyncSession = Depends(get_db),
    policy: TrialPolicy = Depends(get_trial_policy),
    current_user: Usuario = Depends(require("suscripciones.propias")),
):
    try:
        suscripcion = await crud_suscripcion.get(db, suscripcion_id)
        if not suscripcion:
            raise NotFound("Suscripción no encontrada")
        if suscripcion.usuario_id != current_user.id:
            raise Forbidden("No tienes permisos para cancelar esta suscripción")
        suscripcion = await SubscriptionService(db, policy).cancelar(suscripcion)
        logger.info("Suscripción %s cancelada por usuario %s", suscripcion.id, current_user.id)
        return suscripcion
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error cancelando suscripción %s", suscripcion_id)
        raise HTTPException(status_code=500, detail="Error al cancelar suscripción")
