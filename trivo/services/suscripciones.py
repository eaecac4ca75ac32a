"""
Suscripciones a academias con periodo de prueba.

El trial es híbrido: termina al alcanzar ``max_clases_gratis`` asistencias o al
pasar ``max_dias_gratis`` días, lo que ocurra primero. Las reglas llegan como un
``TrialPolicy`` inmutable en el constructor, nunca se leen de globales.
"""
import calendar
import logging
import re
from collections import Counter
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from trivo.config.settings import TrialPolicy
from trivo.core.estados import SUSCRIPCION, SUSCRIPCION_VIGENTE, EstadoSuscripcion
from trivo.core.exceptions import Conflict, Forbidden, NotFound, ValidationFailed
from trivo.crud.suscripcion import suscripcion as crud_suscripcion
from trivo.models.academia import Academia
from trivo.models.asistencia import Asistencia
from trivo.models.suscripcion import Suscripcion
from trivo.models.usuario import Usuario

logger = logging.getLogger(__name__)

ESTADOS_VIGENTES = [estado.value for estado in SUSCRIPCION_VIGENTE]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _aware(fecha: Optional[datetime]) -> Optional[datetime]:
    # SQLite devuelve fechas sin zona horaria
    if fecha is not None and fecha.tzinfo is None:
        return fecha.replace(tzinfo=timezone.utc)
    return fecha


def sumar_meses(fecha: datetime, meses: int) -> datetime:
    mes = fecha.month - 1 + meses
    anio = fecha.year + mes // 12
    mes = mes % 12 + 1
    dia = min(fecha.day, calendar.monthrange(anio, mes)[1])
    return fecha.replace(year=anio, month=mes, day=dia)


def monto_desde_precio(precio: Optional[str]) -> Decimal:
    """Extrae el primer número de un precio libre ("$5000" -> 5000)"""
    if not precio:
        return Decimal(0)
    match = re.search(r"\d+", precio)
    return Decimal(match.group(0)) if match else Decimal(0)


class SubscriptionService:
    def __init__(self, db: AsyncSession, policy: TrialPolicy):
        self.db = db
        self.policy = policy

    def es_elegible_para_trial(self, usuario: Usuario, academia_id: int) -> bool:
        if not self.policy.habilitado:
            return False
        if self.policy.tipo == "global":
            return not usuario.ha_usado_trial
        return academia_id not in (usuario.academias_con_trial or [])

    def _marcar_trial_usado(self, usuario: Usuario, academia_id: int) -> None:
        if self.policy.tipo == "global":
            usuario.ha_usado_trial = True
        elif academia_id not in (usuario.academias_con_trial or []):
            # Reasignar la lista para que SQLAlchemy detecte el cambio en la columna JSON
            usuario.academias_con_trial = [*(usuario.academias_con_trial or []), academia_id]

    async def obtener_suscripcion_activa(
        self, usuario_id: int, academia_id: int
    ) -> Optional[Suscripcion]:
        return await crud_suscripcion.get_by_usuario_academia(
            self.db, usuario_id, academia_id, ESTADOS_VIGENTES
        )

    async def crear_suscripcion(
        self, usuario: Usuario, academia: Academia, grupo_id: Optional[int] = None
    ) -> Tuple[Suscripcion, bool]:
        """Crea la suscripción y devuelve ``(suscripcion, requiere_configuracion_pago)``"""
        existente = await self.obtener_suscripcion_activa(usuario.id, academia.id)
        if existente:
            raise Conflict(
                "Ya tienes una suscripción activa en esta academia",
                details={"suscripcion_id": existente.id, "estado": existente.estado},
                status_code=400,
            )

        suscripcion = Suscripcion(
            usuario_id=usuario.id,
            academia_id=academia.id,
            grupo_id=grupo_id,
            monto=monto_desde_precio(academia.precio),
            moneda=self.policy.moneda,
            frecuencia=self.policy.frecuencia,
            tipo_frecuencia=self.policy.tipo_frecuencia,
            clases_asistidas=0,
        )

        if self.es_elegible_para_trial(usuario, academia.id):
            ahora = utcnow()
            suscripcion.estado = EstadoSuscripcion.TRIAL.value
            suscripcion.esta_en_trial = True
            suscripcion.trial_fecha_inicio = ahora
            suscripcion.trial_fecha_fin = ahora + timedelta(days=self.policy.max_dias_gratis)
            suscripcion.trial_fue_usado = False
            self._marcar_trial_usado(usuario, academia.id)
            requiere_pago = False
        else:
            suscripcion.estado = EstadoSuscripcion.PENDIENTE.value
            suscripcion.esta_en_trial = False
            suscripcion.trial_fue_usado = bool(usuario.ha_usado_trial) or academia.id in (
                usuario.academias_con_trial or []
            )
            requiere_pago = True

        self.db.add(suscripcion)
        await self.db.commit()
        await self.db.refresh(suscripcion)
        logger.info(
            "Suscripción %s creada para usuario %s en academia %s (%s)",
            suscripcion.id, usuario.id, academia.id, suscripcion.estado,
        )
        return suscripcion, requiere_pago

    def trial_vencido(self, suscripcion: Suscripcion, ahora: Optional[datetime] = None) -> bool:
        if not suscripcion.esta_en_trial:
            return False
        if suscripcion.clases_asistidas >= self.policy.max_clases_gratis:
            return True
        fin = _aware(suscripcion.trial_fecha_fin)
        return fin is not None and (ahora or utcnow()) > fin

    def expirar_trial_si_corresponde(
        self, suscripcion: Suscripcion, ahora: Optional[datetime] = None
    ) -> bool:
        """Pasa la suscripción a ``trial_expirado`` si alcanzó algún límite. No confirma."""
        if suscripcion.estado != EstadoSuscripcion.TRIAL.value or not self.trial_vencido(suscripcion, ahora):
            return False
        SUSCRIPCION.transicionar(suscripcion.estado, EstadoSuscripcion.TRIAL_EXPIRADO)
        suscripcion.estado = EstadoSuscripcion.TRIAL_EXPIRADO.value
        suscripcion.esta_en_trial = False
        return True

    async def registrar_asistencia(
        self,
        usuario_id: int,
        academia_id: int,
        grupo_id: int,
        registrado_por: int,
        fecha: Optional[datetime] = None,
        notas: Optional[str] = None,
    ) -> Tuple[Asistencia, Suscripcion, bool]:
        suscripcion = await self.obtener_suscripcion_activa(usuario_id, academia_id)
        if not suscripcion:
            raise NotFound("No se encontró una suscripción activa")

        es_trial = bool(suscripcion.esta_en_trial)
        asistencia = Asistencia(
            usuario_id=usuario_id,
            academia_id=academia_id,
            grupo_id=grupo_id,
            suscripcion_id=suscripcion.id,
            fecha=fecha or utcnow(),
            asistio=True,
            es_trial=es_trial,
            notas=notas,
            registrado_por=registrado_por,
        )
        self.db.add(asistencia)

        expirado = False
        if es_trial:
            suscripcion.clases_asistidas = (suscripcion.clases_asistidas or 0) + 1
            expirado = self.expirar_trial_si_corresponde(suscripcion)

        await self.db.commit()
        await self.db.refresh(asistencia)
        await self.db.refresh(suscripcion)
        if expirado:
            logger.info("Trial de la suscripción %s finalizado", suscripcion.id)
        return asistencia, suscripcion, expirado

    def _programar_cobro(self, suscripcion: Suscripcion, ahora: datetime) -> None:
        if suscripcion.tipo_frecuencia == "days":
            suscripcion.proxima_fecha_pago = ahora + timedelta(days=suscripcion.frecuencia)
        else:
            suscripcion.proxima_fecha_pago = sumar_meses(ahora, suscripcion.frecuencia)
        suscripcion.ultima_fecha_pago = ahora

    async def _activar(self, suscripcion: Suscripcion, mercado_pago: Optional[dict] = None) -> None:
        if suscripcion.estado not in (
            EstadoSuscripcion.TRIAL_EXPIRADO.value,
            EstadoSuscripcion.PENDIENTE.value,
        ):
            raise ValidationFailed(
                f"No se puede activar una suscripción en estado {suscripcion.estado}"
            )
        SUSCRIPCION.transicionar(suscripcion.estado, EstadoSuscripcion.ACTIVA)

        if mercado_pago:
            suscripcion.mercado_pago = mercado_pago
        suscripcion.estado = EstadoSuscripcion.ACTIVA.value

        if not suscripcion.trial_fue_usado:
            suscripcion.trial_fue_usado = True
            suscripcion.esta_en_trial = False
            usuario = await self.db.get(Usuario, suscripcion.usuario_id)
            if usuario:
                self._marcar_trial_usado(usuario, suscripcion.academia_id)

        self._programar_cobro(suscripcion, utcnow())

    async def activar(
        self, suscripcion_id: int, usuario: Usuario, mercado_pago: Optional[dict] = None
    ) -> Suscripcion:
        suscripcion = await crud_suscripcion.get(self.db, suscripcion_id)
        if not suscripcion:
            raise NotFound("Suscripción no encontrada")
        if suscripcion.usuario_id != usuario.id:
            raise Forbidden("No tienes permisos para activar esta suscripción")

        await self._activar(suscripcion, mercado_pago)
        await self.db.commit()
        await self.db.refresh(suscripcion)
        logger.info("Suscripción %s activada", suscripcion.id)
        return suscripcion

    async def registrar_pago_enviado(self, usuario_id: int, academia_id: int) -> Optional[Suscripcion]:
        """Un comprobante enviado deja la suscripción esperando aprobación. No confirma."""
        suscripcion = await crud_suscripcion.get_by_usuario_academia(
            self.db,
            usuario_id,
            academia_id,
            [EstadoSuscripcion.TRIAL_EXPIRADO.value, EstadoSuscripcion.VENCIDA.value],
        )
        if suscripcion:
            SUSCRIPCION.transicionar(suscripcion.estado, EstadoSuscripcion.PENDIENTE)
            suscripcion.estado = EstadoSuscripcion.PENDIENTE.value
        return suscripcion

    async def registrar_pago_aprobado(self, usuario_id: int, academia_id: int) -> Optional[Suscripcion]:
        """Un pago aprobado activa la suscripción pendiente. No confirma."""
        suscripcion = await crud_suscripcion.get_by_usuario_academia(
            self.db, usuario_id, academia_id, [EstadoSuscripcion.PENDIENTE.value]
        )
        if suscripcion:
            await self._activar(suscripcion)
        return suscripcion

    async def cambiar_estado(self, suscripcion: Suscripcion, destino: EstadoSuscripcion) -> Suscripcion:
        """Transiciones administrativas: pausar, reanudar, vencer o cancelar"""
        if not SUSCRIPCION.transicionar(suscripcion.estado, destino):
            return suscripcion
        if destino == EstadoSuscripcion.ACTIVA and suscripcion.estado in (
            EstadoSuscripcion.TRIAL_EXPIRADO.value,
            EstadoSuscripcion.PENDIENTE.value,
            EstadoSuscripcion.VENCIDA.value,
        ):
            self._programar_cobro(suscripcion, utcnow())
        suscripcion.estado = destino.value
        if destino == EstadoSuscripcion.CANCELADA:
            suscripcion.fecha_cancelacion = utcnow()
            suscripcion.esta_en_trial = False
        await self.db.commit()
        await self.db.refresh(suscripcion)
        return suscripcion

    async def cancelar(self, suscripcion: Suscripcion) -> Suscripcion:
        return await self.cambiar_estado(suscripcion, EstadoSuscripcion.CANCELADA)

    async def listar_de_usuario(self, usuario_id: int) -> List[Suscripcion]:
        return await crud_suscripcion.get_by_usuario(self.db, usuario_id)

    async def listar_de_academia(self, academia_id: int) -> Tuple[List[Suscripcion], dict]:
        suscripciones = await crud_suscripcion.get_by_academia(self.db, academia_id)
        conteo = Counter(s.estado for s in suscripciones)
        estadisticas = {"total": len(suscripciones)}
        estadisticas.update({estado.value: conteo.get(estado.value, 0) for estado in EstadoSuscripcion})
        return suscripciones, estadisticas
