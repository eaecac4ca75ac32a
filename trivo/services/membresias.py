"""
Flujo de membresías de salidas y revisión de pagos.

La membresía y su pago se mueven juntos dentro de una misma transacción. El
cupo se vuelve a verificar en cada aprobación con la fila de la salida
bloqueada, y repetir la decisión ya tomada no genera notificaciones nuevas.
"""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.config.settings import TrialPolicy
from trivo.core.constantes import TipoNotificacion
from trivo.core.estados import REVISION, EstadoMiembroSalida, EstadoPago
from trivo.core.exceptions import CapacityExceeded, Conflict, NotFound
from trivo.core.permissions import check_ownership
from trivo.crud.academia import academia as crud_academia
from trivo.crud.miembro_salida import miembro_salida as crud_miembro_salida
from trivo.crud.salida import salida as crud_salida
from trivo.models.miembro_salida import MiembroSalida
from trivo.models.notificacion import Notificacion
from trivo.models.pago import Pago
from trivo.models.salida_social import SalidaSocial
from trivo.models.usuario import Usuario
from trivo.schemas.miembro_salida import UnirseSalida
from trivo.schemas.pago import PagoCreate
from trivo.services import notificaciones
from trivo.services.suscripciones import SubscriptionService, monto_desde_precio

logger = logging.getLogger(__name__)


def _mensaje_revision(nombre: str, estado: str) -> str:
    if estado == EstadoPago.APROBADO.value:
        return f'Tu pago para "{nombre}" fue aprobado ✅'
    return f'Tu pago para "{nombre}" fue rechazado ❌'


def _tipo_revision(estado: str) -> TipoNotificacion:
    if estado == EstadoPago.APROBADO.value:
        return TipoNotificacion.PAYMENT_APPROVED
    return TipoNotificacion.PAYMENT_REJECTED


class MembresiaService:
    def __init__(self, db: AsyncSession, policy: TrialPolicy):
        self.db = db
        self.suscripciones = SubscriptionService(db, policy)

    async def _salida_bloqueada(self, salida_id: int) -> SalidaSocial:
        result = await self.db.execute(
            select(SalidaSocial).where(SalidaSocial.id == salida_id).with_for_update()
        )
        salida = result.scalar_one_or_none()
        if not salida:
            raise NotFound("Salida no encontrada")
        return salida

    async def _verificar_cupo(self, salida: SalidaSocial, nuevos: int = 1) -> None:
        aprobados = await crud_salida.count_aprobados(self.db, salida.id)
        if aprobados + nuevos > salida.cupo:
            raise CapacityExceeded("No hay cupos disponibles")

    async def _confirmar(self, pendientes: List[Notificacion], conflicto: str) -> None:
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise Conflict(conflicto)
        await notificaciones.publicar(pendientes)

    def _nuevo_pago(
        self,
        usuario: Usuario,
        comprobante_url: Optional[str],
        tipo_pago: str,
        amount,
        salida: Optional[SalidaSocial] = None,
        academia=None,
    ) -> Pago:
        precio = salida.precio if salida else (academia.precio if academia else None)
        return Pago(
            usuario_id=usuario.id,
            salida_id=salida.id if salida else None,
            academia_id=academia.id if academia else None,
            comprobante_url=comprobante_url,
            tipo_pago=tipo_pago,
            amount=amount if amount is not None else monto_desde_precio(precio),
            estado=EstadoPago.PENDIENTE.value,
            salida_nombre=salida.nombre if salida else None,
            academia_nombre=academia.nombre_academia if academia else None,
        )

    def _aviso_comprobante(self, usuario: Usuario, salida: SalidaSocial) -> Notificacion:
        return notificaciones.nueva_notificacion(
            usuario_id=salida.creador_id,
            tipo=TipoNotificacion.PAYMENT_PENDING,
            message=f"{usuario.nombre_completo} ha enviado el comprobante de pago",
            related_id=salida.id,
            related_user_id=usuario.id,
            metadata={
                "salidaNombre": salida.nombre,
                "userName": usuario.nombre_completo,
                "shortId": salida.short_id,
            },
        )

    async def unirse(self, usuario: Usuario, salida_id: int, datos: UnirseSalida) -> MiembroSalida:
        salida = await self._salida_bloqueada(salida_id)

        if await crud_miembro_salida.get_by_usuario_salida(self.db, usuario.id, salida.id):
            raise Conflict("Ya eres miembro de esta salida")
        await self._verificar_cupo(salida)

        miembro = MiembroSalida(
            usuario_id=usuario.id,
            salida_id=salida.id,
            estado=EstadoMiembroSalida.PENDIENTE.value,
        )
        self.db.add(miembro)

        pendientes = [
            notificaciones.nueva_notificacion(
                usuario_id=salida.creador_id,
                tipo=TipoNotificacion.JOINED_EVENT,
                message=f'{usuario.nombre_completo} se unió a "{salida.nombre}"',
                related_id=salida.id,
                related_user_id=usuario.id,
                metadata={
                    "salidaNombre": salida.nombre,
                    "userName": usuario.nombre_completo,
                    "shortId": salida.short_id,
                },
            )
        ]

        if datos.comprobante_url:
            pago = self._nuevo_pago(
                usuario, datos.comprobante_url, datos.tipo_pago, datos.amount, salida=salida
            )
            self.db.add(pago)
            await self.db.flush()
            miembro.pago_id = pago.id
            pendientes.append(self._aviso_comprobante(usuario, salida))

        self.db.add_all(pendientes)
        await self._confirmar(pendientes, "Ya eres miembro de esta salida")
        await self.db.refresh(miembro)
        logger.info("Usuario %s solicitó unirse a la salida %s", usuario.id, salida.id)
        return miembro

    async def revisar_miembro(
        self, usuario: Usuario, salida_id: int, miembro_id: int, estado: str
    ) -> MiembroSalida:
        salida = await self._salida_bloqueada(salida_id)
        check_ownership(
            "salidas.revisar_miembro",
            usuario,
            salida.creador_id,
            mensaje="Solo el organizador puede revisar miembros de esta salida",
            no_encontrado="Salida no encontrada",
        )

        miembro = await crud_miembro_salida.get(self.db, miembro_id)
        if not miembro or miembro.salida_id != salida.id:
            raise NotFound("Miembro no encontrado")

        if not REVISION.transicionar(miembro.estado, estado):
            return miembro

        if estado == EstadoMiembroSalida.APROBADO.value:
            await self._verificar_cupo(salida)

        pago = await self.db.get(Pago, miembro.pago_id) if miembro.pago_id else None
        if pago and pago.estado != estado:
            REVISION.transicionar(pago.estado, estado)
            pago.estado = estado
        miembro.estado = estado

        aviso = notificaciones.nueva_notificacion(
            usuario_id=miembro.usuario_id,
            tipo=_tipo_revision(estado),
            message=_mensaje_revision(salida.nombre, estado),
            related_id=salida.id,
            related_user_id=usuario.id,
            metadata={"salidaNombre": salida.nombre, "shortId": salida.short_id},
        )
        self.db.add(aviso)
        await self._confirmar([aviso], "No se pudo actualizar el miembro")
        await self.db.refresh(miembro)
        logger.info("Miembro %s de la salida %s -> %s", miembro.id, salida.id, estado)
        return miembro

    async def eliminar_miembro(self, usuario: Usuario, salida_id: int, miembro_id: int) -> None:
        salida = await crud_salida.get(self.db, salida_id)
        if not salida:
            raise NotFound("Salida no encontrada")
        check_ownership(
            "salidas.eliminar_miembro",
            usuario,
            salida.creador_id,
            mensaje="Solo el organizador puede eliminar miembros de esta salida",
        )
        miembro = await crud_miembro_salida.get(self.db, miembro_id)
        if not miembro or miembro.salida_id != salida.id:
            raise NotFound("Miembro no encontrado")

        pago_id = miembro.pago_id
        await self.db.delete(miembro)
        if pago_id:
            pago = await self.db.get(Pago, pago_id)
            if pago:
                await self.db.delete(pago)
        await self.db.commit()

    async def _propietario_del_pago(self, pago: Pago) -> Optional[int]:
        if pago.salida_id:
            salida = await crud_salida.get(self.db, pago.salida_id)
            return salida.creador_id if salida else None
        if pago.academia_id:
            academia = await crud_academia.get(self.db, pago.academia_id)
            return academia.dueno_id if academia else None
        return None

    async def revisar_pago(self, usuario: Usuario, pago_id: int, estado: str) -> Pago:
        pago = await self.db.get(Pago, pago_id)
        if not pago:
            raise NotFound("Pago no encontrado")

        check_ownership(
            "pagos.revisar",
            usuario,
            await self._propietario_del_pago(pago),
            mensaje="No tienes permisos para revisar este pago",
        )

        if not REVISION.transicionar(pago.estado, estado):
            return pago

        salida = await self._salida_bloqueada(pago.salida_id) if pago.salida_id else None
        miembros = await crud_miembro_salida.get_by_pago(self.db, pago.id)
        a_mover = [m for m in miembros if m.estado != estado]
        for miembro in a_mover:
            REVISION.transicionar(miembro.estado, estado)

        if salida and estado == EstadoPago.APROBADO.value and a_mover:
            await self._verificar_cupo(salida, nuevos=len(a_mover))

        pago.estado = estado
        for miembro in a_mover:
            miembro.estado = estado

        if pago.academia_id and estado == EstadoPago.APROBADO.value:
            await self.suscripciones.registrar_pago_aprobado(pago.usuario_id, pago.academia_id)

        nombre = (salida.nombre if salida else None) or pago.salida_nombre or pago.academia_nombre or ""
        metadata = {"salidaNombre": nombre}
        if salida:
            metadata["shortId"] = salida.short_id
        aviso = notificaciones.nueva_notificacion(
            usuario_id=pago.usuario_id,
            tipo=_tipo_revision(estado),
            message=_mensaje_revision(nombre, estado),
            related_id=pago.salida_id or pago.academia_id,
            related_user_id=usuario.id,
            metadata=metadata,
        )
        self.db.add(aviso)
        await self._confirmar([aviso], "No se pudo actualizar el pago")
        await self.db.refresh(pago)
        logger.info("Pago %s -> %s", pago.id, estado)
        return pago

    async def _reemplazar_pago(self, miembro: MiembroSalida, nuevo: Pago) -> None:
        """Un miembro pendiente referencia un solo pago vivo: el comprobante anterior queda rechazado"""
        if miembro.pago_id and miembro.pago_id != nuevo.id:
            anterior = await self.db.get(Pago, miembro.pago_id)
            if anterior and REVISION.transicionar(anterior.estado, EstadoPago.RECHAZADO):
                anterior.estado = EstadoPago.RECHAZADO.value
                logger.info("Pago %s reemplazado por el pago %s", anterior.id, nuevo.id)
        miembro.pago_id = nuevo.id

    async def registrar_pago(self, usuario: Usuario, datos: PagoCreate) -> Pago:
        salida = academia = None
        if datos.salida_id is not None:
            salida = await crud_salida.get(self.db, datos.salida_id)
            if not salida:
                raise NotFound("Salida no encontrada")
        else:
            academia = await crud_academia.get(self.db, datos.academia_id)
            if not academia:
                raise NotFound("Academia no encontrada")

        pago = self._nuevo_pago(
            usuario, datos.comprobante_url, datos.tipo_pago, datos.amount,
            salida=salida, academia=academia,
        )
        self.db.add(pago)
        await self.db.flush()

        pendientes = []
        if salida:
            miembro = await crud_miembro_salida.get_by_usuario_salida(self.db, usuario.id, salida.id)
            if miembro and miembro.estado == EstadoMiembroSalida.PENDIENTE.value:
                await self._reemplazar_pago(miembro, pago)
            pendientes.append(self._aviso_comprobante(usuario, salida))
        else:
            await self.suscripciones.registrar_pago_enviado(usuario.id, academia.id)
            pendientes.append(
                notificaciones.nueva_notificacion(
                    usuario_id=academia.dueno_id,
                    tipo=TipoNotificacion.PAYMENT_PENDING,
                    message=f"{usuario.nombre_completo} ha enviado el comprobante de pago",
                    related_id=academia.id,
                    related_user_id=usuario.id,
                    metadata={
                        "academiaNombre": academia.nombre_academia,
                        "userName": usuario.nombre_completo,
                    },
                )
            )

        self.db.add_all(pendientes)
        await self._confirmar(pendientes, "No se pudo registrar el pago")
        await self.db.refresh(pago)
        logger.info("Pago %s registrado por usuario %s", pago.id, usuario.id)
        return pago
