"""
Máquinas de estado de membresías, pagos y suscripciones.

Cada máquina declara sus transiciones válidas en una tabla; ``transicionar``
valida el salto pedido y devuelve si realmente hubo un cambio, de modo que
repetir el estado actual es un no-op y no un error.
"""
from enum import Enum
from typing import Dict, FrozenSet, Generic, TypeVar, Union

from trivo.core.exceptions import InvalidTransition


class EstadoRevision(str, Enum):
    """Estados compartidos por MiembroSalida y Pago"""

    PENDIENTE = "pendiente"
    APROBADO = "aprobado"
    RECHAZADO = "rechazado"


# Alias semánticos para que los modelos se lean mejor
EstadoMiembroSalida = EstadoRevision
EstadoPago = EstadoRevision


class EstadoSuscripcion(str, Enum):
    TRIAL = "trial"
    TRIAL_EXPIRADO = "trial_expirado"
    PENDIENTE = "pendiente"
    ACTIVA = "activa"
    VENCIDA = "vencida"
    PAUSADA = "pausada"
    CANCELADA = "cancelada"


E = TypeVar("E", bound=Enum)


class MaquinaEstados(Generic[E]):
    def __init__(self, nombre: str, estados: type, transiciones: Dict[E, FrozenSet[E]]):
        self.nombre = nombre
        self.estados = estados
        self.transiciones = transiciones

    def normalizar(self, valor: Union[E, str]) -> E:
        try:
            return self.estados(valor)
        except ValueError:
            raise InvalidTransition(f"Estado de {self.nombre} desconocido: {valor}")

    def puede(self, actual: Union[E, str], destino: Union[E, str]) -> bool:
        actual, destino = self.normalizar(actual), self.normalizar(destino)
        return destino in self.transiciones.get(actual, frozenset())

    def es_terminal(self, estado: Union[E, str]) -> bool:
        return not self.transiciones.get(self.normalizar(estado))

    def transicionar(self, actual: Union[E, str], destino: Union[E, str]) -> bool:
        """Valida ``actual -> destino``. Devuelve False si ya estaba en destino."""
        actual, destino = self.normalizar(actual), self.normalizar(destino)
        if actual == destino:
            return False
        if not self.puede(actual, destino):
            raise InvalidTransition(
                f"No se puede pasar una {self.nombre} de '{actual.value}' a '{destino.value}'",
                details={"estado_actual": actual.value, "estado_solicitado": destino.value},
            )
        return True


REVISION = MaquinaEstados(
    "revisión",
    EstadoRevision,
    {
        EstadoRevision.PENDIENTE: frozenset({EstadoRevision.APROBADO, EstadoRevision.RECHAZADO}),
        EstadoRevision.APROBADO: frozenset(),
        EstadoRevision.RECHAZADO: frozenset(),
    },
)


def _con_cancelacion(*destinos: EstadoSuscripcion) -> FrozenSet[EstadoSuscripcion]:
    return frozenset(destinos) | {EstadoSuscripcion.CANCELADA}


SUSCRIPCION = MaquinaEstados(
    "suscripción",
    EstadoSuscripcion,
    {
        EstadoSuscripcion.TRIAL: _con_cancelacion(EstadoSuscripcion.TRIAL_EXPIRADO),
        EstadoSuscripcion.TRIAL_EXPIRADO: _con_cancelacion(
            EstadoSuscripcion.PENDIENTE, EstadoSuscripcion.ACTIVA
        ),
        EstadoSuscripcion.PENDIENTE: _con_cancelacion(EstadoSuscripcion.ACTIVA),
        EstadoSuscripcion.ACTIVA: _con_cancelacion(
            EstadoSuscripcion.VENCIDA, EstadoSuscripcion.PAUSADA
        ),
        EstadoSuscripcion.VENCIDA: _con_cancelacion(
            EstadoSuscripcion.PENDIENTE, EstadoSuscripcion.ACTIVA
        ),
        EstadoSuscripcion.PAUSADA: _con_cancelacion(EstadoSuscripcion.ACTIVA),
        EstadoSuscripcion.CANCELADA: frozenset(),
    },
)

# Estados en los que una suscripción sigue "viva" para la academia
SUSCRIPCION_VIGENTE = frozenset(
    {
        EstadoSuscripcion.TRIAL,
        EstadoSuscripcion.ACTIVA,
        EstadoSuscripcion.TRIAL_EXPIRADO,
        EstadoSuscripcion.PENDIENTE,
    }
)
