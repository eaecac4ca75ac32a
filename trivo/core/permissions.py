"""
Tabla única de autorización.

Cada operación expuesta por la API declara qué roles la pueden ejecutar y si
además exige ser dueño del recurso (academia u organizador de la salida). Los
routers no comparan roles a mano: piden ``require(operacion)`` y, cuando la
operación es sobre un recurso concreto, llaman a ``check_ownership``.
"""
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional

from trivo.core.constantes import Rol
from trivo.core.exceptions import Forbidden, NotFound


class Propiedad(str, Enum):
    NINGUNA = "ninguna"
    ACADEMIA = "academia"
    SALIDA = "salida"
    # Dueño del destino de un pago (organizador de la salida o dueño de la academia)
    PAGO = "pago"


@dataclass(frozen=True)
class Politica:
    roles: FrozenSet[Rol]
    propiedad: Propiedad = Propiedad.NINGUNA
    # En lecturas se oculta la existencia del recurso ajeno (404 en lugar de 403)
    ocultar: bool = False


TODOS = frozenset(Rol)
STAFF = frozenset({Rol.ADMIN, Rol.PROFE, Rol.DUENO_ACADEMIA})
ORGANIZADORES = frozenset({Rol.ADMIN, Rol.PROFE})
SOLO_ADMIN = frozenset({Rol.ADMIN})


POLITICAS = {
    # Academias
    "academias.listar_propias": Politica(TODOS),
    "academias.ver": Politica(TODOS, Propiedad.ACADEMIA, ocultar=True),
    "academias.crear": Politica(STAFF),
    "academias.editar": Politica(STAFF, Propiedad.ACADEMIA),
    "academias.eliminar": Politica(STAFF, Propiedad.ACADEMIA),
    # Grupos
    "grupos.listar": Politica(TODOS, Propiedad.ACADEMIA, ocultar=True),
    "grupos.ver": Politica(TODOS, Propiedad.ACADEMIA, ocultar=True),
    "grupos.crear": Politica(STAFF, Propiedad.ACADEMIA),
    "grupos.editar": Politica(STAFF, Propiedad.ACADEMIA),
    "grupos.eliminar": Politica(STAFF, Propiedad.ACADEMIA),
    # Miembros de academia
    "miembros_academia.listar": Politica(TODOS, Propiedad.ACADEMIA, ocultar=True),
    "miembros_academia.ver": Politica(TODOS, Propiedad.ACADEMIA, ocultar=True),
    "miembros_academia.crear": Politica(STAFF, Propiedad.ACADEMIA),
    "miembros_academia.editar": Politica(STAFF, Propiedad.ACADEMIA),
    "miembros_academia.eliminar": Politica(STAFF, Propiedad.ACADEMIA),
    # Asistencias y suscripciones de academia
    "asistencias.registrar": Politica(STAFF, Propiedad.ACADEMIA),
    "asistencias.listar_grupo": Politica(TODOS, Propiedad.ACADEMIA, ocultar=True),
    "suscripciones.listar_academia": Politica(TODOS, Propiedad.ACADEMIA, ocultar=True),
    "suscripciones.propias": Politica(TODOS),
    "suscripciones.gestionar": Politica(STAFF, Propiedad.ACADEMIA),
    # Salidas sociales
    "salidas.listar_propias": Politica(TODOS),
    "salidas.ver": Politica(TODOS),
    "salidas.crear": Politica(ORGANIZADORES),
    "salidas.editar": Politica(ORGANIZADORES, Propiedad.SALIDA),
    "salidas.eliminar": Politica(ORGANIZADORES, Propiedad.SALIDA),
    "salidas.unirse": Politica(TODOS),
    "salidas.listar_miembros": Politica(TODOS),
    "salidas.revisar_miembro": Politica(ORGANIZADORES, Propiedad.SALIDA),
    "salidas.eliminar_miembro": Politica(ORGANIZADORES, Propiedad.SALIDA),
    # Teams
    "teams.listar": Politica(TODOS),
    "teams.ver": Politica(TODOS),
    "teams.crear": Politica(ORGANIZADORES),
    "teams.editar": Politica(ORGANIZADORES),
    "teams.eliminar": Politica(ORGANIZADORES),
    # Pagos
    "pagos.listar": Politica(STAFF),
    "pagos.crear": Politica(TODOS),
    "pagos.revisar": Politica(STAFF, Propiedad.PAGO),
    # Notificaciones (siempre sobre las propias)
    "notificaciones.propias": Politica(TODOS),
    "notificaciones.crear": Politica(TODOS),
    # Usuarios
    "usuarios.buscar": Politica(frozenset({Rol.ADMIN, Rol.DUENO_ACADEMIA})),
    "usuarios.administrar": Politica(SOLO_ADMIN),
    # Configuración global
    "configuracion.ver": Politica(TODOS),
    "configuracion.editar": Politica(SOLO_ADMIN),
    # Dashboard
    "estadisticas.ver": Politica(TODOS),
}


def get_politica(operacion: str) -> Politica:
    try:
        return POLITICAS[operacion]
    except KeyError:
        raise KeyError(f"Operación sin política de acceso: {operacion}")


def rol_de(usuario) -> Optional[Rol]:
    try:
        return Rol(usuario.rol)
    except ValueError:
        return None


def es_admin(usuario) -> bool:
    return rol_de(usuario) == Rol.ADMIN


def check_role(operacion: str, usuario) -> None:
    politica = get_politica(operacion)
    if rol_de(usuario) not in politica.roles:
        raise Forbidden("Sin permisos")


def check_ownership(
    operacion: str,
    usuario,
    propietario_id: Optional[int],
    mensaje: str = "No tienes permisos sobre este recurso",
    no_encontrado: str = "Academia no encontrada",
) -> None:
    """Verifica que ``usuario`` sea el dueño del recurso, salvo que sea admin"""
    politica = get_politica(operacion)
    if politica.propiedad == Propiedad.NINGUNA or es_admin(usuario):
        return
    if propietario_id is not None and propietario_id == usuario.id:
        return
    if politica.ocultar:
        raise NotFound(no_encontrado)
    raise Forbidden(mensaje)
