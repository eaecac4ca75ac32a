"""
Valores enumerados compartidos entre modelos, schemas y políticas de acceso.
"""
from enum import Enum


class Rol(str, Enum):
    ALUMNO = "alumno"
    PROFE = "profe"
    DUENO_ACADEMIA = "dueño de academia"
    ADMIN = "admin"


class Disciplina(str, Enum):
    RUNNING = "Running"
    TREKKING = "Trekking"
    CICLISMO = "Ciclismo"
    OTROS = "Otros"


class DiaSemana(str, Enum):
    LUN = "Lun"
    MAR = "Mar"
    MIE = "Mie"
    JUE = "Jue"
    VIE = "Vie"
    SAB = "Sab"
    DOM = "Dom"


class Dificultad(str, Enum):
    FACIL = "facil"
    MEDIA = "media"
    DIFICIL = "dificil"




class RolMiembroSalida(str, Enum):
    MIEMBRO = "miembro"
    ORGANIZADOR = "organizador"


class EstadoMiembroAcademia(str, Enum):
    ACTIVO = "activo"
    INACTIVO = "inactivo"
    SUSPENDIDO = "suspendido"


class TipoMembresia(str, Enum):
    MENSUAL = "mensual"
    TRIMESTRAL = "trimestral"
    SEMESTRAL = "semestral"
    ANUAL = "anual"


class TipoPago(str, Enum):
    TRANSFERENCIA = "transferencia"
    MERCADOPAGO = "mercadopago"


class TipoNotificacion(str, Enum):
    PAYMENT_PENDING = "payment_pending"
    JOINED_EVENT = "joined_event"
    PAYMENT_APPROVED = "payment_approved"
    PAYMENT_REJECTED = "payment_rejected"
