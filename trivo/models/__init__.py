from .base import BaseModel
from .usuario import Usuario
from .academia import Academia
from .grupo import Grupo
from .sponsor import Sponsor
from .salida_social import SalidaSocial
from .team_social import TeamSocial
from .pago import Pago
from .miembro_salida import MiembroSalida
from .miembro_academia import MiembroAcademia
from .notificacion import Notificacion
from .suscripcion import Suscripcion
from .asistencia import Asistencia
from .configuracion import ConfiguracionPagos, ConfiguracionWhatsApp

__all__ = [
    "BaseModel",
    "Usuario",
    "Academia",
    "Grupo",
    "Sponsor",
    "SalidaSocial",
    "TeamSocial",
    "Pago",
    "MiembroSalida",
    "MiembroAcademia",
    "Notificacion",
    "Suscripcion",
    "Asistencia",
    "ConfiguracionPagos",
    "ConfiguracionWhatsApp",
]
