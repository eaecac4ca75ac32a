from pydantic import BaseModel, ConfigDict
from typing import Dict, List, Optional
from datetime import datetime

from .suscripcion import Suscripcion


class AsistenciaCreate(BaseModel):
    usuario_id: int
    academia_id: int
    grupo_id: int
    fecha: Optional[datetime] = None
    notas: Optional[str] = None


class Asistencia(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    usuario_id: int
    academia_id: int
    grupo_id: int
    suscripcion_id: int
    fecha: datetime
    asistio: bool
    es_trial: bool
    notas: Optional[str] = None
    registrado_por: int


class AsistenciaRegistrada(BaseModel):
    asistencia: Asistencia
    suscripcion: Suscripcion
    mensaje: str
    trialExpirado: bool = False
    requiereActivacion: bool = False


class AsistenciasGrupo(BaseModel):
    asistencias: List[Asistencia]
    estadisticas: Dict[str, int]
    asistenciasPorFecha: Dict[str, List[Asistencia]]
