from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime

from trivo.core.constantes import EstadoMiembroAcademia, TipoMembresia
from .comun import ActualizacionParcial
from .usuario import UsuarioBrief


class MiembroAcademiaCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    usuario_id: int
    academia_id: int
    grupo_id: Optional[int] = None
    estado: EstadoMiembroAcademia = EstadoMiembroAcademia.ACTIVO
    tipo_membresia: Optional[TipoMembresia] = None
    fecha_vencimiento: Optional[datetime] = None
    notas: Optional[str] = None


class MiembroAcademiaUpdate(ActualizacionParcial):
    model_config = ConfigDict(use_enum_values=True)
    campos_obligatorios = ("estado",)

    grupo_id: Optional[int] = None
    estado: Optional[EstadoMiembroAcademia] = None
    tipo_membresia: Optional[TipoMembresia] = None
    fecha_vencimiento: Optional[datetime] = None
    notas: Optional[str] = None


class MiembroAcademia(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    usuario_id: int
    academia_id: int
    grupo_id: Optional[int] = None
    fecha_union: datetime
    estado: str
    tipo_membresia: Optional[str] = None
    fecha_vencimiento: Optional[datetime] = None
    notas: Optional[str] = None
    usuario: Optional[UsuarioBrief] = None
    created_at: datetime
    updated_at: datetime
