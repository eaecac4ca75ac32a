from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

from trivo.core.constantes import Disciplina
from .comun import ActualizacionParcial
from .usuario import UsuarioBrief


class AcademiaBase(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    nombre_academia: str = Field(min_length=1, max_length=150)
    pais: str = Field(min_length=1)
    provincia: str = Field(min_length=1)
    localidad: str = Field(min_length=1)
    descripcion: Optional[str] = None
    tipo_disciplina: Disciplina
    telefono: Optional[str] = None
    imagen: Optional[str] = None
    clase_gratis: bool
    precio: Optional[str] = None
    cbu: Optional[str] = None
    alias: Optional[str] = None


class AcademiaCreate(AcademiaBase):
    pass


class AcademiaUpdate(ActualizacionParcial):
    model_config = ConfigDict(use_enum_values=True)
    campos_obligatorios = (
        "nombre_academia", "pais", "provincia", "localidad", "tipo_disciplina", "clase_gratis",
    )

    nombre_academia: Optional[str] = Field(default=None, min_length=1, max_length=150)
    pais: Optional[str] = None
    provincia: Optional[str] = None
    localidad: Optional[str] = None
    descripcion: Optional[str] = None
    tipo_disciplina: Optional[Disciplina] = None
    telefono: Optional[str] = None
    imagen: Optional[str] = None
    clase_gratis: Optional[bool] = None
    precio: Optional[str] = None
    cbu: Optional[str] = None
    alias: Optional[str] = None


class Academia(AcademiaBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    dueno_id: int
    tipo_disciplina: str
    dueno: Optional[UsuarioBrief] = None
    created_at: datetime
    updated_at: datetime
