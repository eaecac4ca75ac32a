from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime

from trivo.core.constantes import DiaSemana
from .comun import ActualizacionParcial, Coordenadas
from .usuario import UsuarioBrief


class GrupoBase(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    nombre_grupo: str = Field(min_length=1, max_length=150)
    profesor_id: Optional[int] = None
    nivel: Optional[str] = None
    ubicacion: Optional[str] = None
    horario: Optional[str] = None
    dias: List[DiaSemana] = Field(min_length=1)
    descripcion: Optional[str] = None
    imagen: Optional[str] = None
    tipo_grupo: Optional[str] = None
    tiempo_promedio: Optional[str] = None
    location_coords: Optional[Coordenadas] = None


class GrupoCreate(GrupoBase):
    academia_id: int


class GrupoUpdate(ActualizacionParcial):
    model_config = ConfigDict(use_enum_values=True)
    campos_obligatorios = ("nombre_grupo", "dias")

    nombre_grupo: Optional[str] = Field(default=None, min_length=1, max_length=150)
    profesor_id: Optional[int] = None
    nivel: Optional[str] = None
    ubicacion: Optional[str] = None
    horario: Optional[str] = None
    dias: Optional[List[DiaSemana]] = Field(default=None, min_length=1)
    descripcion: Optional[str] = None
    imagen: Optional[str] = None
    tipo_grupo: Optional[str] = None
    tiempo_promedio: Optional[str] = None
    location_coords: Optional[Coordenadas] = None


class Grupo(GrupoBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    academia_id: int
    dias: List[str]
    profesor: Optional[UsuarioBrief] = None
    created_at: datetime
    updated_at: datetime
