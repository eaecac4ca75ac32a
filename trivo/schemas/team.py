from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

from trivo.core.constantes import Dificultad
from .comun import ActualizacionParcial, Coordenadas
from .usuario import UsuarioBrief


class TeamBase(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    nombre: str = Field(min_length=1, max_length=150)
    ubicacion: str = Field(min_length=1)
    precio: str = Field(min_length=1)
    deporte: str = Field(min_length=1)
    fecha: str = Field(min_length=1)
    hora: str = Field(min_length=1)
    duracion: str = Field(min_length=1)
    cupo: int = Field(gt=0)
    localidad: Optional[str] = None
    provincia: Optional[str] = None
    telefono_organizador: Optional[str] = None
    whatsapp_link: Optional[str] = None
    descripcion: Optional[str] = None
    imagen: Optional[str] = None
    location_coords: Optional[Coordenadas] = None
    cbu: Optional[str] = None
    alias: Optional[str] = None
    dificultad: Optional[Dificultad] = None


class TeamCreate(TeamBase):
    pass


class TeamUpdate(ActualizacionParcial):
    model_config = ConfigDict(use_enum_values=True)
    campos_obligatorios = (
        "nombre", "ubicacion", "precio", "deporte", "fecha", "hora", "duracion", "cupo",
    )

    nombre: Optional[str] = Field(default=None, min_length=1, max_length=150)
    ubicacion: Optional[str] = None
    precio: Optional[str] = None
    deporte: Optional[str] = None
    fecha: Optional[str] = None
    hora: Optional[str] = None
    duracion: Optional[str] = None
    cupo: Optional[int] = Field(default=None, gt=0)
    localidad: Optional[str] = None
    provincia: Optional[str] = None
    telefono_organizador: Optional[str] = None
    whatsapp_link: Optional[str] = None
    descripcion: Optional[str] = None
    imagen: Optional[str] = None
    location_coords: Optional[Coordenadas] = None
    cbu: Optional[str] = None
    alias: Optional[str] = None
    dificultad: Optional[Dificultad] = None


class Team(TeamBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    creador_id: int
    dificultad: Optional[str] = None
    creador: Optional[UsuarioBrief] = None
    created_at: datetime
    updated_at: datetime
