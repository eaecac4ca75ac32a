from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

from trivo.core.constantes import Dificultad
from .comun import ActualizacionParcial, Coordenadas
from .usuario import UsuarioBrief


class SalidaBase(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    nombre: str = Field(min_length=1, max_length=150)
    cupo: int = Field(gt=0)
    ubicacion: Optional[str] = None
    deporte: Optional[str] = None
    fecha: Optional[str] = None
    hora: Optional[str] = None
    duracion: Optional[str] = None
    descripcion: Optional[str] = None
    localidad: Optional[str] = None
    provincia: Optional[str] = None
    telefono_organizador: Optional[str] = None
    imagen: Optional[str] = None
    location_coords: Optional[Coordenadas] = None
    dificultad: Optional[Dificultad] = None
    precio: Optional[str] = None
    cbu: Optional[str] = None
    alias: Optional[str] = None
    whatsapp_link: Optional[str] = None
    sponsor_id: Optional[int] = None


class SalidaCreate(SalidaBase):
    pass


class SalidaUpdate(ActualizacionParcial):
    model_config = ConfigDict(use_enum_values=True)
    campos_obligatorios = ("nombre", "cupo")

    nombre: Optional[str] = Field(default=None, min_length=1, max_length=150)
    cupo: Optional[int] = Field(default=None, gt=0)
    ubicacion: Optional[str] = None
    deporte: Optional[str] = None
    fecha: Optional[str] = None
    hora: Optional[str] = None
    duracion: Optional[str] = None
    descripcion: Optional[str] = None
    localidad: Optional[str] = None
    provincia: Optional[str] = None
    telefono_organizador: Optional[str] = None
    imagen: Optional[str] = None
    location_coords: Optional[Coordenadas] = None
    dificultad: Optional[Dificultad] = None
    precio: Optional[str] = None
    cbu: Optional[str] = None
    alias: Optional[str] = None
    whatsapp_link: Optional[str] = None
    sponsor_id: Optional[int] = None


class SalidaImagenUpdate(BaseModel):
    imagen: str = Field(min_length=1)


class Salida(SalidaBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    short_id: str
    creador_id: int
    dificultad: Optional[str] = None
    creador: Optional[UsuarioBrief] = None
    created_at: datetime
    updated_at: datetime


class SalidaConParticipantes(Salida):
    participantes: int = 0
