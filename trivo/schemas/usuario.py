from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import datetime

from trivo.core.constantes import Rol
from .comun import ActualizacionParcial


def _normalizar_email(v: str) -> str:
    v = v.strip().lower()
    usuario, _, dominio = v.partition("@")
    if not usuario or not dominio:
        raise ValueError("Email inválido")
    return v


class UsuarioBrief(BaseModel):
    """Datos públicos de un usuario embebidos en otras respuestas"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    firstname: str
    lastname: str
    email: str
    imagen: Optional[str] = None


class UsuarioBase(BaseModel):
    email: str
    firstname: str = Field(min_length=1, max_length=100)
    lastname: str = Field(min_length=1, max_length=100)
    telnumber: Optional[str] = None
    imagen: Optional[str] = None
    bio: Optional[str] = None
    instagram: Optional[str] = None
    facebook: Optional[str] = None
    twitter: Optional[str] = None


class UsuarioCreate(UsuarioBase):
    model_config = ConfigDict(use_enum_values=True)

    password: str = Field(min_length=6)
    rol: Rol = Rol.ALUMNO

    @field_validator("email")
    @classmethod
    def validar_email(cls, v: str) -> str:
        return _normalizar_email(v)


class UsuarioUpdate(ActualizacionParcial):
    model_config = ConfigDict(use_enum_values=True)
    campos_obligatorios = ("email", "firstname", "lastname", "rol")

    email: Optional[str] = None
    firstname: Optional[str] = Field(default=None, min_length=1, max_length=100)
    lastname: Optional[str] = Field(default=None, min_length=1, max_length=100)
    rol: Optional[Rol] = None
    password: Optional[str] = Field(default=None, min_length=6)
    telnumber: Optional[str] = None
    imagen: Optional[str] = None
    bio: Optional[str] = None
    instagram: Optional[str] = None
    facebook: Optional[str] = None
    twitter: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validar_email(cls, v: Optional[str]) -> Optional[str]:
        return _normalizar_email(v) if v is not None else v


class Usuario(UsuarioBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    rol: str
    ha_usado_trial: bool = False
    academias_con_trial: List[int] = []
    created_at: datetime
    updated_at: datetime
