from typing import Any, ClassVar, Tuple
from pydantic import BaseModel, Field, model_validator


class Coordenadas(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class Mensaje(BaseModel):
    success: bool = True
    message: str


class ActualizacionParcial(BaseModel):
    """
    Base de los schemas de actualización parcial.

    Omitir un campo lo deja como está; un ``null`` explícito solo se acepta en
    columnas opcionales. Los campos de ``campos_obligatorios`` lo rechazan.
    """

    campos_obligatorios: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def rechazar_nulos(cls, data: Any) -> Any:
        if isinstance(data, dict):
            for campo in cls.campos_obligatorios:
                if campo in data and data[campo] is None:
                    raise ValueError(f"El campo '{campo}' no puede ser nulo")
        return data
