from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional
from datetime import datetime


class SponsorCreate(BaseModel):
    name: str
    imagen: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validar_nombre(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            raise ValueError("El nombre debe tener al menos 3 caracteres")
        if len(v) > 50:
            raise ValueError("El nombre no puede superar los 50 caracteres")
        return v


class Sponsor(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    imagen: Optional[str] = None
    created_at: datetime
