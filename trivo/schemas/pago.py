from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Literal, Optional
from datetime import datetime
from decimal import Decimal

from trivo.core.constantes import TipoPago
from .usuario import UsuarioBrief


class PagoCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    salida_id: Optional[int] = None
    academia_id: Optional[int] = None
    comprobante_url: Optional[str] = None
    tipo_pago: TipoPago = TipoPago.TRANSFERENCIA
    amount: Optional[Decimal] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def un_solo_destino(self):
        if self.salida_id is None and self.academia_id is None:
            raise ValueError("Debe especificar salida_id o academia_id")
        if self.salida_id is not None and self.academia_id is not None:
            raise ValueError("Un pago no puede referir a una salida y a una academia a la vez")
        return self


class RevisionUpdate(BaseModel):
    """Decisión de revisión sobre un pago o una membresía"""

    estado: Literal["aprobado", "rechazado"]


class Pago(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    usuario_id: int
    salida_id: Optional[int] = None
    academia_id: Optional[int] = None
    comprobante_url: Optional[str] = None
    estado: str
    amount: Decimal
    tipo_pago: str
    salida_nombre: Optional[str] = None
    academia_nombre: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PagoDetalle(Pago):
    usuario: Optional[UsuarioBrief] = None
