from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

from trivo.core.constantes import TipoPago
from .pago import Pago
from .usuario import UsuarioBrief


class UnirseSalida(BaseModel):
    """Solicitud de unión a una salida, opcionalmente con comprobante"""

    model_config = ConfigDict(use_enum_values=True)

    comprobante_url: Optional[str] = None
    tipo_pago: TipoPago = TipoPago.TRANSFERENCIA
    amount: Optional[Decimal] = Field(default=None, ge=0)


class MiembroSalida(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    usuario_id: int
    salida_id: int
    fecha_union: datetime
    rol: str
    estado: str
    pago_id: Optional[int] = None
    usuario: Optional[UsuarioBrief] = None
    pago: Optional[Pago] = None
    created_at: datetime
