from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Literal, Optional
from datetime import datetime
from decimal import Decimal


class SuscripcionCreate(BaseModel):
    academia_id: int
    grupo_id: Optional[int] = None


class MercadoPagoData(BaseModel):
    preapprovalId: Optional[str] = None
    initPoint: Optional[str] = None
    status: str = "pending"
    payerId: Optional[str] = None
    payerEmail: Optional[str] = None


class SuscripcionActivar(BaseModel):
    suscripcion_id: int
    mercado_pago: Optional[MercadoPagoData] = None


class Suscripcion(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    usuario_id: int
    academia_id: int
    grupo_id: Optional[int] = None
    estado: str
    esta_en_trial: bool
    trial_fecha_inicio: Optional[datetime] = None
    trial_fecha_fin: Optional[datetime] = None
    clases_asistidas: int
    trial_fue_usado: bool
    mercado_pago: Optional[Dict[str, Any]] = None
    monto: Decimal
    moneda: str
    frecuencia: int
    tipo_frecuencia: str
    proxima_fecha_pago: Optional[datetime] = None
    ultima_fecha_pago: Optional[datetime] = None
    fecha_cancelacion: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class SuscripcionCreada(BaseModel):
    suscripcion: Suscripcion
    requiereConfiguracionPago: bool
    mensaje: str


class SuscripcionActivada(BaseModel):
    suscripcion: Suscripcion
    mensaje: str


class SuscripcionesUsuario(BaseModel):
    suscripciones: List[Suscripcion]
    total: int


class SuscripcionesAcademia(BaseModel):
    suscripciones: List[Suscripcion]
    estadisticas: Dict[str, int] = Field(default_factory=dict)


class SuscripcionEstadoUpdate(BaseModel):
    """Cambio administrativo de estado (pausar, reanudar, vencer, cancelar)"""

    estado: Literal["activa", "vencida", "pausada", "cancelada"]
