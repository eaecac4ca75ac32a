from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, Numeric, String
from sqlalchemy.orm import relationship
from .base import BaseModel


class Suscripcion(BaseModel):
    __tablename__ = "suscripciones"

    usuario_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False, index=True)
    academia_id = Column(Integer, ForeignKey("academias.id"), nullable=False, index=True)
    grupo_id = Column(Integer, ForeignKey("grupos.id", ondelete="SET NULL"))
    estado = Column(String(20), nullable=False, default="trial", index=True)

    # Trial (modelo híbrido: clases o días, lo que ocurra primero)
    esta_en_trial = Column(Boolean, nullable=False, default=False)
    trial_fecha_inicio = Column(DateTime(timezone=True))
    trial_fecha_fin = Column(DateTime(timezone=True))
    clases_asistidas = Column(Integer, nullable=False, default=0)
    trial_fue_usado = Column(Boolean, nullable=False, default=False)

    # Referencia a la pasarela de pago (preapprovalId, initPoint, status, payer...)
    mercado_pago = Column(JSON)

    # Cobro recurrente
    monto = Column(Numeric(12, 2), nullable=False, default=0)
    moneda = Column(String(10), nullable=False, default="ARS")
    frecuencia = Column(Integer, nullable=False, default=1)
    tipo_frecuencia = Column(String(20), nullable=False, default="months")
    proxima_fecha_pago = Column(DateTime(timezone=True))
    ultima_fecha_pago = Column(DateTime(timezone=True))

    fecha_cancelacion = Column(DateTime(timezone=True))

    # Relationships
    usuario = relationship("Usuario")
    academia = relationship("Academia")
    grupo = relationship("Grupo")
