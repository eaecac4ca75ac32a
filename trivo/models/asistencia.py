from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Text, func
from sqlalchemy.orm import relationship
from .base import BaseModel


class Asistencia(BaseModel):
    __tablename__ = "asistencias"

    usuario_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False, index=True)
    academia_id = Column(Integer, ForeignKey("academias.id"), nullable=False, index=True)
    grupo_id = Column(Integer, ForeignKey("grupos.id"), nullable=False, index=True)
    suscripcion_id = Column(Integer, ForeignKey("suscripciones.id"), nullable=False, index=True)
    fecha = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    asistio = Column(Boolean, nullable=False, default=True)
    es_trial = Column(Boolean, nullable=False, default=False)
    notas = Column(Text)
    registrado_por = Column(Integer, ForeignKey("usuarios.id"), nullable=False)

    # Relationships
    usuario = relationship("Usuario", foreign_keys=[usuario_id])
    registrador = relationship("Usuario", foreign_keys=[registrado_por])
    suscripcion = relationship("Suscripcion")
