from sqlalchemy import Boolean, Column, ForeignKey, Integer, JSON, String
from .base import BaseModel


class ConfiguracionPagos(BaseModel):
    __tablename__ = "configuracion_pagos"

    precio_por_defecto = Column(String(50))
    cbu_por_defecto = Column(String(50))
    alias_por_defecto = Column(String(100))
    precios_por_deporte = Column(JSON)
    permitir_pagos_gratis = Column(Boolean, nullable=False, default=True)
    created_by = Column(Integer, ForeignKey("usuarios.id"), nullable=False)


class ConfiguracionWhatsApp(BaseModel):
    __tablename__ = "configuracion_whatsapp"

    grupos_por_deporte = Column(JSON)
    created_by = Column(Integer, ForeignKey("usuarios.id"), nullable=False)
