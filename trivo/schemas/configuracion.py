from pydantic import BaseModel, ConfigDict
from typing import Dict, Optional
from datetime import datetime

from .comun import ActualizacionParcial


class ConfiguracionPagosUpdate(ActualizacionParcial):
    campos_obligatorios = ("permitir_pagos_gratis",)

    precio_por_defecto: Optional[str] = None
    cbu_por_defecto: Optional[str] = None
    alias_por_defecto: Optional[str] = None
    precios_por_deporte: Optional[Dict[str, str]] = None
    permitir_pagos_gratis: Optional[bool] = None


class ConfiguracionPagos(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    precio_por_defecto: Optional[str] = None
    cbu_por_defecto: Optional[str] = None
    alias_por_defecto: Optional[str] = None
    precios_por_deporte: Optional[Dict[str, str]] = None
    permitir_pagos_gratis: bool = True
    updated_at: Optional[datetime] = None


class ConfiguracionWhatsAppUpdate(BaseModel):
    grupos_por_deporte: Dict[str, str]


class ConfiguracionWhatsApp(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    grupos_por_deporte: Optional[Dict[str, str]] = None
    updated_at: Optional[datetime] = None
