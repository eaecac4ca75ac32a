import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.api.deps import require
from trivo.config.database import get_db
from trivo.crud.configuracion import configuracion as crud_configuracion
from trivo.models.usuario import Usuario
from trivo.schemas.configuracion import (
    ConfiguracionPagos,
    ConfiguracionPagosUpdate,
    ConfiguracionWhatsApp,
    ConfiguracionWhatsAppUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/configuracion-pagos", response_model=ConfiguracionPagos)
async def read_configuracion_pagos(
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("configuracion.ver")),
):
    config = await crud_configuracion.get_pagos(db)
    # Sin fila guardada se devuelven los valores por defecto
    return config if config is not None else ConfiguracionPagos()


@router.post("/configuracion-pagos", response_model=ConfiguracionPagos)
async def save_configuracion_pagos(
    datos: ConfiguracionPagosUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("configuracion.editar")),
):
    try:
        return await crud_configuracion.upsert_pagos(db, datos, current_user.id)
    except Exception:
        logger.exception("Error guardando configuración de pagos")
        raise HTTPException(status_code=500, detail="Error al guardar configuración de pagos")


@router.get("/configuracion-whatsapp", response_model=ConfiguracionWhatsApp)
async def read_configuracion_whatsapp(
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("configuracion.ver")),
):
    """Links de grupos de WhatsApp por disciplina"""
    return await crud_configuracion.get_or_create_whatsapp(db, current_user.id)


@router.patch("/configuracion-whatsapp", response_model=ConfiguracionWhatsApp)
async def update_configuracion_whatsapp(
    datos: ConfiguracionWhatsAppUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("configuracion.editar")),
):
    try:
        return await crud_configuracion.upsert_whatsapp(db, datos, current_user.id)
    except Exception:
        logger.exception("Error guardando configuración de WhatsApp")
        raise HTTPException(status_code=500, detail="Error al guardar configuración de WhatsApp")
