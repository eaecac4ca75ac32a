from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.core.constantes import Disciplina
from trivo.models.configuracion import ConfiguracionPagos, ConfiguracionWhatsApp
from trivo.schemas.configuracion import ConfiguracionPagosUpdate, ConfiguracionWhatsAppUpdate


class CRUDConfiguracion:
    """Filas únicas de configuración global"""

    async def get_pagos(self, db: AsyncSession) -> Optional[ConfiguracionPagos]:
        result = await db.execute(select(ConfiguracionPagos).order_by(ConfiguracionPagos.id).limit(1))
        return result.scalar_one_or_none()

    async def upsert_pagos(
        self, db: AsyncSession, obj_in: ConfiguracionPagosUpdate, usuario_id: int
    ) -> ConfiguracionPagos:
        config = await self.get_pagos(db)
        if config is None:
            config = ConfiguracionPagos(created_by=usuario_id)
            db.add(config)
        for field, value in obj_in.model_dump(exclude_unset=True).items():
            setattr(config, field, value)
        await db.commit()
        await db.refresh(config)
        return config

    async def get_whatsapp(self, db: AsyncSession) -> Optional[ConfiguracionWhatsApp]:
        result = await db.execute(
            select(ConfiguracionWhatsApp).order_by(ConfiguracionWhatsApp.id).limit(1)
        )
        return result.scalar_one_or_none()

    async def get_or_create_whatsapp(self, db: AsyncSession, usuario_id: int) -> ConfiguracionWhatsApp:
        config = await self.get_whatsapp(db)
        if config is None:
            config = ConfiguracionWhatsApp(
                grupos_por_deporte={d.value: "" for d in Disciplina},
                created_by=usuario_id,
            )
            db.add(config)
            await db.commit()
            await db.refresh(config)
        return config

    async def upsert_whatsapp(
        self, db: AsyncSession, obj_in: ConfiguracionWhatsAppUpdate, usuario_id: int
    ) -> ConfiguracionWhatsApp:
        config = await self.get_or_create_whatsapp(db, usuario_id)
        config.grupos_por_deporte = {**(config.grupos_por_deporte or {}), **obj_in.grupos_por_deporte}
        await db.commit()
        await db.refresh(config)
        return config


configuracion = CRUDConfiguracion()
