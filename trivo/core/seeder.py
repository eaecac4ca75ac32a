import asyncio
import logging
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.config.database import async_session_factory, init_db
from trivo.core.constantes import Rol
from trivo.core.security import get_password_hash
from trivo.models.usuario import Usuario

logger = logging.getLogger(__name__)

USUARIOS_INICIALES = [
    {
        "email": "admin@trivo.com",
        "password": "Admin123!",
        "firstname": "Admin",
        "lastname": "Trivo",
        "rol": Rol.ADMIN,
    },
    {
        "email": "profe@trivo.com",
        "password": "Profe123!",
        "firstname": "Profe",
        "lastname": "Trivo",
        "rol": Rol.PROFE,
    },
]


async def seed_usuarios(db: AsyncSession) -> int:
    """Crear los usuarios iniciales que no existan todavía"""
    creados = 0
    for datos in USUARIOS_INICIALES:
        result = await db.execute(select(Usuario).where(Usuario.email == datos["email"]))
        if result.scalar_one_or_none():
            logger.info("ℹ️ %s ya existe, saltando...", datos["email"])
            continue

        db.add(
            Usuario(
                email=datos["email"],
                password_hash=get_password_hash(datos["password"]),
                firstname=datos["firstname"],
                lastname=datos["lastname"],
                rol=datos["rol"].value,
                ha_usado_trial=False,
                academias_con_trial=[],
            )
        )
        creados += 1
        logger.info("👤 Creando %s (%s)", datos["email"], datos["rol"].value)

    await db.commit()
    return creados


async def run_seeder() -> int:
    await init_db()
    async with async_session_factory() as db:
        creados = await seed_usuarios(db)
    logger.info("🌱 Seeding completado: %s usuario(s) creado(s)", creados)
    return creados


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    asyncio.run(run_seeder())
