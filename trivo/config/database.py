import asyncio
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from .settings import settings

logger = logging.getLogger(__name__)


def _build_engine():
    # SQLite solo se usa en desarrollo local y en los tests
    if settings.database_url.startswith("sqlite"):
        return create_async_engine(
            settings.database_url,
            echo=settings.debug,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_recycle=1200,
        pool_size=20,
        max_overflow=40,
        pool_timeout=10,
        connect_args={
            "server_settings": {
                "application_name": "trivo_panel",
            },
            "command_timeout": 60,
        },
    )


engine = _build_engine()

# Create session factory
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=True,
    autocommit=False,
)

Base = declarative_base()


async def get_db() -> AsyncSession:
    """Get database session with proper error handling"""
    session = None
    try:
        session = async_session_factory()
        yield session
    except Exception:
        if session:
            await session.rollback()
        raise
    finally:
        if session:
            await session.close()


async def test_connection(max_retries: int = 5, delay: float = 2.0) -> bool:
    """Test database connection with retries"""
    for attempt in range(max_retries):
        try:
            async with async_session_factory() as session:
                await session.execute(text("SELECT 1"))
                await session.commit()
                logger.info("Conexión a la base de datos OK (intento %s)", attempt + 1)
                return True
        except Exception as e:
            logger.warning("Intento %s de conexión fallido: %s", attempt + 1, e)
            if attempt < max_retries - 1:
                await asyncio.sleep(delay)
    logger.error("No se pudo conectar a la base de datos")
    return False


async def wait_for_db(max_wait: int = 60) -> bool:
    """Wait for database to be ready"""
    logger.info("Esperando a la base de datos...")
    loop = asyncio.get_running_loop()
    start_time = loop.time()

    while True:
        if await test_connection(max_retries=1):
            return True

        if loop.time() - start_time > max_wait:
            logger.error("Timeout esperando la base de datos tras %s segundos", max_wait)
            return False

        await asyncio.sleep(2)


async def init_db():
    """Initialize database tables with connection verification"""
    # Registrar todos los modelos en el metadata
    import trivo.models  # noqa: F401

    if not await wait_for_db():
        raise RuntimeError("Database is not ready")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Tablas inicializadas correctamente")
    return True


async def close_db():
    """Close database connections"""
    await engine.dispose()
    logger.info("Conexiones a la base de datos cerradas")
