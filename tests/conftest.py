import pytest
from httpx import ASGITransport, AsyncClient

import trivo.models  # noqa: F401
from trivo.config.database import Base, async_session_factory, engine
from trivo.core.constantes import Rol
from trivo.crud.usuario import usuario as crud_usuario
from trivo.main import app
from trivo.schemas.usuario import UsuarioCreate


@pytest.fixture(autouse=True)
async def database():
    """Base SQLite en memoria recreada para cada test"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def crear_usuario():
    async def _crear(email: str, rol: Rol = Rol.ALUMNO, firstname: str = "Test", password: str = "secreto123"):
        async with async_session_factory() as db:
            return await crud_usuario.create(
                db,
                obj_in=UsuarioCreate(
                    email=email,
                    password=password,
                    firstname=firstname,
                    lastname="Trivo",
                    rol=rol,
                ),
            )

    return _crear


@pytest.fixture
async def admin(crear_usuario):
    return await crear_usuario("admin@trivo.com", Rol.ADMIN, "Admin")


@pytest.fixture
async def profe(crear_usuario):
    return await crear_usuario("profe@trivo.com", Rol.PROFE, "Profe")


@pytest.fixture
async def dueno(crear_usuario):
    return await crear_usuario("dueno@trivo.com", Rol.DUENO_ACADEMIA, "Dueño")


@pytest.fixture
async def alumno(crear_usuario):
    return await crear_usuario("alumno@trivo.com", Rol.ALUMNO, "Alumno")
