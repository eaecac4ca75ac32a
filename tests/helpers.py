from sqlalchemy import func, select

from trivo.config.database import async_session_factory
from trivo.core.security import create_access_token


def auth_headers(usuario) -> dict:
    token = create_access_token(subject=usuario.id, extra_claims={"rol": usuario.rol})
    return {"Authorization": f"Bearer {token}"}


async def contar(modelo, *condiciones) -> int:
    """Cuenta filas con una sesión nueva para no leer objetos cacheados"""
    query = select(func.count(modelo.id))
    if condiciones:
        query = query.where(*condiciones)
    async with async_session_factory() as db:
        result = await db.execute(query)
        return result.scalar()


async def obtener(modelo, id):
    async with async_session_factory() as db:
        return await db.get(modelo, id)


ACADEMIA_RUNCLUB = {
    "nombre_academia": "RunClub",
    "pais": "Argentina",
    "provincia": "Buenos Aires",
    "localidad": "La Plata",
    "tipo_disciplina": "Running",
    "clase_gratis": True,
    "precio": "$15000",
}

SALIDA_BASE = {
    "nombre": "Trail del Domingo",
    "ubicacion": "Sierra de la Ventana",
    "deporte": "Trekking",
    "fecha": "2025-06-01",
    "hora": "08:00",
    "duracion": "4 horas",
    "precio": "$5000",
    "cupo": 10,
}
