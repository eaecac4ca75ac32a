from fastapi import APIRouter

from trivo.api.v1 import (
    academias, grupos, miembros_academia, salidas, teams, pagos,
    notificaciones, sponsors, search, stats, subscriptions, asistencias,
    configuracion, users
)

api_router = APIRouter()

# Academias y su gestión
api_router.include_router(academias.router, prefix="/academias", tags=["academias"])
api_router.include_router(grupos.router, prefix="/grupos", tags=["grupos"])
api_router.include_router(
    miembros_academia.router, prefix="/miembros-academia", tags=["miembros-academia"]
)
api_router.include_router(
    subscriptions.router, prefix="/subscriptions", tags=["subscriptions"]
)
api_router.include_router(asistencias.router, prefix="/asistencias", tags=["asistencias"])

# Actividades sociales
api_router.include_router(salidas.router, prefix="/salidas", tags=["salidas"])
api_router.include_router(teams.router, prefix="/teams", tags=["teams"])
api_router.include_router(pagos.router, prefix="/pagos", tags=["pagos"])
api_router.include_router(sponsors.router, prefix="/sponsors", tags=["sponsors"])

# Usuarios, notificaciones y panel
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(
    notificaciones.router, prefix="/notificaciones", tags=["notificaciones"]
)
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
api_router.include_router(search.router, prefix="/search", tags=["search"])
api_router.include_router(configuracion.router, tags=["configuracion"])
