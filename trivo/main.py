import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from trivo.config.database import close_db, init_db
from trivo.config.settings import settings
from trivo.core.exceptions import TrivoError
from trivo.core.redis_manager import redis_manager

from trivo.api.auth import router as auth_router
from trivo.api.v1.router import api_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 Iniciando Trivo Admin Panel API...")

    # 1. Base de datos
    logger.info("📊 Inicializando base de datos...")
    await init_db()
    logger.info("✅ Base de datos inicializada correctamente")

    # 2. Redis para notificaciones en tiempo real (opcional)
    if settings.redis_url:
        if await redis_manager.connect(settings.redis_url):
            logger.info("✅ Notificaciones en tiempo real habilitadas")
        else:
            logger.warning("⚠️ Redis no disponible, notificaciones solo por consulta")

    logger.info("🎉 Sistema listo!")

    yield

    logger.info("🔄 Cerrando sistema...")
    if redis_manager.is_connected:
        await redis_manager.disconnect()
    await close_db()


app = FastAPI(
    title="Trivo Admin Panel API",
    description="""
    ## Trivo Admin Panel 🏃

    Gestión de academias deportivas, salidas sociales, teams, pagos,
    suscripciones con período de prueba y notificaciones.
    """,
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ===== MANEJO DE ERRORES =====

@app.exception_handler(TrivoError)
async def trivo_error_handler(request: Request, exc: TrivoError):
    if exc.status_code >= 500:
        logger.error("%s %s -> %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errores = exc.errors()
    faltantes = [e for e in errores if e.get("type") == "missing"]
    if faltantes or not errores:
        mensaje = "Faltan campos requeridos"
    else:
        mensaje = errores[0].get("msg", "Datos inválidos")
        # pydantic antepone "Value error, " a los ValueError de los validadores
        mensaje = mensaje.replace("Value error, ", "")
    detalles = [
        {"campo": ".".join(str(p) for p in e.get("loc", ())), "mensaje": e.get("msg")}
        for e in errores
    ]
    return JSONResponse(status_code=400, content={"error": mensaje, "details": detalles})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Error no controlado en %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Error interno del servidor"})


app.include_router(auth_router, prefix="/auth", tags=["🔐 Autenticación"])
app.include_router(api_router, prefix="/api/v1")


@app.get("/", tags=["🏠 General"])
async def root():
    return {
        "message": "Trivo Admin Panel API",
        "status": "running",
        "version": VERSION,
        "docs": "/docs",
    }


@app.get("/health", tags=["🏠 General"])
async def health_check():
    """Verificación de salud del sistema"""
    health_data = {
        "status": "healthy",
        "service": "trivo-admin-api",
        "version": VERSION,
        "environment": settings.environment,
    }
    if settings.redis_url:
        health_data["redis"] = await redis_manager.health_check()
    return health_data
