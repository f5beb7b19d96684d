"""Punto de entrada de la aplicación FastAPI."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api import router as api_router
from app.core.config import settings
from app.core.database import init_db
from app.core.excepciones import EliminacionBloqueada, ErrorDominio
from app.models import *  # noqa: F401, F403 - Registra modelos en Base.metadata antes de init_db
from app.schemas.validaciones import mensaje_de_error
from app.services import estadisticas_service

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Documentación Swagger: disponible en /docs (OpenAPI 3.0)
OPENAPI_TAGS = [
    {"name": "api", "description": "Endpoints generales de la API v1."},
    {"name": "representantes", "description": "Representantes legales: CRUD, perfil con estudiantes a cargo."},
    {"name": "estudiantes", "description": "Estudiantes: CRUD, perfil y derivación curso/tutor del formulario."},
    {"name": "docentes", "description": "Docentes y tutores de curso."},
    {"name": "cursos", "description": "Cursos (nivel, paralelo, jornada) con su tutor."},
    {"name": "categorias", "description": "Catálogo de categorías de caso; las protegidas no se eliminan."},
    {"name": "casos", "description": "Expedientes: apertura, semáforo, cierre y traslado."},
    {"name": "seguimientos", "description": "Historial de intervenciones de cada caso."},
    {"name": "citas", "description": "Agenda: horarios disponibles de 30 minutos y reservas."},
    {"name": "actividades", "description": "Actividades preventivas y sus asistentes."},
    {"name": "embarazos", "description": "Embarazo, maternidad y lactancia: fechas y permisos."},
    {"name": "nomina", "description": "Importación de la nómina (CSV/Excel) y registro de estudiantes."},
    {"name": "exportar", "description": "Descarga de listados en PDF o CSV."},
    {"name": "dashboard", "description": "Estadísticas generales."},
    {"name": "institucion", "description": "Datos de la institución y configuración (horario laboral, permisos)."},
    {"name": "salud", "description": "Comprobación del estado del servicio."},
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Gestiona el ciclo de vida: inicio y cierre de la aplicación."""
    await init_db()
    estadisticas_service.registrar_invalidacion()
    logger.info("Base de datos lista (%s)", "SQLite" if settings.es_sqlite else "PostgreSQL")
    yield


app = FastAPI(
    title=settings.app_name,
    description="""
API REST del **Departamento de Consejería Estudiantil (DECE)**: estudiantes, representantes,
docentes, casos, seguimientos, citas, actividades preventivas y casos de embarazo.

- **Swagger UI:** [GET /docs](/docs)
- **ReDoc:** [GET /redoc](/redoc)
- **OpenAPI JSON:** [GET /openapi.json](/openapi.json)

Los errores de negocio responden `{"detail": "<mensaje>"}`; una eliminación bloqueada (409)
incluye además `cantidad_bloqueante`.
""",
    version="0.1.0",
    openapi_tags=OPENAPI_TAGS,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# CORS: permitir acceso desde cualquier origen (frontend en otro puerto/dominio)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(EliminacionBloqueada)
async def eliminacion_bloqueada_handler(request: Request, exc: EliminacionBloqueada):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.mensaje, "cantidad_bloqueante": exc.cantidad_bloqueante},
    )


@app.exception_handler(ErrorDominio)
async def error_dominio_handler(request: Request, exc: ErrorDominio):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.mensaje})


@app.exception_handler(RequestValidationError)
async def validacion_handler(request: Request, exc: RequestValidationError):
    """Reduce los errores de validación del body al mensaje de la primera regla que falla."""
    errores = exc.errors()
    mensaje = mensaje_de_error(errores[0]) if errores else "Datos inválidos."
    return JSONResponse(status_code=422, content={"detail": mensaje})


@app.exception_handler(SQLAlchemyError)
async def sqlalchemy_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Error de base de datos en %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


app.include_router(api_router, prefix="/api/v1")


@app.get(
    "/health",
    tags=["salud"],
    summary="Estado del servicio",
    response_description="Indica que la API está en ejecución",
)
async def health_check():
    """Comprueba que el servicio está activo."""
    return {"status": "ok", "message": "Servicio en ejecución"}
