"""Routers de la API."""
from fastapi import APIRouter

from app.api.endpoints import (
    actividades,
    casos,
    categorias,
    citas,
    cursos,
    dashboard,
    docentes,
    embarazos,
    estudiantes,
    exportar,
    institucion,
    nomina,
    representantes,
    seguimientos,
)

router = APIRouter()
router.include_router(representantes.router)
router.include_router(estudiantes.router)
router.include_router(docentes.router)
router.include_router(cursos.router)
router.include_router(categorias.router)
router.include_router(casos.router)
router.include_router(seguimientos.router)
router.include_router(citas.router)
router.include_router(actividades.router)
router.include_router(embarazos.router)
router.include_router(nomina.router)
router.include_router(exportar.router)
router.include_router(dashboard.router)
router.include_router(institucion.router)


@router.get(
    "/",
    tags=["api"],
    summary="Raíz de la API v1",
    response_description="Mensaje de bienvenida y enlace a la documentación",
)
async def api_root():
    """Información básica de la API y enlace a la documentación Swagger."""
    return {"message": "Gestión DECE API v1", "docs": "/docs", "redoc": "/redoc"}
