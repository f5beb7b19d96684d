"""Endpoint de estadísticas del dashboard."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.schemas.dashboard import DashboardResponse
from app.services import estadisticas_service

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "",
    response_model=DashboardResponse,
    summary="Estadísticas generales",
    description="Totales, casos abiertos por prioridad, seguimientos efectivos, citas de la semana y asistentes a actividades ejecutadas.",
)
async def get_dashboard(db: AsyncSession = Depends(get_db)):
    """Se calcula una vez y se reutiliza hasta que cambie alguna tabla observada."""
    return await estadisticas_service.obtener_estadisticas(db)
