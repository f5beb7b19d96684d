"""Esquema del dashboard."""
from datetime import date

from pydantic import BaseModel, Field


class AsistentesActividades(BaseModel):
    hombres: int = 0
    mujeres: int = 0
    padres: int = 0
    docentes: int = 0
    directivos: int = 0
    total: int = 0


class DashboardResponse(BaseModel):
    fecha: date
    total_estudiantes: int
    total_representantes: int
    total_docentes: int
    casos_abiertos: int = Field(description="Casos Abiertos o En proceso")
    casos_cerrados: int
    casos_vencidos: int = Field(description="Casos no cerrados con vencimiento anterior a hoy")
    casos_abiertos_por_prioridad: dict[str, int]
    seguimientos_efectivos: int = Field(description="Solo seguimientos con es_efectivo")
    citas_proximas: int = Field(description="Citas programadas en los próximos 7 días")
    actividades_ejecutadas: int
    asistentes_actividades: AsistentesActividades
    embarazos_registrados: int
