"""Estadísticas del dashboard con caché invalidada por suscripciones al almacén."""
import logging
from datetime import date, timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import (
    ActividadPreventiva,
    Caso,
    CasoEmbarazo,
    Cita,
    EstadoCaso,
    EstadoCita,
    Estudiante,
    PrioridadCaso,
    Representante,
    Docente,
    Seguimiento,
)
from app.services import eventos

logger = logging.getLogger(__name__)

TABLAS_OBSERVADAS = (
    Estudiante.__tablename__,
    Representante.__tablename__,
    Docente.__tablename__,
    Caso.__tablename__,
    Seguimiento.__tablename__,
    Cita.__tablename__,
    ActividadPreventiva.__tablename__,
    CasoEmbarazo.__tablename__,
)

_cache: dict = {}
_suscripciones: list[eventos.Suscripcion] = []


def invalidar(evento: eventos.Evento | None = None) -> None:
    if _cache:
        logger.debug("Caché de estadísticas invalidada por %r", evento)
    _cache.clear()


def registrar_invalidacion() -> None:
    """Suscribe la invalidación a las tablas observadas (una sola vez)."""
    if _suscripciones:
        return
    for tabla in TABLAS_OBSERVADAS:
        _suscripciones.append(eventos.suscribir(tabla, invalidar))


async def _contar(db: AsyncSession, modelo, *condiciones) -> int:
    q = select(func.count()).select_from(modelo)
    for c in condiciones:
        q = q.where(c)
    return (await db.execute(q)).scalar_one()


async def calcular(db: AsyncSession, hoy: date) -> dict:
    abiertos = Caso.estado != EstadoCaso.CERRADO
    por_prioridad = {p: 0 for p in (PrioridadCaso.BAJA, PrioridadCaso.MEDIA, PrioridadCaso.ALTA, PrioridadCaso.CRITICA)}
    res = await db.execute(
        select(Caso.prioridad, func.count()).where(abiertos).group_by(Caso.prioridad)
    )
    for prioridad, n in res:
        por_prioridad[prioridad] = n

    asistentes = await db.execute(
        select(
            func.coalesce(func.sum(ActividadPreventiva.asistentes_hombres), 0),
            func.coalesce(func.sum(ActividadPreventiva.asistentes_mujeres), 0),
            func.coalesce(func.sum(ActividadPreventiva.asistentes_padres), 0),
            func.coalesce(func.sum(ActividadPreventiva.asistentes_docentes), 0),
            func.coalesce(func.sum(ActividadPreventiva.asistentes_directivos), 0),
        ).where(ActividadPreventiva.ejecutada.is_(True))
    )
    hombres, mujeres, padres, docentes, directivos = asistentes.one()

    return {
        "fecha": hoy,
        "total_estudiantes": await _contar(db, Estudiante),
        "total_representantes": await _contar(db, Representante),
        "total_docentes": await _contar(db, Docente),
        "casos_abiertos": await _contar(db, Caso, abiertos),
        "casos_cerrados": await _contar(db, Caso, Caso.estado == EstadoCaso.CERRADO),
        "casos_vencidos": await _contar(db, Caso, abiertos, Caso.fecha_vencimiento < hoy),
        "casos_abiertos_por_prioridad": por_prioridad,
        "seguimientos_efectivos": await _contar(db, Seguimiento, Seguimiento.es_efectivo.is_(True)),
        "citas_proximas": await _contar(
            db, Cita,
            Cita.estado == EstadoCita.PROGRAMADA,
            Cita.fecha >= hoy,
            Cita.fecha <= hoy + timedelta(days=7),
        ),
        "actividades_ejecutadas": await _contar(db, ActividadPreventiva, ActividadPreventiva.ejecutada.is_(True)),
        "asistentes_actividades": {
            "hombres": hombres,
            "mujeres": mujeres,
            "padres": padres,
            "docentes": docentes,
            "directivos": directivos,
            "total": hombres + mujeres + padres + docentes + directivos,
        },
        "embarazos_registrados": await _contar(db, CasoEmbarazo),
    }


async def obtener_estadisticas(db: AsyncSession, hoy: date | None = None) -> dict:
    hoy = hoy or date.today()
    if _cache.get("fecha") != hoy:
        _cache.clear()
        _cache.update(await calcular(db, hoy))
    return dict(_cache)
