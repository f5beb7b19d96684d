"""Endpoints de actividades preventivas."""
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.excepciones import RegistroNoEncontrado
from app.models import ActividadPreventiva
from app.schemas.actividad import ActividadCreate, ActividadForm, ActividadOut
from app.schemas.comun import MensajeResponse
from app.services.formularios import Formulario, crear, editar
from app.services.repositorio import Repositorio

router = APIRouter(prefix="/actividades", tags=["actividades"])


def _formulario(repo: Repositorio) -> Formulario:
    return Formulario(repo, ActividadPreventiva, ActividadCreate)


async def _obtener(repo: Repositorio, actividad_id: int) -> ActividadPreventiva:
    actividad = await repo.obtener(ActividadPreventiva, actividad_id)
    if actividad is None:
        raise RegistroNoEncontrado("Actividad no encontrada.")
    return actividad


@router.get("", response_model=list[ActividadOut], summary="Listar actividades preventivas")
async def listar_actividades(
    db: AsyncSession = Depends(get_db),
    fecha_desde: Annotated[date | None, Query()] = None,
    fecha_hasta: Annotated[date | None, Query()] = None,
    ejecutada: Annotated[bool | None, Query()] = None,
):
    condiciones = []
    if fecha_desde is not None:
        condiciones.append(ActividadPreventiva.fecha >= fecha_desde)
    if fecha_hasta is not None:
        condiciones.append(ActividadPreventiva.fecha <= fecha_hasta)
    filtros = {} if ejecutada is None else {"ejecutada": ejecutada}
    return await Repositorio(db).consultar(
        ActividadPreventiva, *condiciones, orden=ActividadPreventiva.fecha, **filtros
    )


@router.post("", response_model=ActividadOut, status_code=status.HTTP_201_CREATED, summary="Crear actividad")
async def crear_actividad(body: ActividadForm, db: AsyncSession = Depends(get_db)):
    repo = Repositorio(db)
    actividad_id = await crear(_formulario(repo), body.model_dump(exclude_unset=True))
    return await _obtener(repo, actividad_id)


@router.get("/{actividad_id}", response_model=ActividadOut, summary="Obtener actividad")
async def obtener_actividad(actividad_id: int, db: AsyncSession = Depends(get_db)):
    return await _obtener(Repositorio(db), actividad_id)


@router.patch(
    "/{actividad_id}",
    response_model=ActividadOut,
    summary="Actualizar actividad",
    description="También se usa para registrar asistentes y resultados al ejecutarla.",
)
async def actualizar_actividad(actividad_id: int, body: ActividadForm, db: AsyncSession = Depends(get_db)):
    repo = Repositorio(db)
    await editar(_formulario(repo), actividad_id, body.model_dump(exclude_unset=True))
    return await _obtener(repo, actividad_id)


@router.patch("/{actividad_id}/ejecutada", response_model=ActividadOut, summary="Marcar como ejecutada o pendiente")
async def marcar_ejecutada(
    actividad_id: int,
    ejecutada: Annotated[bool, Body(embed=True)] = True,
    db: AsyncSession = Depends(get_db),
):
    repo = Repositorio(db)
    await _obtener(repo, actividad_id)
    await repo.actualizar(ActividadPreventiva, actividad_id, {"ejecutada": ejecutada})
    return await _obtener(repo, actividad_id)


@router.delete("/{actividad_id}", response_model=MensajeResponse, summary="Eliminar actividad")
async def eliminar_actividad(actividad_id: int, db: AsyncSession = Depends(get_db)):
    if not await Repositorio(db).eliminar(ActividadPreventiva, actividad_id):
        raise RegistroNoEncontrado("Actividad no encontrada.")
    return MensajeResponse(message="Actividad eliminada correctamente")
