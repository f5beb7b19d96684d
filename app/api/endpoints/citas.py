"""Endpoints de la agenda de citas."""
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.excepciones import RegistroNoEncontrado
from app.models import Cita
from app.schemas.cita import (
    AtencionCreate,
    AtencionResponse,
    CitaEstadoUpdate,
    CitaForm,
    CitaOut,
    HorariosDisponiblesResponse,
)
from app.schemas.comun import MensajeResponse
from app.services.agenda import cambiar_estado, formulario_cita, horarios_disponibles, registrar_atencion
from app.services.formularios import crear, editar
from app.services.repositorio import Repositorio

router = APIRouter(prefix="/citas", tags=["citas"])


@router.get(
    "/horarios-disponibles",
    response_model=HorariosDisponiblesResponse,
    summary="Horarios disponibles del día",
    description=(
        "Franjas de 30 minutos dentro del horario laboral configurado, sin la hora de almuerzo "
        "(13:00-14:00) y sin las ya reservadas."
    ),
)
async def obtener_horarios_disponibles(
    fecha: Annotated[date, Query(description="Día a consultar")],
    db: AsyncSession = Depends(get_db),
):
    return HorariosDisponiblesResponse(fecha=fecha, horarios=await horarios_disponibles(Repositorio(db), fecha))


@router.get("", response_model=list[CitaOut], summary="Listar citas")
async def listar_citas(
    db: AsyncSession = Depends(get_db),
    fecha_desde: Annotated[date | None, Query()] = None,
    fecha_hasta: Annotated[date | None, Query()] = None,
    estado: Annotated[str | None, Query(description="Programada, Realizada o Cancelada")] = None,
    estudiante_id: Annotated[int | None, Query()] = None,
):
    condiciones = []
    if fecha_desde is not None:
        condiciones.append(Cita.fecha >= fecha_desde)
    if fecha_hasta is not None:
        condiciones.append(Cita.fecha <= fecha_hasta)
    filtros = {}
    if estado:
        filtros["estado"] = estado
    if estudiante_id is not None:
        filtros["estudiante_id"] = estudiante_id
    return await Repositorio(db).consultar(Cita, *condiciones, orden=[Cita.fecha, Cita.hora_inicio], **filtros)


@router.post(
    "",
    response_model=CitaOut,
    status_code=status.HTTP_201_CREATED,
    summary="Agendar cita",
    description=(
        "Reserva una franja de 30 minutos. El título se arma como `Cita con {tipo} - {nombre}`. "
        "Si no se envía caso, se vincula el caso activo más reciente del estudiante."
    ),
    responses={409: {"description": "Horario no disponible"}, 422: {"description": "Datos inválidos"}},
)
async def crear_cita(body: CitaForm, db: AsyncSession = Depends(get_db)):
    repo = Repositorio(db)
    cita_id = await crear(formulario_cita(repo), body.model_dump(exclude_unset=True))
    return await repo.obtener(Cita, cita_id)


@router.get("/{cita_id}", response_model=CitaOut, summary="Obtener cita")
async def obtener_cita(cita_id: int, db: AsyncSession = Depends(get_db)):
    cita = await Repositorio(db).obtener(Cita, cita_id)
    if cita is None:
        raise RegistroNoEncontrado("Cita no encontrada.")
    return cita


@router.patch("/{cita_id}", response_model=CitaOut, summary="Reprogramar o editar cita")
async def actualizar_cita(cita_id: int, body: CitaForm, db: AsyncSession = Depends(get_db)):
    repo = Repositorio(db)
    await editar(formulario_cita(repo), cita_id, body.model_dump(exclude_unset=True))
    return await repo.obtener(Cita, cita_id)


@router.patch(
    "/{cita_id}/estado",
    response_model=CitaOut,
    summary="Cambiar estado de la cita",
    responses={409: {"description": "Al reactivar una cita cancelada, su horario ya está reservado"}},
)
async def actualizar_estado_cita(cita_id: int, body: CitaEstadoUpdate, db: AsyncSession = Depends(get_db)):
    repo = Repositorio(db)
    if not await cambiar_estado(repo, cita_id, body.estado):
        raise RegistroNoEncontrado("Cita no encontrada.")
    return await repo.obtener(Cita, cita_id)


@router.post(
    "/{cita_id}/atencion",
    response_model=AtencionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Registrar atención de la cita",
    description=(
        "Agrega un seguimiento efectivo (intervención Individual, participante = tipo de asistente) "
        "al caso activo del estudiante y marca la cita como Realizada con las horas reales."
    ),
    responses={
        404: {"description": "Cita no encontrada"},
        409: {"description": "Cita no programada o estudiante sin caso activo"},
    },
)
async def atender_cita(cita_id: int, body: AtencionCreate, db: AsyncSession = Depends(get_db)):
    repo = Repositorio(db)
    seguimiento_id = await registrar_atencion(repo, cita_id, body)
    cita = await repo.obtener(Cita, cita_id)
    return AtencionResponse(cita=CitaOut.model_validate(cita), seguimiento_id=seguimiento_id)


@router.delete("/{cita_id}", response_model=MensajeResponse, summary="Eliminar cita")
async def eliminar_cita(cita_id: int, db: AsyncSession = Depends(get_db)):
    if not await Repositorio(db).eliminar(Cita, cita_id):
        raise RegistroNoEncontrado("Cita no encontrada.")
    return MensajeResponse(message="Cita eliminada correctamente")
