"""Endpoints de seguimientos de caso."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.excepciones import RegistroNoEncontrado
from app.models import Seguimiento
from app.schemas.comun import CreadoResponse, MensajeResponse
from app.schemas.seguimiento import SeguimientoForm, SeguimientoOut
from app.services.casos_service import formulario_seguimiento
from app.services.formularios import crear, editar
from app.services.repositorio import Repositorio

router = APIRouter(prefix="/seguimientos", tags=["seguimientos"])


@router.get("", response_model=list[SeguimientoOut], summary="Listar seguimientos")
async def listar_seguimientos(
    db: AsyncSession = Depends(get_db),
    caso_id: Annotated[int | None, Query(description="Filtrar por caso")] = None,
    solo_efectivos: Annotated[bool, Query(description="Solo los que cuentan en estadísticas")] = False,
):
    filtros = {}
    if caso_id is not None:
        filtros["caso_id"] = caso_id
    if solo_efectivos:
        filtros["es_efectivo"] = True
    return await Repositorio(db).consultar(
        Seguimiento, orden=[Seguimiento.fecha.desc(), Seguimiento.id.desc()], **filtros
    )


@router.post(
    "",
    response_model=CreadoResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Registrar seguimiento",
    description=(
        "Registra el seguimiento y actualiza el vencimiento del caso: `proxima_fecha` si se envía, "
        "o 75 días después en casos de violencia sexual. Un caso cerrado no admite seguimientos."
    ),
    responses={409: {"description": "Caso cerrado"}},
)
async def crear_seguimiento(body: SeguimientoForm, db: AsyncSession = Depends(get_db)):
    seguimiento_id = await crear(formulario_seguimiento(Repositorio(db)), body.model_dump(exclude_unset=True))
    return CreadoResponse(id=seguimiento_id, message="Seguimiento registrado correctamente")


@router.get("/{seguimiento_id}", response_model=SeguimientoOut, summary="Obtener seguimiento")
async def obtener_seguimiento(seguimiento_id: int, db: AsyncSession = Depends(get_db)):
    seguimiento = await Repositorio(db).obtener(Seguimiento, seguimiento_id)
    if seguimiento is None:
        raise RegistroNoEncontrado("Seguimiento no encontrado.")
    return seguimiento


@router.patch("/{seguimiento_id}", response_model=SeguimientoOut, summary="Actualizar seguimiento")
async def actualizar_seguimiento(seguimiento_id: int, body: SeguimientoForm, db: AsyncSession = Depends(get_db)):
    repo = Repositorio(db)
    await editar(formulario_seguimiento(repo, nuevo=False), seguimiento_id, body.model_dump(exclude_unset=True))
    return await repo.obtener(Seguimiento, seguimiento_id)


@router.delete("/{seguimiento_id}", response_model=MensajeResponse, summary="Eliminar seguimiento")
async def eliminar_seguimiento(seguimiento_id: int, db: AsyncSession = Depends(get_db)):
    if not await Repositorio(db).eliminar(Seguimiento, seguimiento_id):
        raise RegistroNoEncontrado("Seguimiento no encontrado.")
    return MensajeResponse(message="Seguimiento eliminado correctamente")
