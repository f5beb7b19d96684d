"""Endpoints de casos: CRUD, cierre, traslado e historial de seguimientos."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.database import get_db
from app.core.excepciones import RegistroNoEncontrado
from app.models import Caso, Seguimiento
from app.schemas.caso import CasoForm, CasoOut, CierreCasoRequest, TrasladoCasoRequest
from app.schemas.comun import MensajeResponse
from app.schemas.seguimiento import SeguimientoOut
from app.services import integridad
from app.services.casos_service import caso_a_out, cerrar_caso, formulario_caso, trasladar_caso
from app.services.formularios import crear, editar
from app.services.integridad import ResultadoEliminacion
from app.services.repositorio import Repositorio

router = APIRouter(prefix="/casos", tags=["casos"])


async def _caso_out(db: AsyncSession, caso_id: int) -> CasoOut:
    result = await db.execute(
        select(Caso).where(Caso.id == caso_id).options(selectinload(Caso.estudiante))
    )
    caso = result.scalar_one_or_none()
    if caso is None:
        raise RegistroNoEncontrado("Caso no encontrado.")
    return caso_a_out(caso, caso.estudiante.nombre_completo if caso.estudiante else None)


@router.get(
    "",
    response_model=list[CasoOut],
    summary="Listar casos",
    description="Casos con semáforo de vencimiento. Filtros por estado, categoría, prioridad y estudiante.",
)
async def listar_casos(
    db: AsyncSession = Depends(get_db),
    estado: Annotated[str | None, Query(description="Abierto, En proceso o Cerrado")] = None,
    categoria: Annotated[str | None, Query()] = None,
    prioridad: Annotated[str | None, Query()] = None,
    estudiante_id: Annotated[int | None, Query()] = None,
):
    q = select(Caso).options(selectinload(Caso.estudiante)).order_by(Caso.fecha_apertura.desc(), Caso.id.desc())
    if estado:
        q = q.where(Caso.estado == estado)
    if categoria:
        q = q.where(Caso.categoria == categoria)
    if prioridad:
        q = q.where(Caso.prioridad == prioridad)
    if estudiante_id is not None:
        q = q.where(Caso.estudiante_id == estudiante_id)
    result = await db.execute(q)
    return [
        caso_a_out(c, c.estudiante.nombre_completo if c.estudiante else None)
        for c in result.scalars().all()
    ]


@router.post(
    "",
    response_model=CasoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Abrir caso",
    description=(
        "Crea el caso con código generado y vencimiento por defecto. Si la categoría es de embarazo "
        "adolescente, `requiere_registro_embarazo` indica que se debe registrar el caso de embarazo."
    ),
)
async def crear_caso(body: CasoForm, db: AsyncSession = Depends(get_db)):
    caso_id = await crear(formulario_caso(Repositorio(db)), body.model_dump(exclude_unset=True))
    return await _caso_out(db, caso_id)


@router.get("/{caso_id}", response_model=CasoOut, summary="Obtener caso")
async def obtener_caso(caso_id: int, db: AsyncSession = Depends(get_db)):
    return await _caso_out(db, caso_id)


@router.patch("/{caso_id}", response_model=CasoOut, summary="Actualizar caso")
async def actualizar_caso(caso_id: int, body: CasoForm, db: AsyncSession = Depends(get_db)):
    await editar(formulario_caso(Repositorio(db)), caso_id, body.model_dump(exclude_unset=True))
    return await _caso_out(db, caso_id)


@router.get(
    "/{caso_id}/seguimientos",
    response_model=list[SeguimientoOut],
    summary="Historial de seguimientos del caso",
)
async def seguimientos_del_caso(caso_id: int, db: AsyncSession = Depends(get_db)):
    repo = Repositorio(db)
    if await repo.obtener(Caso, caso_id) is None:
        raise RegistroNoEncontrado("Caso no encontrado.")
    return await repo.consultar(Seguimiento, caso_id=caso_id, orden=[Seguimiento.fecha, Seguimiento.id])


@router.post(
    "/{caso_id}/cerrar",
    response_model=CasoOut,
    summary="Cerrar caso",
    description="Registra un seguimiento de auditoría con el motivo y marca el caso como Cerrado.",
)
async def cerrar(caso_id: int, body: CierreCasoRequest, db: AsyncSession = Depends(get_db)):
    await cerrar_caso(Repositorio(db), caso_id, body.motivo)
    return await _caso_out(db, caso_id)


@router.post(
    "/{caso_id}/trasladar",
    response_model=CasoOut,
    summary="Trasladar estudiante",
    description="Registra el traslado a otra institución educativa y cierra el caso.",
)
async def trasladar(caso_id: int, body: TrasladoCasoRequest, db: AsyncSession = Depends(get_db)):
    await trasladar_caso(Repositorio(db), caso_id, body.institucion_destino)
    return await _caso_out(db, caso_id)


@router.get("/{caso_id}/puede-eliminar", response_model=ResultadoEliminacion, summary="Comprobar si se puede eliminar")
async def puede_eliminar_caso(caso_id: int, db: AsyncSession = Depends(get_db)):
    return await integridad.puede_eliminar(Repositorio(db), Caso, caso_id)


@router.delete(
    "/{caso_id}",
    response_model=MensajeResponse,
    summary="Eliminar caso",
    description="Elimina el caso y sus seguimientos. Se bloquea si tiene citas o registros de embarazo vinculados.",
)
async def eliminar_caso(caso_id: int, db: AsyncSession = Depends(get_db)):
    await integridad.eliminar_verificado(Repositorio(db), Caso, caso_id)
    return MensajeResponse(message="Caso eliminado correctamente")
