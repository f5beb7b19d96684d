"""Endpoints de docentes y tutores."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.excepciones import RegistroNoEncontrado
from app.models import Docente
from app.schemas.comun import CreadoResponse, MensajeResponse
from app.schemas.docente import DocenteForm, DocenteOut
from app.services import integridad
from app.services.actores_service import formulario_docente
from app.services.formularios import crear, editar
from app.services.integridad import ResultadoEliminacion
from app.services.repositorio import Repositorio

router = APIRouter(prefix="/docentes", tags=["docentes"])


@router.get("", response_model=list[DocenteOut], summary="Listar docentes")
async def listar_docentes(
    db: AsyncSession = Depends(get_db),
    solo_tutores: Annotated[bool, Query(description="Solo docentes tutores")] = False,
):
    q = select(Docente).order_by(Docente.nombre_completo)
    if solo_tutores:
        q = q.where(Docente.es_tutor.is_(True))
    result = await db.execute(q)
    return result.scalars().all()


@router.post(
    "",
    response_model=CreadoResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Crear docente",
    responses={409: {"description": "Cédula ya registrada o curso con tutor"}, 422: {"description": "Datos inválidos"}},
)
async def crear_docente(body: DocenteForm, db: AsyncSession = Depends(get_db)):
    docente_id = await crear(formulario_docente(Repositorio(db)), body.model_dump(exclude_unset=True))
    return CreadoResponse(id=docente_id, message="Docente registrado correctamente")


@router.get("/{docente_id}", response_model=DocenteOut, summary="Obtener docente")
async def obtener_docente(docente_id: int, db: AsyncSession = Depends(get_db)):
    docente = await Repositorio(db).obtener(Docente, docente_id)
    if docente is None:
        raise RegistroNoEncontrado("Docente no encontrado.")
    return docente


@router.patch("/{docente_id}", response_model=DocenteOut, summary="Actualizar docente")
async def actualizar_docente(docente_id: int, body: DocenteForm, db: AsyncSession = Depends(get_db)):
    repo = Repositorio(db)
    await editar(formulario_docente(repo), docente_id, body.model_dump(exclude_unset=True))
    return await repo.obtener(Docente, docente_id)


@router.get("/{docente_id}/puede-eliminar", response_model=ResultadoEliminacion, summary="Comprobar si se puede eliminar")
async def puede_eliminar_docente(docente_id: int, db: AsyncSession = Depends(get_db)):
    return await integridad.puede_eliminar(Repositorio(db), Docente, docente_id)


@router.delete(
    "/{docente_id}",
    response_model=MensajeResponse,
    summary="Eliminar docente",
    responses={409: {"description": "Es tutor de un curso o tiene estudiantes tutorados"}},
)
async def eliminar_docente(docente_id: int, db: AsyncSession = Depends(get_db)):
    await integridad.eliminar_verificado(Repositorio(db), Docente, docente_id)
    return MensajeResponse(message="Docente eliminado correctamente")
