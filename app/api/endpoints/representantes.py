"""Endpoints de representantes legales."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.database import get_db
from app.core.excepciones import RegistroNoEncontrado
from app.models import Representante
from app.schemas.comun import CreadoResponse, MensajeResponse
from app.schemas.representante import (
    RepresentanteEstudianteItem,
    RepresentanteForm,
    RepresentanteOut,
    RepresentantePerfil,
)
from app.services import integridad
from app.services.actores_service import formulario_representante
from app.services.formularios import crear, editar
from app.services.integridad import ResultadoEliminacion
from app.services.repositorio import Repositorio

router = APIRouter(prefix="/representantes", tags=["representantes"])


@router.get("", response_model=list[RepresentanteOut], summary="Listar representantes")
async def listar_representantes(
    db: AsyncSession = Depends(get_db),
    buscar: Annotated[str | None, Query(description="Texto en nombre o cédula")] = None,
):
    q = select(Representante).order_by(Representante.nombre_completo)
    if buscar:
        patron = f"%{buscar.strip()}%"
        q = q.where(Representante.nombre_completo.ilike(patron) | Representante.cedula.like(patron))
    result = await db.execute(q)
    return result.scalars().all()


@router.post(
    "",
    response_model=CreadoResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Crear representante",
    responses={409: {"description": "Cédula ya registrada"}, 422: {"description": "Datos inválidos"}},
)
async def crear_representante(body: RepresentanteForm, db: AsyncSession = Depends(get_db)):
    representante_id = await crear(formulario_representante(Repositorio(db)), body.model_dump(exclude_unset=True))
    return CreadoResponse(id=representante_id, message="Representante registrado correctamente")


@router.get("/{representante_id}", response_model=RepresentanteOut, summary="Obtener representante")
async def obtener_representante(representante_id: int, db: AsyncSession = Depends(get_db)):
    representante = await Repositorio(db).obtener(Representante, representante_id)
    if representante is None:
        raise RegistroNoEncontrado("Representante no encontrado.")
    return representante


@router.get(
    "/{representante_id}/perfil",
    response_model=RepresentantePerfil,
    summary="Perfil del representante",
    description="Representante con los estudiantes a su cargo.",
)
async def perfil_representante(representante_id: int, db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(Representante)
        .where(Representante.id == representante_id)
        .options(selectinload(Representante.estudiantes))
    )
    r = result.scalar_one_or_none()
    if r is None:
        raise RegistroNoEncontrado("Representante no encontrado.")
    return RepresentantePerfil(
        representante=RepresentanteOut.model_validate(r),
        estudiantes=[
            RepresentanteEstudianteItem.model_validate(e)
            for e in sorted(r.estudiantes, key=lambda e: e.nombre_completo)
        ],
    )


@router.patch("/{representante_id}", response_model=RepresentanteOut, summary="Actualizar representante")
async def actualizar_representante(
    representante_id: int,
    body: RepresentanteForm,
    db: AsyncSession = Depends(get_db),
):
    repo = Repositorio(db)
    await editar(formulario_representante(repo), representante_id, body.model_dump(exclude_unset=True))
    return await repo.obtener(Representante, representante_id)


@router.get(
    "/{representante_id}/puede-eliminar",
    response_model=ResultadoEliminacion,
    summary="Comprobar si se puede eliminar",
)
async def puede_eliminar_representante(representante_id: int, db: AsyncSession = Depends(get_db)):
    return await integridad.puede_eliminar(Repositorio(db), Representante, representante_id)


@router.delete(
    "/{representante_id}",
    response_model=MensajeResponse,
    summary="Eliminar representante",
    responses={409: {"description": "Tiene estudiantes a su cargo"}},
)
async def eliminar_representante(representante_id: int, db: AsyncSession = Depends(get_db)):
    await integridad.eliminar_verificado(Repositorio(db), Representante, representante_id)
    return MensajeResponse(message="Representante eliminado correctamente")
