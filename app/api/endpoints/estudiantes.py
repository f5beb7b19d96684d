"""Endpoints de estudiantes (CRUD, perfil y derivación curso/tutor)."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.database import get_db
from app.core.excepciones import RegistroNoEncontrado
from app.models import Curso, Docente, Estudiante
from app.schemas.comun import CreadoResponse, MensajeResponse
from app.schemas.estudiante import (
    DerivarRequest,
    DerivarResponse,
    EstudianteForm,
    EstudianteOut,
    EstudiantePerfilResponse,
    PerfilCaso,
    PerfilCurso,
    PerfilRepresentante,
    PerfilTutor,
)
from app.services import integridad
from app.services.actores_service import calcular_edad, formulario_estudiante
from app.services.casos_service import semaforo
from app.services.formularios import crear, derivar_campos_vinculados, editar
from app.services.integridad import ResultadoEliminacion
from app.services.repositorio import Repositorio

router = APIRouter(prefix="/estudiantes", tags=["estudiantes"])


@router.get(
    "",
    response_model=list[EstudianteOut],
    summary="Listar estudiantes",
    description="Lista estudiantes ordenados por curso, paralelo y nombre. Filtros opcionales por curso, paralelo y texto.",
)
async def listar_estudiantes(
    db: AsyncSession = Depends(get_db),
    curso: Annotated[str | None, Query(description="Filtrar por curso")] = None,
    paralelo: Annotated[str | None, Query(description="Filtrar por paralelo")] = None,
    buscar: Annotated[str | None, Query(description="Texto en nombre o cédula")] = None,
):
    q = select(Estudiante).order_by(Estudiante.curso, Estudiante.paralelo, Estudiante.nombre_completo)
    if curso:
        q = q.where(Estudiante.curso == curso)
    if paralelo:
        q = q.where(Estudiante.paralelo == paralelo)
    if buscar:
        patron = f"%{buscar.strip()}%"
        q = q.where(Estudiante.nombre_completo.ilike(patron) | Estudiante.cedula.like(patron))
    result = await db.execute(q)
    return result.scalars().all()


@router.post(
    "",
    response_model=CreadoResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Crear estudiante",
    responses={
        201: {"description": "Estudiante creado"},
        409: {"description": "Cédula ya registrada"},
        422: {"description": "Campo obligatorio vacío o con formato inválido"},
    },
)
async def crear_estudiante(body: EstudianteForm, db: AsyncSession = Depends(get_db)):
    """
    Envía el formulario de estudiante. Se valida en orden de campos y se informa
    solo la primera regla que falla; si hay error no se escribe nada.
    """
    estudiante_id = await crear(formulario_estudiante(Repositorio(db)), body.model_dump(exclude_unset=True))
    return CreadoResponse(id=estudiante_id, message="Estudiante registrado correctamente")


@router.post(
    "/formulario/derivar",
    response_model=DerivarResponse,
    summary="Derivar curso/tutor en el formulario",
    description=(
        "Al cambiar curso o paralelo devuelve el tutor del curso; al cambiar el tutor devuelve "
        "el curso que tutela. Solo se devuelven los campos a sobrescribir."
    ),
)
async def derivar_campos(body: DerivarRequest, db: AsyncSession = Depends(get_db)):
    repo = Repositorio(db)
    tablas = {
        "cursos": await repo.consultar(Curso),
        "docentes": await repo.consultar(Docente, es_tutor=True),
    }
    return DerivarResponse(parche=derivar_campos_vinculados(body.campo, body.formulario, tablas))


@router.get("/{estudiante_id}", response_model=EstudianteOut, summary="Obtener estudiante")
async def obtener_estudiante(estudiante_id: int, db: AsyncSession = Depends(get_db)):
    estudiante = await Repositorio(db).obtener(Estudiante, estudiante_id)
    if estudiante is None:
        raise RegistroNoEncontrado("Estudiante no encontrado.")
    return estudiante


@router.get(
    "/{estudiante_id}/perfil",
    response_model=EstudiantePerfilResponse,
    summary="Perfil del estudiante",
    description="Estudiante con su representante, tutor, curso y casos (con semáforo).",
)
async def perfil_estudiante(estudiante_id: int, db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(Estudiante)
        .where(Estudiante.id == estudiante_id)
        .options(
            selectinload(Estudiante.representante),
            selectinload(Estudiante.tutor),
            selectinload(Estudiante.casos),
        )
    )
    e = result.scalar_one_or_none()
    if e is None:
        raise RegistroNoEncontrado("Estudiante no encontrado.")

    curso_q = await db.execute(
        select(Curso).where(Curso.nombre == e.curso, Curso.paralelo == e.paralelo).limit(1)
    )
    curso = curso_q.scalar_one_or_none()
    casos = sorted(e.casos, key=lambda c: (c.fecha_apertura, c.id), reverse=True)

    return EstudiantePerfilResponse(
        estudiante=EstudianteOut.model_validate(e),
        edad=calcular_edad(e.fecha_nacimiento),
        representante=PerfilRepresentante.model_validate(e.representante) if e.representante else None,
        tutor=PerfilTutor.model_validate(e.tutor) if e.tutor else None,
        curso=PerfilCurso(
            id=curso.id if curso else None,
            nombre=e.curso,
            paralelo=e.paralelo,
            jornada=curso.jornada if curso else None,
        ),
        casos=[
            PerfilCaso(
                id=c.id,
                codigo=c.codigo,
                categoria=c.categoria,
                estado=c.estado,
                prioridad=c.prioridad,
                fecha_apertura=c.fecha_apertura,
                semaforo=semaforo(c),
            )
            for c in casos
        ],
    )


@router.patch(
    "/{estudiante_id}",
    response_model=EstudianteOut,
    summary="Actualizar estudiante",
    description="Actualización parcial: solo se modifican los campos enviados. El registro resultante se valida completo.",
)
async def actualizar_estudiante(
    estudiante_id: int,
    body: EstudianteForm,
    db: AsyncSession = Depends(get_db),
):
    repo = Repositorio(db)
    await editar(formulario_estudiante(repo), estudiante_id, body.model_dump(exclude_unset=True))
    return await repo.obtener(Estudiante, estudiante_id)


@router.get(
    "/{estudiante_id}/puede-eliminar",
    response_model=ResultadoEliminacion,
    summary="Comprobar si se puede eliminar",
)
async def puede_eliminar_estudiante(estudiante_id: int, db: AsyncSession = Depends(get_db)):
    return await integridad.puede_eliminar(Repositorio(db), Estudiante, estudiante_id)


@router.delete(
    "/{estudiante_id}",
    response_model=MensajeResponse,
    summary="Eliminar estudiante",
    responses={409: {"description": "Tiene casos o registros de embarazo asociados"}},
)
async def eliminar_estudiante(estudiante_id: int, db: AsyncSession = Depends(get_db)):
    await integridad.eliminar_verificado(Repositorio(db), Estudiante, estudiante_id)
    return MensajeResponse(message="Estudiante eliminado correctamente")
