"""Endpoints de cursos (nivel + paralelo + jornada)."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.excepciones import RegistroNoEncontrado
from app.models import Curso, Docente
from app.schemas.comun import CreadoResponse, MensajeResponse
from app.schemas.curso import CursoForm, CursoOut
from app.services import integridad
from app.services.actores_service import formulario_curso
from app.services.formularios import crear, editar
from app.services.integridad import ResultadoEliminacion
from app.services.repositorio import Repositorio

router = APIRouter(prefix="/cursos", tags=["cursos"])


def _curso_out(curso: Curso, tutores: dict[int, Docente]) -> CursoOut:
    tutor = tutores.get(curso.id)
    return CursoOut(
        id=curso.id,
        nombre=curso.nombre,
        paralelo=curso.paralelo,
        jornada=curso.jornada,
        tutor_id=tutor.id if tutor else None,
        tutor_nombre=tutor.nombre_completo if tutor else None,
    )


async def _tutores_por_curso(repo: Repositorio) -> dict[int, Docente]:
    tutores = await repo.consultar(Docente, Docente.tutor_de_curso_id.is_not(None), es_tutor=True)
    return {d.tutor_de_curso_id: d for d in tutores}


@router.get("", response_model=list[CursoOut], summary="Listar cursos", description="Incluye el tutor asignado a cada curso.")
async def listar_cursos(db: AsyncSession = Depends(get_db)):
    repo = Repositorio(db)
    tutores = await _tutores_por_curso(repo)
    cursos = await repo.consultar(Curso, orden=[Curso.nombre, Curso.paralelo, Curso.jornada])
    return [_curso_out(c, tutores) for c in cursos]


@router.post(
    "",
    response_model=CreadoResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Crear curso",
    responses={409: {"description": "Ya existe el curso en esa jornada"}},
)
async def crear_curso(body: CursoForm, db: AsyncSession = Depends(get_db)):
    curso_id = await crear(formulario_curso(Repositorio(db)), body.model_dump(exclude_unset=True))
    return CreadoResponse(id=curso_id, message="Curso registrado correctamente")


@router.get("/{curso_id}", response_model=CursoOut, summary="Obtener curso")
async def obtener_curso(curso_id: int, db: AsyncSession = Depends(get_db)):
    repo = Repositorio(db)
    curso = await repo.obtener(Curso, curso_id)
    if curso is None:
        raise RegistroNoEncontrado("Curso no encontrado.")
    return _curso_out(curso, await _tutores_por_curso(repo))


@router.patch("/{curso_id}", response_model=CursoOut, summary="Actualizar curso")
async def actualizar_curso(curso_id: int, body: CursoForm, db: AsyncSession = Depends(get_db)):
    repo = Repositorio(db)
    await editar(formulario_curso(repo), curso_id, body.model_dump(exclude_unset=True))
    return _curso_out(await repo.obtener(Curso, curso_id), await _tutores_por_curso(repo))


@router.get("/{curso_id}/puede-eliminar", response_model=ResultadoEliminacion, summary="Comprobar si se puede eliminar")
async def puede_eliminar_curso(curso_id: int, db: AsyncSession = Depends(get_db)):
    return await integridad.puede_eliminar(Repositorio(db), Curso, curso_id)


@router.delete(
    "/{curso_id}",
    response_model=MensajeResponse,
    summary="Eliminar curso",
    responses={409: {"description": "Tiene estudiantes o un tutor asignado"}},
)
async def eliminar_curso(curso_id: int, db: AsyncSession = Depends(get_db)):
    await integridad.eliminar_verificado(Repositorio(db), Curso, curso_id)
    return MensajeResponse(message="Curso eliminado correctamente")
