"""Formularios de actores (representantes, estudiantes, docentes) y catálogos (cursos, categorías)."""
from datetime import date

from app.core.excepciones import ConflictoNegocio, ErrorValidacion
from app.models import CategoriaCaso, Caso, Curso, Docente, Estudiante, Representante
from app.schemas.categoria import CategoriaCreate
from app.schemas.curso import CursoCreate
from app.schemas.docente import DocenteCreate
from app.schemas.estudiante import EstudianteCreate
from app.schemas.representante import RepresentanteCreate
from app.services.formularios import Formulario
from app.services.repositorio import Repositorio


def _cedula_unica(modelo, etiqueta: str):
    async def verificar(repo: Repositorio, datos, registro_id):
        condiciones = [modelo.cedula == datos.cedula]
        if registro_id is not None:
            condiciones.append(modelo.id != registro_id)
        if await repo.contar(modelo, *condiciones):
            raise ConflictoNegocio(f"Ya existe un {etiqueta} con la cédula {datos.cedula}.")
        return None

    return verificar


async def _referencias_estudiante(repo: Repositorio, datos: EstudianteCreate, registro_id):
    if await repo.obtener(Representante, datos.representante_id) is None:
        raise ErrorValidacion("El representante seleccionado no existe.")
    if datos.tutor_id is not None and await repo.obtener(Docente, datos.tutor_id) is None:
        raise ErrorValidacion("El docente tutor seleccionado no existe.")
    return None


async def _tutoria_docente(repo: Repositorio, datos: DocenteCreate, registro_id):
    if datos.tutor_de_curso_id is None:
        return None
    curso = await repo.obtener(Curso, datos.tutor_de_curso_id)
    if curso is None:
        raise ErrorValidacion("El curso seleccionado no existe.")
    condiciones = [Docente.tutor_de_curso_id == curso.id]
    if registro_id is not None:
        condiciones.append(Docente.id != registro_id)
    otro = await repo.primero(Docente, *condiciones)
    if otro is not None:
        raise ConflictoNegocio(
            f'El curso {curso.nombre} "{curso.paralelo}" ya tiene como tutor/a a {otro.nombre_completo}.'
        )
    return None


async def _curso_unico(repo: Repositorio, datos: CursoCreate, registro_id):
    condiciones = [
        Curso.nombre == datos.nombre,
        Curso.paralelo == datos.paralelo,
        Curso.jornada == datos.jornada,
    ]
    if registro_id is not None:
        condiciones.append(Curso.id != registro_id)
    if await repo.contar(Curso, *condiciones):
        raise ConflictoNegocio(
            f'Ya existe el curso {datos.nombre} "{datos.paralelo}" en jornada {datos.jornada}.'
        )
    if registro_id is not None:
        # Los estudiantes guardan el par (curso, paralelo): renombrar los dejaría huérfanos
        actual = await repo.obtener(Curso, registro_id)
        if (actual.nombre, actual.paralelo) != (datos.nombre, datos.paralelo):
            n = await repo.contar(Estudiante, curso=actual.nombre, paralelo=actual.paralelo)
            if n:
                raise ConflictoNegocio(
                    f'No se puede renombrar el curso {actual.nombre} "{actual.paralelo}" porque '
                    f"tiene {n} estudiante(s) asignado(s)."
                )
    return None


async def _categoria_unica(repo: Repositorio, datos: CategoriaCreate, registro_id):
    condiciones = [CategoriaCaso.nombre == datos.nombre]
    if registro_id is not None:
        condiciones.append(CategoriaCaso.id != registro_id)
    if await repo.contar(CategoriaCaso, *condiciones):
        raise ConflictoNegocio(f'Ya existe la categoría "{datos.nombre}".')
    if registro_id is not None:
        actual = await repo.obtener(CategoriaCaso, registro_id)
        if actual.nombre != datos.nombre and await repo.contar(Caso, categoria=actual.nombre):
            raise ConflictoNegocio(
                f'No se puede renombrar la categoría "{actual.nombre}" porque la usan casos existentes.'
            )
    return None


def formulario_representante(repo: Repositorio, al_guardar=None) -> Formulario:
    return Formulario(
        repo, Representante, RepresentanteCreate,
        verificaciones=[_cedula_unica(Representante, "representante")],
        al_guardar=al_guardar,
    )


def formulario_estudiante(repo: Repositorio, al_guardar=None) -> Formulario:
    return Formulario(
        repo, Estudiante, EstudianteCreate,
        verificaciones=[_cedula_unica(Estudiante, "estudiante"), _referencias_estudiante],
        al_guardar=al_guardar,
    )


def formulario_docente(repo: Repositorio, al_guardar=None) -> Formulario:
    return Formulario(
        repo, Docente, DocenteCreate,
        verificaciones=[_cedula_unica(Docente, "docente"), _tutoria_docente],
        al_guardar=al_guardar,
    )


def formulario_curso(repo: Repositorio, al_guardar=None) -> Formulario:
    return Formulario(repo, Curso, CursoCreate, verificaciones=[_curso_unico], al_guardar=al_guardar)


def formulario_categoria(repo: Repositorio, al_guardar=None) -> Formulario:
    return Formulario(
        repo, CategoriaCaso, CategoriaCreate, verificaciones=[_categoria_unica], al_guardar=al_guardar
    )


def calcular_edad(fecha_nacimiento: date | None, hoy: date | None = None) -> int | None:
    if fecha_nacimiento is None:
        return None
    hoy = hoy or date.today()
    return hoy.year - fecha_nacimiento.year - (
        (hoy.month, hoy.day) < (fecha_nacimiento.month, fecha_nacimiento.day)
    )
