"""Reglas de integridad referencial antes de eliminar.

Cada entidad con dependientes tiene una lista ordenada de reglas; gana la
primera que encuentre registros bloqueantes. No existe eliminación en cascada:
el usuario debe reasignar o eliminar los dependientes primero.
"""
import logging

from pydantic import BaseModel, Field
from sqlalchemy import and_, or_

from app.core.excepciones import EliminacionBloqueada, RegistroNoEncontrado
from app.models import (
    CategoriaCaso,
    Caso,
    CasoEmbarazo,
    Cita,
    Curso,
    Docente,
    Estudiante,
    Representante,
    Seguimiento,
    TipoAsistente,
)
from app.services.repositorio import Repositorio

logger = logging.getLogger(__name__)


class ResultadoEliminacion(BaseModel):
    permitido: bool = Field(description="True si el registro se puede eliminar")
    motivo: str | None = Field(default=None, description="Mensaje para el usuario cuando no se permite")
    cantidad_bloqueante: int = Field(default=0, description="Registros dependientes que bloquean la eliminación")


# ── Reglas por entidad: async (repo, registro) -> (cantidad, motivo) | None ──


async def _estudiantes_del_representante(repo: Repositorio, r: Representante):
    n = await repo.contar(Estudiante, representante_id=r.id)
    if n:
        return n, (
            f'No se puede eliminar a "{r.nombre_completo}" porque tiene {n} estudiante(s) '
            "a su cargo. Primero debe reasignar o eliminar los estudiantes asociados."
        )
    return None


async def _tutoria_del_docente(repo: Repositorio, d: Docente):
    if d.es_tutor and d.tutor_de_curso_id is not None:
        curso = await repo.obtener(Curso, d.tutor_de_curso_id)
        nombre = f'{curso.nombre} "{curso.paralelo}"' if curso else f"#{d.tutor_de_curso_id}"
        return 1, (
            f'No se puede eliminar a "{d.nombre_completo}" porque es tutor/a del curso '
            f"{nombre}. Primero debe reasignar la tutoría de este curso."
        )
    return None


async def _tutorados_del_docente(repo: Repositorio, d: Docente):
    n = await repo.contar(Estudiante, tutor_id=d.id)
    if n:
        return n, (
            f'No se puede eliminar a "{d.nombre_completo}" porque está asignado como tutor '
            f"a {n} estudiante(s). Primero debe reasignar los tutores de esos estudiantes."
        )
    return None


async def _estudiantes_del_curso(repo: Repositorio, c: Curso):
    n = await repo.contar(Estudiante, curso=c.nombre, paralelo=c.paralelo)
    if n:
        return n, (
            f'No se puede eliminar el curso {c.nombre} "{c.paralelo}" porque tiene '
            f"{n} estudiante(s) asignado(s)."
        )
    return None


async def _tutores_del_curso(repo: Repositorio, c: Curso):
    n = await repo.contar(Docente, tutor_de_curso_id=c.id)
    if n:
        return n, (
            f'No se puede eliminar el curso {c.nombre} "{c.paralelo}" porque tiene un docente '
            "asignado como tutor. Primero reasigne la tutoría."
        )
    return None


async def _casos_del_estudiante(repo: Repositorio, e: Estudiante):
    n = await repo.contar(Caso, estudiante_id=e.id)
    if n:
        return n, (
            f'No se puede eliminar a "{e.nombre_completo}" porque está asociado a {n} '
            "expediente(s) de caso. Primero debe eliminar los expedientes asociados."
        )
    return None


async def _embarazos_del_estudiante(repo: Repositorio, e: Estudiante):
    n = await repo.contar(CasoEmbarazo, estudiante_id=e.id)
    if n:
        return n, (
            f'No se puede eliminar a "{e.nombre_completo}" porque tiene {n} registro(s) '
            "de embarazo. Primero debe eliminar esos registros."
        )
    return None


async def _contar_citas_de(repo: Repositorio, tipo: str, persona_id, por_estudiante: bool = False) -> int:
    como_asistente = and_(Cita.tipo_asistente == tipo, Cita.asistente_id == persona_id)
    if por_estudiante:
        return await repo.contar(Cita, or_(Cita.estudiante_id == persona_id, como_asistente))
    return await repo.contar(Cita, como_asistente)


def _mensaje_citas(nombre: str, n: int) -> str:
    return (
        f'No se puede eliminar a "{nombre}" porque tiene {n} cita(s) en la agenda. '
        "Primero debe eliminar esas citas."
    )


async def _citas_del_estudiante(repo: Repositorio, e: Estudiante):
    n = await _contar_citas_de(repo, TipoAsistente.ESTUDIANTE, e.id, por_estudiante=True)
    if n:
        return n, _mensaje_citas(e.nombre_completo, n)
    return None


async def _citas_del_representante(repo: Repositorio, r: Representante):
    n = await _contar_citas_de(repo, TipoAsistente.REPRESENTANTE, r.id)
    if n:
        return n, _mensaje_citas(r.nombre_completo, n)
    return None


async def _citas_del_docente(repo: Repositorio, d: Docente):
    n = await _contar_citas_de(repo, TipoAsistente.DOCENTE, d.id)
    if n:
        return n, _mensaje_citas(d.nombre_completo, n)
    return None


async def _categoria_protegida(repo: Repositorio, c: CategoriaCaso):
    if c.protegida:
        return 1, f'La categoría "{c.nombre}" es protegida y no se puede eliminar.'
    return None


async def _casos_de_la_categoria(repo: Repositorio, c: CategoriaCaso):
    n = await repo.contar(Caso, categoria=c.nombre)
    if n:
        return n, (
            f'No se puede eliminar la categoría "{c.nombre}" porque la usan {n} caso(s).'
        )
    return None


async def _dependientes_del_caso(repo: Repositorio, c: Caso):
    n = await repo.contar(Cita, caso_id=c.id) + await repo.contar(CasoEmbarazo, caso_relacionado_id=c.id)
    if n:
        return n, (
            f"No se puede eliminar el caso {c.codigo} porque tiene {n} cita(s) o registro(s) "
            "de embarazo vinculados."
        )
    return None


REGLAS_ELIMINACION = {
    Representante: [_estudiantes_del_representante, _citas_del_representante],
    Docente: [_tutoria_del_docente, _tutorados_del_docente, _citas_del_docente],
    Curso: [_estudiantes_del_curso, _tutores_del_curso],
    Estudiante: [_casos_del_estudiante, _embarazos_del_estudiante, _citas_del_estudiante],
    CategoriaCaso: [_categoria_protegida, _casos_de_la_categoria],
    Caso: [_dependientes_del_caso],
}

# Dependientes que se eliminan junto con el registro (composición)
COMPOSICION = {
    Caso: [(Seguimiento, "caso_id")],
}


async def evaluar(repo: Repositorio, registro) -> ResultadoEliminacion:
    for regla in REGLAS_ELIMINACION.get(type(registro), []):
        bloqueo = await regla(repo, registro)
        if bloqueo is not None:
            cantidad, motivo = bloqueo
            return ResultadoEliminacion(permitido=False, motivo=motivo, cantidad_bloqueante=cantidad)
    return ResultadoEliminacion(permitido=True)


async def puede_eliminar(repo: Repositorio, modelo, registro_id) -> ResultadoEliminacion:
    registro = await repo.obtener(modelo, registro_id)
    if registro is None:
        raise RegistroNoEncontrado("Registro no encontrado.")
    return await evaluar(repo, registro)


async def eliminar_verificado(repo: Repositorio, modelo, registro_id) -> None:
    """Bloquea la fila padre, vuelve a evaluar las reglas y elimina en la misma transacción."""
    registro = await repo.obtener_para_actualizar(modelo, registro_id)
    if registro is None:
        raise RegistroNoEncontrado("Registro no encontrado.")
    resultado = await evaluar(repo, registro)
    if not resultado.permitido:
        logger.info(
            "Eliminación bloqueada: %s id=%s (%d dependiente(s))",
            modelo.__tablename__, registro_id, resultado.cantidad_bloqueante,
        )
        raise EliminacionBloqueada(resultado.motivo, resultado.cantidad_bloqueante)
    for dependiente, columna in COMPOSICION.get(modelo, []):
        for hijo in await repo.consultar(dependiente, **{columna: registro_id}):
            await repo.eliminar(dependiente, hijo.id)
    await repo.eliminar(modelo, registro_id)
