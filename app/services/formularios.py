"""Formularios de alta/edición: validación, una sola escritura y aviso al guardar.

Flujo: cerrado -> abierto_creacion | abierto_edicion -> validando ->
guardado (cierra) o rechazado (vuelve a abierto con `error`).
"""
import inspect as _inspect
import logging
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ValidationError

from app.core.excepciones import ConflictoNegocio, ErrorDominio, ErrorValidacion, RegistroNoEncontrado
from app.schemas.validaciones import primer_error
from app.services.repositorio import Repositorio, a_dict, columnas

logger = logging.getLogger(__name__)

# async (repo, datos_validados, registro_id) -> dict de campos derivados | None
Verificacion = Callable[[Repositorio, BaseModel, Any], Awaitable[dict | None]]


class EstadoFormulario:
    CERRADO = "cerrado"
    ABIERTO_CREACION = "abierto_creacion"
    ABIERTO_EDICION = "abierto_edicion"
    VALIDANDO = "validando"


class Formulario:
    """Formulario de una entidad.

    `esquema` valida el registro completo (campos obligatorios y formato, en el
    orden de los campos). `verificaciones` corren después y comprueban reglas
    que necesitan la base (referencias existentes, cédula única); pueden
    devolver campos derivados que se escriben junto con los datos.
    """

    def __init__(
        self,
        repo: Repositorio,
        modelo,
        esquema: type[BaseModel],
        verificaciones: list[Verificacion] | None = None,
        al_guardar: Callable | None = None,
    ):
        self.repo = repo
        self.modelo = modelo
        self.esquema = esquema
        self.verificaciones = verificaciones or []
        self.al_guardar = al_guardar
        self.estado = EstadoFormulario.CERRADO
        self.registro_id = None
        self.datos: dict[str, Any] = {}
        self.modificados: set[str] = set()
        self.originales: dict[str, Any] = {}
        self.error: str | None = None

    @property
    def abierto(self) -> bool:
        return self.estado in (EstadoFormulario.ABIERTO_CREACION, EstadoFormulario.ABIERTO_EDICION)

    def abrir_creacion(self, iniciales: dict | None = None) -> None:
        self.estado = EstadoFormulario.ABIERTO_CREACION
        self.registro_id = None
        self.datos = dict(iniciales or {})
        self.modificados = set(self.datos)
        self.originales = {}
        self.error = None

    async def abrir_edicion(self, registro_id) -> None:
        registro = await self.repo.obtener(self.modelo, registro_id)
        if registro is None:
            raise RegistroNoEncontrado("Registro no encontrado.")
        self.estado = EstadoFormulario.ABIERTO_EDICION
        self.registro_id = registro_id
        self.datos = a_dict(registro)
        self.originales = dict(self.datos)
        self.modificados = set()
        self.error = None

    def cambiar(self, campo: str, valor) -> None:
        self.datos[campo] = valor
        self.modificados.add(campo)

    def cerrar(self) -> None:
        self.estado = EstadoFormulario.CERRADO
        self.registro_id = None
        self.datos = {}
        self.modificados = set()
        self.originales = {}
        self.error = None

    def _rechazar(self, error: ErrorDominio):
        self.error = error.mensaje
        self.estado = (
            EstadoFormulario.ABIERTO_EDICION
            if self.registro_id is not None
            else EstadoFormulario.ABIERTO_CREACION
        )
        raise error

    async def enviar(self, parche: dict | None = None):
        """Valida y guarda. Devuelve el id del registro escrito."""
        if not self.abierto:
            raise ConflictoNegocio("El formulario no está abierto.")
        for campo, valor in (parche or {}).items():
            self.cambiar(campo, valor)
        es_edicion = self.estado == EstadoFormulario.ABIERTO_EDICION
        self.estado = EstadoFormulario.VALIDANDO
        self.error = None

        try:
            validado = self.esquema.model_validate(self.datos)
        except ValidationError as exc:
            self._rechazar(ErrorValidacion(primer_error(exc)))

        derivados: dict[str, Any] = {}
        try:
            for verificar in self.verificaciones:
                extra = await verificar(self.repo, validado, self.registro_id)
                if extra:
                    derivados.update(extra)
        except ErrorDominio as exc:
            self._rechazar(exc)

        permitidos = columnas(self.modelo)
        limpio = validado.model_dump()
        if es_edicion:
            # El parche, más lo que la validación normalizó a partir de él
            escritura = {
                c: v for c, v in limpio.items()
                if c in permitidos and (c in self.modificados or v != self.originales.get(c))
            }
            escritura.update({c: v for c, v in derivados.items() if c in permitidos})
            if escritura:
                await self.repo.actualizar(self.modelo, self.registro_id, escritura)
            registro_id = self.registro_id
        else:
            escritura = {c: v for c, v in limpio.items() if c in permitidos}
            escritura.update({c: v for c, v in derivados.items() if c in permitidos})
            registro_id = await self.repo.agregar(self.modelo, escritura)

        if self.al_guardar is not None:
            resultado = self.al_guardar(registro_id, validado)
            if _inspect.isawaitable(resultado):
                await resultado
        logger.debug("%s guardado: id=%s", self.modelo.__tablename__, registro_id)
        self.cerrar()
        return registro_id


async def crear(formulario: Formulario, datos: dict):
    formulario.abrir_creacion()
    return await formulario.enviar(datos)


async def editar(formulario: Formulario, registro_id, parche: dict):
    await formulario.abrir_edicion(registro_id)
    return await formulario.enviar(parche)


# ── Derivación de campos vinculados (curso <-> tutor) ───────────────


def _buscar_curso(cursos, nombre, paralelo):
    for c in cursos:
        if c.nombre == nombre and c.paralelo == paralelo:
            return c
    return None


def _tutor_del_curso(docentes, curso_id):
    for d in docentes:
        if d.es_tutor and d.tutor_de_curso_id == curso_id:
            return d
    return None


def _como_id(valor):
    if valor in (None, ""):
        return None
    try:
        return int(valor)
    except (TypeError, ValueError):
        return None


def derivar_campos_vinculados(campo: str, formulario: dict, tablas: dict) -> dict:
    """Campos que deben cambiar cuando el usuario edita `campo`.

    Función pura: recibe el estado del formulario (ya con el nuevo valor) y las
    tablas `cursos` y `docentes`; devuelve solo las claves a sobrescribir.
    """
    cursos = tablas.get("cursos", [])
    docentes = tablas.get("docentes", [])
    curso_nombre = formulario.get("curso")
    paralelo = formulario.get("paralelo")
    tutor_id = _como_id(formulario.get("tutor_id"))

    if campo in ("curso", "paralelo"):
        curso = _buscar_curso(cursos, curso_nombre, paralelo)
        if curso is not None:
            tutor = _tutor_del_curso(docentes, curso.id)
            if tutor is not None and tutor.id != tutor_id:
                return {"tutor_id": tutor.id}
            return {}
        if campo == "curso":
            return {"paralelo": None, "tutor_id": None}
        return {}

    if campo == "tutor_id":
        docente = next((d for d in docentes if d.id == tutor_id), None)
        if docente is None or not docente.es_tutor or docente.tutor_de_curso_id is None:
            return {}
        curso = next((c for c in cursos if c.id == docente.tutor_de_curso_id), None)
        if curso is not None and (curso.nombre, curso.paralelo) != (curso_nombre, paralelo):
            return {"curso": curso.nombre, "paralelo": curso.paralelo}
    return {}
