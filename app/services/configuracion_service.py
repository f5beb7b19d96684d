"""Lectura y escritura de la configuración (horario laboral, permisos) y de la institución."""
from typing import Any

from pydantic import ValidationError

from app.core.config import settings
from app.core.excepciones import ErrorValidacion
from app.models.configuracion import CLAVE_HORARIO_LABORAL, CLAVE_PERMISOS, Configuracion
from app.models.institucion import Institucion
from app.schemas.institucion import HorarioLaboral, PermisosConfig
from app.schemas.validaciones import primer_error
from app.services.repositorio import Repositorio

# Claves conocidas y el esquema con el que se validan al guardar
ESQUEMAS_CONFIGURACION = {
    CLAVE_HORARIO_LABORAL: HorarioLaboral,
    CLAVE_PERMISOS: PermisosConfig,
}


def valor_por_defecto(clave: str) -> Any:
    if clave == CLAVE_HORARIO_LABORAL:
        return {"inicio": settings.hora_inicio_defecto, "fin": settings.hora_fin_defecto}
    if clave == CLAVE_PERMISOS:
        return PermisosConfig().model_dump()
    return None


async def obtener_valor(repo: Repositorio, clave: str) -> Any:
    registro = await repo.obtener(Configuracion, clave)
    if registro is None:
        return valor_por_defecto(clave)
    return registro.valor


async def guardar_valor(repo: Repositorio, clave: str, valor: Any) -> Any:
    esquema = ESQUEMAS_CONFIGURACION.get(clave)
    if esquema is not None:
        try:
            valor = esquema.model_validate(valor).model_dump()
        except ValidationError as exc:
            raise ErrorValidacion(primer_error(exc)) from exc
    if await repo.obtener(Configuracion, clave) is None:
        await repo.agregar(Configuracion, {"clave": clave, "valor": valor})
    else:
        await repo.actualizar(Configuracion, clave, {"valor": valor})
    return valor


async def obtener_horario(repo: Repositorio) -> HorarioLaboral:
    return HorarioLaboral.model_validate(await obtener_valor(repo, CLAVE_HORARIO_LABORAL))


async def obtener_permisos(repo: Repositorio) -> PermisosConfig:
    return PermisosConfig.model_validate(await obtener_valor(repo, CLAVE_PERMISOS))


async def obtener_institucion(repo: Repositorio) -> Institucion | None:
    return await repo.primero(Institucion)


async def guardar_institucion(repo: Repositorio, datos: dict) -> Institucion:
    actual = await obtener_institucion(repo)
    if actual is None:
        registro_id = await repo.agregar(Institucion, datos)
    else:
        registro_id = actual.id
        await repo.actualizar(Institucion, registro_id, datos)
    return await repo.obtener(Institucion, registro_id)


def iniciales(texto: str | None, por_defecto: str) -> str:
    """Primera letra de cada palabra en mayúsculas (ej. "Unidad Educativa Quito" -> "UEQ")."""
    letras = "".join(p[0] for p in (texto or "").split() if p and p[0].isalpha())
    return letras.upper() or por_defecto
