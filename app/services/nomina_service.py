"""Nómina de estudiantes: importación CSV/Excel con pandas y paso a estudiante."""
import logging
from io import BytesIO

import pandas as pd

from app.core.excepciones import ConflictoNegocio, ErrorValidacion, RegistroNoEncontrado
from app.models import EstadoNomina, RegistroNomina, Representante
from app.schemas.nomina import CrearEstudianteDesdeNomina, ImportacionErrorItem, ImportacionNominaResponse
from app.schemas.validaciones import CEDULA_RE, MENSAJE_CEDULA
from app.services.actores_service import formulario_estudiante, formulario_representante
from app.services.formularios import crear
from app.services.repositorio import Repositorio

logger = logging.getLogger(__name__)

COLUMNAS_NOMINA = [
    "cedula",
    "nombre_completo",
    "curso",
    "paralelo",
    "cedula_representante",
    "nombre_representante",
]


def _val(row, col):
    """Devuelve el valor de la celda como string limpio, o None si está vacío/NaN."""
    v = row.get(col)
    if v is None or (isinstance(v, float) and pd.isna(v)):
        return None
    s = str(v).strip()
    return s if s else None


def leer_archivo(nombre_archivo: str, contenido: bytes) -> pd.DataFrame:
    """Lee .csv o .xlsx como texto (las cédulas conservan ceros a la izquierda)."""
    nombre = nombre_archivo.lower()
    if not nombre.endswith((".csv", ".xlsx")):
        raise ErrorValidacion("El archivo debe tener extensión .csv o .xlsx")
    try:
        if nombre.endswith(".csv"):
            df = pd.read_csv(BytesIO(contenido), dtype=str, encoding="utf-8-sig")
        else:
            df = pd.read_excel(BytesIO(contenido), dtype=str, engine="openpyxl")
    except Exception as exc:
        raise ErrorValidacion(f"No se pudo leer el archivo: {exc}") from exc
    df.columns = [str(c).strip().lower() for c in df.columns]
    faltantes = [c for c in COLUMNAS_NOMINA if c not in df.columns]
    if faltantes:
        raise ErrorValidacion(f"Faltan columnas obligatorias: {', '.join(faltantes)}")
    return df


async def importar_nomina(repo: Repositorio, nombre_archivo: str, contenido: bytes) -> ImportacionNominaResponse:
    """Agrega las filas nuevas; omite las que no tienen cédula o ya están registradas."""
    df = leer_archivo(nombre_archivo, contenido)
    existentes = {r.cedula for r in await repo.consultar(RegistroNomina)}
    respuesta = ImportacionNominaResponse(nombre_archivo=nombre_archivo, total_filas=len(df))

    for idx, row in df.iterrows():
        fila = int(idx) + 1
        cedula = _val(row, "cedula")
        if not cedula or cedula in existentes:
            respuesta.omitidos += 1
            continue
        if not CEDULA_RE.match(cedula):
            respuesta.errores.append(ImportacionErrorItem(fila=fila, cedula=cedula, mensaje=MENSAJE_CEDULA))
            continue
        nombre = _val(row, "nombre_completo")
        if not nombre:
            respuesta.errores.append(
                ImportacionErrorItem(fila=fila, cedula=cedula, mensaje='El campo "nombre_completo" es obligatorio.')
            )
            continue
        await repo.agregar(
            RegistroNomina,
            {
                "cedula": cedula,
                "nombre_completo": nombre,
                "curso": _val(row, "curso"),
                "paralelo": _val(row, "paralelo"),
                "cedula_representante": _val(row, "cedula_representante"),
                "nombre_representante": _val(row, "nombre_representante"),
                "estado": EstadoNomina.PENDIENTE,
            },
        )
        existentes.add(cedula)
        respuesta.agregados += 1

    logger.info(
        "Nómina %s: %d agregados, %d omitidos, %d errores",
        nombre_archivo, respuesta.agregados, respuesta.omitidos, len(respuesta.errores),
    )
    return respuesta


async def crear_estudiante_desde_nomina(
    repo: Repositorio, registro_id: int, extra: CrearEstudianteDesdeNomina
) -> int:
    """Busca o crea al representante por cédula, envía el formulario de estudiante y marca la fila."""
    registro = await repo.obtener(RegistroNomina, registro_id)
    if registro is None:
        raise RegistroNoEncontrado("Registro de nómina no encontrado.")
    if registro.estado == EstadoNomina.CREADO:
        raise ConflictoNegocio(f"{registro.nombre_completo} ya fue registrado como estudiante.")
    if not registro.cedula_representante:
        raise ErrorValidacion('El campo "cedula_representante" es obligatorio.')

    representante = await repo.primero(Representante, cedula=registro.cedula_representante)
    if representante is None:
        representante_id = await crear(
            formulario_representante(repo),
            {
                "nombre_completo": registro.nombre_representante,
                "cedula": registro.cedula_representante,
                "telefono": extra.telefono_representante,
            },
        )
    else:
        representante_id = representante.id

    async def marcar_creado(estudiante_id, datos):
        await repo.actualizar(RegistroNomina, registro_id, {"estado": EstadoNomina.CREADO})

    return await crear(
        formulario_estudiante(repo, al_guardar=marcar_creado),
        {
            "nombre_completo": registro.nombre_completo,
            "cedula": registro.cedula,
            "fecha_nacimiento": extra.fecha_nacimiento,
            "genero": extra.genero,
            "curso": registro.curso,
            "paralelo": registro.paralelo,
            "representante_id": representante_id,
            "tutor_id": extra.tutor_id,
            "condicion_especial": extra.condicion_especial,
        },
    )
