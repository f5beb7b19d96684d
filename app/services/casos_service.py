"""Servicio de casos: código, semáforo, seguimientos, cierre y traslado."""
import logging
import time
from datetime import date, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.excepciones import ConflictoNegocio, ErrorValidacion, RegistroNoEncontrado
from app.models import CategoriaCaso, Caso, EstadoCaso, Estudiante, Seguimiento
from app.models.caso import CATEGORIA_EMBARAZO, CATEGORIA_VIOLENCIA_SEXUAL
from app.models.seguimiento import RESPONSABLE_SISTEMA
from app.schemas.caso import CasoCreate, CasoOut
from app.schemas.seguimiento import SeguimientoCreate
from app.services.configuracion_service import iniciales, obtener_institucion
from app.services.formularios import Formulario
from app.services.repositorio import Repositorio

logger = logging.getLogger(__name__)

CATEGORIA_PROTEGIDA_EXPORTACION = "Situación de Vulnerabilidad / Riesgo Psicosocial"
_PALABRAS_SENSIBLES = ("violencia", "acoso", "sexual", "suicidio", "drogas")


class Semaforo:
    SIN_FECHA = "Sin fecha"
    VENCIDO = "Vencido"
    VENCE_HOY = "Vence Hoy"
    PROXIMO = "Próximo"
    A_TIEMPO = "A tiempo"
    CERRADO = "Cerrado"


def generar_codigo(
    nombre_institucion: str | None,
    nombre_estudiante: str | None,
    fecha: date,
    marca_ms: int | None = None,
) -> str:
    """Código `{IE}-{iniciales estudiante}-{AAAAMMDD}-{4 dígitos}` (ej. UEQ-JP-20250310-4821)."""
    if marca_ms is None:
        marca_ms = int(time.time() * 1000)
    return "-".join([
        iniciales(nombre_institucion, "IE"),
        iniciales(nombre_estudiante, "XX"),
        fecha.strftime("%Y%m%d"),
        str(marca_ms)[-4:].zfill(4),
    ])


def semaforo(caso, hoy: date | None = None) -> str:
    """Etiqueta de vencimiento según días restantes hasta `fecha_vencimiento`."""
    hoy = hoy or date.today()
    es_violencia = caso.categoria == CATEGORIA_VIOLENCIA_SEXUAL
    if es_violencia and caso.estado == EstadoCaso.CERRADO:
        return Semaforo.CERRADO
    if caso.fecha_vencimiento is None:
        return Semaforo.SIN_FECHA
    dias = (caso.fecha_vencimiento - hoy).days
    if dias < 0:
        return Semaforo.VENCIDO
    if es_violencia:
        return Semaforo.PROXIMO if dias <= 14 else Semaforo.A_TIEMPO
    if dias == 0:
        return Semaforo.VENCE_HOY
    if dias <= 7:
        return Semaforo.PROXIMO
    return Semaforo.A_TIEMPO


def es_categoria_sensible(categoria: str | None) -> bool:
    texto = (categoria or "").lower()
    return any(p in texto for p in _PALABRAS_SENSIBLES)


def enmascarar_categoria(categoria: str | None) -> str | None:
    """Las categorías sensibles no salen tal cual en documentos exportados."""
    return CATEGORIA_PROTEGIDA_EXPORTACION if es_categoria_sensible(categoria) else categoria


def caso_a_out(caso: Caso, estudiante_nombre: str | None = None, hoy: date | None = None) -> CasoOut:
    return CasoOut(
        id=caso.id,
        codigo=caso.codigo,
        estudiante_id=caso.estudiante_id,
        estudiante_nombre=estudiante_nombre,
        categoria=caso.categoria,
        prioridad=caso.prioridad,
        estado=caso.estado,
        fecha_apertura=caso.fecha_apertura,
        fecha_vencimiento=caso.fecha_vencimiento,
        descripcion=caso.descripcion,
        observaciones=caso.observaciones,
        semaforo=semaforo(caso, hoy),
        requiere_registro_embarazo=caso.categoria == CATEGORIA_EMBARAZO,
    )


# ── Formulario de caso ────────────────────────────────────────────


async def _referencias_caso(repo: Repositorio, datos: CasoCreate, registro_id):
    estudiante = await repo.obtener(Estudiante, datos.estudiante_id)
    if estudiante is None:
        raise ErrorValidacion("El estudiante seleccionado no existe.")
    if await repo.contar(CategoriaCaso, nombre=datos.categoria) == 0:
        raise ErrorValidacion(f'La categoría "{datos.categoria}" no existe.')
    derivados = {}
    if registro_id is None:
        institucion = await obtener_institucion(repo)
        codigo = generar_codigo(
            institucion.nombre if institucion else None,
            estudiante.nombre_completo,
            datos.fecha_apertura,
        )
        # La marca de 4 dígitos puede repetirse: se avanza hasta encontrar uno libre
        marca = int(codigo.rsplit("-", 1)[1])
        while await repo.contar(Caso, codigo=codigo):
            marca = (marca + 1) % 10000
            codigo = f"{codigo.rsplit('-', 1)[0]}-{marca:04d}"
        derivados["codigo"] = codigo
        if datos.fecha_vencimiento is None:
            derivados["fecha_vencimiento"] = datos.fecha_apertura + timedelta(
                days=settings.dias_vencimiento_caso
            )
    return derivados


def formulario_caso(repo: Repositorio, al_guardar=None) -> Formulario:
    return Formulario(repo, Caso, CasoCreate, verificaciones=[_referencias_caso], al_guardar=al_guardar)


# ── Seguimientos ──────────────────────────────────────────────────


async def _caso_admite_seguimiento(repo: Repositorio, datos: SeguimientoCreate, registro_id):
    caso = await repo.obtener(Caso, datos.caso_id)
    if caso is None:
        raise ErrorValidacion("El caso seleccionado no existe.")
    if caso.estado != EstadoCaso.CERRADO:
        return None
    if registro_id is not None:
        # Corregir un seguimiento del mismo caso cerrado sí se permite
        actual = await repo.obtener(Seguimiento, registro_id)
        if actual is not None and actual.caso_id == caso.id:
            return None
    raise ConflictoNegocio(f"El caso {caso.codigo} está cerrado y no admite nuevos seguimientos.")


async def aplicar_seguimiento_al_caso(repo: Repositorio, datos: SeguimientoCreate) -> None:
    """Vencimiento y estado del caso tras registrar un seguimiento nuevo."""
    caso = await repo.obtener(Caso, datos.caso_id)
    cambios = {}
    if caso.categoria == CATEGORIA_VIOLENCIA_SEXUAL:
        cambios["fecha_vencimiento"] = datos.fecha + timedelta(days=settings.dias_seguimiento_violencia)
    elif datos.proxima_fecha is not None:
        cambios["fecha_vencimiento"] = datos.proxima_fecha
    if caso.estado == EstadoCaso.ABIERTO and datos.es_efectivo:
        cambios["estado"] = EstadoCaso.EN_PROCESO
    if cambios:
        await repo.actualizar(Caso, caso.id, cambios)


def formulario_seguimiento(repo: Repositorio, nuevo: bool = True) -> Formulario:
    """Formulario de seguimiento. Editar uno existente no toca el caso."""

    async def al_guardar(seguimiento_id, datos: SeguimientoCreate):
        await aplicar_seguimiento_al_caso(repo, datos)

    return Formulario(
        repo, Seguimiento, SeguimientoCreate,
        verificaciones=[_caso_admite_seguimiento],
        al_guardar=al_guardar if nuevo else None,
    )


# ── Cierre y traslado ─────────────────────────────────────────────


async def _cerrar_con_registro(repo: Repositorio, caso_id: int, descripcion: str) -> Caso:
    caso = await repo.obtener_para_actualizar(Caso, caso_id)
    if caso is None:
        raise RegistroNoEncontrado("Caso no encontrado.")
    if caso.estado == EstadoCaso.CERRADO:
        raise ConflictoNegocio(f"El caso {caso.codigo} ya está cerrado.")
    await repo.agregar(
        Seguimiento,
        {
            "caso_id": caso_id,
            "fecha": date.today(),
            "descripcion": descripcion,
            "responsable": RESPONSABLE_SISTEMA,
            "es_efectivo": False,
            "tipos_participante": [],
        },
    )
    await repo.actualizar(Caso, caso_id, {"estado": EstadoCaso.CERRADO})
    logger.info("Caso %s cerrado: %s", caso.codigo, descripcion)
    return caso


async def cerrar_caso(repo: Repositorio, caso_id: int, motivo: str) -> Caso:
    """Registra el seguimiento de auditoría y marca el caso como Cerrado (misma transacción)."""
    return await _cerrar_con_registro(repo, caso_id, f"Caso cerrado. Motivo: {motivo}")


async def trasladar_caso(repo: Repositorio, caso_id: int, institucion_destino: str) -> Caso:
    return await _cerrar_con_registro(
        repo, caso_id, f"Estudiante trasladado a la IE: {institucion_destino}"
    )


async def caso_activo_mas_reciente(db: AsyncSession, estudiante_id: int) -> Caso | None:
    result = await db.execute(
        select(Caso)
        .where(Caso.estudiante_id == estudiante_id, Caso.estado != EstadoCaso.CERRADO)
        .order_by(Caso.fecha_apertura.desc(), Caso.id.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()
