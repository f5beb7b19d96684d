"""Agenda del DECE: franjas de 30 minutos, reserva y atención de citas."""
import logging
from datetime import date, datetime, timedelta

from app.core.config import settings
from app.core.excepciones import ConflictoNegocio, ErrorValidacion, RegistroNoEncontrado
from app.models import (
    Caso,
    Cita,
    Docente,
    EstadoCaso,
    EstadoCita,
    Estudiante,
    Representante,
    TipoAsistente,
    TipoIntervencion,
)
from app.schemas.cita import AtencionCreate, CitaCreate
from app.services.casos_service import caso_activo_mas_reciente, formulario_seguimiento
from app.services.configuracion_service import obtener_horario
from app.services.formularios import Formulario, crear
from app.services.repositorio import Repositorio

logger = logging.getLogger(__name__)

_MODELO_ASISTENTE = {
    TipoAsistente.ESTUDIANTE: Estudiante,
    TipoAsistente.REPRESENTANTE: Representante,
    TipoAsistente.DOCENTE: Docente,
}


def generar_horarios(hora_inicio: str, hora_fin: str, ocupados=()) -> list[str]:
    """Inicios HH:00 y HH:30 de cada hora entera en [inicio, fin), sin la hora de almuerzo.

    Solo cuentan las horas: "09:30"-"18:00" empieza en 09:00. Un horario está
    ocupado si coincide exactamente con el inicio de una cita.
    """
    h_inicio = int(hora_inicio.split(":")[0])
    h_fin = int(hora_fin.split(":")[0])
    ocupados = set(ocupados)
    horarios = []
    for hora in range(h_inicio, h_fin):
        if hora == settings.hora_almuerzo:
            continue
        for minuto in (0, 30):
            franja = f"{hora:02d}:{minuto:02d}"
            if franja not in ocupados:
                horarios.append(franja)
    return horarios


def sumar_minutos(hora: str, minutos: int) -> str:
    t = datetime.strptime(hora, "%H:%M") + timedelta(minutes=minutos)
    return t.strftime("%H:%M")


async def horarios_ocupados(repo: Repositorio, fecha: date, excluir_id=None) -> list[str]:
    condiciones = [Cita.fecha == fecha, Cita.estado != EstadoCita.CANCELADA]
    if excluir_id is not None:
        condiciones.append(Cita.id != excluir_id)
    return [c.hora_inicio for c in await repo.consultar(Cita, *condiciones)]


async def horarios_disponibles(repo: Repositorio, fecha: date, excluir_id=None) -> list[str]:
    horario = await obtener_horario(repo)
    ocupados = await horarios_ocupados(repo, fecha, excluir_id)
    return generar_horarios(horario.inicio, horario.fin, ocupados)


async def _reservar(repo: Repositorio, datos: CitaCreate, registro_id):
    """Comprueba asistente y franja; deriva hora_fin, título, estudiante y caso."""
    if datos.hora_inicio not in await horarios_disponibles(repo, datos.fecha, registro_id):
        raise ConflictoNegocio(
            f"El horario {datos.hora_inicio} del {datos.fecha.strftime('%d/%m/%Y')} no está disponible."
        )
    modelo = _MODELO_ASISTENTE[datos.tipo_asistente]
    asistente = await repo.obtener(modelo, datos.asistente_id)
    if asistente is None:
        raise ErrorValidacion(f"El {datos.tipo_asistente.lower()} seleccionado no existe.")

    estudiante_id = datos.estudiante_id
    if datos.tipo_asistente == TipoAsistente.ESTUDIANTE:
        estudiante_id = asistente.id
    elif datos.tipo_asistente == TipoAsistente.REPRESENTANTE:
        if estudiante_id is None:
            raise ErrorValidacion("Debe seleccionar el estudiante relacionado con el representante.")
        estudiante = await repo.obtener(Estudiante, estudiante_id)
        if estudiante is None or estudiante.representante_id != asistente.id:
            raise ErrorValidacion("El estudiante seleccionado no está a cargo de este representante.")
    elif estudiante_id is not None and await repo.obtener(Estudiante, estudiante_id) is None:
        raise ErrorValidacion("El estudiante seleccionado no existe.")

    caso_id = datos.caso_id
    if caso_id is not None:
        caso = await repo.obtener(Caso, caso_id)
        if caso is None:
            raise ErrorValidacion("El caso seleccionado no existe.")
        if estudiante_id is not None and caso.estudiante_id != estudiante_id:
            raise ErrorValidacion("El caso seleccionado no pertenece al estudiante.")
    elif estudiante_id is not None:
        caso = await caso_activo_mas_reciente(repo.db, estudiante_id)
        caso_id = caso.id if caso else None

    return {
        "hora_fin": sumar_minutos(datos.hora_inicio, settings.duracion_cita_minutos),
        "titulo": f"Cita con {datos.tipo_asistente} - {asistente.nombre_completo}",
        "estudiante_id": estudiante_id,
        "caso_id": caso_id,
    }


def formulario_cita(repo: Repositorio, al_guardar=None) -> Formulario:
    return Formulario(repo, Cita, CitaCreate, verificaciones=[_reservar], al_guardar=al_guardar)


async def cambiar_estado(repo: Repositorio, cita_id: int, estado: str) -> bool:
    cita = await repo.obtener_para_actualizar(Cita, cita_id)
    if cita is None:
        return False
    if cita.estado == EstadoCita.CANCELADA and estado != EstadoCita.CANCELADA:
        # Al cancelar se liberó la franja; puede haberse reservado de nuevo
        if cita.hora_inicio not in await horarios_disponibles(repo, cita.fecha, cita_id):
            raise ConflictoNegocio(
                f"El horario {cita.hora_inicio} del {cita.fecha.strftime('%d/%m/%Y')} ya fue "
                "reservado por otra cita."
            )
    await repo.actualizar(Cita, cita_id, {"estado": estado})
    logger.info("Cita %s -> %s", cita_id, estado)
    return True


# ── Atención de la cita ─────────────────────────────────────────────


async def _caso_para_atencion(repo: Repositorio, cita: Cita, caso_id) -> int:
    if caso_id is not None:
        return caso_id
    if cita.caso_id is not None:
        caso = await repo.obtener(Caso, cita.caso_id)
        if caso is not None and caso.estado != EstadoCaso.CERRADO:
            return caso.id
    if cita.estudiante_id is not None:
        caso = await caso_activo_mas_reciente(repo.db, cita.estudiante_id)
        if caso is not None:
            return caso.id
    raise ConflictoNegocio(
        "El estudiante no tiene un expediente de caso activo. Debe crear un caso primero."
    )


async def registrar_atencion(repo: Repositorio, cita_id: int, datos: AtencionCreate) -> int:
    """Registra la atención como seguimiento efectivo y marca la cita como Realizada.

    El caso es el enviado, el vinculado a la cita si sigue activo o el caso
    activo más reciente del estudiante. Devuelve el id del seguimiento.
    """
    cita = await repo.obtener_para_actualizar(Cita, cita_id)
    if cita is None:
        raise RegistroNoEncontrado("Cita no encontrada.")
    if cita.estado != EstadoCita.PROGRAMADA:
        raise ConflictoNegocio(f"La cita está {cita.estado.lower()} y no se puede atender.")

    hora_inicio = datos.hora_inicio or cita.hora_inicio
    hora_fin = datos.hora_fin or (
        sumar_minutos(hora_inicio, settings.duracion_cita_minutos) if datos.hora_inicio else cita.hora_fin
    )
    if hora_fin <= hora_inicio:
        raise ErrorValidacion("La hora de fin debe ser posterior a la hora de inicio.")

    caso_id = await _caso_para_atencion(repo, cita, datos.caso_id)
    if cita.estudiante_id is not None:
        caso = await repo.obtener(Caso, caso_id)
        if caso is not None and caso.estudiante_id != cita.estudiante_id:
            raise ErrorValidacion("El caso seleccionado no pertenece al estudiante.")

    seguimiento_id = await crear(formulario_seguimiento(repo), {
        "caso_id": caso_id,
        "fecha": cita.fecha,
        "descripcion": datos.descripcion,
        "observaciones": datos.observaciones,
        "responsable": datos.responsable,
        "tipo_intervencion": TipoIntervencion.INDIVIDUAL,
        "tipos_participante": [cita.tipo_asistente],
        "es_efectivo": True,
    })
    await repo.actualizar(Cita, cita_id, {
        "estado": EstadoCita.REALIZADA,
        "hora_inicio": hora_inicio,
        "hora_fin": hora_fin,
        "caso_id": caso_id,
    })
    logger.info("Cita %s atendida: seguimiento %s en caso %s", cita_id, seguimiento_id, caso_id)
    return seguimiento_id
