"""Registro explícito de suscripciones a cambios del almacén.

Las escrituras del `Repositorio` encolan eventos en la sesión; solo se emiten
cuando la transacción hace commit y se descartan si hace rollback.
"""
import logging
from typing import Any, Callable

from sqlalchemy import event
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

_CLAVE_PENDIENTES = "eventos_pendientes"


class AccionEvento:
    AGREGADO = "agregado"
    ACTUALIZADO = "actualizado"
    ELIMINADO = "eliminado"


class Evento:
    """Cambio confirmado sobre un registro de una tabla."""

    def __init__(self, tabla: str, accion: str, registro_id: Any, datos: dict | None = None):
        self.tabla = tabla
        self.accion = accion
        self.registro_id = registro_id
        self.datos = datos or {}

    def __repr__(self) -> str:
        return f"Evento({self.tabla!r}, {self.accion!r}, {self.registro_id!r})"


class Suscripcion:
    """Callback sobre una tabla; `filtro` son igualdades sobre los datos del registro."""

    def __init__(self, tabla: str, callback: Callable[[Evento], None], filtro: dict | None = None):
        self.tabla = tabla
        self.callback = callback
        self.filtro = filtro or {}

    def acepta(self, evento: Evento) -> bool:
        return all(evento.datos.get(campo) == valor for campo, valor in self.filtro.items())


_suscripciones: dict[str, list[Suscripcion]] = {}


def suscribir(tabla: str, callback: Callable[[Evento], None], filtro: dict | None = None) -> Suscripcion:
    suscripcion = Suscripcion(tabla, callback, filtro)
    _suscripciones.setdefault(tabla, []).append(suscripcion)
    return suscripcion


def cancelar(suscripcion: Suscripcion) -> None:
    lista = _suscripciones.get(suscripcion.tabla, [])
    if suscripcion in lista:
        lista.remove(suscripcion)


def emitir(evento: Evento) -> None:
    for suscripcion in list(_suscripciones.get(evento.tabla, [])):
        if not suscripcion.acepta(evento):
            continue
        try:
            suscripcion.callback(evento)
        except Exception:
            # El commit ya ocurrió: un suscriptor con error no revierte la escritura
            logger.exception("Error en suscriptor de %s para %r", evento.tabla, evento)


def encolar(session: Session, evento: Evento) -> None:
    """Guarda el evento en la sesión hasta el commit."""
    session.info.setdefault(_CLAVE_PENDIENTES, []).append(evento)


@event.listens_for(Session, "after_commit")
def _despachar_pendientes(session: Session) -> None:
    pendientes = session.info.pop(_CLAVE_PENDIENTES, [])
    for evento in pendientes:
        emitir(evento)


@event.listens_for(Session, "after_rollback")
def _descartar_pendientes(session: Session) -> None:
    descartados = session.info.pop(_CLAVE_PENDIENTES, [])
    if descartados:
        logger.debug("Rollback: se descartan %d evento(s) sin emitir", len(descartados))
