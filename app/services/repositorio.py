"""Almacén de entidades: lecturas y escrituras por tabla sobre la sesión del request."""
import logging
from typing import Any, TypeVar

from sqlalchemy import func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.services import eventos
from app.services.eventos import AccionEvento, Evento

logger = logging.getLogger(__name__)

M = TypeVar("M")


def columnas(modelo) -> set[str]:
    """Nombres de atributos-columna mapeados del modelo."""
    return {attr.key for attr in inspect(modelo).column_attrs}


def a_dict(registro) -> dict[str, Any]:
    return {campo: getattr(registro, campo) for campo in columnas(type(registro))}


class Repositorio:
    """Operaciones CRUD genéricas. No hace commit: eso lo decide `get_db`."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _notificar(self, modelo, accion: str, registro_id, datos: dict) -> None:
        eventos.encolar(
            self.db.sync_session,
            Evento(modelo.__tablename__, accion, registro_id, datos),
        )

    async def obtener(self, modelo: type[M], registro_id) -> M | None:
        return await self.db.get(modelo, registro_id)

    async def obtener_para_actualizar(self, modelo: type[M], registro_id) -> M | None:
        """Lee el registro bloqueando la fila (SELECT ... FOR UPDATE) hasta fin de transacción."""
        pk = inspect(modelo).primary_key[0]
        result = await self.db.execute(
            select(modelo).where(pk == registro_id).with_for_update()
        )
        return result.scalar_one_or_none()

    async def agregar(self, modelo, datos: dict) -> Any:
        registro = modelo(**datos)
        self.db.add(registro)
        await self.db.flush()
        registro_id = inspect(registro).identity[0]
        self._notificar(modelo, AccionEvento.AGREGADO, registro_id, a_dict(registro))
        return registro_id

    async def actualizar(self, modelo, registro_id, parcial: dict) -> bool:
        registro = await self.obtener(modelo, registro_id)
        if registro is None:
            return False
        for campo, valor in parcial.items():
            setattr(registro, campo, valor)
        await self.db.flush()
        self._notificar(modelo, AccionEvento.ACTUALIZADO, registro_id, a_dict(registro))
        return True

    async def eliminar(self, modelo, registro_id) -> bool:
        registro = await self.obtener(modelo, registro_id)
        if registro is None:
            return False
        datos = a_dict(registro)
        await self.db.delete(registro)
        await self.db.flush()
        self._notificar(modelo, AccionEvento.ELIMINADO, registro_id, datos)
        return True

    def _select(self, modelo, condiciones, igualdades):
        q = select(modelo)
        for condicion in condiciones:
            q = q.where(condicion)
        for campo, valor in igualdades.items():
            q = q.where(getattr(modelo, campo) == valor)
        return q

    async def consultar(self, modelo: type[M], *condiciones, orden=None, **igualdades) -> list[M]:
        q = self._select(modelo, condiciones, igualdades)
        if orden is not None:
            q = q.order_by(*orden) if isinstance(orden, (list, tuple)) else q.order_by(orden)
        result = await self.db.execute(q)
        return list(result.scalars().all())

    async def primero(self, modelo: type[M], *condiciones, **igualdades) -> M | None:
        result = await self.db.execute(self._select(modelo, condiciones, igualdades).limit(1))
        return result.scalars().first()

    async def contar(self, modelo, *condiciones, **igualdades) -> int:
        q = select(func.count()).select_from(modelo)
        for condicion in condiciones:
            q = q.where(condicion)
        for campo, valor in igualdades.items():
            q = q.where(getattr(modelo, campo) == valor)
        result = await self.db.execute(q)
        return result.scalar_one()
