"""Suscripciones a cambios del almacén: emisión al confirmar y descarte en rollback."""
import logging

import pytest

from app.models import Representante
from app.services import eventos
from app.services.eventos import AccionEvento
from app.services.repositorio import Repositorio

API = "/api/v1"


@pytest.fixture
def recibidos():
    lista = []
    suscripcion = eventos.suscribir(Representante.__tablename__, lista.append)
    yield lista
    eventos.cancelar(suscripcion)


async def test_evento_se_emite_al_confirmar(client, recibidos):
    r = await client.post(f"{API}/representantes", json={"nombre_completo": "Rosa Vera", "cedula": "1712345678"})
    representante_id = r.json()["id"]

    assert len(recibidos) == 1
    evento = recibidos[0]
    assert evento.accion == AccionEvento.AGREGADO
    assert evento.registro_id == representante_id
    assert evento.datos["cedula"] == "1712345678"

    await client.patch(f"{API}/representantes/{representante_id}", json={"edad": 40})
    await client.delete(f"{API}/representantes/{representante_id}")
    assert [e.accion for e in recibidos] == [
        AccionEvento.AGREGADO, AccionEvento.ACTUALIZADO, AccionEvento.ELIMINADO,
    ]


async def test_escritura_rechazada_no_emite(client, recibidos):
    await client.post(f"{API}/representantes", json={"nombre_completo": "Rosa Vera", "cedula": "1712345678"})
    r = await client.post(f"{API}/representantes", json={"nombre_completo": "Otra", "cedula": "1712345678"})
    assert r.status_code == 409
    assert len(recibidos) == 1


async def test_rollback_descarta_eventos(db, recibidos):
    repo = Repositorio(db)
    await repo.agregar(Representante, {"nombre_completo": "Rosa Vera", "cedula": "1712345678"})
    assert recibidos == []
    await db.rollback()
    assert recibidos == []

    await repo.agregar(Representante, {"nombre_completo": "Luis Vera", "cedula": "1787654321"})
    await db.commit()
    assert [e.datos["nombre_completo"] for e in recibidos] == ["Luis Vera"]


async def test_filtro_de_suscripcion(db):
    lista = []
    suscripcion = eventos.suscribir(Representante.__tablename__, lista.append, filtro={"cedula": "1787654321"})
    try:
        repo = Repositorio(db)
        await repo.agregar(Representante, {"nombre_completo": "Rosa Vera", "cedula": "1712345678"})
        await repo.agregar(Representante, {"nombre_completo": "Luis Vera", "cedula": "1787654321"})
        await db.commit()
    finally:
        eventos.cancelar(suscripcion)
    assert [e.datos["nombre_completo"] for e in lista] == ["Luis Vera"]


async def test_error_en_suscriptor_no_afecta_la_escritura(client, caplog):
    def fallar(evento):
        raise RuntimeError("suscriptor roto")

    suscripcion = eventos.suscribir(Representante.__tablename__, fallar)
    try:
        with caplog.at_level(logging.ERROR, logger="app.services.eventos"):
            r = await client.post(f"{API}/representantes", json={"nombre_completo": "Rosa Vera", "cedula": "1712345678"})
    finally:
        eventos.cancelar(suscripcion)
    assert r.status_code == 201
    assert "Error en suscriptor de representantes" in caplog.text
    r = await client.get(f"{API}/representantes/{r.json()['id']}")
    assert r.status_code == 200
