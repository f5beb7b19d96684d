"""Agenda: franjas de 30 minutos, hora de almuerzo y reserva de citas."""
import pytest

from app.services.agenda import generar_horarios, sumar_minutos

API = "/api/v1"
FECHA = "2030-03-04"


def test_horarios_sin_almuerzo_ni_ocupados():
    assert generar_horarios("09:00", "18:00", ["10:00"]) == [
        "09:00", "09:30", "10:30", "11:00", "11:30", "12:00", "12:30",
        "14:00", "14:30", "15:00", "15:30", "16:00", "16:30", "17:00", "17:30",
    ]


def test_horarios_solo_cuentan_horas_enteras():
    assert generar_horarios("09:30", "11:00") == ["09:00", "09:30", "10:00", "10:30"]
    assert generar_horarios("12:00", "15:00") == ["12:00", "12:30", "14:00", "14:30"]


def test_ocupado_solo_si_coincide_el_inicio():
    assert generar_horarios("09:00", "10:00", ["09:15"]) == ["09:00", "09:30"]


@pytest.mark.parametrize("hora,esperado", [("09:00", "09:30"), ("12:30", "13:00"), ("17:30", "18:00")])
def test_sumar_minutos(hora, esperado):
    assert sumar_minutos(hora, 30) == esperado


async def _agendar(client, asistente_id, hora="10:00", **extra):
    return await client.post(f"{API}/citas", json={
        "fecha": FECHA,
        "hora_inicio": hora,
        "tipo_asistente": "Estudiante",
        "asistente_id": asistente_id,
        "motivo": "Entrevista de seguimiento",
        **extra,
    })


async def test_reservar_cita_con_estudiante(client, estudiante, caso):
    r = await _agendar(client, estudiante)
    assert r.status_code == 201
    cita = r.json()
    assert cita["hora_fin"] == "10:30"
    assert cita["titulo"] == "Cita con Estudiante - Mateo Andrade Vera"
    assert cita["estado"] == "Programada"
    assert cita["estudiante_id"] == estudiante
    assert cita["caso_id"] == caso["id"]

    r = await client.get(f"{API}/citas/horarios-disponibles", params={"fecha": FECHA})
    horarios = r.json()["horarios"]
    assert "10:00" not in horarios
    assert "13:00" not in horarios and "13:30" not in horarios
    assert len(horarios) == 15


async def test_horario_ocupado_es_conflicto(client, estudiante):
    assert (await _agendar(client, estudiante)).status_code == 201
    r = await _agendar(client, estudiante)
    assert r.status_code == 409
    assert "10:00" in r.json()["detail"]


async def test_hora_de_almuerzo_no_se_reserva(client, estudiante):
    r = await _agendar(client, estudiante, hora="13:00")
    assert r.status_code == 409


async def test_cancelar_libera_el_horario(client, estudiante):
    cita = (await _agendar(client, estudiante)).json()
    r = await client.patch(f"{API}/citas/{cita['id']}/estado", json={"estado": "Cancelada"})
    assert r.status_code == 200
    assert r.json()["estado"] == "Cancelada"

    r = await _agendar(client, estudiante)
    assert r.status_code == 201


async def test_reprogramar_a_su_propio_horario(client, estudiante):
    cita = (await _agendar(client, estudiante)).json()
    r = await client.patch(f"{API}/citas/{cita['id']}", json={"motivo": "Cambio de motivo"})
    assert r.status_code == 200
    assert r.json()["hora_inicio"] == "10:00"

    r = await client.patch(f"{API}/citas/{cita['id']}", json={"hora_inicio": "15:30"})
    assert r.json()["hora_fin"] == "16:00"


async def test_cita_con_representante_requiere_su_estudiante(client, representante, estudiante):
    datos = {
        "fecha": FECHA,
        "hora_inicio": "11:00",
        "tipo_asistente": "Representante",
        "asistente_id": representante,
        "motivo": "Reunión con la familia",
    }
    r = await client.post(f"{API}/citas", json=datos)
    assert r.status_code == 422

    r = await client.post(f"{API}/citas", json={**datos, "estudiante_id": estudiante})
    assert r.status_code == 201
    assert r.json()["titulo"] == "Cita con Representante - Rosa Andrade Vera"
    assert r.json()["caso_id"] is None


async def test_horario_laboral_configurado(client):
    r = await client.put(f"{API}/configuracion/horario_laboral", json={"valor": {"inicio": "08:00", "fin": "12:00"}})
    assert r.status_code == 200

    r = await client.get(f"{API}/citas/horarios-disponibles", params={"fecha": FECHA})
    assert r.json()["horarios"] == [
        "08:00", "08:30", "09:00", "09:30", "10:00", "10:30", "11:00", "11:30",
    ]


async def test_horario_laboral_invalido(client):
    r = await client.put(f"{API}/configuracion/horario_laboral", json={"valor": {"inicio": "18:00", "fin": "09:00"}})
    assert r.status_code == 422
    assert r.json()["detail"] == "La hora de fin debe ser posterior a la hora de inicio."


async def test_horario_laboral_de_menos_de_una_hora(client):
    r = await client.put(f"{API}/configuracion/horario_laboral", json={"valor": {"inicio": "09:00", "fin": "09:45"}})
    assert r.status_code == 422
    assert r.json()["detail"] == "El horario laboral debe abarcar al menos una hora completa."


async def test_reactivar_cita_cancelada_con_horario_tomado(client, estudiante):
    primera = (await _agendar(client, estudiante)).json()
    await client.patch(f"{API}/citas/{primera['id']}/estado", json={"estado": "Cancelada"})
    segunda = (await _agendar(client, estudiante)).json()

    r = await client.patch(f"{API}/citas/{primera['id']}/estado", json={"estado": "Programada"})
    assert r.status_code == 409
    assert "10:00" in r.json()["detail"]

    r = await client.get(f"{API}/citas", params={"estado": "Programada"})
    assert [c["id"] for c in r.json()] == [segunda["id"]]

    # Con la franja libre de nuevo, la cita se puede reactivar
    await client.patch(f"{API}/citas/{segunda['id']}/estado", json={"estado": "Cancelada"})
    r = await client.patch(f"{API}/citas/{primera['id']}/estado", json={"estado": "Programada"})
    assert r.status_code == 200
    assert r.json()["estado"] == "Programada"


async def test_cambiar_estado_de_cita_inexistente(client):
    r = await client.patch(f"{API}/citas/999/estado", json={"estado": "Cancelada"})
    assert r.status_code == 404


ATENCION = {"descripcion": "Se conversó sobre la convivencia en casa", "responsable": "Psic. Morales"}


async def test_atender_cita_registra_seguimiento(client, estudiante, caso):
    cita = (await _agendar(client, estudiante)).json()
    r = await client.post(f"{API}/citas/{cita['id']}/atencion", json={
        **ATENCION, "hora_inicio": "10:05", "hora_fin": "10:40",
    })
    assert r.status_code == 201
    body = r.json()
    assert body["cita"]["estado"] == "Realizada"
    assert body["cita"]["hora_inicio"] == "10:05"
    assert body["cita"]["hora_fin"] == "10:40"

    r = await client.get(f"{API}/seguimientos/{body['seguimiento_id']}")
    seguimiento = r.json()
    assert seguimiento["caso_id"] == caso["id"]
    assert seguimiento["fecha"] == FECHA
    assert seguimiento["tipo_intervencion"] == "Individual"
    assert seguimiento["tipos_participante"] == ["Estudiante"]
    assert seguimiento["es_efectivo"] is True
    assert seguimiento["responsable"] == "Psic. Morales"

    r = await client.get(f"{API}/casos/{caso['id']}")
    assert r.json()["estado"] == "En proceso"

    r = await client.post(f"{API}/citas/{cita['id']}/atencion", json=ATENCION)
    assert r.status_code == 409


async def test_atender_sin_caso_activo(client, estudiante):
    cita = (await _agendar(client, estudiante)).json()
    assert cita["caso_id"] is None

    r = await client.post(f"{API}/citas/{cita['id']}/atencion", json=ATENCION)
    assert r.status_code == 409
    assert "no tiene un expediente de caso activo" in r.json()["detail"]

    r = await client.get(f"{API}/citas/{cita['id']}")
    assert r.json()["estado"] == "Programada"


async def test_atender_cita_de_representante(client, representante, estudiante, caso):
    r = await client.post(f"{API}/citas", json={
        "fecha": FECHA,
        "hora_inicio": "11:00",
        "tipo_asistente": "Representante",
        "asistente_id": representante,
        "estudiante_id": estudiante,
        "motivo": "Reunión con la familia",
    })
    cita = r.json()

    r = await client.post(f"{API}/citas/{cita['id']}/atencion", json=ATENCION)
    assert r.status_code == 201
    assert r.json()["cita"]["hora_inicio"] == "11:00"
    assert r.json()["cita"]["hora_fin"] == "11:30"

    r = await client.get(f"{API}/casos/{caso['id']}/seguimientos")
    assert r.json()[0]["tipos_participante"] == ["Representante"]


async def test_atender_cita_cancelada(client, estudiante, caso):
    cita = (await _agendar(client, estudiante)).json()
    await client.patch(f"{API}/citas/{cita['id']}/estado", json={"estado": "Cancelada"})
    r = await client.post(f"{API}/citas/{cita['id']}/atencion", json=ATENCION)
    assert r.status_code == 409
    assert r.json()["detail"] == "La cita está cancelada y no se puede atender."


async def test_atencion_requiere_descripcion_y_horas_validas(client, estudiante, caso):
    cita = (await _agendar(client, estudiante)).json()
    r = await client.post(f"{API}/citas/{cita['id']}/atencion", json={"responsable": "Psic. Morales"})
    assert r.status_code == 422

    r = await client.post(f"{API}/citas/{cita['id']}/atencion", json={
        **ATENCION, "hora_inicio": "10:30", "hora_fin": "10:00",
    })
    assert r.status_code == 422
    assert r.json()["detail"] == "La hora de fin debe ser posterior a la hora de inicio."

    r = await client.get(f"{API}/casos/{caso['id']}/seguimientos")
    assert r.json() == []


async def test_atender_cita_inexistente(client):
    r = await client.post(f"{API}/citas/999/atencion", json=ATENCION)
    assert r.status_code == 404
