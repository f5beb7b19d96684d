"""Formularios de alta y edición: validación en orden, escritura única y edición parcial."""
import pytest

from app.core.excepciones import ErrorValidacion
from app.models import Representante
from app.services.actores_service import formulario_representante
from app.services.formularios import EstadoFormulario
from app.services.repositorio import Repositorio

API = "/api/v1"

ESTUDIANTE = {
    "nombre_completo": "Valentina Zambrano",
    "cedula": "0912345678",
    "fecha_nacimiento": "2010-09-30",
    "genero": "Femenino",
    "curso": "DÉCIMO EGB",
    "paralelo": "B",
    "condicion_especial": "",
}


async def test_crear_y_obtener_estudiante(client, representante):
    r = await client.post(f"{API}/estudiantes", json={**ESTUDIANTE, "representante_id": representante})
    assert r.status_code == 201
    estudiante_id = r.json()["id"]

    r = await client.get(f"{API}/estudiantes/{estudiante_id}")
    assert r.status_code == 200
    data = r.json()
    assert data["cedula"] == "0912345678"
    assert data["curso"] == "DÉCIMO EGB"
    assert data["representante_id"] == representante
    assert data["condicion_especial"] is None


async def test_edicion_parcial_conserva_los_demas_campos(client, estudiante):
    antes = (await client.get(f"{API}/estudiantes/{estudiante}")).json()

    r = await client.patch(f"{API}/estudiantes/{estudiante}", json={"condicion_especial": "TDAH"})
    assert r.status_code == 200
    despues = r.json()
    assert despues["condicion_especial"] == "TDAH"
    assert {k: v for k, v in despues.items() if k != "condicion_especial"} == {
        k: v for k, v in antes.items() if k != "condicion_especial"
    }

    # Repetir la misma edición no cambia nada
    r = await client.patch(f"{API}/estudiantes/{estudiante}", json={"condicion_especial": "TDAH"})
    assert r.json() == despues


async def test_edicion_invalida_no_escribe(client, estudiante):
    r = await client.patch(f"{API}/estudiantes/{estudiante}", json={"nombre_completo": "Otro", "cedula": "123"})
    assert r.status_code == 422
    r = await client.get(f"{API}/estudiantes/{estudiante}")
    assert r.json()["nombre_completo"] == "Mateo Andrade Vera"


@pytest.mark.parametrize("recurso,datos", [
    ("estudiantes", {**ESTUDIANTE, "cedula": "091234567"}),
    ("docentes", {"nombre_completo": "Carlos Vásquez", "cedula": "17abc45678"}),
    ("representantes", {"nombre_completo": "Pedro Toapanta", "cedula": "17123456789"}),
])
async def test_cedula_debe_tener_10_digitos(client, representante, recurso, datos):
    if recurso == "estudiantes":
        datos = {**datos, "representante_id": representante}
    r = await client.post(f"{API}/{recurso}", json=datos)
    assert r.status_code == 422
    assert r.json()["detail"] == "La cédula debe tener 10 dígitos."


@pytest.mark.parametrize("telefono", ["0812345678", "099123456", "09912345678", "+593991234567"])
async def test_telefono_invalido(client, telefono):
    r = await client.post(f"{API}/representantes", json={
        "nombre_completo": "Pedro Toapanta",
        "cedula": "1711111111",
        "telefono": telefono,
    })
    assert r.status_code == 422
    assert r.json()["detail"] == "El teléfono debe tener 10 dígitos y empezar con 09."


async def test_telefono_vacio_es_opcional(client):
    r = await client.post(f"{API}/representantes", json={
        "nombre_completo": "Pedro Toapanta",
        "cedula": "1711111111",
        "telefono": "",
    })
    assert r.status_code == 201
    r = await client.get(f"{API}/representantes/{r.json()['id']}")
    assert r.json()["telefono"] is None


async def test_primer_campo_obligatorio_faltante(client):
    r = await client.post(f"{API}/estudiantes", json={"cedula": "1"})
    assert r.status_code == 422
    assert r.json()["detail"] == 'El campo "nombre_completo" es obligatorio.'

    r = await client.post(f"{API}/representantes", json={"nombre_completo": "   ", "cedula": "1711111111"})
    assert r.json()["detail"] == 'El campo "nombre_completo" es obligatorio.'


async def test_cedula_duplicada(client, representante):
    r = await client.post(f"{API}/representantes", json={"nombre_completo": "Otra Persona", "cedula": "1712345678"})
    assert r.status_code == 409
    assert "1712345678" in r.json()["detail"]

    # Editar el propio registro sin cambiar la cédula está permitido
    r = await client.patch(f"{API}/representantes/{representante}", json={"direccion": "Quitumbe"})
    assert r.status_code == 200


async def test_representante_inexistente(client):
    r = await client.post(f"{API}/estudiantes", json={**ESTUDIANTE, "representante_id": 404})
    assert r.status_code == 422
    assert r.json()["detail"] == "El representante seleccionado no existe."


async def test_docente_un_tutor_por_curso(client, curso, tutor):
    r = await client.post(f"{API}/docentes", json={
        "nombre_completo": "Mónica Torres",
        "cedula": "1722222222",
        "es_tutor": True,
        "tutor_de_curso_id": curso,
    })
    assert r.status_code == 409
    assert "Lic. Jorge Salazar" in r.json()["detail"]

    r = await client.get(f"{API}/cursos/{curso}")
    assert r.json()["tutor_id"] == tutor


async def test_formulario_rechazado_vuelve_a_abierto(db):
    formulario = formulario_representante(Repositorio(db))
    formulario.abrir_creacion()
    with pytest.raises(ErrorValidacion):
        await formulario.enviar({"nombre_completo": "Rosa", "cedula": "12"})
    assert formulario.estado == EstadoFormulario.ABIERTO_CREACION
    assert formulario.error == "La cédula debe tener 10 dígitos."

    # Se corrige el campo y se vuelve a enviar
    representante_id = await formulario.enviar({"cedula": "1712345678"})
    assert formulario.estado == EstadoFormulario.CERRADO
    registro = await db.get(Representante, representante_id)
    assert registro.nombre_completo == "Rosa"


async def test_formulario_guardado_avisa(db):
    guardados = []
    formulario = formulario_representante(Repositorio(db), al_guardar=lambda i, datos: guardados.append(i))
    formulario.abrir_creacion()
    representante_id = await formulario.enviar({"nombre_completo": "Rosa", "cedula": "1712345678"})
    assert guardados == [representante_id]
