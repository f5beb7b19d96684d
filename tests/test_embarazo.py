"""Embarazo, maternidad y lactancia: fechas derivadas y estado."""
from datetime import date
from types import SimpleNamespace

from app.schemas.embarazo import EmbarazoCreate
from app.schemas.institucion import DuracionPermiso
from app.services.embarazo_service import estado_embarazo, fechas_derivadas, sumar_duracion

API = "/api/v1"

MATERNIDAD = DuracionPermiso(duracion=90, unidad="días")
LACTANCIA = DuracionPermiso(duracion=12, unidad="meses")


def test_sumar_duracion():
    inicio = date(2025, 1, 31)
    assert sumar_duracion(inicio, DuracionPermiso(duracion=10, unidad="días")) == date(2025, 2, 10)
    assert sumar_duracion(inicio, DuracionPermiso(duracion=2, unidad="semanas")) == date(2025, 2, 14)
    assert sumar_duracion(inicio, DuracionPermiso(duracion=1, unidad="meses")) == date(2025, 2, 28)
    assert sumar_duracion(date(2024, 2, 29), DuracionPermiso(duracion=1, unidad="años")) == date(2025, 2, 28)


def test_fechas_derivadas_desde_el_parto():
    datos = EmbarazoCreate(estudiante_id=1, fecha_inicio_embarazo=date(2025, 1, 1), fecha_parto=date(2025, 10, 1))
    derivados = fechas_derivadas(datos, MATERNIDAD, LACTANCIA)
    assert derivados == {
        "fecha_probable_parto": date(2025, 10, 8),
        "inicio_permiso_maternidad": date(2025, 10, 1),
        "fin_permiso_maternidad": date(2025, 12, 30),
        "inicio_permiso_lactancia": date(2025, 12, 30),
        "fin_permiso_lactancia": date(2026, 12, 30),
    }


def test_fechas_derivadas_sin_parto():
    datos = EmbarazoCreate(estudiante_id=1, fecha_inicio_embarazo=date(2025, 1, 1))
    derivados = fechas_derivadas(datos, MATERNIDAD, LACTANCIA)
    assert derivados["fecha_probable_parto"] == date(2025, 10, 8)
    assert derivados["fin_permiso_maternidad"] is None
    assert derivados["fin_permiso_lactancia"] is None


def test_inicio_de_permisos_explicito():
    datos = EmbarazoCreate(
        estudiante_id=1,
        fecha_inicio_embarazo=date(2025, 1, 1),
        fecha_parto=date(2025, 10, 1),
        inicio_permiso_maternidad=date(2025, 9, 15),
        inicio_permiso_lactancia=date(2026, 1, 5),
    )
    derivados = fechas_derivadas(datos, MATERNIDAD, LACTANCIA)
    assert derivados["fin_permiso_maternidad"] == date(2025, 12, 14)
    assert derivados["fin_permiso_lactancia"] == date(2027, 1, 5)


def _registro(**campos):
    base = dict(
        fecha_inicio_embarazo=None, fecha_parto=None,
        inicio_permiso_maternidad=None, inicio_permiso_lactancia=None, fin_permiso_lactancia=None,
    )
    return SimpleNamespace(**{**base, **campos})


def test_estado_embarazo():
    hoy = date(2025, 6, 10)
    assert estado_embarazo(_registro(), hoy) == "Registro Incompleto"
    assert estado_embarazo(_registro(fecha_inicio_embarazo=date(2025, 4, 1)), hoy) == "Gestación (10 sem)"
    assert estado_embarazo(_registro(fecha_inicio_embarazo=date(2024, 8, 1)), hoy) == "40 semanas cumplidas"
    assert estado_embarazo(_registro(fecha_parto=date(2025, 6, 1), inicio_permiso_maternidad=date(2025, 6, 20)), hoy) == "Post-parto"
    assert estado_embarazo(_registro(fecha_parto=date(2025, 6, 1), inicio_permiso_maternidad=date(2025, 6, 1)), hoy) == "Permiso Maternidad"
    assert estado_embarazo(_registro(inicio_permiso_lactancia=date(2025, 6, 1), fin_permiso_lactancia=date(2026, 6, 1)), hoy) == "Permiso Lactancia"
    assert estado_embarazo(_registro(inicio_permiso_lactancia=date(2024, 6, 1), fin_permiso_lactancia=date(2025, 6, 1)), hoy) == "Finalizado"


async def test_registrar_embarazo(client, estudiante):
    r = await client.post(f"{API}/embarazos", json={
        "estudiante_id": estudiante,
        "fecha_inicio_embarazo": "2025-01-01",
        "fecha_parto": "2025-10-01",
        "alto_riesgo": True,
    })
    assert r.status_code == 201
    data = r.json()
    assert data["fecha_probable_parto"] == "2025-10-08"
    assert data["fin_permiso_maternidad"] == "2025-12-30"
    assert data["fin_permiso_lactancia"] == "2026-12-30"
    assert data["estudiante_nombre"] == "Mateo Andrade Vera"
    assert data["atencion_salud"] == "Ninguna"

    # La estudiante con registro de embarazo no se puede eliminar
    r = await client.delete(f"{API}/estudiantes/{estudiante}")
    assert r.status_code == 409
    assert "embarazo" in r.json()["detail"]


async def test_permisos_configurados(client, estudiante):
    r = await client.put(f"{API}/configuracion/permisos", json={"valor": {
        "maternidad": {"duracion": 12, "unidad": "semanas"},
        "lactancia": {"duracion": 1, "unidad": "años"},
    }})
    assert r.status_code == 200

    r = await client.post(f"{API}/embarazos", json={
        "estudiante_id": estudiante,
        "fecha_inicio_embarazo": "2025-01-01",
        "fecha_parto": "2025-10-01",
    })
    assert r.json()["fin_permiso_maternidad"] == "2025-12-24"
    assert r.json()["fin_permiso_lactancia"] == "2026-12-24"


async def test_parto_anterior_al_inicio(client, estudiante):
    r = await client.post(f"{API}/embarazos", json={
        "estudiante_id": estudiante,
        "fecha_inicio_embarazo": "2025-05-01",
        "fecha_parto": "2025-04-01",
    })
    assert r.status_code == 422


async def test_caso_relacionado_de_otra_estudiante(client, caso, representante):
    r = await client.post(f"{API}/estudiantes", json={
        "nombre_completo": "Daniela Vera",
        "cedula": "1798765432",
        "fecha_nacimiento": "2009-01-10",
        "genero": "Femenino",
        "curso": "PRIMERO BGU",
        "paralelo": "A",
        "representante_id": representante,
    })
    otra = r.json()["id"]
    r = await client.post(f"{API}/embarazos", json={
        "estudiante_id": otra,
        "caso_relacionado_id": caso["id"],
        "fecha_inicio_embarazo": "2025-01-01",
    })
    assert r.status_code == 422
    assert r.json()["detail"] == "El caso relacionado debe pertenecer a la misma estudiante."
