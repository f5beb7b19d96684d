"""Datos de la institución (registro único) y configuración."""
API = "/api/v1"


async def test_institucion_es_registro_unico(client):
    r = await client.get(f"{API}/institucion")
    assert r.status_code == 404

    r = await client.put(f"{API}/institucion", json={"nombre": "UE Juan Montalvo", "amie": "17H00123"})
    assert r.status_code == 200
    primero = r.json()

    r = await client.put(f"{API}/institucion", json={"nombre": "UE Juan Montalvo", "distrito": "17D05"})
    assert r.json()["id"] == primero["id"]
    assert r.json()["distrito"] == "17D05"
    assert r.json()["amie"] is None


async def test_institucion_valida_telefono(client):
    r = await client.put(f"{API}/institucion", json={"nombre": "UE Quito", "telefono": "022345678"})
    assert r.status_code == 422
    assert r.json()["detail"] == "El teléfono debe tener 10 dígitos y empezar con 09."


async def test_configuracion_por_defecto(client):
    r = await client.get(f"{API}/configuracion/horario_laboral")
    assert r.json() == {"clave": "horario_laboral", "valor": {"inicio": "09:00", "fin": "18:00"}}

    r = await client.get(f"{API}/configuracion/permisos")
    assert r.json()["valor"] == {
        "maternidad": {"duracion": 90, "unidad": "días"},
        "lactancia": {"duracion": 12, "unidad": "meses"},
    }

    r = await client.get(f"{API}/configuracion/no_existe")
    assert r.status_code == 404


async def test_guardar_configuracion(client):
    r = await client.put(f"{API}/configuracion/permisos", json={"valor": {
        "maternidad": {"duracion": 3, "unidad": "meses"},
    }})
    assert r.status_code == 200
    assert r.json()["valor"]["lactancia"] == {"duracion": 12, "unidad": "meses"}

    r = await client.put(f"{API}/configuracion/permisos", json={"valor": {
        "maternidad": {"duracion": 3, "unidad": "quincenas"},
    }})
    assert r.status_code == 422
    assert r.json()["detail"] == "La unidad debe ser días, semanas, meses o años."

    r = await client.get(f"{API}/configuracion/permisos")
    assert r.json()["valor"]["maternidad"] == {"duracion": 3, "unidad": "meses"}
