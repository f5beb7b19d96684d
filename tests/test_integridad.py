"""Eliminación con registros dependientes: bloqueos y eliminación efectiva."""

API = "/api/v1"


async def test_representante_con_estudiantes_no_se_elimina(client, representante, estudiante):
    r = await client.get(f"{API}/representantes/{representante}/puede-eliminar")
    assert r.status_code == 200
    assert r.json()["permitido"] is False
    assert r.json()["cantidad_bloqueante"] == 1

    r = await client.delete(f"{API}/representantes/{representante}")
    assert r.status_code == 409
    body = r.json()
    assert body["cantidad_bloqueante"] == 1
    assert "Rosa Andrade Vera" in body["detail"]
    assert "1 estudiante(s)" in body["detail"]

    r = await client.get(f"{API}/representantes/{representante}")
    assert r.status_code == 200


async def test_representante_sin_estudiantes_se_elimina(client, representante):
    r = await client.get(f"{API}/representantes/{representante}/puede-eliminar")
    assert r.json() == {"permitido": True, "motivo": None, "cantidad_bloqueante": 0}

    r = await client.delete(f"{API}/representantes/{representante}")
    assert r.status_code == 200

    r = await client.get(f"{API}/representantes/{representante}")
    assert r.status_code == 404


async def test_eliminar_inexistente_es_404(client):
    r = await client.delete(f"{API}/representantes/999")
    assert r.status_code == 404


async def test_docente_tutor_bloqueado_hasta_reasignar(client, tutor):
    r = await client.delete(f"{API}/docentes/{tutor}")
    assert r.status_code == 409
    assert r.json()["cantidad_bloqueante"] == 1
    assert 'OCTAVO EGB "A"' in r.json()["detail"]

    # Al dejar de ser tutor se limpia el curso asignado
    r = await client.patch(f"{API}/docentes/{tutor}", json={"es_tutor": False})
    assert r.status_code == 200
    assert r.json()["tutor_de_curso_id"] is None

    r = await client.delete(f"{API}/docentes/{tutor}")
    assert r.status_code == 200


async def test_docente_con_tutorados_bloqueado(client, representante):
    r = await client.post(f"{API}/docentes", json={"nombre_completo": "Ana Cevallos", "cedula": "1700000001"})
    docente = r.json()["id"]
    r = await client.post(f"{API}/estudiantes", json={
        "nombre_completo": "Lucía Guamán",
        "cedula": "1700000002",
        "fecha_nacimiento": "2011-02-01",
        "genero": "Femenino",
        "curso": "NOVENO EGB",
        "paralelo": "B",
        "representante_id": representante,
        "tutor_id": docente,
    })
    assert r.status_code == 201

    r = await client.delete(f"{API}/docentes/{docente}")
    assert r.status_code == 409
    assert r.json()["cantidad_bloqueante"] == 1
    assert "tutor a 1 estudiante(s)" in r.json()["detail"]


async def test_curso_con_estudiantes_no_se_elimina_ni_renombra(client, curso, estudiante):
    r = await client.delete(f"{API}/cursos/{curso}")
    assert r.status_code == 409
    assert r.json()["cantidad_bloqueante"] == 1

    r = await client.patch(f"{API}/cursos/{curso}", json={"paralelo": "C"})
    assert r.status_code == 409
    assert "renombrar" in r.json()["detail"]

    # Cambiar la jornada no afecta al par (curso, paralelo)
    r = await client.patch(f"{API}/cursos/{curso}", json={"jornada": "Vespertina"})
    assert r.status_code == 200
    assert r.json()["jornada"] == "Vespertina"


async def test_curso_con_tutor_no_se_elimina(client, curso, tutor):
    r = await client.delete(f"{API}/cursos/{curso}")
    assert r.status_code == 409
    assert "tutor" in r.json()["detail"]


async def test_curso_vacio_se_elimina(client, curso):
    r = await client.delete(f"{API}/cursos/{curso}")
    assert r.status_code == 200
    r = await client.get(f"{API}/cursos/{curso}")
    assert r.status_code == 404


async def test_categoria_protegida_no_se_elimina(client, categorias):
    r = await client.get(f"{API}/categorias")
    por_nombre = {c["nombre"]: c for c in r.json()}

    violencia = por_nombre["Violencia Sexual"]
    assert violencia["protegida"] is True
    r = await client.delete(f"{API}/categorias/{violencia['id']}")
    assert r.status_code == 409
    assert "protegida" in r.json()["detail"]

    otros = por_nombre["Otros"]
    r = await client.delete(f"{API}/categorias/{otros['id']}")
    assert r.status_code == 200


async def test_categoria_en_uso_no_se_elimina(client, caso):
    r = await client.get(f"{API}/categorias")
    categoria = next(c for c in r.json() if c["nombre"] == "Conflictos familiares")

    r = await client.delete(f"{API}/categorias/{categoria['id']}")
    assert r.status_code == 409
    assert r.json()["cantidad_bloqueante"] == 1

    r = await client.patch(f"{API}/categorias/{categoria['id']}", json={"nombre": "Familia"})
    assert r.status_code == 409


async def test_estudiante_con_caso_no_se_elimina(client, estudiante, caso):
    r = await client.delete(f"{API}/estudiantes/{estudiante}")
    assert r.status_code == 409
    assert "expediente(s)" in r.json()["detail"]


async def test_eliminar_caso_elimina_sus_seguimientos(client, caso):
    r = await client.post(f"{API}/seguimientos", json={
        "caso_id": caso["id"],
        "fecha": "2025-03-12",
        "descripcion": "Entrevista inicial",
        "responsable": "Psic. Morales",
    })
    seguimiento = r.json()["id"]

    r = await client.delete(f"{API}/casos/{caso['id']}")
    assert r.status_code == 200
    r = await client.get(f"{API}/seguimientos/{seguimiento}")
    assert r.status_code == 404


async def test_caso_con_cita_no_se_elimina(client, estudiante, caso):
    r = await client.post(f"{API}/citas", json={
        "fecha": "2030-03-04",
        "hora_inicio": "09:00",
        "tipo_asistente": "Estudiante",
        "asistente_id": estudiante,
        "motivo": "Seguimiento",
    })
    assert r.status_code == 201
    assert r.json()["caso_id"] == caso["id"]

    r = await client.delete(f"{API}/casos/{caso['id']}")
    assert r.status_code == 409
    assert r.json()["cantidad_bloqueante"] == 1


async def _agendar(client, tipo, asistente_id, hora, **extra):
    r = await client.post(f"{API}/citas", json={
        "fecha": "2030-03-04",
        "hora_inicio": hora,
        "tipo_asistente": tipo,
        "asistente_id": asistente_id,
        "motivo": "Entrevista",
        **extra,
    })
    assert r.status_code == 201, r.text
    return r.json()


async def test_estudiante_con_cita_no_se_elimina(client, estudiante):
    cita = await _agendar(client, "Estudiante", estudiante, "09:00")

    r = await client.get(f"{API}/estudiantes/{estudiante}/puede-eliminar")
    assert r.json()["permitido"] is False
    assert r.json()["cantidad_bloqueante"] == 1

    r = await client.delete(f"{API}/estudiantes/{estudiante}")
    assert r.status_code == 409
    assert "1 cita(s)" in r.json()["detail"]

    await client.delete(f"{API}/citas/{cita['id']}")
    r = await client.delete(f"{API}/estudiantes/{estudiante}")
    assert r.status_code == 200


async def test_representante_con_cita_no_se_elimina(client, representante, estudiante):
    await _agendar(client, "Representante", representante, "10:00", estudiante_id=estudiante)

    # El estudiante pasa a otro representante; la cita sigue a nombre del primero
    r = await client.post(f"{API}/representantes", json={
        "nombre_completo": "Luis Andrade Paz",
        "cedula": "1700000003",
    })
    otro = r.json()["id"]
    r = await client.patch(f"{API}/estudiantes/{estudiante}", json={"representante_id": otro})
    assert r.status_code == 200

    r = await client.delete(f"{API}/representantes/{representante}")
    assert r.status_code == 409
    assert r.json()["cantidad_bloqueante"] == 1
    assert "cita(s)" in r.json()["detail"]

    # La cita del representante también nombra al estudiante
    r = await client.delete(f"{API}/estudiantes/{estudiante}")
    assert r.status_code == 409
    assert "cita(s)" in r.json()["detail"]


async def test_docente_con_cita_no_se_elimina(client):
    r = await client.post(f"{API}/docentes", json={"nombre_completo": "Ana Cevallos", "cedula": "1700000001"})
    docente = r.json()["id"]
    await _agendar(client, "Docente", docente, "11:00")

    r = await client.delete(f"{API}/docentes/{docente}")
    assert r.status_code == 409
    assert r.json()["detail"].startswith('No se puede eliminar a "Ana Cevallos" porque tiene 1 cita(s)')
