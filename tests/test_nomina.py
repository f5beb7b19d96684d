"""Importación de la nómina desde CSV/Excel y registro de estudiantes a partir de ella."""
from io import BytesIO

import pandas as pd

API = "/api/v1"

ENCABEZADO = "cedula,nombre_completo,curso,paralelo,cedula_representante,nombre_representante"


def _csv(*filas: str) -> bytes:
    return "\n".join([ENCABEZADO, *filas]).encode("utf-8")


async def _importar(client, contenido: bytes, nombre="nomina.csv", tipo="text/csv"):
    return await client.post(f"{API}/nomina/importar", files={"archivo": (nombre, contenido, tipo)})


async def test_importar_omite_cedulas_registradas(client):
    r = await _importar(client, _csv(
        "1711111111,Ana Quishpe,OCTAVO EGB,A,1722222222,Luis Quishpe",
        "1733333333,Diego Morales,OCTAVO EGB,A,1744444444,Carmen Morales",
    ))
    assert r.status_code == 201
    assert r.json()["agregados"] == 2

    # 5 filas, 2 con cédula ya registrada
    r = await _importar(client, _csv(
        "1711111111,Ana Quishpe,OCTAVO EGB,A,1722222222,Luis Quishpe",
        "1755555555,Sofía Chiluisa,NOVENO EGB,B,1766666666,Marta Chiluisa",
        "1733333333,Diego Morales,OCTAVO EGB,A,1744444444,Carmen Morales",
        "0177777777,Camila Vera,DÉCIMO EGB,A,0188888888,Jorge Vera",
        "1799999999,Andrés López,DÉCIMO EGB,A,1700000000,Patricia López",
    ))
    resultado = r.json()
    assert resultado["total_filas"] == 5
    assert resultado["agregados"] == 3
    assert resultado["omitidos"] == 2
    assert resultado["errores"] == []

    r = await client.get(f"{API}/nomina")
    cedulas = {fila["cedula"] for fila in r.json()}
    assert len(cedulas) == 5
    # Los ceros a la izquierda se conservan
    assert "0177777777" in cedulas


async def test_importar_omite_duplicados_del_mismo_archivo_y_filas_sin_cedula(client):
    r = await _importar(client, _csv(
        "1711111111,Ana Quishpe,OCTAVO EGB,A,1722222222,Luis Quishpe",
        "1711111111,Ana Quishpe,OCTAVO EGB,A,1722222222,Luis Quishpe",
        ",Sin Cédula,OCTAVO EGB,A,,",
    ))
    assert r.json()["agregados"] == 1
    assert r.json()["omitidos"] == 2


async def test_importar_reporta_filas_invalidas(client):
    r = await _importar(client, _csv(
        "171111,Ana Quishpe,OCTAVO EGB,A,1722222222,Luis Quishpe",
        "1733333333,,OCTAVO EGB,A,1744444444,Carmen Morales",
        "1755555555,Sofía Chiluisa,NOVENO EGB,B,1766666666,Marta Chiluisa",
    ))
    resultado = r.json()
    assert resultado["agregados"] == 1
    assert [(e["fila"], e["mensaje"]) for e in resultado["errores"]] == [
        (1, "La cédula debe tener 10 dígitos."),
        (2, 'El campo "nombre_completo" es obligatorio.'),
    ]


async def test_importar_excel(client):
    df = pd.DataFrame([{
        "Cedula": "0912345678",
        "Nombre_Completo": "Isabella Ramírez",
        "Curso": "PRIMERO BGU",
        "Paralelo": "A",
        "Cedula_Representante": "0923456789",
        "Nombre_Representante": "Gabriela Ramírez",
    }])
    buf = BytesIO()
    df.to_excel(buf, index=False, engine="openpyxl")
    r = await _importar(
        client, buf.getvalue(), nombre="nomina.xlsx",
        tipo="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )
    assert r.status_code == 201
    assert r.json()["agregados"] == 1
    r = await client.get(f"{API}/nomina")
    assert r.json()[0]["cedula"] == "0912345678"


async def test_importar_rechaza_archivo_sin_columnas(client):
    r = await _importar(client, b"cedula,nombre\n1711111111,Ana\n")
    assert r.status_code == 422
    assert r.json()["detail"] == (
        "Faltan columnas obligatorias: nombre_completo, curso, paralelo, "
        "cedula_representante, nombre_representante"
    )


async def test_importar_rechaza_extension(client):
    r = await _importar(client, b"hola", nombre="nomina.txt", tipo="text/plain")
    assert r.status_code == 422
    assert ".csv o .xlsx" in r.json()["detail"]


async def test_plantilla(client):
    r = await client.get(f"{API}/nomina/plantilla")
    assert r.status_code == 200
    assert r.content.startswith(b"\xef\xbb\xbf")
    assert r.content.decode("utf-8-sig").strip() == (
        '"cedula","nombre_completo","curso","paralelo","cedula_representante","nombre_representante"'
    )


async def test_registrar_estudiante_desde_nomina(client):
    await _importar(client, _csv("1711111111,Ana Quishpe,OCTAVO EGB,A,1722222222,Luis Quishpe"))
    registro = (await client.get(f"{API}/nomina")).json()[0]

    datos = {"fecha_nacimiento": "2012-08-20", "genero": "Femenino", "telefono_representante": "0998765432"}
    r = await client.post(f"{API}/nomina/{registro['id']}/estudiante", json=datos)
    assert r.status_code == 201
    estudiante_id = r.json()["id"]

    r = await client.get(f"{API}/estudiantes/{estudiante_id}/perfil")
    perfil = r.json()
    assert perfil["estudiante"]["cedula"] == "1711111111"
    assert perfil["representante"]["cedula"] == "1722222222"
    assert perfil["representante"]["telefono"] == "0998765432"

    r = await client.get(f"{API}/nomina", params={"estado": "Creado"})
    assert [fila["id"] for fila in r.json()] == [registro["id"]]

    r = await client.post(f"{API}/nomina/{registro['id']}/estudiante", json=datos)
    assert r.status_code == 409


async def test_registrar_desde_nomina_reutiliza_representante(client, representante):
    await _importar(client, _csv("1711111111,Ana Andrade,OCTAVO EGB,A,1712345678,Rosa Andrade Vera"))
    registro = (await client.get(f"{API}/nomina")).json()[0]

    r = await client.post(f"{API}/nomina/{registro['id']}/estudiante", json={
        "fecha_nacimiento": "2012-08-20", "genero": "Femenino",
    })
    assert r.status_code == 201
    r = await client.get(f"{API}/representantes/{representante}/perfil")
    assert [e["cedula"] for e in r.json()["estudiantes"]] == ["1711111111"]


async def test_registrar_desde_nomina_sin_datos_obligatorios(client):
    await _importar(client, _csv("1711111111,Ana Quishpe,OCTAVO EGB,A,1722222222,Luis Quishpe"))
    registro = (await client.get(f"{API}/nomina")).json()[0]

    r = await client.post(f"{API}/nomina/{registro['id']}/estudiante", json={"genero": "Femenino"})
    assert r.status_code == 422
    assert r.json()["detail"] == 'El campo "fecha_nacimiento" es obligatorio.'

    r = await client.get(f"{API}/nomina")
    assert r.json()[0]["estado"] == "Pendiente"
