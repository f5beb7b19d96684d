"""Casos de embarazo: fechas derivadas de permisos y etiqueta de estado."""
from datetime import date, timedelta

import pandas as pd

from app.core.excepciones import ErrorValidacion
from app.models import Caso, CasoEmbarazo, Estudiante
from app.schemas.embarazo import EmbarazoCreate, EmbarazoOut
from app.schemas.institucion import DuracionPermiso
from app.services.configuracion_service import obtener_permisos
from app.services.formularios import Formulario
from app.services.repositorio import Repositorio

DIAS_GESTACION = 280


def sumar_duracion(inicio: date, permiso: DuracionPermiso) -> date:
    """Fin de un permiso que empieza en `inicio` (días, semanas, meses o años)."""
    if permiso.unidad == "días":
        return inicio + timedelta(days=permiso.duracion)
    if permiso.unidad == "semanas":
        return inicio + timedelta(weeks=permiso.duracion)
    desplazamiento = (
        pd.DateOffset(months=permiso.duracion)
        if permiso.unidad == "meses"
        else pd.DateOffset(years=permiso.duracion)
    )
    return (pd.Timestamp(inicio) + desplazamiento).date()


def fechas_derivadas(datos: EmbarazoCreate, maternidad: DuracionPermiso, lactancia: DuracionPermiso) -> dict:
    derivados = {
        "fecha_probable_parto": datos.fecha_inicio_embarazo + timedelta(days=DIAS_GESTACION),
        "inicio_permiso_maternidad": datos.inicio_permiso_maternidad,
        "fin_permiso_maternidad": None,
        "inicio_permiso_lactancia": datos.inicio_permiso_lactancia,
        "fin_permiso_lactancia": None,
    }
    inicio_maternidad = datos.inicio_permiso_maternidad or datos.fecha_parto
    if inicio_maternidad is not None:
        derivados["inicio_permiso_maternidad"] = inicio_maternidad
        derivados["fin_permiso_maternidad"] = sumar_duracion(inicio_maternidad, maternidad)
    inicio_lactancia = datos.inicio_permiso_lactancia or derivados["fin_permiso_maternidad"]
    if inicio_lactancia is not None:
        derivados["inicio_permiso_lactancia"] = inicio_lactancia
        derivados["fin_permiso_lactancia"] = sumar_duracion(inicio_lactancia, lactancia)
    return derivados


def estado_embarazo(registro, hoy: date | None = None) -> str:
    hoy = hoy or date.today()
    if registro.fin_permiso_lactancia and hoy > registro.fin_permiso_lactancia:
        return "Finalizado"
    if registro.inicio_permiso_lactancia and hoy >= registro.inicio_permiso_lactancia:
        return "Permiso Lactancia"
    if registro.inicio_permiso_maternidad and hoy >= registro.inicio_permiso_maternidad:
        return "Permiso Maternidad"
    if registro.fecha_parto:
        return "Post-parto"
    if registro.fecha_inicio_embarazo:
        semanas = (hoy - registro.fecha_inicio_embarazo).days // 7
        if semanas >= 40:
            return "40 semanas cumplidas"
        return f"Gestación ({semanas} sem)"
    return "Registro Incompleto"


async def _verificar_embarazo(repo: Repositorio, datos: EmbarazoCreate, registro_id):
    if await repo.obtener(Estudiante, datos.estudiante_id) is None:
        raise ErrorValidacion("La estudiante seleccionada no existe.")
    if datos.caso_relacionado_id is not None:
        caso = await repo.obtener(Caso, datos.caso_relacionado_id)
        if caso is None or caso.estudiante_id != datos.estudiante_id:
            raise ErrorValidacion("El caso relacionado debe pertenecer a la misma estudiante.")
    if datos.fecha_parto is not None and datos.fecha_parto < datos.fecha_inicio_embarazo:
        raise ErrorValidacion("La fecha de parto no puede ser anterior al inicio del embarazo.")
    permisos = await obtener_permisos(repo)
    return fechas_derivadas(datos, permisos.maternidad, permisos.lactancia)


def formulario_embarazo(repo: Repositorio, al_guardar=None) -> Formulario:
    return Formulario(
        repo, CasoEmbarazo, EmbarazoCreate, verificaciones=[_verificar_embarazo], al_guardar=al_guardar
    )


def embarazo_a_out(registro: CasoEmbarazo, estudiante_nombre: str | None = None) -> EmbarazoOut:
    datos = {c: getattr(registro, c) for c in EmbarazoOut.model_fields if hasattr(registro, c)}
    datos.update(estudiante_nombre=estudiante_nombre, estado=estado_embarazo(registro))
    return EmbarazoOut(**datos)
