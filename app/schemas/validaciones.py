"""Reglas de formato compartidas por los esquemas de formulario."""
import re

from pydantic import ValidationError, ValidationInfo

CEDULA_RE = re.compile(r"^\d{10}$")
TELEFONO_RE = re.compile(r"^09\d{8}$")
HORA_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

MENSAJE_CEDULA = "La cédula debe tener 10 dígitos."
MENSAJE_TELEFONO = "El teléfono debe tener 10 dígitos y empezar con 09."
MENSAJE_HORA = "La hora debe tener el formato HH:MM."


def mensaje_obligatorio(campo: str) -> str:
    return f'El campo "{campo}" es obligatorio.'


def texto_obligatorio(v, info: ValidationInfo):
    """Rechaza None y cadenas vacías; devuelve el texto sin espacios extremos."""
    if v is None or (isinstance(v, str) and not v.strip()):
        raise ValueError(mensaje_obligatorio(info.field_name))
    return v.strip() if isinstance(v, str) else v


def texto_opcional(v):
    """Cadena vacía se guarda como None."""
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v


def cedula_valida(v, info: ValidationInfo):
    if v is None or (isinstance(v, str) and not v.strip()):
        raise ValueError(mensaje_obligatorio(info.field_name))
    v = str(v).strip()
    if not CEDULA_RE.match(v):
        raise ValueError(MENSAJE_CEDULA)
    return v


def telefono_valido(v):
    """Teléfono opcional; si viene, debe ser celular ecuatoriano (09xxxxxxxx)."""
    if v is None:
        return None
    v = str(v).strip()
    if not v:
        return None
    if not TELEFONO_RE.match(v):
        raise ValueError(MENSAJE_TELEFONO)
    return v


def hora_valida(v, info: ValidationInfo):
    if v is None or (isinstance(v, str) and not v.strip()):
        raise ValueError(mensaje_obligatorio(info.field_name))
    v = str(v).strip()
    if not HORA_RE.match(v):
        raise ValueError(MENSAJE_HORA)
    return v


def primer_error(exc: ValidationError) -> str:
    """Mensaje en español de la primera regla que falló (orden de campos)."""
    errores = exc.errors()
    if not errores:
        return "Datos inválidos."
    return mensaje_de_error(errores[0])


def mensaje_de_error(error: dict) -> str:
    loc = [p for p in error.get("loc", ()) if p != "body"]
    campo = str(loc[-1]) if loc else "datos"
    if error.get("type") == "missing" or (
        error.get("input") is None and error.get("type") != "value_error"
    ):
        return mensaje_obligatorio(campo)
    if error.get("type") == "value_error":
        mensaje = str(error.get("msg", ""))
        if mensaje.startswith("Value error, "):
            mensaje = mensaje[len("Value error, "):]
        return mensaje
    return f'El campo "{campo}" tiene un valor inválido.'


def vacio_a_none(v):
    """Los formularios envían "" en selectores y fechas sin valor."""
    if isinstance(v, str) and not v.strip():
        return None
    return v
