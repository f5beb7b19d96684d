"""Esquemas para representantes."""
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.validaciones import cedula_valida, telefono_valido, texto_obligatorio, texto_opcional


class RepresentanteForm(BaseModel):
    """Datos enviados por el formulario (alta o edición parcial)."""

    nombre_completo: str | None = Field(default=None, description="Nombres y apellidos")
    cedula: str | None = Field(default=None, description="Cédula de 10 dígitos")
    edad: int | None = Field(default=None, ge=0, description="Edad en años")
    telefono: str | None = Field(default=None, description="Celular 09xxxxxxxx")
    direccion: str | None = Field(default=None, description="Dirección domiciliaria")


class RepresentanteCreate(BaseModel):
    """Registro completo validado por el formulario."""

    nombre_completo: str
    cedula: str
    edad: int | None = None
    telefono: str | None = None
    direccion: str | None = None

    validar_nombre = field_validator("nombre_completo", mode="before")(texto_obligatorio)
    validar_cedula = field_validator("cedula", mode="before")(cedula_valida)
    validar_telefono = field_validator("telefono", mode="before")(telefono_valido)
    validar_direccion = field_validator("direccion", mode="before")(texto_opcional)


class RepresentanteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nombre_completo: str
    cedula: str
    edad: int | None = None
    telefono: str | None = None
    direccion: str | None = None


class RepresentanteEstudianteItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nombre_completo: str
    cedula: str
    curso: str
    paralelo: str


class RepresentantePerfil(BaseModel):
    """Representante con los estudiantes a su cargo."""

    representante: RepresentanteOut
    estudiantes: list[RepresentanteEstudianteItem] = Field(default_factory=list)
