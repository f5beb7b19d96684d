"""Esquemas para la nómina de estudiantes (importación CSV/Excel)."""
from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class RegistroNominaOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    cedula: str
    nombre_completo: str
    curso: str | None = None
    paralelo: str | None = None
    cedula_representante: str | None = None
    nombre_representante: str | None = None
    estado: str


class ImportacionErrorItem(BaseModel):
    """Error individual durante la importación de una fila."""

    fila: int = Field(description="Número de fila (1-indexed, sin contar encabezado)")
    cedula: str | None = Field(default=None, description="Cédula leída, si existe")
    mensaje: str = Field(description="Descripción del error")


class ImportacionNominaResponse(BaseModel):
    nombre_archivo: str = Field(description="Nombre del archivo subido")
    total_filas: int = Field(description="Filas leídas (sin encabezado)")
    agregados: int = Field(default=0, description="Registros nuevos en la nómina")
    omitidos: int = Field(default=0, description="Filas sin cédula o con cédula ya registrada")
    errores: list[ImportacionErrorItem] = Field(default_factory=list)


class CrearEstudianteDesdeNomina(BaseModel):
    """Datos que la nómina no trae y el formulario de estudiante exige."""

    fecha_nacimiento: date | None = None
    genero: str | None = None
    tutor_id: int | None = None
    condicion_especial: str | None = None
    telefono_representante: str | None = Field(default=None, description="Se usa si hay que crear al representante")
