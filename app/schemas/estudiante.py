"""Esquemas para estudiantes (formulario, perfil y derivación curso/tutor)."""
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.student import Genero
from app.schemas.validaciones import cedula_valida, texto_obligatorio, texto_opcional, vacio_a_none

GENEROS = (Genero.MASCULINO, Genero.FEMENINO, Genero.OTRO)


class EstudianteForm(BaseModel):
    """Datos enviados por el formulario de estudiante. En edición solo se envía lo que cambia."""

    nombre_completo: str | None = Field(default=None, description="Nombres y apellidos")
    cedula: str | None = Field(default=None, description="Cédula de 10 dígitos")
    fecha_nacimiento: date | None = Field(default=None, description="Fecha de nacimiento")
    genero: str | None = Field(default=None, description="Masculino, Femenino u Otro")
    curso: str | None = Field(default=None, description="Nivel (ej. OCTAVO EGB)")
    paralelo: str | None = Field(default=None, description="Paralelo (ej. A)")
    representante_id: int | None = Field(default=None, description="ID del representante legal")
    tutor_id: int | None = Field(default=None, description="ID del docente tutor (opcional)")
    condicion_especial: str | None = Field(default=None, description="NEE, discapacidad u otra condición")


class EstudianteCreate(BaseModel):
    nombre_completo: str
    cedula: str
    fecha_nacimiento: date
    genero: str
    curso: str
    paralelo: str
    representante_id: int
    tutor_id: int | None = None
    condicion_especial: str | None = None

    validar_textos = field_validator("nombre_completo", "genero", "curso", "paralelo", mode="before")(
        texto_obligatorio
    )
    validar_cedula = field_validator("cedula", mode="before")(cedula_valida)
    validar_vacios = field_validator("fecha_nacimiento", "representante_id", "tutor_id", mode="before")(
        vacio_a_none
    )
    validar_condicion = field_validator("condicion_especial", mode="before")(texto_opcional)

    @field_validator("genero")
    @classmethod
    def genero_valido(cls, v: str) -> str:
        if v not in GENEROS:
            raise ValueError("El género debe ser Masculino, Femenino u Otro.")
        return v

    @field_validator("fecha_nacimiento")
    @classmethod
    def fecha_no_futura(cls, v: date) -> date:
        if v > date.today():
            raise ValueError("La fecha de nacimiento no puede ser futura.")
        return v


class EstudianteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nombre_completo: str
    cedula: str
    fecha_nacimiento: date
    genero: str
    curso: str
    paralelo: str
    representante_id: int
    tutor_id: int | None = None
    condicion_especial: str | None = None


# ── Perfil individual ─────────────────────────────────────────────


class PerfilRepresentante(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nombre_completo: str
    cedula: str
    telefono: str | None = None


class PerfilTutor(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nombre_completo: str
    email: str | None = None
    telefono: str | None = None


class PerfilCurso(BaseModel):
    id: int | None = None
    nombre: str
    paralelo: str
    jornada: str | None = None


class PerfilCaso(BaseModel):
    id: int
    codigo: str
    categoria: str
    estado: str
    prioridad: str
    fecha_apertura: date
    semaforo: str


class EstudiantePerfilResponse(BaseModel):
    """Estudiante con representante, tutor, curso y casos."""

    estudiante: EstudianteOut
    edad: int | None = Field(default=None, description="Edad calculada desde fecha_nacimiento")
    representante: PerfilRepresentante | None = None
    tutor: PerfilTutor | None = None
    curso: PerfilCurso
    casos: list[PerfilCaso] = Field(default_factory=list)


# ── Derivación curso <-> tutor ───────────────────────────────────


class DerivarRequest(BaseModel):
    campo: str = Field(description="Campo que cambió: curso, paralelo o tutor_id")
    formulario: dict = Field(
        description="Estado actual del formulario (con el nuevo valor). Claves: curso, paralelo, tutor_id"
    )


class DerivarResponse(BaseModel):
    parche: dict = Field(default_factory=dict, description="Campos a sobrescribir en el formulario")
