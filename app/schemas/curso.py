"""Esquemas para cursos."""
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.curso import Jornada
from app.schemas.validaciones import texto_obligatorio

JORNADAS = (Jornada.MATUTINA, Jornada.VESPERTINA, Jornada.NOCTURNA)


class CursoForm(BaseModel):
    nombre: str | None = Field(default=None, description="Nivel (ej. OCTAVO EGB)")
    paralelo: str | None = Field(default=None, description="Paralelo (ej. A)")
    jornada: str | None = Field(default=None, description="Matutina, Vespertina o Nocturna")


class CursoCreate(BaseModel):
    nombre: str
    paralelo: str
    jornada: str = Jornada.MATUTINA

    validar_textos = field_validator("nombre", "paralelo", mode="before")(texto_obligatorio)

    @field_validator("jornada", mode="before")
    @classmethod
    def jornada_valida(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return Jornada.MATUTINA
        if v not in JORNADAS:
            raise ValueError("La jornada debe ser Matutina, Vespertina o Nocturna.")
        return v


class CursoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nombre: str
    paralelo: str
    jornada: str
    tutor_id: int | None = Field(default=None, description="Docente tutor del curso, si hay")
    tutor_nombre: str | None = None
