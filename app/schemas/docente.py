"""Esquemas para docentes."""
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.schemas.validaciones import cedula_valida, telefono_valido, texto_obligatorio, texto_opcional, vacio_a_none


class DocenteForm(BaseModel):
    nombre_completo: str | None = Field(default=None, description="Nombres y apellidos")
    cedula: str | None = Field(default=None, description="Cédula de 10 dígitos")
    email: str | None = Field(default=None, description="Correo institucional")
    telefono: str | None = Field(default=None, description="Celular 09xxxxxxxx")
    es_tutor: bool | None = Field(default=None, description="True si es tutor de un curso")
    tutor_de_curso_id: int | None = Field(default=None, description="Curso que tutela (solo si es_tutor)")


class DocenteCreate(BaseModel):
    nombre_completo: str
    cedula: str
    email: str | None = None
    telefono: str | None = None
    es_tutor: bool = False
    tutor_de_curso_id: int | None = None

    validar_nombre = field_validator("nombre_completo", mode="before")(texto_obligatorio)
    validar_cedula = field_validator("cedula", mode="before")(cedula_valida)
    validar_email = field_validator("email", mode="before")(texto_opcional)
    validar_telefono = field_validator("telefono", mode="before")(telefono_valido)
    validar_curso = field_validator("tutor_de_curso_id", mode="before")(vacio_a_none)

    @field_validator("email")
    @classmethod
    def email_valido(cls, v: str | None) -> str | None:
        if v is not None and "@" not in v:
            raise ValueError("El correo electrónico no es válido.")
        return v

    @model_validator(mode="after")
    def solo_tutor_tiene_curso(self):
        if not self.es_tutor:
            self.tutor_de_curso_id = None
        return self


class DocenteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nombre_completo: str
    cedula: str
    email: str | None = None
    telefono: str | None = None
    es_tutor: bool
    tutor_de_curso_id: int | None = None
