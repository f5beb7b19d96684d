"""Esquemas para actividades preventivas."""
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.models.actividad_preventiva import PublicoActividad
from app.schemas.validaciones import hora_valida, texto_obligatorio, texto_opcional, vacio_a_none

PUBLICOS = (
    PublicoActividad.ESTUDIANTES,
    PublicoActividad.PADRES,
    PublicoActividad.DOCENTES,
    PublicoActividad.AUTORIDADES,
)


class ActividadForm(BaseModel):
    tema: str | None = Field(default=None, description="Tema de la actividad")
    descripcion: str | None = None
    fecha: date | None = Field(default=None, description="Fecha de inicio")
    fecha_fin: date | None = Field(default=None, description="Fecha de fin (actividades de varios días)")
    hora_inicio: str | None = Field(default=None, description="HH:MM")
    hora_fin: str | None = Field(default=None, description="HH:MM")
    publico: list[str] | None = Field(default=None, description="Estudiantes, Padres, Docentes, Autoridades")
    institucion_cooperante: str | None = None
    asistentes_hombres: int | None = Field(default=None, ge=0)
    asistentes_mujeres: int | None = Field(default=None, ge=0)
    asistentes_padres: int | None = Field(default=None, ge=0)
    asistentes_docentes: int | None = Field(default=None, ge=0)
    asistentes_directivos: int | None = Field(default=None, ge=0)
    ejecutada: bool | None = None
    resultados: str | None = None


class ActividadCreate(BaseModel):
    tema: str
    descripcion: str | None = None
    fecha: date
    fecha_fin: date | None = None
    hora_inicio: str
    hora_fin: str
    publico: list[str] = Field(default_factory=list)
    institucion_cooperante: str | None = None
    asistentes_hombres: int = Field(default=0, ge=0)
    asistentes_mujeres: int = Field(default=0, ge=0)
    asistentes_padres: int = Field(default=0, ge=0)
    asistentes_docentes: int = Field(default=0, ge=0)
    asistentes_directivos: int = Field(default=0, ge=0)
    ejecutada: bool = False
    resultados: str | None = None

    validar_tema = field_validator("tema", mode="before")(texto_obligatorio)
    validar_fechas = field_validator("fecha", "fecha_fin", mode="before")(vacio_a_none)
    validar_horas = field_validator("hora_inicio", "hora_fin", mode="before")(hora_valida)
    validar_opcionales = field_validator(
        "descripcion", "institucion_cooperante", "resultados", mode="before"
    )(texto_opcional)

    @field_validator("asistentes_hombres", "asistentes_mujeres", "asistentes_padres",
                     "asistentes_docentes", "asistentes_directivos", mode="before")
    @classmethod
    def conteo_por_defecto(cls, v):
        return 0 if v in (None, "") else v

    @field_validator("publico", mode="before")
    @classmethod
    def publico_valido(cls, v):
        if v is None:
            return []
        for p in v:
            if p not in PUBLICOS:
                raise ValueError(f'Público no válido: "{p}".')
        return list(dict.fromkeys(v))

    @model_validator(mode="after")
    def rangos_validos(self):
        if self.fecha_fin is not None and self.fecha_fin < self.fecha:
            raise ValueError("La fecha de fin no puede ser anterior a la fecha de inicio.")
        if self.hora_fin <= self.hora_inicio:
            raise ValueError("La hora de fin debe ser posterior a la hora de inicio.")
        return self


class ActividadOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    tema: str
    descripcion: str | None = None
    fecha: date
    fecha_fin: date | None = None
    hora_inicio: str
    hora_fin: str
    publico: list[str] = Field(default_factory=list)
    institucion_cooperante: str | None = None
    asistentes_hombres: int
    asistentes_mujeres: int
    asistentes_padres: int
    asistentes_docentes: int
    asistentes_directivos: int
    total_asistentes: int
    ejecutada: bool
    resultados: str | None = None
