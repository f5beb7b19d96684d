"""Esquemas para seguimientos de caso."""
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.seguimiento import TipoIntervencion, TipoParticipante
from app.schemas.validaciones import texto_obligatorio, texto_opcional, vacio_a_none

PARTICIPANTES = (
    TipoParticipante.ESTUDIANTE,
    TipoParticipante.REPRESENTANTE,
    TipoParticipante.DOCENTE,
    TipoParticipante.AUTORIDAD,
)
INTERVENCIONES = (
    TipoIntervencion.INDIVIDUAL,
    TipoIntervencion.FAMILIAR,
    TipoIntervencion.GRUPAL,
    TipoIntervencion.CRISIS,
)


class SeguimientoForm(BaseModel):
    caso_id: int | None = Field(default=None, description="ID del caso")
    fecha: date | None = Field(default=None, description="Fecha de la intervención; por defecto hoy")
    descripcion: str | None = Field(default=None, description="Qué se hizo")
    responsable: str | None = Field(default=None, description="Profesional DECE responsable")
    tipo_intervencion: str | None = Field(default=None, description="Individual, Familiar, Grupal o Crisis")
    observaciones: str | None = None
    es_efectivo: bool | None = Field(default=None, description="False excluye el seguimiento de estadísticas")
    tipos_participante: list[str] | None = Field(default=None, description="Estudiante, Representante, Docente, Autoridad")
    proxima_fecha: date | None = Field(default=None, description="Nueva fecha de vencimiento del caso")


class SeguimientoCreate(BaseModel):
    caso_id: int
    fecha: date = Field(default_factory=date.today)
    descripcion: str
    responsable: str
    tipo_intervencion: str | None = None
    observaciones: str | None = None
    es_efectivo: bool = True
    tipos_participante: list[str] = Field(default_factory=list)
    proxima_fecha: date | None = None

    validar_caso = field_validator("caso_id", "proxima_fecha", mode="before")(vacio_a_none)
    validar_textos = field_validator("descripcion", "responsable", mode="before")(texto_obligatorio)
    validar_opcionales = field_validator("tipo_intervencion", "observaciones", mode="before")(texto_opcional)

    @field_validator("fecha", mode="before")
    @classmethod
    def fecha_por_defecto(cls, v):
        return date.today() if v in (None, "") else v

    @field_validator("tipo_intervencion")
    @classmethod
    def intervencion_valida(cls, v: str | None) -> str | None:
        if v is not None and v not in INTERVENCIONES:
            raise ValueError("El tipo de intervención debe ser Individual, Familiar, Grupal o Crisis.")
        return v

    @field_validator("tipos_participante", mode="before")
    @classmethod
    def participantes_validos(cls, v):
        if v is None:
            return []
        for tipo in v:
            if tipo not in PARTICIPANTES:
                raise ValueError(f'Tipo de participante no válido: "{tipo}".')
        return list(dict.fromkeys(v))


class SeguimientoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    caso_id: int
    fecha: date
    descripcion: str
    responsable: str
    tipo_intervencion: str | None = None
    observaciones: str | None = None
    es_efectivo: bool
    tipos_participante: list[str] = Field(default_factory=list)
