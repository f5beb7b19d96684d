"""Esquemas para la agenda de citas."""
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.cita import EstadoCita, TipoAsistente
from app.schemas.validaciones import hora_valida, texto_obligatorio, texto_opcional, vacio_a_none

TIPOS_ASISTENTE = (TipoAsistente.ESTUDIANTE, TipoAsistente.REPRESENTANTE, TipoAsistente.DOCENTE)
ESTADOS_CITA = (EstadoCita.PROGRAMADA, EstadoCita.REALIZADA, EstadoCita.CANCELADA)


class CitaForm(BaseModel):
    fecha: date | None = Field(default=None, description="Día de la cita")
    hora_inicio: str | None = Field(default=None, description="Horario disponible HH:MM")
    tipo_asistente: str | None = Field(default=None, description="Estudiante, Representante o Docente")
    asistente_id: int | None = Field(default=None, description="ID del asistente en su tabla")
    motivo: str | None = Field(default=None, description="Motivo de la cita")
    tipo: str | None = Field(default=None, description="Tipo de atención (ej. Seguimiento, Primera vez)")
    estudiante_id: int | None = Field(default=None, description="Estudiante relacionado (obligatorio con representante)")
    caso_id: int | None = Field(default=None, description="Caso vinculado; si no se envía se usa el caso activo más reciente")


class CitaCreate(BaseModel):
    fecha: date
    hora_inicio: str
    tipo_asistente: str
    asistente_id: int
    motivo: str
    tipo: str | None = None
    estudiante_id: int | None = None
    caso_id: int | None = None

    validar_vacios = field_validator("fecha", "asistente_id", "estudiante_id", "caso_id", mode="before")(
        vacio_a_none
    )
    validar_hora = field_validator("hora_inicio", mode="before")(hora_valida)
    validar_textos = field_validator("tipo_asistente", "motivo", mode="before")(texto_obligatorio)
    validar_tipo = field_validator("tipo", mode="before")(texto_opcional)

    @field_validator("tipo_asistente")
    @classmethod
    def tipo_asistente_valido(cls, v: str) -> str:
        if v not in TIPOS_ASISTENTE:
            raise ValueError("El asistente debe ser Estudiante, Representante o Docente.")
        return v


class CitaEstadoUpdate(BaseModel):
    estado: str = Field(description="Programada, Realizada o Cancelada")

    @field_validator("estado")
    @classmethod
    def estado_valido(cls, v: str) -> str:
        if v not in ESTADOS_CITA:
            raise ValueError("El estado debe ser Programada, Realizada o Cancelada.")
        return v


class AtencionCreate(BaseModel):
    """Registro de la atención de una cita; se guarda como seguimiento del caso."""

    descripcion: str = Field(description="Qué se trató en la atención")
    responsable: str = Field(description="Profesional DECE que atendió")
    observaciones: str | None = None
    hora_inicio: str | None = Field(default=None, description="Hora real de inicio HH:MM; por defecto la de la cita")
    hora_fin: str | None = Field(default=None, description="Hora real de fin HH:MM")
    caso_id: int | None = Field(default=None, description="Caso al que se registra; por defecto el activo del estudiante")

    validar_textos = field_validator("descripcion", "responsable", mode="before")(texto_obligatorio)
    validar_observaciones = field_validator("observaciones", mode="before")(texto_opcional)
    validar_caso = field_validator("caso_id", mode="before")(vacio_a_none)

    @field_validator("hora_inicio", "hora_fin", mode="before")
    @classmethod
    def hora_opcional(cls, v, info):
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return hora_valida(v, info)


class CitaOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    fecha: date
    hora_inicio: str
    hora_fin: str
    titulo: str
    tipo_asistente: str
    asistente_id: int
    motivo: str
    tipo: str | None = None
    estado: str
    estudiante_id: int | None = None
    caso_id: int | None = None


class HorariosDisponiblesResponse(BaseModel):
    fecha: date
    horarios: list[str] = Field(description="Inicios de franja libres (HH:MM)")


class AtencionResponse(BaseModel):
    cita: CitaOut
    seguimiento_id: int
    message: str = "Atención registrada correctamente"
