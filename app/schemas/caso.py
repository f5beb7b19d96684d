"""Esquemas para casos, cierre y traslado."""
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.caso import EstadoCaso, PrioridadCaso
from app.schemas.validaciones import texto_obligatorio, texto_opcional, vacio_a_none

PRIORIDADES = (PrioridadCaso.BAJA, PrioridadCaso.MEDIA, PrioridadCaso.ALTA, PrioridadCaso.CRITICA)
ESTADOS = (EstadoCaso.ABIERTO, EstadoCaso.EN_PROCESO, EstadoCaso.CERRADO)


class CasoForm(BaseModel):
    estudiante_id: int | None = Field(default=None, description="ID del estudiante")
    categoria: str | None = Field(default=None, description="Nombre de la categoría del caso")
    prioridad: str | None = Field(default=None, description="Baja, Media, Alta o Crítica")
    estado: str | None = Field(default=None, description="Abierto, En proceso o Cerrado")
    fecha_apertura: date | None = Field(default=None, description="Por defecto, hoy")
    fecha_vencimiento: date | None = Field(default=None, description="Próxima revisión; por defecto apertura + 30 días")
    descripcion: str | None = Field(default=None, description="Descripción de la situación")
    observaciones: str | None = None


class CasoCreate(BaseModel):
    estudiante_id: int
    categoria: str
    prioridad: str = PrioridadCaso.MEDIA
    estado: str = EstadoCaso.ABIERTO
    fecha_apertura: date = Field(default_factory=date.today)
    fecha_vencimiento: date | None = None
    descripcion: str
    observaciones: str | None = None

    validar_estudiante = field_validator("estudiante_id", "fecha_vencimiento", mode="before")(vacio_a_none)
    validar_textos = field_validator("categoria", "descripcion", mode="before")(texto_obligatorio)
    validar_observaciones = field_validator("observaciones", mode="before")(texto_opcional)

    @field_validator("fecha_apertura", mode="before")
    @classmethod
    def apertura_por_defecto(cls, v):
        return date.today() if v in (None, "") else v

    @field_validator("prioridad")
    @classmethod
    def prioridad_valida(cls, v: str) -> str:
        if v not in PRIORIDADES:
            raise ValueError("La prioridad debe ser Baja, Media, Alta o Crítica.")
        return v

    @field_validator("estado")
    @classmethod
    def estado_valido(cls, v: str) -> str:
        if v not in ESTADOS:
            raise ValueError("El estado debe ser Abierto, En proceso o Cerrado.")
        return v


class CasoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    codigo: str
    estudiante_id: int
    estudiante_nombre: str | None = None
    categoria: str
    prioridad: str
    estado: str
    fecha_apertura: date
    fecha_vencimiento: date | None = None
    descripcion: str
    observaciones: str | None = None
    semaforo: str = Field(description="Vencido, Vence Hoy, Próximo, A tiempo, Sin fecha o Cerrado")
    requiere_registro_embarazo: bool = Field(
        default=False, description="True si la categoría exige registrar el caso de embarazo"
    )


class CierreCasoRequest(BaseModel):
    motivo: str = Field(description="Motivo del cierre (obligatorio)")

    validar_motivo = field_validator("motivo", mode="before")(texto_obligatorio)


class TrasladoCasoRequest(BaseModel):
    institucion_destino: str = Field(description="Institución educativa a la que se traslada el estudiante")
    observaciones: str | None = None

    validar_destino = field_validator("institucion_destino", mode="before")(texto_obligatorio)
