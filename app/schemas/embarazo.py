"""Esquemas para casos de embarazo, maternidad y lactancia."""
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.embarazo import AtencionSalud
from app.schemas.validaciones import texto_opcional, vacio_a_none

ATENCIONES = (AtencionSalud.PUBLICA, AtencionSalud.PRIVADA, AtencionSalud.NINGUNA)


class EmbarazoForm(BaseModel):
    estudiante_id: int | None = Field(default=None, description="Estudiante")
    caso_relacionado_id: int | None = Field(default=None, description="Caso DECE de la misma estudiante")
    fecha_inicio_embarazo: date | None = Field(default=None, description="Fecha estimada de inicio")
    institucion_salud: str | None = None
    profesional_salud: str | None = None
    alto_riesgo: bool | None = None
    requiere_educacion_alternativa: bool | None = None
    tipo_educacion_alternativa: str | None = None
    detalles_flexibilidad: str | None = None
    fecha_parto: date | None = Field(default=None, description="Fecha real del parto")
    inicio_permiso_maternidad: date | None = Field(default=None, description="Por defecto, la fecha de parto")
    inicio_permiso_lactancia: date | None = Field(default=None, description="Por defecto, el fin del permiso de maternidad")
    por_violencia: bool | None = Field(default=None, description="Embarazo producto de violencia")
    atencion_salud: str | None = Field(default=None, description="Pública, Privada o Ninguna")


class EmbarazoCreate(BaseModel):
    estudiante_id: int
    caso_relacionado_id: int | None = None
    fecha_inicio_embarazo: date
    institucion_salud: str | None = None
    profesional_salud: str | None = None
    alto_riesgo: bool = False
    requiere_educacion_alternativa: bool = False
    tipo_educacion_alternativa: str | None = None
    detalles_flexibilidad: str | None = None
    fecha_parto: date | None = None
    inicio_permiso_maternidad: date | None = None
    inicio_permiso_lactancia: date | None = None
    por_violencia: bool = False
    atencion_salud: str = AtencionSalud.NINGUNA

    validar_vacios = field_validator(
        "estudiante_id", "caso_relacionado_id", "fecha_inicio_embarazo", "fecha_parto",
        "inicio_permiso_maternidad", "inicio_permiso_lactancia", mode="before",
    )(vacio_a_none)
    validar_textos = field_validator(
        "institucion_salud", "profesional_salud", "tipo_educacion_alternativa",
        "detalles_flexibilidad", mode="before",
    )(texto_opcional)

    @field_validator("atencion_salud", mode="before")
    @classmethod
    def atencion_valida(cls, v):
        if v in (None, ""):
            return AtencionSalud.NINGUNA
        if v not in ATENCIONES:
            raise ValueError("La atención de salud debe ser Pública, Privada o Ninguna.")
        return v

    @field_validator("fecha_parto")
    @classmethod
    def parto_no_futuro(cls, v: date | None) -> date | None:
        if v is not None and v > date.today():
            raise ValueError("La fecha de parto no puede ser futura.")
        return v


class EmbarazoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    estudiante_id: int
    estudiante_nombre: str | None = None
    caso_relacionado_id: int | None = None
    fecha_inicio_embarazo: date
    fecha_probable_parto: date | None = None
    institucion_salud: str | None = None
    profesional_salud: str | None = None
    alto_riesgo: bool
    requiere_educacion_alternativa: bool
    tipo_educacion_alternativa: str | None = None
    detalles_flexibilidad: str | None = None
    fecha_parto: date | None = None
    inicio_permiso_maternidad: date | None = None
    fin_permiso_maternidad: date | None = None
    inicio_permiso_lactancia: date | None = None
    fin_permiso_lactancia: date | None = None
    por_violencia: bool
    atencion_salud: str
    estado: str = Field(description="Etiqueta de estado calculada para la fecha actual")
