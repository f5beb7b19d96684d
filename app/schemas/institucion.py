"""Esquemas para datos de la institución y configuración."""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.schemas.validaciones import hora_valida, telefono_valido, texto_obligatorio


class InstitucionUpdate(BaseModel):
    nombre: str = Field(description="Nombre de la unidad educativa")
    amie: str | None = Field(default=None, description="Código AMIE")
    distrito: str | None = None
    autoridad: str | None = Field(default=None, description="Rector/a o director/a")
    telefono: str | None = None
    email: str | None = None
    direccion: str | None = None
    anio_lectivo: str | None = Field(default=None, description="Ej. 2025-2026")
    coordinacion_zonal: str | None = None
    provincia: str | None = None
    canton: str | None = None
    parroquia: str | None = None

    validar_nombre = field_validator("nombre", mode="before")(texto_obligatorio)
    validar_telefono = field_validator("telefono", mode="before")(telefono_valido)


class InstitucionOut(InstitucionUpdate):
    model_config = ConfigDict(from_attributes=True)

    id: int


# ── Configuración ────────────────────────────────────────────────


UNIDADES_PERMISO = ("días", "semanas", "meses", "años")


class HorarioLaboral(BaseModel):
    inicio: str = Field(default="09:00", description="Inicio de la jornada HH:MM")
    fin: str = Field(default="18:00", description="Fin de la jornada HH:MM")

    validar_horas = field_validator("inicio", "fin", mode="before")(hora_valida)

    @model_validator(mode="after")
    def fin_posterior(self):
        if self.fin <= self.inicio:
            raise ValueError("La hora de fin debe ser posterior a la hora de inicio.")
        # La agenda cuenta horas enteras: 09:00-09:45 no tiene franjas
        if int(self.fin[:2]) <= int(self.inicio[:2]):
            raise ValueError("El horario laboral debe abarcar al menos una hora completa.")
        return self


class DuracionPermiso(BaseModel):
    duracion: int = Field(gt=0)
    unidad: str = Field(description="días, semanas, meses o años")

    @field_validator("unidad")
    @classmethod
    def unidad_valida(cls, v: str) -> str:
        if v not in UNIDADES_PERMISO:
            raise ValueError("La unidad debe ser días, semanas, meses o años.")
        return v


class PermisosConfig(BaseModel):
    maternidad: DuracionPermiso = Field(default_factory=lambda: DuracionPermiso(duracion=90, unidad="días"))
    lactancia: DuracionPermiso = Field(default_factory=lambda: DuracionPermiso(duracion=12, unidad="meses"))


class ConfiguracionOut(BaseModel):
    clave: str
    valor: Any


class ConfiguracionUpdate(BaseModel):
    valor: Any = Field(description="Valor JSON de la configuración")
