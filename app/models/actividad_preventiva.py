"""Modelo ActividadPreventiva (talleres y charlas del DECE)."""
from datetime import date

from sqlalchemy import JSON, Boolean, Date, Identity, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, IdType


class PublicoActividad:
    """Valores permitidos para el público de una actividad."""
    ESTUDIANTES = "Estudiantes"
    PADRES = "Padres"
    DOCENTES = "Docentes"
    AUTORIDADES = "Autoridades"


class ActividadPreventiva(Base):
    """Actividad preventiva con conteo de asistentes por grupo."""

    __tablename__ = "actividades_preventivas"

    id: Mapped[int] = mapped_column(IdType, Identity(always=True), primary_key=True)
    tema: Mapped[str] = mapped_column(Text, nullable=False)
    descripcion: Mapped[str | None] = mapped_column(Text, nullable=True)
    fecha: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    fecha_fin: Mapped[date | None] = mapped_column(Date, nullable=True, index=True)
    hora_inicio: Mapped[str] = mapped_column(Text, nullable=False)
    hora_fin: Mapped[str] = mapped_column(Text, nullable=False)
    publico: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    institucion_cooperante: Mapped[str | None] = mapped_column(Text, nullable=True)
    asistentes_hombres: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    asistentes_mujeres: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    asistentes_padres: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    asistentes_docentes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    asistentes_directivos: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    ejecutada: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    resultados: Mapped[str | None] = mapped_column(Text, nullable=True)

    @property
    def total_asistentes(self) -> int:
        return (
            (self.asistentes_hombres or 0)
            + (self.asistentes_mujeres or 0)
            + (self.asistentes_padres or 0)
            + (self.asistentes_docentes or 0)
            + (self.asistentes_directivos or 0)
        )
