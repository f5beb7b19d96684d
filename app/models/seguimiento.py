"""Modelo Seguimiento (entrada del historial de un caso)."""
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Boolean, Date, ForeignKey, Identity, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, IdType

if TYPE_CHECKING:
    from app.models.caso import Caso


class TipoIntervencion:
    """Valores permitidos para tipo de intervención."""
    INDIVIDUAL = "Individual"
    FAMILIAR = "Familiar"
    GRUPAL = "Grupal"
    CRISIS = "Crisis"


class TipoParticipante:
    """Valores permitidos para los participantes de un seguimiento."""
    ESTUDIANTE = "Estudiante"
    REPRESENTANTE = "Representante"
    DOCENTE = "Docente"
    AUTORIDAD = "Autoridad"


RESPONSABLE_SISTEMA = "Sistema"


class Seguimiento(Base):
    """Seguimiento de un caso. Solo los efectivos cuentan en estadísticas."""

    __tablename__ = "seguimientos"

    id: Mapped[int] = mapped_column(IdType, Identity(always=True), primary_key=True)
    caso_id: Mapped[int] = mapped_column(
        IdType, ForeignKey("casos.id"), nullable=False, index=True
    )
    fecha: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    descripcion: Mapped[str] = mapped_column(Text, nullable=False)
    responsable: Mapped[str] = mapped_column(Text, nullable=False)
    tipo_intervencion: Mapped[str | None] = mapped_column(Text, nullable=True)
    observaciones: Mapped[str | None] = mapped_column(Text, nullable=True)
    es_efectivo: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )
    tipos_participante: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    caso: Mapped["Caso"] = relationship("Caso", back_populates="seguimientos")
