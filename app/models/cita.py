"""Modelo Cita (agenda del DECE)."""
from datetime import date

from sqlalchemy import Date, ForeignKey, Identity, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, IdType


class TipoAsistente:
    """Tipo de persona citada; define a qué tabla apunta `asistente_id`."""
    ESTUDIANTE = "Estudiante"
    REPRESENTANTE = "Representante"
    DOCENTE = "Docente"


class EstadoCita:
    """Valores permitidos para estado de cita."""
    PROGRAMADA = "Programada"
    REALIZADA = "Realizada"
    CANCELADA = "Cancelada"


class Cita(Base):
    """Cita de 30 minutos con un estudiante, representante o docente."""

    __tablename__ = "citas"

    id: Mapped[int] = mapped_column(IdType, Identity(always=True), primary_key=True)
    fecha: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    hora_inicio: Mapped[str] = mapped_column(Text, nullable=False, index=True)  # HH:MM
    hora_fin: Mapped[str] = mapped_column(Text, nullable=False)
    titulo: Mapped[str] = mapped_column(Text, nullable=False)
    # Referencia polimórfica: sin FK
    tipo_asistente: Mapped[str] = mapped_column(Text, nullable=False)
    asistente_id: Mapped[int] = mapped_column(IdType, nullable=False)
    motivo: Mapped[str] = mapped_column(Text, nullable=False)
    tipo: Mapped[str | None] = mapped_column(Text, nullable=True)
    estado: Mapped[str] = mapped_column(
        Text, nullable=False, default=EstadoCita.PROGRAMADA, index=True
    )
    estudiante_id: Mapped[int | None] = mapped_column(
        IdType, ForeignKey("estudiantes.id"), nullable=True, index=True
    )
    caso_id: Mapped[int | None] = mapped_column(
        IdType, ForeignKey("casos.id"), nullable=True, index=True
    )
