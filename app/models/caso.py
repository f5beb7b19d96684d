"""Modelo Caso (expediente de un estudiante)."""
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, Identity, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, IdType

if TYPE_CHECKING:
    from app.models.student import Estudiante
    from app.models.seguimiento import Seguimiento


class PrioridadCaso:
    """Valores permitidos para prioridad."""
    BAJA = "Baja"
    MEDIA = "Media"
    ALTA = "Alta"
    CRITICA = "Crítica"


class EstadoCaso:
    """Valores permitidos para estado del caso."""
    ABIERTO = "Abierto"
    EN_PROCESO = "En proceso"
    CERRADO = "Cerrado"


CATEGORIA_VIOLENCIA_SEXUAL = "Violencia Sexual"
CATEGORIA_EMBARAZO = "Embarazo/ maternidad/ paternidad adolescente"


class Caso(Base):
    """Expediente: categoría, prioridad, estado y fecha del próximo seguimiento."""

    __tablename__ = "casos"

    id: Mapped[int] = mapped_column(IdType, Identity(always=True), primary_key=True)
    codigo: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    estudiante_id: Mapped[int] = mapped_column(
        IdType, ForeignKey("estudiantes.id"), nullable=False, index=True
    )
    # Nombre de la categoría, no FK: las categorías se editan en configuración
    categoria: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    prioridad: Mapped[str] = mapped_column(Text, nullable=False, default=PrioridadCaso.MEDIA)
    estado: Mapped[str] = mapped_column(Text, nullable=False, default=EstadoCaso.ABIERTO, index=True)
    fecha_apertura: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    fecha_vencimiento: Mapped[date | None] = mapped_column(Date, nullable=True, index=True)
    descripcion: Mapped[str] = mapped_column(Text, nullable=False)
    observaciones: Mapped[str | None] = mapped_column(Text, nullable=True)

    estudiante: Mapped["Estudiante"] = relationship("Estudiante", back_populates="casos")
    seguimientos: Mapped[list["Seguimiento"]] = relationship(
        "Seguimiento", back_populates="caso", order_by="Seguimiento.fecha"
    )
