"""Modelo Representante (padre, madre o tutor legal del estudiante)."""
from typing import TYPE_CHECKING

from sqlalchemy import Identity, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, IdType

if TYPE_CHECKING:
    from app.models.student import Estudiante


class Representante(Base):
    """Representante legal; puede tener varios estudiantes a su cargo."""

    __tablename__ = "representantes"

    id: Mapped[int] = mapped_column(IdType, Identity(always=True), primary_key=True)
    nombre_completo: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    # Única a nivel de aplicación (formulario), no en la BD
    cedula: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    edad: Mapped[int | None] = mapped_column(Integer, nullable=True)
    telefono: Mapped[str | None] = mapped_column(Text, nullable=True)
    direccion: Mapped[str | None] = mapped_column(Text, nullable=True)

    estudiantes: Mapped[list["Estudiante"]] = relationship(
        "Estudiante", back_populates="representante"
    )
