"""Modelo Curso (nivel + paralelo + jornada)."""
from typing import TYPE_CHECKING

from sqlalchemy import Identity, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, IdType

if TYPE_CHECKING:
    from app.models.docente import Docente


class Jornada:
    """Valores permitidos para jornada."""
    MATUTINA = "Matutina"
    VESPERTINA = "Vespertina"
    NOCTURNA = "Nocturna"


class Curso(Base):
    """Curso: ej. OCTAVO EGB "A" (Matutina)."""

    __tablename__ = "cursos"
    __table_args__ = (
        UniqueConstraint("nombre", "paralelo", "jornada", name="uq_cursos_nombre_paralelo_jornada"),
    )

    id: Mapped[int] = mapped_column(IdType, Identity(always=True), primary_key=True)
    nombre: Mapped[str] = mapped_column(Text, nullable=False)
    paralelo: Mapped[str] = mapped_column(Text, nullable=False)
    jornada: Mapped[str] = mapped_column(Text, nullable=False, default=Jornada.MATUTINA)

    tutores: Mapped[list["Docente"]] = relationship("Docente", back_populates="curso_tutoria")
