"""Modelo Docente."""
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Identity, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, IdType

if TYPE_CHECKING:
    from app.models.curso import Curso
    from app.models.student import Estudiante


class Docente(Base):
    """Docente; si es tutor, `tutor_de_curso_id` apunta al curso que tutela."""

    __tablename__ = "docentes"

    id: Mapped[int] = mapped_column(IdType, Identity(always=True), primary_key=True)
    nombre_completo: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    cedula: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    email: Mapped[str | None] = mapped_column(Text, nullable=True)
    telefono: Mapped[str | None] = mapped_column(Text, nullable=True)
    es_tutor: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    tutor_de_curso_id: Mapped[int | None] = mapped_column(
        IdType, ForeignKey("cursos.id"), nullable=True, index=True
    )

    curso_tutoria: Mapped["Curso | None"] = relationship("Curso", back_populates="tutores")
    tutorados: Mapped[list["Estudiante"]] = relationship("Estudiante", back_populates="tutor")
