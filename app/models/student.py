"""Modelo Estudiante."""
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, Identity, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, IdType

if TYPE_CHECKING:
    from app.models.representante import Representante
    from app.models.docente import Docente
    from app.models.caso import Caso


class Genero:
    """Valores permitidos para género."""
    MASCULINO = "Masculino"
    FEMENINO = "Femenino"
    OTRO = "Otro"


class Estudiante(Base):
    """Estudiante con representante obligatorio y tutor opcional.

    El curso se guarda desnormalizado como el par (curso, paralelo) y no como
    id de Curso; el docente tutor sí guarda el id del curso.
    """

    __tablename__ = "estudiantes"
    __table_args__ = (Index("ix_estudiantes_curso_paralelo", "curso", "paralelo"),)

    id: Mapped[int] = mapped_column(IdType, Identity(always=True), primary_key=True)
    nombre_completo: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    cedula: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    genero: Mapped[str] = mapped_column(Text, nullable=False, default=Genero.MASCULINO)
    fecha_nacimiento: Mapped[date] = mapped_column(Date, nullable=False)
    condicion_especial: Mapped[str | None] = mapped_column(Text, nullable=True)
    curso: Mapped[str] = mapped_column(Text, nullable=False)
    paralelo: Mapped[str] = mapped_column(Text, nullable=False)
    tutor_id: Mapped[int | None] = mapped_column(
        IdType, ForeignKey("docentes.id"), nullable=True, index=True
    )
    representante_id: Mapped[int] = mapped_column(
        IdType, ForeignKey("representantes.id"), nullable=False, index=True
    )

    representante: Mapped["Representante"] = relationship(
        "Representante", back_populates="estudiantes"
    )
    tutor: Mapped["Docente | None"] = relationship("Docente", back_populates="tutorados")
    casos: Mapped[list["Caso"]] = relationship("Caso", back_populates="estudiante")
