"""Modelo RegistroNomina (nómina importada, pendiente de crear como estudiante)."""
from sqlalchemy import Identity, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, IdType


class EstadoNomina:
    PENDIENTE = "Pendiente"
    CREADO = "Creado"


class RegistroNomina(Base):
    """Fila de la nómina; la cédula es la clave natural para omitir duplicados."""

    __tablename__ = "nomina_estudiantes"

    id: Mapped[int] = mapped_column(IdType, Identity(always=True), primary_key=True)
    cedula: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    nombre_completo: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    curso: Mapped[str | None] = mapped_column(Text, nullable=True)
    paralelo: Mapped[str | None] = mapped_column(Text, nullable=True)
    cedula_representante: Mapped[str | None] = mapped_column(Text, nullable=True)
    nombre_representante: Mapped[str | None] = mapped_column(Text, nullable=True)
    estado: Mapped[str] = mapped_column(
        Text, nullable=False, default=EstadoNomina.PENDIENTE, index=True
    )
