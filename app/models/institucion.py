"""Modelo Institucion (datos de la unidad educativa; un solo registro)."""
from sqlalchemy import Identity, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, IdType


class Institucion(Base):
    __tablename__ = "institucion"

    id: Mapped[int] = mapped_column(IdType, Identity(always=True), primary_key=True)
    nombre: Mapped[str] = mapped_column(Text, nullable=False)
    amie: Mapped[str | None] = mapped_column(Text, nullable=True)
    distrito: Mapped[str | None] = mapped_column(Text, nullable=True)
    autoridad: Mapped[str | None] = mapped_column(Text, nullable=True)
    telefono: Mapped[str | None] = mapped_column(Text, nullable=True)
    email: Mapped[str | None] = mapped_column(Text, nullable=True)
    direccion: Mapped[str | None] = mapped_column(Text, nullable=True)
    anio_lectivo: Mapped[str | None] = mapped_column(Text, nullable=True)
    coordinacion_zonal: Mapped[str | None] = mapped_column(Text, nullable=True)
    provincia: Mapped[str | None] = mapped_column(Text, nullable=True)
    canton: Mapped[str | None] = mapped_column(Text, nullable=True)
    parroquia: Mapped[str | None] = mapped_column(Text, nullable=True)
