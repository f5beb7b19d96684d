"""Modelo CategoriaCaso (catálogo de categorías de caso)."""
from sqlalchemy import Boolean, Identity, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, IdType


class CategoriaCaso(Base):
    """Categoría de caso; las protegidas no se pueden eliminar."""

    __tablename__ = "categorias_caso"

    id: Mapped[int] = mapped_column(IdType, Identity(always=True), primary_key=True)
    nombre: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    protegida: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )


# (nombre, protegida) cargadas por scripts/seed_categorias.py
CATEGORIAS_INICIALES = [
    ("Dificultades de aprendizaje", False),
    ("Problemas de comportamiento", False),
    ("Necesidades Educativas Especiales", False),
    ("Violencia Física", True),
    ("Violencia Psicológica", True),
    ("Violencia Sexual", True),
    ("Acoso Escolar (Bullying)", True),
    ("Consumo de alcohol, tabaco y/o drogas", True),
    ("Situación de vulnerabilidad económica", False),
    ("Conflictos familiares", False),
    ("Embarazo/ maternidad/ paternidad adolescente", False),
    ("Ideación/Intento de suicidio", True),
    ("Uso problemático de internet/redes sociales", False),
    ("Ausentismo y/o deserción escolar", False),
    ("Otros", False),
]
