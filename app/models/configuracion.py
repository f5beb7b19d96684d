"""Modelo Configuracion (pares clave/valor: horario laboral, permisos)."""
from typing import Any

from sqlalchemy import JSON, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base

CLAVE_HORARIO_LABORAL = "horario_laboral"
CLAVE_PERMISOS = "permisos"


class Configuracion(Base):
    __tablename__ = "configuraciones"

    clave: Mapped[str] = mapped_column(Text, primary_key=True)
    valor: Mapped[Any] = mapped_column(JSON, nullable=False)
