"""Modelo CasoEmbarazo (embarazo, maternidad y lactancia de una estudiante)."""
from datetime import date

from sqlalchemy import Boolean, Date, ForeignKey, Identity, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, IdType


class AtencionSalud:
    PUBLICA = "Pública"
    PRIVADA = "Privada"
    NINGUNA = "Ninguna"


class CasoEmbarazo(Base):
    """Registro de embarazo; las fechas de fin de permiso se derivan al guardar."""

    __tablename__ = "casos_embarazo"

    id: Mapped[int] = mapped_column(IdType, Identity(always=True), primary_key=True)
    estudiante_id: Mapped[int] = mapped_column(
        IdType, ForeignKey("estudiantes.id"), nullable=False, index=True
    )
    caso_relacionado_id: Mapped[int | None] = mapped_column(
        IdType, ForeignKey("casos.id"), nullable=True, index=True
    )
    fecha_inicio_embarazo: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    fecha_probable_parto: Mapped[date | None] = mapped_column(Date, nullable=True)
    institucion_salud: Mapped[str | None] = mapped_column(Text, nullable=True)
    profesional_salud: Mapped[str | None] = mapped_column(Text, nullable=True)
    alto_riesgo: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    requiere_educacion_alternativa: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    tipo_educacion_alternativa: Mapped[str | None] = mapped_column(Text, nullable=True)
    detalles_flexibilidad: Mapped[str | None] = mapped_column(Text, nullable=True)
    fecha_parto: Mapped[date | None] = mapped_column(Date, nullable=True, index=True)
    inicio_permiso_maternidad: Mapped[date | None] = mapped_column(Date, nullable=True)
    fin_permiso_maternidad: Mapped[date | None] = mapped_column(Date, nullable=True)
    inicio_permiso_lactancia: Mapped[date | None] = mapped_column(Date, nullable=True)
    fin_permiso_lactancia: Mapped[date | None] = mapped_column(Date, nullable=True)
    por_violencia: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    atencion_salud: Mapped[str] = mapped_column(
        Text, nullable=False, default=AtencionSalud.NINGUNA
    )
