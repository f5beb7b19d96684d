"""Esquemas compartidos por varios routers."""
from pydantic import BaseModel, Field


class MensajeResponse(BaseModel):
    message: str = Field(description="Mensaje de confirmación")


class CreadoResponse(BaseModel):
    id: int = Field(description="ID del registro creado")
    message: str = Field(description="Mensaje de confirmación")
