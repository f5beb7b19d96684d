"""Esquemas para categorías de caso."""
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.validaciones import texto_obligatorio


class CategoriaForm(BaseModel):
    nombre: str | None = Field(default=None, description="Nombre de la categoría")
    protegida: bool | None = Field(default=None, description="Las protegidas no se pueden eliminar")


class CategoriaCreate(BaseModel):
    nombre: str
    protegida: bool = False

    validar_nombre = field_validator("nombre", mode="before")(texto_obligatorio)


class CategoriaOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nombre: str
    protegida: bool
