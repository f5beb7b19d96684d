"""Endpoints de datos de la institución y configuración del sistema."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.excepciones import RegistroNoEncontrado
from app.models.configuracion import CLAVE_HORARIO_LABORAL, CLAVE_PERMISOS
from app.schemas.institucion import ConfiguracionOut, ConfiguracionUpdate, InstitucionOut, InstitucionUpdate
from app.services.configuracion_service import (
    guardar_institucion,
    guardar_valor,
    obtener_institucion,
    obtener_valor,
)
from app.services.repositorio import Repositorio

router = APIRouter(tags=["institucion"])

CLAVES_CONOCIDAS = (CLAVE_HORARIO_LABORAL, CLAVE_PERMISOS)


@router.get("/institucion", response_model=InstitucionOut, summary="Datos de la institución")
async def get_institucion(db: AsyncSession = Depends(get_db)):
    institucion = await obtener_institucion(Repositorio(db))
    if institucion is None:
        raise RegistroNoEncontrado("Aún no se han registrado los datos de la institución.")
    return institucion


@router.put(
    "/institucion",
    response_model=InstitucionOut,
    summary="Guardar datos de la institución",
    description="Crea el registro la primera vez; luego lo reemplaza. Solo existe una institución.",
)
async def put_institucion(body: InstitucionUpdate, db: AsyncSession = Depends(get_db)):
    return await guardar_institucion(Repositorio(db), body.model_dump())


@router.get(
    "/configuracion/{clave}",
    response_model=ConfiguracionOut,
    summary="Leer configuración",
    description="Claves: `horario_laboral` ({inicio, fin}) y `permisos` ({maternidad, lactancia}). Devuelve el valor por defecto si no se ha guardado.",
)
async def get_configuracion(clave: str, db: AsyncSession = Depends(get_db)):
    valor = await obtener_valor(Repositorio(db), clave)
    if valor is None and clave not in CLAVES_CONOCIDAS:
        raise RegistroNoEncontrado(f'No existe la configuración "{clave}".')
    return ConfiguracionOut(clave=clave, valor=valor)


@router.put("/configuracion/{clave}", response_model=ConfiguracionOut, summary="Guardar configuración")
async def put_configuracion(clave: str, body: ConfiguracionUpdate, db: AsyncSession = Depends(get_db)):
    valor = await guardar_valor(Repositorio(db), clave, body.valor)
    return ConfiguracionOut(clave=clave, valor=valor)
