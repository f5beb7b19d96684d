"""Endpoints de la nómina de estudiantes (importación y paso a estudiante)."""
from io import BytesIO
from typing import Annotated

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.excepciones import RegistroNoEncontrado
from app.models import RegistroNomina
from app.schemas.comun import CreadoResponse, MensajeResponse
from app.schemas.nomina import CrearEstudianteDesdeNomina, ImportacionNominaResponse, RegistroNominaOut
from app.services.exportacion import generar_csv
from app.services.nomina_service import COLUMNAS_NOMINA, crear_estudiante_desde_nomina, importar_nomina
from app.services.repositorio import Repositorio

router = APIRouter(prefix="/nomina", tags=["nomina"])


@router.get("", response_model=list[RegistroNominaOut], summary="Listar nómina")
async def listar_nomina(
    db: AsyncSession = Depends(get_db),
    estado: Annotated[str | None, Query(description="Pendiente o Creado")] = None,
    curso: Annotated[str | None, Query()] = None,
):
    filtros = {}
    if estado:
        filtros["estado"] = estado
    if curso:
        filtros["curso"] = curso
    return await Repositorio(db).consultar(RegistroNomina, orden=RegistroNomina.nombre_completo, **filtros)


@router.post(
    "/importar",
    response_model=ImportacionNominaResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Importar nómina desde CSV o Excel",
    description=(
        "Columnas obligatorias: cedula, nombre_completo, curso, paralelo, cedula_representante, "
        "nombre_representante. Se omiten filas sin cédula o con cédula ya registrada."
    ),
)
async def importar(
    archivo: UploadFile = File(..., description="Archivo .csv o .xlsx"),
    db: AsyncSession = Depends(get_db),
):
    contenido = await archivo.read()
    return await importar_nomina(Repositorio(db), archivo.filename or "sin_nombre", contenido)


@router.get("/plantilla", summary="Descargar plantilla CSV de la nómina")
async def plantilla():
    return StreamingResponse(
        BytesIO(generar_csv(COLUMNAS_NOMINA, [])),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="plantilla_nomina.csv"'},
    )


@router.post(
    "/{registro_id}/estudiante",
    response_model=CreadoResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Registrar estudiante desde la nómina",
    description="Busca o crea al representante por cédula, crea al estudiante y marca la fila como Creado.",
)
async def registrar_estudiante(
    registro_id: int,
    body: CrearEstudianteDesdeNomina,
    db: AsyncSession = Depends(get_db),
):
    estudiante_id = await crear_estudiante_desde_nomina(Repositorio(db), registro_id, body)
    return CreadoResponse(id=estudiante_id, message="Estudiante registrado correctamente")


@router.delete("/{registro_id}", response_model=MensajeResponse, summary="Eliminar fila de la nómina")
async def eliminar_registro(registro_id: int, db: AsyncSession = Depends(get_db)):
    if not await Repositorio(db).eliminar(RegistroNomina, registro_id):
        raise RegistroNoEncontrado("Registro de nómina no encontrado.")
    return MensajeResponse(message="Registro eliminado correctamente")
