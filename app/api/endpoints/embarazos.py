"""Endpoints de casos de embarazo, maternidad y lactancia."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.excepciones import RegistroNoEncontrado
from app.models import CasoEmbarazo, Estudiante
from app.schemas.comun import MensajeResponse
from app.schemas.embarazo import EmbarazoForm, EmbarazoOut
from app.services.embarazo_service import embarazo_a_out, formulario_embarazo
from app.services.formularios import crear, editar
from app.services.repositorio import Repositorio

router = APIRouter(prefix="/embarazos", tags=["embarazos"])


async def _out(repo: Repositorio, registro_id: int) -> EmbarazoOut:
    registro = await repo.obtener(CasoEmbarazo, registro_id)
    if registro is None:
        raise RegistroNoEncontrado("Registro de embarazo no encontrado.")
    estudiante = await repo.obtener(Estudiante, registro.estudiante_id)
    return embarazo_a_out(registro, estudiante.nombre_completo if estudiante else None)


@router.get(
    "",
    response_model=list[EmbarazoOut],
    summary="Listar casos de embarazo",
    description="Incluye el estado calculado para hoy (Gestación, Permiso Maternidad, Permiso Lactancia, Finalizado...).",
)
async def listar_embarazos(db: AsyncSession = Depends(get_db)):
    repo = Repositorio(db)
    nombres = {e.id: e.nombre_completo for e in await repo.consultar(Estudiante)}
    registros = await repo.consultar(CasoEmbarazo, orden=CasoEmbarazo.fecha_inicio_embarazo.desc())
    return [embarazo_a_out(r, nombres.get(r.estudiante_id)) for r in registros]


@router.post(
    "",
    response_model=EmbarazoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Registrar caso de embarazo",
    description="Calcula la fecha probable de parto (280 días) y el fin de los permisos según la configuración.",
)
async def crear_embarazo(body: EmbarazoForm, db: AsyncSession = Depends(get_db)):
    repo = Repositorio(db)
    registro_id = await crear(formulario_embarazo(repo), body.model_dump(exclude_unset=True))
    return await _out(repo, registro_id)


@router.get("/{registro_id}", response_model=EmbarazoOut, summary="Obtener caso de embarazo")
async def obtener_embarazo(registro_id: int, db: AsyncSession = Depends(get_db)):
    return await _out(Repositorio(db), registro_id)


@router.patch("/{registro_id}", response_model=EmbarazoOut, summary="Actualizar caso de embarazo")
async def actualizar_embarazo(registro_id: int, body: EmbarazoForm, db: AsyncSession = Depends(get_db)):
    repo = Repositorio(db)
    await editar(formulario_embarazo(repo), registro_id, body.model_dump(exclude_unset=True))
    return await _out(repo, registro_id)


@router.delete("/{registro_id}", response_model=MensajeResponse, summary="Eliminar caso de embarazo")
async def eliminar_embarazo(registro_id: int, db: AsyncSession = Depends(get_db)):
    if not await Repositorio(db).eliminar(CasoEmbarazo, registro_id):
        raise RegistroNoEncontrado("Registro de embarazo no encontrado.")
    return MensajeResponse(message="Registro eliminado correctamente")
