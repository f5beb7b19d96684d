"""Endpoints del catálogo de categorías de caso."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.models import CategoriaCaso
from app.schemas.categoria import CategoriaForm, CategoriaOut
from app.schemas.comun import CreadoResponse, MensajeResponse
from app.services import integridad
from app.services.actores_service import formulario_categoria
from app.services.formularios import crear, editar
from app.services.integridad import ResultadoEliminacion
from app.services.repositorio import Repositorio

router = APIRouter(prefix="/categorias", tags=["categorias"])


@router.get("", response_model=list[CategoriaOut], summary="Listar categorías de caso")
async def listar_categorias(db: AsyncSession = Depends(get_db)):
    return await Repositorio(db).consultar(CategoriaCaso, orden=CategoriaCaso.nombre)


@router.post("", response_model=CreadoResponse, status_code=status.HTTP_201_CREATED, summary="Crear categoría")
async def crear_categoria(body: CategoriaForm, db: AsyncSession = Depends(get_db)):
    categoria_id = await crear(formulario_categoria(Repositorio(db)), body.model_dump(exclude_unset=True))
    return CreadoResponse(id=categoria_id, message="Categoría registrada correctamente")


@router.patch("/{categoria_id}", response_model=CategoriaOut, summary="Actualizar categoría")
async def actualizar_categoria(categoria_id: int, body: CategoriaForm, db: AsyncSession = Depends(get_db)):
    repo = Repositorio(db)
    await editar(formulario_categoria(repo), categoria_id, body.model_dump(exclude_unset=True))
    return await repo.obtener(CategoriaCaso, categoria_id)


@router.get("/{categoria_id}/puede-eliminar", response_model=ResultadoEliminacion, summary="Comprobar si se puede eliminar")
async def puede_eliminar_categoria(categoria_id: int, db: AsyncSession = Depends(get_db)):
    return await integridad.puede_eliminar(Repositorio(db), CategoriaCaso, categoria_id)


@router.delete(
    "/{categoria_id}",
    response_model=MensajeResponse,
    summary="Eliminar categoría",
    responses={409: {"description": "Categoría protegida o en uso"}},
)
async def eliminar_categoria(categoria_id: int, db: AsyncSession = Depends(get_db)):
    await integridad.eliminar_verificado(Repositorio(db), CategoriaCaso, categoria_id)
    return MensajeResponse(message="Categoría eliminada correctamente")
