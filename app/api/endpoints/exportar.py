"""Endpoint de exportación de listados a PDF o CSV."""
from io import BytesIO
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.services.exportacion import LISTADOS, exportar
from app.services.repositorio import Repositorio

router = APIRouter(prefix="/exportar", tags=["exportar"])


@router.get(
    "/{recurso}",
    summary="Exportar listado",
    description=(
        f"Descarga el listado como PDF o CSV. Recursos: {', '.join(LISTADOS)}. "
        "Las categorías sensibles de los casos se muestran como 'Situación de Vulnerabilidad / Riesgo Psicosocial'."
    ),
    responses={
        200: {"description": "Archivo generado", "content": {"application/pdf": {}, "text/csv": {}}},
        404: {"description": "Recurso no exportable"},
    },
)
async def exportar_listado(
    recurso: str,
    formato: Annotated[Literal["pdf", "csv"], Query(description="pdf o csv")] = "pdf",
    db: AsyncSession = Depends(get_db),
):
    contenido, media_type, filename = await exportar(Repositorio(db), recurso, formato)
    return StreamingResponse(
        BytesIO(contenido),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
