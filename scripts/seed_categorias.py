"""Script para insertar las categorías de caso iniciales en la tabla categorias_caso."""
import asyncio
import sys
from pathlib import Path

# Asegurar que el proyecto esté en el path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import select
from app.core.database import AsyncSessionLocal, init_db
from app.models import CategoriaCaso
from app.models.categoria_caso import CATEGORIAS_INICIALES


async def seed_categorias():
    await init_db()
    async with AsyncSessionLocal() as session:
        for nombre, protegida in CATEGORIAS_INICIALES:
            result = await session.execute(select(CategoriaCaso).where(CategoriaCaso.nombre == nombre))
            if result.scalar_one_or_none() is None:
                session.add(CategoriaCaso(nombre=nombre, protegida=protegida))
                print(f"  + {nombre}{' (protegida)' if protegida else ''}")
            else:
                print(f"  = {nombre} (ya existe)")
        await session.commit()
    print("Listo.")


if __name__ == "__main__":
    asyncio.run(seed_categorias())
