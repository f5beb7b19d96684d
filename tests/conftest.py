"""Fixtures: base SQLite temporal por test, cliente HTTP contra la app y datos básicos."""
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.database import Base, get_db
from app.main import app
from app.models import CategoriaCaso
from app.models.categoria_caso import CATEGORIAS_INICIALES
from app.services import estadisticas_service

API = "/api/v1"


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'dece_test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def sesiones(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(sesiones):
    async with sesiones() as session:
        yield session


@pytest.fixture
async def client(sesiones):
    async def get_db_test():
        async with sesiones() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = get_db_test
    estadisticas_service.invalidar()
    estadisticas_service.registrar_invalidacion()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def categorias(sesiones):
    async with sesiones() as session:
        session.add_all([CategoriaCaso(nombre=n, protegida=p) for n, p in CATEGORIAS_INICIALES])
        await session.commit()


@pytest.fixture
async def representante(client):
    r = await client.post(f"{API}/representantes", json={
        "nombre_completo": "Rosa Andrade Vera",
        "cedula": "1712345678",
        "edad": 41,
        "telefono": "0991234567",
        "direccion": "Av. Maldonado S12-45",
    })
    assert r.status_code == 201, r.text
    return r.json()["id"]


@pytest.fixture
async def curso(client):
    r = await client.post(f"{API}/cursos", json={"nombre": "OCTAVO EGB", "paralelo": "A"})
    assert r.status_code == 201, r.text
    return r.json()["id"]


@pytest.fixture
async def tutor(client, curso):
    r = await client.post(f"{API}/docentes", json={
        "nombre_completo": "Lic. Jorge Salazar",
        "cedula": "1709876543",
        "email": "jsalazar@educacion.gob.ec",
        "es_tutor": True,
        "tutor_de_curso_id": curso,
    })
    assert r.status_code == 201, r.text
    return r.json()["id"]


@pytest.fixture
async def estudiante(client, representante):
    r = await client.post(f"{API}/estudiantes", json={
        "nombre_completo": "Mateo Andrade Vera",
        "cedula": "1723456789",
        "fecha_nacimiento": "2012-05-14",
        "genero": "Masculino",
        "curso": "OCTAVO EGB",
        "paralelo": "A",
        "representante_id": representante,
    })
    assert r.status_code == 201, r.text
    return r.json()["id"]


@pytest.fixture
async def caso(client, categorias, estudiante):
    r = await client.post(f"{API}/casos", json={
        "estudiante_id": estudiante,
        "categoria": "Conflictos familiares",
        "prioridad": "Media",
        "fecha_apertura": "2025-03-10",
        "descripcion": "Bajo rendimiento tras la separación de los padres.",
    })
    assert r.status_code == 201, r.text
    return r.json()
