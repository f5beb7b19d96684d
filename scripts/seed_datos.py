"""Seed: institución, cursos, docentes tutores, representantes, estudiantes, casos y seguimientos ficticios.

Requiere las categorías de caso (ejecutar antes scripts/seed_categorias.py).
"""
import asyncio
import random
import sys
from datetime import date, timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import func, select
from app.core.database import AsyncSessionLocal, init_db
from app.models import (
    CategoriaCaso,
    Caso,
    Curso,
    Docente,
    EstadoCaso,
    Estudiante,
    Institucion,
    PrioridadCaso,
    Representante,
    Seguimiento,
    TipoIntervencion,
    TipoParticipante,
)
from app.services.casos_service import generar_codigo

random.seed(42)

# ── Datos ficticios ──────────────────────────────────────────────────

NOMBRES = [
    "Carlos", "María", "Juan", "Ana", "Pedro", "Lucía", "Diego", "Sofía",
    "Miguel", "Valentina", "Andrés", "Camila", "José", "Isabella", "Luis",
    "Daniela", "Fernando", "Gabriela", "Ricardo", "Natalia",
]

APELLIDOS = [
    "García", "Rodríguez", "Martínez", "López", "Andrade", "González",
    "Pérez", "Sánchez", "Ramírez", "Torres", "Cevallos", "Guamán", "Zambrano",
    "Vera", "Chiluisa", "Morales", "Quishpe", "Toapanta", "Salazar", "Vásquez",
]

CURSOS = [
    ("OCTAVO EGB", "A"), ("OCTAVO EGB", "B"),
    ("NOVENO EGB", "A"), ("DÉCIMO EGB", "A"),
    ("PRIMERO BGU", "A"), ("SEGUNDO BGU", "A"), ("TERCERO BGU", "A"),
]

EDAD_POR_CURSO = {
    "OCTAVO EGB": 12, "NOVENO EGB": 13, "DÉCIMO EGB": 14,
    "PRIMERO BGU": 15, "SEGUNDO BGU": 16, "TERCERO BGU": 17,
}

ESTUDIANTES_POR_CURSO = 6


def nombre_random() -> str:
    return f"{random.choice(NOMBRES)} {random.choice(APELLIDOS)} {random.choice(APELLIDOS)}"


def cedula_random(usadas: set) -> str:
    while True:
        cedula = f"{random.randint(1, 24):02d}{random.randint(0, 99999999):08d}"
        if cedula not in usadas:
            usadas.add(cedula)
            return cedula


def telefono_random() -> str:
    return f"09{random.randint(0, 99999999):08d}"


async def seed_datos():
    await init_db()
    async with AsyncSessionLocal() as session:
        total = (await session.execute(select(func.count()).select_from(Estudiante))).scalar_one()
        if total:
            print(f"Ya existen {total} estudiantes; no se insertan datos.")
            return

        categorias = (await session.execute(select(CategoriaCaso.nombre))).scalars().all()
        if not categorias:
            print("No hay categorías de caso. Ejecute primero scripts/seed_categorias.py")
            return

        institucion = Institucion(
            nombre="Unidad Educativa Fiscal Juan Montalvo",
            amie="17H00123",
            distrito="17D05",
            autoridad="MSc. Patricia Herrera",
            telefono="0987654321",
            anio_lectivo="2025-2026",
            provincia="Pichincha",
            canton="Quito",
        )
        session.add(institucion)

        cedulas: set[str] = set()
        cursos = [Curso(nombre=n, paralelo=p) for n, p in CURSOS]
        session.add_all(cursos)
        await session.flush()
        print(f"  + {len(cursos)} cursos")

        tutores = []
        for curso in cursos:
            tutor = Docente(
                nombre_completo=f"Lic. {nombre_random()}",
                cedula=cedula_random(cedulas),
                email=f"docente{curso.id}@educacion.gob.ec",
                telefono=telefono_random(),
                es_tutor=True,
                tutor_de_curso_id=curso.id,
            )
            tutores.append(tutor)
        session.add_all(tutores)
        await session.flush()
        print(f"  + {len(tutores)} docentes tutores")

        estudiantes = []
        hoy = date.today()
        for curso, tutor in zip(cursos, tutores):
            for _ in range(ESTUDIANTES_POR_CURSO):
                nombre = nombre_random()
                apellidos = " ".join(nombre.split()[1:])
                representante = Representante(
                    nombre_completo=f"{random.choice(NOMBRES)} {apellidos}",
                    cedula=cedula_random(cedulas),
                    edad=random.randint(30, 55),
                    telefono=telefono_random(),
                    direccion="Quito",
                )
                session.add(representante)
                await session.flush()
                edad = EDAD_POR_CURSO[curso.nombre]
                estudiantes.append(Estudiante(
                    nombre_completo=nombre,
                    cedula=cedula_random(cedulas),
                    genero=random.choice(["Masculino", "Femenino"]),
                    fecha_nacimiento=date(hoy.year - edad, random.randint(1, 12), random.randint(1, 28)),
                    curso=curso.nombre,
                    paralelo=curso.paralelo,
                    tutor_id=tutor.id,
                    representante_id=representante.id,
                ))
        session.add_all(estudiantes)
        await session.flush()
        print(f"  + {len(estudiantes)} estudiantes con su representante")

        casos = 0
        for i, estudiante in enumerate(random.sample(estudiantes, k=len(estudiantes) // 4)):
            apertura = hoy - timedelta(days=random.randint(5, 90))
            caso = Caso(
                codigo=generar_codigo(institucion.nombre, estudiante.nombre_completo, apertura, 1000 + i),
                estudiante_id=estudiante.id,
                categoria=random.choice(categorias),
                prioridad=random.choice([PrioridadCaso.BAJA, PrioridadCaso.MEDIA, PrioridadCaso.ALTA]),
                estado=random.choice([EstadoCaso.ABIERTO, EstadoCaso.EN_PROCESO]),
                fecha_apertura=apertura,
                fecha_vencimiento=apertura + timedelta(days=30),
                descripcion="Caso detectado por el tutor del curso.",
            )
            session.add(caso)
            await session.flush()
            for n in range(random.randint(0, 3)):
                session.add(Seguimiento(
                    caso_id=caso.id,
                    fecha=apertura + timedelta(days=7 * (n + 1)),
                    descripcion="Entrevista de seguimiento con el estudiante.",
                    responsable="Psic. DECE",
                    tipo_intervencion=random.choice([TipoIntervencion.INDIVIDUAL, TipoIntervencion.FAMILIAR]),
                    es_efectivo=True,
                    tipos_participante=[TipoParticipante.ESTUDIANTE],
                ))
            casos += 1
        print(f"  + {casos} casos con seguimientos")

        await session.commit()
    print("Listo.")


if __name__ == "__main__":
    asyncio.run(seed_datos())
