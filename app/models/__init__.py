"""Modelos SQLAlchemy (tablas de la base de datos)."""
from app.models.representante import Representante
from app.models.curso import Curso, Jornada
from app.models.docente import Docente
from app.models.student import Estudiante, Genero
from app.models.categoria_caso import CategoriaCaso
from app.models.caso import Caso, EstadoCaso, PrioridadCaso
from app.models.seguimiento import Seguimiento, TipoIntervencion, TipoParticipante
from app.models.cita import Cita, EstadoCita, TipoAsistente
from app.models.actividad_preventiva import ActividadPreventiva, PublicoActividad
from app.models.embarazo import AtencionSalud, CasoEmbarazo
from app.models.institucion import Institucion
from app.models.configuracion import Configuracion
from app.models.nomina import EstadoNomina, RegistroNomina

__all__ = [
    "Representante",
    "Curso",
    "Jornada",
    "Docente",
    "Estudiante",
    "Genero",
    "CategoriaCaso",
    "Caso",
    "EstadoCaso",
    "PrioridadCaso",
    "Seguimiento",
    "TipoIntervencion",
    "TipoParticipante",
    "Cita",
    "EstadoCita",
    "TipoAsistente",
    "ActividadPreventiva",
    "PublicoActividad",
    "AtencionSalud",
    "CasoEmbarazo",
    "Institucion",
    "Configuracion",
    "EstadoNomina",
    "RegistroNomina",
]
