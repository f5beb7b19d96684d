"""Exportación de listados a PDF (reportlab) y CSV (pandas)."""
import csv
import logging
from datetime import date, datetime
from io import BytesIO
from xml.sax.saxutils import escape

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import landscape, letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.core.excepciones import RegistroNoEncontrado
from app.models import (
    ActividadPreventiva,
    Caso,
    CasoEmbarazo,
    Cita,
    Curso,
    Docente,
    Estudiante,
    RegistroNomina,
    Representante,
    Seguimiento,
)
from app.services.casos_service import enmascarar_categoria, semaforo
from app.services.configuracion_service import obtener_institucion
from app.services.embarazo_service import estado_embarazo
from app.services.repositorio import Repositorio

logger = logging.getLogger(__name__)

# ── Colores institucionales ───────────────────────────────────────────
NAVY = colors.HexColor("#1B2A4A")
GRAY = colors.HexColor("#6B7280")
GRAY_LIGHT = colors.HexColor("#F3F4F6")

_MARGEN = 0.6 * inch
# topMargin alto para dejar espacio al header dibujado en canvas
_TOP_MARGIN = 1.4 * inch
# Con más columnas que esto la página va apaisada
_MAX_COLUMNAS_VERTICAL = 5


def _fmt(valor) -> str:
    if valor is None:
        return ""
    if isinstance(valor, bool):
        return "Sí" if valor else "No"
    if isinstance(valor, (date, datetime)):
        return valor.strftime("%d/%m/%Y")
    if isinstance(valor, (list, tuple)):
        return ", ".join(str(v) for v in valor)
    return str(valor)


def _make_page_callback(titulo: str, institucion: str, pagesize):
    """Dibuja nombre de la institución, línea separadora, título y número de página."""

    def _dibujar_pagina(canvas, doc):
        canvas.saveState()
        ancho, alto = pagesize
        izq, der = _MARGEN, ancho - _MARGEN
        top_y = alto - 0.5 * inch

        canvas.setFont("Helvetica-Bold", 9)
        canvas.setFillColor(NAVY)
        canvas.drawString(izq, top_y, institucion.upper())
        canvas.drawRightString(der, top_y, "DEPARTAMENTO DE CONSEJERÍA ESTUDIANTIL")

        sep_y = top_y - 8
        canvas.setStrokeColor(NAVY)
        canvas.setLineWidth(1.5)
        canvas.line(izq, sep_y, der, sep_y)

        canvas.setFont("Helvetica-Bold", 14)
        canvas.drawCentredString(ancho / 2, sep_y - 22, titulo)

        canvas.setFont("Helvetica", 8)
        canvas.setFillColor(GRAY)
        canvas.drawRightString(der, 0.35 * inch, f"Página {doc.page}")
        canvas.restoreState()

    return _dibujar_pagina


def _tabla(headers: list[str], rows: list[list[str]], ancho_disponible: float) -> Table:
    """Tabla con estilo institucional; las celdas largas se ajustan en varias líneas."""
    estilo_celda = ParagraphStyle("Celda", fontName="Helvetica", fontSize=8, leading=10)
    data = [headers] + [[Paragraph(escape(c), estilo_celda) for c in fila] for fila in rows]
    col_widths = [ancho_disponible / max(len(headers), 1)] * len(headers)
    table = Table(data, colWidths=col_widths, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), NAVY),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, 0), 9),
        ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
        ("TOPPADDING", (0, 0), (-1, 0), 8),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#D1D5DB")),
        *[
            ("BACKGROUND", (0, i), (-1, i), GRAY_LIGHT)
            for i in range(2, len(data), 2)
        ],
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]))
    return table


def generar_pdf(titulo: str, columnas: list[str], filas: list[list], institucion: str = "") -> bytes:
    """Documento con encabezado institucional y una tabla con `columnas` y `filas`."""
    pagesize = landscape(letter) if len(columnas) > _MAX_COLUMNAS_VERTICAL else letter
    buf = BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=pagesize,
        topMargin=_TOP_MARGIN,
        bottomMargin=_MARGEN,
        leftMargin=_MARGEN,
        rightMargin=_MARGEN,
        title=titulo,
    )
    page_cb = _make_page_callback(titulo, institucion or "Unidad Educativa", pagesize)
    estilo_meta = ParagraphStyle(
        "MetaReporte", parent=getSampleStyleSheet()["Normal"], fontSize=9, textColor=GRAY,
    )
    elementos = [
        Paragraph(f"Generado: {datetime.now().strftime('%d/%m/%Y %H:%M')} · {len(filas)} registro(s)", estilo_meta),
        Spacer(1, 0.2 * inch),
    ]
    if filas:
        texto = [[_fmt(v) for v in fila] for fila in filas]
        elementos.append(_tabla(columnas, texto, doc.width))
    else:
        elementos.append(Paragraph("No hay registros para mostrar.", getSampleStyleSheet()["Normal"]))
    doc.build(elementos, onFirstPage=page_cb, onLaterPages=page_cb)
    return buf.getvalue()


def generar_csv(columnas: list[str], filas: list[list]) -> bytes:
    """CSV UTF-8 con BOM (para Excel), todos los valores entre comillas."""
    df = pd.DataFrame([[_fmt(v) for v in fila] for fila in filas], columns=columnas)
    texto = df.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\r\n")
    return texto.encode("utf-8-sig")


# ── Listados exportables ─────────────────────────────────────────────


async def _estudiantes(repo: Repositorio):
    result = await repo.db.execute(
        select(Estudiante)
        .options(selectinload(Estudiante.representante), selectinload(Estudiante.tutor))
        .order_by(Estudiante.curso, Estudiante.paralelo, Estudiante.nombre_completo)
    )
    columnas = ["Cédula", "Nombre", "Curso", "Paralelo", "Género", "Representante", "Tutor"]
    filas = [
        [e.cedula, e.nombre_completo, e.curso, e.paralelo, e.genero,
         e.representante.nombre_completo if e.representante else "",
         e.tutor.nombre_completo if e.tutor else ""]
        for e in result.scalars().all()
    ]
    return "Listado de Estudiantes", columnas, filas


async def _representantes(repo: Repositorio):
    filas = [
        [r.cedula, r.nombre_completo, r.telefono, r.direccion]
        for r in await repo.consultar(Representante, orden=Representante.nombre_completo)
    ]
    return "Listado de Representantes", ["Cédula", "Nombre", "Teléfono", "Dirección"], filas


async def _docentes(repo: Repositorio):
    cursos = {c.id: f'{c.nombre} "{c.paralelo}"' for c in await repo.consultar(Curso)}
    filas = [
        [d.cedula, d.nombre_completo, d.email, d.telefono,
         cursos.get(d.tutor_de_curso_id, "") if d.es_tutor else ""]
        for d in await repo.consultar(Docente, orden=Docente.nombre_completo)
    ]
    return "Listado de Docentes", ["Cédula", "Nombre", "Correo", "Teléfono", "Tutor de"], filas


async def _cursos(repo: Repositorio):
    filas = [
        [c.nombre, c.paralelo, c.jornada]
        for c in await repo.consultar(Curso, orden=[Curso.nombre, Curso.paralelo])
    ]
    return "Listado de Cursos", ["Curso", "Paralelo", "Jornada"], filas


async def _casos(repo: Repositorio):
    result = await repo.db.execute(
        select(Caso).options(selectinload(Caso.estudiante)).order_by(Caso.fecha_apertura.desc())
    )
    columnas = ["Código", "Estudiante", "Categoría", "Prioridad", "Estado", "Apertura", "Vencimiento", "Semáforo"]
    filas = [
        [c.codigo, c.estudiante.nombre_completo if c.estudiante else "",
         enmascarar_categoria(c.categoria), c.prioridad, c.estado,
         c.fecha_apertura, c.fecha_vencimiento, semaforo(c)]
        for c in result.scalars().all()
    ]
    return "Listado de Casos", columnas, filas


async def _seguimientos(repo: Repositorio):
    casos = {c.id: c.codigo for c in await repo.consultar(Caso)}
    filas = [
        [casos.get(s.caso_id, ""), s.fecha, s.responsable, s.tipo_intervencion, s.descripcion,
         s.es_efectivo]
        for s in await repo.consultar(Seguimiento, orden=[Seguimiento.fecha.desc(), Seguimiento.id.desc()])
    ]
    columnas = ["Caso", "Fecha", "Responsable", "Intervención", "Descripción", "Efectivo"]
    return "Historial de Seguimientos", columnas, filas


async def _citas(repo: Repositorio):
    filas = [
        [c.fecha, f"{c.hora_inicio} - {c.hora_fin}", c.titulo, c.motivo, c.estado]
        for c in await repo.consultar(Cita, orden=[Cita.fecha, Cita.hora_inicio])
    ]
    return "Agenda de Citas", ["Fecha", "Horario", "Título", "Motivo", "Estado"], filas


async def _actividades(repo: Repositorio):
    filas = [
        [a.fecha, a.tema, a.publico, a.institucion_cooperante, a.total_asistentes, a.ejecutada]
        for a in await repo.consultar(ActividadPreventiva, orden=ActividadPreventiva.fecha)
    ]
    columnas = ["Fecha", "Tema", "Público", "Cooperante", "Asistentes", "Ejecutada"]
    return "Actividades Preventivas", columnas, filas


async def _embarazos(repo: Repositorio):
    nombres = {e.id: e.nombre_completo for e in await repo.consultar(Estudiante)}
    filas = [
        [nombres.get(p.estudiante_id, ""), p.fecha_inicio_embarazo, p.fecha_probable_parto,
         p.fecha_parto, p.alto_riesgo, estado_embarazo(p)]
        for p in await repo.consultar(CasoEmbarazo, orden=CasoEmbarazo.fecha_inicio_embarazo)
    ]
    columnas = ["Estudiante", "Inicio", "Parto probable", "Parto", "Alto riesgo", "Estado"]
    return "Casos de Embarazo, Maternidad y Paternidad", columnas, filas


async def _nomina(repo: Repositorio):
    filas = [
        [r.cedula, r.nombre_completo, r.curso, r.paralelo, r.cedula_representante,
         r.nombre_representante, r.estado]
        for r in await repo.consultar(RegistroNomina, orden=RegistroNomina.nombre_completo)
    ]
    columnas = ["Cédula", "Nombre", "Curso", "Paralelo", "Cédula repr.", "Representante", "Estado"]
    return "Nómina de Estudiantes", columnas, filas


LISTADOS = {
    "estudiantes": _estudiantes,
    "representantes": _representantes,
    "docentes": _docentes,
    "cursos": _cursos,
    "casos": _casos,
    "seguimientos": _seguimientos,
    "citas": _citas,
    "actividades": _actividades,
    "embarazos": _embarazos,
    "nomina": _nomina,
}


async def exportar(repo: Repositorio, recurso: str, formato: str) -> tuple[bytes, str, str]:
    """Devuelve (contenido, media_type, nombre_archivo)."""
    listado = LISTADOS.get(recurso)
    if listado is None:
        raise RegistroNoEncontrado(f'No existe el listado "{recurso}".')
    titulo, columnas, filas = await listado(repo)
    sello = date.today().strftime("%Y%m%d")
    if formato == "csv":
        return generar_csv(columnas, filas), "text/csv; charset=utf-8", f"{recurso}_{sello}.csv"
    institucion = await obtener_institucion(repo)
    contenido = generar_pdf(titulo, columnas, filas, institucion.nombre if institucion else "")
    logger.info("Exportado %s (%d filas) a PDF", recurso, len(filas))
    return contenido, "application/pdf", f"{recurso}_{sello}.pdf"
