"""Data preparation for the monthly activity and route reports.

Everything here returns plain data; rendering to PDF or text happens in
the presentation layer.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date

from pyconap._constants import ACTIVIDAD_CATEGORIAS, CATEGORIA_OTRAS, MESES, MINUTOS_ENTRE_PUNTOS
from pyconap.exceptions import ConapValidationError
from pyconap.models._base import Coordenadas
from pyconap.models.actividad import Actividad, EstadoActividad
from pyconap.models.cumplimiento import MetricaCumplimiento
from pyconap.queries import QueryScope, filter_by_date_range

_EARTH_RADIUS_KM = 6371.0088


@dataclass(frozen=True)
class FilaReporte:
    no: int
    nombre: str
    unidad: str


#: The 13 standard rows of the monthly activity report.
ACTIVIDADES_REPORTE: tuple[FilaReporte, ...] = (
    FilaReporte(1, "Patrullaje de control y combate", "Día"),
    FilaReporte(
        2,
        "Patrullaje de control y combate según lo establecido en el plan de protección de fauna silvestre",
        "Día",
    ),
    FilaReporte(3, "Rondas de vigilancia", "Día"),
    FilaReporte(4, "Coordinación de pesca y recolección", "Día"),
    FilaReporte(5, "Coordinación con el SAT", "Día"),
    FilaReporte(6, "Protección de fauna silvestre", "Día"),
    FilaReporte(7, "Verificación de permisos de pesca", "Día"),
    FilaReporte(8, "Referencia o denuncia", "Día"),
    FilaReporte(9, "Inventarios de equipos, coordinación con INAB", "Informe"),
    FilaReporte(10, "Reuniones, coordinación con SAT", "Informe"),
    FilaReporte(11, "Mantenimiento de instalaciones", "Informe"),
    FilaReporte(12, "Preparación de estadísticas y otros", "Día"),
    FilaReporte(13, "Preparación de capacitaciones / Educación Ambiental", "Día"),
)


#: Column headers matching the rows built by :func:`generar_datos_tabla`.
ENCABEZADOS_TABLA: tuple[str, ...] = ("No.", "Actividades", "Unidad", *MESES)


@dataclass(frozen=True)
class Bounds:
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float


@dataclass(frozen=True)
class EstadisticasGenerales:
    total_actividades: int
    completadas: int
    en_progreso: int
    programadas: int
    cumplimiento_promedio: float


@dataclass(frozen=True)
class EstadisticasRutas:
    total_rutas: int
    rutas_con_gps: int
    distancia_total_km: float
    duracion_total_min: int


# ------------------------------------------------------------------
# Monthly activity report
# ------------------------------------------------------------------


def actividades_completadas(actividades: Iterable[Actividad], guardarecurso_id: str) -> list[Actividad]:
    return [a for a in actividades if a.guardarecurso == guardarecurso_id and a.estado is EstadoActividad.COMPLETADA]


def categoria_reporte(tipo: str) -> int:
    return ACTIVIDAD_CATEGORIAS.get(tipo, CATEGORIA_OTRAS)


def agrupar_actividades_por_tipo_y_mes(actividades: Iterable[Actividad]) -> dict[str, int]:
    """Count activities per ``"<categoria>-<mes>"`` key.

    ``mes`` is zero-based (January is ``0``). Activities without a date
    are skipped.
    """
    counts: Counter[str] = Counter()
    for actividad in actividades:
        if actividad.fecha is None:
            continue
        counts[f"{categoria_reporte(actividad.tipo)}-{actividad.fecha.month - 1}"] += 1
    return dict(counts)


def generar_datos_tabla(agrupadas: dict[str, int]) -> list[list[int | str]]:
    """Report rows: number, name, unit, then twelve month cells ("-" for none)."""
    filas: list[list[int | str]] = []
    for fila in ACTIVIDADES_REPORTE:
        celdas: list[int | str] = [fila.no, fila.nombre, fila.unidad]
        celdas.extend(agrupadas.get(f"{fila.no}-{mes}", "-") for mes in range(12))
        filas.append(celdas)
    return filas


def calcular_porcentaje_cumplimiento(actual: float, meta: float) -> float:
    """Compliance percentage capped at 100; a non-positive goal yields 0."""
    if meta <= 0:
        return 0.0
    return min(actual / meta * 100, 100.0)


def calcular_estadisticas_generales(
    actividades: Iterable[Actividad],
    metricas: Iterable[MetricaCumplimiento] = (),
    *,
    scope: QueryScope | None = None,
) -> EstadisticasGenerales:
    """Dashboard counters by activity state plus the mean compliance of *metricas*.

    A restricted *scope* limits both inputs to the session's own ranger.
    """
    scope = scope or QueryScope.unrestricted()
    visibles = scope.apply(actividades, "guardarecurso")
    propias = scope.apply(metricas, "guardarecurso")
    por_estado = Counter(a.estado for a in visibles)
    promedio = (
        sum(calcular_porcentaje_cumplimiento(m.actual, m.meta) for m in propias) / len(propias) if propias else 0.0
    )
    return EstadisticasGenerales(
        total_actividades=len(visibles),
        completadas=por_estado[EstadoActividad.COMPLETADA],
        en_progreso=por_estado[EstadoActividad.EN_PROGRESO],
        programadas=por_estado[EstadoActividad.PROGRAMADA],
        cumplimiento_promedio=promedio,
    )


# ------------------------------------------------------------------
# Routes
# ------------------------------------------------------------------


def haversine_km(a: Coordenadas, b: Coordenadas) -> float:
    lat1, lat2 = math.radians(a.lat), math.radians(b.lat)
    dlat = lat2 - lat1
    dlng = math.radians(b.lng - a.lng)
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    return 2 * _EARTH_RADIUS_KM * math.asin(math.sqrt(h))


def calcular_distancia_ruta(puntos: Sequence[Coordenadas]) -> float:
    """Length of a recorded route in kilometres."""
    return sum(haversine_km(a, b) for a, b in zip(puntos, puntos[1:]))


def calcular_duracion_ruta(numero_puntos: int) -> int:
    """Estimated minutes, assuming one GPS fix every five minutes."""
    if numero_puntos < 2:
        return 0
    return (numero_puntos - 1) * MINUTOS_ENTRE_PUNTOS


def estadisticas_rutas(rutas: Iterable[Actividad]) -> EstadisticasRutas:
    total = con_gps = duracion = 0
    distancia = 0.0
    for ruta in rutas:
        total += 1
        if not ruta.tiene_gps:
            continue
        con_gps += 1
        distancia += calcular_distancia_ruta(ruta.ruta)
        duracion += calcular_duracion_ruta(len(ruta.ruta))
    return EstadisticasRutas(
        total_rutas=total,
        rutas_con_gps=con_gps,
        distancia_total_km=round(distancia, 2),
        duracion_total_min=duracion,
    )


def calcular_bounds(puntos: Sequence[Coordenadas]) -> Bounds:
    if not puntos:
        raise ValueError("calcular_bounds requires at least one point")
    lats = [p.lat for p in puntos]
    lngs = [p.lng for p in puntos]
    return Bounds(min_lat=min(lats), max_lat=max(lats), min_lng=min(lngs), max_lng=max(lngs))


def filtrar_rutas_para_reporte(
    rutas: Iterable[Actividad],
    guardarecurso_id: str | None,
    fecha_inicio: date | None = None,
    fecha_fin: date | None = None,
) -> list[Actividad]:
    """Routes of one ranger within an optional date range.

    Raises :class:`ConapValidationError` when no ranger is selected.
    """
    if not guardarecurso_id:
        raise ConapValidationError(
            "Por favor seleccione un guardarecurso para generar el reporte",
            missing_fields=("guardarecurso",),
        )
    propias = [r for r in rutas if r.guardarecurso == guardarecurso_id]
    return filter_by_date_range(propias, fecha_inicio, fecha_fin)


def nombre_archivo_reporte(hoy: date | None = None, *, prefijo: str = "reporte_rutas", extension: str = "txt") -> str:
    return f"{prefijo}_{(hoy or date.today()).isoformat()}.{extension}"
