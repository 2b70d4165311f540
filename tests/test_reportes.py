from __future__ import annotations

from datetime import date

import pytest

from pyconap.exceptions import ConapValidationError
from pyconap.models._base import Coordenadas, PuntoRuta
from pyconap.models.actividad import Actividad, EstadoActividad
from pyconap.models.cumplimiento import MetricaCumplimiento
from pyconap.models.usuario import Identidad, Rol
from pyconap.queries import QueryScope
from pyconap.services.reportes import (
    ENCABEZADOS_TABLA,
    actividades_completadas,
    agrupar_actividades_por_tipo_y_mes,
    calcular_bounds,
    calcular_duracion_ruta,
    calcular_estadisticas_generales,
    calcular_porcentaje_cumplimiento,
    estadisticas_rutas,
    filtrar_rutas_para_reporte,
    generar_datos_tabla,
    haversine_km,
    nombre_archivo_reporte,
)


def test_grouping_by_category_and_zero_based_month() -> None:
    actividades = [
        Actividad(id="1", tipo="Patrullaje", fecha=date(2024, 1, 3)),
        Actividad(id="2", tipo="Patrullaje de Control y Vigilancia", fecha=date(2024, 1, 20)),
        Actividad(id="3", tipo="Educación Ambiental", fecha=date(2024, 12, 1)),
        Actividad(id="4", tipo="Limpieza de senderos", fecha=date(2024, 6, 1)),
        Actividad(id="5", tipo="Ronda"),
    ]

    assert agrupar_actividades_por_tipo_y_mes(actividades) == {"1-0": 2, "13-11": 1, "12-5": 1}


def test_table_has_thirteen_rows_with_placeholders() -> None:
    filas = generar_datos_tabla({"1-0": 2})

    assert len(filas) == 13
    assert filas[0][:4] == [1, "Patrullaje de control y combate", "Día", 2]
    assert filas[0][4] == "-"
    assert len(filas[0]) == 15
    assert len(ENCABEZADOS_TABLA) == 15
    assert ENCABEZADOS_TABLA[3] == "Ene"
    assert ENCABEZADOS_TABLA[-1] == "Dic"


def test_completed_activities_of_one_ranger() -> None:
    actividades = [
        Actividad(id="1", guardarecurso="g-1", estado=EstadoActividad.COMPLETADA),
        Actividad(id="2", guardarecurso="g-1"),
        Actividad(id="3", guardarecurso="g-2", estado=EstadoActividad.COMPLETADA),
    ]
    assert [a.id for a in actividades_completadas(actividades, "g-1")] == ["1"]


@pytest.mark.parametrize(
    ("actual", "meta", "expected"),
    [(15, 20, 75.0), (30, 20, 100.0), (5, 0, 0.0)],
)
def test_porcentaje_cumplimiento(actual: float, meta: float, expected: float) -> None:
    assert calcular_porcentaje_cumplimiento(actual, meta) == pytest.approx(expected)


def test_haversine_one_degree_latitude() -> None:
    assert haversine_km(Coordenadas(lat=0, lng=0), Coordenadas(lat=1, lng=0)) == pytest.approx(111.19, rel=1e-3)


def test_route_statistics() -> None:
    ruta = (
        PuntoRuta(lat=17.0, lng=-89.0),
        PuntoRuta(lat=17.01, lng=-89.0),
        PuntoRuta(lat=17.02, lng=-89.0),
    )
    rutas = [
        Actividad(id="1", tipo="Patrullaje", ruta=ruta),
        Actividad(id="2", tipo="Patrullaje"),
    ]

    stats = estadisticas_rutas(rutas)

    assert stats.total_rutas == 2
    assert stats.rutas_con_gps == 1
    assert stats.duracion_total_min == 10
    assert stats.distancia_total_km == pytest.approx(2.22, abs=0.01)
    assert calcular_duracion_ruta(1) == 0


def test_bounds() -> None:
    bounds = calcular_bounds([Coordenadas(lat=17.1, lng=-89.7), Coordenadas(lat=17.3, lng=-89.5)])
    assert (bounds.min_lat, bounds.max_lat, bounds.min_lng, bounds.max_lng) == (17.1, 17.3, -89.7, -89.5)

    with pytest.raises(ValueError):
        calcular_bounds([])


def test_report_filter_requires_ranger() -> None:
    rutas = [
        Actividad(id="1", guardarecurso="g-1", fecha=date(2024, 2, 1)),
        Actividad(id="2", guardarecurso="g-1", fecha=date(2024, 4, 1)),
        Actividad(id="3", guardarecurso="g-2", fecha=date(2024, 2, 1)),
    ]

    with pytest.raises(ConapValidationError):
        filtrar_rutas_para_reporte(rutas, "")
    assert [r.id for r in filtrar_rutas_para_reporte(rutas, "g-1", fecha_fin=date(2024, 3, 1))] == ["1"]


def test_report_file_name() -> None:
    assert nombre_archivo_reporte(date(2024, 3, 1)) == "reporte_rutas_2024-03-01.txt"


class TestEstadisticasGenerales:
    _actividades = [
        Actividad(id="1", guardarecurso="g-1", estado=EstadoActividad.COMPLETADA),
        Actividad(id="2", guardarecurso="g-1", estado=EstadoActividad.EN_PROGRESO),
        Actividad(id="3", guardarecurso="g-2"),
        Actividad(id="4", guardarecurso="g-2", estado=EstadoActividad.COMPLETADA),
    ]
    _metricas = [
        MetricaCumplimiento(id="m1", nombre="Patrullajes", meta=20, actual=15, guardarecurso="g-1"),
        MetricaCumplimiento(id="m2", nombre="Rondas", meta=10, actual=20, guardarecurso="g-2"),
    ]

    def test_counts_everything_without_scope(self) -> None:
        stats = calcular_estadisticas_generales(self._actividades, self._metricas)

        assert (stats.total_actividades, stats.completadas, stats.en_progreso, stats.programadas) == (4, 2, 1, 1)
        assert stats.cumplimiento_promedio == pytest.approx(87.5)

    def test_ranger_scope_limits_both_inputs(self) -> None:
        scope = QueryScope.for_identity(Identidad(id="g-1", rol=Rol.GUARDARECURSO, guardarecurso_id="g-1"))

        stats = calcular_estadisticas_generales(self._actividades, self._metricas, scope=scope)

        assert (stats.total_actividades, stats.completadas, stats.en_progreso, stats.programadas) == (2, 1, 1, 0)
        assert stats.cumplimiento_promedio == pytest.approx(75.0)

    def test_unresolved_ranger_sees_nothing(self) -> None:
        stats = calcular_estadisticas_generales(
            self._actividades, self._metricas, scope=QueryScope(restricted=True)
        )

        assert stats.total_actividades == 0
        assert stats.cumplimiento_promedio == 0.0
