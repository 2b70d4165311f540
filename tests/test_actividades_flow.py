from __future__ import annotations

from datetime import date

import pytest

from pyconap.exceptions import ConapValidationError
from pyconap.models._base import Coordenadas, PuntoRuta
from pyconap.models.actividad import Actividad, ActividadForm, EstadoActividad
from pyconap.models.hallazgo import HallazgoForm, Prioridad
from pyconap.services import actividades
from pyconap.services.hallazgos import create_hallazgo
from pyconap.state.store import ActividadesStore, Snapshot


def _store_with(actividad: Actividad) -> tuple[ActividadesStore, list[Snapshot]]:
    store = ActividadesStore([actividad])
    seen: list[Snapshot] = []
    store.subscribe(seen.append)
    return store, seen


def test_programada_to_completada_with_one_hallazgo() -> None:
    store, seen = _store_with(Actividad(id="x", tipo="Patrullaje", fecha=date(2024, 3, 1)))
    hallazgo = create_hallazgo(
        HallazgoForm(titulo="Huellas de jaguar", descripcion="Junto al sendero", prioridad=Prioridad.ALTA),
        guardarecurso="g-1",
    )

    assert actividades.iniciar(store, "x", "08:00", Coordenadas(lat=17.22, lng=-89.62)) is True
    assert actividades.completar(
        store,
        "x",
        "10:00",
        Coordenadas(lat=17.23, lng=-89.61),
        hallazgos=[hallazgo],
        ruta=[PuntoRuta(lat=17.22, lng=-89.62), PuntoRuta(lat=17.23, lng=-89.61)],
    ) is True

    final = store.get_actividad("x")
    assert final.estado is EstadoActividad.COMPLETADA
    assert final.hora_inicio == "08:00"
    assert final.hora_fin == "10:00"
    assert len(final.hallazgos) == 1
    assert final.coordenadas_inicio == Coordenadas(lat=17.22, lng=-89.62)
    assert final.tiene_gps
    assert [s[0].estado for s in seen] == [EstadoActividad.EN_PROGRESO, EstadoActividad.COMPLETADA]


def test_completar_requires_en_progreso() -> None:
    store, seen = _store_with(Actividad(id="x", tipo="Ronda"))

    assert actividades.completar(store, "x", "10:00") is False

    assert store.get_actividad("x").estado is EstadoActividad.PROGRAMADA
    assert seen == []


def test_iniciar_twice_is_rejected() -> None:
    store, _ = _store_with(Actividad(id="x", tipo="Ronda"))

    assert actividades.iniciar(store, "x", "08:00") is True
    assert actividades.iniciar(store, "x", "09:00") is False
    assert store.get_actividad("x").hora_inicio == "08:00"


def test_missing_actividad_returns_false() -> None:
    store = ActividadesStore()
    assert actividades.iniciar(store, "nope", "08:00") is False


def test_invalid_hora_is_rejected_by_model() -> None:
    store, _ = _store_with(Actividad(id="x", tipo="Ronda"))

    with pytest.raises(ConapValidationError):
        actividades.iniciar(store, "x", "8 am")


def test_create_actividad_requires_fields() -> None:
    with pytest.raises(ConapValidationError) as exc_info:
        actividades.create_actividad(ActividadForm(tipo="Patrullaje"))

    assert set(exc_info.value.missing_fields) == {"fecha", "guardarecurso"}


def test_create_actividad_is_programada() -> None:
    actividad = actividades.create_actividad(
        ActividadForm(tipo="Patrullaje", fecha=date(2024, 3, 1), guardarecurso="g-1", hora_inicio="07:30")
    )

    assert actividad.estado is EstadoActividad.PROGRAMADA
    assert actividad.hora_inicio == "07:30"
    assert len(actividad.id) == 32
