"""Activity lifecycle driven from the daily-log view.

Activities move ``Programada -> En Progreso -> Completada``. :func:`iniciar`
and :func:`completar` mutate the shared :class:`ActividadesStore`, so every
subscribed view sees the change at once.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from pyconap.exceptions import InvalidTransitionError
from pyconap.models._base import Coordenadas, PuntoRuta
from pyconap.models.actividad import Actividad, ActividadForm, EstadoActividad
from pyconap.models.evidencia import EvidenciaFotografica
from pyconap.models.hallazgo import Hallazgo
from pyconap.services._common import new_id
from pyconap.state.store import ActividadesStore
from pyconap.validators import require_fields

_logger = logging.getLogger(__name__)

_TRANSITIONS: dict[EstadoActividad, frozenset[EstadoActividad]] = {
    EstadoActividad.PROGRAMADA: frozenset({EstadoActividad.EN_PROGRESO}),
    EstadoActividad.EN_PROGRESO: frozenset({EstadoActividad.COMPLETADA}),
    EstadoActividad.COMPLETADA: frozenset(),
}


def is_valid_transition(current: EstadoActividad, nuevo: EstadoActividad) -> bool:
    return nuevo in _TRANSITIONS[current]


def get_allowed_next(current: EstadoActividad) -> list[EstadoActividad]:
    return [estado for estado in EstadoActividad if estado in _TRANSITIONS[current]]


def apply_transition(actividad: Actividad, nuevo: EstadoActividad, **fields: Any) -> Actividad:
    """Return *actividad* moved to *nuevo* with extra *fields* merged in."""
    if not is_valid_transition(actividad.estado, nuevo):
        raise InvalidTransitionError("Actividad", actividad.estado, nuevo)
    return actividad.merged({**fields, "estado": nuevo})


def create_actividad(form: ActividadForm) -> Actividad:
    """Local planning record, used when creating activities offline."""
    require_fields({"tipo": form.tipo, "fecha": form.fecha, "guardarecurso": form.guardarecurso})
    return Actividad(
        id=new_id(),
        codigo=form.codigo or None,
        tipo=form.tipo,
        descripcion=form.descripcion,
        fecha=form.fecha,
        hora_inicio=form.hora_inicio,
        hora_fin=form.hora_fin,
        estado=EstadoActividad.PROGRAMADA,
        guardarecurso=form.guardarecurso,
        area_protegida=form.area_protegida or None,
        coordenadas_inicio=form.coordenadas,
    )


def _gate(store: ActividadesStore, actividad_id: str, nuevo: EstadoActividad) -> Actividad | None:
    actividad = store.get_actividad(actividad_id)
    if actividad is None:
        _logger.debug("Actividad %s not found; cannot move to %s", actividad_id, nuevo)
        return None
    if not is_valid_transition(actividad.estado, nuevo):
        _logger.debug("Actividad %s is %s; cannot move to %s", actividad_id, actividad.estado, nuevo)
        return None
    return actividad


def iniciar(
    store: ActividadesStore,
    actividad_id: str,
    hora_inicio: str,
    coordenadas: Coordenadas | None = None,
) -> bool:
    """Start a Programada activity, recording the actual start time."""
    if _gate(store, actividad_id, EstadoActividad.EN_PROGRESO) is None:
        return False
    fields: dict[str, Any] = {"estado": EstadoActividad.EN_PROGRESO, "hora_inicio": hora_inicio}
    if coordenadas is not None:
        fields["coordenadas_inicio"] = coordenadas
    return store.update_actividad(actividad_id, fields)


def completar(
    store: ActividadesStore,
    actividad_id: str,
    hora_fin: str,
    coordenadas: Coordenadas | None = None,
    hallazgos: Iterable[Hallazgo] = (),
    evidencias: Iterable[EvidenciaFotografica] = (),
    ruta: Iterable[PuntoRuta] = (),
    observaciones: str | None = None,
) -> bool:
    """Complete an activity that is En Progreso.

    Findings and evidence are appended to whatever the activity already
    carries; a non-empty *ruta* replaces the recorded route.
    """
    actividad = _gate(store, actividad_id, EstadoActividad.COMPLETADA)
    if actividad is None:
        return False
    fields: dict[str, Any] = {
        "estado": EstadoActividad.COMPLETADA,
        "hora_fin": hora_fin,
        "hallazgos": (*actividad.hallazgos, *hallazgos),
        "evidencias": (*actividad.evidencias, *evidencias),
    }
    if coordenadas is not None:
        fields["coordenadas_fin"] = coordenadas
    puntos = tuple(ruta)
    if puntos:
        fields["ruta"] = puntos
    if observaciones:
        fields["observaciones"] = observaciones
    return store.update_actividad(actividad_id, fields)
