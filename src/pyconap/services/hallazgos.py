"""Findings: reporting, follow-up and forward-only state progression."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from pyconap._constants import SYSTEM_ACTOR
from pyconap.exceptions import InvalidTransitionError
from pyconap.models._base import Seguimiento, SeguimientoForm, utcnow
from pyconap.models.hallazgo import EstadoHallazgo, Hallazgo, HallazgoForm
from pyconap.services._common import cambio_estado, form_patch, new_id
from pyconap.validators import require_fields

_ORDEN: tuple[EstadoHallazgo, ...] = tuple(EstadoHallazgo)


def create_hallazgo(
    form: HallazgoForm,
    guardarecurso: str | None = None,
    *,
    evidencias: Sequence[str] = (),
    now: datetime | None = None,
) -> Hallazgo:
    require_fields({"titulo": form.titulo, "descripcion": form.descripcion})
    fecha = now or utcnow()
    return Hallazgo(
        id=new_id(),
        titulo=form.titulo,
        descripcion=form.descripcion,
        prioridad=form.prioridad,
        estado=EstadoHallazgo.REPORTADO,
        ubicacion=form.ubicacion,
        coordenadas=form.coordenadas,
        area_protegida=form.area_protegida or None,
        guardarecurso=guardarecurso,
        fecha_reporte=fecha,
        observaciones=form.observaciones or None,
        evidencias=tuple(evidencias),
        seguimiento=(
            Seguimiento(
                fecha=fecha,
                accion="Reporte inicial",
                responsable=SYSTEM_ACTOR,
                observaciones="Hallazgo reportado a través del sistema",
            ),
        ),
    )


def update_hallazgo(hallazgo: Hallazgo, form: HallazgoForm) -> Hallazgo:
    return hallazgo.merged(form_patch(form))


def agregar_seguimiento(
    hallazgo: Hallazgo,
    form: SeguimientoForm,
    responsable: str,
    *,
    now: datetime | None = None,
) -> Hallazgo:
    require_fields({"accion": form.accion})
    entry = Seguimiento(
        fecha=now or utcnow(),
        accion=form.accion,
        responsable=responsable,
        observaciones=form.observaciones,
    )
    return hallazgo.merged({"seguimiento": (*hallazgo.seguimiento, entry)})


# ------------------------------------------------------------------
# Transitions
# ------------------------------------------------------------------


def is_valid_transition(current: EstadoHallazgo, nuevo: EstadoHallazgo) -> bool:
    """Any strictly later state is allowed; nothing moves backwards."""
    return _ORDEN.index(nuevo) > _ORDEN.index(current)


def get_allowed_next(current: EstadoHallazgo) -> list[EstadoHallazgo]:
    return list(_ORDEN[_ORDEN.index(current) + 1 :])


def apply_transition(
    hallazgo: Hallazgo,
    nuevo: EstadoHallazgo,
    responsable: str = SYSTEM_ACTOR,
    *,
    now: datetime | None = None,
) -> Hallazgo:
    if not is_valid_transition(hallazgo.estado, nuevo):
        raise InvalidTransitionError("Hallazgo", hallazgo.estado, nuevo)
    fecha = now or utcnow()
    patch: dict[str, object] = {
        "estado": nuevo,
        "seguimiento": (*hallazgo.seguimiento, cambio_estado(hallazgo.estado, nuevo, responsable, fecha=fecha)),
    }
    if nuevo is EstadoHallazgo.RESUELTO:
        patch["fecha_resolucion"] = fecha
    return hallazgo.merged(patch)
