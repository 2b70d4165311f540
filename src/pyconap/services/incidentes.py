"""Incident lifecycle: reporting, follow-up and state transitions."""

from __future__ import annotations

from datetime import datetime

from pyconap._constants import SYSTEM_ACTOR
from pyconap.exceptions import InvalidTransitionError
from pyconap.models._base import Seguimiento, SeguimientoForm, utcnow
from pyconap.models.incidente import EstadoIncidente, Incidente, IncidenteForm
from pyconap.services._common import cambio_estado, form_patch, new_id
from pyconap.validators import require_fields

_TRANSITIONS: dict[EstadoIncidente, frozenset[EstadoIncidente]] = {
    EstadoIncidente.REPORTADO: frozenset({EstadoIncidente.EN_ATENCION, EstadoIncidente.ESCALADO}),
    EstadoIncidente.EN_ATENCION: frozenset({EstadoIncidente.ESCALADO, EstadoIncidente.RESUELTO}),
    EstadoIncidente.ESCALADO: frozenset({EstadoIncidente.EN_ATENCION, EstadoIncidente.RESUELTO}),
    EstadoIncidente.RESUELTO: frozenset(),
}


def create_incidente(
    form: IncidenteForm,
    guardarecurso: str | None = None,
    *,
    now: datetime | None = None,
) -> Incidente:
    require_fields({"titulo": form.titulo, "descripcion": form.descripcion})
    fecha = now or utcnow()
    return Incidente(
        id=new_id(),
        titulo=form.titulo,
        descripcion=form.descripcion,
        gravedad=form.gravedad,
        estado=EstadoIncidente.REPORTADO,
        area_protegida=form.area_protegida or None,
        guardarecurso=guardarecurso,
        fecha_incidente=fecha,
        fecha_reporte=fecha,
        personas_involucradas=form.personas_involucradas or None,
        observaciones=form.observaciones or None,
        seguimiento=(
            Seguimiento(
                fecha=fecha,
                accion="Reporte inicial",
                responsable=SYSTEM_ACTOR,
                observaciones="Incidente reportado a través del sistema",
            ),
        ),
    )


def update_incidente(incidente: Incidente, form: IncidenteForm) -> Incidente:
    return incidente.merged(form_patch(form))


def agregar_seguimiento(
    incidente: Incidente,
    form: SeguimientoForm,
    responsable: str,
    *,
    now: datetime | None = None,
) -> Incidente:
    """Append a manual follow-up entry to the incident timeline."""
    require_fields({"accion": form.accion})
    entry = Seguimiento(
        fecha=now or utcnow(),
        accion=form.accion,
        responsable=responsable,
        observaciones=form.observaciones,
    )
    return incidente.merged({"seguimiento": (*incidente.seguimiento, entry)})


# ------------------------------------------------------------------
# Transitions
# ------------------------------------------------------------------


def is_valid_transition(current: EstadoIncidente, nuevo: EstadoIncidente) -> bool:
    return nuevo in _TRANSITIONS[current]


def get_allowed_next(current: EstadoIncidente) -> list[EstadoIncidente]:
    return [estado for estado in EstadoIncidente if estado in _TRANSITIONS[current]]


def apply_transition(
    incidente: Incidente,
    nuevo: EstadoIncidente,
    responsable: str = SYSTEM_ACTOR,
    *,
    now: datetime | None = None,
) -> Incidente:
    """Move *incidente* to *nuevo*, recording the change on its timeline.

    Reaching ``Resuelto`` stamps ``fecha_resolucion``.
    """
    if not is_valid_transition(incidente.estado, nuevo):
        raise InvalidTransitionError("Incidente", incidente.estado, nuevo)
    fecha = now or utcnow()
    patch: dict[str, object] = {
        "estado": nuevo,
        "seguimiento": (*incidente.seguimiento, cambio_estado(incidente.estado, nuevo, responsable, fecha=fecha)),
    }
    if nuevo is EstadoIncidente.RESUELTO:
        patch["fecha_resolucion"] = fecha
    return incidente.merged(patch)
