"""Equipment inventory: creation, updates and state transitions."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import date

from pyconap.exceptions import ConapValidationError, InvalidTransitionError
from pyconap.models.equipo import Equipo, EquipoForm, EstadoEquipo, TipoEquipo
from pyconap.services._common import form_patch, new_id
from pyconap.validators import require_fields

_logger = logging.getLogger(__name__)

#: Value the assignment selector sends for "no ranger".
SIN_ASIGNAR = "none"

# First match wins; checked against the lower-cased equipment name.
_TIPO_KEYWORDS: tuple[tuple[TipoEquipo, tuple[str, ...]], ...] = (
    (TipoEquipo.GPS, ("gps",)),
    (TipoEquipo.RADIO, ("radio",)),
    (TipoEquipo.BINOCULARES, ("binocular",)),
    (TipoEquipo.CAMARA, ("cámara", "camara", "gopro")),
    (TipoEquipo.VEHICULO, ("vehículo", "vehiculo", "toyota", "ford", "chevrolet")),
    (TipoEquipo.HERRAMIENTA, ("machete", "herramienta")),
)


def infer_tipo_equipo(nombre: str) -> TipoEquipo:
    lowered = nombre.lower()
    for tipo, keywords in _TIPO_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return tipo
    return TipoEquipo.OTRO


def _normalize_asignacion(value: str | None) -> str | None:
    if value is None or value == SIN_ASIGNAR or not value.strip():
        return None
    return value


def codigo_exists(codigo: str, equipos: Iterable[Equipo], exclude_id: str | None = None) -> bool:
    """Whether *codigo* is already used by another piece of equipment (case-insensitive)."""
    wanted = codigo.strip().lower()
    return any(e.codigo.lower() == wanted and e.id != exclude_id for e in equipos)


def create_equipo(form: EquipoForm, existing: Iterable[Equipo] = (), *, today: date | None = None) -> Equipo:
    """Build a new Operativo equipment record from *form*.

    Raises :class:`ConapValidationError` when nombre or codigo is missing or
    the code is already taken.
    """
    require_fields({"nombre": form.nombre, "codigo": form.codigo})
    if codigo_exists(form.codigo, existing):
        raise ConapValidationError(f"El código {form.codigo!r} ya está registrado")
    asignado = _normalize_asignacion(form.guardarecurso_asignado)
    return Equipo(
        id=new_id(),
        nombre=form.nombre,
        codigo=form.codigo,
        marca=form.marca or None,
        modelo=form.modelo or None,
        observaciones=form.observaciones or None,
        tipo=infer_tipo_equipo(form.nombre),
        estado=EstadoEquipo.OPERATIVO,
        guardarecurso_asignado=asignado,
        fecha_asignacion=(today or date.today()) if asignado else None,
    )


def update_equipo(equipo: Equipo, form: EquipoForm, existing: Iterable[Equipo] = ()) -> Equipo:
    """Apply an edit form; estado is only changed through :func:`apply_transition`."""
    if form.codigo and codigo_exists(form.codigo, existing, exclude_id=equipo.id):
        raise ConapValidationError(f"El código {form.codigo!r} ya está registrado")
    patch = form_patch(form, exclude=frozenset({"guardarecurso_asignado"}))
    if "nombre" in patch:
        patch["tipo"] = infer_tipo_equipo(patch["nombre"])
    if "guardarecurso_asignado" in form.model_fields_set:
        if equipo.estado is EstadoEquipo.EN_REPARACION:
            patch["guardarecurso_asignado"] = None
        else:
            patch["guardarecurso_asignado"] = _normalize_asignacion(form.guardarecurso_asignado)
    return equipo.merged(patch)


# ------------------------------------------------------------------
# Transitions
# ------------------------------------------------------------------


def is_valid_transition(current: EstadoEquipo, nuevo: EstadoEquipo) -> bool:
    """Any state may move to any other state."""
    return current is not nuevo


def get_allowed_next(current: EstadoEquipo) -> list[EstadoEquipo]:
    return [estado for estado in EstadoEquipo if is_valid_transition(current, estado)]


def apply_transition(equipo: Equipo, nuevo: EstadoEquipo) -> Equipo:
    if not is_valid_transition(equipo.estado, nuevo):
        raise InvalidTransitionError("Equipo", equipo.estado, nuevo)
    patch: dict[str, object] = {"estado": nuevo}
    if nuevo is EstadoEquipo.EN_REPARACION:
        if equipo.guardarecurso_asignado is not None:
            _logger.debug("Equipo %s sent to repair; unassigning %s", equipo.id, equipo.guardarecurso_asignado)
        patch["guardarecurso_asignado"] = None
    return equipo.merged(patch)


# ------------------------------------------------------------------
# Aggregates
# ------------------------------------------------------------------


def count_by_estado(equipos: Iterable[Equipo]) -> dict[EstadoEquipo, int]:
    counts = Counter(e.estado for e in equipos)
    return {estado: counts.get(estado, 0) for estado in EstadoEquipo}


def equipos_by_guardarecurso(equipos: Sequence[Equipo], guardarecurso_id: str) -> list[Equipo]:
    return [e for e in equipos if e.guardarecurso_asignado == guardarecurso_id]
