"""Protected areas: creation, edits and activation state."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date

from pyconap.exceptions import ConapValidationError, InvalidTransitionError
from pyconap.models.area_protegida import AreaProtegida, AreaProtegidaForm, EstadoArea
from pyconap.models.guardarecurso import Guardarecurso
from pyconap.services._common import form_patch, new_id
from pyconap.validators import require_fields

_logger = logging.getLogger(__name__)

DEPARTAMENTOS_GUATEMALA: tuple[str, ...] = (
    "Petén",
    "Alta Verapaz",
    "Baja Verapaz",
    "Chimaltenango",
    "Escuintla",
    "Guatemala",
    "Quetzaltenango",
    "Huehuetenango",
    "Izabal",
    "Jalapa",
    "Jutiapa",
    "Quiché",
    "Retalhuleu",
    "Sacatepéquez",
    "San Marcos",
    "Santa Rosa",
    "Sololá",
    "Suchitepéquez",
    "Totonicapán",
    "Zacapa",
    "El Progreso",
    "Chiquimula",
)

ECOSISTEMAS_GUATEMALA: tuple[str, ...] = (
    "Bosque Tropical Húmedo",
    "Bosque Tropical Seco",
    "Bosque Nublado",
    "Humedales",
    "Manglares",
    "Sabanas",
    "Bosque Mixto",
    "Matorral Volcánico",
    "Karst",
)

_MENSAJES: dict[EstadoArea, str] = {
    EstadoArea.ACTIVO: "activado",
    EstadoArea.DESACTIVADO: "desactivado",
}


def create_area(form: AreaProtegidaForm, *, today: date | None = None) -> AreaProtegida:
    """Build a new ``Activo`` area with no rangers assigned."""
    require_fields({"nombre": form.nombre, "departamento": form.departamento})
    return AreaProtegida(
        id=new_id(),
        nombre=form.nombre,
        departamento=form.departamento,
        extension=form.extension or 0,
        fecha_creacion=form.fecha_creacion or today or date.today(),
        coordenadas=form.coordenadas,
        descripcion=form.descripcion,
        ecosistemas=form.ecosistemas,
        estado=EstadoArea.ACTIVO,
    )


def update_area(area: AreaProtegida, form: AreaProtegidaForm) -> AreaProtegida:
    """Apply an edit form; ``estado`` and the assigned rangers are kept."""
    patch = form_patch(form)
    if not form.ecosistemas:
        patch.pop("ecosistemas", None)
    return area.merged(patch)


def guardarecursos_asignados(area: AreaProtegida, guardarecursos: Iterable[Guardarecurso]) -> list[Guardarecurso]:
    return [g for g in guardarecursos if g.area_asignada == area.id]


def count_guardarecursos(area: AreaProtegida, guardarecursos: Iterable[Guardarecurso]) -> int:
    return len(guardarecursos_asignados(area, guardarecursos))


def validate_deactivation(area: AreaProtegida, guardarecursos: Iterable[Guardarecurso]) -> None:
    """Raise :class:`ConapValidationError` while rangers are still assigned to *area*."""
    asignados = count_guardarecursos(area, guardarecursos)
    if asignados:
        raise ConapValidationError(
            f"Esta área tiene {asignados} guardarecurso(s) asignado(s). "
            "Reasigne o elimine los guardarecursos antes de desactivar el área."
        )


# ------------------------------------------------------------------
# Transitions
# ------------------------------------------------------------------


def is_valid_transition(current: EstadoArea, nuevo: EstadoArea) -> bool:
    return current is not nuevo


def get_allowed_next(current: EstadoArea) -> list[EstadoArea]:
    return [estado for estado in EstadoArea if is_valid_transition(current, estado)]


def toggle_estado(current: EstadoArea) -> EstadoArea:
    return EstadoArea.DESACTIVADO if current is EstadoArea.ACTIVO else EstadoArea.ACTIVO


def apply_transition(
    area: AreaProtegida,
    nuevo: EstadoArea,
    guardarecursos: Iterable[Guardarecurso] = (),
) -> AreaProtegida:
    """Move *area* to *nuevo*.

    Deactivation is checked against *guardarecursos*, the full ranger list.
    """
    if not is_valid_transition(area.estado, nuevo):
        raise InvalidTransitionError("AreaProtegida", area.estado, nuevo)
    if nuevo is EstadoArea.DESACTIVADO:
        validate_deactivation(area, guardarecursos)
    _logger.debug("Area %s %s", area.id, _MENSAJES[nuevo])
    return area.merged({"estado": nuevo})


def estado_mensaje(nuevo: EstadoArea) -> str:
    return _MENSAJES[nuevo]
