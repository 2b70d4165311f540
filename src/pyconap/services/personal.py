"""State transitions shared by rangers and user accounts.

Both follow the same three-state model. ``Desactivado`` is terminal: a
deactivated account disappears from every list view and cannot be
brought back from the console.
"""

from __future__ import annotations

from typing import TypeVar

from pyconap.exceptions import InvalidTransitionError
from pyconap.models.guardarecurso import Guardarecurso
from pyconap.models.usuario import EstadoPersonal, Usuario

P = TypeVar("P", Guardarecurso, Usuario)

_TRANSITIONS: dict[EstadoPersonal, frozenset[EstadoPersonal]] = {
    EstadoPersonal.ACTIVO: frozenset({EstadoPersonal.SUSPENDIDO, EstadoPersonal.DESACTIVADO}),
    EstadoPersonal.SUSPENDIDO: frozenset({EstadoPersonal.ACTIVO, EstadoPersonal.DESACTIVADO}),
    EstadoPersonal.DESACTIVADO: frozenset(),
}

_MENSAJES: dict[EstadoPersonal, str] = {
    EstadoPersonal.ACTIVO: "activado",
    EstadoPersonal.SUSPENDIDO: "suspendido",
    EstadoPersonal.DESACTIVADO: "desactivado",
}


def is_valid_transition(current: EstadoPersonal, nuevo: EstadoPersonal) -> bool:
    return nuevo in _TRANSITIONS[current]


def get_allowed_next(current: EstadoPersonal) -> list[EstadoPersonal]:
    return [estado for estado in EstadoPersonal if estado in _TRANSITIONS[current]]


def apply_transition(entity: P, nuevo: EstadoPersonal) -> P:
    if not is_valid_transition(entity.estado, nuevo):
        raise InvalidTransitionError(type(entity).__name__, entity.estado, nuevo)
    return entity.merged({"estado": nuevo})


def apply_transition_pair(
    guardarecurso: Guardarecurso,
    usuario: Usuario | None,
    nuevo: EstadoPersonal,
) -> tuple[Guardarecurso, Usuario | None]:
    """Move a ranger and its paired login account to *nuevo* together.

    Both sides must allow the change; an account already in *nuevo* is
    left as is. Raises :class:`InvalidTransitionError` before either
    record changes.
    """
    if usuario is not None and usuario.estado is not nuevo and not is_valid_transition(usuario.estado, nuevo):
        raise InvalidTransitionError("Usuario", usuario.estado, nuevo)
    updated = apply_transition(guardarecurso, nuevo)
    if usuario is None or usuario.estado is nuevo:
        return updated, usuario
    return updated, usuario.merged({"estado": nuevo})


def estado_mensaje(nuevo: EstadoPersonal) -> str:
    """Past-tense verb used in confirmation messages ("Usuario desactivado")."""
    return _MENSAJES[nuevo]
