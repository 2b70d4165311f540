"""Role-based permission checks.

These are orthogonal to the transition tables: a transition may be legal
for the entity and still not be something the acting user may trigger.
All checks return booleans; a ``None`` actor (no session) is never allowed.
"""

from __future__ import annotations

from pyconap.models.usuario import Identidad, Rol, Usuario


def _is_self(actor: Identidad, target: Usuario) -> bool:
    return actor.id == target.id


def can_manage(actor: Identidad | None) -> bool:
    """Whether *actor* may use the management screens at all."""
    if actor is None:
        return False
    match actor.rol:
        case Rol.ADMINISTRADOR | Rol.COORDINADOR:
            return True
        case Rol.GUARDARECURSO:
            return False


def can_change_user_password(actor: Identidad | None, target: Usuario) -> bool:
    """Whether *actor* may set a new password for *target*.

    An administrator's password is only ever changed by that administrator.
    Administrators reset coordinator and ranger passwords; coordinators
    reset ranger passwords only.
    """
    if actor is None:
        return False
    if target.rol is Rol.ADMINISTRADOR:
        return actor.rol is Rol.ADMINISTRADOR and _is_self(actor, target)
    match actor.rol:
        case Rol.ADMINISTRADOR:
            return target.rol in (Rol.COORDINADOR, Rol.GUARDARECURSO)
        case Rol.COORDINADOR:
            return target.rol is Rol.GUARDARECURSO
        case Rol.GUARDARECURSO:
            return False


def can_edit_user(actor: Identidad | None, target: Usuario) -> bool:
    """Administrators edit themselves and coordinators, never other administrators."""
    if actor is None:
        return False
    match actor.rol:
        case Rol.ADMINISTRADOR:
            if _is_self(actor, target):
                return True
            return target.rol is Rol.COORDINADOR
        case Rol.COORDINADOR | Rol.GUARDARECURSO:
            return False


def can_change_user_estado(actor: Identidad | None, target: Usuario) -> bool:
    """Whether *actor* may activate, suspend or deactivate *target*.

    Nobody changes their own state. Administrators act on any other
    account, coordinators on rangers only.
    """
    if actor is None or _is_self(actor, target):
        return False
    match actor.rol:
        case Rol.ADMINISTRADOR:
            return True
        case Rol.COORDINADOR:
            return target.rol is Rol.GUARDARECURSO
        case Rol.GUARDARECURSO:
            return False


def can_change_guardarecurso_password(actor: Identidad | None) -> bool:
    return can_manage(actor)
