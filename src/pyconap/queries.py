"""List-view filters.

Every filter is a pure function over an in-memory sequence and returns a
new list. Text search is a case-insensitive substring match over a few
fields; an empty search matches everything. ``Desactivado`` records never
appear in any list view.

Ranger scoping lives in one place, :func:`scoped`. A Guardarecurso session
only ever sees records it owns; the link between the login account and
its ranger record is resolved once per session by :class:`QueryScope`.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any, Concatenate, ParamSpec, TypeVar

from pyconap._constants import FILTER_ALL, FILTER_TODOS
from pyconap.models.actividad import Actividad, EstadoActividad
from pyconap.models.area_protegida import AreaProtegida, EstadoArea
from pyconap.models.equipo import Equipo, EstadoEquipo
from pyconap.models.guardarecurso import Guardarecurso
from pyconap.models.hallazgo import EstadoHallazgo, Hallazgo
from pyconap.models.incidente import EstadoIncidente, Incidente
from pyconap.models.usuario import EstadoPersonal, Identidad, Rol, Usuario
from pyconap.services.guardarecursos import associated_usuario

_logger = logging.getLogger(__name__)

T = TypeVar("T")
P = ParamSpec("P")


@dataclass(frozen=True)
class QueryScope:
    """Visibility of the current session.

    ``restricted`` is true for Guardarecurso sessions. ``guardarecurso_id``
    is the linked ranger id, or ``None`` when no ranger record matches the
    identity, in which case restricted queries return nothing.
    """

    restricted: bool = False
    guardarecurso_id: str | None = None

    @classmethod
    def unrestricted(cls) -> QueryScope:
        return cls()

    @classmethod
    def for_identity(cls, identidad: Identidad, guardarecursos: Iterable[Guardarecurso] = ()) -> QueryScope:
        """Resolve the ranger linked to *identidad*.

        The explicit ``guardarecurso_id`` wins; otherwise the ranger is
        matched by id, then e-mail, then full name.
        """
        if not identidad.es_guardarecurso:
            return cls()
        if identidad.guardarecurso_id:
            return cls(restricted=True, guardarecurso_id=identidad.guardarecurso_id)

        candidates = list(guardarecursos)
        email = (identidad.email or "").lower()
        nombre = (identidad.nombre.lower(), identidad.apellido.lower())
        matchers: tuple[Callable[[Guardarecurso], bool], ...] = (
            lambda g: g.id == identidad.id,
            lambda g: bool(email) and g.email.lower() == email,
            lambda g: bool(nombre[0]) and (g.nombre.lower(), g.apellido.lower()) == nombre,
        )
        for matches in matchers:
            for guardarecurso in candidates:
                if matches(guardarecurso):
                    return cls(restricted=True, guardarecurso_id=guardarecurso.id)
        _logger.debug("No guardarecurso record linked to usuario %s", identidad.id)
        return cls(restricted=True, guardarecurso_id=None)

    def apply(self, items: Iterable[T], owner_attr: str) -> list[T]:
        """Records of *items* visible in this scope, judged by their *owner_attr*."""
        visible = list(items)
        if not self.restricted:
            return visible
        if self.guardarecurso_id is None:
            return []
        return [item for item in visible if getattr(item, owner_attr) == self.guardarecurso_id]


def scoped(
    owner_attr: str,
) -> Callable[[Callable[Concatenate[Sequence[T], P], list[T]]], Callable[..., list[T]]]:
    """Restrict the first argument to records owned by the session's ranger.

    The decorated filter gains a keyword-only ``scope`` argument. Without a
    scope, or with an unrestricted one, the input passes through unchanged.
    """

    def decorator(func: Callable[Concatenate[Sequence[T], P], list[T]]) -> Callable[..., list[T]]:
        @functools.wraps(func)
        def wrapper(items: Iterable[T], *args: Any, scope: QueryScope | None = None, **kwargs: Any) -> list[T]:
            visible = list(items) if scope is None else scope.apply(items, owner_attr)
            return func(visible, *args, **kwargs)

        return wrapper

    return decorator


def _matches(search: str | None, *fields: str | None) -> bool:
    if not search:
        return True
    needle = search.strip().lower()
    return any(needle in (field or "").lower() for field in fields)


def _is_all(value: str | None) -> bool:
    return value is None or value in ("", FILTER_ALL, FILTER_TODOS)


# ------------------------------------------------------------------
# Equipment and personnel
# ------------------------------------------------------------------


@scoped("guardarecurso_asignado")
def filter_equipos(equipos: Sequence[Equipo], search: str = "") -> list[Equipo]:
    return [
        e
        for e in equipos
        if e.estado is not EstadoEquipo.DESACTIVADO and _matches(search, e.nombre, e.codigo, e.marca)
    ]


def filter_guardarecursos(
    guardarecursos: Iterable[Guardarecurso],
    usuarios: Sequence[Usuario],
    search: str = "",
    area: str | None = None,
) -> list[Guardarecurso]:
    """Active rangers, excluding records whose login account has another role."""
    result: list[Guardarecurso] = []
    for g in guardarecursos:
        if g.estado is EstadoPersonal.DESACTIVADO:
            continue
        usuario = associated_usuario(g, usuarios)
        if usuario is not None and usuario.rol is not Rol.GUARDARECURSO:
            continue
        if not _matches(search, g.nombre, g.apellido, g.cedula, g.email):
            continue
        if not _is_all(area) and g.area_asignada != area:
            continue
        result.append(g)
    return result


def filter_usuarios(usuarios: Iterable[Usuario], search: str = "") -> list[Usuario]:
    """Administrator and coordinator accounts for the user-management screen."""
    return [
        u
        for u in usuarios
        if u.rol in (Rol.ADMINISTRADOR, Rol.COORDINADOR)
        and u.estado is not EstadoPersonal.DESACTIVADO
        and _matches(search, u.nombre, u.apellido, u.email)
    ]


# ------------------------------------------------------------------
# Protected areas
# ------------------------------------------------------------------


def filter_areas_protegidas(
    areas: Iterable[AreaProtegida],
    search: str = "",
    departamento: str | None = None,
) -> list[AreaProtegida]:
    return [
        a
        for a in areas
        if a.estado is EstadoArea.ACTIVO
        and _matches(search, a.nombre, a.departamento, a.descripcion)
        and (_is_all(departamento) or a.departamento == departamento)
    ]


# ------------------------------------------------------------------
# Incidents and findings
# ------------------------------------------------------------------


@scoped("guardarecurso")
def filter_incidentes_activos(incidentes: Sequence[Incidente], search: str = "") -> list[Incidente]:
    return [
        i
        for i in incidentes
        if i.estado is not EstadoIncidente.RESUELTO and _matches(search, i.titulo, i.descripcion)
    ]


@scoped("guardarecurso")
def filter_incidentes_resueltos(incidentes: Sequence[Incidente], search: str = "") -> list[Incidente]:
    return [i for i in incidentes if i.estado is EstadoIncidente.RESUELTO and _matches(search, i.titulo, i.descripcion)]


@scoped("guardarecurso")
def filter_hallazgos(hallazgos: Sequence[Hallazgo], search: str = "") -> list[Hallazgo]:
    return [h for h in hallazgos if _matches(search, h.titulo, h.descripcion, h.ubicacion)]


def split_hallazgos(hallazgos: Iterable[Hallazgo]) -> tuple[list[Hallazgo], list[Hallazgo]]:
    """Split into ``(activos, resueltos)``."""
    activos: list[Hallazgo] = []
    resueltos: list[Hallazgo] = []
    for h in hallazgos:
        (resueltos if h.estado is EstadoHallazgo.RESUELTO else activos).append(h)
    return activos, resueltos


# ------------------------------------------------------------------
# Activities and routes
# ------------------------------------------------------------------


@scoped("guardarecurso")
def filter_actividades(
    actividades: Sequence[Actividad],
    search: str = "",
    fecha: date | None = None,
    guardarecurso: str | None = None,
) -> list[Actividad]:
    return [
        a
        for a in actividades
        if _matches(search, a.tipo, a.descripcion, a.codigo, a.ubicacion)
        and (fecha is None or a.fecha == fecha)
        and (_is_all(guardarecurso) or a.guardarecurso == guardarecurso)
    ]


@scoped("guardarecurso")
def filter_rutas_completadas(actividades: Sequence[Actividad], search: str = "") -> list[Actividad]:
    """Completed patrols, newest first."""
    rutas = [
        a
        for a in actividades
        if a.es_patrullaje and a.estado is EstadoActividad.COMPLETADA and _matches(search, a.descripcion, a.ubicacion)
    ]
    return sorted(rutas, key=lambda a: a.fecha or date.min, reverse=True)


def filter_by_date_range(
    actividades: Iterable[Actividad],
    fecha_inicio: date | None = None,
    fecha_fin: date | None = None,
) -> list[Actividad]:
    """Inclusive date range; either bound may be omitted. Undated records are dropped when a bound is set."""
    result: list[Actividad] = []
    for a in actividades:
        if fecha_inicio is not None and (a.fecha is None or a.fecha < fecha_inicio):
            continue
        if fecha_fin is not None and (a.fecha is None or a.fecha > fecha_fin):
            continue
        result.append(a)
    return result
