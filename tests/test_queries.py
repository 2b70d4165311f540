from __future__ import annotations

from datetime import date

from pyconap.models.actividad import Actividad, EstadoActividad
from pyconap.models.equipo import Equipo, EstadoEquipo
from pyconap.models.guardarecurso import Guardarecurso
from pyconap.models.hallazgo import EstadoHallazgo, Hallazgo
from pyconap.models.incidente import EstadoIncidente, Incidente
from pyconap.models.usuario import EstadoPersonal, Identidad, Rol, Usuario
from pyconap.queries import (
    QueryScope,
    filter_actividades,
    filter_by_date_range,
    filter_equipos,
    filter_guardarecursos,
    filter_hallazgos,
    filter_incidentes_activos,
    filter_incidentes_resueltos,
    filter_rutas_completadas,
    filter_usuarios,
    split_hallazgos,
)

ANA = Guardarecurso(id="g-1", nombre="Ana", apellido="López", cedula="1234567890101", email="ana@conap.gob.gt", area_asignada="tikal")
LUIS = Guardarecurso(id="g-2", nombre="Luis", apellido="Méndez", cedula="2234567890101", email="luis@conap.gob.gt", area_asignada="yaxha")
BAJA = Guardarecurso(
    id="g-3",
    nombre="Marta",
    apellido="Ruiz",
    email="marta@conap.gob.gt",
    area_asignada="tikal",
    estado=EstadoPersonal.DESACTIVADO,
)
GUARDARECURSOS = [ANA, LUIS, BAJA]


def _scope_for(identidad: Identidad) -> QueryScope:
    return QueryScope.for_identity(identidad, GUARDARECURSOS)


def test_scope_links_by_email_then_full_name() -> None:
    by_email = _scope_for(Identidad(id="u-9", rol=Rol.GUARDARECURSO, email="LUIS@conap.gob.gt"))
    by_name = _scope_for(Identidad(id="u-9", rol=Rol.GUARDARECURSO, nombre="Ana", apellido="López"))
    by_id = _scope_for(Identidad(id="g-2", rol=Rol.GUARDARECURSO))

    assert by_email.guardarecurso_id == "g-2"
    assert by_name.guardarecurso_id == "g-1"
    assert by_id.guardarecurso_id == "g-2"


def test_scope_for_coordinator_is_unrestricted() -> None:
    scope = _scope_for(Identidad(id="c-1", rol=Rol.COORDINADOR))
    assert scope.restricted is False


def test_unresolved_ranger_scope_returns_nothing() -> None:
    scope = _scope_for(Identidad(id="u-x", rol=Rol.GUARDARECURSO, email="nadie@conap.gob.gt"))
    equipos = [Equipo(id="e-1", nombre="GPS", codigo="GPS-1", guardarecurso_asignado="g-1")]

    assert scope.restricted is True
    assert scope.guardarecurso_id is None
    assert filter_equipos(equipos, "", scope=scope) == []


def test_desactivado_never_listed_even_with_empty_search() -> None:
    equipos = [
        Equipo(id="e-1", nombre="GPS Garmin", codigo="GPS-1"),
        Equipo(id="e-2", nombre="Radio", codigo="RAD-1", estado=EstadoEquipo.DESACTIVADO),
    ]
    usuarios = [
        Usuario(id="a-1", nombre="Admin", email="admin@conap.gob.gt", rol=Rol.ADMINISTRADOR),
        Usuario(id="c-1", nombre="Coord", email="c@conap.gob.gt", rol=Rol.COORDINADOR, estado=EstadoPersonal.DESACTIVADO),
    ]

    assert [e.id for e in filter_equipos(equipos, "")] == ["e-1"]
    assert [g.id for g in filter_guardarecursos(GUARDARECURSOS, [], "")] == ["g-1", "g-2"]
    assert [u.id for u in filter_usuarios(usuarios, "")] == ["a-1"]


def test_filter_equipos_ranger_sees_only_own() -> None:
    equipos = [
        Equipo(id="e-1", nombre="GPS Garmin", codigo="GPS-1", guardarecurso_asignado="g-1"),
        Equipo(id="e-2", nombre="Radio", codigo="RAD-1", guardarecurso_asignado="g-2"),
        Equipo(id="e-3", nombre="Binoculares", codigo="BIN-1", guardarecurso_asignado="g-1"),
    ]
    scope = _scope_for(Identidad(id="u-1", rol=Rol.GUARDARECURSO, email="ana@conap.gob.gt"))

    assert [e.id for e in filter_equipos(equipos, "", scope=scope)] == ["e-1", "e-3"]
    assert [e.id for e in filter_equipos(equipos, "bin", scope=scope)] == ["e-3"]


def test_filter_guardarecursos_by_area_and_role() -> None:
    usuarios = [Usuario(id="x", nombre="Luis", email="luis@conap.gob.gt", rol=Rol.COORDINADOR)]

    assert [g.id for g in filter_guardarecursos(GUARDARECURSOS, [], "", "tikal")] == ["g-1"]
    assert [g.id for g in filter_guardarecursos(GUARDARECURSOS, [], "", "all")] == ["g-1", "g-2"]
    assert [g.id for g in filter_guardarecursos(GUARDARECURSOS, usuarios, "")] == ["g-1"]
    assert [g.id for g in filter_guardarecursos(GUARDARECURSOS, [], "2234")] == ["g-2"]


def test_filter_usuarios_excludes_rangers() -> None:
    usuarios = [
        Usuario(id="c-1", nombre="Carla", email="carla@conap.gob.gt", rol=Rol.COORDINADOR),
        Usuario(id="g-1", nombre="Ana", email="ana@conap.gob.gt", rol=Rol.GUARDARECURSO),
    ]
    assert [u.id for u in filter_usuarios(usuarios, "")] == ["c-1"]
    assert filter_usuarios(usuarios, "ANA") == []


def test_incidentes_split_by_resolution_and_scope() -> None:
    incidentes = [
        Incidente(id="i-1", titulo="Incendio", descripcion="Sector sur", guardarecurso="g-1"),
        Incidente(id="i-2", titulo="Caza", descripcion="Sector norte", guardarecurso="g-2"),
        Incidente(id="i-3", titulo="Incendio", descripcion="Controlado", guardarecurso="g-1", estado=EstadoIncidente.RESUELTO),
    ]
    scope = QueryScope(restricted=True, guardarecurso_id="g-1")

    assert [i.id for i in filter_incidentes_activos(incidentes, "")] == ["i-1", "i-2"]
    assert [i.id for i in filter_incidentes_activos(incidentes, "", scope=scope)] == ["i-1"]
    assert [i.id for i in filter_incidentes_resueltos(incidentes, "incendio")] == ["i-3"]


def test_hallazgos_search_and_split() -> None:
    hallazgos = [
        Hallazgo(id="h-1", titulo="Basura", descripcion="Plásticos", ubicacion="Laguna", guardarecurso="g-1"),
        Hallazgo(id="h-2", titulo="Tala", descripcion="Caoba", estado=EstadoHallazgo.RESUELTO, guardarecurso="g-2"),
    ]

    assert [h.id for h in filter_hallazgos(hallazgos, "laguna")] == ["h-1"]
    activos, resueltos = split_hallazgos(hallazgos)
    assert [h.id for h in activos] == ["h-1"]
    assert [h.id for h in resueltos] == ["h-2"]


def test_filter_actividades_by_date_and_ranger() -> None:
    actividades = [
        Actividad(id="a-1", tipo="Patrullaje", fecha=date(2024, 3, 1), guardarecurso="g-1"),
        Actividad(id="a-2", tipo="Ronda", fecha=date(2024, 3, 1), guardarecurso="g-2"),
        Actividad(id="a-3", tipo="Patrullaje", fecha=date(2024, 3, 2), guardarecurso="g-1"),
    ]

    assert [a.id for a in filter_actividades(actividades, "", fecha=date(2024, 3, 1))] == ["a-1", "a-2"]
    assert [a.id for a in filter_actividades(actividades, "patrullaje", guardarecurso="g-1")] == ["a-1", "a-3"]
    assert [a.id for a in filter_actividades(actividades, "", guardarecurso="all")] == ["a-1", "a-2", "a-3"]


def test_rutas_completadas_newest_first() -> None:
    actividades = [
        Actividad(id="a-1", tipo="Patrullaje", fecha=date(2024, 3, 1), estado=EstadoActividad.COMPLETADA),
        Actividad(id="a-2", tipo="Patrullaje", fecha=date(2024, 3, 5), estado=EstadoActividad.COMPLETADA),
        Actividad(id="a-3", tipo="Patrullaje", fecha=date(2024, 3, 9), estado=EstadoActividad.EN_PROGRESO),
        Actividad(id="a-4", tipo="Mantenimiento", fecha=date(2024, 3, 9), estado=EstadoActividad.COMPLETADA),
    ]

    assert [a.id for a in filter_rutas_completadas(actividades, "")] == ["a-2", "a-1"]


def test_filter_by_date_range_inclusive() -> None:
    actividades = [Actividad(id=str(day), fecha=date(2024, 3, day)) for day in (1, 5, 10)]

    assert [a.id for a in filter_by_date_range(actividades, date(2024, 3, 5), date(2024, 3, 10))] == ["5", "10"]
    assert [a.id for a in filter_by_date_range(actividades, fecha_fin=date(2024, 3, 1))] == ["1"]
    assert len(filter_by_date_range(actividades)) == 3


def test_scope_apply_by_owner_attribute() -> None:
    equipos = [
        Equipo(id="e-1", nombre="GPS", codigo="GPS-1", guardarecurso_asignado="g-1"),
        Equipo(id="e-2", nombre="Radio", codigo="RAD-1", guardarecurso_asignado="g-2"),
    ]

    assert QueryScope().apply(equipos, "guardarecurso_asignado") == equipos
    assert [e.id for e in QueryScope(restricted=True, guardarecurso_id="g-2").apply(equipos, "guardarecurso_asignado")] == ["e-2"]
    assert QueryScope(restricted=True).apply(equipos, "guardarecurso_asignado") == []
