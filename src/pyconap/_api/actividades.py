"""Activity endpoints.

Endpoints:
  - GET    /actividades
  - POST   /actividades
  - PUT    /actividades/{id}
  - DELETE /actividades/{id}
  - POST   /actividades/bulk

The backend answers with database rows (``act_id``,
``act_fechah_programacion``, nested ``tipo``/``usuario``/``estado``);
:func:`parse_actividad_row` maps them onto :class:`Actividad`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from pyconap._api._common import form_body, parse_record, parse_rows, request_json, send_checked
from pyconap._transport import Transport
from pyconap.models._base import Coordenadas
from pyconap.models.actividad import Actividad, ActividadForm, BulkError, BulkResult, EstadoActividad
from pyconap.session import Session

_logger = logging.getLogger(__name__)


def _safe_float(value: Any) -> float | None:
    """Convert a value to float, returning None on failure."""
    if value is None or value == "":
        return None
    try:
        result = float(value)
    except (ValueError, TypeError):
        return None
    if result != result:  # NaN check
        return None
    return result


def _split_datetime(value: Any) -> tuple[str | None, str | None]:
    """``"2024-03-01T08:30:00"`` -> ``("2024-03-01", "08:30")``.

    MySQL-style ``"2024-03-01 08:30:00"`` is accepted as well.
    """
    if not isinstance(value, str) or not value:
        return None, None
    fecha, _, hora = value.strip().replace(" ", "T", 1).partition("T")
    return fecha or None, hora[:5] or None


def _coords(row: dict[str, Any], lat_key: str, lng_key: str) -> Coordenadas | None:
    lat = _safe_float(row.get(lat_key))
    lng = _safe_float(row.get(lng_key))
    if lat is None or lng is None:
        return None
    return Coordenadas(lat=lat, lng=lng)


def _nested(row: dict[str, Any], key: str) -> dict[str, Any]:
    value = row.get(key)
    return value if isinstance(value, dict) else {}


def parse_actividad_row(row: dict[str, Any], fallback: ActividadForm | None = None) -> Actividad:
    """Map one backend row to an :class:`Actividad`.

    Rows already in the console's camelCase shape are validated directly.
    *fallback* fills fields the backend left out of a create/update answer.
    """
    if "act_id" not in row:
        return Actividad.model_validate(row)

    fecha, hora_inicio = _split_datetime(row.get("act_fechah_programacion"))
    _, hora_fin = _split_datetime(row.get("act_fechah_fin"))
    usuario = _nested(row, "usuario")
    nombre = " ".join(str(usuario.get(k) or "") for k in ("usr_nombre", "usr_apellido")).strip()

    data: dict[str, Any] = {
        "id": row["act_id"],
        "codigo": row.get("act_codigo"),
        "tipo": _nested(row, "tipo").get("tp_nombre") or "",
        "descripcion": row.get("act_descripcion") or "",
        "fecha": fecha,
        "hora_inicio": hora_inicio,
        "hora_fin": hora_fin,
        "coordenadas_inicio": _coords(row, "act_latitud_inicio", "act_longitud_inicio"),
        "coordenadas_fin": _coords(row, "act_latitud_fin", "act_longitud_fin"),
        "guardarecurso": str(usuario["usr_id"]) if usuario.get("usr_id") is not None else None,
        "guardarecurso_nombre": nombre or None,
        "estado": _nested(row, "estado").get("std_nombre") or EstadoActividad.PROGRAMADA,
    }
    if fallback is not None:
        defaults = {
            "tipo": fallback.tipo,
            "fecha": fallback.fecha,
            "hora_inicio": fallback.hora_inicio,
            "hora_fin": fallback.hora_fin,
            "guardarecurso": fallback.guardarecurso,
            "coordenadas_inicio": fallback.coordenadas,
            "area_protegida": fallback.area_protegida,
        }
        for key, value in defaults.items():
            if not data.get(key) and value:
                data[key] = value
    return Actividad.model_validate(data)


async def fetch_actividades(session: Session, transport: Transport) -> list[Actividad]:
    rows = await request_json(
        method="GET",
        endpoint="/actividades",
        session=session,
        transport=transport,
        key="actividades",
    )
    actividades = parse_rows(rows, parse_actividad_row, endpoint="/actividades")
    _logger.debug("Fetched %d actividades", len(actividades))
    return actividades


async def create_actividad(session: Session, transport: Transport, form: ActividadForm) -> Actividad:
    endpoint = "/actividades"
    row = await request_json(
        method="POST",
        endpoint=endpoint,
        session=session,
        transport=transport,
        payload=form_body(form),
        key="actividad",
    )
    return parse_record(row, lambda data: parse_actividad_row(data, fallback=form), endpoint=endpoint)


async def update_actividad(
    session: Session,
    transport: Transport,
    actividad_id: str,
    form: ActividadForm,
) -> Actividad:
    endpoint = f"/actividades/{actividad_id}"
    row = await request_json(
        method="PUT",
        endpoint=endpoint,
        session=session,
        transport=transport,
        payload=form_body(form),
        key="actividad",
    )
    return parse_record(row, lambda data: parse_actividad_row(data, fallback=form), endpoint=endpoint)


async def delete_actividad(session: Session, transport: Transport, actividad_id: str) -> None:
    await request_json(
        method="DELETE",
        endpoint=f"/actividades/{actividad_id}",
        session=session,
        transport=transport,
    )


async def create_actividades_bulk(
    session: Session,
    transport: Transport,
    forms: Sequence[ActividadForm],
) -> BulkResult:
    """Upload many planned activities at once.

    Rows the backend rejects are reported in :attr:`BulkResult.errores`;
    only a failed envelope raises.
    """
    response = await send_checked(
        method="POST",
        endpoint="/actividades/bulk",
        session=session,
        transport=transport,
        payload={"actividades": [form_body(form) for form in forms]},
    )
    data = response.get("data")
    if isinstance(data, dict):
        response = data
    actividades = parse_rows(response.get("actividades"), parse_actividad_row, endpoint="/actividades/bulk")
    errores = parse_rows(response.get("errores"), BulkError.model_validate, endpoint="/actividades/bulk")
    return BulkResult(
        actividades_cargadas=response.get("actividadesCargadas", len(actividades)),
        actividades_con_error=response.get("actividadesConError", len(errores)),
        actividades=tuple(actividades),
        errores=tuple(errores),
    )
