"""Incident endpoints.

Endpoints:
  - GET    /incidentes
  - POST   /incidentes
  - PUT    /incidentes/{id}/estado
  - DELETE /incidentes/{id}
  - POST   /incidentes/{id}/seguimiento
"""

from __future__ import annotations

from typing import Any

from pyconap._api._common import form_body, parse_record, parse_rows, request_json
from pyconap._transport import Transport
from pyconap.models._base import SeguimientoForm
from pyconap.models.incidente import EstadoIncidente, Incidente, IncidenteForm
from pyconap.session import Session


def _optional_incidente(value: Any, *, endpoint: str) -> Incidente | None:
    if not isinstance(value, dict):
        return None
    return parse_record(value, Incidente.model_validate, endpoint=endpoint)


async def fetch_incidentes(session: Session, transport: Transport) -> list[Incidente]:
    rows = await request_json(
        method="GET",
        endpoint="/incidentes",
        session=session,
        transport=transport,
        key="incidentes",
    )
    return parse_rows(rows, Incidente.model_validate, endpoint="/incidentes")


async def create_incidente(
    session: Session,
    transport: Transport,
    form: IncidenteForm,
    *,
    guardarecurso: str | None = None,
) -> Incidente:
    endpoint = "/incidentes"
    body = form_body(form)
    if guardarecurso:
        body["guardarecurso"] = guardarecurso
    row = await request_json(
        method="POST",
        endpoint=endpoint,
        session=session,
        transport=transport,
        payload=body,
        key="incidente",
    )
    return parse_record(row, Incidente.model_validate, endpoint=endpoint)


async def cambiar_estado(
    session: Session,
    transport: Transport,
    incidente_id: str,
    estado: EstadoIncidente,
    *,
    observaciones: str = "",
) -> Incidente | None:
    endpoint = f"/incidentes/{incidente_id}/estado"
    body: dict[str, Any] = {"estado": str(estado)}
    if observaciones:
        body["observaciones"] = observaciones
    row = await request_json(
        method="PUT",
        endpoint=endpoint,
        session=session,
        transport=transport,
        payload=body,
        key="incidente",
    )
    return _optional_incidente(row, endpoint=endpoint)


async def delete_incidente(session: Session, transport: Transport, incidente_id: str) -> None:
    await request_json(
        method="DELETE",
        endpoint=f"/incidentes/{incidente_id}",
        session=session,
        transport=transport,
    )


async def agregar_seguimiento(
    session: Session,
    transport: Transport,
    incidente_id: str,
    form: SeguimientoForm,
) -> Incidente | None:
    endpoint = f"/incidentes/{incidente_id}/seguimiento"
    row = await request_json(
        method="POST",
        endpoint=endpoint,
        session=session,
        transport=transport,
        payload=form_body(form),
        key="incidente",
    )
    return _optional_incidente(row, endpoint=endpoint)
