"""Finding endpoints.

Endpoints:
  - GET    /hallazgos
  - POST   /hallazgos
  - PUT    /hallazgos/{id}/estado
  - DELETE /hallazgos/{id}
  - POST   /hallazgos/{id}/seguimiento
"""

from __future__ import annotations

from typing import Any

from pyconap._api._common import form_body, parse_record, parse_rows, request_json
from pyconap._transport import Transport
from pyconap.models._base import SeguimientoForm
from pyconap.models.hallazgo import EstadoHallazgo, Hallazgo, HallazgoForm
from pyconap.session import Session


def _optional_hallazgo(value: Any, *, endpoint: str) -> Hallazgo | None:
    if not isinstance(value, dict):
        return None
    return parse_record(value, Hallazgo.model_validate, endpoint=endpoint)


async def fetch_hallazgos(session: Session, transport: Transport) -> list[Hallazgo]:
    rows = await request_json(
        method="GET",
        endpoint="/hallazgos",
        session=session,
        transport=transport,
        key="hallazgos",
    )
    return parse_rows(rows, Hallazgo.model_validate, endpoint="/hallazgos")


async def create_hallazgo(
    session: Session,
    transport: Transport,
    form: HallazgoForm,
    *,
    guardarecurso: str | None = None,
) -> Hallazgo:
    endpoint = "/hallazgos"
    body = form_body(form)
    if guardarecurso:
        body["guardarecurso"] = guardarecurso
    row = await request_json(
        method="POST",
        endpoint=endpoint,
        session=session,
        transport=transport,
        payload=body,
        key="hallazgo",
    )
    return parse_record(row, Hallazgo.model_validate, endpoint=endpoint)


async def cambiar_estado(
    session: Session,
    transport: Transport,
    hallazgo_id: str,
    estado: EstadoHallazgo,
    *,
    observaciones: str = "",
) -> Hallazgo | None:
    """Persist a status change; returns the stored record when the backend sends it back."""
    endpoint = f"/hallazgos/{hallazgo_id}/estado"
    body: dict[str, Any] = {"estado": str(estado)}
    if observaciones:
        body["observaciones"] = observaciones
    row = await request_json(
        method="PUT",
        endpoint=endpoint,
        session=session,
        transport=transport,
        payload=body,
        key="hallazgo",
    )
    return _optional_hallazgo(row, endpoint=endpoint)


async def delete_hallazgo(session: Session, transport: Transport, hallazgo_id: str) -> None:
    await request_json(
        method="DELETE",
        endpoint=f"/hallazgos/{hallazgo_id}",
        session=session,
        transport=transport,
    )


async def agregar_seguimiento(
    session: Session,
    transport: Transport,
    hallazgo_id: str,
    form: SeguimientoForm,
) -> Hallazgo | None:
    endpoint = f"/hallazgos/{hallazgo_id}/seguimiento"
    row = await request_json(
        method="POST",
        endpoint=endpoint,
        session=session,
        transport=transport,
        payload=form_body(form),
        key="hallazgo",
    )
    return _optional_hallazgo(row, endpoint=endpoint)
