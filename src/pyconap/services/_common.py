"""Helpers shared by the entity services."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from pyconap.models._base import ConapBaseModel, Seguimiento, utcnow


def new_id() -> str:
    return uuid.uuid4().hex


def cambio_estado(anterior: str, nuevo: str, responsable: str, *, fecha: datetime | None = None) -> Seguimiento:
    """Timeline entry recorded for every status change."""
    return Seguimiento(
        fecha=fecha or utcnow(),
        accion=f"Cambio de estado a {nuevo}",
        responsable=responsable,
        observaciones=f"Estado cambiado de {anterior} a {nuevo}",
    )


def form_patch(form: ConapBaseModel, *, exclude: frozenset[str] = frozenset()) -> dict[str, Any]:
    """Fields of *form* that were actually filled in.

    Blank strings are skipped so an edit form never wipes a stored value.
    """
    patch: dict[str, Any] = {}
    for name, value in form.model_dump().items():
        if name in exclude or value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        patch[name] = value
    return patch
