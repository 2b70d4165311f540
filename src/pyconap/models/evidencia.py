"""Photographic evidence attached to activities."""

from __future__ import annotations

import enum

from pydantic import Field

from pyconap.models._base import ConapBaseModel, Coordenadas, EntityId, UtcDatetime, utcnow


class TipoEvidencia(enum.StrEnum):
    FAUNA = "Fauna"
    FLORA = "Flora"
    IRREGULARIDAD = "Irregularidad"
    MANTENIMIENTO = "Mantenimiento"
    OTRO = "Otro"


class EvidenciaFotografica(ConapBaseModel):
    id: EntityId
    url: str = Field(..., repr=False)
    descripcion: str = ""
    tipo: TipoEvidencia = TipoEvidencia.OTRO
    fecha: UtcDatetime = Field(default_factory=utcnow)
    coordenadas: Coordenadas | None = None
    guardarecurso: str | None = None
    actividad: str | None = None
