"""Visitor-safety / conflict incident model."""

from __future__ import annotations

import enum

from pydantic import Field

from pyconap.models._base import AwareDatetime, ConapBaseModel, EntityId, Seguimiento, UtcDatetime, utcnow


class Gravedad(enum.StrEnum):
    LEVE = "Leve"
    MODERADO = "Moderado"
    GRAVE = "Grave"
    CRITICO = "Crítico"


class EstadoIncidente(enum.StrEnum):
    REPORTADO = "Reportado"
    EN_ATENCION = "En Atención"
    ESCALADO = "Escalado"
    RESUELTO = "Resuelto"


class Incidente(ConapBaseModel):
    id: EntityId
    titulo: str
    descripcion: str = ""
    gravedad: Gravedad = Gravedad.LEVE
    estado: EstadoIncidente = EstadoIncidente.REPORTADO
    area_protegida: str | None = None
    guardarecurso: str | None = None
    fecha_incidente: UtcDatetime = Field(default_factory=utcnow)
    fecha_reporte: UtcDatetime = Field(default_factory=utcnow)
    fecha_resolucion: AwareDatetime = None
    personas_involucradas: str | None = None
    observaciones: str | None = None
    acciones: tuple[str, ...] = ()
    autoridades: tuple[str, ...] = ()
    seguimiento: tuple[Seguimiento, ...] = ()


class IncidenteForm(ConapBaseModel):
    titulo: str = ""
    descripcion: str = ""
    gravedad: Gravedad = Gravedad.LEVE
    area_protegida: str = ""
    personas_involucradas: str = ""
    observaciones: str = ""
