"""Finding (hallazgo) model: an observed irregularity in a protected area."""

from __future__ import annotations

import enum

from pydantic import Field

from pyconap.models._base import AwareDatetime, ConapBaseModel, Coordenadas, EntityId, Seguimiento, UtcDatetime, utcnow


class Prioridad(enum.StrEnum):
    BAJA = "Baja"
    MEDIA = "Media"
    ALTA = "Alta"
    CRITICA = "Crítica"


class EstadoHallazgo(enum.StrEnum):
    """Finding states in progression order."""

    REPORTADO = "Reportado"
    EN_INVESTIGACION = "En Investigación"
    EN_PROCESO = "En Proceso"
    RESUELTO = "Resuelto"


class Hallazgo(ConapBaseModel):
    id: EntityId
    titulo: str
    descripcion: str = ""
    prioridad: Prioridad = Prioridad.MEDIA
    estado: EstadoHallazgo = EstadoHallazgo.REPORTADO
    ubicacion: str = ""
    coordenadas: Coordenadas | None = None
    area_protegida: str | None = None
    guardarecurso: str | None = None
    fecha_reporte: UtcDatetime = Field(default_factory=utcnow)
    fecha_resolucion: AwareDatetime = None
    observaciones: str | None = None
    acciones_tomadas: str | None = None
    evidencias: tuple[str, ...] = ()
    seguimiento: tuple[Seguimiento, ...] = ()


class HallazgoForm(ConapBaseModel):
    titulo: str = ""
    descripcion: str = ""
    prioridad: Prioridad = Prioridad.MEDIA
    ubicacion: str = ""
    coordenadas: Coordenadas | None = None
    area_protegida: str = ""
    observaciones: str = ""
