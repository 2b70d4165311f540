"""Equipment inventory model."""

from __future__ import annotations

import enum
from datetime import date

from pyconap.models._base import ConapBaseModel, EntityId


class EstadoEquipo(enum.StrEnum):
    OPERATIVO = "Operativo"
    EN_REPARACION = "En Reparación"
    DESACTIVADO = "Desactivado"


class TipoEquipo(enum.StrEnum):
    GPS = "GPS"
    RADIO = "Radio"
    BINOCULARES = "Binoculares"
    CAMARA = "Cámara"
    VEHICULO = "Vehículo"
    HERRAMIENTA = "Herramienta"
    OTRO = "Otro"


class Equipo(ConapBaseModel):
    """An inventoried piece of equipment.

    ``guardarecurso_asignado`` is always ``None`` while the equipment is
    in repair.
    """

    id: EntityId
    nombre: str
    codigo: str
    marca: str | None = None
    modelo: str | None = None
    observaciones: str | None = None
    tipo: TipoEquipo = TipoEquipo.OTRO
    estado: EstadoEquipo = EstadoEquipo.OPERATIVO
    guardarecurso_asignado: str | None = None
    fecha_asignacion: date | None = None


class EquipoForm(ConapBaseModel):
    nombre: str = ""
    codigo: str = ""
    marca: str = ""
    modelo: str = ""
    observaciones: str = ""
    guardarecurso_asignado: str | None = None
