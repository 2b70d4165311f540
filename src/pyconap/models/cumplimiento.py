"""Compliance goals tracked per ranger."""

from __future__ import annotations

import enum
from datetime import date

from pydantic import Field

from pyconap.models._base import ConapBaseModel, EntityId


class TipoMetrica(enum.StrEnum):
    ACTIVIDADES = "Actividades"
    TIEMPO = "Tiempo"
    CALIDAD = "Calidad"
    OBJETIVOS = "Objetivos"


class Periodo(enum.StrEnum):
    DIARIO = "Diario"
    SEMANAL = "Semanal"
    MENSUAL = "Mensual"
    TRIMESTRAL = "Trimestral"
    ANUAL = "Anual"


class MetricaCumplimiento(ConapBaseModel):
    """A goal (``meta``) and the progress made towards it (``actual``)."""

    id: EntityId
    nombre: str
    descripcion: str = ""
    tipo: TipoMetrica = TipoMetrica.ACTIVIDADES
    meta: float = Field(default=0, ge=0)
    actual: float = Field(default=0, ge=0)
    unidad: str = ""
    periodo: Periodo = Periodo.MENSUAL
    guardarecurso: str | None = None
    fecha_inicio: date | None = None
    fecha_fin: date | None = None
