"""Activity (actividad) model: a planned or logged field task."""

from __future__ import annotations

import enum
from datetime import date

from pyconap.models._base import ConapBaseModel, Coordenadas, EntityId, HoraMinuto, PuntoRuta
from pyconap.models.evidencia import EvidenciaFotografica
from pyconap.models.hallazgo import Hallazgo


class EstadoActividad(enum.StrEnum):
    PROGRAMADA = "Programada"
    EN_PROGRESO = "En Progreso"
    COMPLETADA = "Completada"


class Actividad(ConapBaseModel):
    """A field activity shared by the planning, daily-log and route views.

    Parameters
    ----------
    tipo : str
        Free-text category ("Patrullaje de Control y Vigilancia", ...).
    hora_inicio, hora_fin : str or None
        Actual start and end wall-clock times as ``"HH:MM"``.
    guardarecurso : str or None
        Id of the assigned ranger.
    ruta : tuple[PuntoRuta, ...]
        GPS points recorded while the activity was in progress.
    hallazgos : tuple[Hallazgo, ...]
        Findings reported during the activity.
    """

    id: EntityId
    codigo: str | None = None
    tipo: str = ""
    descripcion: str = ""
    fecha: date | None = None
    hora_inicio: HoraMinuto = None
    hora_fin: HoraMinuto = None
    estado: EstadoActividad = EstadoActividad.PROGRAMADA
    guardarecurso: str | None = None
    guardarecurso_nombre: str | None = None
    area_protegida: str | None = None
    ubicacion: str = ""
    coordenadas_inicio: Coordenadas | None = None
    coordenadas_fin: Coordenadas | None = None
    ruta: tuple[PuntoRuta, ...] = ()
    hallazgos: tuple[Hallazgo, ...] = ()
    evidencias: tuple[EvidenciaFotografica, ...] = ()
    observaciones: str | None = None

    @property
    def es_patrullaje(self) -> bool:
        return "patrullaje" in self.tipo.lower()

    @property
    def tiene_gps(self) -> bool:
        return bool(self.ruta)


class ActividadForm(ConapBaseModel):
    """Planning form payload sent to the backend."""

    codigo: str = ""
    tipo: str = ""
    descripcion: str = ""
    fecha: date | None = None
    hora_inicio: HoraMinuto = None
    hora_fin: HoraMinuto = None
    guardarecurso: str = ""
    coordenadas: Coordenadas | None = None
    area_protegida: str = ""


class BulkError(ConapBaseModel):
    index: int
    codigo: str = ""
    error: str = ""


class BulkResult(ConapBaseModel):
    """Outcome of a bulk activity upload."""

    actividades_cargadas: int = 0
    actividades_con_error: int = 0
    actividades: tuple[Actividad, ...] = ()
    errores: tuple[BulkError, ...] = ()
