"""Protected area model: the unit rangers and equipment are assigned to."""

from __future__ import annotations

import enum
from datetime import date

from pydantic import Field

from pyconap.models._base import ConapBaseModel, Coordenadas, EntityId


class EstadoArea(enum.StrEnum):
    ACTIVO = "Activo"
    DESACTIVADO = "Desactivado"


class AreaProtegida(ConapBaseModel):
    """A protected area managed by CONAP.

    Parameters
    ----------
    departamento : str
        Guatemalan department the area lies in.
    extension : float
        Surface in hectares.
    coordenadas : Coordenadas or None
        Reference point used to centre the map on the area.
    estado : EstadoArea
        ``Desactivado`` areas are hidden from the list view. An area cannot
        be deactivated while rangers are assigned to it.
    """

    id: EntityId
    nombre: str
    departamento: str = ""
    extension: float = Field(default=0, ge=0)
    fecha_creacion: date | None = None
    coordenadas: Coordenadas | None = None
    descripcion: str = ""
    ecosistemas: tuple[str, ...] = ()
    estado: EstadoArea = EstadoArea.ACTIVO
    guardarecursos: tuple[str, ...] = ()


class AreaProtegidaForm(ConapBaseModel):
    nombre: str = ""
    departamento: str = ""
    extension: float | None = Field(default=None, ge=0)
    fecha_creacion: date | None = None
    coordenadas: Coordenadas | None = None
    descripcion: str = ""
    ecosistemas: tuple[str, ...] = ()
