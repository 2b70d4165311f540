"""Ranger (guardarecurso) model."""

from __future__ import annotations

from datetime import date

from pydantic import Field

from pyconap.models._base import ConapBaseModel, EntityId
from pyconap.models.usuario import EstadoPersonal


class Guardarecurso(ConapBaseModel):
    """Field staff member assigned to a protected area.

    Parameters
    ----------
    id : str
        Shared with the paired :class:`~pyconap.models.usuario.Usuario`.
    cedula : str
        National identity document (DPI, 13 digits).
    area_asignada : str
        Id of the protected area the ranger works in.
    estado : EstadoPersonal
        ``Desactivado`` hides the ranger from every list view.
    equipos_asignados : tuple[str, ...]
        Ids of equipment currently assigned to the ranger.
    """

    id: EntityId
    nombre: str
    apellido: str = ""
    cedula: str = ""
    telefono: str | None = None
    email: str
    puesto: str = "Guardarecurso"
    area_asignada: str | None = None
    fecha_ingreso: date | None = None
    estado: EstadoPersonal = EstadoPersonal.ACTIVO
    equipos_asignados: tuple[str, ...] = ()

    @property
    def nombre_completo(self) -> str:
        return f"{self.nombre} {self.apellido}".strip()


class GuardarecursoForm(ConapBaseModel):
    nombre: str = ""
    apellido: str = ""
    cedula: str = ""
    telefono: str = ""
    email: str = ""
    password: str = Field(default="", repr=False)
    area_asignada: str = ""
