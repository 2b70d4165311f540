"""System login accounts, roles and the session identity."""

from __future__ import annotations

import enum
from datetime import date

from pydantic import Field

from pyconap.models._base import ConapBaseModel, EntityId


class Rol(enum.StrEnum):
    """Account role. Ordered from most to least privileged."""

    ADMINISTRADOR = "Administrador"
    COORDINADOR = "Coordinador"
    GUARDARECURSO = "Guardarecurso"


class EstadoPersonal(enum.StrEnum):
    """Lifecycle state shared by rangers and user accounts."""

    ACTIVO = "Activo"
    SUSPENDIDO = "Suspendido"
    DESACTIVADO = "Desactivado"


class Usuario(ConapBaseModel):
    """A login account. Credentials are never carried on the model."""

    id: EntityId
    nombre: str
    apellido: str = ""
    email: str
    telefono: str | None = None
    rol: Rol
    estado: EstadoPersonal = EstadoPersonal.ACTIVO
    fecha_creacion: date | None = None
    area_asignada: str | None = None

    @property
    def nombre_completo(self) -> str:
        return f"{self.nombre} {self.apellido}".strip()


class UsuarioForm(ConapBaseModel):
    nombre: str = ""
    apellido: str = ""
    cedula: str = ""
    telefono: str = ""
    email: str = ""
    password: str = Field(default="", repr=False)
    rol: Rol | None = None


class Identidad(ConapBaseModel):
    """The authenticated user acting in the console.

    ``guardarecurso_id`` links a Guardarecurso-role account to its ranger
    record when the backend provides it; otherwise the link is resolved
    by :class:`pyconap.queries.QueryScope`.
    """

    id: EntityId
    rol: Rol
    nombre: str = ""
    apellido: str = ""
    email: str | None = None
    guardarecurso_id: EntityId | None = None

    @property
    def es_guardarecurso(self) -> bool:
        return self.rol is Rol.GUARDARECURSO
