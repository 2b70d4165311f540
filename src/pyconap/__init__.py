"""pyconap - Core library for the CONAP protected-areas management console."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyconap")
except PackageNotFoundError:
    __version__ = "0+local"

from pyconap.client import ConapClient
from pyconap.config import ConapConfig
from pyconap.exceptions import (
    ConapApiError,
    ConapAuthenticationError,
    ConapConfigError,
    ConapError,
    ConapTransportError,
    ConapValidationError,
    InvalidTransitionError,
)
from pyconap.models import (
    Actividad,
    ActividadForm,
    AreaProtegida,
    BulkResult,
    Coordenadas,
    Equipo,
    EstadoActividad,
    EstadoArea,
    EstadoEquipo,
    EstadoHallazgo,
    EstadoIncidente,
    EstadoPersonal,
    EvidenciaFotografica,
    Guardarecurso,
    Hallazgo,
    Identidad,
    Incidente,
    PuntoRuta,
    Rol,
    Seguimiento,
    Usuario,
)
from pyconap.queries import QueryScope
from pyconap.session import Session
from pyconap.state.store import ActividadesStore

__all__ = [
    "__version__",
    "Actividad",
    "ActividadForm",
    "ActividadesStore",
    "AreaProtegida",
    "BulkResult",
    "ConapApiError",
    "ConapAuthenticationError",
    "ConapClient",
    "ConapConfig",
    "ConapConfigError",
    "ConapError",
    "ConapTransportError",
    "ConapValidationError",
    "Coordenadas",
    "Equipo",
    "EstadoActividad",
    "EstadoArea",
    "EstadoEquipo",
    "EstadoHallazgo",
    "EstadoIncidente",
    "EstadoPersonal",
    "EvidenciaFotografica",
    "Guardarecurso",
    "Hallazgo",
    "Identidad",
    "Incidente",
    "InvalidTransitionError",
    "PuntoRuta",
    "QueryScope",
    "Rol",
    "Seguimiento",
    "Session",
    "Usuario",
]
