"""Data models for CONAP entities."""

from pyconap.models._base import ConapBaseModel, Coordenadas, PuntoRuta, Seguimiento, SeguimientoForm
from pyconap.models.actividad import Actividad, ActividadForm, BulkError, BulkResult, EstadoActividad
from pyconap.models.area_protegida import AreaProtegida, AreaProtegidaForm, EstadoArea
from pyconap.models.cumplimiento import MetricaCumplimiento, Periodo, TipoMetrica
from pyconap.models.equipo import Equipo, EquipoForm, EstadoEquipo, TipoEquipo
from pyconap.models.evidencia import EvidenciaFotografica, TipoEvidencia
from pyconap.models.guardarecurso import Guardarecurso, GuardarecursoForm
from pyconap.models.hallazgo import EstadoHallazgo, Hallazgo, HallazgoForm, Prioridad
from pyconap.models.incidente import EstadoIncidente, Gravedad, Incidente, IncidenteForm
from pyconap.models.usuario import EstadoPersonal, Identidad, Rol, Usuario, UsuarioForm

__all__ = [
    "Actividad",
    "ActividadForm",
    "AreaProtegida",
    "AreaProtegidaForm",
    "BulkError",
    "BulkResult",
    "ConapBaseModel",
    "Coordenadas",
    "Equipo",
    "EquipoForm",
    "EstadoActividad",
    "EstadoArea",
    "EstadoEquipo",
    "EstadoHallazgo",
    "EstadoIncidente",
    "EstadoPersonal",
    "EvidenciaFotografica",
    "Gravedad",
    "Guardarecurso",
    "GuardarecursoForm",
    "Hallazgo",
    "HallazgoForm",
    "Identidad",
    "Incidente",
    "IncidenteForm",
    "MetricaCumplimiento",
    "Periodo",
    "Prioridad",
    "PuntoRuta",
    "Rol",
    "Seguimiento",
    "SeguimientoForm",
    "TipoEquipo",
    "TipoEvidencia",
    "TipoMetrica",
    "Usuario",
    "UsuarioForm",
]
