"""Internal constants shared across the library."""

DEFAULT_BASE_URL = "http://localhost:3000/api"
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_CACHE_TTL = 30.0
MIN_PASSWORD_LENGTH = 6
USER_AGENT = "pyconap"

#: Responsible party recorded on timeline entries written by the system itself.
SYSTEM_ACTOR = "Sistema"

#: Category-wide "all" value sent by list filters in the console.
FILTER_ALL = "all"

#: Same as FILTER_ALL, as sent by the department selector.
FILTER_TODOS = "todos"

# ------------------------------------------------------------------
# Monthly activity report categories
# ------------------------------------------------------------------

MESES: tuple[str, ...] = ("Ene", "Feb", "Mar", "Abr", "May", "Jun", "Jul", "Ago", "Sep", "Oct", "Nov", "Dic")

#: Activity type -> row number in the standard 13-row monthly report.
ACTIVIDAD_CATEGORIAS: dict[str, int] = {
    "Patrullaje": 1,
    "Patrullaje de Control y Vigilancia": 1,
    "Control y Vigilancia": 2,
    "Ronda": 3,
    "Mantenimiento": 11,
    "Mantenimiento de Área Protegida": 11,
    "Educación Ambiental": 13,
    "Investigación": 9,
}

#: Row used for activity types without a dedicated report row.
CATEGORIA_OTRAS = 12

#: Minutes between two consecutive GPS points when estimating route duration.
MINUTOS_ENTRE_PUNTOS = 5
