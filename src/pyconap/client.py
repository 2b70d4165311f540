"""High-level async client for the CONAP backend."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import aiohttp

from pyconap._api import actividades as _actividades_api
from pyconap._api import hallazgos as _hallazgos_api
from pyconap._api import incidentes as _incidentes_api
from pyconap._cache import TtlCache
from pyconap._transport import HttpTransport
from pyconap.config import ConapConfig
from pyconap.exceptions import ConapError, InvalidTransitionError
from pyconap.models._base import SeguimientoForm
from pyconap.models.actividad import Actividad, ActividadForm, BulkResult
from pyconap.models.guardarecurso import Guardarecurso
from pyconap.models.hallazgo import EstadoHallazgo, Hallazgo, HallazgoForm
from pyconap.models.incidente import EstadoIncidente, Incidente, IncidenteForm
from pyconap.queries import QueryScope
from pyconap.services import hallazgos as _hallazgos_rules
from pyconap.services import incidentes as _incidentes_rules
from pyconap.session import Session
from pyconap.state.store import ActividadesStore

_logger = logging.getLogger(__name__)


class ConapClient:
    """Async client for the CONAP protected-areas backend.

    Activity reads go through a short-lived cache and every activity
    result is pushed into the shared :class:`ActividadesStore`, so all
    subscribed views stay in sync with the backend.

    Usage::

        store = ActividadesStore()
        async with ConapClient(config, session, store=store) as client:
            await client.fetch_actividades()
    """

    def __init__(
        self,
        config: ConapConfig,
        session: Session,
        *,
        http_session: aiohttp.ClientSession | None = None,
        store: ActividadesStore | None = None,
        cache: TtlCache[list[Actividad]] | None = None,
    ) -> None:
        self._config = config
        self._session = session
        self._external_session = http_session is not None
        self._http_session = http_session
        self._transport: HttpTransport | None = None
        self._store = store if store is not None else ActividadesStore()
        self._cache: TtlCache[list[Actividad]] = cache if cache is not None else TtlCache(config.cache_ttl)

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> ConapClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def store(self) -> ActividadesStore:
        return self._store

    @property
    def session(self) -> Session:
        return self._session

    def scope(self, guardarecursos: Sequence[Guardarecurso] = ()) -> QueryScope:
        """Query scope for the signed-in user."""
        return QueryScope.for_identity(self._session.identidad, guardarecursos)

    def clear_cache(self) -> None:
        self._cache.clear()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> HttpTransport:
        if self._transport is None:
            raise ConapError("Client not initialized. Use 'async with ConapClient(...) as client:'")
        return self._transport

    def _responsable(self) -> str:
        identidad = self._session.identidad
        return f"{identidad.nombre} {identidad.apellido}".strip() or identidad.id

    def _store_upsert(self, actividad: Actividad) -> None:
        if not self._store.update_actividad(actividad.id, actividad.model_dump(exclude={"id"})):
            self._store.add_actividad(actividad)

    # ------------------------------------------------------------------
    # Activities
    # ------------------------------------------------------------------

    async def fetch_actividades(self, *, force_refresh: bool = False) -> list[Actividad]:
        """Return all activities, from the cache when it is still fresh.

        A backend fetch replaces the store contents with the result.
        """
        if self._config.cache_enabled and not force_refresh:
            cached = self._cache.get()
            if cached is not None:
                _logger.debug("Using %d cached actividades", len(cached))
                return cached

        transport = self._require_transport()
        actividades = await _actividades_api.fetch_actividades(self._session, transport)
        if self._config.cache_enabled:
            self._cache.set(actividades)
        self._store.update_actividades(actividades)
        return actividades

    async def create_actividad(self, form: ActividadForm) -> Actividad:
        transport = self._require_transport()
        actividad = await _actividades_api.create_actividad(self._session, transport, form)
        self._cache.clear()
        self._store.add_actividad(actividad)
        return actividad

    async def update_actividad(self, actividad_id: str, form: ActividadForm) -> Actividad:
        transport = self._require_transport()
        actividad = await _actividades_api.update_actividad(self._session, transport, actividad_id, form)
        self._cache.clear()
        self._store_upsert(actividad)
        return actividad

    async def delete_actividad(self, actividad_id: str) -> None:
        transport = self._require_transport()
        await _actividades_api.delete_actividad(self._session, transport, actividad_id)
        self._cache.clear()
        self._store.remove_actividad(actividad_id)

    async def create_actividades_bulk(self, forms: Sequence[ActividadForm]) -> BulkResult:
        transport = self._require_transport()
        result = await _actividades_api.create_actividades_bulk(self._session, transport, forms)
        self._cache.clear()
        if result.actividades:
            self._store.update_actividades((*self._store.snapshot(), *result.actividades))
        if result.errores:
            _logger.debug("Bulk upload rejected %d of %d rows", len(result.errores), len(forms))
        return result

    # ------------------------------------------------------------------
    # Findings
    # ------------------------------------------------------------------

    async def fetch_hallazgos(self) -> list[Hallazgo]:
        return await _hallazgos_api.fetch_hallazgos(self._session, self._require_transport())

    async def create_hallazgo(self, form: HallazgoForm, *, guardarecurso: str | None = None) -> Hallazgo:
        return await _hallazgos_api.create_hallazgo(
            self._session,
            self._require_transport(),
            form,
            guardarecurso=guardarecurso,
        )

    async def cambiar_estado_hallazgo(
        self,
        hallazgo: Hallazgo,
        nuevo: EstadoHallazgo,
        *,
        observaciones: str = "",
    ) -> Hallazgo:
        """Move a finding forward and persist the change.

        Raises :class:`InvalidTransitionError` without contacting the
        backend when the transition is not allowed.
        """
        if not _hallazgos_rules.is_valid_transition(hallazgo.estado, nuevo):
            raise InvalidTransitionError("Hallazgo", hallazgo.estado, nuevo)
        local = _hallazgos_rules.apply_transition(hallazgo, nuevo, self._responsable())
        stored = await _hallazgos_api.cambiar_estado(
            self._session,
            self._require_transport(),
            hallazgo.id,
            nuevo,
            observaciones=observaciones,
        )
        return stored if stored is not None else local

    async def delete_hallazgo(self, hallazgo_id: str) -> None:
        await _hallazgos_api.delete_hallazgo(self._session, self._require_transport(), hallazgo_id)

    async def agregar_seguimiento_hallazgo(self, hallazgo: Hallazgo, form: SeguimientoForm) -> Hallazgo:
        local = _hallazgos_rules.agregar_seguimiento(hallazgo, form, self._responsable())
        stored = await _hallazgos_api.agregar_seguimiento(self._session, self._require_transport(), hallazgo.id, form)
        return stored if stored is not None else local

    # ------------------------------------------------------------------
    # Incidents
    # ------------------------------------------------------------------

    async def fetch_incidentes(self) -> list[Incidente]:
        return await _incidentes_api.fetch_incidentes(self._session, self._require_transport())

    async def create_incidente(self, form: IncidenteForm, *, guardarecurso: str | None = None) -> Incidente:
        return await _incidentes_api.create_incidente(
            self._session,
            self._require_transport(),
            form,
            guardarecurso=guardarecurso,
        )

    async def cambiar_estado_incidente(
        self,
        incidente: Incidente,
        nuevo: EstadoIncidente,
        *,
        observaciones: str = "",
    ) -> Incidente:
        """Move an incident to *nuevo* and persist the change.

        Raises :class:`InvalidTransitionError` without contacting the
        backend when the transition is not allowed.
        """
        if not _incidentes_rules.is_valid_transition(incidente.estado, nuevo):
            raise InvalidTransitionError("Incidente", incidente.estado, nuevo)
        local = _incidentes_rules.apply_transition(incidente, nuevo, self._responsable())
        stored = await _incidentes_api.cambiar_estado(
            self._session,
            self._require_transport(),
            incidente.id,
            nuevo,
            observaciones=observaciones,
        )
        return stored if stored is not None else local

    async def delete_incidente(self, incidente_id: str) -> None:
        await _incidentes_api.delete_incidente(self._session, self._require_transport(), incidente_id)

    async def agregar_seguimiento_incidente(self, incidente: Incidente, form: SeguimientoForm) -> Incidente:
        local = _incidentes_rules.agregar_seguimiento(incidente, form, self._responsable())
        stored = await _incidentes_api.agregar_seguimiento(
            self._session,
            self._require_transport(),
            incidente.id,
            form,
        )
        return stored if stored is not None else local
