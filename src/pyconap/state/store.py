"""In-memory publish/subscribe store for activity records.

One store is created per application instance and injected wherever it
is needed; there is no module-level singleton.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from pyconap.models.actividad import Actividad

_logger = logging.getLogger(__name__)

Snapshot = tuple[Actividad, ...]
Listener = Callable[[Snapshot], None]


class ActividadesStore:
    """Authoritative list of :class:`Actividad` records.

    Listeners are called synchronously with the full snapshot after every
    mutation. Snapshots are immutable tuples of frozen models, so a listener
    can keep a reference without seeing later changes.

    A listener may mutate the store while it is being notified. The change
    is applied at once, but its notification is deferred until the current
    round has reached every listener; one more round then delivers the
    latest snapshot. Listeners therefore never observe notifications out
    of order.
    """

    def __init__(self, actividades: Iterable[Actividad] = ()) -> None:
        self._actividades: Snapshot = tuple(actividades)
        self._listeners: list[Listener] = []
        self._notifying = False
        self._pending = False

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a function that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return _unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def notify(self) -> None:
        """Publish the current snapshot to every listener."""
        if self._notifying:
            self._pending = True
            return
        self._notifying = True
        try:
            while True:
                self._pending = False
                snapshot = self._actividades
                for listener in tuple(self._listeners):
                    try:
                        listener(snapshot)
                    except Exception:
                        _logger.warning("Actividades listener %r failed", listener, exc_info=True)
                if not self._pending:
                    break
        finally:
            self._notifying = False

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def snapshot(self) -> Snapshot:
        return self._actividades

    def get_actividades(self) -> Snapshot:
        """Synchronous read for callers outside the subscription lifecycle."""
        return self._actividades

    def get_actividad(self, actividad_id: str) -> Actividad | None:
        for actividad in self._actividades:
            if actividad.id == actividad_id:
                return actividad
        return None

    def __len__(self) -> int:
        return len(self._actividades)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def update_actividades(self, actividades: Iterable[Actividad]) -> None:
        """Replace the whole list (initial load or backend refresh)."""
        self._actividades = tuple(actividades)
        self.notify()

    def add_actividad(self, actividad: Actividad) -> None:
        self._actividades = (*self._actividades, actividad)
        self.notify()

    def update_actividad(self, actividad_id: str, fields: Mapping[str, Any]) -> bool:
        """Merge *fields* into the record with *actividad_id*.

        Field names and camelCase aliases are both accepted; ``id`` is never
        changed. Returns ``False`` without notifying when no record has that
        id.
        """
        for index, actividad in enumerate(self._actividades):
            if actividad.id == actividad_id:
                updated = actividad.merged(dict(fields))
                self._actividades = (*self._actividades[:index], updated, *self._actividades[index + 1 :])
                self.notify()
                return True
        _logger.debug("update_actividad ignored: no actividad with id=%s", actividad_id)
        return False

    def remove_actividad(self, actividad_id: str) -> bool:
        remaining = tuple(a for a in self._actividades if a.id != actividad_id)
        if len(remaining) == len(self._actividades):
            _logger.debug("remove_actividad ignored: no actividad with id=%s", actividad_id)
            return False
        self._actividades = remaining
        self.notify()
        return True
