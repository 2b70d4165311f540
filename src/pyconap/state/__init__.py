"""State/store layer.

This package holds the single in-memory source of truth for activity
records shared by the planning, daily-log and route views.
"""

from pyconap.state.store import ActividadesStore, Listener

__all__ = ["ActividadesStore", "Listener"]
