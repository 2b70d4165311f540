"""Session state for authenticated backend calls."""

from __future__ import annotations

import time

from pydantic import BaseModel, ConfigDict, Field

from pyconap.models.usuario import Identidad

#: Default bearer token lifetime in seconds (8 hours, one work shift).
DEFAULT_SESSION_TTL: float = 8 * 3600


class Session(BaseModel):
    """Authenticated session supplied by the login collaborator.

    pyconap never validates the token or the identity itself; both are
    taken as given and forwarded to the backend and to the permission
    and scoping helpers.

    Parameters
    ----------
    access_token : str
        Bearer token sent with every backend request.
    identidad : Identidad
        The user acting in the console.
    created_at : float
        Monotonic timestamp (``time.monotonic()``) of session creation.
    ttl : float
        Seconds after which the session is considered expired.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
    )

    access_token: str = Field(..., min_length=1, repr=False)
    identidad: Identidad
    created_at: float = Field(default_factory=time.monotonic)
    ttl: float = DEFAULT_SESSION_TTL

    @property
    def is_expired(self) -> bool:
        """Whether the session has exceeded its TTL."""
        return (time.monotonic() - self.created_at) >= self.ttl

    @property
    def age(self) -> float:
        """Seconds since the session was created."""
        return time.monotonic() - self.created_at
