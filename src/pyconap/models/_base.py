"""Base model and shared value types for CONAP entities.

Every entity model inherits from :class:`ConapBaseModel` which provides:

* ``alias_generator=to_camel`` so the console's camelCase keys
  (``horaInicio``, ``guardarecursoAsignado``) map to snake_case fields.
* ``frozen=True`` so snapshots handed to subscribers cannot be mutated.
* A ``before`` validator that turns empty strings into ``None`` so
  optional fields fall back to their defaults.
* :meth:`ConapBaseModel.merged` for partial updates that re-validate.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import Annotated, Any, Self

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from pyconap.exceptions import ConapValidationError

_HHMM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def utcnow() -> datetime:
    return datetime.now(UTC)


def _ensure_tz_aware(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _check_hhmm(value: str | None) -> str | None:
    if value is None:
        return None
    if not _HHMM.match(value):
        raise ValueError(f"time must be HH:MM, got {value!r}")
    return value


def _coerce_id(value: Any) -> Any:
    # Backend primary keys arrive as integers.
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


AwareDatetime = Annotated[datetime | None, AfterValidator(_ensure_tz_aware)]
"""Datetime normalised to UTC when the payload carries no offset."""

UtcDatetime = Annotated[datetime, AfterValidator(_ensure_tz_aware)]
"""Required counterpart of :data:`AwareDatetime`."""

HoraMinuto = Annotated[str | None, AfterValidator(_check_hhmm)]
"""Wall-clock time as ``"HH:MM"``."""

EntityId = Annotated[str, BeforeValidator(_coerce_id)]


class ConapBaseModel(BaseModel):
    """Base for every CONAP entity and form model."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
        str_strip_whitespace=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_empty_strings(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return {key: value for key, value in values.items() if not (isinstance(value, str) and not value.strip())}

    @classmethod
    def field_name_for(cls, key: str) -> str | None:
        """Resolve a field name or camelCase alias to the field name."""
        if key in cls.model_fields:
            return key
        for name, info in cls.model_fields.items():
            if info.alias == key:
                return name
        return None

    def merged(self, patch: dict[str, Any], *, protected: frozenset[str] = frozenset({"id"})) -> Self:
        """Return a re-validated copy with *patch* applied.

        Keys may be field names or aliases. Unknown keys and invalid values raise
        :class:`ConapValidationError`; *protected* fields are left untouched.
        """
        data = self.model_dump()
        for key, value in patch.items():
            name = self.field_name_for(key)
            if name is None:
                raise ConapValidationError(f"{type(self).__name__} has no field {key!r}")
            if name in protected:
                continue
            data[name] = value
        try:
            return type(self).model_validate(data)
        except ValidationError as exc:
            raise ConapValidationError(f"Invalid {type(self).__name__} update: {exc}") from exc


class Coordenadas(ConapBaseModel):
    """A WGS84 point."""

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class PuntoRuta(Coordenadas):
    """A point of a recorded GPS route."""

    timestamp: AwareDatetime = None


class Seguimiento(ConapBaseModel):
    """One append-only follow-up entry on an incident or finding timeline."""

    fecha: UtcDatetime = Field(default_factory=utcnow)
    accion: str
    responsable: str
    observaciones: str = ""


class SeguimientoForm(ConapBaseModel):
    """Manual follow-up entry as typed by the user."""

    accion: str = ""
    observaciones: str = ""
