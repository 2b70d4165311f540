"""Form validators shared by the entity services."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from pyconap._constants import MIN_PASSWORD_LENGTH
from pyconap.exceptions import ConapValidationError

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_DPI_RE = re.compile(r"^\d{13}$")
_PHONE_RE = re.compile(r"^\d{8}$")
_PHONE_SEPARATORS = re.compile(r"[\s-]")


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email))


def is_valid_password(password: str, min_length: int = MIN_PASSWORD_LENGTH) -> bool:
    return len(password) >= min_length


def is_valid_dpi(dpi: str) -> bool:
    """Guatemalan DPI: exactly 13 digits."""
    return bool(_DPI_RE.match(dpi))


def is_valid_phone(phone: str) -> bool:
    """Guatemalan phone number: 8 digits, spaces and dashes ignored."""
    return bool(_PHONE_RE.match(_PHONE_SEPARATORS.sub("", phone)))


def is_valid_coordinates(lat: float, lng: float) -> bool:
    return -90 <= lat <= 90 and -180 <= lng <= 180


def is_not_empty(value: str) -> bool:
    return bool(value.strip())


def missing_fields(fields: Mapping[str, Any]) -> list[str]:
    """Names of *fields* whose value is ``None`` or a blank string."""
    missing: list[str] = []
    for key, value in fields.items():
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(key)
    return missing


def require_fields(fields: Mapping[str, Any]) -> None:
    """Raise :class:`ConapValidationError` listing every missing field."""
    missing = missing_fields(fields)
    if missing:
        raise ConapValidationError(f"Campos requeridos: {', '.join(missing)}", missing_fields=missing)


def require_password(password: str, min_length: int = MIN_PASSWORD_LENGTH) -> None:
    if not is_valid_password(password, min_length):
        raise ConapValidationError(f"La contraseña debe tener al menos {min_length} caracteres")


def require_email(email: str) -> None:
    if not is_valid_email(email):
        raise ConapValidationError(f"Correo electrónico inválido: {email!r}")


def validate_new_password(
    current: str | None,
    new: str,
    confirm: str,
    *,
    min_length: int = MIN_PASSWORD_LENGTH,
) -> None:
    """Validate a password change before it is sent anywhere.

    *current* is ``None`` when an administrator resets someone else's
    password, in which case the "must differ" rule does not apply.
    """
    require_password(new, min_length)
    if new != confirm:
        raise ConapValidationError("Las contraseñas no coinciden")
    if current is not None and new == current:
        raise ConapValidationError("La nueva contraseña debe ser diferente a la actual")
