from __future__ import annotations

import pytest

from pyconap.exceptions import ConapValidationError
from pyconap.validators import (
    is_not_empty,
    is_valid_coordinates,
    is_valid_dpi,
    is_valid_email,
    is_valid_password,
    is_valid_phone,
    missing_fields,
    require_fields,
    validate_new_password,
)


class TestFormats:
    def test_email(self) -> None:
        assert is_valid_email("ana.lopez@conap.gob.gt")
        assert not is_valid_email("ana@conap")
        assert not is_valid_email("ana lopez@conap.gob.gt")

    def test_dpi_is_thirteen_digits(self) -> None:
        assert is_valid_dpi("1234567890101")
        assert not is_valid_dpi("123456789010")
        assert not is_valid_dpi("12345678901AB")

    def test_phone_ignores_spaces_and_dashes(self) -> None:
        assert is_valid_phone("5555-1234")
        assert is_valid_phone("5555 1234")
        assert not is_valid_phone("555-1234")

    def test_coordinates(self) -> None:
        assert is_valid_coordinates(17.2, -89.6)
        assert not is_valid_coordinates(91, 0)
        assert not is_valid_coordinates(0, -181)

    def test_password_length(self) -> None:
        assert is_valid_password("abcdef")
        assert not is_valid_password("abcde")
        assert is_valid_password("abcde", min_length=5)

    def test_not_empty(self) -> None:
        assert is_not_empty(" x ")
        assert not is_not_empty("   ")


class TestRequiredFields:
    def test_missing_fields_lists_blank_and_none(self) -> None:
        assert missing_fields({"nombre": "Ana", "apellido": " ", "fecha": None}) == ["apellido", "fecha"]

    def test_require_fields_raises_with_names(self) -> None:
        with pytest.raises(ConapValidationError) as exc_info:
            require_fields({"titulo": "", "descripcion": "algo"})
        assert exc_info.value.missing_fields == ("titulo",)

    def test_require_fields_passes(self) -> None:
        require_fields({"titulo": "Incendio"})


class TestPasswordChange:
    def test_too_short(self) -> None:
        with pytest.raises(ConapValidationError, match="al menos 6"):
            validate_new_password("actual1", "abc", "abc")

    def test_confirmation_mismatch(self) -> None:
        with pytest.raises(ConapValidationError, match="no coinciden"):
            validate_new_password("actual1", "nueva12", "nueva13")

    def test_must_differ_from_current(self) -> None:
        with pytest.raises(ConapValidationError, match="diferente"):
            validate_new_password("igual12", "igual12", "igual12")

    def test_admin_reset_skips_current_check(self) -> None:
        validate_new_password(None, "nueva12", "nueva12")
