from __future__ import annotations

from datetime import date

import pytest

from pyconap.exceptions import ConapValidationError, InvalidTransitionError
from pyconap.models._base import Coordenadas
from pyconap.models.area_protegida import AreaProtegida, AreaProtegidaForm, EstadoArea
from pyconap.models.guardarecurso import Guardarecurso
from pyconap.queries import filter_areas_protegidas
from pyconap.services import areas


def _area(**fields: object) -> AreaProtegida:
    base: dict[str, object] = {"id": "tikal", "nombre": "Parque Nacional Tikal", "departamento": "Petén"}
    base.update(fields)
    return AreaProtegida(**base)


def _ranger(area_id: str | None) -> Guardarecurso:
    return Guardarecurso(id=f"g-{area_id}", nombre="Ana", email="ana@conap.gob.gt", area_asignada=area_id)


class TestCreateAndUpdate:
    def test_create_is_activo_without_rangers(self) -> None:
        area = areas.create_area(
            AreaProtegidaForm(
                nombre="Biotopo del Quetzal",
                departamento="Baja Verapaz",
                extension=1044,
                coordenadas=Coordenadas(lat=15.21, lng=-90.21),
                ecosistemas=("Bosque Nublado",),
            ),
            today=date(2024, 3, 1),
        )

        assert area.estado is EstadoArea.ACTIVO
        assert area.guardarecursos == ()
        assert area.fecha_creacion == date(2024, 3, 1)
        assert area.ecosistemas == ("Bosque Nublado",)

    def test_create_requires_nombre_and_departamento(self) -> None:
        with pytest.raises(ConapValidationError) as exc_info:
            areas.create_area(AreaProtegidaForm(descripcion="Sin nombre"))
        assert set(exc_info.value.missing_fields) == {"nombre", "departamento"}

    def test_update_keeps_estado_and_unsent_fields(self) -> None:
        area = _area(estado=EstadoArea.DESACTIVADO, ecosistemas=("Karst",), extension=57600)

        actualizada = areas.update_area(area, AreaProtegidaForm(descripcion="Sitio arqueológico"))

        assert actualizada.descripcion == "Sitio arqueológico"
        assert actualizada.estado is EstadoArea.DESACTIVADO
        assert actualizada.ecosistemas == ("Karst",)
        assert actualizada.extension == 57600


class TestEstado:
    def test_toggle_and_allowed_next(self) -> None:
        assert areas.toggle_estado(EstadoArea.ACTIVO) is EstadoArea.DESACTIVADO
        assert areas.toggle_estado(EstadoArea.DESACTIVADO) is EstadoArea.ACTIVO
        assert areas.get_allowed_next(EstadoArea.ACTIVO) == [EstadoArea.DESACTIVADO]

    def test_same_state_is_rejected(self) -> None:
        with pytest.raises(InvalidTransitionError):
            areas.apply_transition(_area(), EstadoArea.ACTIVO)

    def test_deactivation_blocked_while_rangers_assigned(self) -> None:
        rangers = [_ranger("tikal"), _ranger("tikal"), _ranger("yaxha")]

        assert areas.count_guardarecursos(_area(), rangers) == 2
        with pytest.raises(ConapValidationError, match="2 guardarecurso"):
            areas.apply_transition(_area(), EstadoArea.DESACTIVADO, rangers)

    def test_deactivation_and_reactivation(self) -> None:
        desactivada = areas.apply_transition(_area(), EstadoArea.DESACTIVADO, [_ranger("yaxha")])
        assert desactivada.estado is EstadoArea.DESACTIVADO
        assert areas.estado_mensaje(EstadoArea.DESACTIVADO) == "desactivado"

        assert areas.apply_transition(desactivada, EstadoArea.ACTIVO).estado is EstadoArea.ACTIVO


@pytest.mark.parametrize("departamento", [None, "todos", "all"])
def test_filter_hides_deactivated_areas(departamento: str | None) -> None:
    lista = [
        _area(),
        _area(id="yaxha", nombre="Yaxhá-Nakum-Naranjo", estado=EstadoArea.DESACTIVADO),
        _area(id="quetzal", nombre="Biotopo del Quetzal", departamento="Baja Verapaz"),
    ]

    assert [a.id for a in filter_areas_protegidas(lista, departamento=departamento)] == ["tikal", "quetzal"]


def test_filter_by_search_and_departamento() -> None:
    lista = [
        _area(descripcion="Sitio arqueológico maya"),
        _area(id="quetzal", nombre="Biotopo del Quetzal", departamento="Baja Verapaz"),
    ]

    assert [a.id for a in filter_areas_protegidas(lista, "MAYA")] == ["tikal"]
    assert [a.id for a in filter_areas_protegidas(lista, "", "Baja Verapaz")] == ["quetzal"]
