"""Ranger registration and edits."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from pyconap.config import ConapConfig
from pyconap.models.guardarecurso import Guardarecurso, GuardarecursoForm
from pyconap.models.usuario import EstadoPersonal, Rol, Usuario
from pyconap.services._common import form_patch, new_id
from pyconap.validators import require_email, require_fields, require_password


def create_guardarecurso(
    form: GuardarecursoForm,
    *,
    today: date | None = None,
    config: ConapConfig | None = None,
) -> tuple[Guardarecurso, Usuario]:
    """Register a ranger together with its Guardarecurso-role login.

    Both records share one id and start ``Activo``. The password is only
    validated here; it is handed to the backend separately and never
    stored on either model.
    """
    require_fields(
        {
            "nombre": form.nombre,
            "apellido": form.apellido,
            "cedula": form.cedula,
            "email": form.email,
            "password": form.password,
            "area_asignada": form.area_asignada,
        }
    )
    require_email(form.email)
    require_password(form.password, (config or ConapConfig()).min_password_length)

    shared_id = new_id()
    fecha = today or date.today()
    guardarecurso = Guardarecurso(
        id=shared_id,
        nombre=form.nombre,
        apellido=form.apellido,
        cedula=form.cedula,
        telefono=form.telefono or None,
        email=form.email,
        area_asignada=form.area_asignada,
        fecha_ingreso=fecha,
        estado=EstadoPersonal.ACTIVO,
    )
    usuario = Usuario(
        id=shared_id,
        nombre=form.nombre,
        apellido=form.apellido,
        email=form.email,
        telefono=form.telefono or None,
        rol=Rol.GUARDARECURSO,
        estado=EstadoPersonal.ACTIVO,
        fecha_creacion=fecha,
        area_asignada=form.area_asignada,
    )
    return guardarecurso, usuario


def update_guardarecurso(guardarecurso: Guardarecurso, form: GuardarecursoForm) -> Guardarecurso:
    """Apply an edit form. Never touches ``estado``; see :mod:`pyconap.services.personal`."""
    if form.email:
        require_email(form.email)
    return guardarecurso.merged(form_patch(form, exclude=frozenset({"password"})))


def associated_usuario(guardarecurso: Guardarecurso, usuarios: Iterable[Usuario]) -> Usuario | None:
    """The login account paired with *guardarecurso* (same id, else same e-mail)."""
    by_email: Usuario | None = None
    for usuario in usuarios:
        if usuario.id == guardarecurso.id:
            return usuario
        if by_email is None and usuario.email.lower() == guardarecurso.email.lower():
            by_email = usuario
    return by_email
