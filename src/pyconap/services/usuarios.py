"""Coordinator account management."""

from __future__ import annotations

from datetime import date

from pyconap.config import ConapConfig
from pyconap.models.usuario import EstadoPersonal, Rol, Usuario, UsuarioForm
from pyconap.services._common import form_patch, new_id
from pyconap.validators import require_email, require_fields, require_password


def create_usuario(
    form: UsuarioForm,
    *,
    today: date | None = None,
    config: ConapConfig | None = None,
) -> Usuario:
    """Create a login account from the user-management screen.

    Accounts created here are always ``Coordinador`` and ``Activo``;
    ranger accounts come from :func:`pyconap.services.guardarecursos.create_guardarecurso`.
    """
    require_fields(
        {
            "nombre": form.nombre,
            "apellido": form.apellido,
            "email": form.email,
            "password": form.password,
        }
    )
    require_email(form.email)
    require_password(form.password, (config or ConapConfig()).min_password_length)
    return Usuario(
        id=new_id(),
        nombre=form.nombre,
        apellido=form.apellido,
        email=form.email,
        telefono=form.telefono or None,
        rol=Rol.COORDINADOR,
        estado=EstadoPersonal.ACTIVO,
        fecha_creacion=today or date.today(),
    )


def update_usuario(usuario: Usuario, form: UsuarioForm) -> Usuario:
    """Apply an edit form. Role and password are never changed here."""
    if form.email:
        require_email(form.email)
    return usuario.merged(form_patch(form, exclude=frozenset({"password", "rol", "cedula"})))
