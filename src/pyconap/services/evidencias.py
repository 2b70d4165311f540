"""Photographic evidence helpers."""

from __future__ import annotations

import asyncio
import base64
import logging
import mimetypes
from pathlib import Path

from pyconap.exceptions import ConapValidationError
from pyconap.models._base import Coordenadas, utcnow
from pyconap.models.evidencia import EvidenciaFotografica, TipoEvidencia
from pyconap.services._common import new_id

_logger = logging.getLogger(__name__)

_DEFAULT_MIME = "application/octet-stream"


def _encode_file(path: Path) -> str:
    mime, _ = mimetypes.guess_type(path.name)
    if mime is not None and not mime.startswith("image/"):
        raise ConapValidationError(f"{path.name} no es una imagen ({mime})")
    payload = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime or _DEFAULT_MIME};base64,{payload}"


async def load_image_as_data_uri(path: str | Path) -> str:
    """Read an image file and return it as a ``data:`` URI.

    The read runs in a worker thread. ``OSError`` from the filesystem
    propagates unchanged.
    """
    file_path = Path(path)
    data_uri = await asyncio.to_thread(_encode_file, file_path)
    _logger.debug("Loaded evidence image %s (%d chars)", file_path.name, len(data_uri))
    return data_uri


def create_evidencia(
    url: str,
    descripcion: str = "",
    tipo: TipoEvidencia = TipoEvidencia.OTRO,
    *,
    coordenadas: Coordenadas | None = None,
    guardarecurso: str | None = None,
    actividad: str | None = None,
) -> EvidenciaFotografica:
    if not url:
        raise ConapValidationError("La evidencia requiere una imagen", missing_fields=("url",))
    return EvidenciaFotografica(
        id=new_id(),
        url=url,
        descripcion=descripcion,
        tipo=tipo,
        fecha=utcnow(),
        coordenadas=coordenadas,
        guardarecurso=guardarecurso,
        actividad=actividad,
    )
