"""Validation and storage naming for ticket image attachments.

Transport of the file to the storage bucket belongs to the external storage
collaborator; this module only decides whether a file is acceptable and
where it should live.
"""

from __future__ import annotations

import secrets
import string
from datetime import datetime

import structlog

from src.ticketfast.config import get_settings

logger = structlog.get_logger(__name__)

ALLOWED_IMAGE_TYPES: frozenset[str] = frozenset(
    {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}
)

_BASE36 = string.digits + string.ascii_lowercase


class ImageValidationError(ValueError):
    """Raised when an image attachment is missing, of the wrong type or too large."""


def validate_image(
    filename: str | None,
    content_type: str | None,
    size_bytes: int | None,
    *,
    max_size_bytes: int | None = None,
) -> None:
    """Validate an image attachment before upload.

    Args:
        filename: Client-side file name; empty or None means no file was chosen.
        content_type: MIME type reported by the client.
        size_bytes: File size in bytes.
        max_size_bytes: Upper bound; defaults to ``MAX_IMAGE_SIZE_BYTES``.

    Raises:
        ImageValidationError: With a user-facing message.
    """
    if not filename or size_bytes is None:
        raise ImageValidationError("No se ha seleccionado ningún archivo")

    if content_type not in ALLOWED_IMAGE_TYPES:
        logger.info("image_upload.rejected_type", content_type=content_type)
        raise ImageValidationError(
            "Tipo de archivo no permitido. Solo se permiten imágenes "
            "(JPEG, PNG, GIF, WebP)"
        )

    limit = max_size_bytes if max_size_bytes is not None else get_settings().MAX_IMAGE_SIZE_BYTES
    if size_bytes > limit:
        logger.info("image_upload.rejected_size", size_bytes=size_bytes, limit=limit)
        raise ImageValidationError(
            "El archivo es demasiado grande. El tamaño máximo permitido es "
            f"{limit // (1024 * 1024)}MB"
        )


def _random_token(length: int = 11) -> str:
    return "".join(secrets.choice(_BASE36) for _ in range(length))


def build_image_path(
    filename: str,
    now: datetime,
    token: str | None = None,
    *,
    bucket: str | None = None,
) -> str:
    """Storage path ``<bucket>/<epoch-ms>-<token>.<ext>`` for an upload.

    The extension is whatever follows the last dot of ``filename``; a name
    without a dot keeps the whole name as its extension.
    """
    ext = filename.rsplit(".", 1)[-1]
    epoch_ms = int(now.timestamp() * 1000)
    bucket = bucket or get_settings().IMAGE_BUCKET
    return f"{bucket}/{epoch_ms}-{token or _random_token()}.{ext}"
