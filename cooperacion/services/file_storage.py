"""
Local storage of uploaded PDF documents.

Files live under ``UPLOADS_DIR`` and are published read-only under
``FILES_BASE_URL`` (``/files/`` by default).  Records store the public URL
only, so every helper here converts between URLs and on-disk paths.
"""

from __future__ import annotations

import logging
import re
import uuid
from datetime import datetime
from pathlib import Path

from cooperacion.utils.constants import PDF_CONTENT_TYPES, PDF_MAGIC

logger = logging.getLogger(__name__)


def _sanitize_filename(filename: str) -> str:
    """Return filename with spaces replaced by underscores and special chars removed."""
    name = Path(filename).name.replace(" ", "_")
    return re.sub(r"[^\w.\-]", "", name)


def is_pdf(raw_bytes: bytes, filename: str | None, content_type: str | None) -> bool:
    """Accept a file declared as PDF (content type or ``.pdf`` name) whose
    contents start with the ``%PDF`` signature."""
    declarado = (content_type or "").lower() in PDF_CONTENT_TYPES or (
        filename or ""
    ).lower().endswith(".pdf")
    return declarado and raw_bytes.startswith(PDF_MAGIC)


def save_upload(
    raw_bytes: bytes,
    filename: str,
    uploads_dir: Path,
    username: str = "anonymous",
) -> Path:
    """Save raw bytes to a date-and-user-partitioned subdirectory.

    The destination path follows the pattern::

        uploads_dir/{year}/{month:02d}/{username}/{uuid4}_{sanitized_filename}

    Args:
        raw_bytes: File contents to persist.
        filename: Original filename supplied by the uploader.
        uploads_dir: Root directory for all uploaded files.
        username: Username of the uploader (used as subfolder).

    Returns:
        Absolute Path to the saved file.
    """
    now = datetime.now()
    safe_user = _sanitize_filename(username) or "anonymous"
    dest_dir = uploads_dir / str(now.year) / f"{now.month:02d}" / safe_user
    dest_dir.mkdir(parents=True, exist_ok=True)

    safe_name = _sanitize_filename(filename) or "documento.pdf"
    dest_path = dest_dir / f"{uuid.uuid4().hex}_{safe_name}"
    dest_path.write_bytes(raw_bytes)
    return dest_path


def public_url(full_path: Path, uploads_dir: Path, base_url: str) -> str:
    """Public URL of a stored file, e.g. ``/files/2025/03/admin/ab12_acta.pdf``."""
    relative = full_path.relative_to(uploads_dir).as_posix()
    return base_url.rstrip("/") + "/" + relative


def path_from_url(url: str, uploads_dir: Path, base_url: str) -> Path | None:
    """Map a public URL back to its file under *uploads_dir*.

    Returns ``None`` for URLs outside ``base_url`` (external links) or that
    would resolve outside the uploads directory.
    """
    prefix = base_url.rstrip("/") + "/"
    if not url or not url.startswith(prefix):
        return None
    root = uploads_dir.resolve()
    candidate = (root / url[len(prefix):]).resolve()
    if root not in candidate.parents:
        return None
    return candidate


def delete_upload(url: str | None, uploads_dir: Path, base_url: str) -> bool:
    """Remove the stored file behind *url*.

    Returns:
        ``True`` if a file was deleted.  Missing files and external URLs are
        not an error: the caller only wants the link gone.
    """
    if not url:
        return False
    path = path_from_url(url, uploads_dir, base_url)
    if path is None or not path.is_file():
        logger.debug("delete_upload: nothing to delete for url=%s", url)
        return False
    path.unlink()
    logger.info("delete_upload: removed %s", path)
    return True
