# api/uploads/uploads_service.py

import logging
import time
import uuid
from pathlib import Path
from typing import Iterable, List, Optional

from fastapi import UploadFile

from api.garbage_reports.garbage_reports_service import ReportStore
from helpers.errors import ValidationError

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "/uploads/"

# files younger than this may belong to a create request still in flight
ORPHAN_MIN_AGE_SECONDS = 300


def check_image_upload(file: Optional[UploadFile]) -> UploadFile:
    """Reject a missing attachment or one that does not declare an image type."""
    if file is None or not file.filename:
        raise ValidationError("Image is required")
    content_type = (file.content_type or "").lower()
    if not content_type.startswith("image/"):
        raise ValidationError("Only image files are allowed")
    return file


def save_image(file: UploadFile, upload_dir: Path, max_size: int) -> str:
    """
    Write the upload under a generated name and return its public URL.
    The original filename only contributes its extension.
    """
    data = file.file.read(max_size + 1)
    if len(data) > max_size:
        raise ValidationError(f"Image exceeds the maximum size of {max_size} bytes")

    ext = Path(file.filename or "").suffix.lower()
    unique_name = f"{uuid.uuid4().hex}{ext}"
    upload_dir.mkdir(parents=True, exist_ok=True)
    dest = upload_dir / unique_name
    with dest.open("wb") as buffer:
        buffer.write(data)

    logger.info("Stored image %s (%d bytes)", unique_name, len(data))
    return f"{UPLOAD_URL_PREFIX}{unique_name}"


def resolve_upload(upload_dir: Path, filename: str) -> Optional[Path]:
    """Path of a stored file, or None if it is missing or outside upload_dir."""
    root = upload_dir.resolve()
    candidate = (root / filename).resolve()
    if candidate.parent != root or not candidate.is_file():
        return None
    return candidate


def _referenced_names(image_urls: Iterable[str]) -> set:
    return {
        url[len(UPLOAD_URL_PREFIX):]
        for url in image_urls
        if url and url.startswith(UPLOAD_URL_PREFIX)
    }


def find_orphaned_uploads(
    store: ReportStore,
    upload_dir: Path,
    min_age: float = ORPHAN_MIN_AGE_SECONDS,
    now: Optional[float] = None,
) -> List[Path]:
    """
    Files in upload_dir that no report points at and that were last
    modified at least ``min_age`` seconds before ``now``.
    """
    if not upload_dir.exists():
        return []
    cutoff = (time.time() if now is None else now) - min_age
    referenced = _referenced_names(r.image_url for r in store.list_reports())
    return sorted(
        p for p in upload_dir.iterdir()
        if p.is_file()
        and p.name not in referenced
        and p.stat().st_mtime <= cutoff
    )


def remove_orphaned_uploads(
    store: ReportStore,
    upload_dir: Path,
    min_age: float = ORPHAN_MIN_AGE_SECONDS,
    now: Optional[float] = None,
) -> List[Path]:
    removed = []
    for path in find_orphaned_uploads(store, upload_dir, min_age=min_age, now=now):
        try:
            path.unlink()
        except FileNotFoundError:
            continue
        removed.append(path)
        logger.info("Removed orphaned upload %s", path.name)
    return removed
