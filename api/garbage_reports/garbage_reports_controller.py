import logging
from typing import List, Optional

from fastapi import UploadFile
from pydantic import ValidationError as PydanticValidationError

from config.database import UPLOAD_DIR
from config.settings import settings
from api.garbage_reports.garbage_reports_model import GarbageReport, ReportStatus
from api.garbage_reports.garbage_reports_schema import GarbageReportCreate, ReportStats
from api.garbage_reports.garbage_reports_service import ReportStore, compute_report_stats
from api.uploads.uploads_service import check_image_upload, save_image
from helpers.errors import AppError, InternalError, NotFound, ValidationError

logger = logging.getLogger(__name__)

VALID_STATUSES = {s.value for s in ReportStatus}
PENDING_IMAGE_URL = "/uploads/pending"


def _validation_message(exc: PydanticValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ())) or "request"
        parts.append(f"{field}: {err.get('msg')}")
    return "Invalid data provided: " + ", ".join(parts)


def list_reports_controller(store: ReportStore) -> List[GarbageReport]:
    return store.list_reports()


def get_report_controller(report_id: str, store: ReportStore) -> GarbageReport:
    report = store.get_report(report_id)
    if not report:
        raise NotFound("Report not found")
    return report


def create_report_controller(
    store: ReportStore,
    image: Optional[UploadFile],
    location: Optional[str],
    reporter_name: Optional[str],
    reporter_email: Optional[str],
    description: Optional[str] = None,
    latitude: Optional[str] = None,
    longitude: Optional[str] = None,
) -> GarbageReport:
    """
    Validate the submission, store the image, then persist a pending report.

    All field validation happens before the image is written. A store
    failure after the write leaves the file behind (see
    ``remove_orphaned_uploads``).
    """
    image = check_image_upload(image)

    # validate the text fields against a placeholder URL before touching disk
    fields = {
        "location": location,
        "reporter_name": reporter_name,
        "reporter_email": reporter_email,
        "description": description,
        "latitude": latitude,
        "longitude": longitude,
    }
    try:
        draft = GarbageReportCreate(image_url=PENDING_IMAGE_URL, **fields)
    except PydanticValidationError as exc:
        raise ValidationError(_validation_message(exc))

    image_url = save_image(image, UPLOAD_DIR, settings.MAX_FILE_SIZE)
    payload = draft.model_copy(update={"image_url": image_url})

    try:
        return store.create_report(payload)
    except AppError:
        raise
    except Exception as exc:
        logger.exception("Failed to create report for image %s", image_url)
        raise InternalError("Failed to create report") from exc


def update_status_controller(report_id: str, status: str, store: ReportStore) -> GarbageReport:
    if status not in VALID_STATUSES:
        raise ValidationError("Invalid status")
    return store.update_status(report_id, ReportStatus(status))


def report_stats_controller(store: ReportStore) -> ReportStats:
    return compute_report_stats(store.list_reports())
