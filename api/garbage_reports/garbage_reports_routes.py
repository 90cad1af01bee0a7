from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from middlewares.auth_middleware import auth_middleware
from utils.deps import get_report_store
from api.garbage_reports.garbage_reports_service import ReportStore
from api.garbage_reports.garbage_reports_controller import (
    list_reports_controller,
    get_report_controller,
    create_report_controller,
    update_status_controller,
)
from api.garbage_reports.garbage_reports_schema import GarbageReportResponse, StatusUpdate

router = APIRouter(prefix="/reports", tags=["Garbage Reports"])


@router.get("", response_model=List[GarbageReportResponse], summary="List all reports, newest first")
def list_reports(store: ReportStore = Depends(get_report_store)):
    return list_reports_controller(store)


@router.get("/{report_id}", response_model=GarbageReportResponse, summary="Get a single report")
def get_report(report_id: str, store: ReportStore = Depends(get_report_store)):
    return get_report_controller(report_id, store)


@router.post(
    "",
    response_model=GarbageReportResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a new garbage report"
)
def create_report(
    image: Optional[UploadFile] = File(None),
    location: Optional[str] = Form(None),
    reporter_name: Optional[str] = Form(None, alias="reporterName"),
    reporter_email: Optional[str] = Form(None, alias="reporterEmail"),
    description: Optional[str] = Form(None),
    latitude: Optional[str] = Form(None),
    longitude: Optional[str] = Form(None),
    store: ReportStore = Depends(get_report_store),
):
    """
    Multipart submission. Any status sent by the client is ignored;
    new reports always start as pending.
    """
    return create_report_controller(
        store,
        image=image,
        location=location,
        reporter_name=reporter_name,
        reporter_email=reporter_email,
        description=description,
        latitude=latitude,
        longitude=longitude,
    )


@router.patch(
    "/{report_id}/status",
    response_model=GarbageReportResponse,
    summary="(Admin only) Change a report's status"
)
def update_report_status(
    report_id: str,
    update: StatusUpdate,
    _token: str = Depends(auth_middleware),
    store: ReportStore = Depends(get_report_store),
):
    return update_status_controller(report_id, update.status, store)
