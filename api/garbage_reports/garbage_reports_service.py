"""
Report stores.

``ReportStore`` is the capability the API depends on; ``MemoryReportStore``
keeps reports in a process-local map and ``DatabaseReportStore`` in the
``garbage_reports`` table. Both hand back ``GarbageReport`` instances.

Status changes are deliberately permissive: any status may follow any
other. ``verified_at``/``completed_at`` are stamped every time the report
is moved into that status and are never cleared by other updates.
"""
import abc
import logging
import threading
import uuid
from collections import Counter
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional, Union

from sqlalchemy import desc
from sqlalchemy.orm import Session

from api.garbage_reports.garbage_reports_model import GarbageReport, ReportStatus
from api.garbage_reports.garbage_reports_schema import GarbageReportCreate, ReportStats
from helpers.errors import NotFound

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_report_id() -> str:
    """Random 128-bit identifier."""
    return str(uuid.uuid4())


def _apply_status(report: GarbageReport, status: ReportStatus, now: datetime) -> None:
    report.status = status.value
    report.updated_at = now
    if status is ReportStatus.verified:
        report.verified_at = now
    elif status is ReportStatus.completed:
        report.completed_at = now


def _build_report(data: GarbageReportCreate, now: datetime) -> GarbageReport:
    fields = data.model_dump()
    return GarbageReport(
        id=new_report_id(),
        status=ReportStatus.pending.value,
        created_at=now,
        updated_at=now,
        verified_at=None,
        completed_at=None,
        **fields,
    )


class ReportStore(abc.ABC):
    """Durable record of garbage reports."""

    @abc.abstractmethod
    def list_reports(self) -> List[GarbageReport]:
        """All reports, newest first."""

    @abc.abstractmethod
    def get_report(self, report_id: str) -> Optional[GarbageReport]:
        """The report, or None when the id is unknown."""

    @abc.abstractmethod
    def create_report(self, data: GarbageReportCreate) -> GarbageReport:
        """Persist a new pending report."""

    @abc.abstractmethod
    def update_status(self, report_id: str, status: Union[ReportStatus, str]) -> GarbageReport:
        """Move a report to ``status``; raises NotFound for unknown ids."""

    def count(self) -> int:
        return len(self.list_reports())


class MemoryReportStore(ReportStore):
    def __init__(self, clock: Clock = utc_now):
        self._clock = clock
        self._reports: Dict[str, GarbageReport] = {}
        self._lock = threading.Lock()

    def list_reports(self) -> List[GarbageReport]:
        with self._lock:
            reports = list(self._reports.values())
        return sorted(reports, key=lambda r: r.created_at, reverse=True)

    def get_report(self, report_id: str) -> Optional[GarbageReport]:
        with self._lock:
            return self._reports.get(report_id)

    def create_report(self, data: GarbageReportCreate) -> GarbageReport:
        report = _build_report(data, self._clock())
        with self._lock:
            self._reports[report.id] = report
        logger.info("Created report %s", report.id)
        return report

    def update_status(self, report_id: str, status: Union[ReportStatus, str]) -> GarbageReport:
        status = ReportStatus(status)
        with self._lock:
            report = self._reports.get(report_id)
            if report is None:
                raise NotFound("Report not found")
            previous = report.status
            _apply_status(report, status, self._clock())
        logger.info("Report %s status %s -> %s", report_id, previous, status.value)
        return report

    def count(self) -> int:
        with self._lock:
            return len(self._reports)


class DatabaseReportStore(ReportStore):
    def __init__(self, db: Session, clock: Clock = utc_now):
        self.db = db
        self._clock = clock

    def list_reports(self) -> List[GarbageReport]:
        return (
            self.db.query(GarbageReport)
            .order_by(desc(GarbageReport.created_at))
            .all()
        )

    def get_report(self, report_id: str) -> Optional[GarbageReport]:
        return self.db.get(GarbageReport, report_id)

    def create_report(self, data: GarbageReportCreate) -> GarbageReport:
        report = _build_report(data, self._clock())
        try:
            self.db.add(report)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(report)
        logger.info("Created report %s", report.id)
        return report

    def update_status(self, report_id: str, status: Union[ReportStatus, str]) -> GarbageReport:
        status = ReportStatus(status)
        report = self.get_report(report_id)
        if report is None:
            raise NotFound("Report not found")
        previous = report.status
        _apply_status(report, status, self._clock())
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(report)
        logger.info("Report %s status %s -> %s", report_id, previous, status.value)
        return report

    def count(self) -> int:
        return self.db.query(GarbageReport).count()


def compute_report_stats(reports: Iterable[GarbageReport]) -> ReportStats:
    """Count reports per status with a full scan."""
    counts = Counter(r.status for r in reports)
    return ReportStats(
        pending=counts[ReportStatus.pending.value],
        verified=counts[ReportStatus.verified.value],
        in_progress=counts[ReportStatus.in_progress.value],
        completed=counts[ReportStatus.completed.value],
        total=sum(counts.values()),
    )
