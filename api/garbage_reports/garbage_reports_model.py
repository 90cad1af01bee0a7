import enum
import uuid
from sqlalchemy import CheckConstraint, Column, String, Float, Text
from config.database import Base, UTCDateTime


class ReportStatus(str, enum.Enum):
    pending     = "pending"
    verified    = "verified"
    in_progress = "in-progress"
    completed   = "completed"


class GarbageReport(Base):
    __tablename__ = "garbage_reports"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'verified', 'in-progress', 'completed')",
            name="ck_garbage_reports_status",
        ),
    )

    id             = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    image_url      = Column(Text, nullable=False)
    location       = Column(Text, nullable=False)
    latitude       = Column(Float, nullable=True)
    longitude      = Column(Float, nullable=True)
    description    = Column(Text, nullable=True)
    reporter_name  = Column(Text, nullable=False)
    reporter_email = Column(Text, nullable=False)
    status         = Column(String(20), nullable=False, default=ReportStatus.pending.value)

    # timestamps are assigned by the stores, not by column defaults
    created_at     = Column(UTCDateTime(), nullable=False, index=True)
    updated_at     = Column(UTCDateTime(), nullable=False)
    verified_at    = Column(UTCDateTime(), nullable=True)
    completed_at   = Column(UTCDateTime(), nullable=True)

    def __repr__(self):
        return f"<GarbageReport(id={self.id}, status='{self.status}', location='{self.location}')>"
