from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime
from api.garbage_reports.garbage_reports_model import ReportStatus


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


# ----- Create Schema -----
class GarbageReportCreate(BaseModel):
    """
    Validated form fields of a new report. ``image_url`` is filled in by
    the server after the image is stored; status is never accepted.
    """
    image_url: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1, description="Address or raw coordinate pair")
    latitude: Optional[float] = Field(None, allow_inf_nan=False)
    longitude: Optional[float] = Field(None, allow_inf_nan=False)
    description: Optional[str] = None
    reporter_name: str = Field(..., min_length=1)
    reporter_email: EmailStr

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    @field_validator("latitude", "longitude", "description", mode="before")
    @classmethod
    def empty_form_values_are_absent(cls, v):
        return _blank_to_none(v)


# ----- Response Schema -----
class GarbageReportResponse(BaseModel):
    id: str
    image_url: str
    location: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    description: Optional[str] = None
    reporter_name: str
    reporter_email: str
    status: ReportStatus
    created_at: datetime
    updated_at: datetime
    verified_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


class StatusUpdate(BaseModel):
    # plain str so an unknown value is reported as "Invalid status" after the auth check
    status: str


class ReportStats(BaseModel):
    pending: int
    verified: int
    in_progress: int
    completed: int
    total: int

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
