# This project was developed with assistance from AI tools.
"""Application records and lifecycle request/response schemas."""

from datetime import datetime

from db.enums import ApplicationStatus, ForwardRecommendation, PaymentStatus, Vertical
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .audit import AuditRecord
from .interview import InterviewRecord


class ForwardingRecord(BaseModel):
    """Superintendent forwarding note, written once on REVIEW -> FORWARDED."""

    model_config = ConfigDict(frozen=True)

    superintendent_id: str
    superintendent_name: str | None = None
    forwarded_at: datetime
    recommendation: ForwardRecommendation
    remarks: str


class ApplicationRecord(BaseModel):
    """An admission application as tracked by the lifecycle."""

    id: str
    tracking_number: str
    applicant_name: str
    vertical: Vertical
    status: ApplicationStatus = ApplicationStatus.DRAFT
    payment_status: PaymentStatus = PaymentStatus.PENDING
    applicant_mobile: str | None = None
    father_mobile: str | None = None
    mother_mobile: str | None = None
    forwarded_by: ForwardingRecord | None = None
    requires_interview: bool | None = None
    interview_id: str | None = None
    flags: set[str] = Field(default_factory=set)
    submitted_at: datetime | None = None
    decided_at: datetime | None = None
    archived_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_archived(self) -> bool:
        return self.archived_at is not None


class ApplicationCreate(BaseModel):
    """Submit a new admission application."""

    applicant_name: str = Field(min_length=1)
    vertical: Vertical
    applicant_mobile: str | None = None
    father_mobile: str | None = None
    mother_mobile: str | None = None
    payment_status: PaymentStatus = PaymentStatus.PENDING
    flags: set[str] = Field(default_factory=set)

    @field_validator("vertical", mode="before")
    @classmethod
    def _parse_vertical(cls, value):
        return Vertical.parse(value)


class RemarksRequest(BaseModel):
    """Body for transitions that only carry remarks."""

    remarks: str = ""


class ForwardRequest(BaseModel):
    recommendation: ForwardRecommendation
    remarks: str = ""


class ProvisionalDecisionRequest(BaseModel):
    approve: bool
    requires_interview: bool = True
    remarks: str = ""


class FinalDecisionRequest(BaseModel):
    approve: bool
    remarks: str = ""


class MessageRequest(BaseModel):
    message: str = ""


class TransitionOutcome(BaseModel):
    """Result of a committed lifecycle action.

    ``warnings`` lists collaborator failures (notification dispatch, account
    materialization) that did not roll back the transition.
    """

    application: ApplicationRecord
    interview: InterviewRecord | None = None
    audit_entry: AuditRecord | None = None
    student_id: str | None = None
    warnings: list[str] = Field(default_factory=list)


class ApplicationResponse(BaseModel):
    """Single application response."""

    data: ApplicationRecord
    effective_status: str
    status_label: str


class TrackingView(BaseModel):
    """What a tracking number reveals: no contacts, remarks or flags."""

    tracking_number: str
    applicant_name: str
    vertical: str
    effective_status: str
    status_label: str
    next_step: str


class TransitionResponse(BaseModel):
    """Response for lifecycle actions."""

    data: ApplicationRecord
    interview: InterviewRecord | None = None
    audit_entry: AuditRecord | None = None
    student_id: str | None = None
    warnings: list[str] = []
