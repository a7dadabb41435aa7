# This project was developed with assistance from AI tools.
"""Interview records, evaluation form and request schemas."""

from datetime import date, datetime
from typing import Any

from db.enums import InterviewMode, InterviewRecommendation, InterviewStatus
from pydantic import BaseModel, Field, field_validator

EVALUATION_CRITERIA = ("academic_background", "communication", "discipline", "motivation")


class CriterionScore(BaseModel):
    """Score for one evaluation criterion."""

    score: int = Field(ge=1, le=5)
    comments: str | None = None


class InterviewEvaluation(BaseModel):
    """Trustee's structured interview evaluation."""

    academic_background: CriterionScore
    communication: CriterionScore
    discipline: CriterionScore
    motivation: CriterionScore
    overall_score: int = Field(ge=1, le=20)
    observations: str | None = None
    recommendation: InterviewRecommendation

    @field_validator(*EVALUATION_CRITERIA, mode="before")
    @classmethod
    def _bare_score(cls, value):
        # Accept a bare integer as shorthand for {"score": n}
        if isinstance(value, int) and not isinstance(value, bool):
            return {"score": value}
        return value


class InterviewRecord(BaseModel):
    """Interview attached one-to-one to an application."""

    id: str
    application_id: str
    scheduled_date: date | None = None
    scheduled_time: str | None = None
    mode: InterviewMode
    meeting_link: str | None = None
    location: str | None = None
    status: InterviewStatus = InterviewStatus.NOT_SCHEDULED
    score: int | None = Field(default=None, ge=0, le=20)
    evaluation: InterviewEvaluation | None = None
    reschedule_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class InterviewScheduleRequest(BaseModel):
    """Schedule or reschedule an interview.

    Fields are optional here so that the service can report exactly which
    ones are missing.
    """

    scheduled_date: date | None = None
    scheduled_time: str | None = None
    mode: InterviewMode | None = None
    location_or_link: str | None = None
    remarks: str = ""


class InterviewCompleteRequest(BaseModel):
    evaluation: dict[str, Any] = Field(default_factory=dict)
    remarks: str = ""
