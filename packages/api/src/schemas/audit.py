# This project was developed with assistance from AI tools.
"""Audit trail records and response schemas."""

from datetime import datetime
from typing import Any

from db.enums import AuditAction, UserRole
from pydantic import BaseModel, ConfigDict, Field

from . import Pagination


class Actor(BaseModel):
    """Who performed an audited action."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str | None = None
    role: UserRole


class AuditRecord(BaseModel):
    """One immutable entry in an application's decision trail."""

    model_config = ConfigDict(frozen=True)

    id: str
    application_id: str
    action: AuditAction
    performed_by: Actor
    performed_at: datetime
    remarks: str | None = None
    from_status: str | None = None
    to_status: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)
    supersedes_id: str | None = None


class CorrectionRequest(BaseModel):
    remarks: str = ""


class AuditListResponse(BaseModel):
    """Chronological audit trail for one application."""

    application_id: str
    data: list[AuditRecord]
    pagination: Pagination
