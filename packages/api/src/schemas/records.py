# This project was developed with assistance from AI tools.
"""Resident-side records read by guardian reconciliation."""

from datetime import date, datetime

from db.enums import AllocationStatus, StudentStatus, UserRole, Vertical
from pydantic import BaseModel, Field


class UserRecord(BaseModel):
    id: str
    role: UserRole
    full_name: str
    mobile: str | None = None
    email: str | None = None
    linked_student_ids: list[str] = Field(default_factory=list)


class StudentRecord(BaseModel):
    """A resident (admitted) student."""

    id: str
    user_id: str | None = None
    application_id: str | None = None
    full_name: str
    vertical: Vertical | None = None
    guardian_mobile: str | None = None
    father_mobile: str | None = None
    mother_mobile: str | None = None
    status: StudentStatus = StudentStatus.ACTIVE
    joining_date: date | None = None


class RoomRecord(BaseModel):
    id: str
    number: str
    block: str | None = None
    vertical: Vertical | None = None


class AllocationRecord(BaseModel):
    id: str
    room_id: str
    student_id: str | None = None
    application_id: str | None = None
    status: AllocationStatus = AllocationStatus.ACTIVE
    allocated_at: datetime | None = None
