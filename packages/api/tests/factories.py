# This project was developed with assistance from AI tools.
"""Shared test factory functions for records, users and repositories.

Keeps record construction in one place so that individual test modules only
spell out the fields they care about.
"""

from datetime import UTC, date, datetime
from unittest.mock import AsyncMock

from db.enums import (
    AllocationStatus,
    ApplicationStatus,
    InterviewMode,
    InterviewStatus,
    StudentStatus,
    UserRole,
    Vertical,
)

from src.repositories.base import Collection
from src.repositories.memory import InMemoryRepository
from src.schemas.application import ApplicationRecord
from src.schemas.auth import UserContext
from src.schemas.interview import InterviewRecord
from src.schemas.records import AllocationRecord, RoomRecord, StudentRecord, UserRecord

# Fixed IDs for cross-test referencing
SUPERINTENDENT_ID = "supt-001"
TRUSTEE_ID = "trustee-001"
TRUSTEE_2_ID = "trustee-002"
ADMIN_ID = "admin-001"
PARENT_ID = "parent-001"
APPLICANT_ID = "applicant-001"


def make_user(role: UserRole, user_id: str | None = None, name: str | None = None) -> UserContext:
    """Create a UserContext for ``role``."""
    return UserContext(
        user_id=user_id or f"{role.value}-user",
        role=role,
        email=f"{role.value}@example.org",
        name=name or role.value.title(),
    )


def superintendent() -> UserContext:
    return make_user(UserRole.SUPERINTENDENT, SUPERINTENDENT_ID, "Hemant Desai")


def trustee() -> UserContext:
    return make_user(UserRole.TRUSTEE, TRUSTEE_ID, "Nirmala Jain")


def second_trustee() -> UserContext:
    return make_user(UserRole.TRUSTEE, TRUSTEE_2_ID, "Suresh Jain")


def admin() -> UserContext:
    return make_user(UserRole.ADMIN, ADMIN_ID, "Office Admin")


def parent() -> UserContext:
    return make_user(UserRole.PARENT, PARENT_ID, "Ramesh Shah")


def applicant() -> UserContext:
    return make_user(UserRole.APPLICANT, APPLICANT_ID, "Rohan Mehta")


def make_application(
    id="APP-1",
    status=ApplicationStatus.SUBMITTED,
    applicant_name="Rohan Mehta",
    vertical=Vertical.BOYS_HOSTEL,
    tracking_number=None,
    father_mobile=None,
    mother_mobile=None,
    applicant_mobile=None,
    requires_interview=None,
    interview_id=None,
) -> ApplicationRecord:
    """Create an ApplicationRecord already at ``status``.

    Args:
        id: Application id.
        status: Lifecycle status to start from.
        applicant_name: Applicant's full name.
        vertical: Hostel vertical.
        tracking_number: Defaults to one derived from ``id``.
        father_mobile: Father's phone as entered on the form.
        mother_mobile: Mother's phone as entered on the form.
        applicant_mobile: Applicant's own phone.
        requires_interview: Set by the provisional decision.
        interview_id: Id of an attached interview record.

    Returns:
        ApplicationRecord ready to add to a repository.
    """
    now = datetime(2026, 6, 1, 9, 0, tzinfo=UTC)
    return ApplicationRecord(
        id=id,
        tracking_number=tracking_number or f"{vertical.tracking_prefix}-2026-{id}",
        applicant_name=applicant_name,
        vertical=vertical,
        status=status,
        father_mobile=father_mobile,
        mother_mobile=mother_mobile,
        applicant_mobile=applicant_mobile,
        requires_interview=requires_interview,
        interview_id=interview_id,
        submitted_at=now,
        created_at=now,
        updated_at=now,
    )


def make_interview(
    id="INT-1",
    application_id="APP-1",
    status=InterviewStatus.SCHEDULED,
    mode=InterviewMode.PHYSICAL,
) -> InterviewRecord:
    return InterviewRecord(
        id=id,
        application_id=application_id,
        scheduled_date=date(2026, 7, 1),
        scheduled_time="10:30",
        mode=mode,
        location="Trust office" if mode == InterviewMode.PHYSICAL else None,
        meeting_link="https://meet.example.org/x" if mode == InterviewMode.ONLINE else None,
        status=status,
    )


def make_evaluation(**overrides) -> dict:
    """A complete interview evaluation payload."""
    payload = {
        "academic_background": {"score": 4, "comments": "Good marks"},
        "communication": {"score": 5},
        "discipline": {"score": 4},
        "motivation": {"score": 3},
        "overall_score": 16,
        "observations": "Confident and clear.",
        "recommendation": "APPROVE",
    }
    payload.update(overrides)
    return payload


def make_student(
    id="STU-1",
    user_id="USR-STU-1",
    full_name="Arjun Shah",
    father_mobile=None,
    guardian_mobile=None,
    mother_mobile=None,
    status=StudentStatus.ACTIVE,
    vertical=Vertical.BOYS_HOSTEL,
) -> StudentRecord:
    return StudentRecord(
        id=id,
        user_id=user_id,
        full_name=full_name,
        vertical=vertical,
        father_mobile=father_mobile,
        guardian_mobile=guardian_mobile,
        mother_mobile=mother_mobile,
        status=status,
        joining_date=date(2025, 6, 15),
    )


def make_parent_account(
    id="USR-PARENT-1",
    mobile="9876543210",
    linked_student_ids=(),
) -> UserRecord:
    return UserRecord(
        id=id,
        role=UserRole.PARENT,
        full_name="Ramesh Shah",
        mobile=mobile,
        linked_student_ids=list(linked_student_ids),
    )


def make_room(id="ROOM-101", number="101") -> RoomRecord:
    return RoomRecord(id=id, number=number, block="A", vertical=Vertical.BOYS_HOSTEL)


def make_allocation(
    id="ALLOC-1",
    room_id="ROOM-101",
    student_id=None,
    application_id=None,
    status=AllocationStatus.ACTIVE,
) -> AllocationRecord:
    return AllocationRecord(
        id=id,
        room_id=room_id,
        student_id=student_id,
        application_id=application_id,
        status=status,
    )


async def make_repo(*records: tuple[Collection, object]) -> InMemoryRepository:
    """Create an InMemoryRepository preloaded with ``(collection, record)`` pairs."""
    repo = InMemoryRepository()
    for collection, record in records:
        await repo.add(collection, record)
    return repo


def make_notifier(side_effect=None) -> AsyncMock:
    """Mock NotificationDispatcher; pass ``side_effect`` to simulate failures."""
    notifier = AsyncMock()
    notifier.dispatch = AsyncMock(side_effect=side_effect)
    return notifier
