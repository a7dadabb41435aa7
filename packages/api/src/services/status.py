# This project was developed with assistance from AI tools.
"""Derived (effective) status for applications and residents.

The stored status is the lifecycle status. What applicants, guardians and
dashboards see is derived from it plus room-allocation state and is never
persisted.

Application truth table::

    raw status           active allocation    effective
    -------------------  -------------------  -------------
    REJECTED             any                  REJECTED
    any other            yes                  CHECKED_IN
    any other            no                   raw status

Resident truth table::

    student status       active allocation    effective
    -------------------  -------------------  -------------
    EXITED               any                  EXITED
    ACTIVE / ON_LEAVE    yes                  CHECKED_IN
    ACTIVE / ON_LEAVE    no                   student status
"""

import logging

from db.enums import AllocationStatus, ApplicationStatus, StudentStatus

from ..repositories.base import Collection, HostelRepository
from ..schemas.records import AllocationRecord, StudentRecord
from ..schemas.status import StatusInfo

logger = logging.getLogger(__name__)

CHECKED_IN = "CHECKED_IN"

STATUS_INFO: dict[str, StatusInfo] = {
    ApplicationStatus.DRAFT.value: StatusInfo(
        label="Draft",
        description="The application has not been submitted yet.",
        next_step="Complete and submit the application form.",
    ),
    ApplicationStatus.SUBMITTED.value: StatusInfo(
        label="Submitted",
        description="Your application has been received.",
        next_step="The superintendent will begin reviewing it shortly.",
    ),
    ApplicationStatus.REVIEW.value: StatusInfo(
        label="Under Review",
        description="The superintendent is reviewing your application and documents.",
        next_step="You may be contacted if anything is missing.",
    ),
    ApplicationStatus.FORWARDED.value: StatusInfo(
        label="Forwarded to Trustees",
        description="The superintendent has forwarded your application to the trustees.",
        next_step="The trustees will record a provisional decision.",
    ),
    ApplicationStatus.PROVISIONALLY_APPROVED.value: StatusInfo(
        label="Provisionally Approved",
        description="The trustees have provisionally approved your application.",
        next_step="Wait for an interview invitation or the final decision.",
    ),
    ApplicationStatus.INTERVIEW_SCHEDULED.value: StatusInfo(
        label="Interview Scheduled",
        description="An interview with the trustees has been scheduled.",
        next_step="Attend the interview at the scheduled date and time.",
    ),
    ApplicationStatus.INTERVIEW_COMPLETED.value: StatusInfo(
        label="Interview Completed",
        description="Your interview has been evaluated.",
        next_step="The trustees will record the final decision.",
    ),
    ApplicationStatus.APPROVED.value: StatusInfo(
        label="Approved",
        description="Your admission has been approved.",
        next_step="Complete fee payment and wait for room allocation.",
    ),
    ApplicationStatus.REJECTED.value: StatusInfo(
        label="Rejected",
        description="Your application was not approved.",
        next_step="No further action required.",
    ),
    CHECKED_IN: StatusInfo(
        label="Checked In",
        description="A room has been allocated and the student has checked in.",
        next_step="No further action required.",
    ),
}


def effective_status(status: ApplicationStatus, has_active_allocation: bool) -> str:
    """Display status for an application (see module truth table)."""
    if status == ApplicationStatus.REJECTED:
        return status.value
    if has_active_allocation:
        return CHECKED_IN
    return status.value


def resident_status(student: StudentRecord, has_active_allocation: bool) -> str:
    """Display status for a resident (see module truth table)."""
    if student.status == StudentStatus.EXITED:
        return student.status.value
    if has_active_allocation:
        return CHECKED_IN
    return student.status.value


def status_info(effective: str) -> StatusInfo:
    return STATUS_INFO.get(
        effective,
        StatusInfo(
            label=effective.replace("_", " ").title(),
            description="Your application is being processed.",
            next_step="Contact the hostel office for details.",
        ),
    )


async def find_active_allocation(
    repo: HostelRepository,
    *,
    application_id: str | None = None,
    student_id: str | None = None,
) -> AllocationRecord | None:
    """Return the active allocation held by an application or a student."""

    def _matches(allocation: AllocationRecord) -> bool:
        if allocation.status != AllocationStatus.ACTIVE:
            return False
        if student_id is not None and allocation.student_id == student_id:
            return True
        return application_id is not None and allocation.application_id == application_id

    allocations = await repo.scan(Collection.ALLOCATIONS, _matches)
    return allocations[0] if allocations else None


async def room_label(repo: HostelRepository, allocation: AllocationRecord | None) -> str | None:
    """Resolve allocation -> room -> ``Room {number}``."""
    if allocation is None:
        return None
    room = await repo.get(Collection.ROOMS, allocation.room_id)
    if room is None:
        logger.warning("Allocation %s references unknown room %s", allocation.id, allocation.room_id)
        return None
    return f"Room {room.number}"
