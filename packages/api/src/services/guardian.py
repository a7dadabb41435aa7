# This project was developed with assistance from AI tools.
"""Guardian-to-ward reconciliation.

A parent's wards are scattered across three collections that are maintained
independently: parent accounts that link student ids, in-flight applications
that list the parent's mobile, and resident records that carry guardian
numbers. This module merges them into one de-duplicated list, keyed on the
normalized phone number. It only reads.

Merge precedence is linked accounts, then applications, then residents.
"""

import asyncio
import logging

from db.enums import ApplicationStatus, UserRole

from ..repositories.base import Collection, HostelRepository
from ..schemas.application import ApplicationRecord
from ..schemas.guardian import WardSource, WardSummary
from ..schemas.records import StudentRecord, UserRecord
from .errors import MissingFieldError, NotFoundError, UpstreamUnavailableError
from .identity import normalize_phone, phones_match
from .status import effective_status, find_active_allocation, resident_status, room_label

logger = logging.getLogger(__name__)


def _name_key(name: str | None) -> str:
    return " ".join((name or "").split()).casefold()


async def _room_placement(repo: HostelRepository, **lookup: str) -> tuple[bool, str | None]:
    """Return (has active allocation, room label) for a ward.

    Allocations and rooms are a separate store; when it cannot be read the
    ward is still reported, without a room and with its raw status.
    """
    try:
        allocation = await find_active_allocation(repo, **lookup)
        return allocation is not None, await room_label(repo, allocation)
    except UpstreamUnavailableError as exc:
        logger.warning("Room lookup failed for %s: %s", lookup, exc)
        return False, None


async def _resident_summary(
    repo: HostelRepository,
    student: StudentRecord,
    source: WardSource,
) -> WardSummary:
    allocated, room = await _room_placement(repo, student_id=student.id)
    return WardSummary(
        id=student.id,
        user_id=student.user_id,
        name=student.full_name,
        vertical=student.vertical.label if student.vertical else None,
        room=room,
        status=resident_status(student, allocated),
        source=source,
        joining_date=student.joining_date,
    )


async def _application_summary(repo: HostelRepository, application: ApplicationRecord) -> WardSummary:
    allocated, room = await _room_placement(repo, application_id=application.id)
    return WardSummary(
        id=application.id,
        name=application.applicant_name,
        vertical=application.vertical.label,
        room=room,
        status=effective_status(application.status, allocated),
        source=WardSource.APPLICATION,
        tracking_number=application.tracking_number,
    )


async def _resolve_linked_student(repo: HostelRepository, linked_id: str) -> StudentRecord | None:
    student = await repo.get(Collection.STUDENTS, linked_id)
    if student is not None:
        return student
    # Older parent accounts link the student's user id instead of the resident id
    matches = await repo.scan(Collection.STUDENTS, lambda s: s.user_id == linked_id)
    return matches[0] if matches else None


# ---------------------------------------------------------------------------
# Sources
# ---------------------------------------------------------------------------


async def _linked_account_wards(repo: HostelRepository, key: str) -> list[WardSummary]:
    def _is_parent(user: UserRecord) -> bool:
        return user.role == UserRole.PARENT and phones_match(key, user.mobile)

    parents = await repo.scan(Collection.USERS, _is_parent)
    wards = []
    seen: set[str] = set()
    for parent in parents:
        for linked_id in parent.linked_student_ids:
            student = await _resolve_linked_student(repo, linked_id)
            if student is None:
                logger.warning("Parent %s links unknown student %s", parent.id, linked_id)
                continue
            # Several accounts on one number may link the same ward, by id or user id
            if student.id in seen:
                continue
            seen.add(student.id)
            wards.append(await _resident_summary(repo, student, WardSource.LINKED_ACCOUNT))
    return wards


async def _application_wards(repo: HostelRepository, key: str) -> list[ApplicationRecord]:
    return await repo.scan(
        Collection.APPLICATIONS,
        lambda a: phones_match(key, a.father_mobile, a.mother_mobile, a.applicant_mobile),
    )


async def _resident_wards(repo: HostelRepository, key: str) -> list[StudentRecord]:
    return await repo.scan(
        Collection.STUDENTS,
        lambda s: phones_match(key, s.guardian_mobile, s.father_mobile, s.mother_mobile),
    )


def _collect(name: str, result, failures: list[str]) -> list:
    if isinstance(result, BaseException):
        logger.warning("Guardian reconciliation source %s failed: %s", name, result, exc_info=result)
        failures.append(name)
        return []
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def reconcile_guardian(repo: HostelRepository, contact: str | None) -> list[WardSummary]:
    """Return the merged, de-duplicated wards for a guardian's phone number.

    The three source scans run concurrently. A failing source is logged and
    skipped; UpstreamUnavailableError is raised only when all of them fail.
    """
    key = normalize_phone(contact)
    if not key:
        return []

    results = await asyncio.gather(
        _linked_account_wards(repo, key),
        _application_wards(repo, key),
        _resident_wards(repo, key),
        return_exceptions=True,
    )
    failures: list[str] = []
    linked = _collect("linked_accounts", results[0], failures)
    applications = _collect("applications", results[1], failures)
    residents = _collect("residents", results[2], failures)
    if len(failures) == len(results):
        raise UpstreamUnavailableError("No ward source could be read; try again later.")

    wards: list[WardSummary] = list(linked)
    seen_names = {_name_key(w.name) for w in wards}
    resident_names = {_name_key(s.full_name) for s in residents}

    for application in applications:
        name = _name_key(application.applicant_name)
        if name in seen_names or name in resident_names:
            continue
        # An approved applicant is represented by the resident record
        if application.status == ApplicationStatus.APPROVED:
            continue
        wards.append(await _application_summary(repo, application))
        seen_names.add(name)

    seen_ids = {w.id for w in wards} | {w.user_id for w in wards if w.user_id}
    for student in residents:
        if student.id in seen_ids or (student.user_id and student.user_id in seen_ids):
            continue
        wards.append(await _resident_summary(repo, student, WardSource.RESIDENT))
        seen_ids.add(student.id)
        if student.user_id:
            seen_ids.add(student.user_id)

    logger.info(
        "Reconciled %d ward(s) for guardian contact ending %s (%d source(s) skipped)",
        len(wards),
        key[-4:],
        len(failures),
    )
    return wards


async def get_guardian_wards(repo: HostelRepository, contact: str | None) -> list[WardSummary]:
    """Boundary operation: wards for a contact, or NotFoundError when none exist."""
    if not (contact or "").strip():
        raise MissingFieldError(["contact"])
    wards = await reconcile_guardian(repo, contact)
    if not wards:
        raise NotFoundError("No records found for this contact number.")
    return wards
