# This project was developed with assistance from AI tools.
"""Tests for guardian-to-ward reconciliation."""

from unittest.mock import patch

import pytest
from db.enums import AllocationStatus, ApplicationStatus, StudentStatus

from src.repositories.base import Collection
from src.schemas.guardian import WardSource
from src.services import guardian
from src.services.errors import MissingFieldError, NotFoundError, UpstreamUnavailableError
from src.services.status import CHECKED_IN

from .factories import (
    make_allocation,
    make_application,
    make_parent_account,
    make_repo,
    make_room,
    make_student,
)

CONTACT = "+91 98765 43210"


@pytest.mark.asyncio
async def test_application_matched_by_father_mobile():
    repo = await make_repo(
        (
            Collection.APPLICATIONS,
            make_application(status=ApplicationStatus.REVIEW, father_mobile="9876543210"),
        )
    )

    wards = await guardian.reconcile_guardian(repo, CONTACT)

    assert len(wards) == 1
    ward = wards[0]
    assert ward.source == WardSource.APPLICATION
    assert ward.name == "Rohan Mehta"
    assert ward.vertical == "Boys Hostel"
    assert ward.status == "REVIEW"
    assert ward.room is None
    assert ward.tracking_number is not None


@pytest.mark.asyncio
async def test_linked_account_wins_over_same_named_application():
    student = make_student(full_name="Arjun Shah")
    repo = await make_repo(
        (Collection.USERS, make_parent_account(linked_student_ids=[student.id])),
        (Collection.STUDENTS, student),
        (
            Collection.APPLICATIONS,
            make_application(applicant_name="ARJUN  SHAH", father_mobile="98765-43210"),
        ),
    )

    wards = await guardian.reconcile_guardian(repo, CONTACT)

    assert len(wards) == 1
    assert wards[0].source == WardSource.LINKED_ACCOUNT
    assert wards[0].id == student.id


@pytest.mark.asyncio
async def test_linked_user_id_resolves_to_resident():
    student = make_student(id="STU-9", user_id="USR-9")
    repo = await make_repo(
        (Collection.USERS, make_parent_account(linked_student_ids=["USR-9"])),
        (Collection.STUDENTS, student),
    )
    wards = await guardian.reconcile_guardian(repo, CONTACT)
    assert [w.id for w in wards] == ["STU-9"]


@pytest.mark.asyncio
async def test_approved_application_is_represented_by_resident():
    repo = await make_repo(
        (
            Collection.APPLICATIONS,
            make_application(
                applicant_name="Kavya Shah",
                status=ApplicationStatus.APPROVED,
                father_mobile="9876543210",
            ),
        ),
        (
            Collection.STUDENTS,
            make_student(id="STU-K", full_name="Kavya Shah", father_mobile="9876543210"),
        ),
    )

    wards = await guardian.reconcile_guardian(repo, CONTACT)

    assert [(w.id, w.source) for w in wards] == [("STU-K", WardSource.RESIDENT)]


@pytest.mark.asyncio
async def test_approved_application_without_resident_is_suppressed():
    repo = await make_repo(
        (
            Collection.APPLICATIONS,
            make_application(status=ApplicationStatus.APPROVED, mother_mobile="9876543210"),
        )
    )
    assert await guardian.reconcile_guardian(repo, CONTACT) == []


@pytest.mark.asyncio
async def test_allocated_application_is_checked_in_with_room():
    repo = await make_repo(
        (
            Collection.APPLICATIONS,
            make_application(
                status=ApplicationStatus.INTERVIEW_COMPLETED, father_mobile="9876543210"
            ),
        ),
        (Collection.ROOMS, make_room(number="204")),
        (Collection.ALLOCATIONS, make_allocation(application_id="APP-1")),
    )

    wards = await guardian.reconcile_guardian(repo, CONTACT)

    assert wards[0].status == CHECKED_IN
    assert wards[0].room == "Room 204"


@pytest.mark.asyncio
async def test_resident_status_and_room():
    repo = await make_repo(
        (Collection.STUDENTS, make_student(guardian_mobile=CONTACT)),
        (Collection.STUDENTS, make_student(id="STU-2", user_id="USR-2", full_name="Old Boy",
                                           guardian_mobile=CONTACT, status=StudentStatus.EXITED)),
        (Collection.ROOMS, make_room()),
        (Collection.ALLOCATIONS, make_allocation(student_id="STU-1")),
        (Collection.ALLOCATIONS, make_allocation(id="ALLOC-2", student_id="STU-2",
                                                 status=AllocationStatus.VACATED)),
    )

    wards = {w.id: w for w in await guardian.reconcile_guardian(repo, CONTACT)}

    assert wards["STU-1"].status == CHECKED_IN
    assert wards["STU-1"].room == "Room 101"
    assert wards["STU-2"].status == "EXITED"
    assert wards["STU-2"].room is None


@pytest.mark.asyncio
async def test_resident_already_linked_is_not_repeated():
    student = make_student(father_mobile="9876543210")
    repo = await make_repo(
        (Collection.USERS, make_parent_account(linked_student_ids=[student.id])),
        (Collection.STUDENTS, student),
    )
    wards = await guardian.reconcile_guardian(repo, CONTACT)
    assert [w.source for w in wards] == [WardSource.LINKED_ACCOUNT]


@pytest.mark.asyncio
async def test_merge_order_is_linked_then_applications_then_residents():
    linked = make_student(id="STU-L", user_id="USR-L", full_name="Linked Child")
    resident = make_student(id="STU-R", user_id="USR-R", full_name="Resident Child",
                            mother_mobile="9876543210")
    repo = await make_repo(
        (Collection.USERS, make_parent_account(linked_student_ids=["STU-L"])),
        (Collection.STUDENTS, linked),
        (Collection.STUDENTS, resident),
        (
            Collection.APPLICATIONS,
            make_application(applicant_name="Applicant Child", father_mobile="9876543210"),
        ),
    )

    wards = await guardian.reconcile_guardian(repo, CONTACT)

    assert [w.source for w in wards] == [
        WardSource.LINKED_ACCOUNT,
        WardSource.APPLICATION,
        WardSource.RESIDENT,
    ]


@pytest.mark.asyncio
async def test_other_numbers_do_not_match():
    repo = await make_repo(
        (Collection.APPLICATIONS, make_application(father_mobile="9123456780")),
        (Collection.STUDENTS, make_student(guardian_mobile="9000000000")),
    )
    assert await guardian.reconcile_guardian(repo, CONTACT) == []


@pytest.mark.asyncio
async def test_short_contact_matches_nothing():
    repo = await make_repo((Collection.APPLICATIONS, make_application(father_mobile="12345")))
    assert await guardian.reconcile_guardian(repo, "12345") == []


@pytest.mark.asyncio
async def test_failed_source_is_skipped():
    repo = await make_repo(
        (Collection.STUDENTS, make_student(guardian_mobile=CONTACT)),
    )
    with patch.object(
        guardian, "_application_wards", side_effect=UpstreamUnavailableError("applications down")
    ):
        wards = await guardian.reconcile_guardian(repo, CONTACT)
    assert [w.id for w in wards] == ["STU-1"]


@pytest.mark.asyncio
async def test_all_sources_failing_raises():
    repo = await make_repo()
    down = UpstreamUnavailableError("store down")
    with (
        patch.object(guardian, "_linked_account_wards", side_effect=down),
        patch.object(guardian, "_application_wards", side_effect=down),
        patch.object(guardian, "_resident_wards", side_effect=down),
        pytest.raises(UpstreamUnavailableError),
    ):
        await guardian.reconcile_guardian(repo, CONTACT)


@pytest.mark.asyncio
async def test_get_guardian_wards_empty_is_not_found():
    repo = await make_repo()
    with pytest.raises(NotFoundError, match="No records found"):
        await guardian.get_guardian_wards(repo, CONTACT)


@pytest.mark.asyncio
async def test_get_guardian_wards_requires_contact():
    repo = await make_repo()
    with pytest.raises(MissingFieldError):
        await guardian.get_guardian_wards(repo, "  ")


@pytest.mark.asyncio
async def test_unreadable_allocations_still_return_wards():
    student = make_student(id="STU-L", user_id="USR-L", full_name="Linked Child")
    repo = await make_repo(
        (Collection.USERS, make_parent_account(linked_student_ids=["STU-L"])),
        (Collection.STUDENTS, student),
        (
            Collection.APPLICATIONS,
            make_application(status=ApplicationStatus.REVIEW, father_mobile="9876543210"),
        ),
        (Collection.ALLOCATIONS, make_allocation(application_id="APP-1")),
    )
    scan = repo.scan

    async def scan_without_allocations(collection, predicate=None):
        if collection == Collection.ALLOCATIONS:
            raise UpstreamUnavailableError("allocations down")
        return await scan(collection, predicate)

    with patch.object(repo, "scan", side_effect=scan_without_allocations):
        wards = await guardian.reconcile_guardian(repo, CONTACT)

    assert [(w.source, w.status, w.room) for w in wards] == [
        (WardSource.LINKED_ACCOUNT, "ACTIVE", None),
        (WardSource.APPLICATION, "REVIEW", None),
    ]


@pytest.mark.asyncio
async def test_ward_linked_by_two_accounts_is_listed_once():
    student = make_student()
    repo = await make_repo(
        (Collection.USERS, make_parent_account(id="P1", linked_student_ids=["STU-1", "STU-1"])),
        (Collection.USERS, make_parent_account(id="P2", linked_student_ids=["USR-STU-1"])),
        (Collection.STUDENTS, student),
    )

    wards = await guardian.reconcile_guardian(repo, CONTACT)

    assert [(w.id, w.source) for w in wards] == [("STU-1", WardSource.LINKED_ACCOUNT)]
