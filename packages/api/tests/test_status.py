# This project was developed with assistance from AI tools.
"""Tests for derived (effective) status."""

import pytest
from db.enums import AllocationStatus, ApplicationStatus, StudentStatus

from src.repositories.base import Collection
from src.services.status import (
    CHECKED_IN,
    STATUS_INFO,
    effective_status,
    find_active_allocation,
    resident_status,
    room_label,
    status_info,
)

from .factories import make_allocation, make_repo, make_room, make_student


@pytest.mark.parametrize("status", list(ApplicationStatus))
def test_without_allocation_effective_is_raw(status):
    assert effective_status(status, has_active_allocation=False) == status.value


@pytest.mark.parametrize("status", [s for s in ApplicationStatus if s != ApplicationStatus.REJECTED])
def test_allocation_means_checked_in(status):
    assert effective_status(status, has_active_allocation=True) == CHECKED_IN


def test_rejected_is_never_checked_in():
    assert effective_status(ApplicationStatus.REJECTED, True) == "REJECTED"


@pytest.mark.parametrize(
    "student_status,has_alloc,expected",
    [
        (StudentStatus.ACTIVE, True, CHECKED_IN),
        (StudentStatus.ON_LEAVE, True, CHECKED_IN),
        (StudentStatus.ACTIVE, False, "ACTIVE"),
        (StudentStatus.ON_LEAVE, False, "ON_LEAVE"),
        (StudentStatus.EXITED, True, "EXITED"),
        (StudentStatus.EXITED, False, "EXITED"),
    ],
)
def test_resident_truth_table(student_status, has_alloc, expected):
    assert resident_status(make_student(status=student_status), has_alloc) == expected


def test_every_status_has_display_info():
    for status in ApplicationStatus:
        assert status.value in STATUS_INFO
    assert status_info(CHECKED_IN).label == "Checked In"


def test_unknown_status_gets_generic_info():
    info = status_info("ON_LEAVE")
    assert info.label == "On Leave"


@pytest.mark.asyncio
async def test_find_active_allocation_ignores_vacated():
    repo = await make_repo(
        (Collection.ALLOCATIONS, make_allocation(id="A1", student_id="STU-1",
                                                 status=AllocationStatus.VACATED)),
        (Collection.ALLOCATIONS, make_allocation(id="A2", application_id="APP-1")),
    )
    assert await find_active_allocation(repo, student_id="STU-1") is None
    found = await find_active_allocation(repo, application_id="APP-1")
    assert found.id == "A2"


@pytest.mark.asyncio
async def test_room_label_resolves_room_number():
    repo = await make_repo((Collection.ROOMS, make_room(number="12B")))
    assert await room_label(repo, make_allocation()) == "Room 12B"
    assert await room_label(repo, None) is None
    assert await room_label(repo, make_allocation(room_id="missing")) is None
