# This project was developed with assistance from AI tools.
"""Tests for demo data seeding."""

import pytest
from db.enums import ApplicationStatus, UserRole

from src.repositories.base import Collection
from src.repositories.memory import InMemoryRepository
from src.schemas.guardian import WardSource
from src.services.guardian import reconcile_guardian
from src.services.seed.fixtures import (
    ALLOCATIONS,
    APPLICATIONS,
    RAMESH_SHAH_MOBILE,
    ROOMS,
    STUDENTS,
    USERS,
    compute_config_hash,
)
from src.services.seed.seeder import seed_demo_data

# ---------------------------------------------------------------------------
# Fixture data tests
# ---------------------------------------------------------------------------


def test_fixture_covers_every_staff_role():
    roles = {u["role"] for u in USERS}
    assert {UserRole.SUPERINTENDENT, UserRole.TRUSTEE, UserRole.ADMIN, UserRole.PARENT} <= roles


def test_fixture_ids_are_unique():
    for defs in (USERS, ROOMS, STUDENTS, ALLOCATIONS, APPLICATIONS):
        ids = [d["id"] for d in defs]
        assert len(ids) == len(set(ids))


def test_config_hash_is_stable():
    assert compute_config_hash() == compute_config_hash()
    assert len(compute_config_hash()) == 64


# ---------------------------------------------------------------------------
# Seeding
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_seed_loads_all_collections():
    repo = InMemoryRepository()

    result = await seed_demo_data(repo)

    assert result["status"] == "seeded"
    assert result["applications"] == len(APPLICATIONS)
    assert result["students"] == len(STUDENTS)
    assert len(await repo.scan(Collection.ROOMS)) == len(ROOMS)
    forwarded = await repo.get(Collection.APPLICATIONS, "app-dev-kothari")
    assert forwarded.status == ApplicationStatus.FORWARDED
    assert forwarded.forwarded_by is not None
    trail = await repo.list_audit("app-dev-kothari")
    assert [e.action.value for e in trail] == ["SUBMITTED", "FORWARDED"]


@pytest.mark.asyncio
async def test_seed_is_idempotent():
    repo = InMemoryRepository()
    await seed_demo_data(repo)

    again = await seed_demo_data(repo)
    forced = await seed_demo_data(repo, force=True)

    assert again["status"] == "already_seeded"
    assert forced["status"] == "seeded"
    assert forced["applications"] == 0
    assert len(await repo.scan(Collection.APPLICATIONS)) == len(APPLICATIONS)


@pytest.mark.asyncio
async def test_seeded_parent_sees_merged_wards():
    repo = InMemoryRepository()
    await seed_demo_data(repo)

    wards = await reconcile_guardian(repo, RAMESH_SHAH_MOBILE)

    by_name = {w.name: w for w in wards}
    assert set(by_name) == {"Arjun Shah", "Kavya Shah", "Meera Shah"}
    assert by_name["Arjun Shah"].source == WardSource.LINKED_ACCOUNT
    assert by_name["Arjun Shah"].room == "Room 101"
    assert by_name["Arjun Shah"].status == "CHECKED_IN"
    assert by_name["Kavya Shah"].source == WardSource.LINKED_ACCOUNT
    assert by_name["Kavya Shah"].status == "ON_LEAVE"
    assert by_name["Meera Shah"].source == WardSource.APPLICATION
    assert by_name["Meera Shah"].status == "PROVISIONALLY_APPROVED"
