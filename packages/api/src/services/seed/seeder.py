# This project was developed with assistance from AI tools.
"""Demo data seeding service.

Loads users, rooms, residents, allocations and one application per lifecycle
stage through the repository, so superintendent, trustee and guardian views
all have data to explore immediately after startup.

Simulated for demonstration purposes -- not real applicant data.
"""

import logging
from datetime import UTC, datetime, timedelta

from db.enums import ApplicationStatus, AuditAction, UserRole

from ...repositories.base import Collection, HostelRepository
from ...schemas.application import ApplicationRecord, ForwardingRecord
from ...schemas.auth import UserContext
from ...schemas.records import AllocationRecord, RoomRecord, StudentRecord, UserRecord
from ..audit import make_entry
from .fixtures import (
    ALLOCATIONS,
    APPLICATIONS,
    ROOMS,
    STUDENTS,
    SUPERINTENDENT_ID,
    USERS,
    compute_config_hash,
)

logger = logging.getLogger(__name__)

_SEED_ACTOR = UserContext(user_id="system", role=UserRole.ADMIN, email="", name="Demo seed")


def _application_record(app_def: dict, year: int) -> ApplicationRecord:
    forwarded = app_def.get("forwarded")
    submitted_at = app_def["submitted_at"]
    record = ApplicationRecord(
        id=app_def["id"],
        tracking_number=app_def["tracking_number"].format(year=year),
        applicant_name=app_def["applicant_name"],
        vertical=app_def["vertical"],
        status=app_def["status"],
        payment_status=app_def["payment_status"],
        applicant_mobile=app_def.get("applicant_mobile"),
        father_mobile=app_def.get("father_mobile"),
        mother_mobile=app_def.get("mother_mobile"),
        requires_interview=app_def.get("requires_interview"),
        submitted_at=submitted_at,
        decided_at=app_def.get("decided_at"),
        archived_at=app_def.get("decided_at"),
        created_at=submitted_at,
        updated_at=app_def.get("decided_at") or submitted_at,
    )
    if forwarded:
        record.forwarded_by = ForwardingRecord(
            superintendent_id=SUPERINTENDENT_ID,
            superintendent_name="Hemant Desai",
            forwarded_at=datetime.now(UTC) - timedelta(days=forwarded["days_ago"]),
            recommendation=forwarded["recommendation"],
            remarks=forwarded["remarks"],
        )
    return record


async def _seed_applications(repo: HostelRepository, app_defs: list[dict], year: int) -> int:
    """Seed applications, each with its submission entry and seed note."""
    for app_def in app_defs:
        record = _application_record(app_def, year)
        submitted = make_entry(
            record.id,
            AuditAction.SUBMITTED,
            _SEED_ACTOR,
            remarks="Application submitted",
            from_status=ApplicationStatus.DRAFT,
            to_status=ApplicationStatus.SUBMITTED,
            details={"source": "demo_seed", "tracking_number": record.tracking_number},
        )
        await repo.create_application(record, submitted)
        if record.forwarded_by is not None:
            await repo.append_audit(
                make_entry(
                    record.id,
                    AuditAction.FORWARDED,
                    _SEED_ACTOR,
                    remarks=record.forwarded_by.remarks,
                    from_status=ApplicationStatus.REVIEW,
                    to_status=ApplicationStatus.FORWARDED,
                    details={
                        "source": "demo_seed",
                        "recommendation": record.forwarded_by.recommendation.value,
                    },
                )
            )
    return len(app_defs)


async def seed_demo_data(repo: HostelRepository, force: bool = False) -> dict:
    """Seed demo data. Returns summary dict.

    Seeding is skipped when the first fixture application already exists,
    unless ``force`` is set, in which case only the missing records are added.
    """
    if await repo.get(Collection.APPLICATIONS, APPLICATIONS[0]["id"]) is not None and not force:
        return {"status": "already_seeded", "config_hash": compute_config_hash()}

    counts = {}
    for collection, defs, record_type in (
        (Collection.USERS, USERS, UserRecord),
        (Collection.ROOMS, ROOMS, RoomRecord),
        (Collection.STUDENTS, STUDENTS, StudentRecord),
        (Collection.ALLOCATIONS, ALLOCATIONS, AllocationRecord),
    ):
        added = 0
        for data in defs:
            if await repo.get(collection, data["id"]) is not None:
                continue
            await repo.add(collection, record_type(**data))
            added += 1
        counts[collection.value] = added

    missing_apps = [
        a for a in APPLICATIONS if await repo.get(Collection.APPLICATIONS, a["id"]) is None
    ]
    counts[Collection.APPLICATIONS.value] = await _seed_applications(
        repo, missing_apps, datetime.now(UTC).year
    )

    logger.info("Demo data seeded: %s", counts)
    return {
        "status": "seeded",
        "seeded_at": datetime.now(UTC).isoformat(),
        "config_hash": compute_config_hash(),
        **counts,
    }
