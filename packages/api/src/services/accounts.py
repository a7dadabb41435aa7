# This project was developed with assistance from AI tools.
"""Student account materialization on final approval.

Creates the student's portal user and resident record. Both ids derive from
the application id, so a run that failed between the two writes can simply
be repeated. Issuing login credentials stays with the external auth service,
which picks up new student users on its own schedule.
"""

import logging
from datetime import UTC, datetime
from typing import Protocol

from db.enums import StudentStatus, UserRole

from ..repositories.base import Collection, HostelRepository
from ..schemas.application import ApplicationRecord
from ..schemas.records import StudentRecord, UserRecord

logger = logging.getLogger(__name__)


class AccountProvisioner(Protocol):
    async def materialize(self, application: ApplicationRecord) -> str:
        """Create (or find) the resident record; return its student id."""
        ...


class RepositoryAccountProvisioner:
    """Writes the student user and resident record through the repository."""

    def __init__(self, repo: HostelRepository):
        self._repo = repo

    async def materialize(self, application: ApplicationRecord) -> str:
        existing = await self._repo.scan(
            Collection.STUDENTS, lambda s: s.application_id == application.id
        )
        if existing:
            logger.info(
                "Student record already exists for application %s: %s",
                application.id,
                existing[0].id,
            )
            return existing[0].id

        user = await self._repo.get(Collection.USERS, f"usr-{application.id}")
        if user is None:
            user = UserRecord(
                id=f"usr-{application.id}",
                role=UserRole.STUDENT,
                full_name=application.applicant_name,
                mobile=application.applicant_mobile,
            )
            await self._repo.add(Collection.USERS, user)
        student = StudentRecord(
            id=f"stu-{application.id}",
            user_id=user.id,
            application_id=application.id,
            full_name=application.applicant_name,
            vertical=application.vertical,
            guardian_mobile=application.father_mobile or application.mother_mobile,
            father_mobile=application.father_mobile,
            mother_mobile=application.mother_mobile,
            status=StudentStatus.ACTIVE,
            joining_date=datetime.now(UTC).date(),
        )
        await self._repo.add(Collection.STUDENTS, student)
        logger.info(
            "Materialized student %s (user %s) for application %s",
            student.id,
            user.id,
            application.tracking_number,
        )
        return student.id
