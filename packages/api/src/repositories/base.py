# This project was developed with assistance from AI tools.
"""Repository interface the lifecycle and guardian services depend on.

Services never touch a concrete store. They read through point lookups and
predicate scans, and mutate one application at a time inside
``transaction(application_id)``, which serializes concurrent writers on the
same application and commits every staged write together (or none of them).
"""

import enum
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol

from db.enums import ApplicationStatus
from pydantic import BaseModel

from ..schemas.application import ApplicationRecord
from ..schemas.audit import AuditRecord
from ..schemas.interview import InterviewRecord
from ..schemas.records import AllocationRecord, RoomRecord, StudentRecord, UserRecord


class Collection(str, enum.Enum):
    USERS = "users"
    APPLICATIONS = "applications"
    INTERVIEWS = "interviews"
    STUDENTS = "students"
    ALLOCATIONS = "allocations"
    ROOMS = "rooms"


RECORD_TYPES: dict[Collection, type[BaseModel]] = {
    Collection.USERS: UserRecord,
    Collection.APPLICATIONS: ApplicationRecord,
    Collection.INTERVIEWS: InterviewRecord,
    Collection.STUDENTS: StudentRecord,
    Collection.ALLOCATIONS: AllocationRecord,
    Collection.ROOMS: RoomRecord,
}

Predicate = Callable[[Any], bool]


class ApplicationTransaction:
    """Writes staged against one locked application.

    The repository loads ``application`` and its current ``interview`` when the
    transaction opens; callers replace them through ``save_*`` and queue audit
    entries through ``append_audit``. Nothing is persisted unless the
    ``transaction()`` block exits without raising.
    """

    def __init__(self, application: ApplicationRecord, interview: InterviewRecord | None):
        self.application = application
        self.interview = interview
        self.audit_entries: list[AuditRecord] = []
        self.application_changed = False
        self.interview_changed = False

    def save_application(self, application: ApplicationRecord) -> None:
        if application.id != self.application.id:
            raise ValueError("Transaction is bound to a different application")
        self.application = application
        self.application_changed = True

    def save_interview(self, interview: InterviewRecord) -> None:
        if interview.application_id != self.application.id:
            raise ValueError("Interview belongs to a different application")
        self.interview = interview
        self.interview_changed = True

    def append_audit(self, entry: AuditRecord) -> None:
        if entry.application_id != self.application.id:
            raise ValueError("Audit entry belongs to a different application")
        self.audit_entries.append(entry)

    def check_invariants(self) -> None:
        """Called by the repository just before it commits the staged writes."""
        if self.interview_changed and (
            self.application.status not in ApplicationStatus.interview_statuses()
        ):
            raise ValueError(
                f"An interview cannot exist while the application is {self.application.status.value}"
            )


class HostelRepository(Protocol):
    """Persistence operations consumed by the services."""

    async def get(self, collection: Collection, record_id: str) -> Any | None: ...

    async def scan(self, collection: Collection, predicate: Predicate | None = None) -> list[Any]: ...

    async def add(self, collection: Collection, record: BaseModel) -> None: ...

    async def create_application(
        self, application: ApplicationRecord, entry: AuditRecord
    ) -> ApplicationRecord: ...

    def transaction(
        self, application_id: str
    ) -> AbstractAsyncContextManager[ApplicationTransaction]: ...

    async def append_audit(self, entry: AuditRecord) -> AuditRecord: ...

    async def list_audit(self, application_id: str) -> list[AuditRecord]: ...
