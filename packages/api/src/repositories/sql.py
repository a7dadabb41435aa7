# This project was developed with assistance from AI tools.
"""SQLAlchemy-backed repository.

Each operation opens its own session. ``transaction()`` locks the application
row with ``SELECT ... FOR UPDATE`` so two writers on the same application are
serialized by the database; writers on different applications never contend.
Predicate scans load the collection and filter in process.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from db import (
    Allocation,
    Application,
    AuditEntry,
    Interview,
    Room,
    SessionLocal,
    Student,
    User,
)
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..schemas.application import ApplicationRecord, ForwardingRecord
from ..schemas.audit import Actor, AuditRecord
from ..schemas.interview import InterviewEvaluation, InterviewRecord
from ..schemas.records import UserRecord
from ..services.errors import NotFoundError, UpstreamUnavailableError
from .base import RECORD_TYPES, ApplicationTransaction, Collection, Predicate

logger = logging.getLogger(__name__)

_ORM_TYPES = {
    Collection.USERS: User,
    Collection.APPLICATIONS: Application,
    Collection.INTERVIEWS: Interview,
    Collection.STUDENTS: Student,
    Collection.ALLOCATIONS: Allocation,
    Collection.ROOMS: Room,
}


# ---------------------------------------------------------------------------
# Row <-> record conversion
# ---------------------------------------------------------------------------


def application_to_record(row: Application) -> ApplicationRecord:
    forwarded_by = None
    if row.forwarded_by_id:
        forwarded_by = ForwardingRecord(
            superintendent_id=row.forwarded_by_id,
            superintendent_name=row.forwarded_by_name,
            forwarded_at=row.forwarded_at,
            recommendation=row.forward_recommendation,
            remarks=row.forward_remarks or "",
        )
    return ApplicationRecord(
        id=row.id,
        tracking_number=row.tracking_number,
        applicant_name=row.applicant_name,
        vertical=row.vertical,
        status=row.status,
        payment_status=row.payment_status,
        applicant_mobile=row.applicant_mobile,
        father_mobile=row.father_mobile,
        mother_mobile=row.mother_mobile,
        forwarded_by=forwarded_by,
        requires_interview=row.requires_interview,
        interview_id=row.interview_id,
        flags=set(row.flags or []),
        submitted_at=row.submitted_at,
        decided_at=row.decided_at,
        archived_at=row.archived_at,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def apply_application(row: Application, record: ApplicationRecord) -> None:
    row.tracking_number = record.tracking_number
    row.applicant_name = record.applicant_name
    row.vertical = record.vertical
    row.status = record.status
    row.payment_status = record.payment_status
    row.applicant_mobile = record.applicant_mobile
    row.father_mobile = record.father_mobile
    row.mother_mobile = record.mother_mobile
    fwd = record.forwarded_by
    row.forwarded_by_id = fwd.superintendent_id if fwd else None
    row.forwarded_by_name = fwd.superintendent_name if fwd else None
    row.forwarded_at = fwd.forwarded_at if fwd else None
    row.forward_recommendation = fwd.recommendation if fwd else None
    row.forward_remarks = fwd.remarks if fwd else None
    row.requires_interview = record.requires_interview
    row.interview_id = record.interview_id
    row.flags = sorted(record.flags)
    row.submitted_at = record.submitted_at
    row.decided_at = record.decided_at
    row.archived_at = record.archived_at


def interview_to_record(row: Interview) -> InterviewRecord:
    return InterviewRecord(
        id=row.id,
        application_id=row.application_id,
        scheduled_date=row.scheduled_date,
        scheduled_time=row.scheduled_time,
        mode=row.mode,
        meeting_link=row.meeting_link,
        location=row.location,
        status=row.status,
        score=row.score,
        evaluation=InterviewEvaluation.model_validate(row.evaluation) if row.evaluation else None,
        reschedule_count=row.reschedule_count or 0,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def apply_interview(row: Interview, record: InterviewRecord) -> None:
    row.application_id = record.application_id
    row.scheduled_date = record.scheduled_date
    row.scheduled_time = record.scheduled_time
    row.mode = record.mode
    row.meeting_link = record.meeting_link
    row.location = record.location
    row.status = record.status
    row.score = record.score
    row.evaluation = record.evaluation.model_dump(mode="json") if record.evaluation else None
    row.reschedule_count = record.reschedule_count


def audit_to_record(row: AuditEntry) -> AuditRecord:
    return AuditRecord(
        id=row.id,
        application_id=row.application_id,
        action=row.action,
        performed_by=Actor(id=row.actor_id, name=row.actor_name, role=row.actor_role),
        performed_at=row.performed_at,
        remarks=row.remarks,
        from_status=row.from_status,
        to_status=row.to_status,
        details=row.details or {},
        supersedes_id=row.supersedes_id,
    )


def audit_to_row(entry: AuditRecord) -> AuditEntry:
    return AuditEntry(
        id=entry.id,
        application_id=entry.application_id,
        action=entry.action,
        actor_id=entry.performed_by.id,
        actor_name=entry.performed_by.name,
        actor_role=entry.performed_by.role.value,
        performed_at=entry.performed_at,
        remarks=entry.remarks,
        from_status=entry.from_status,
        to_status=entry.to_status,
        details=entry.details or None,
        supersedes_id=entry.supersedes_id,
    )


def _to_record(collection: Collection, row: Any) -> Any:
    if collection == Collection.APPLICATIONS:
        return application_to_record(row)
    if collection == Collection.INTERVIEWS:
        return interview_to_record(row)
    if collection == Collection.USERS:
        return UserRecord(
            id=row.id,
            role=row.role,
            full_name=row.full_name,
            mobile=row.mobile,
            email=row.email,
            linked_student_ids=list(row.linked_student_ids or []),
        )
    return RECORD_TYPES[collection].model_validate(row, from_attributes=True)


def _to_row(collection: Collection, record: BaseModel) -> Any:
    if collection == Collection.APPLICATIONS:
        row = Application(id=record.id)
        apply_application(row, record)
        return row
    if collection == Collection.INTERVIEWS:
        row = Interview(id=record.id)
        apply_interview(row, record)
        return row
    return _ORM_TYPES[collection](**record.model_dump())


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class SqlAlchemyRepository:
    """``HostelRepository`` over an async SQLAlchemy session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None):
        self._session_factory = session_factory or SessionLocal

    @asynccontextmanager
    async def _session(self, *, write: bool = False) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory() as session:
                if write:
                    async with session.begin():
                        yield session
                else:
                    yield session
        except IntegrityError as exc:
            raise ValueError(f"Conflicting record: {exc.orig}") from exc
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Database operation failed: %s", exc)
            raise UpstreamUnavailableError("Hostel database is unavailable") from exc

    async def get(self, collection: Collection, record_id: str) -> Any | None:
        async with self._session() as session:
            row = await session.get(_ORM_TYPES[collection], record_id)
            return _to_record(collection, row) if row is not None else None

    async def scan(self, collection: Collection, predicate: Predicate | None = None) -> list[Any]:
        async with self._session() as session:
            result = await session.execute(select(_ORM_TYPES[collection]))
            records = [_to_record(collection, row) for row in result.scalars().all()]
        return [r for r in records if predicate is None or predicate(r)]

    async def add(self, collection: Collection, record: BaseModel) -> None:
        async with self._session(write=True) as session:
            session.add(_to_row(collection, record))

    async def create_application(
        self, application: ApplicationRecord, entry: AuditRecord
    ) -> ApplicationRecord:
        async with self._session(write=True) as session:
            session.add(_to_row(Collection.APPLICATIONS, application))
            await session.flush()
            session.add(audit_to_row(entry))
        return application

    @asynccontextmanager
    async def transaction(self, application_id: str) -> AsyncIterator[ApplicationTransaction]:
        async with self._session(write=True) as session:
            stmt = select(Application).where(Application.id == application_id).with_for_update()
            row = (await session.execute(stmt)).scalar_one_or_none()
            if row is None:
                raise NotFoundError(f"Application '{application_id}' not found")

            interview_row = None
            if row.interview_id:
                interview_row = await session.get(Interview, row.interview_id)

            txn = ApplicationTransaction(
                application_to_record(row),
                interview_to_record(interview_row) if interview_row is not None else None,
            )
            yield txn

            txn.check_invariants()
            if txn.interview_changed and txn.interview is not None:
                if interview_row is None or interview_row.id != txn.interview.id:
                    interview_row = Interview(id=txn.interview.id)
                    session.add(interview_row)
                apply_interview(interview_row, txn.interview)
            if txn.application_changed:
                apply_application(row, txn.application)
            for entry in txn.audit_entries:
                session.add(audit_to_row(entry))
            await session.flush()

    async def append_audit(self, entry: AuditRecord) -> AuditRecord:
        async with self._session(write=True) as session:
            session.add(audit_to_row(entry))
        return entry

    async def list_audit(self, application_id: str) -> list[AuditRecord]:
        async with self._session() as session:
            stmt = (
                select(AuditEntry)
                .where(AuditEntry.application_id == application_id)
                .order_by(AuditEntry.performed_at.asc())
            )
            result = await session.execute(stmt)
            return [audit_to_record(row) for row in result.scalars().all()]
