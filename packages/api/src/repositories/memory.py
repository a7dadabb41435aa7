# This project was developed with assistance from AI tools.
"""In-process repository for local dev, demos and tests.

Records are held as Pydantic models and copied on every read and write so
callers can never mutate stored state outside a transaction. A per-application
``asyncio.Lock`` makes each transaction a serializable read-modify-write.
"""

import asyncio
import logging
from collections import defaultdict
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from pydantic import BaseModel

from ..schemas.application import ApplicationRecord
from ..schemas.audit import AuditRecord
from ..services.errors import NotFoundError
from .base import RECORD_TYPES, ApplicationTransaction, Collection, Predicate

logger = logging.getLogger(__name__)


class InMemoryRepository:
    """Dict-backed implementation of ``HostelRepository``."""

    def __init__(self) -> None:
        self._tables: dict[Collection, dict[str, BaseModel]] = {c: {} for c in Collection}
        self._audit: dict[str, list[AuditRecord]] = defaultdict(list)
        self._locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def get(self, collection: Collection, record_id: str) -> Any | None:
        record = self._tables[collection].get(record_id)
        return record.model_copy(deep=True) if record is not None else None

    async def scan(self, collection: Collection, predicate: Predicate | None = None) -> list[Any]:
        return [
            record.model_copy(deep=True)
            for record in self._tables[collection].values()
            if predicate is None or predicate(record)
        ]

    async def add(self, collection: Collection, record: BaseModel) -> None:
        expected = RECORD_TYPES[collection]
        if not isinstance(record, expected):
            raise TypeError(f"{collection.value} stores {expected.__name__}, got {type(record).__name__}")
        table = self._tables[collection]
        if record.id in table:
            raise ValueError(f"Duplicate id '{record.id}' in {collection.value}")
        if collection == Collection.APPLICATIONS:
            self._check_tracking_number(record)
        table[record.id] = record.model_copy(deep=True)

    async def create_application(
        self, application: ApplicationRecord, entry: AuditRecord
    ) -> ApplicationRecord:
        await self.add(Collection.APPLICATIONS, application)
        self._audit[application.id].append(entry)
        return application.model_copy(deep=True)

    @asynccontextmanager
    async def transaction(self, application_id: str) -> AsyncIterator[ApplicationTransaction]:
        async with self._locks[application_id]:
            stored = self._tables[Collection.APPLICATIONS].get(application_id)
            if stored is None:
                raise NotFoundError(f"Application '{application_id}' not found")
            interview = None
            if stored.interview_id:
                interview = self._tables[Collection.INTERVIEWS].get(stored.interview_id)

            txn = ApplicationTransaction(
                stored.model_copy(deep=True),
                interview.model_copy(deep=True) if interview is not None else None,
            )
            yield txn

            # Reached only when the caller's block did not raise.
            txn.check_invariants()
            if txn.interview_changed and txn.interview is not None:
                self._tables[Collection.INTERVIEWS][txn.interview.id] = txn.interview.model_copy(deep=True)
            if txn.application_changed:
                self._tables[Collection.APPLICATIONS][application_id] = txn.application.model_copy(deep=True)
            self._audit[application_id].extend(txn.audit_entries)

    async def append_audit(self, entry: AuditRecord) -> AuditRecord:
        self._audit[entry.application_id].append(entry)
        return entry

    async def list_audit(self, application_id: str) -> list[AuditRecord]:
        # sorted() is stable, so entries sharing a timestamp keep insertion order
        return sorted(self._audit.get(application_id, []), key=lambda e: e.performed_at)

    def _check_tracking_number(self, application: ApplicationRecord) -> None:
        for existing in self._tables[Collection.APPLICATIONS].values():
            if existing.tracking_number == application.tracking_number:
                raise ValueError(f"Duplicate tracking number '{application.tracking_number}'")
