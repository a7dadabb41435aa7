# This project was developed with assistance from AI tools.
"""Decision/audit recorder.

Append-only trail keyed by application id and ordered by ``performed_at``.
There is no update or delete: a mistaken entry is corrected by appending a
CORRECTION entry that names the entry it supersedes.
"""

import logging
import uuid
from datetime import UTC, datetime
from typing import Any

from db.enums import AuditAction

from ..repositories.base import Collection, HostelRepository
from ..schemas.audit import Actor, AuditRecord
from ..schemas.auth import UserContext
from .errors import MissingFieldError, NotFoundError

logger = logging.getLogger(__name__)


def require_remarks(remarks: str | None, field: str = "remarks") -> str:
    """Return stripped remarks, or raise MissingFieldError when blank."""
    text = (remarks or "").strip()
    if not text:
        raise MissingFieldError([field], f"{field.capitalize()} must not be blank.")
    return text


def actor_from_user(user: UserContext) -> Actor:
    return Actor(id=user.user_id, name=user.name, role=user.role)


def make_entry(
    application_id: str,
    action: AuditAction,
    user: UserContext,
    *,
    remarks: str | None = None,
    from_status: Any = None,
    to_status: Any = None,
    details: dict[str, Any] | None = None,
    supersedes_id: str | None = None,
) -> AuditRecord:
    """Build an attributed, timestamped audit entry (not yet persisted)."""
    return AuditRecord(
        id=uuid.uuid4().hex,
        application_id=application_id,
        action=action,
        performed_by=actor_from_user(user),
        performed_at=datetime.now(UTC),
        remarks=remarks,
        from_status=getattr(from_status, "value", from_status),
        to_status=getattr(to_status, "value", to_status),
        details=details or {},
        supersedes_id=supersedes_id,
    )


async def append_entry(repo: HostelRepository, entry: AuditRecord) -> AuditRecord:
    """Persist one entry outside of a status transition."""
    if entry.action in (AuditAction.APPROVED, AuditAction.REJECTED):
        require_remarks(entry.remarks)
    return await repo.append_audit(entry)


async def list_for(repo: HostelRepository, application_id: str) -> list[AuditRecord]:
    """Chronological entries for an application (empty if none)."""
    return await repo.list_audit(application_id)


async def list_audit(repo: HostelRepository, application_id: str) -> list[AuditRecord]:
    """Chronological trail for an existing application.

    Raises NotFoundError when the application does not exist.
    """
    if await repo.get(Collection.APPLICATIONS, application_id) is None:
        raise NotFoundError(f"Application '{application_id}' not found")
    return await list_for(repo, application_id)


async def record_correction(
    repo: HostelRepository,
    user: UserContext,
    application_id: str,
    supersedes_id: str,
    remarks: str | None,
) -> AuditRecord:
    """Append a CORRECTION entry that supersedes an earlier entry.

    The superseded entry stays in the trail untouched.
    """
    text = require_remarks(remarks)
    trail = await list_audit(repo, application_id)
    target = next((e for e in trail if e.id == supersedes_id), None)
    if target is None:
        raise NotFoundError(
            f"Audit entry '{supersedes_id}' not found for application '{application_id}'"
        )

    entry = make_entry(
        application_id,
        AuditAction.CORRECTION,
        user,
        remarks=text,
        details={"superseded_action": target.action.value},
        supersedes_id=supersedes_id,
    )
    await append_entry(repo, entry)
    logger.info(
        "Audit correction on application %s: %s supersedes %s",
        application_id,
        entry.id,
        supersedes_id,
    )
    return entry
