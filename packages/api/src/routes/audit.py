# This project was developed with assistance from AI tools.
"""Audit trail query and correction endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from ..core.auth import STAFF_ROLES
from ..middleware.auth import CurrentUser, require_roles
from ..repositories import HostelRepository, get_repository
from ..schemas import Pagination
from ..schemas.audit import AuditListResponse, AuditRecord, CorrectionRequest
from ..services import audit as audit_service
from ..services.errors import HostelError
from ._errors import to_http_error

router = APIRouter(dependencies=[Depends(require_roles(*STAFF_ROLES))])

Repo = Annotated[HostelRepository, Depends(get_repository)]


@router.get("/{application_id}/audit", response_model=AuditListResponse)
async def list_audit(
    application_id: str,
    repo: Repo,
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
) -> AuditListResponse:
    """Chronological decision trail for an application."""
    try:
        entries = await audit_service.list_audit(repo, application_id)
    except HostelError as e:
        raise to_http_error(e) from e
    total = len(entries)
    return AuditListResponse(
        application_id=application_id,
        data=entries[offset : offset + limit],
        pagination=Pagination(
            total=total,
            offset=offset,
            limit=limit,
            has_more=(offset + limit < total),
        ),
    )


@router.post(
    "/{application_id}/audit/{entry_id}/corrections",
    response_model=AuditRecord,
    status_code=status.HTTP_201_CREATED,
)
async def record_correction(
    application_id: str,
    entry_id: str,
    body: CorrectionRequest,
    user: CurrentUser,
    repo: Repo,
) -> AuditRecord:
    """Append a correction that supersedes an earlier entry."""
    try:
        return await audit_service.record_correction(
            repo, user, application_id, entry_id, body.remarks
        )
    except HostelError as e:
        raise to_http_error(e) from e
