# This project was developed with assistance from AI tools.
"""Application submission, tracking and lifecycle action routes."""

from typing import Annotated

from db.enums import UserRole
from fastapi import APIRouter, Depends, HTTPException, status

from ..core.auth import STAFF_ROLES
from ..middleware.auth import CurrentUser, require_roles
from ..repositories import HostelRepository, get_repository
from ..schemas.application import (
    ApplicationCreate,
    ApplicationRecord,
    ApplicationResponse,
    FinalDecisionRequest,
    ForwardRequest,
    MessageRequest,
    ProvisionalDecisionRequest,
    RemarksRequest,
    TrackingView,
    TransitionOutcome,
    TransitionResponse,
)
from ..services import lifecycle
from ..services.errors import HostelError
from ..services.notifications import NotificationDispatcher, get_notification_dispatcher
from ..services.status import effective_status, find_active_allocation, status_info
from ._errors import to_http_error

router = APIRouter()

Repo = Annotated[HostelRepository, Depends(get_repository)]
Notifier = Annotated[NotificationDispatcher, Depends(get_notification_dispatcher)]

_SUPERINTENDENT_ROLES = (UserRole.SUPERINTENDENT, UserRole.ADMIN)
_TRUSTEE_ROLES = (UserRole.TRUSTEE, UserRole.ADMIN)


async def build_application_response(repo: HostelRepository, app: ApplicationRecord) -> ApplicationResponse:
    allocation = await find_active_allocation(repo, application_id=app.id)
    effective = effective_status(app.status, allocation is not None)
    return ApplicationResponse(
        data=app,
        effective_status=effective,
        status_label=status_info(effective).label,
    )


def to_transition_response(outcome: TransitionOutcome) -> TransitionResponse:
    return TransitionResponse(
        data=outcome.application,
        interview=outcome.interview,
        audit_entry=outcome.audit_entry,
        student_id=outcome.student_id,
        warnings=outcome.warnings,
    )


@router.post(
    "/",
    response_model=TransitionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_application(
    body: ApplicationCreate,
    user: CurrentUser,
    repo: Repo,
) -> TransitionResponse:
    """Submit a new application. Returns it with its tracking number."""
    try:
        outcome = await lifecycle.submit_application(repo, user, body)
    except HostelError as e:
        raise to_http_error(e) from e
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Could not allocate a tracking number; please retry.",
        ) from e
    return to_transition_response(outcome)


@router.get(
    "/track/{tracking_number}",
    response_model=TrackingView,
)
async def track_application(
    tracking_number: str,
    user: CurrentUser,
    repo: Repo,
) -> TrackingView:
    """Look up an application's effective status by tracking number.

    Tracking numbers are sequential, so this returns only the public view;
    staff read the full record through ``GET /{application_id}``.
    """
    try:
        app = await lifecycle.get_by_tracking_number(repo, tracking_number)
    except HostelError as e:
        raise to_http_error(e) from e
    full = await build_application_response(repo, app)
    return TrackingView(
        tracking_number=app.tracking_number,
        applicant_name=app.applicant_name,
        vertical=app.vertical.label,
        effective_status=full.effective_status,
        status_label=full.status_label,
        next_step=status_info(full.effective_status).next_step,
    )


@router.get(
    "/{application_id}",
    response_model=ApplicationResponse,
    dependencies=[Depends(require_roles(*STAFF_ROLES))],
)
async def get_application(
    application_id: str,
    repo: Repo,
) -> ApplicationResponse:
    """Get a single application with its effective status."""
    try:
        app = await lifecycle.get_application(repo, application_id)
    except HostelError as e:
        raise to_http_error(e) from e
    return await build_application_response(repo, app)


@router.post(
    "/{application_id}/review",
    response_model=TransitionResponse,
    dependencies=[Depends(require_roles(*_SUPERINTENDENT_ROLES))],
)
async def begin_review(
    application_id: str,
    body: RemarksRequest,
    user: CurrentUser,
    repo: Repo,
) -> TransitionResponse:
    """SUBMITTED -> REVIEW."""
    try:
        outcome = await lifecycle.begin_review(repo, user, application_id, body.remarks)
    except HostelError as e:
        raise to_http_error(e) from e
    return to_transition_response(outcome)


@router.post(
    "/{application_id}/forward",
    response_model=TransitionResponse,
    dependencies=[Depends(require_roles(*_SUPERINTENDENT_ROLES))],
)
async def forward_application(
    application_id: str,
    body: ForwardRequest,
    user: CurrentUser,
    repo: Repo,
    notifier: Notifier,
) -> TransitionResponse:
    """REVIEW -> FORWARDED with the superintendent's recommendation."""
    try:
        outcome = await lifecycle.forward(
            repo,
            user,
            application_id,
            body.recommendation,
            body.remarks,
            notifier=notifier,
        )
    except HostelError as e:
        raise to_http_error(e) from e
    return to_transition_response(outcome)


@router.post(
    "/{application_id}/provisional-decision",
    response_model=TransitionResponse,
    dependencies=[Depends(require_roles(*_TRUSTEE_ROLES))],
)
async def provisional_decision(
    application_id: str,
    body: ProvisionalDecisionRequest,
    user: CurrentUser,
    repo: Repo,
    notifier: Notifier,
) -> TransitionResponse:
    """FORWARDED -> PROVISIONALLY_APPROVED or REJECTED."""
    try:
        outcome = await lifecycle.provisional_decide(
            repo,
            user,
            application_id,
            body.approve,
            body.requires_interview,
            body.remarks,
            notifier=notifier,
        )
    except HostelError as e:
        raise to_http_error(e) from e
    return to_transition_response(outcome)


@router.post(
    "/{application_id}/final-decision",
    response_model=TransitionResponse,
    dependencies=[Depends(require_roles(*_TRUSTEE_ROLES))],
)
async def final_decision(
    application_id: str,
    body: FinalDecisionRequest,
    user: CurrentUser,
    repo: Repo,
    notifier: Notifier,
) -> TransitionResponse:
    """Record APPROVED or REJECTED. Account creation failures come back as warnings."""
    try:
        outcome = await lifecycle.final_decide(
            repo,
            user,
            application_id,
            body.approve,
            body.remarks,
            notifier=notifier,
        )
    except HostelError as e:
        raise to_http_error(e) from e
    return to_transition_response(outcome)


@router.post(
    "/{application_id}/student-account",
    response_model=TransitionResponse,
    dependencies=[Depends(require_roles(*_TRUSTEE_ROLES))],
)
async def create_student_account(
    application_id: str,
    user: CurrentUser,
    repo: Repo,
) -> TransitionResponse:
    """Create the student account of an approved application, if still missing."""
    try:
        outcome = await lifecycle.create_student_account(repo, user, application_id)
    except HostelError as e:
        raise to_http_error(e) from e
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="The student account is being created by another request; please retry.",
        ) from e
    return to_transition_response(outcome)


@router.post(
    "/{application_id}/messages",
    response_model=TransitionResponse,
    dependencies=[
        Depends(require_roles(UserRole.SUPERINTENDENT, UserRole.TRUSTEE, UserRole.ADMIN))
    ],
)
async def send_message(
    application_id: str,
    body: MessageRequest,
    user: CurrentUser,
    repo: Repo,
    notifier: Notifier,
) -> TransitionResponse:
    """Message the applicant and guardians; recorded in the audit trail."""
    try:
        outcome = await lifecycle.send_message(
            repo, user, application_id, body.message, notifier=notifier
        )
    except HostelError as e:
        raise to_http_error(e) from e
    return to_transition_response(outcome)
