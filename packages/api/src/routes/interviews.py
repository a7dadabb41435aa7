# This project was developed with assistance from AI tools.
"""Interview scheduling and evaluation routes (trustees and admins)."""

from typing import Annotated

from db.enums import UserRole
from fastapi import APIRouter, Depends

from ..middleware.auth import CurrentUser, require_roles
from ..repositories import HostelRepository, get_repository
from ..schemas.application import RemarksRequest, TransitionResponse
from ..schemas.interview import InterviewCompleteRequest, InterviewScheduleRequest
from ..services import interview as interview_service
from ..services.errors import HostelError
from ..services.notifications import NotificationDispatcher, get_notification_dispatcher
from ._errors import to_http_error
from .applications import to_transition_response

router = APIRouter(dependencies=[Depends(require_roles(UserRole.TRUSTEE, UserRole.ADMIN))])

Repo = Annotated[HostelRepository, Depends(get_repository)]
Notifier = Annotated[NotificationDispatcher, Depends(get_notification_dispatcher)]


@router.post("/{application_id}/interview", response_model=TransitionResponse)
async def schedule_interview(
    application_id: str,
    body: InterviewScheduleRequest,
    user: CurrentUser,
    repo: Repo,
    notifier: Notifier,
) -> TransitionResponse:
    """Schedule the interview for a provisionally approved application."""
    try:
        outcome = await interview_service.schedule_interview(
            repo,
            user,
            application_id,
            body.scheduled_date,
            body.scheduled_time,
            body.mode,
            body.location_or_link,
            body.remarks,
            notifier=notifier,
        )
    except HostelError as e:
        raise to_http_error(e) from e
    return to_transition_response(outcome)


@router.put("/{application_id}/interview", response_model=TransitionResponse)
async def reschedule_interview(
    application_id: str,
    body: InterviewScheduleRequest,
    user: CurrentUser,
    repo: Repo,
    notifier: Notifier,
) -> TransitionResponse:
    """Move the existing interview to a new date and time."""
    try:
        outcome = await interview_service.reschedule_interview(
            repo,
            user,
            application_id,
            body.scheduled_date,
            body.scheduled_time,
            body.mode,
            body.location_or_link,
            body.remarks,
            notifier=notifier,
        )
    except HostelError as e:
        raise to_http_error(e) from e
    return to_transition_response(outcome)


@router.post("/{application_id}/interview/start", response_model=TransitionResponse)
async def start_interview(
    application_id: str,
    body: RemarksRequest,
    user: CurrentUser,
    repo: Repo,
) -> TransitionResponse:
    try:
        outcome = await interview_service.start_interview(repo, user, application_id, body.remarks)
    except HostelError as e:
        raise to_http_error(e) from e
    return to_transition_response(outcome)


@router.post("/{application_id}/interview/missed", response_model=TransitionResponse)
async def mark_missed(
    application_id: str,
    body: RemarksRequest,
    user: CurrentUser,
    repo: Repo,
) -> TransitionResponse:
    try:
        outcome = await interview_service.mark_interview_missed(
            repo, user, application_id, body.remarks
        )
    except HostelError as e:
        raise to_http_error(e) from e
    return to_transition_response(outcome)


@router.post("/{application_id}/interview/cancel", response_model=TransitionResponse)
async def cancel_interview(
    application_id: str,
    body: RemarksRequest,
    user: CurrentUser,
    repo: Repo,
) -> TransitionResponse:
    """Cancel the interview; the application stays INTERVIEW_SCHEDULED until rescheduled."""
    try:
        outcome = await interview_service.cancel_interview(repo, user, application_id, body.remarks)
    except HostelError as e:
        raise to_http_error(e) from e
    return to_transition_response(outcome)


@router.post("/{application_id}/interview/complete", response_model=TransitionResponse)
async def complete_interview(
    application_id: str,
    body: InterviewCompleteRequest,
    user: CurrentUser,
    repo: Repo,
) -> TransitionResponse:
    """Submit the full evaluation form; partial forms are rejected with every missing field."""
    try:
        outcome = await interview_service.complete_interview(
            repo, user, application_id, body.evaluation, body.remarks
        )
    except HostelError as e:
        raise to_http_error(e) from e
    return to_transition_response(outcome)
