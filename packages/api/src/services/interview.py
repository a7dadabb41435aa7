# This project was developed with assistance from AI tools.
"""Interview scheduling, rescheduling and evaluation.

An interview hangs one-to-one off a PROVISIONALLY_APPROVED application.
Scheduling moves the application to INTERVIEW_SCHEDULED; completing the
evaluation moves it to INTERVIEW_COMPLETED. Start, missed, cancel and
reschedule only touch the interview record.

Interview record states::

    SCHEDULED   -> IN_PROGRESS | COMPLETED | MISSED | CANCELLED
    IN_PROGRESS -> COMPLETED | MISSED
    MISSED | CANCELLED | SCHEDULED -> SCHEDULED   (reschedule)
"""

import logging
import uuid
from datetime import UTC, date, datetime
from typing import Any

from db.enums import ApplicationStatus, AuditAction, InterviewMode, InterviewStatus
from pydantic import ValidationError

from ..repositories.base import ApplicationTransaction, HostelRepository
from ..schemas.application import TransitionOutcome
from ..schemas.auth import UserContext
from ..schemas.interview import EVALUATION_CRITERIA, InterviewEvaluation, InterviewRecord
from .audit import make_entry, require_remarks
from .errors import IncompleteEvaluationError, InvalidTransitionError, MissingFieldError, NotFoundError
from .lifecycle import advance_status, require_status
from .notifications import NotificationDispatcher, build_event, notify_safely

logger = logging.getLogger(__name__)

_REQUIRED_EVALUATION_FIELDS = (*EVALUATION_CRITERIA, "overall_score", "recommendation")

_RESCHEDULABLE = (InterviewStatus.SCHEDULED, InterviewStatus.MISSED, InterviewStatus.CANCELLED)


def _now() -> datetime:
    return datetime.now(UTC)


def _interview_action_error(interview: InterviewRecord, allowed, action: str) -> InvalidTransitionError:
    return InvalidTransitionError(interview.status, allowed, f"{action} (interview)")


def _require_interview(txn: ApplicationTransaction) -> InterviewRecord:
    if txn.interview is None:
        raise NotFoundError(f"No interview exists for application '{txn.application.id}'")
    return txn.interview


def _validate_schedule_fields(
    scheduled_date: date | None,
    scheduled_time: str | None,
    mode: InterviewMode | str | None,
    location_or_link: str | None,
) -> InterviewMode:
    missing = []
    if scheduled_date is None:
        missing.append("scheduled_date")
    if not (scheduled_time or "").strip():
        missing.append("scheduled_time")
    if mode is None or mode == "":
        missing.append("mode")
    if not (location_or_link or "").strip():
        missing.append("meeting_link" if mode == InterviewMode.ONLINE else "location")
    if missing:
        raise MissingFieldError(missing)
    try:
        return InterviewMode(mode)
    except ValueError as exc:
        raise MissingFieldError(
            ["mode"], f"Mode must be one of: {', '.join(m.value for m in InterviewMode)}."
        ) from exc


def _placement(mode: InterviewMode, location_or_link: str) -> dict[str, str | None]:
    value = location_or_link.strip()
    if mode == InterviewMode.ONLINE:
        return {"meeting_link": value, "location": None}
    return {"meeting_link": None, "location": value}


def validate_evaluation(payload: dict[str, Any] | InterviewEvaluation | None) -> InterviewEvaluation:
    """Return a complete evaluation or raise IncompleteEvaluationError.

    Every missing field is reported together; out-of-range scores are
    reported by their location (e.g. ``communication.score``).
    """
    if isinstance(payload, InterviewEvaluation):
        return payload
    payload = payload or {}
    missing = [f for f in _REQUIRED_EVALUATION_FIELDS if payload.get(f) in (None, "")]
    if missing:
        raise IncompleteEvaluationError(missing)
    try:
        return InterviewEvaluation.model_validate(payload)
    except ValidationError as exc:
        locations = list(
            dict.fromkeys(".".join(str(part) for part in err["loc"]) for err in exc.errors())
        )
        raise IncompleteEvaluationError(locations) from exc


# ---------------------------------------------------------------------------
# Scheduling
# ---------------------------------------------------------------------------


async def schedule_interview(
    repo: HostelRepository,
    user: UserContext,
    application_id: str,
    scheduled_date: date | None,
    scheduled_time: str | None,
    mode: InterviewMode | str | None,
    location_or_link: str | None,
    remarks: str | None = None,
    *,
    notifier: NotificationDispatcher | None = None,
) -> TransitionOutcome:
    """Create a SCHEDULED interview; PROVISIONALLY_APPROVED -> INTERVIEW_SCHEDULED."""
    mode = _validate_schedule_fields(scheduled_date, scheduled_time, mode, location_or_link)

    async with repo.transaction(application_id) as txn:
        app = txn.application
        require_status(app, [ApplicationStatus.PROVISIONALLY_APPROVED], "schedule an interview")
        if txn.interview is not None and txn.interview.status in InterviewStatus.live_statuses():
            raise _interview_action_error(
                txn.interview, [InterviewStatus.CANCELLED], "schedule a new interview"
            )

        now = _now()
        interview = InterviewRecord(
            id=uuid.uuid4().hex,
            application_id=app.id,
            scheduled_date=scheduled_date,
            scheduled_time=scheduled_time.strip(),
            mode=mode,
            status=InterviewStatus.SCHEDULED,
            created_at=now,
            updated_at=now,
            **_placement(mode, location_or_link),
        )
        updated = advance_status(app, ApplicationStatus.INTERVIEW_SCHEDULED, interview_id=interview.id)
        entry = make_entry(
            app.id,
            AuditAction.INTERVIEW_SCHEDULED,
            user,
            remarks=(remarks or "").strip() or None,
            from_status=app.status,
            to_status=updated.status,
            details={
                "interview_id": interview.id,
                "scheduled_date": scheduled_date.isoformat(),
                "scheduled_time": interview.scheduled_time,
                "mode": mode.value,
            },
        )
        txn.save_interview(interview)
        txn.save_application(updated)
        txn.append_audit(entry)

    logger.info(
        "Interview %s scheduled for %s on %s %s (%s)",
        interview.id,
        updated.tracking_number,
        scheduled_date,
        interview.scheduled_time,
        mode.value,
    )
    warnings = []
    warning = await notify_safely(
        notifier,
        build_event(
            "interview_scheduled",
            updated,
            f"Your interview is scheduled on {scheduled_date:%d %b %Y} at {interview.scheduled_time}.",
            mode=mode.value,
            location=interview.location,
            meeting_link=interview.meeting_link,
        ),
    )
    if warning:
        warnings.append(warning)
    return TransitionOutcome(application=updated, interview=interview, audit_entry=entry, warnings=warnings)


async def reschedule_interview(
    repo: HostelRepository,
    user: UserContext,
    application_id: str,
    scheduled_date: date | None,
    scheduled_time: str | None,
    mode: InterviewMode | str | None = None,
    location_or_link: str | None = None,
    remarks: str | None = None,
    *,
    notifier: NotificationDispatcher | None = None,
) -> TransitionOutcome:
    """Move the existing interview to a new date/time; it stays the same record.

    Mode and location/link default to the current ones when omitted. A new
    mode needs a new location or link.
    """
    missing = []
    if scheduled_date is None:
        missing.append("scheduled_date")
    if not (scheduled_time or "").strip():
        missing.append("scheduled_time")
    if missing:
        raise MissingFieldError(missing)

    async with repo.transaction(application_id) as txn:
        app = txn.application
        require_status(app, [ApplicationStatus.INTERVIEW_SCHEDULED], "reschedule the interview")
        current = _require_interview(txn)
        if current.status not in _RESCHEDULABLE:
            raise _interview_action_error(current, _RESCHEDULABLE, "reschedule")

        new_mode = mode or current.mode
        placement = location_or_link
        if not (placement or "").strip() and new_mode == current.mode:
            placement = current.meeting_link or current.location
        new_mode = _validate_schedule_fields(scheduled_date, scheduled_time, new_mode, placement)

        interview = current.model_copy(
            update={
                "scheduled_date": scheduled_date,
                "scheduled_time": scheduled_time.strip(),
                "mode": new_mode,
                "status": InterviewStatus.SCHEDULED,
                "reschedule_count": current.reschedule_count + 1,
                "updated_at": _now(),
                **_placement(new_mode, placement),
            }
        )
        entry = make_entry(
            app.id,
            AuditAction.INTERVIEW_RESCHEDULED,
            user,
            remarks=(remarks or "").strip() or None,
            from_status=app.status,
            to_status=app.status,
            details={
                "interview_id": interview.id,
                "previous_date": current.scheduled_date.isoformat() if current.scheduled_date else None,
                "previous_time": current.scheduled_time,
                "scheduled_date": scheduled_date.isoformat(),
                "scheduled_time": interview.scheduled_time,
            },
        )
        txn.save_interview(interview)
        txn.append_audit(entry)

    logger.info(
        "Interview %s for %s rescheduled to %s %s",
        interview.id,
        app.tracking_number,
        scheduled_date,
        interview.scheduled_time,
    )
    warnings = []
    warning = await notify_safely(
        notifier,
        build_event(
            "interview_rescheduled",
            app,
            f"Your interview has been rescheduled to {scheduled_date:%d %b %Y} at {interview.scheduled_time}.",
        ),
    )
    if warning:
        warnings.append(warning)
    return TransitionOutcome(application=app, interview=interview, audit_entry=entry, warnings=warnings)


# ---------------------------------------------------------------------------
# Interview record actions (application status unchanged)
# ---------------------------------------------------------------------------


async def _mark_interview(
    repo: HostelRepository,
    user: UserContext,
    application_id: str,
    *,
    allowed: tuple[InterviewStatus, ...],
    target: InterviewStatus,
    action: AuditAction,
    verb: str,
    remarks: str | None,
) -> TransitionOutcome:
    async with repo.transaction(application_id) as txn:
        app = txn.application
        require_status(app, [ApplicationStatus.INTERVIEW_SCHEDULED], verb)
        current = _require_interview(txn)
        if current.status not in allowed:
            raise _interview_action_error(current, allowed, verb)

        interview = current.model_copy(update={"status": target, "updated_at": _now()})
        entry = make_entry(
            app.id,
            action,
            user,
            remarks=remarks,
            from_status=app.status,
            to_status=app.status,
            details={"interview_id": interview.id, "interview_status": target.value},
        )
        txn.save_interview(interview)
        txn.append_audit(entry)

    logger.info("Interview %s for %s marked %s", interview.id, app.tracking_number, target.value)
    return TransitionOutcome(application=app, interview=interview, audit_entry=entry)


async def start_interview(
    repo: HostelRepository,
    user: UserContext,
    application_id: str,
    remarks: str | None = None,
) -> TransitionOutcome:
    """SCHEDULED -> IN_PROGRESS (someone joined the interview)."""
    return await _mark_interview(
        repo,
        user,
        application_id,
        allowed=(InterviewStatus.SCHEDULED,),
        target=InterviewStatus.IN_PROGRESS,
        action=AuditAction.INTERVIEW_STARTED,
        verb="start the interview",
        remarks=(remarks or "").strip() or None,
    )


async def mark_interview_missed(
    repo: HostelRepository,
    user: UserContext,
    application_id: str,
    remarks: str | None = None,
) -> TransitionOutcome:
    return await _mark_interview(
        repo,
        user,
        application_id,
        allowed=(InterviewStatus.SCHEDULED, InterviewStatus.IN_PROGRESS),
        target=InterviewStatus.MISSED,
        action=AuditAction.INTERVIEW_MISSED,
        verb="mark the interview missed",
        remarks=(remarks or "").strip() or None,
    )


async def cancel_interview(
    repo: HostelRepository,
    user: UserContext,
    application_id: str,
    remarks: str | None,
) -> TransitionOutcome:
    """Cancel a scheduled interview. Remarks are required."""
    text = require_remarks(remarks)
    return await _mark_interview(
        repo,
        user,
        application_id,
        allowed=(InterviewStatus.SCHEDULED,),
        target=InterviewStatus.CANCELLED,
        action=AuditAction.CANCELLED,
        verb="cancel the interview",
        remarks=text,
    )


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


async def complete_interview(
    repo: HostelRepository,
    user: UserContext,
    application_id: str,
    evaluation: dict[str, Any] | InterviewEvaluation | None,
    remarks: str | None = None,
) -> TransitionOutcome:
    """Store the evaluation; INTERVIEW_SCHEDULED -> INTERVIEW_COMPLETED.

    The evaluation is validated in full before the application is read, so a
    partial form never mutates anything.
    """
    result = validate_evaluation(evaluation)

    async with repo.transaction(application_id) as txn:
        app = txn.application
        require_status(app, [ApplicationStatus.INTERVIEW_SCHEDULED], "complete the interview")
        current = _require_interview(txn)
        allowed = (InterviewStatus.SCHEDULED, InterviewStatus.IN_PROGRESS)
        if current.status not in allowed:
            raise _interview_action_error(current, allowed, "complete")

        interview = current.model_copy(
            update={
                "status": InterviewStatus.COMPLETED,
                "evaluation": result,
                "score": result.overall_score,
                "updated_at": _now(),
            }
        )
        updated = advance_status(app, ApplicationStatus.INTERVIEW_COMPLETED)
        entry = make_entry(
            app.id,
            AuditAction.INTERVIEW_COMPLETED,
            user,
            remarks=(remarks or "").strip() or result.observations,
            from_status=app.status,
            to_status=updated.status,
            details={
                "interview_id": interview.id,
                "overall_score": result.overall_score,
                "recommendation": result.recommendation.value,
            },
        )
        txn.save_interview(interview)
        txn.save_application(updated)
        txn.append_audit(entry)

    logger.info(
        "Interview %s for %s completed: score=%d recommendation=%s",
        interview.id,
        updated.tracking_number,
        result.overall_score,
        result.recommendation.value,
    )
    return TransitionOutcome(application=updated, interview=interview, audit_entry=entry)
