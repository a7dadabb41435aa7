# This project was developed with assistance from AI tools.
"""Admission lifecycle state machine.

Carries an application from submission through superintendent review and
trustee decisions to APPROVED or REJECTED. Every status-changing action:

1. validates its input (remarks, fields) before touching storage,
2. opens ``repo.transaction(application_id)`` -- a serializable
   read-modify-write on that one application,
3. checks the current status against the action's precondition, raising
   InvalidTransitionError naming current and required statuses,
4. stages the new application state plus exactly one audit entry, which
   the repository commits together when the block exits cleanly.

Notifications and account materialization run after the commit and only
ever add warnings to the outcome.
"""

import logging
import uuid
from collections.abc import Iterable
from datetime import UTC, datetime

from db.enums import ApplicationStatus, AuditAction, ForwardRecommendation

from ..repositories.base import Collection, HostelRepository
from ..schemas.application import ApplicationCreate, ApplicationRecord, ForwardingRecord, TransitionOutcome
from ..schemas.auth import UserContext
from .accounts import AccountProvisioner, RepositoryAccountProvisioner
from .audit import make_entry, require_remarks
from .errors import InvalidTransitionError, MissingFieldError, NotFoundError
from .notifications import NotificationDispatcher, build_event, notify_safely

logger = logging.getLogger(__name__)

_VALID_TRANSITIONS = ApplicationStatus.valid_transitions()
_TERMINAL_STATUSES = ApplicationStatus.terminal_statuses()

_FINAL_APPROVE_FROM = (
    ApplicationStatus.PROVISIONALLY_APPROVED,
    ApplicationStatus.INTERVIEW_COMPLETED,
)
_FINAL_REJECT_FROM = (
    ApplicationStatus.FORWARDED,
    ApplicationStatus.PROVISIONALLY_APPROVED,
    ApplicationStatus.INTERVIEW_COMPLETED,
)

_TRACKING_RETRIES = 3


def _now() -> datetime:
    return datetime.now(UTC)


# ---------------------------------------------------------------------------
# Shared transition helpers (also used by the interview service)
# ---------------------------------------------------------------------------


def require_status(
    application: ApplicationRecord,
    allowed: Iterable[ApplicationStatus],
    action: str,
) -> None:
    """Raise InvalidTransitionError unless the application is in ``allowed``."""
    allowed = tuple(allowed)
    if application.status not in allowed:
        raise InvalidTransitionError(application.status, allowed, action)


def advance_status(
    application: ApplicationRecord,
    target: ApplicationStatus,
    **changes,
) -> ApplicationRecord:
    """Return a copy of ``application`` moved to ``target``.

    Enforces the transition table, so no caller can skip a stage or leave a
    terminal status. Terminal statuses stamp ``decided_at``/``archived_at``.
    """
    current = application.status
    allowed = _VALID_TRANSITIONS.get(current, frozenset())
    if target not in allowed:
        sources = [s for s, targets in _VALID_TRANSITIONS.items() if target in targets]
        raise InvalidTransitionError(current, sources, f"move to {target.value}")

    now = _now()
    update = {"status": target, "updated_at": now, **changes}
    if target in _TERMINAL_STATUSES:
        update["decided_at"] = now
        update["archived_at"] = now
    return application.model_copy(update=update)


async def get_application(repo: HostelRepository, application_id: str) -> ApplicationRecord:
    """Return an application or raise NotFoundError."""
    application = await repo.get(Collection.APPLICATIONS, application_id)
    if application is None:
        raise NotFoundError(f"Application '{application_id}' not found")
    return application


async def get_by_tracking_number(repo: HostelRepository, tracking_number: str) -> ApplicationRecord:
    """Look up an application by its human-readable tracking number."""
    wanted = tracking_number.strip().upper()
    matches = await repo.scan(Collection.APPLICATIONS, lambda a: a.tracking_number == wanted)
    if not matches:
        raise NotFoundError(f"No application with tracking number '{tracking_number}'")
    return matches[0]


# ---------------------------------------------------------------------------
# Submission
# ---------------------------------------------------------------------------


async def next_tracking_number(repo: HostelRepository, application: ApplicationCreate, year: int) -> str:
    """Allocate ``{prefix}-{year}-{seq:05d}`` for the application's vertical."""
    prefix = f"{application.vertical.tracking_prefix}-{year}-"
    existing = await repo.scan(
        Collection.APPLICATIONS, lambda a: a.tracking_number.startswith(prefix)
    )
    last_seq = 0
    for app in existing:
        tail = app.tracking_number.rsplit("-", 1)[-1]
        if tail.isdigit():
            last_seq = max(last_seq, int(tail))
    return f"{prefix}{last_seq + 1:05d}"


async def submit_application(
    repo: HostelRepository,
    user: UserContext,
    payload: ApplicationCreate,
) -> TransitionOutcome:
    """Create an application and move it DRAFT -> SUBMITTED immediately."""
    if not payload.applicant_name.strip():
        raise MissingFieldError(["applicant_name"])

    now = _now()
    for attempt in range(1, _TRACKING_RETRIES + 1):
        tracking_number = await next_tracking_number(repo, payload, now.year)
        draft = ApplicationRecord(
            id=uuid.uuid4().hex,
            tracking_number=tracking_number,
            applicant_name=payload.applicant_name.strip(),
            vertical=payload.vertical,
            status=ApplicationStatus.DRAFT,
            payment_status=payload.payment_status,
            applicant_mobile=payload.applicant_mobile or payload.father_mobile,
            father_mobile=payload.father_mobile,
            mother_mobile=payload.mother_mobile,
            flags=set(payload.flags),
            created_at=now,
            updated_at=now,
        )
        submitted = advance_status(draft, ApplicationStatus.SUBMITTED, submitted_at=now)
        entry = make_entry(
            submitted.id,
            AuditAction.SUBMITTED,
            user,
            remarks="Application submitted",
            from_status=ApplicationStatus.DRAFT,
            to_status=ApplicationStatus.SUBMITTED,
            details={"tracking_number": tracking_number},
        )
        try:
            stored = await repo.create_application(submitted, entry)
        except ValueError:
            # Tracking number taken by a concurrent submission
            if attempt == _TRACKING_RETRIES:
                raise
            logger.warning("Tracking number %s collided, retrying", tracking_number)
            continue
        logger.info("Application %s submitted (%s)", stored.tracking_number, stored.id)
        return TransitionOutcome(application=stored, audit_entry=entry)

    raise RuntimeError("unreachable")


# ---------------------------------------------------------------------------
# Superintendent actions
# ---------------------------------------------------------------------------


async def begin_review(
    repo: HostelRepository,
    user: UserContext,
    application_id: str,
    remarks: str | None,
) -> TransitionOutcome:
    """SUBMITTED -> REVIEW."""
    text = require_remarks(remarks)
    async with repo.transaction(application_id) as txn:
        app = txn.application
        require_status(app, [ApplicationStatus.SUBMITTED], "start review")
        updated = advance_status(app, ApplicationStatus.REVIEW)
        entry = make_entry(
            app.id,
            AuditAction.REVIEW_STARTED,
            user,
            remarks=text,
            from_status=app.status,
            to_status=updated.status,
        )
        txn.save_application(updated)
        txn.append_audit(entry)

    logger.info("Application %s under review by %s", updated.tracking_number, user.user_id)
    return TransitionOutcome(application=updated, audit_entry=entry)


async def forward(
    repo: HostelRepository,
    user: UserContext,
    application_id: str,
    recommendation: ForwardRecommendation | str,
    remarks: str | None,
    *,
    notifier: NotificationDispatcher | None = None,
) -> TransitionOutcome:
    """REVIEW -> FORWARDED, recording the superintendent's recommendation."""
    text = require_remarks(remarks)
    try:
        recommendation = ForwardRecommendation(recommendation)
    except ValueError as exc:
        raise MissingFieldError(
            ["recommendation"],
            f"Recommendation must be one of: {', '.join(r.value for r in ForwardRecommendation)}.",
        ) from exc

    async with repo.transaction(application_id) as txn:
        app = txn.application
        require_status(app, [ApplicationStatus.REVIEW], "forward")
        now = _now()
        updated = advance_status(
            app,
            ApplicationStatus.FORWARDED,
            forwarded_by=ForwardingRecord(
                superintendent_id=user.user_id,
                superintendent_name=user.name,
                forwarded_at=now,
                recommendation=recommendation,
                remarks=text,
            ),
        )
        entry = make_entry(
            app.id,
            AuditAction.FORWARDED,
            user,
            remarks=text,
            from_status=app.status,
            to_status=updated.status,
            details={"recommendation": recommendation.value},
        )
        txn.save_application(updated)
        txn.append_audit(entry)

    logger.info(
        "Application %s forwarded by %s (%s)",
        updated.tracking_number,
        user.user_id,
        recommendation.value,
    )
    warnings = []
    warning = await notify_safely(
        notifier,
        build_event("forwarded", updated, "Your application has been forwarded to the trustees."),
    )
    if warning:
        warnings.append(warning)
    return TransitionOutcome(application=updated, audit_entry=entry, warnings=warnings)


# ---------------------------------------------------------------------------
# Trustee decisions
# ---------------------------------------------------------------------------


async def provisional_decide(
    repo: HostelRepository,
    user: UserContext,
    application_id: str,
    approve: bool,
    requires_interview: bool,
    remarks: str | None,
    *,
    notifier: NotificationDispatcher | None = None,
) -> TransitionOutcome:
    """FORWARDED -> PROVISIONALLY_APPROVED or REJECTED.

    An approval records whether an interview is required; the interview
    itself is created later by ``schedule_interview``.
    """
    text = require_remarks(remarks)
    async with repo.transaction(application_id) as txn:
        app = txn.application
        require_status(
            app,
            [ApplicationStatus.FORWARDED],
            "record a provisional decision" if approve else "reject",
        )
        if approve:
            updated = advance_status(
                app,
                ApplicationStatus.PROVISIONALLY_APPROVED,
                requires_interview=requires_interview,
            )
            action = AuditAction.PROVISIONALLY_APPROVED
        else:
            updated = advance_status(app, ApplicationStatus.REJECTED)
            action = AuditAction.REJECTED
        entry = make_entry(
            app.id,
            action,
            user,
            remarks=text,
            from_status=app.status,
            to_status=updated.status,
            details={"stage": "provisional", "requires_interview": requires_interview if approve else None},
        )
        txn.save_application(updated)
        txn.append_audit(entry)

    logger.info(
        "Provisional decision on %s by %s: %s",
        updated.tracking_number,
        user.user_id,
        updated.status.value,
    )
    if approve:
        event = build_event(
            "provisionally_approved",
            updated,
            "Your application has been provisionally approved.",
            requires_interview=requires_interview,
        )
    else:
        event = build_event("rejected", updated, "Your application was not approved.")
    warnings = []
    warning = await notify_safely(notifier, event)
    if warning:
        warnings.append(warning)
    return TransitionOutcome(application=updated, audit_entry=entry, warnings=warnings)


async def final_decide(
    repo: HostelRepository,
    user: UserContext,
    application_id: str,
    approve: bool,
    remarks: str | None,
    *,
    notifier: NotificationDispatcher | None = None,
    provisioner: AccountProvisioner | None = None,
) -> TransitionOutcome:
    """Record the final decision.

    Approval is legal from INTERVIEW_COMPLETED, or from PROVISIONALLY_APPROVED
    when the provisional decision waived the interview. Rejection is also legal
    from FORWARDED. On approval the student account is materialized after the
    commit; a failure there is reported as a warning and APPROVED stands.
    """
    text = require_remarks(remarks)
    async with repo.transaction(application_id) as txn:
        app = txn.application
        if approve:
            require_status(app, _FINAL_APPROVE_FROM, "approve")
            if app.status == ApplicationStatus.PROVISIONALLY_APPROVED and app.requires_interview:
                raise InvalidTransitionError(
                    app.status,
                    [ApplicationStatus.INTERVIEW_COMPLETED],
                    "approve before the required interview is completed",
                )
            updated = advance_status(app, ApplicationStatus.APPROVED)
            action = AuditAction.APPROVED
        else:
            require_status(app, _FINAL_REJECT_FROM, "reject")
            updated = advance_status(app, ApplicationStatus.REJECTED)
            action = AuditAction.REJECTED

        details = {"stage": "final"}
        if txn.interview is not None and txn.interview.score is not None:
            details["interview_score"] = txn.interview.score
            if txn.interview.evaluation is not None:
                details["interview_recommendation"] = txn.interview.evaluation.recommendation.value
        entry = make_entry(
            app.id,
            action,
            user,
            remarks=text,
            from_status=app.status,
            to_status=updated.status,
            details=details,
        )
        txn.save_application(updated)
        txn.append_audit(entry)

    logger.info(
        "Final decision on %s by %s: %s",
        updated.tracking_number,
        user.user_id,
        updated.status.value,
    )

    warnings = []
    student_id = None
    if approve:
        provisioner = provisioner or RepositoryAccountProvisioner(repo)
        try:
            student_id = await provisioner.materialize(updated)
        except Exception:
            logger.warning(
                "Account materialization failed for approved application %s",
                updated.tracking_number,
                exc_info=True,
            )
            warnings.append(
                "Application approved, but the student account could not be created; "
                f"retry via POST /api/applications/{updated.id}/student-account."
            )
        event = build_event("approved", updated, "Congratulations! Your admission has been approved.")
    else:
        event = build_event("rejected", updated, "Your application was not approved.")

    warning = await notify_safely(notifier, event)
    if warning:
        warnings.append(warning)
    return TransitionOutcome(
        application=updated,
        audit_entry=entry,
        student_id=student_id,
        warnings=warnings,
    )


async def create_student_account(
    repo: HostelRepository,
    user: UserContext,
    application_id: str,
    *,
    provisioner: AccountProvisioner | None = None,
) -> TransitionOutcome:
    """Create the student account for an approved application.

    Used to retry after materialization failed during the final decision.
    Safe to repeat: an existing account is returned unchanged.
    """
    app = await get_application(repo, application_id)
    require_status(app, [ApplicationStatus.APPROVED], "create the student account")
    provisioner = provisioner or RepositoryAccountProvisioner(repo)
    student_id = await provisioner.materialize(app)
    logger.info(
        "Student account %s ensured for %s by %s", student_id, app.tracking_number, user.user_id
    )
    return TransitionOutcome(application=app, student_id=student_id)


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------


async def send_message(
    repo: HostelRepository,
    user: UserContext,
    application_id: str,
    message: str | None,
    *,
    notifier: NotificationDispatcher | None = None,
) -> TransitionOutcome:
    """Send a message to the applicant; audited, no status change."""
    text = require_remarks(message, field="message")
    async with repo.transaction(application_id) as txn:
        app = txn.application
        entry = make_entry(
            app.id,
            AuditAction.MESSAGE_SENT,
            user,
            remarks=text,
            from_status=app.status,
            to_status=app.status,
        )
        txn.append_audit(entry)

    warnings = []
    warning = await notify_safely(notifier, build_event("message", app, text))
    if warning:
        warnings.append(warning)
    return TransitionOutcome(application=app, audit_entry=entry, warnings=warnings)
