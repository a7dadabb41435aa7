# This project was developed with assistance from AI tools.
"""Tests for interview scheduling and evaluation."""

from datetime import date

import pytest
from db.enums import ApplicationStatus, AuditAction, InterviewMode, InterviewStatus

from src.repositories.base import Collection
from src.services import interview as interview_service
from src.services.errors import (
    IncompleteEvaluationError,
    InvalidTransitionError,
    MissingFieldError,
    NotFoundError,
)

from .factories import make_application, make_evaluation, make_interview, make_notifier, make_repo, trustee


async def _provisional_repo(requires_interview=True):
    return await make_repo(
        (
            Collection.APPLICATIONS,
            make_application(
                status=ApplicationStatus.PROVISIONALLY_APPROVED,
                requires_interview=requires_interview,
            ),
        )
    )


async def _scheduled_repo(interview_status=InterviewStatus.SCHEDULED):
    return await make_repo(
        (
            Collection.APPLICATIONS,
            make_application(status=ApplicationStatus.INTERVIEW_SCHEDULED, interview_id="INT-1"),
        ),
        (Collection.INTERVIEWS, make_interview(status=interview_status)),
    )


# ---------------------------------------------------------------------------
# Scheduling
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_schedule_creates_interview_and_advances_application():
    repo = await _provisional_repo()
    notifier = make_notifier()

    outcome = await interview_service.schedule_interview(
        repo, trustee(), "APP-1", date(2026, 7, 1), "10:30", "ONLINE",
        "https://meet.example.org/abc", notifier=notifier,
    )

    interview = outcome.interview
    assert interview.status == InterviewStatus.SCHEDULED
    assert interview.mode == InterviewMode.ONLINE
    assert interview.meeting_link == "https://meet.example.org/abc"
    assert interview.location is None
    assert outcome.application.status == ApplicationStatus.INTERVIEW_SCHEDULED
    assert outcome.application.interview_id == interview.id

    stored = await repo.get(Collection.INTERVIEWS, interview.id)
    assert stored == interview
    assert outcome.audit_entry.action == AuditAction.INTERVIEW_SCHEDULED
    assert notifier.dispatch.await_args.args[0].kind == "interview_scheduled"


@pytest.mark.asyncio
async def test_physical_interview_stores_location():
    repo = await _provisional_repo()
    outcome = await interview_service.schedule_interview(
        repo, trustee(), "APP-1", date(2026, 7, 1), "11:00", InterviewMode.PHYSICAL,
        "Trust office, 2nd floor", notifier=make_notifier(),
    )
    assert outcome.interview.location == "Trust office, 2nd floor"
    assert outcome.interview.meeting_link is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "scheduled_date,scheduled_time,missing",
    [
        (None, "10:30", ("scheduled_date",)),
        (date(2026, 7, 1), "", ("scheduled_time",)),
        (None, None, ("scheduled_date", "scheduled_time")),
    ],
)
async def test_schedule_without_date_or_time_is_missing_field(scheduled_date, scheduled_time, missing):
    repo = await _provisional_repo()

    with pytest.raises(MissingFieldError) as exc_info:
        await interview_service.schedule_interview(
            repo, trustee(), "APP-1", scheduled_date, scheduled_time, "PHYSICAL", "Office"
        )

    assert exc_info.value.fields == missing
    app = await repo.get(Collection.APPLICATIONS, "APP-1")
    assert app.status == ApplicationStatus.PROVISIONALLY_APPROVED
    assert await repo.scan(Collection.INTERVIEWS) == []


@pytest.mark.asyncio
async def test_online_interview_requires_link():
    repo = await _provisional_repo()
    with pytest.raises(MissingFieldError) as exc_info:
        await interview_service.schedule_interview(
            repo, trustee(), "APP-1", date(2026, 7, 1), "10:30", "ONLINE", "  "
        )
    assert exc_info.value.fields == ("meeting_link",)


@pytest.mark.asyncio
async def test_schedule_requires_provisional_approval():
    repo = await make_repo((Collection.APPLICATIONS, make_application(status=ApplicationStatus.FORWARDED)))
    with pytest.raises(InvalidTransitionError) as exc_info:
        await interview_service.schedule_interview(
            repo, trustee(), "APP-1", date(2026, 7, 1), "10:30", "PHYSICAL", "Office"
        )
    assert exc_info.value.current == ApplicationStatus.FORWARDED


@pytest.mark.asyncio
async def test_schedule_twice_is_rejected():
    repo = await _scheduled_repo()
    with pytest.raises(InvalidTransitionError):
        await interview_service.schedule_interview(
            repo, trustee(), "APP-1", date(2026, 7, 2), "10:30", "PHYSICAL", "Office"
        )


# ---------------------------------------------------------------------------
# Reschedule / start / missed / cancel
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "interview_status",
    [InterviewStatus.SCHEDULED, InterviewStatus.MISSED, InterviewStatus.CANCELLED],
)
async def test_reschedule_keeps_same_record(interview_status):
    repo = await _scheduled_repo(interview_status)

    outcome = await interview_service.reschedule_interview(
        repo, trustee(), "APP-1", date(2026, 7, 8), "15:00", notifier=make_notifier()
    )

    interview = outcome.interview
    assert interview.id == "INT-1"
    assert interview.status == InterviewStatus.SCHEDULED
    assert interview.scheduled_date == date(2026, 7, 8)
    assert interview.scheduled_time == "15:00"
    assert interview.reschedule_count == 1
    assert interview.location == "Trust office"
    assert outcome.application.status == ApplicationStatus.INTERVIEW_SCHEDULED
    assert outcome.audit_entry.action == AuditAction.INTERVIEW_RESCHEDULED
    assert outcome.audit_entry.details["previous_date"] == "2026-07-01"


@pytest.mark.asyncio
async def test_reschedule_in_progress_interview_is_rejected():
    repo = await _scheduled_repo(InterviewStatus.IN_PROGRESS)
    with pytest.raises(InvalidTransitionError) as exc_info:
        await interview_service.reschedule_interview(repo, trustee(), "APP-1", date(2026, 7, 8), "15:00")
    assert exc_info.value.current == InterviewStatus.IN_PROGRESS



@pytest.mark.asyncio
async def test_switching_mode_on_reschedule_needs_a_new_place():
    repo = await make_repo(
        (
            Collection.APPLICATIONS,
            make_application(status=ApplicationStatus.INTERVIEW_SCHEDULED, interview_id="INT-1"),
        ),
        (Collection.INTERVIEWS, make_interview(mode=InterviewMode.ONLINE)),
    )

    with pytest.raises(MissingFieldError) as exc_info:
        await interview_service.reschedule_interview(
            repo, trustee(), "APP-1", date(2026, 7, 8), "15:00", mode=InterviewMode.PHYSICAL
        )

    assert exc_info.value.fields == ("location",)
    stored = await repo.get(Collection.INTERVIEWS, "INT-1")
    assert stored.mode == InterviewMode.ONLINE
    assert stored.meeting_link == "https://meet.example.org/x"
    assert stored.reschedule_count == 0


@pytest.mark.asyncio
async def test_start_then_missed_keeps_application_status():
    repo = await _scheduled_repo()
    user = trustee()

    started = await interview_service.start_interview(repo, user, "APP-1")
    assert started.interview.status == InterviewStatus.IN_PROGRESS

    missed = await interview_service.mark_interview_missed(repo, user, "APP-1", "Applicant absent")
    assert missed.interview.status == InterviewStatus.MISSED
    assert missed.application.status == ApplicationStatus.INTERVIEW_SCHEDULED

    actions = [e.action for e in await repo.list_audit("APP-1")]
    assert actions == [AuditAction.INTERVIEW_STARTED, AuditAction.INTERVIEW_MISSED]


@pytest.mark.asyncio
async def test_cancel_requires_remarks():
    repo = await _scheduled_repo()
    with pytest.raises(MissingFieldError):
        await interview_service.cancel_interview(repo, trustee(), "APP-1", " ")
    interview = await repo.get(Collection.INTERVIEWS, "INT-1")
    assert interview.status == InterviewStatus.SCHEDULED


@pytest.mark.asyncio
async def test_cancel_marks_interview_cancelled():
    repo = await _scheduled_repo()
    outcome = await interview_service.cancel_interview(repo, trustee(), "APP-1", "Trustee unavailable")
    assert outcome.interview.status == InterviewStatus.CANCELLED
    assert outcome.audit_entry.action == AuditAction.CANCELLED
    assert outcome.application.status == ApplicationStatus.INTERVIEW_SCHEDULED


@pytest.mark.asyncio
async def test_interview_action_without_interview_is_not_found():
    repo = await make_repo(
        (Collection.APPLICATIONS, make_application(status=ApplicationStatus.INTERVIEW_SCHEDULED))
    )
    with pytest.raises(NotFoundError):
        await interview_service.start_interview(repo, trustee(), "APP-1")


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_complete_interview_stores_evaluation_and_score():
    repo = await _scheduled_repo(InterviewStatus.IN_PROGRESS)

    outcome = await interview_service.complete_interview(repo, trustee(), "APP-1", make_evaluation())

    interview = outcome.interview
    assert interview.status == InterviewStatus.COMPLETED
    assert interview.score == 16
    assert interview.evaluation.communication.score == 5
    assert outcome.application.status == ApplicationStatus.INTERVIEW_COMPLETED
    assert outcome.audit_entry.details["recommendation"] == "APPROVE"
    assert outcome.audit_entry.remarks == "Confident and clear."


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "dropped",
    ["academic_background", "communication", "discipline", "motivation", "recommendation"],
)
async def test_incomplete_evaluation_mutates_nothing(dropped):
    repo = await _scheduled_repo()
    evaluation = make_evaluation()
    del evaluation[dropped]

    with pytest.raises(IncompleteEvaluationError) as exc_info:
        await interview_service.complete_interview(repo, trustee(), "APP-1", evaluation)

    assert dropped in exc_info.value.fields
    interview = await repo.get(Collection.INTERVIEWS, "INT-1")
    app = await repo.get(Collection.APPLICATIONS, "APP-1")
    assert interview.status == InterviewStatus.SCHEDULED
    assert interview.evaluation is None
    assert app.status == ApplicationStatus.INTERVIEW_SCHEDULED
    assert await repo.list_audit("APP-1") == []


def test_every_missing_field_is_reported():
    with pytest.raises(IncompleteEvaluationError) as exc_info:
        interview_service.validate_evaluation({"communication": 3})
    assert exc_info.value.fields == (
        "academic_background",
        "discipline",
        "motivation",
        "overall_score",
        "recommendation",
    )


@pytest.mark.parametrize(
    "overrides,location",
    [
        ({"communication": {"score": 6}}, "communication.score"),
        ({"motivation": 0}, "motivation.score"),
        ({"overall_score": 21}, "overall_score"),
        ({"recommendation": "MAYBE"}, "recommendation"),
    ],
)
def test_out_of_range_values_are_reported_by_location(overrides, location):
    with pytest.raises(IncompleteEvaluationError) as exc_info:
        interview_service.validate_evaluation(make_evaluation(**overrides))
    assert location in exc_info.value.fields


@pytest.mark.asyncio
async def test_missed_interview_cannot_be_completed():
    repo = await make_repo(
        (
            Collection.APPLICATIONS,
            make_application(status=ApplicationStatus.INTERVIEW_SCHEDULED, interview_id="INT-1"),
        ),
        (Collection.INTERVIEWS, make_interview(status=InterviewStatus.MISSED)),
    )
    with pytest.raises(InvalidTransitionError):
        await interview_service.complete_interview(repo, trustee(), "APP-1", make_evaluation())
