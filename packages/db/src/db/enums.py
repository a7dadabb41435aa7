# This project was developed with assistance from AI tools.
"""
Domain enums for the hostel admission lifecycle.

Shared domain types used by both SQLAlchemy models (db package)
and Pydantic schemas (api package).
"""

import enum


class ApplicationStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    REVIEW = "REVIEW"
    FORWARDED = "FORWARDED"
    PROVISIONALLY_APPROVED = "PROVISIONALLY_APPROVED"
    INTERVIEW_SCHEDULED = "INTERVIEW_SCHEDULED"
    INTERVIEW_COMPLETED = "INTERVIEW_COMPLETED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @classmethod
    def terminal_statuses(cls) -> frozenset["ApplicationStatus"]:
        """Statuses where an application is archived and no longer moves."""
        return frozenset({cls.APPROVED, cls.REJECTED})

    @classmethod
    def interview_statuses(cls) -> frozenset["ApplicationStatus"]:
        """Statuses at which an interview record may exist."""
        return frozenset(
            {
                cls.PROVISIONALLY_APPROVED,
                cls.INTERVIEW_SCHEDULED,
                cls.INTERVIEW_COMPLETED,
                cls.APPROVED,
                cls.REJECTED,
            }
        )

    @classmethod
    def valid_transitions(cls) -> dict["ApplicationStatus", frozenset["ApplicationStatus"]]:
        """Allowed status transitions in the admission lifecycle."""
        return {
            cls.DRAFT: frozenset({cls.SUBMITTED}),
            cls.SUBMITTED: frozenset({cls.REVIEW}),
            cls.REVIEW: frozenset({cls.FORWARDED}),
            cls.FORWARDED: frozenset({cls.PROVISIONALLY_APPROVED, cls.REJECTED}),
            cls.PROVISIONALLY_APPROVED: frozenset(
                {cls.INTERVIEW_SCHEDULED, cls.APPROVED, cls.REJECTED}
            ),
            cls.INTERVIEW_SCHEDULED: frozenset({cls.INTERVIEW_COMPLETED}),
            cls.INTERVIEW_COMPLETED: frozenset({cls.APPROVED, cls.REJECTED}),
            cls.APPROVED: frozenset(),
            cls.REJECTED: frozenset(),
        }


class PaymentStatus(str, enum.Enum):
    PAID = "PAID"
    PENDING = "PENDING"
    FAILED = "FAILED"


# Single source for vertical codes, URL slugs and display labels.
_VERTICAL_LABELS = {
    "BOYS_HOSTEL": ("boys-hostel", "Boys Hostel", "BH"),
    "GIRLS_ASHRAM": ("girls-ashram", "Girls Ashram", "GA"),
    "DHARAMSHALA": ("dharamshala", "Dharamshala", "DH"),
}


class Vertical(str, enum.Enum):
    BOYS_HOSTEL = "BOYS_HOSTEL"
    GIRLS_ASHRAM = "GIRLS_ASHRAM"
    DHARAMSHALA = "DHARAMSHALA"

    @property
    def label(self) -> str:
        return _VERTICAL_LABELS[self.value][1]

    @property
    def tracking_prefix(self) -> str:
        return _VERTICAL_LABELS[self.value][2]

    @classmethod
    def parse(cls, value: "str | Vertical") -> "Vertical":
        """Resolve a code, slug or display label to a Vertical.

        Raises ValueError for unknown values.
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip()
        for code, (slug, label, _prefix) in _VERTICAL_LABELS.items():
            if key in (code, slug) or key.lower() == label.lower():
                return cls(code)
        raise ValueError(f"Unknown vertical '{value}'")


class ForwardRecommendation(str, enum.Enum):
    RECOMMEND = "RECOMMEND"
    NOT_RECOMMEND = "NOT_RECOMMEND"
    NEUTRAL = "NEUTRAL"


class InterviewMode(str, enum.Enum):
    ONLINE = "ONLINE"
    PHYSICAL = "PHYSICAL"


class InterviewStatus(str, enum.Enum):
    NOT_SCHEDULED = "NOT_SCHEDULED"
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    MISSED = "MISSED"
    CANCELLED = "CANCELLED"

    @classmethod
    def live_statuses(cls) -> frozenset["InterviewStatus"]:
        """Statuses of an interview that still blocks a new schedule."""
        return frozenset({cls.SCHEDULED, cls.IN_PROGRESS, cls.COMPLETED, cls.MISSED})


class InterviewRecommendation(str, enum.Enum):
    APPROVE = "APPROVE"
    REJECT = "REJECT"
    DEFERRED = "DEFERRED"


class AuditAction(str, enum.Enum):
    SUBMITTED = "SUBMITTED"
    REVIEW_STARTED = "REVIEW_STARTED"
    FORWARDED = "FORWARDED"
    PROVISIONALLY_APPROVED = "PROVISIONALLY_APPROVED"
    INTERVIEW_SCHEDULED = "INTERVIEW_SCHEDULED"
    INTERVIEW_RESCHEDULED = "INTERVIEW_RESCHEDULED"
    INTERVIEW_STARTED = "INTERVIEW_STARTED"
    INTERVIEW_MISSED = "INTERVIEW_MISSED"
    INTERVIEW_COMPLETED = "INTERVIEW_COMPLETED"
    CANCELLED = "CANCELLED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    MESSAGE_SENT = "MESSAGE_SENT"
    CORRECTION = "CORRECTION"


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    APPLICANT = "applicant"
    STUDENT = "student"
    PARENT = "parent"
    SUPERINTENDENT = "superintendent"
    TRUSTEE = "trustee"
    ACCOUNTS = "accounts"


class StudentStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    ON_LEAVE = "ON_LEAVE"
    EXITED = "EXITED"


class AllocationStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    VACATED = "VACATED"
