# This project was developed with assistance from AI tools.
__version__ = "0.1.0"

from .database import Base, SessionLocal, engine
from .enums import (
    AllocationStatus,
    ApplicationStatus,
    AuditAction,
    ForwardRecommendation,
    InterviewMode,
    InterviewRecommendation,
    InterviewStatus,
    PaymentStatus,
    StudentStatus,
    UserRole,
    Vertical,
)
from .models import (
    Allocation,
    Application,
    AuditEntry,
    Interview,
    Room,
    Student,
    User,
)

__all__ = [
    "Base",
    "SessionLocal",
    "engine",
    "__version__",
    # Enums
    "AllocationStatus",
    "ApplicationStatus",
    "AuditAction",
    "ForwardRecommendation",
    "InterviewMode",
    "InterviewRecommendation",
    "InterviewStatus",
    "PaymentStatus",
    "StudentStatus",
    "UserRole",
    "Vertical",
    # Models
    "Allocation",
    "Application",
    "AuditEntry",
    "Interview",
    "Room",
    "Student",
    "User",
]
