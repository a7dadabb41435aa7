# This project was developed with assistance from AI tools.
"""
Hostel admissions -- domain models

Admission applications, interviews, the append-only audit trail, and the
resident-side records (users, students, rooms, allocations) that guardian
reconciliation reads.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from .database import Base
from .enums import (
    AllocationStatus,
    ApplicationStatus,
    AuditAction,
    ForwardRecommendation,
    InterviewMode,
    InterviewStatus,
    PaymentStatus,
    StudentStatus,
    UserRole,
    Vertical,
)


class User(Base):
    """Portal account. Parent accounts carry the ids of their linked wards."""

    __tablename__ = "users"

    id = Column(String(64), primary_key=True)
    role = Column(Enum(UserRole, name="user_role", native_enum=False), nullable=False, index=True)
    full_name = Column(String(200), nullable=False)
    mobile = Column(String(32), nullable=True, index=True)
    email = Column(String(255), nullable=True)
    linked_student_ids = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, role='{self.role}')>"


class Application(Base):
    """Hostel admission application."""

    __tablename__ = "applications"

    id = Column(String(64), primary_key=True)
    tracking_number = Column(String(32), unique=True, nullable=False, index=True)
    applicant_name = Column(String(200), nullable=False)
    vertical = Column(Enum(Vertical, name="vertical", native_enum=False), nullable=False)
    status = Column(
        Enum(ApplicationStatus, name="application_status", native_enum=False),
        nullable=False,
        default=ApplicationStatus.DRAFT,
    )
    payment_status = Column(
        Enum(PaymentStatus, name="payment_status", native_enum=False),
        nullable=False,
        default=PaymentStatus.PENDING,
    )
    applicant_mobile = Column(String(32), nullable=True)
    father_mobile = Column(String(32), nullable=True)
    mother_mobile = Column(String(32), nullable=True)
    forwarded_by_id = Column(String(64), nullable=True)
    forwarded_by_name = Column(String(200), nullable=True)
    forwarded_at = Column(DateTime(timezone=True), nullable=True)
    forward_recommendation = Column(
        Enum(ForwardRecommendation, name="forward_recommendation", native_enum=False),
        nullable=True,
    )
    forward_remarks = Column(Text, nullable=True)
    requires_interview = Column(Boolean, nullable=True)
    interview_id = Column(String(64), nullable=True)
    flags = Column(JSON, nullable=False, default=list)
    submitted_at = Column(DateTime(timezone=True), nullable=True)
    decided_at = Column(DateTime(timezone=True), nullable=True)
    archived_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    interviews = relationship("Interview", back_populates="application")

    def __repr__(self):
        return f"<Application(id={self.id}, status='{self.status}')>"


class Interview(Base):
    """Trustee interview attached to a provisionally approved application."""

    __tablename__ = "interviews"

    id = Column(String(64), primary_key=True)
    application_id = Column(
        String(64), ForeignKey("applications.id", ondelete="RESTRICT"), nullable=False, index=True,
    )
    scheduled_date = Column(Date, nullable=True)
    scheduled_time = Column(String(8), nullable=True)
    mode = Column(Enum(InterviewMode, name="interview_mode", native_enum=False), nullable=False)
    meeting_link = Column(Text, nullable=True)
    location = Column(Text, nullable=True)
    status = Column(
        Enum(InterviewStatus, name="interview_status", native_enum=False),
        nullable=False,
        default=InterviewStatus.NOT_SCHEDULED,
    )
    score = Column(Integer, nullable=True)
    evaluation = Column(JSON, nullable=True)
    reschedule_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    application = relationship("Application", back_populates="interviews")

    def __repr__(self):
        return f"<Interview(id={self.id}, status='{self.status}')>"


class AuditEntry(Base):
    """Append-only decision trail. INSERT + SELECT only -- no UPDATE or DELETE."""

    __tablename__ = "audit_entries"

    id = Column(String(64), primary_key=True)
    application_id = Column(String(64), nullable=False, index=True)
    action = Column(Enum(AuditAction, name="audit_action", native_enum=False), nullable=False)
    actor_id = Column(String(64), nullable=False)
    actor_name = Column(String(200), nullable=True)
    actor_role = Column(String(50), nullable=False)
    performed_at = Column(DateTime(timezone=True), nullable=False, index=True)
    remarks = Column(Text, nullable=True)
    from_status = Column(String(50), nullable=True)
    to_status = Column(String(50), nullable=True)
    details = Column(JSON, nullable=True)
    supersedes_id = Column(String(64), nullable=True)

    def __repr__(self):
        return f"<AuditEntry(id={self.id}, action='{self.action}')>"


class Student(Base):
    """Resident record for an admitted student."""

    __tablename__ = "students"

    id = Column(String(64), primary_key=True)
    user_id = Column(String(64), nullable=True, index=True)
    application_id = Column(String(64), nullable=True)
    full_name = Column(String(200), nullable=False)
    vertical = Column(Enum(Vertical, name="vertical", native_enum=False), nullable=True)
    guardian_mobile = Column(String(32), nullable=True)
    father_mobile = Column(String(32), nullable=True)
    mother_mobile = Column(String(32), nullable=True)
    status = Column(
        Enum(StudentStatus, name="student_status", native_enum=False),
        nullable=False,
        default=StudentStatus.ACTIVE,
    )
    joining_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Student(id={self.id}, name='{self.full_name}')>"


class Room(Base):
    """Hostel room."""

    __tablename__ = "rooms"

    id = Column(String(64), primary_key=True)
    number = Column(String(16), nullable=False)
    block = Column(String(16), nullable=True)
    vertical = Column(Enum(Vertical, name="vertical", native_enum=False), nullable=True)

    def __repr__(self):
        return f"<Room(id={self.id}, number='{self.number}')>"


class Allocation(Base):
    """Room allocation held by a student or by an application awaiting check-in."""

    __tablename__ = "allocations"

    id = Column(String(64), primary_key=True)
    room_id = Column(String(64), ForeignKey("rooms.id"), nullable=False)
    student_id = Column(String(64), nullable=True, index=True)
    application_id = Column(String(64), nullable=True, index=True)
    status = Column(
        Enum(AllocationStatus, name="allocation_status", native_enum=False),
        nullable=False,
        default=AllocationStatus.ACTIVE,
    )
    allocated_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<Allocation(id={self.id}, room_id={self.room_id}, status='{self.status}')>"
