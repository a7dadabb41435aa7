# This project was developed with assistance from AI tools.
"""initial hostel schema

Revision ID: 3f9c1d2a7b64
Revises:
Create Date: 2026-10-19 10:12:41.508316

"""

import sqlalchemy as sa
from alembic import op

revision = "3f9c1d2a7b64"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("role", sa.String(14), nullable=False),
        sa.Column("full_name", sa.String(200), nullable=False),
        sa.Column("mobile", sa.String(32), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("linked_student_ids", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_role", "users", ["role"])
    op.create_index("ix_users_mobile", "users", ["mobile"])

    op.create_table(
        "applications",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("tracking_number", sa.String(32), nullable=False),
        sa.Column("applicant_name", sa.String(200), nullable=False),
        sa.Column("vertical", sa.String(12), nullable=False),
        sa.Column("status", sa.String(22), nullable=False),
        sa.Column("payment_status", sa.String(7), nullable=False),
        sa.Column("applicant_mobile", sa.String(32), nullable=True),
        sa.Column("father_mobile", sa.String(32), nullable=True),
        sa.Column("mother_mobile", sa.String(32), nullable=True),
        sa.Column("forwarded_by_id", sa.String(64), nullable=True),
        sa.Column("forwarded_by_name", sa.String(200), nullable=True),
        sa.Column("forwarded_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("forward_recommendation", sa.String(13), nullable=True),
        sa.Column("forward_remarks", sa.Text(), nullable=True),
        sa.Column("requires_interview", sa.Boolean(), nullable=True),
        sa.Column("interview_id", sa.String(64), nullable=True),
        sa.Column("flags", sa.JSON(), nullable=False),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("decided_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("archived_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_applications_tracking_number", "applications", ["tracking_number"], unique=True
    )

    op.create_table(
        "interviews",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("application_id", sa.String(64), nullable=False),
        sa.Column("scheduled_date", sa.Date(), nullable=True),
        sa.Column("scheduled_time", sa.String(8), nullable=True),
        sa.Column("mode", sa.String(8), nullable=False),
        sa.Column("meeting_link", sa.Text(), nullable=True),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column("status", sa.String(13), nullable=False),
        sa.Column("score", sa.Integer(), nullable=True),
        sa.Column("evaluation", sa.JSON(), nullable=True),
        sa.Column("reschedule_count", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["application_id"], ["applications.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_interviews_application_id", "interviews", ["application_id"])

    # Append-only: the API never issues UPDATE or DELETE against this table.
    op.create_table(
        "audit_entries",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("application_id", sa.String(64), nullable=False),
        sa.Column("action", sa.String(22), nullable=False),
        sa.Column("actor_id", sa.String(64), nullable=False),
        sa.Column("actor_name", sa.String(200), nullable=True),
        sa.Column("actor_role", sa.String(50), nullable=False),
        sa.Column("performed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("remarks", sa.Text(), nullable=True),
        sa.Column("from_status", sa.String(50), nullable=True),
        sa.Column("to_status", sa.String(50), nullable=True),
        sa.Column("details", sa.JSON(), nullable=True),
        sa.Column("supersedes_id", sa.String(64), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_audit_entries_application_id", "audit_entries", ["application_id"])
    op.create_index("ix_audit_entries_performed_at", "audit_entries", ["performed_at"])

    op.create_table(
        "students",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=True),
        sa.Column("application_id", sa.String(64), nullable=True),
        sa.Column("full_name", sa.String(200), nullable=False),
        sa.Column("vertical", sa.String(12), nullable=True),
        sa.Column("guardian_mobile", sa.String(32), nullable=True),
        sa.Column("father_mobile", sa.String(32), nullable=True),
        sa.Column("mother_mobile", sa.String(32), nullable=True),
        sa.Column("status", sa.String(8), nullable=False),
        sa.Column("joining_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_students_user_id", "students", ["user_id"])

    op.create_table(
        "rooms",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("number", sa.String(16), nullable=False),
        sa.Column("block", sa.String(16), nullable=True),
        sa.Column("vertical", sa.String(12), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "allocations",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("room_id", sa.String(64), nullable=False),
        sa.Column("student_id", sa.String(64), nullable=True),
        sa.Column("application_id", sa.String(64), nullable=True),
        sa.Column("status", sa.String(7), nullable=False),
        sa.Column("allocated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["room_id"], ["rooms.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_allocations_student_id", "allocations", ["student_id"])
    op.create_index("ix_allocations_application_id", "allocations", ["application_id"])


def downgrade() -> None:
    op.drop_table("allocations")
    op.drop_table("rooms")
    op.drop_table("students")
    op.drop_table("audit_entries")
    op.drop_table("interviews")
    op.drop_table("applications")
    op.drop_table("users")
