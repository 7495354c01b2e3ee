"""initial schema: colleges, accounts, events and event participation

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamp(name: str) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)


def _participation_columns(table: str) -> list:
    """event/student/college triple shared by every per-student event table."""
    return [
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id", name=op.f(f"fk_{table}_event_id_events"), ondelete="CASCADE"), nullable=False),
        sa.Column("student_id", sa.Integer(), sa.ForeignKey("students.id", name=op.f(f"fk_{table}_student_id_students"), ondelete="CASCADE"), nullable=False),
        sa.Column("college_id", sa.Integer(), sa.ForeignKey("colleges.id", name=op.f(f"fk_{table}_college_id_colleges"), ondelete="CASCADE"), nullable=False),
    ]


def _participation_indexes(table: str) -> None:
    op.create_index(op.f(f"ix_{table}_event_id"), table, ["event_id"])
    op.create_index(op.f(f"ix_{table}_student_id"), table, ["student_id"])


def upgrade():
    op.create_table(
        "colleges",
        sa.Column("id", sa.Integer(), autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_colleges")),
        sa.UniqueConstraint("name", name=op.f("uq_colleges_name")),
    )

    for table in ("admins", "students"):
        if table == "students":
            extra = [
                sa.Column("student_id", sa.String(50), nullable=False),
                sa.Column("department", sa.String(100), nullable=True),
                sa.Column("year_of_study", sa.Integer(), nullable=True),
            ]
        else:
            extra = [sa.Column("role", sa.String(20), nullable=False, server_default="admin")]
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), autoincrement=True),
            sa.Column("college_id", sa.Integer(), sa.ForeignKey("colleges.id", name=op.f(f"fk_{table}_college_id_colleges"), ondelete="CASCADE"), nullable=False),
            sa.Column("email", sa.String(255), nullable=False),
            sa.Column("password_hash", sa.String(255), nullable=False),
            sa.Column("first_name", sa.String(100), nullable=False),
            sa.Column("last_name", sa.String(100), nullable=False),
            *extra,
            sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
            _timestamp("created_at"),
            sa.PrimaryKeyConstraint("id", name=op.f(f"pk_{table}")),
        )
        op.create_index(op.f(f"ix_{table}_college_id"), table, ["college_id"])
        op.create_index(op.f(f"ix_{table}_email"), table, ["email"], unique=True)

    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), autoincrement=True),
        sa.Column("college_id", sa.Integer(), sa.ForeignKey("colleges.id", name=op.f("fk_events_college_id_colleges"), ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("event_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=True),
        sa.Column("end_time", sa.Time(), nullable=True),
        sa.Column("venue", sa.String(255), nullable=True),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("qr_secret", sa.String(255), nullable=False),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("admins.id", name=op.f("fk_events_created_by_admins")), nullable=False),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_events")),
    )
    op.create_index(op.f("ix_events_college_id"), "events", ["college_id"])

    op.create_table(
        "registrations",
        sa.Column("id", sa.Integer(), autoincrement=True),
        *_participation_columns("registrations"),
        sa.Column("status", sa.String(20), nullable=False, server_default="registered"),
        sa.Column("waitlist_position", sa.Integer(), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_registrations")),
        sa.UniqueConstraint("event_id", "student_id", name="uq_registration_event_student"),
    )
    _participation_indexes("registrations")

    op.create_table(
        "attendance",
        sa.Column("id", sa.Integer(), autoincrement=True),
        *_participation_columns("attendance"),
        sa.Column("origin", sa.String(20), nullable=False, server_default="manual"),
        _timestamp("checked_in_at"),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_attendance")),
        sa.UniqueConstraint("event_id", "student_id", name="uq_attendance_event_student"),
    )
    _participation_indexes("attendance")

    op.create_table(
        "feedback",
        sa.Column("id", sa.Integer(), autoincrement=True),
        *_participation_columns("feedback"),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("comments", sa.Text(), nullable=True),
        sa.Column("suggestions", sa.Text(), nullable=True),
        sa.Column("anonymous", sa.Boolean(), nullable=False, server_default=sa.false()),
        _timestamp("submitted_at"),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_feedback")),
        sa.UniqueConstraint("event_id", "student_id", name="uq_feedback_event_student"),
        sa.CheckConstraint("rating >= 1 AND rating <= 5", name=op.f("ck_feedback_rating_range")),
    )
    _participation_indexes("feedback")

    op.create_table(
        "notes",
        sa.Column("id", sa.Integer(), autoincrement=True),
        *_participation_columns("notes"),
        sa.Column("content", sa.Text(), nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_notes")),
        sa.UniqueConstraint("event_id", "student_id", name="uq_note_event_student"),
    )
    _participation_indexes("notes")

    op.create_table(
        "certificates",
        sa.Column("id", sa.Integer(), autoincrement=True),
        *_participation_columns("certificates"),
        sa.Column("attendance_id", sa.Integer(), sa.ForeignKey("attendance.id", name=op.f("fk_certificates_attendance_id_attendance"), ondelete="CASCADE"), nullable=False),
        sa.Column("certificate_id", sa.String(64), nullable=False),
        _timestamp("issued_at"),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_certificates")),
        sa.UniqueConstraint("event_id", "student_id", name="uq_certificate_event_student"),
    )
    op.create_index(op.f("ix_certificates_event_id"), "certificates", ["event_id"])
    op.create_index(op.f("ix_certificates_certificate_id"), "certificates", ["certificate_id"], unique=True)


def downgrade():
    for table in ("certificates", "notes", "feedback", "attendance", "registrations", "events", "students", "admins"):
        op.drop_table(table)
    op.drop_table("colleges")
