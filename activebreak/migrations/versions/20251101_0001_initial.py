from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# Alembic identifiers
revision = "20251101_0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("tg_id", sa.BigInteger(), nullable=True),
        sa.Column("username", sa.String(64), nullable=True),
        sa.Column("language_code", sa.String(10), nullable=True),
        sa.Column("blocked", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=False), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("tg_id", name="uq_users_tg_id"),
    )
    op.create_index("ix_users_tg_id", "users", ["tg_id"])

    op.create_table(
        "physical_activities",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("calories_per_minute", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("default_duration", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_table(
        "physical_activity_names",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "activity_type_id",
            sa.Integer(),
            sa.ForeignKey("physical_activities.id", name="fk_physical_activity_names_activity_type_id_physical_activities"),
            nullable=False,
        ),
        sa.Column("language_code", sa.String(10), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.UniqueConstraint("activity_type_id", "language_code", name="uq_physical_activity_names_activity_type_id"),
    )
    op.create_index(
        "ix_physical_activity_names_activity_type_id", "physical_activity_names", ["activity_type_id"]
    )

    op.create_table(
        "reminder_rules",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("activity_type_id", sa.Integer(), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("interval_minutes", sa.Integer(), nullable=False),
        sa.Column("interval_days", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("window_start", sa.Time(), nullable=False),
        sa.Column("window_end", sa.Time(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=False), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=False), nullable=False),
        sa.Column("deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_reminder_rules_user_id", "reminder_rules", ["user_id"])

    op.create_table(
        "activity_records",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("activity_type_id", sa.Integer(), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("calories_burned", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("begin_time", sa.DateTime(timezone=False), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=False), nullable=False),
        sa.Column("deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index(
        "ix_activity_records_lookup", "activity_records", ["user_id", "activity_type_id", "begin_time"]
    )

    op.create_table(
        "reminder_trigger_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("activity_type_id", sa.Integer(), nullable=False),
        sa.Column("triggered_at", sa.DateTime(timezone=False), nullable=False),
    )
    op.create_index(
        "ix_trigger_logs_lookup", "reminder_trigger_logs", ["user_id", "activity_type_id", "triggered_at"]
    )


def downgrade():
    op.drop_table("reminder_trigger_logs")
    op.drop_table("activity_records")
    op.drop_table("reminder_rules")
    op.drop_table("physical_activity_names")
    op.drop_table("physical_activities")
    op.drop_table("users")
