"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates all tables for the Holiday Planner application:
locations, participants, holidays, activities, invitations,
participates, messages.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- locations ---
    op.create_table(
        "locations",
        sa.Column("location_id", sa.String(36), primary_key=True),
        sa.Column("street", sa.String(200), nullable=True),
        sa.Column("number", sa.String(20), nullable=True),
        sa.Column("locality", sa.String(100), nullable=False),
        sa.Column("postal_code", sa.String(20), nullable=False),
        sa.Column("country", sa.String(100), nullable=False),
    )

    # --- participants ---
    op.create_table(
        "participants",
        sa.Column("participant_id", sa.String(36), primary_key=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False, server_default=""),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("external_provider", sa.String(50), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- holidays ---
    op.create_table(
        "holidays",
        sa.Column("holiday_id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("picture_path", sa.String(255), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_published", sa.Boolean, nullable=False, server_default="0"),
        sa.Column("creator_id", sa.String(36), sa.ForeignKey("participants.participant_id"), nullable=False),
        sa.Column("location_id", sa.String(36), sa.ForeignKey("locations.location_id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("start_date < end_date", name="ck_holidays_date_order"),
    )

    # --- activities ---
    op.create_table(
        "activities",
        sa.Column("activity_id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("picture_path", sa.String(255), nullable=False),
        sa.Column("price", sa.Float, nullable=False, server_default="0"),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("holiday_id", sa.String(36), sa.ForeignKey("holidays.holiday_id"), nullable=False),
        sa.Column("location_id", sa.String(36), sa.ForeignKey("locations.location_id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("start_date < end_date", name="ck_activities_date_order"),
        sa.CheckConstraint("price >= 0", name="ck_activities_price_positive"),
    )
    op.create_index("ix_activities_holiday_id", "activities", ["holiday_id"])

    # --- invitations ---
    op.create_table(
        "invitations",
        sa.Column("invitation_id", sa.String(36), primary_key=True),
        sa.Column("holiday_id", sa.String(36), sa.ForeignKey("holidays.holiday_id"), nullable=False),
        sa.Column("participant_id", sa.String(36), sa.ForeignKey("participants.participant_id"), nullable=False),
        sa.Column("is_accepted", sa.Boolean, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("holiday_id", "participant_id", name="uq_invitations_holiday_participant"),
    )
    op.create_index("ix_invitations_holiday_id", "invitations", ["holiday_id"])
    op.create_index("ix_invitations_participant_id", "invitations", ["participant_id"])

    # --- participates ---
    op.create_table(
        "participates",
        sa.Column("participate_id", sa.String(36), primary_key=True),
        sa.Column("activity_id", sa.String(36), sa.ForeignKey("activities.activity_id"), nullable=False),
        sa.Column("participant_id", sa.String(36), sa.ForeignKey("participants.participant_id"), nullable=False),
        sa.UniqueConstraint("activity_id", "participant_id", name="uq_participates_activity_participant"),
    )
    op.create_index("ix_participates_activity_id", "participates", ["activity_id"])
    op.create_index("ix_participates_participant_id", "participates", ["participant_id"])

    # --- messages ---
    op.create_table(
        "messages",
        sa.Column("message_id", sa.String(36), primary_key=True),
        sa.Column("send_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("holiday_id", sa.String(36), sa.ForeignKey("holidays.holiday_id"), nullable=False),
        sa.Column("participant_id", sa.String(36), sa.ForeignKey("participants.participant_id"), nullable=False),
    )
    op.create_index("ix_messages_send_at", "messages", ["send_at"])
    op.create_index("ix_messages_holiday_id", "messages", ["holiday_id"])


def downgrade() -> None:
    op.drop_table("messages")
    op.drop_table("participates")
    op.drop_table("invitations")
    op.drop_table("activities")
    op.drop_table("holidays")
    op.drop_table("participants")
    op.drop_table("locations")
