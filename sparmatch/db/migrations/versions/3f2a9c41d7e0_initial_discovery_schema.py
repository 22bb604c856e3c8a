"""initial_discovery_schema

Revision ID: 3f2a9c41d7e0
Revises:
Create Date: 2026-10-18 10:12:40.118204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f2a9c41d7e0"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "gyms",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("city", sa.String(), nullable=False),
        sa.Column("country", sa.String(), nullable=False),
        sa.Column("country_code", sa.String(length=2), nullable=False),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("sports", sa.JSON(), nullable=False),
        sa.Column("is_claimed", sa.Boolean(), nullable=False),
        sa.Column("verified", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
    )
    op.create_index(op.f("ix_gyms_name"), "gyms", ["name"], unique=False)
    op.create_index("ix_gyms_country_city", "gyms", ["country_code", "city"], unique=False)

    op.create_table(
        "sparring_events",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("gym_id", sa.String(), nullable=False),
        sa.Column("event_type", sa.String(length=20), nullable=True),
        sa.Column("intensity", sa.String(length=20), nullable=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("event_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=True),
        sa.Column("weight_classes", sa.JSON(), nullable=False),
        sa.Column("experience_levels", sa.JSON(), nullable=False),
        sa.Column("max_participants", sa.Integer(), nullable=False),
        sa.Column("current_participants", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["gym_id"], ["gyms.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_sparring_events_gym_id"), "sparring_events", ["gym_id"], unique=False
    )
    op.create_index(
        "ix_sparring_events_status_date",
        "sparring_events",
        ["status", "event_date"],
        unique=False,
    )

    op.create_table(
        "event_requests",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("event_id", sa.String(), nullable=False),
        sa.Column("fighter_id", sa.String(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["event_id"], ["sparring_events.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_event_requests_fighter_id"), "event_requests", ["fighter_id"], unique=False
    )

    op.create_table(
        "fighters",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("weight_class", sa.String(length=30), nullable=True),
        sa.Column("experience_level", sa.String(length=20), nullable=True),
        sa.Column("city", sa.String(), nullable=True),
        sa.Column("country", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("fighters")
    op.drop_index(op.f("ix_event_requests_fighter_id"), table_name="event_requests")
    op.drop_table("event_requests")
    op.drop_index("ix_sparring_events_status_date", table_name="sparring_events")
    op.drop_index(op.f("ix_sparring_events_gym_id"), table_name="sparring_events")
    op.drop_table("sparring_events")
    op.drop_index("ix_gyms_country_city", table_name="gyms")
    op.drop_index(op.f("ix_gyms_name"), table_name="gyms")
    op.drop_table("gyms")
