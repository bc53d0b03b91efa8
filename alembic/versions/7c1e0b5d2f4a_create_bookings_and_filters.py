"""create_bookings_and_filters

Revision ID: 7c1e0b5d2f4a
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '7c1e0b5d2f4a'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("renter_id", sa.Integer(), nullable=False),
        sa.Column("apartment_id", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("cost", sa.Numeric(10, 2), nullable=False),
        sa.Column("state", sa.String(20), nullable=False, server_default="CONFIRMED"),
        sa.Column("guests", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("start_date < end_date", name="ck_bookings_dates_ordered"),
        sa.CheckConstraint("cost >= 0", name="ck_bookings_cost_non_negative"),
        sa.CheckConstraint("guests BETWEEN 1 AND 10", name="ck_bookings_guests_range"),
    )
    op.create_index("ix_bookings_renter_id", "bookings", ["renter_id"])
    op.create_index("ix_bookings_apartment_id", "bookings", ["apartment_id"])
    op.create_index("ix_bookings_state", "bookings", ["state"])
    op.create_index("ix_bookings_apartment_dates", "bookings", ["apartment_id", "start_date", "end_date"])

    op.create_table(
        "filters",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("activated", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("increment", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("value", sa.Numeric(5, 2), nullable=False),
        sa.Column("date_type", sa.String(30), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("week_days", sa.String(20), nullable=True),
        sa.Column("condition_type", sa.String(20), nullable=False, server_default="NONE"),
        sa.Column("anticipation_hours", sa.Integer(), nullable=True),
        sa.Column("min_days", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_filters_activated", "filters", ["activated"])


def downgrade() -> None:
    op.drop_index("ix_filters_activated", table_name="filters")
    op.drop_table("filters")
    op.drop_index("ix_bookings_apartment_dates", table_name="bookings")
    op.drop_index("ix_bookings_state", table_name="bookings")
    op.drop_index("ix_bookings_apartment_id", table_name="bookings")
    op.drop_index("ix_bookings_renter_id", table_name="bookings")
    op.drop_table("bookings")
