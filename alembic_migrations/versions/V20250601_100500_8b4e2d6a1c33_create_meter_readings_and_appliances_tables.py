"""create_meter_readings_and_appliances_tables

Revision ID: 8b4e2d6a1c33
Revises: 3f1a9c2b7d10
Create Date: 2025-06-01 10:05:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "8b4e2d6a1c33"
down_revision = "3f1a9c2b7d10"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "meter_readings",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "reading_date",
            sa.Date(),
            nullable=False,
            comment="First day of the calendar month the reading covers",
        ),
        sa.Column(
            "consumption_kwh",
            sa.Numeric(precision=12, scale=4),
            nullable=False,
            comment="Electricity consumption in kilowatt-hours",
        ),
        sa.Column(
            "emission_co2_kg",
            sa.Numeric(precision=12, scale=4),
            nullable=True,
            comment="CO2 emissions in kilograms, NULL when not recorded",
        ),
        sa.Column(
            "source",
            sa.String(length=50),
            nullable=False,
            comment="Provenance tag: manual or csv_upload",
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "reading_date", name="uq_meter_readings_user_month"
        ),
        comment="Monthly electricity meter readings",
    )
    op.create_index(
        op.f("ix_meter_readings_user_id"),
        "meter_readings",
        ["user_id"],
        unique=False,
    )

    op.create_table(
        "appliances",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "type",
            sa.String(length=100),
            nullable=False,
            comment="Appliance kind, e.g. Refrigerator",
        ),
        sa.Column("model_name", sa.String(length=200), nullable=True),
        sa.Column("age_years", sa.Integer(), nullable=True),
        sa.Column("purchase_date", sa.Date(), nullable=True),
        sa.Column("energy_star_rating", sa.String(length=50), nullable=True),
        sa.Column(
            "power_consumption_watts", sa.Numeric(precision=10, scale=2), nullable=True
        ),
        sa.Column("energy_efficiency_rating", sa.String(length=50), nullable=True),
        sa.Column(
            "average_daily_usage_hours", sa.Numeric(precision=5, scale=2), nullable=True
        ),
        sa.Column("capacity", sa.String(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_appliances_user_id"), "appliances", ["user_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_appliances_user_id"), table_name="appliances")
    op.drop_table("appliances")
    op.drop_index(op.f("ix_meter_readings_user_id"), table_name="meter_readings")
    op.drop_table("meter_readings")
