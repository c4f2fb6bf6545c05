"""initial

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19

"""

from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        "zones",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("color", sa.String(length=20), nullable=True),
        sa.Column("zone_type", sa.String(length=12), nullable=False, server_default="circle"),
        sa.Column("center_lat", sa.Float(), nullable=True),
        sa.Column("center_lng", sa.Float(), nullable=True),
        sa.Column("radius_meters", sa.Float(), nullable=True),
        sa.Column("coordinates", sa.JSON(), nullable=True),
        sa.Column("pricing_type", sa.String(length=12), nullable=False, server_default="percentage"),
        sa.Column("multiplier", sa.Numeric(6, 3), nullable=True),
        sa.Column("fixed_price", sa.Numeric(10, 2), nullable=True),
        sa.Column("priority", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_zones_is_active", "zones", ["is_active"])

    op.create_table(
        "services",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("category", sa.String(length=60), nullable=True),
        sa.Column("duration_minutes", sa.Integer(), nullable=True),
        sa.Column("base_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("reservation_price", sa.Numeric(10, 2), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_services_is_active", "services", ["is_active"])

    op.create_table(
        "service_zone_prices",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("service_id", sa.String(length=36), nullable=False),
        sa.Column("zone_id", sa.String(length=36), nullable=False),
        sa.Column("custom_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("service_id", "zone_id", name="uq_service_zone_price"),
    )
    op.create_index("ix_service_zone_prices_service_id", "service_zone_prices", ["service_id"])
    op.create_index("ix_service_zone_prices_zone_id", "service_zone_prices", ["zone_id"])

    op.create_table(
        "weekly_availability",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("time_slot_1_start", sa.Time(), nullable=True),
        sa.Column("time_slot_1_end", sa.Time(), nullable=True),
        sa.Column("time_slot_2_start", sa.Time(), nullable=True),
        sa.Column("time_slot_2_end", sa.Time(), nullable=True),
        sa.Column("time_slot_3_start", sa.Time(), nullable=True),
        sa.Column("time_slot_3_end", sa.Time(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_weekly_availability_day_of_week", "weekly_availability", ["day_of_week"], unique=True)

    op.create_table(
        "non_working_days",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("reason", sa.String(length=255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_non_working_days_date", "non_working_days", ["date"], unique=True)

    op.create_table(
        "settings",
        sa.Column("key", sa.String(length=80), primary_key=True),
        sa.Column("int_value", sa.Integer(), nullable=True),
        sa.Column("str_value", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "bookings",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("service_id", sa.String(length=36), nullable=False),
        sa.Column("zone_id", sa.String(length=36), nullable=True),
        sa.Column("customer_name", sa.String(length=200), nullable=False, server_default=""),
        sa.Column("customer_email", sa.String(length=320), nullable=False, server_default=""),
        sa.Column("customer_phone", sa.String(length=40), nullable=True),
        sa.Column("address", sa.String(length=500), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("scheduled_date", sa.Date(), nullable=False),
        sa.Column("scheduled_time", sa.Time(), nullable=False),
        sa.Column("total_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("reservation_price", sa.Numeric(10, 2), nullable=True),
        sa.Column("booking_status", sa.String(length=30), nullable=False, server_default="pending"),
        sa.Column("payment_status", sa.String(length=30), nullable=False, server_default="pending"),
        sa.Column("payment_method", sa.String(length=40), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_bookings_service_id", "bookings", ["service_id"])
    op.create_index("ix_bookings_zone_id", "bookings", ["zone_id"])
    op.create_index("ix_bookings_scheduled_date", "bookings", ["scheduled_date"])
    op.create_index("ix_bookings_booking_status", "bookings", ["booking_status"])
    op.create_index("ix_bookings_schedule", "bookings", ["scheduled_date", "scheduled_time"])

    op.create_table(
        "booking_day_locks",
        sa.Column("day", sa.Date(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "booking_history",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("booking_id", sa.String(length=36), nullable=False),
        sa.Column("status_change", sa.String(length=80), nullable=False),
        sa.Column("changed_by_user_id", sa.String(length=36), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("details_json", sa.Text(), nullable=False, server_default="{}"),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_booking_history_booking_id", "booking_history", ["booking_id"])

def downgrade() -> None:
    op.drop_index("ix_booking_history_booking_id", table_name="booking_history")
    op.drop_table("booking_history")
    op.drop_table("booking_day_locks")
    op.drop_index("ix_bookings_schedule", table_name="bookings")
    op.drop_index("ix_bookings_booking_status", table_name="bookings")
    op.drop_index("ix_bookings_scheduled_date", table_name="bookings")
    op.drop_index("ix_bookings_zone_id", table_name="bookings")
    op.drop_index("ix_bookings_service_id", table_name="bookings")
    op.drop_table("bookings")
    op.drop_table("settings")
    op.drop_index("ix_non_working_days_date", table_name="non_working_days")
    op.drop_table("non_working_days")
    op.drop_index("ix_weekly_availability_day_of_week", table_name="weekly_availability")
    op.drop_table("weekly_availability")
    op.drop_index("ix_service_zone_prices_zone_id", table_name="service_zone_prices")
    op.drop_index("ix_service_zone_prices_service_id", table_name="service_zone_prices")
    op.drop_table("service_zone_prices")
    op.drop_index("ix_services_is_active", table_name="services")
    op.drop_table("services")
    op.drop_index("ix_zones_is_active", table_name="zones")
    op.drop_table("zones")
