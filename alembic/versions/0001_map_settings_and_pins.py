"""map settings and delivery pins

Revision ID: 0001_map_settings_and_pins
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_map_settings_and_pins"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "map_settings",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("shop", sa.String(length=255), nullable=False),
        sa.Column("same_day_mode", sa.String(length=32), nullable=False, server_default="interactive"),
        sa.Column("same_day_image_url", sa.String(length=1024), nullable=True),
        sa.Column("same_day_geo_json", sa.Text(), nullable=True),
        sa.Column("same_day_zoom_level", sa.Integer(), nullable=False, server_default=sa.text("11")),
        sa.Column("scheduled_mode", sa.String(length=32), nullable=False, server_default="interactive"),
        sa.Column("scheduled_image_url", sa.String(length=1024), nullable=True),
        sa.Column("scheduled_geo_json", sa.Text(), nullable=True),
        sa.Column("scheduled_zoom_level", sa.Integer(), nullable=False, server_default=sa.text("4")),
        sa.Column("toggle_text_same_day", sa.String(length=255), nullable=False, server_default="Same Day Delivery"),
        sa.Column("toggle_text_scheduled", sa.String(length=255), nullable=False, server_default="Scheduled Delivery"),
        sa.Column("button_color", sa.String(length=32), nullable=False, server_default="#000000"),
        sa.Column("button_active_color", sa.String(length=32), nullable=False, server_default="#1a73e8"),
        sa.Column("button_inactive_color", sa.String(length=32), nullable=False, server_default="#f1f3f4"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_map_settings_shop", "map_settings", ["shop"], unique=True)

    op.create_table(
        "delivery_pins",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("shop", sa.String(length=255), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column("delivery_mode", sa.String(length=16), nullable=False, server_default="both"),
        sa.Column("color", sa.String(length=32), nullable=False, server_default="#FF0000"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_delivery_pins_shop", "delivery_pins", ["shop"])


def downgrade() -> None:
    op.drop_index("ix_delivery_pins_shop", table_name="delivery_pins")
    op.drop_table("delivery_pins")
    op.drop_index("ix_map_settings_shop", table_name="map_settings")
    op.drop_table("map_settings")
