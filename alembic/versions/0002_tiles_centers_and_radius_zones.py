"""custom tiles, map centers, toggle layout and pin radius zones

Revision ID: 0002_tiles_centers_and_radius_zones
Revises: 0001_map_settings_and_pins
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0002_tiles_centers_and_radius_zones"
down_revision = "0001_map_settings_and_pins"
branch_labels = None
depends_on = None

SAME_DAY_CENTER = '{"lat":40.7128,"lng":-74.0060}'
SCHEDULED_CENTER = '{"lat":39.8283,"lng":-98.5795}'


def upgrade() -> None:
    op.add_column("map_settings", sa.Column("same_day_center", sa.String(length=255), nullable=False, server_default=SAME_DAY_CENTER))
    op.add_column("map_settings", sa.Column("same_day_tile_provider", sa.String(length=1024), nullable=True))
    op.add_column("map_settings", sa.Column("same_day_tile_api_key", sa.String(length=255), nullable=True))
    op.add_column("map_settings", sa.Column("scheduled_center", sa.String(length=255), nullable=False, server_default=SCHEDULED_CENTER))
    op.add_column("map_settings", sa.Column("scheduled_tile_provider", sa.String(length=1024), nullable=True))
    op.add_column("map_settings", sa.Column("scheduled_tile_api_key", sa.String(length=255), nullable=True))
    op.add_column("map_settings", sa.Column("button_alignment", sa.String(length=16), nullable=False, server_default="center"))
    op.add_column("map_settings", sa.Column("button_shape", sa.String(length=16), nullable=False, server_default="rounded"))
    op.add_column("map_settings", sa.Column("default_mode", sa.String(length=16), nullable=False, server_default="sameDay"))
    op.add_column("map_settings", sa.Column("show_description", sa.Boolean(), nullable=False, server_default=sa.text("1")))
    op.add_column("map_settings", sa.Column("description_same_day", sa.Text(), nullable=True))
    op.add_column("map_settings", sa.Column("description_scheduled", sa.Text(), nullable=True))

    op.add_column("delivery_pins", sa.Column("has_radius", sa.Boolean(), nullable=False, server_default=sa.text("0")))
    op.add_column("delivery_pins", sa.Column("radius_distance", sa.Float(), nullable=True))
    op.add_column("delivery_pins", sa.Column("radius_unit", sa.String(length=8), nullable=False, server_default="km"))
    op.add_column("delivery_pins", sa.Column("fill_color", sa.String(length=32), nullable=False, server_default="#5dade2"))
    op.add_column("delivery_pins", sa.Column("border_color", sa.String(length=32), nullable=False, server_default="#5dade2"))
    op.add_column("delivery_pins", sa.Column("border_thickness", sa.Float(), nullable=False, server_default=sa.text("2")))
    op.add_column("delivery_pins", sa.Column("fill_opacity", sa.Float(), nullable=False, server_default=sa.text("0.25")))
    op.create_index("ix_delivery_pins_shop_created_at", "delivery_pins", ["shop", "created_at"])


def downgrade() -> None:
    op.drop_index("ix_delivery_pins_shop_created_at", table_name="delivery_pins")
    with op.batch_alter_table("delivery_pins") as batch_op:
        for column in ("fill_opacity", "border_thickness", "border_color", "fill_color", "radius_unit", "radius_distance", "has_radius"):
            batch_op.drop_column(column)
    with op.batch_alter_table("map_settings") as batch_op:
        for column in (
            "description_scheduled",
            "description_same_day",
            "show_description",
            "default_mode",
            "button_shape",
            "button_alignment",
            "scheduled_tile_api_key",
            "scheduled_tile_provider",
            "scheduled_center",
            "same_day_tile_api_key",
            "same_day_tile_provider",
            "same_day_center",
        ):
            batch_op.drop_column(column)
