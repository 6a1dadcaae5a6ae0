"""initial_schema

Revision ID: 4f1c2a7e9b30
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "4f1c2a7e9b30"
down_revision = None
branch_labels = None
depends_on = None

ENUM_TYPES = [
    "guest_role_enum",
    "relationship_enum",
    "rsvp_status_enum",
    "communication_type_enum",
    "communication_direction_enum",
    "communication_status_enum",
    "flag_type_enum",
    "message_type_enum",
    "story_media_type_enum",
]


def timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "guest_groups",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("color", sa.String(length=50), nullable=True),
        *timestamps(),
        sa.PrimaryKeyConstraint("uuid"),
    )

    # Email is not unique: duplicates are reported, never rejected
    op.create_table(
        "guests",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("first_name", sa.String(length=255), nullable=True),
        sa.Column("last_name", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column(
            "role",
            sa.Enum("guest", "admin", "couple", name="guest_role_enum"),
            nullable=False,
            server_default="guest",
        ),
        sa.Column(
            "relationship",
            sa.Enum("family", "friend", "colleague", "other", name="relationship_enum"),
            nullable=True,
        ),
        sa.Column("dietary_restrictions", sa.Text(), nullable=True),
        sa.Column("plus_one_name", sa.String(length=255), nullable=True),
        sa.Column("table_preference", sa.String(length=255), nullable=True),
        sa.Column("special_notes", sa.Text(), nullable=True),
        sa.Column("group_id", sa.UUID(), nullable=True),
        sa.Column("invitation_sent", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("rsvp_deadline", sa.DateTime(timezone=True), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(["group_id"], ["guest_groups.uuid"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_guests_email", "guests", ["email"])
    op.create_index("ix_guests_first_name", "guests", ["first_name"])
    op.create_index("ix_guests_last_name", "guests", ["last_name"])
    op.create_index("ix_guests_group_id", "guests", ["group_id"])

    op.create_table(
        "events",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("event_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("venue", sa.String(length=255), nullable=True),
        sa.Column("address", sa.String(length=500), nullable=True),
        sa.Column("rsvp_deadline", sa.DateTime(timezone=True), nullable=True),
        sa.Column("max_capacity", sa.Integer(), nullable=True),
        *timestamps(),
        sa.PrimaryKeyConstraint("uuid"),
    )

    op.create_table(
        "rsvps",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("guest_id", sa.UUID(), nullable=True),
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column(
            "status",
            sa.Enum("attending", "declined", "pending", "maybe", name="rsvp_status_enum"),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("guest_count", sa.Integer(), nullable=True, server_default="1"),
        sa.Column("dietary_restrictions", sa.Text(), nullable=True),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("plus_one_name", sa.String(length=255), nullable=True),
        sa.Column("table_assignment", sa.String(length=100), nullable=True),
        sa.Column("accommodation_needed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("transportation_needed", sa.Boolean(), nullable=False, server_default=sa.false()),
        *timestamps(),
        sa.ForeignKeyConstraint(["guest_id"], ["guests.uuid"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["event_id"], ["events.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
        sa.UniqueConstraint("guest_id", "event_id", name="uq_rsvp_guest_event"),
    )
    op.create_index("ix_rsvps_guest_id", "rsvps", ["guest_id"])
    op.create_index("ix_rsvps_event_id", "rsvps", ["event_id"])
    op.create_index("ix_rsvps_status", "rsvps", ["status"])

    op.create_table(
        "seating_tables",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("table_number", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=True),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("assigned_guests", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("special_requirements", sa.Text(), nullable=True),
        *timestamps(),
        sa.PrimaryKeyConstraint("uuid"),
        sa.UniqueConstraint("table_number"),
    )

    op.create_table(
        "guest_communications",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("guest_id", sa.UUID(), nullable=True),
        sa.Column(
            "communication_type",
            sa.Enum(
                "email", "phone", "text", "in_person", "mail", name="communication_type_enum"
            ),
            nullable=False,
            server_default="email",
        ),
        sa.Column("subject", sa.String(length=255), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "direction",
            sa.Enum("inbound", "outbound", name="communication_direction_enum"),
            nullable=False,
            server_default="outbound",
        ),
        sa.Column(
            "status",
            sa.Enum(
                "draft",
                "sent",
                "delivered",
                "read",
                "failed",
                "bounced",
                name="communication_status_enum",
            ),
            nullable=False,
            server_default="sent",
        ),
        sa.Column("sent_by", sa.String(length=255), nullable=True),
        sa.Column("scheduled_for", sa.DateTime(timezone=True), nullable=True),
        sa.Column("delivered_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("read_at", sa.DateTime(timezone=True), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(["guest_id"], ["guests.uuid"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_guest_communications_guest_id", "guest_communications", ["guest_id"])
    op.create_index("ix_guest_communications_status", "guest_communications", ["status"])

    op.create_table(
        "faq_categories",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("icon", sa.String(length=100), nullable=True),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *timestamps(),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_faq_categories_slug", "faq_categories", ["slug"])

    op.create_table(
        "faq_items",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("category_id", sa.UUID(), nullable=True),
        sa.Column("question", sa.Text(), nullable=False),
        sa.Column("answer", sa.Text(), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
        *timestamps(),
        sa.ForeignKeyConstraint(["category_id"], ["faq_categories.uuid"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_faq_items_category_id", "faq_items", ["category_id"])

    op.create_table(
        "accommodation_categories",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("icon", sa.String(length=100), nullable=True),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *timestamps(),
        sa.PrimaryKeyConstraint("uuid"),
    )

    op.create_table(
        "accommodation_options",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("category_id", sa.UUID(), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=100), nullable=True),
        sa.Column("area", sa.String(length=255), nullable=True),
        sa.Column("address", sa.String(length=500), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("website_url", sa.String(length=500), nullable=True),
        sa.Column("booking_url", sa.String(length=500), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("price_range", sa.String(length=100), nullable=True),
        sa.Column("distance_from_venue", sa.String(length=100), nullable=True),
        sa.Column("amenities", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("image_url", sa.String(length=1000), nullable=True),
        sa.Column("coordinates", sa.JSON(), nullable=True),
        sa.Column("featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *timestamps(),
        sa.ForeignKeyConstraint(
            ["category_id"], ["accommodation_categories.uuid"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index(
        "ix_accommodation_options_category_id", "accommodation_options", ["category_id"]
    )

    op.create_table(
        "transport_options",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("category_id", sa.UUID(), nullable=True),
        sa.Column("method_name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("pickup_locations", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("cost_info", sa.String(length=255), nullable=True),
        sa.Column("booking_required", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("booking_phone", sa.String(length=50), nullable=True),
        sa.Column("capacity_info", sa.String(length=255), nullable=True),
        sa.Column("max_capacity", sa.Integer(), nullable=True),
        sa.Column("current_bookings", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *timestamps(),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_transport_options_category_id", "transport_options", ["category_id"])

    op.create_table(
        "feature_flags",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("flag_key", sa.String(length=255), nullable=False),
        sa.Column("flag_name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_enabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("rollout_percentage", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "flag_type",
            sa.Enum("boolean", "string", "number", "json", name="flag_type_enum"),
            nullable=False,
            server_default="boolean",
        ),
        sa.Column("default_value", sa.JSON(), nullable=True),
        sa.Column("target_users", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("excluded_users", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("conditions", sa.JSON(), nullable=False, server_default="{}"),
        *timestamps(),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_feature_flags_flag_key", "feature_flags", ["flag_key"], unique=True)

    op.create_table(
        "direct_chats",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("participant1_id", sa.String(length=255), nullable=False),
        sa.Column("participant2_id", sa.String(length=255), nullable=False),
        sa.Column("last_message", sa.Text(), nullable=True),
        sa.Column("last_message_at", sa.DateTime(timezone=True), nullable=True),
        *timestamps(),
        sa.PrimaryKeyConstraint("uuid"),
        sa.UniqueConstraint("participant1_id", "participant2_id"),
    )
    op.create_index("ix_direct_chats_participant1_id", "direct_chats", ["participant1_id"])
    op.create_index("ix_direct_chats_participant2_id", "direct_chats", ["participant2_id"])

    op.create_table(
        "chat_messages",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("chat_id", sa.UUID(), nullable=False),
        sa.Column("sender_id", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "message_type",
            sa.Enum("text", "image", "video", "file", name="message_type_enum"),
            nullable=False,
            server_default="text",
        ),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        *timestamps(),
        sa.ForeignKeyConstraint(["chat_id"], ["direct_chats.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_chat_messages_chat_id", "chat_messages", ["chat_id"])

    op.create_table(
        "stories",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("media_url", sa.Text(), nullable=False),
        sa.Column(
            "media_type",
            sa.Enum("photo", "video", "text", name="story_media_type_enum"),
            nullable=False,
            server_default="photo",
        ),
        sa.Column("caption", sa.Text(), nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        *timestamps(),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_stories_user_id", "stories", ["user_id"])
    op.create_index("ix_stories_expires_at", "stories", ["expires_at"])


def downgrade() -> None:
    for table in [
        "stories",
        "chat_messages",
        "direct_chats",
        "feature_flags",
        "transport_options",
        "accommodation_options",
        "accommodation_categories",
        "faq_items",
        "faq_categories",
        "guest_communications",
        "seating_tables",
        "rsvps",
        "events",
        "guests",
        "guest_groups",
    ]:
        op.drop_table(table)
    for enum_type in ENUM_TYPES:
        op.execute(f"DROP TYPE {enum_type}")
