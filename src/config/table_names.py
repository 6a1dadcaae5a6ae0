from enum import Enum


class TableNames(str, Enum):
    GUESTS = "guests"
    GUEST_GROUPS = "guest_groups"
    EVENTS = "events"
    RSVPS = "rsvps"
    SEATING_TABLES = "seating_tables"
    FAQ_CATEGORIES = "faq_categories"
    FAQ_ITEMS = "faq_items"
    ACCOMMODATION_CATEGORIES = "accommodation_categories"
    ACCOMMODATION_OPTIONS = "accommodation_options"
    TRANSPORT_OPTIONS = "transport_options"
    FEATURE_FLAGS = "feature_flags"
    GUEST_COMMUNICATIONS = "guest_communications"
    DIRECT_CHATS = "direct_chats"
    CHAT_MESSAGES = "chat_messages"
    STORIES = "stories"
