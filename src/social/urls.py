CHATS_URL = "/api/v1/chats"
CHAT_MESSAGES_URL = "/api/v1/chats/{chat_id}/messages"
CHAT_READ_URL = "/api/v1/chats/{chat_id}/read"
STORIES_URL = "/api/v1/stories"
STORY_URL = "/api/v1/stories/{story_id}"
