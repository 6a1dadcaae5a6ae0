COMMUNICATIONS_URL = "/api/v1/admin/communications"
COMMUNICATION_URL = "/api/v1/admin/communications/{communication_id}"
COMMUNICATION_READ_URL = "/api/v1/admin/communications/{communication_id}/read"
COMMUNICATIONS_EXPORT_URL = "/api/v1/admin/communications/export"
