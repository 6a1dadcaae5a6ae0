ADMIN_RSVPS_URL = "/api/v1/admin/rsvps"
ADMIN_RSVP_STATS_URL = "/api/v1/admin/rsvps/stats"
ADMIN_RSVP_REMINDERS_URL = "/api/v1/admin/rsvps/reminders"

ADMIN_GUESTS_URL = "/api/v1/admin/guests"
ADMIN_GUEST_URL = "/api/v1/admin/guests/{guest_id}"
ADMIN_GUEST_FORM_URL = "/api/v1/admin/guests/{guest_id}/form"
ADMIN_GUEST_INVITATION_URL = "/api/v1/admin/guests/{guest_id}/invitation"
ADMIN_GUEST_STATS_URL = "/api/v1/admin/guests/stats"
ADMIN_GUEST_DUPLICATES_URL = "/api/v1/admin/guests/duplicates"
ADMIN_GUEST_IMPORT_URL = "/api/v1/admin/guests/import"
ADMIN_GUEST_EXPORT_URL = "/api/v1/admin/guests/export"
ADMIN_SEATING_URL = "/api/v1/admin/seating"

SUBMIT_RSVP_URL = "/api/v1/guests/{guest_id}/rsvps/{event_id}"
RSVP_DEADLINE_URL = "/api/v1/events/{event_id}/rsvp-deadline"

ADMIN_EVENTS_URL = "/api/v1/admin/events"
ADMIN_EVENT_URL = "/api/v1/admin/events/{event_id}"
ADMIN_SEATING_TABLES_URL = "/api/v1/admin/seating/tables"
ADMIN_SEATING_TABLE_URL = "/api/v1/admin/seating/tables/{table_id}"
