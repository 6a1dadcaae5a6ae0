TRANSPORT_OPTIONS_URL = "/api/v1/admin/transport/options"
TRANSPORT_OPTION_URL = "/api/v1/admin/transport/options/{option_id}"
TRANSPORT_OPTION_FORM_URL = "/api/v1/admin/transport/options/{option_id}/form"
PUBLIC_TRANSPORT_URL = "/api/v1/transport"
