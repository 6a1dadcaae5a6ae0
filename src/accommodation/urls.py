ACCOMMODATION_CATEGORIES_URL = "/api/v1/admin/accommodation/categories"
ACCOMMODATION_OPTIONS_URL = "/api/v1/admin/accommodation/options"
ACCOMMODATION_OPTION_URL = "/api/v1/admin/accommodation/options/{option_id}"
ACCOMMODATION_OPTION_FORM_URL = "/api/v1/admin/accommodation/options/{option_id}/form"
ACCOMMODATION_OPTION_ACTIVE_URL = "/api/v1/admin/accommodation/options/{option_id}/active"
ACCOMMODATION_OPTION_IMAGE_URL = "/api/v1/admin/accommodation/options/{option_id}/image"
PUBLIC_ACCOMMODATION_URL = "/api/v1/accommodation"
