FEATURE_FLAGS_URL = "/api/v1/admin/feature-flags"
FEATURE_FLAG_URL = "/api/v1/admin/feature-flags/{flag_id}"
FEATURE_FLAG_TOGGLE_URL = "/api/v1/admin/feature-flags/{flag_id}/toggle"
FEATURE_FLAG_FORM_URL = "/api/v1/admin/feature-flags/{flag_id}/form"
EVALUATE_FLAG_URL = "/api/v1/feature-flags/{flag_key}"
