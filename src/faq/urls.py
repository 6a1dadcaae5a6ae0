FAQ_CATEGORIES_URL = "/api/v1/admin/faq/categories"
FAQ_CATEGORY_URL = "/api/v1/admin/faq/categories/{category_id}"
FAQ_ITEMS_URL = "/api/v1/admin/faq/items"
FAQ_ITEM_URL = "/api/v1/admin/faq/items/{item_id}"
FAQ_ITEMS_ORDER_URL = "/api/v1/admin/faq/items/order"
PUBLIC_FAQ_URL = "/api/v1/faq"
PUBLIC_FAQ_VIEW_URL = "/api/v1/faq/{item_id}/views"
FAQ_CATEGORY_FORM_URL = "/api/v1/admin/faq/categories/{category_id}/form"
FAQ_ITEM_FORM_URL = "/api/v1/admin/faq/items/{item_id}/form"
