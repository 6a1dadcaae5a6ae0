SEO_ANALYZE_URL = "/api/v1/admin/seo/analyze"
SITEMAP_URL = "/sitemap.xml"
ROBOTS_URL = "/robots.txt"
